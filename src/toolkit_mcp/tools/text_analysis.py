"""
Text analysis tools: summarize, analyze_sentiment, extract_entities.

``summarize`` delegates to the bound text provider. Sentiment and entity
extraction are local heuristics and never call a backend.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Pattern

from toolkit_mcp.core.result import Result, ok
from toolkit_mcp.providers.base import CompletionOptions
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import EntityInput, SentimentInput, SummarizeInput

logger = logging.getLogger(__name__)

POSITIVE_WORDS = (
    "good",
    "great",
    "excellent",
    "amazing",
    "wonderful",
    "love",
    "best",
    "happy",
    "fantastic",
    "brilliant",
    "outstanding",
    "perfect",
)

NEGATIVE_WORDS = (
    "bad",
    "terrible",
    "awful",
    "worst",
    "hate",
    "horrible",
    "poor",
    "disappointing",
    "failure",
    "broken",
    "useless",
    "wrong",
)

ENTITY_CONFIDENCE = 0.85

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October"
    "|November|December"
)

ENTITY_PATTERNS: Dict[str, Pattern[str]] = {
    # Two capitalised words; case-sensitive on purpose
    "person": re.compile(r"\b[A-Z][a-z]+ [A-Z][a-z]+\b"),
    "organization": re.compile(
        r"\b(?:Google|Microsoft|Apple|Amazon|Meta|OpenAI|Anthropic|Netflix|Tesla)\b",
        re.IGNORECASE,
    ),
    "location": re.compile(
        r"\b(?:New York|San Francisco|London|Tokyo|Paris|Berlin|Seattle|Austin|Chicago)\b",
        re.IGNORECASE,
    ),
    "date": re.compile(
        rf"\b\d{{4}}[-/]\d{{2}}[-/]\d{{2}}\b|\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}\b",
        re.IGNORECASE,
    ),
    "technology": re.compile(
        r"\b(?:Python|TypeScript|JavaScript|React|Docker|Kubernetes|GraphQL|REST"
        r"|PostgreSQL|MongoDB|Redis|LangChain|ChromaDB)\b",
        re.IGNORECASE,
    ),
}


async def summarize(params: SummarizeInput, deps: ToolDependencies) -> Result[str, str]:
    """Ask the text provider for a summary of at most ``max_length`` words."""
    prompt = (
        f"Summarize the following text in {params.max_length} words or fewer:"
        f"\n\n{params.text}"
    )
    return await deps.providers.text.complete(
        prompt, CompletionOptions(max_tokens=params.max_length * 2)
    )


def classify_sentiment(text: str) -> Dict[str, Any]:
    """Keyword heuristic; a token counts when it contains a listed word."""
    words = text.lower().split()
    positive_count = sum(1 for w in words if any(p in w for p in POSITIVE_WORDS))
    negative_count = sum(1 for w in words if any(n in w for n in NEGATIVE_WORDS))
    total = positive_count + negative_count

    if total == 0:
        sentiment = "neutral"
        confidence = 0.6
        explanation = "No strong sentiment indicators found in the text."
    elif positive_count > 0 and negative_count > 0:
        sentiment = "mixed"
        confidence = 0.5 + abs(positive_count - negative_count) / (total * 2)
        explanation = (
            f"Found {positive_count} positive and {negative_count} negative indicators."
        )
    elif positive_count > 0:
        sentiment = "positive"
        confidence = 0.6 + min(0.35, positive_count * 0.1)
        explanation = (
            f"Strong positive sentiment with {positive_count} positive indicators."
        )
    else:
        sentiment = "negative"
        confidence = 0.6 + min(0.35, negative_count * 0.1)
        explanation = (
            f"Negative sentiment detected with {negative_count} negative indicators."
        )

    return {
        "sentiment": sentiment,
        "confidence": min(confidence, 1.0),
        "explanation": explanation,
    }


async def analyze_sentiment(
    params: SentimentInput, deps: ToolDependencies
) -> Result[Dict[str, Any], str]:
    return ok(classify_sentiment(params.text))


def find_entities(text: str, entity_types: List[str]) -> List[Dict[str, Any]]:
    """Match each requested category, keeping the first spelling of each entity."""
    entities: List[Dict[str, Any]] = []
    for entity_type in entity_types:
        pattern = ENTITY_PATTERNS.get(entity_type)
        if pattern is None:
            continue
        seen = set()
        for match in pattern.finditer(text):
            key = match.group(0).lower()
            if key in seen:
                continue
            seen.add(key)
            entities.append(
                {
                    "text": match.group(0),
                    "type": entity_type,
                    "confidence": ENTITY_CONFIDENCE,
                }
            )
    return entities


async def extract_entities(
    params: EntityInput, deps: ToolDependencies
) -> Result[Dict[str, Any], str]:
    entities = find_entities(params.text, list(params.types))
    logger.debug("Extracted %d entities", len(entities))
    return ok({"entities": entities})
