"""The fixed tool catalog served by mcp-toolkit-server."""

from __future__ import annotations

from typing import List

from toolkit_mcp.tools.elicitation import configure_analysis
from toolkit_mcp.tools.registry import ToolAnnotationSet, ToolCatalog, ToolDescriptor
from toolkit_mcp.tools.sampling import smart_summarize
from toolkit_mcp.tools.schemas import (
    ConfigureAnalysisInput,
    ConfigureAnalysisResult,
    EntityInput,
    EntityList,
    SearchInput,
    SearchResults,
    SentimentInput,
    SentimentResult,
    SmartSummarizeInput,
    SummarizeInput,
    WeatherInput,
    WeatherReport,
)
from toolkit_mcp.tools.text_analysis import analyze_sentiment, extract_entities, summarize
from toolkit_mcp.tools.weather import get_weather
from toolkit_mcp.tools.web_search import web_search

_LOCAL = ToolAnnotationSet(read_only=True, idempotent=True, open_world=False)
_EXTERNAL = ToolAnnotationSet(read_only=True, idempotent=True, open_world=True)
# Callback tools depend on a model or a person, so repeats can differ
_INTERACTIVE = ToolAnnotationSet(read_only=True, idempotent=False, open_world=True)

SEARCH_DESCRIPTION = (
    "Search the web for information. Returns relevant results with titles, "
    "URLs, and snippets."
)


def default_descriptors() -> List[ToolDescriptor]:
    return [
        ToolDescriptor(
            name="summarize",
            title="Summarize Text",
            description=(
                "Summarize text to a specified length. Useful for condensing long "
                "documents or articles."
            ),
            input_model=SummarizeInput,
            handler=summarize,
            annotations=_LOCAL,
            capability="text",
        ),
        ToolDescriptor(
            name="analyze_sentiment",
            title="Analyze Sentiment",
            description=(
                "Analyze the sentiment of text. Returns positive, negative, neutral, "
                "or mixed with confidence score."
            ),
            input_model=SentimentInput,
            output_model=SentimentResult,
            handler=analyze_sentiment,
            annotations=_LOCAL,
            capability="local",
        ),
        ToolDescriptor(
            name="extract_entities",
            title="Extract Entities",
            description=(
                "Extract named entities (people, organizations, locations, dates, "
                "technologies) from text."
            ),
            input_model=EntityInput,
            output_model=EntityList,
            handler=extract_entities,
            annotations=_LOCAL,
            capability="local",
        ),
        ToolDescriptor(
            name="web_search",
            title="Web Search",
            description=SEARCH_DESCRIPTION,
            input_model=SearchInput,
            output_model=SearchResults,
            handler=web_search,
            annotations=_EXTERNAL,
            capability="search",
        ),
        ToolDescriptor(
            name="brave_web_search",
            title="Brave Web Search",
            description=(
                f"{SEARCH_DESCRIPTION} Uses Brave Search when BRAVE_API_KEY is "
                "configured in production mode."
            ),
            input_model=SearchInput,
            output_model=SearchResults,
            handler=web_search,
            annotations=_EXTERNAL,
            capability="search",
        ),
        ToolDescriptor(
            name="get_weather",
            title="Get Weather",
            description="Get current weather conditions and forecast for a location.",
            input_model=WeatherInput,
            output_model=WeatherReport,
            handler=get_weather,
            annotations=_EXTERNAL,
            capability="weather",
        ),
        ToolDescriptor(
            name="smart_summarize",
            title="Smart Summarize",
            description=(
                "Summarize text using the connected client's own language model "
                "via MCP sampling."
            ),
            input_model=SmartSummarizeInput,
            handler=smart_summarize,
            annotations=_INTERACTIVE,
            capability="sampling",
        ),
        ToolDescriptor(
            name="configure_analysis",
            title="Configure Analysis",
            description=(
                "Ask the user to choose analysis options (depth, sentiment, "
                "entities, summary length) via MCP elicitation. Falls back to "
                "defaults when the client cannot elicit."
            ),
            input_model=ConfigureAnalysisInput,
            output_model=ConfigureAnalysisResult,
            handler=configure_analysis,
            annotations=_INTERACTIVE,
            capability="elicitation",
        ),
    ]


def build_catalog() -> ToolCatalog:
    """Build the default catalog.

    Raises:
        ValueError: If two descriptors share a name
    """
    return ToolCatalog(default_descriptors())
