"""Tests for summarize, analyze_sentiment and extract_entities."""

import pytest

from toolkit_mcp.core.result import Ok
from toolkit_mcp.tools.schemas import EntityInput, SentimentInput, SummarizeInput
from toolkit_mcp.tools.text_analysis import (
    ENTITY_CONFIDENCE,
    analyze_sentiment,
    classify_sentiment,
    extract_entities,
    find_entities,
    summarize,
)


class TestSummarize:
    @pytest.mark.asyncio
    async def test_returns_provider_text(self, deps):
        result = await summarize(SummarizeInput(text="Tide pools host many species."), deps)
        assert isinstance(result, Ok)
        assert isinstance(result.value, str)
        assert result.value

    @pytest.mark.asyncio
    async def test_prompt_carries_word_limit(self, deps):
        captured = {}

        class RecordingText:
            async def complete(self, prompt, options=None):
                captured["prompt"] = prompt
                captured["options"] = options
                return Ok("short")

        recording = type(deps)(
            providers=type(deps.providers)(
                text=RecordingText(),
                search=deps.providers.search,
                weather=deps.providers.weather,
            )
        )
        result = await summarize(SummarizeInput(text="Body", maxLength=40), recording)

        assert result == Ok("short")
        assert captured["prompt"].startswith("Summarize the following text in 40 words")
        assert captured["prompt"].endswith("\n\nBody")
        assert captured["options"].max_tokens == 80


class TestSentiment:
    def test_neutral(self):
        result = classify_sentiment("The meeting is at noon.")
        assert result["sentiment"] == "neutral"
        assert result["confidence"] == 0.6

    def test_positive(self):
        result = classify_sentiment("This is a great and wonderful product")
        assert result["sentiment"] == "positive"
        assert result["confidence"] == pytest.approx(0.8)

    def test_negative_confidence_is_capped(self):
        text = "bad terrible awful worst hate horrible poor"
        result = classify_sentiment(text)
        assert result["sentiment"] == "negative"
        assert result["confidence"] == pytest.approx(0.95)

    def test_mixed(self):
        result = classify_sentiment("good great bad")
        assert result["sentiment"] == "mixed"
        assert result["confidence"] == pytest.approx(0.5 + 1 / 6)
        assert "2 positive and 1 negative" in result["explanation"]

    def test_substring_matches_count(self):
        # "goodness" contains "good"
        assert classify_sentiment("goodness me")["sentiment"] == "positive"

    def test_case_insensitive(self):
        assert classify_sentiment("EXCELLENT")["sentiment"] == "positive"

    @pytest.mark.asyncio
    async def test_handler_wraps_in_ok(self, deps):
        result = await analyze_sentiment(SentimentInput(text="I love it"), deps)
        assert isinstance(result, Ok)
        assert set(result.value) == {"sentiment", "confidence", "explanation"}


class TestEntities:
    TEXT = (
        "Ada Lovelace met engineers from Google and Microsoft in London on "
        "March 5, 2024. They discussed Python, Docker and google search."
    )

    def test_all_default_categories(self):
        entities = find_entities(
            self.TEXT, ["person", "organization", "location", "date"]
        )
        by_type = {}
        for entity in entities:
            by_type.setdefault(entity["type"], []).append(entity["text"])
        assert "Ada Lovelace" in by_type["person"]
        assert by_type["organization"] == ["Google", "Microsoft"]
        assert by_type["location"] == ["London"]
        assert by_type["date"] == ["March 5, 2024"]
        assert "technology" not in by_type
        assert all(e["confidence"] == ENTITY_CONFIDENCE for e in entities)

    def test_case_insensitive_dedupe_keeps_first_spelling(self):
        entities = find_entities("google then Google then GOOGLE", ["organization"])
        assert [e["text"] for e in entities] == ["google"]

    def test_person_pattern_is_case_sensitive(self):
        assert find_entities("ada lovelace", ["person"]) == []

    def test_iso_dates(self):
        entities = find_entities("Shipped 2024-01-15 and 2024/02/01", ["date"])
        assert [e["text"] for e in entities] == ["2024-01-15", "2024/02/01"]

    def test_technology_category(self):
        entities = find_entities("Deploy with kubernetes and Redis", ["technology"])
        assert [e["text"] for e in entities] == ["kubernetes", "Redis"]

    def test_empty_types_yields_nothing(self):
        assert find_entities(self.TEXT, []) == []

    @pytest.mark.asyncio
    async def test_handler_uses_default_types(self, deps):
        result = await extract_entities(EntityInput(text=self.TEXT), deps)
        assert isinstance(result, Ok)
        types = {e["type"] for e in result.value["entities"]}
        assert types == {"person", "organization", "location"}

    @pytest.mark.asyncio
    async def test_handler_with_no_matches(self, deps):
        result = await extract_entities(EntityInput(text="nothing here"), deps)
        assert result == Ok({"entities": []})
