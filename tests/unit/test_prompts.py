"""Tests for prompt templates."""

import pytest
from mcp.server.fastmcp import FastMCP

from toolkit_mcp.prompts.templates import (
    PROMPT_NAMES,
    generate_prompt_messages,
    prompt_definitions_by_name,
    register_toolkit_prompts,
)


class TestPromptDefinitions:
    def test_names(self):
        assert PROMPT_NAMES == ("research_topic", "analyze_text", "weather_briefing")

    def test_required_arguments(self):
        definitions = prompt_definitions_by_name()
        research = {a.name: a.required for a in definitions["research_topic"].arguments}
        assert research == {"topic": True, "depth": False}


class TestGeneratePromptMessages:
    def test_research_topic(self):
        [message] = generate_prompt_messages(
            "research_topic", {"topic": "coral bleaching", "depth": "deep"}
        )
        assert message.role == "user"
        assert '"coral bleaching" at a deep level' in message.content
        assert "web_search" in message.content

    def test_research_topic_defaults(self):
        [message] = generate_prompt_messages("research_topic", {})
        assert '"general topic" at a standard level' in message.content

    def test_analyze_text(self):
        [message] = generate_prompt_messages("analyze_text", {"text": "I love it"})
        assert '"I love it"' in message.content
        assert "analyze_sentiment" in message.content

    def test_weather_briefing_default_location(self):
        [message] = generate_prompt_messages("weather_briefing", {})
        assert "weather for current location" in message.content

    def test_unknown_prompt(self):
        [message] = generate_prompt_messages("haiku", {})
        assert message.content == (
            "Unknown prompt: haiku. Available prompts: "
            "research_topic, analyze_text, weather_briefing."
        )


class TestRegisteredPrompts:
    @pytest.mark.asyncio
    async def test_registered_prompt_matches_generated_text(self):
        mcp = FastMCP("prompt-test")
        register_toolkit_prompts(mcp)

        result = await mcp.get_prompt("weather_briefing", {"location": "Oslo"})

        [expected] = generate_prompt_messages("weather_briefing", {"location": "Oslo"})
        assert result.messages[0].content.text == expected.content
