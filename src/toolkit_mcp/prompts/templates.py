"""
Prompt templates for mcp-toolkit-server.

Reusable, parameterized prompts that walk a client through combining the
toolkit's tools. Unknown prompt names render a single explanatory message
rather than failing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Mapping

from mcp.server.fastmcp import FastMCP

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptArgumentSpec:
    name: str
    description: str
    required: bool = False


@dataclass(frozen=True)
class PromptDefinition:
    name: str
    description: str
    arguments: List[PromptArgumentSpec] = field(default_factory=list)


@dataclass(frozen=True)
class PromptMessage:
    role: Literal["user", "assistant"]
    content: str


PROMPT_DEFINITIONS: List[PromptDefinition] = [
    PromptDefinition(
        name="research_topic",
        description=(
            "Research a topic by searching the web, summarizing findings, and "
            "extracting key entities"
        ),
        arguments=[
            PromptArgumentSpec("topic", "The topic to research", required=True),
            PromptArgumentSpec("depth", "Research depth: quick, standard, or deep"),
        ],
    ),
    PromptDefinition(
        name="analyze_text",
        description="Analyze text for sentiment, entities, and provide a summary",
        arguments=[PromptArgumentSpec("text", "The text to analyze", required=True)],
    ),
    PromptDefinition(
        name="weather_briefing",
        description="Get a weather briefing with recommendations for a location",
        arguments=[
            PromptArgumentSpec("location", "City or location name", required=True)
        ],
    ),
]

PROMPT_NAMES = tuple(definition.name for definition in PROMPT_DEFINITIONS)


def research_topic_text(topic: str, depth: str = "standard") -> str:
    return (
        f'I\'d like to research "{topic}" at a {depth} level. Please:\n\n'
        "1. Search for the most relevant and recent information\n"
        "2. Summarize the key findings\n"
        "3. Extract important entities (people, organizations, technologies)\n"
        "4. Provide a structured overview with sources\n\n"
        "Use the web_search, summarize, and extract_entities tools to gather and "
        "process the information."
    )


def analyze_text_text(text: str) -> str:
    return (
        f'Please analyze the following text comprehensively:\n\n"{text}"\n\n'
        "Perform:\n"
        "1. Sentiment analysis (using analyze_sentiment tool)\n"
        "2. Entity extraction (using extract_entities tool)\n"
        "3. Brief summary (using summarize tool)\n\n"
        "Provide a structured analysis report."
    )


def weather_briefing_text(location: str) -> str:
    return (
        f"Get the current weather for {location} and provide:\n\n"
        "1. Current conditions (temperature, humidity, wind)\n"
        "2. Brief forecast\n"
        "3. Activity recommendations based on the weather\n\n"
        "Use the get_weather tool to fetch the data."
    )


def unknown_prompt_text(name: str) -> str:
    return f"Unknown prompt: {name}. Available prompts: {', '.join(PROMPT_NAMES)}."


def generate_prompt_messages(
    name: str, args: Mapping[str, str]
) -> List[PromptMessage]:
    """Render the messages for prompt ``name``; missing arguments get defaults."""
    if name == "research_topic":
        content = research_topic_text(
            args.get("topic") or "general topic", args.get("depth") or "standard"
        )
    elif name == "analyze_text":
        content = analyze_text_text(args.get("text") or "")
    elif name == "weather_briefing":
        content = weather_briefing_text(args.get("location") or "current location")
    else:
        logger.warning("Unknown prompt requested: %s", name)
        content = unknown_prompt_text(name)
    return [PromptMessage(role="user", content=content)]


def _render(name: str, **args: str) -> str:
    return "\n\n".join(m.content for m in generate_prompt_messages(name, args))


def prompt_definitions_by_name() -> Dict[str, PromptDefinition]:
    return {definition.name: definition for definition in PROMPT_DEFINITIONS}


def register_toolkit_prompts(mcp: FastMCP) -> None:
    """
    Register the toolkit prompts with the FastMCP server.

    The signatures drive prompt listing. ``ToolkitServer.get_prompt`` renders
    through ``generate_prompt_messages`` so missing arguments get defaults.

    Args:
        mcp: FastMCP server instance
    """
    definitions = prompt_definitions_by_name()

    @mcp.prompt(description=definitions["research_topic"].description)
    def research_topic(topic: str, depth: str = "standard") -> str:
        """
        Research a topic with the search, summarize and entity tools.

        Args:
            topic: The topic to research
            depth: Research depth: quick, standard, or deep
        """
        return _render("research_topic", topic=topic, depth=depth)

    @mcp.prompt(description=definitions["analyze_text"].description)
    def analyze_text(text: str) -> str:
        return _render("analyze_text", text=text)

    @mcp.prompt(description=definitions["weather_briefing"].description)
    def weather_briefing(location: str) -> str:
        return _render("weather_briefing", location=location)

    logger.debug("Registered toolkit prompts: %s", ", ".join(PROMPT_NAMES))
