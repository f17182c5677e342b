"""Mock providers for demos and tests.

Return deterministic, plausible responses without requiring any API keys or
network access. The same input always yields the same output.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from toolkit_mcp.core.result import Result, ok
from toolkit_mcp.providers.base import (
    CompletionOptions,
    SearchResult,
    TextProvider,
    WeatherData,
    WeatherProvider,
    WebSearchProvider,
)

MOCK_SEARCH_DOMAINS = (
    "docs.example.com",
    "blog.techsite.com",
    "research.papers.io",
    "tutorial.dev",
    "wiki.knowledge.org",
)

MOCK_SCORE_STEP = 0.15

_COMPLETION_TEMPLATES = (
    "Based on the analysis of {topics}, the key findings suggest a nuanced "
    "perspective. The evidence points to several interconnected factors that "
    "influence the outcome.",
    "Regarding {topics}: the current understanding indicates multiple "
    "contributing factors. Research suggests that a comprehensive approach "
    "yields the best results.",
    "The topic of {topics} involves several important considerations. A "
    "balanced assessment reveals both strengths and areas for further "
    "investigation.",
)


class MockTextProvider(TextProvider):
    """Template-based completion keyed on prompt length."""

    def get_provider_name(self) -> str:
        return "mock-text"

    async def complete(
        self,
        prompt: str,
        options: Optional[CompletionOptions] = None,
    ) -> Result[str, str]:
        words = prompt.lower().split()
        topics = ", ".join(words[:5])
        template = _COMPLETION_TEMPLATES[len(prompt) % len(_COMPLETION_TEMPLATES)]
        return ok(template.format(topics=topics))


class MockWebSearchProvider(WebSearchProvider):
    """Synthetic results drawn from a fixed pool of placeholder domains."""

    def get_provider_name(self) -> str:
        return "mock-search"

    async def search(
        self,
        query: str,
        max_results: int = 5,
    ) -> Result[List[SearchResult], str]:
        words = query.lower().split()
        count = max(0, min(max_results, len(MOCK_SEARCH_DOMAINS)))

        results = [
            SearchResult(
                title=f"{' '.join(words[:3])} - Result {i + 1}",
                url=f"https://{MOCK_SEARCH_DOMAINS[i]}/{'-'.join(words)}",
                snippet=(
                    f"Comprehensive guide about {query}. This resource covers the "
                    f"fundamentals and advanced topics related to {' '.join(words[:2])}."
                ),
                score=round(1.0 - i * MOCK_SCORE_STEP, 2),
            )
            for i in range(count)
        ]
        return ok(results)


_MOCK_WEATHER: Dict[str, WeatherData] = {
    "san francisco": WeatherData(
        location="San Francisco, CA",
        temperature=62,
        unit="fahrenheit",
        condition="Partly Cloudy",
        humidity=72,
        wind_speed=12,
        forecast="Mild with coastal fog clearing by afternoon",
    ),
    "new york": WeatherData(
        location="New York, NY",
        temperature=45,
        unit="fahrenheit",
        condition="Clear",
        humidity=55,
        wind_speed=8,
        forecast="Clear skies with seasonal temperatures",
    ),
    "london": WeatherData(
        location="London, UK",
        temperature=8,
        unit="celsius",
        condition="Overcast",
        humidity=85,
        wind_speed=15,
        forecast="Grey skies with chance of light rain",
    ),
}


class MockWeatherProvider(WeatherProvider):
    """Canned readings for a few cities; a generic reading for anything else."""

    def get_provider_name(self) -> str:
        return "mock-weather"

    async def get_weather(self, location: str) -> Result[WeatherData, str]:
        known = _MOCK_WEATHER.get(location.lower().strip())
        if known is not None:
            return ok(known)

        return ok(
            WeatherData(
                location=location,
                temperature=70,
                unit="fahrenheit",
                condition="Clear",
                humidity=50,
                wind_speed=10,
                forecast=f"Typical conditions for {location}",
            )
        )
