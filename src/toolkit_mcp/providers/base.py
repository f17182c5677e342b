"""
Provider abstractions for mcp-toolkit-server.

Each external capability (text completion, web search, weather lookup) is
expressed as an abstract base class. Tool handlers depend only on these
interfaces; the factory in ``toolkit_mcp.providers`` decides at start-up
whether a capability is served by a mock or a live implementation.

Design principles:
- Frozen dataclasses for value types
- Every provider call is async and returns a ``Result``; expected failures
  (network, HTTP status, malformed payload) never raise
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Literal, Optional

from toolkit_mcp.core.result import Result

TemperatureUnit = Literal["celsius", "fahrenheit"]


@dataclass(frozen=True)
class CompletionOptions:
    """
    Generation limits passed to a text provider.

    Attributes:
        max_tokens: Maximum output tokens (None = provider default)
        temperature: Sampling temperature (None = provider default)
        model: Model identifier (provider-specific)
    """

    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    model: Optional[str] = None


@dataclass(frozen=True)
class SearchResult:
    """
    A single web search hit.

    Attributes:
        title: Result title
        url: Result URL
        snippet: Short description of the page
        score: Relevance score, non-increasing by result index
    """

    title: str
    url: str
    snippet: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class WeatherData:
    """
    Current conditions for a location.

    Attributes:
        location: Display label for the location
        temperature: Temperature in ``unit``
        unit: Temperature unit reported by the provider
        condition: Short condition description
        humidity: Relative humidity percentage
        wind_speed: Wind speed (mph for fahrenheit readings)
        forecast: One-line forecast text
    """

    location: str
    temperature: float
    unit: TemperatureUnit
    condition: str
    humidity: float
    wind_speed: float
    forecast: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TextProvider(ABC):
    """Text completion capability."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier."""

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        options: Optional[CompletionOptions] = None,
    ) -> Result[str, str]:
        """Complete ``prompt`` and return the generated text."""


class WebSearchProvider(ABC):
    """Web search capability."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier."""

    @abstractmethod
    async def search(
        self,
        query: str,
        max_results: int = 5,
    ) -> Result[List[SearchResult], str]:
        """Search for ``query`` and return at most ``max_results`` hits."""


class WeatherProvider(ABC):
    """Weather lookup capability."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier."""

    @abstractmethod
    async def get_weather(self, location: str) -> Result[WeatherData, str]:
        """Look up current conditions for ``location``."""


@dataclass(frozen=True)
class ProviderSet:
    """
    Exactly one provider per capability, bound once at start-up.

    The set is immutable and shared read-only by every tool call.
    """

    text: TextProvider
    search: WebSearchProvider
    weather: WeatherProvider

    def describe(self) -> Dict[str, str]:
        """Map capability name to the bound provider's identifier."""
        return {
            "text": self.text.get_provider_name(),
            "search": self.search.get_provider_name(),
            "weather": self.weather.get_provider_name(),
        }
