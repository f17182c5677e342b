"""Backend providers for mcp-toolkit-server.

This package provides the capability interfaces and their mock and live
implementations, plus the factory that binds one provider per capability.

Binding rules:
- mock or hybrid mode: every capability uses its mock provider
- production mode: web search uses Brave when BRAVE_API_KEY is set, weather
  uses OpenWeatherMap when OPENWEATHERMAP_API_KEY is set; otherwise mock
- text completion is always mock-backed; there is no live text provider
"""

import logging

from toolkit_mcp.config import ServerConfig
from toolkit_mcp.providers.base import (
    CompletionOptions,
    ProviderSet,
    SearchResult,
    TextProvider,
    WeatherData,
    WeatherProvider,
    WebSearchProvider,
)
from toolkit_mcp.providers.brave import BraveWebSearchProvider
from toolkit_mcp.providers.mock import (
    MockTextProvider,
    MockWeatherProvider,
    MockWebSearchProvider,
)
from toolkit_mcp.providers.openweathermap import OpenWeatherMapProvider

logger = logging.getLogger(__name__)


def create_providers(config: ServerConfig) -> ProviderSet:
    """Bind exactly one provider per capability for the server's lifetime."""
    search: WebSearchProvider
    weather: WeatherProvider

    if config.is_mock_mode:
        search = MockWebSearchProvider()
        weather = MockWeatherProvider()
    else:
        if config.brave_api_key:
            search = BraveWebSearchProvider(api_key=config.brave_api_key)
        else:
            logger.warning("BRAVE_API_KEY not set; web search falls back to mock provider")
            search = MockWebSearchProvider()

        if config.openweathermap_api_key:
            weather = OpenWeatherMapProvider(api_key=config.openweathermap_api_key)
        else:
            logger.warning(
                "OPENWEATHERMAP_API_KEY not set; weather falls back to mock provider"
            )
            weather = MockWeatherProvider()

    providers = ProviderSet(text=MockTextProvider(), search=search, weather=weather)
    logger.info(
        "Providers bound (mode=%s): %s",
        config.mode.value,
        ", ".join(f"{cap}={name}" for cap, name in providers.describe().items()),
    )
    return providers


__all__ = [
    "create_providers",
    # Abstractions
    "ProviderSet",
    "TextProvider",
    "WebSearchProvider",
    "WeatherProvider",
    "CompletionOptions",
    "SearchResult",
    "WeatherData",
    # Concrete providers
    "MockTextProvider",
    "MockWebSearchProvider",
    "MockWeatherProvider",
    "BraveWebSearchProvider",
    "OpenWeatherMapProvider",
]
