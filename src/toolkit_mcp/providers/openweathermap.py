"""OpenWeatherMap provider for live weather lookups.

Wraps the OpenWeatherMap current-weather endpoint. Used when the server runs
in production mode with an ``OPENWEATHERMAP_API_KEY`` configured.

OpenWeatherMap API documentation: https://openweathermap.org/current

Example usage:
    provider = OpenWeatherMapProvider(api_key="...")
    result = await provider.get_weather("Paris")
"""

import logging
import os
from typing import Any, Optional

import httpx

from toolkit_mcp.core.result import Result, fail, ok
from toolkit_mcp.providers.base import WeatherData, WeatherProvider

logger = logging.getLogger(__name__)

# OpenWeatherMap API constants
OWM_API_BASE_URL = "https://api.openweathermap.org"
OWM_WEATHER_ENDPOINT = "/data/2.5/weather"
OWM_UNITS = "imperial"
DEFAULT_TIMEOUT = 30.0


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap current conditions provider.

    Readings are requested in imperial units and reported as fahrenheit.
    Failures follow the same three-way split as search: transport,
    HTTP status, and parse.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OWM_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize OpenWeatherMap provider.

        Args:
            api_key: API key. If not provided, reads from OPENWEATHERMAP_API_KEY env var.
            base_url: API base URL
            timeout: Request timeout in seconds

        Raises:
            ValueError: If no API key is provided or found in environment
        """
        self._api_key = api_key or os.environ.get("OPENWEATHERMAP_API_KEY")
        if not self._api_key:
            raise ValueError(
                "OpenWeatherMap API key required. Provide via api_key parameter "
                "or OPENWEATHERMAP_API_KEY environment variable."
            )

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def get_provider_name(self) -> str:
        return "openweathermap"

    async def get_weather(self, location: str) -> Result[WeatherData, str]:
        """Fetch current conditions for ``location``."""
        url = f"{self._base_url}{OWM_WEATHER_ENDPOINT}"
        params = {"q": location, "appid": self._api_key, "units": OWM_UNITS}

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"OpenWeatherMap request failed: {e}")
            return fail(f"OpenWeatherMap fetch failed: {e}")

        if not 200 <= response.status_code < 300:
            logger.warning(f"OpenWeatherMap returned HTTP {response.status_code}")
            return fail(f"OpenWeatherMap API error: HTTP {response.status_code}")

        try:
            weather = self._parse_response(response.json())
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"OpenWeatherMap response could not be parsed: {e}")
            return fail("Failed to parse OpenWeatherMap response")

        return ok(weather)

    def _parse_response(self, data: Any) -> WeatherData:
        """Map an OpenWeatherMap payload onto WeatherData."""
        name = str(data["name"])
        country = (data.get("sys") or {}).get("country")
        label = f"{name}, {country}" if country else name

        main = data["main"]
        conditions = data.get("weather") or []
        condition = conditions[0].get("description") if conditions else None

        return WeatherData(
            location=label,
            temperature=round(float(main["temp"])),
            unit="fahrenheit",
            condition=condition or "Unknown",
            humidity=main["humidity"],
            wind_speed=round(float(data["wind"]["speed"])),
            forecast=f"Current conditions for {label}",
        )
