"""Tests for OpenWeatherMapProvider."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from toolkit_mcp.core.result import Err, Ok
from toolkit_mcp.providers.openweathermap import (
    OWM_API_BASE_URL,
    OWM_WEATHER_ENDPOINT,
    OpenWeatherMapProvider,
)


def _response(status_code=200, payload=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


OWM_PAYLOAD = {
    "name": "Paris",
    "sys": {"country": "FR"},
    "main": {"temp": 57.6, "humidity": 81},
    "weather": [{"description": "light rain"}],
    "wind": {"speed": 9.4},
}


class TestOpenWeatherMapInit:
    def test_init_with_api_key(self):
        provider = OpenWeatherMapProvider(api_key="owm-key")
        assert provider._api_key == "owm-key"
        assert provider._base_url == OWM_API_BASE_URL

    def test_init_with_env_var(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "owm-env")
        assert OpenWeatherMapProvider()._api_key == "owm-env"

    def test_init_without_api_key_raises(self):
        with pytest.raises(ValueError, match="OpenWeatherMap API key required"):
            OpenWeatherMapProvider()

    def test_get_provider_name(self):
        assert OpenWeatherMapProvider(api_key="k").get_provider_name() == "openweathermap"


class TestOpenWeatherMapLookup:
    @pytest.fixture
    def provider(self):
        return OpenWeatherMapProvider(api_key="owm-key")

    @pytest.mark.asyncio
    async def test_request_uses_query_string_key_and_imperial_units(self, provider):
        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=_response(payload=OWM_PAYLOAD))
            mock_client.return_value.__aenter__.return_value.get = get
            await provider.get_weather("Paris")

        args, kwargs = get.call_args
        assert args[0] == f"{OWM_API_BASE_URL}{OWM_WEATHER_ENDPOINT}"
        assert kwargs["params"] == {"q": "Paris", "appid": "owm-key", "units": "imperial"}

    @pytest.mark.asyncio
    async def test_parses_and_rounds(self, provider):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(payload=OWM_PAYLOAD)
            )
            result = await provider.get_weather("Paris")

        assert isinstance(result, Ok)
        weather = result.value
        assert weather.location == "Paris, FR"
        assert weather.temperature == 58
        assert weather.wind_speed == 9
        assert weather.humidity == 81
        assert weather.unit == "fahrenheit"
        assert weather.condition == "light rain"
        assert weather.forecast == "Current conditions for Paris, FR"

    @pytest.mark.asyncio
    async def test_label_without_country_is_city_only(self, provider):
        payload = dict(OWM_PAYLOAD, sys={})
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(payload=payload)
            )
            result = await provider.get_weather("Paris")

        assert result.value.location == "Paris"

    @pytest.mark.asyncio
    async def test_missing_condition_is_unknown(self, provider):
        payload = dict(OWM_PAYLOAD, weather=[])
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(payload=payload)
            )
            result = await provider.get_weather("Paris")

        assert result.value.condition == "Unknown"


class TestOpenWeatherMapErrors:
    @pytest.fixture
    def provider(self):
        return OpenWeatherMapProvider(api_key="owm-key")

    @pytest.mark.asyncio
    async def test_transport_failure(self, provider):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectTimeout("timed out")
            )
            result = await provider.get_weather("Paris")

        assert result == Err("OpenWeatherMap fetch failed: timed out")

    @pytest.mark.asyncio
    async def test_http_status_failure(self, provider):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(status_code=404)
            )
            result = await provider.get_weather("Atlantis")

        assert result == Err("OpenWeatherMap API error: HTTP 404")

    @pytest.mark.asyncio
    async def test_parse_failure(self, provider):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(payload={"name": "Paris"})
            )
            result = await provider.get_weather("Paris")

        assert result == Err("Failed to parse OpenWeatherMap response")
