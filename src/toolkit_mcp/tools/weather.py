"""Weather lookup tool backed by the bound weather provider.

The ``unit`` argument is accepted for compatibility; readings are reported in
whatever unit the provider returns and the ``unit`` field says which.
"""

from __future__ import annotations

from typing import Any, Dict

from toolkit_mcp.core.result import Result, map_result
from toolkit_mcp.providers.base import WeatherData
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import WeatherInput


async def get_weather(
    params: WeatherInput, deps: ToolDependencies
) -> Result[Dict[str, Any], str]:
    result = await deps.providers.weather.get_weather(params.location)
    return map_result(result, WeatherData.to_dict)
