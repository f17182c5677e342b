"""Web search tool backed by the bound search provider."""

from __future__ import annotations

from typing import Any, Dict

from toolkit_mcp.core.result import Result, map_result
from toolkit_mcp.tools.registry import ToolDependencies
from toolkit_mcp.tools.schemas import SearchInput


async def web_search(
    params: SearchInput, deps: ToolDependencies
) -> Result[Dict[str, Any], str]:
    result = await deps.providers.search.search(params.query, params.max_results)
    return map_result(
        result, lambda hits: {"results": [hit.to_dict() for hit in hits]}
    )
