"""
Toolkit resources for mcp-toolkit-server.

Read-only JSON documents describing the running server:

    toolkit://config   configuration snapshot and bound providers
    toolkit://tools    tool catalog listing
    toolkit://health   health and uptime

Unknown URIs produce a JSON error document instead of failing the read.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from toolkit_mcp.config import ServerConfig
from toolkit_mcp.providers.base import ProviderSet
from toolkit_mcp.tools.registry import ToolCatalog

logger = logging.getLogger(__name__)

CONFIG_URI = "toolkit://config"
TOOLS_URI = "toolkit://tools"
HEALTH_URI = "toolkit://health"

# Capability tag -> listing category
_TOOL_CATEGORIES = {
    "text": "text-analysis",
    "local": "text-analysis",
    "search": "web",
    "weather": "weather",
    "sampling": "sampling",
    "elicitation": "elicitation",
}


@dataclass(frozen=True)
class ResourceDefinition:
    uri: str
    name: str
    description: str
    mime_type: str = "application/json"


RESOURCE_DEFINITIONS: List[ResourceDefinition] = [
    ResourceDefinition(
        uri=CONFIG_URI,
        name="Server Configuration",
        description="Current server configuration and mode",
    ),
    ResourceDefinition(
        uri=TOOLS_URI,
        name="Available Tools",
        description="List of all available tools with their categories",
    ),
    ResourceDefinition(
        uri=HEALTH_URI,
        name="Health Status",
        description="Server health and readiness status",
    ),
]


def _dumps(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"))


class ToolkitResources:
    """Renders the toolkit resources from live server state."""

    def __init__(
        self,
        config: ServerConfig,
        catalog: ToolCatalog,
        providers: Optional[ProviderSet] = None,
        *,
        started_at: Optional[float] = None,
    ):
        self._config = config
        self._catalog = catalog
        self._providers = providers
        self._started_at = started_at if started_at is not None else time.monotonic()

    @property
    def uris(self) -> List[str]:
        return [definition.uri for definition in RESOURCE_DEFINITIONS]

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._started_at, 3)

    def read(self, uri: str) -> str:
        """Return the JSON document for ``uri``."""
        if uri == CONFIG_URI:
            return self._config_document()
        if uri == TOOLS_URI:
            return self._tools_document()
        if uri == HEALTH_URI:
            return self._health_document()
        logger.warning("Unknown resource requested: %s", uri)
        return _dumps({"error": f"Unknown resource: {uri}"})

    def _config_document(self) -> str:
        payload = self._config.to_public_dict()
        if self._providers is not None:
            payload["providers"] = self._providers.describe()
        return _dumps(payload)

    def _tools_document(self) -> str:
        tools = [
            {
                "name": descriptor.name,
                "description": descriptor.description,
                "category": _TOOL_CATEGORIES.get(descriptor.capability, "general"),
            }
            for descriptor in self._catalog
        ]
        return _dumps({"tools": tools, "count": len(tools)})

    def _health_document(self) -> str:
        return _dumps(
            {
                "status": "healthy",
                "mode": self._config.mode.value,
                "uptime": self.uptime_seconds(),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )


def register_toolkit_resources(mcp: FastMCP, resources: ToolkitResources) -> None:
    """
    Register the toolkit resources with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        resources: Renderer bound to the server's config, catalog and providers
    """

    def reader(uri: str):
        def read() -> str:
            return resources.read(uri)

        return read

    for definition in RESOURCE_DEFINITIONS:
        mcp.resource(
            definition.uri,
            name=definition.name,
            description=definition.description,
            mime_type=definition.mime_type,
        )(reader(definition.uri))

    logger.debug("Registered toolkit resources: %s", ", ".join(resources.uris))
