"""FastMCP server for mcp-toolkit-server.

Tools are served from the toolkit catalog through a single ``Dispatcher``
instead of FastMCP's per-function tool manager, so argument validation,
error normalisation and the concurrency limits live in one place.
Resources and prompts are registered with the regular FastMCP decorators;
prompt rendering fills in defaults for missing arguments instead of rejecting
the request.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Iterable, List, Optional

from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.server.lowlevel.helper_types import ReadResourceContents

from toolkit_mcp.config import ServerConfig, get_config
from toolkit_mcp.core.callbacks import (
    ClientChannel,
    SessionClientChannel,
    UnavailableClientChannel,
)
from toolkit_mcp.core.concurrency import ConcurrencyLimiter
from toolkit_mcp.core.dispatcher import Dispatcher
from toolkit_mcp.core.responses import ToolResponse
from toolkit_mcp.prompts.templates import (
    generate_prompt_messages,
    prompt_definitions_by_name,
    register_toolkit_prompts,
)
from toolkit_mcp.providers import create_providers
from toolkit_mcp.providers.base import ProviderSet
from toolkit_mcp.resources.toolkit import ToolkitResources, register_toolkit_resources
from toolkit_mcp.tools.catalog import build_catalog
from toolkit_mcp.tools.registry import ToolDescriptor

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Text analysis, web search and weather tools. smart_summarize and "
    "configure_analysis call back into the client for sampling and elicitation."
)


def to_call_tool_result(
    response: ToolResponse,
    descriptor: Optional[ToolDescriptor] = None,
) -> types.CallToolResult:
    """Convert a dispatcher response into an MCP ``CallToolResult``.

    Successful calls carry the text rendering, plus ``structuredContent`` when
    the tool declares an output schema. Failures carry the minified response
    envelope and ``isError=True``.
    """
    if not response.success:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=response.to_json())],
            isError=True,
        )

    text = response.text if response.text is not None else response.to_json()
    structured: Optional[Dict[str, Any]] = None
    if descriptor is not None and descriptor.has_output_schema:
        structured = response.data
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        structuredContent=structured,
        isError=False,
    )


class ToolkitServer(FastMCP):
    """FastMCP server whose tool surface is backed by a ``Dispatcher``."""

    def __init__(
        self,
        config: ServerConfig,
        dispatcher: Dispatcher,
        resources: ToolkitResources,
        **settings: Any,
    ):
        self.config = config
        self.dispatcher = dispatcher
        self.resources = resources
        super().__init__(
            name=config.server_name,
            instructions=SERVER_INSTRUCTIONS,
            **settings,
        )
        self._mcp_server.version = config.server_version

    def _client_channel(self) -> ClientChannel:
        ctx = self.get_context()
        try:
            request_ctx = ctx.request_context
        except ValueError:
            return UnavailableClientChannel()
        return SessionClientChannel(
            request_ctx.session,
            related_request_id=request_ctx.request_id,
        )

    async def list_tools(self) -> List[types.Tool]:
        return [descriptor.to_mcp_tool() for descriptor in self.dispatcher.list_tools()]

    async def call_tool(  # type: ignore[override]
        self, name: str, arguments: Dict[str, Any]
    ) -> types.CallToolResult:
        response = await self.dispatcher.dispatch(
            name, arguments, channel=self._client_channel()
        )
        return to_call_tool_result(response, self.dispatcher.get_descriptor(name))

    async def read_resource(self, uri: Any) -> Iterable[ReadResourceContents]:
        if str(uri) not in self.resources.uris:
            return [
                ReadResourceContents(
                    content=self.resources.read(str(uri)),
                    mime_type="application/json",
                )
            ]
        return await super().read_resource(uri)

    async def get_prompt(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> types.GetPromptResult:
        definition = prompt_definitions_by_name().get(name)
        messages = generate_prompt_messages(name, arguments or {})
        return types.GetPromptResult(
            description=definition.description if definition else "Unknown prompt",
            messages=[
                types.PromptMessage(
                    role=message.role,
                    content=types.TextContent(type="text", text=message.content),
                )
                for message in messages
            ],
        )


def create_server(
    config: Optional[ServerConfig] = None,
    *,
    providers: Optional[ProviderSet] = None,
) -> ToolkitServer:
    """Create and configure the server instance."""

    if config is None:
        config = get_config()

    config.setup_logging()

    if providers is None:
        providers = create_providers(config)

    catalog = build_catalog()
    limiter = ConcurrencyLimiter(
        config.max_concurrent_tools,
        name="tools",
        timeout=config.tool_timeout_seconds,
    )
    dispatcher = Dispatcher(catalog, providers, limiter=limiter)
    resources = ToolkitResources(config, catalog, providers)

    server = ToolkitServer(config, dispatcher, resources)
    register_toolkit_resources(server, resources)
    register_toolkit_prompts(server)

    logger.info(
        "Server created: %s v%s (mode=%s, tools=%d)",
        config.server_name,
        config.server_version,
        config.mode.value,
        len(catalog),
    )
    return server


def main(config: Optional[ServerConfig] = None) -> None:
    """Main entry point: serve over stdio until the client disconnects."""

    try:
        config = config or get_config()
        server = create_server(config)

        logger.info("Starting %s v%s", config.server_name, config.server_version)
        server.run()

    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
        sys.exit(0)
    except Exception as exc:
        logger.error("Server error: %s: %s", type(exc).__name__, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
