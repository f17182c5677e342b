"""
MCP resources for mcp-toolkit-server.

Provides read-only JSON documents describing the running server.
"""

from toolkit_mcp.resources.toolkit import ToolkitResources, register_toolkit_resources

__all__ = ["ToolkitResources", "register_toolkit_resources"]
