"""mcp-toolkit-server - text analysis, web search and weather tools over MCP."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("mcp-toolkit-server")
except PackageNotFoundError:
    # Package not installed (development mode without editable install)
    __version__ = "0.1.0"

from toolkit_mcp.server import create_server, main

__all__ = ["__version__", "create_server", "main"]
