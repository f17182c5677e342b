"""Allow running as ``python -m toolkit_mcp``."""

from toolkit_mcp.cli import cli

if __name__ == "__main__":
    cli()
