"""toolkit-mcp command line entry point.

Running ``toolkit-mcp`` with no subcommand starts the stdio server. The
``tools`` and ``call`` subcommands emit minified JSON on stdout, which is safe
because they never start the transport.
"""

import asyncio
import json
import sys
from typing import Any, Dict, Optional, get_args

import click

from toolkit_mcp.config import ServerConfig, ServerMode, set_config
from toolkit_mcp.core.dispatcher import Dispatcher
from toolkit_mcp.providers import create_providers
from toolkit_mcp.tools.catalog import build_catalog
from toolkit_mcp.tools.registry import Capability

_MODES = [mode.value for mode in ServerMode]
_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_CATEGORIES = list(get_args(Capability))


def emit(data: Any) -> None:
    """Write minified JSON to stdout."""
    click.echo(json.dumps(data, separators=(",", ":"), default=str))


def _load_config(
    config_file: Optional[str],
    mode: Optional[str],
    log_level: Optional[str],
) -> ServerConfig:
    config = ServerConfig.from_env(config_file)
    if mode:
        config.mode = ServerMode(mode)
    if log_level:
        config.log_level = log_level.upper()
    set_config(config)
    return config


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_file",
    envvar="MCP_CONFIG_FILE",
    type=click.Path(exists=False, dir_okay=False),
    help="Path to a TOML config file",
)
@click.option("--mode", type=click.Choice(_MODES), help="Provider mode override")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    help="Log level override",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[str],
    mode: Optional[str],
    log_level: Optional[str],
) -> None:
    """mcp-toolkit-server: text analysis, search and weather tools over MCP."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = _load_config(config_file, mode, log_level)
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Serve over stdio (the default command)."""
    from toolkit_mcp.server import main

    main(ctx.obj["config"])


@cli.command()
@click.option(
    "--category",
    type=click.Choice(_CATEGORIES),
    help="Only list tools relying on this backend or callback",
)
@click.option(
    "--summary",
    is_flag=True,
    help="Print names and categories instead of full schemas",
)
def tools(category: Optional[str], summary: bool) -> None:
    """Print the tool catalog with input and output schemas."""
    catalog = build_catalog()
    selected = catalog.list_tools(category=category)
    if summary:
        emit(
            {
                "tools": [descriptor.to_summary() for descriptor in selected],
                "count": len(selected),
                "categories": catalog.categories(),
            }
        )
        return

    emit(
        {
            "tools": [
                descriptor.to_mcp_tool().model_dump(exclude_none=True)
                for descriptor in selected
            ],
            "count": len(selected),
        }
    )


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "raw_args",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object",
)
@click.pass_context
def call(ctx: click.Context, name: str, raw_args: str) -> None:
    """Run a single tool call and print the response envelope.

    Tools that need a client callback behave as if the client lacks the
    capability.
    """
    try:
        arguments: Dict[str, Any] = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="--args")

    config: ServerConfig = ctx.obj["config"]
    config.setup_logging()
    dispatcher = Dispatcher(build_catalog(), create_providers(config))
    response = asyncio.run(dispatcher.dispatch(name, arguments))
    emit(response.to_dict())
    if not response.success:
        sys.exit(1)


if __name__ == "__main__":
    cli()
