"""CLI commands for dockhand.

Single entry point: lists and calls the docker tools, and registers the
sandbox and config command groups.
"""

from __future__ import annotations

import asyncio
import json
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dockhand import __logo__, __version__
from dockhand.cli.command_groups.config_commands import register_config_commands
from dockhand.cli.command_groups.sandbox_command import register_sandbox_commands
from dockhand.cli.shared.console_messenger import ConsoleMessenger
from dockhand.cli.shared.logging_utils import ensure_rotating_log_file, remove_log_sinks
from dockhand.config.loader import load_config
from dockhand.config.schema import Config
from dockhand.plugin import PluginInstallation, install

app = typer.Typer(
    name="dockhand",
    help=f"{__logo__} dockhand - Docker operations for agents",
    no_args_is_help=True,
)

console = Console()

_config: Config | None = None
_installation: PluginInstallation | None = None


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def get_cli_config() -> Config:
    """Read ~/.dockhand/config.json once per process.

    Raises:
        ValueError: The file exists but is not a valid config.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_installation() -> PluginInstallation:
    """Install the plugin from the user's config once per process."""
    global _installation
    if _installation is None:
        try:
            config = get_cli_config()
        except ValueError as e:
            _fail(str(e))
        _installation = install(config, messenger=ConsoleMessenger(console))
    return _installation


def reset_installation() -> None:
    """Forget the loaded config and installation."""
    global _config, _installation
    _config = None
    _installation = None


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} dockhand v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Print debug logs to stderr"),
):
    """dockhand - Docker operations for agents."""
    remove_log_sinks()
    logger.remove()
    if verbose:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>",
        )
    try:
        config = get_cli_config()
    except ValueError:
        # reported by the command that needs the config
        return
    if config.logging.file_enabled:
        ensure_rotating_log_file("cli", level=config.logging.level)


@app.command("tools")
def tools_command() -> None:
    """List the installed docker tools."""
    registry = get_installation().tools
    if not len(registry):
        console.print("[yellow]Docker is not configured; add a \"docker\" section to the config.[/yellow]")
        return
    table = Table(title="Docker tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    for name in registry.tool_names:
        tool = registry.get(name)
        table.add_row(name, tool.description if tool else "")
    console.print(table)


@app.command("call")
def call_command(
    tool: str = typer.Argument(..., help="Tool name, e.g. docker_list_images"),
    params: str = typer.Option("{}", "--params", "-p", help="Tool parameters as a JSON object"),
) -> None:
    """Call a docker tool and print its JSON result."""
    try:
        parsed = json.loads(params)
    except json.JSONDecodeError as e:
        _fail(f"--params is not valid JSON: {e}")
    if not isinstance(parsed, dict):
        _fail("--params must be a JSON object")

    result = asyncio.run(get_installation().tools.execute(tool, parsed))
    if result.startswith("Error"):
        _fail(result)
    console.print_json(result)


register_sandbox_commands(app, console, get_installation)
register_config_commands(app, console)


if __name__ == "__main__":
    app()
