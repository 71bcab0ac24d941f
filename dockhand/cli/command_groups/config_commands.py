"""Config command group."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.markup import escape

from dockhand.config.loader import convert_to_camel, get_config_path, load_config


def register_config_commands(app: typer.Typer, console: Console) -> None:
    """Register `dockhand config ...`."""
    config_app = typer.Typer(help="Inspect configuration")
    app.add_typer(config_app, name="config")

    @config_app.command("path")
    def config_path() -> None:
        """Print the config file location."""
        console.print(str(get_config_path()), markup=False, highlight=False)

    @config_app.command("show")
    def config_show() -> None:
        """Print the effective configuration (secrets are not stored here)."""
        try:
            config = load_config()
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        data = convert_to_camel(config.model_dump(exclude_none=True))
        console.print_json(json.dumps(data, ensure_ascii=False))
