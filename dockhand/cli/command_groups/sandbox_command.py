"""Sandbox command group: drive a persistent container from the shell."""

from __future__ import annotations

import asyncio
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

from dockhand.plugin import PluginInstallation
from dockhand.sandbox.base import SandboxOptions, SandboxProvider
from dockhand.utils.exceptions import DockhandError


def _parse_env(pairs: list[str] | None) -> dict[str, str] | None:
    if not pairs:
        return None
    env: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        env[key] = value
    return env


def register_sandbox_commands(
    app: typer.Typer,
    console: Console,
    get_installation: Callable[[], PluginInstallation],
) -> None:
    """Register `dockhand sandbox ...`."""
    sandbox_app = typer.Typer(help="Persistent container sandboxes")
    app.add_typer(sandbox_app, name="sandbox")

    def _provider(name: str | None) -> SandboxProvider:
        try:
            return get_installation().sandbox.get_provider(name)
        except DockhandError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)

    def _run(coro):
        try:
            return asyncio.run(coro)
        except DockhandError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)

    @sandbox_app.command("create")
    def sandbox_create(
        image: str = typer.Option("ubuntu:latest", "--image", "-i", help="Image to start"),
        workdir: str = typer.Option(None, "--workdir", "-w", help="Working directory inside the container"),
        env: list[str] = typer.Option(None, "--env", "-e", help="KEY=VALUE, repeatable"),
        timeout: int = typer.Option(30, "--timeout", help="Creation timeout in seconds"),
        provider: str = typer.Option(None, "--provider", "-p", help="Sandbox provider name"),
    ) -> None:
        """Start a container and print its handle."""
        options = SandboxOptions(image=image, working_dir=workdir, environment=_parse_env(env), timeout=timeout)
        result = _run(_provider(provider).create_container(options))
        console.print(result.container_id)

    @sandbox_app.command("exec")
    def sandbox_exec(
        handle: str = typer.Argument(..., help="Container handle"),
        command: str = typer.Argument(..., help="Shell command, run with sh -c"),
        provider: str = typer.Option(None, "--provider", "-p", help="Sandbox provider name"),
    ) -> None:
        """Run a command; the exit status is the command's own."""
        result = _run(_provider(provider).execute_command(handle, command))
        if result.stdout:
            console.print(result.stdout, markup=False, highlight=False)
        if result.stderr:
            console.print(result.stderr, style="yellow", markup=False, highlight=False)
        if result.exit_code != 0:
            raise typer.Exit(result.exit_code)

    @sandbox_app.command("logs")
    def sandbox_logs(
        handle: str = typer.Argument(..., help="Container handle"),
        provider: str = typer.Option(None, "--provider", "-p", help="Sandbox provider name"),
    ) -> None:
        result = _run(_provider(provider).get_logs(handle))
        console.print(result.logs, markup=False, highlight=False)

    @sandbox_app.command("stop")
    def sandbox_stop(
        handle: str = typer.Argument(..., help="Container handle"),
        provider: str = typer.Option(None, "--provider", "-p", help="Sandbox provider name"),
    ) -> None:
        _run(_provider(provider).stop_container(handle))
        console.print(f"[green]✓[/green] Stopped {handle}")

    @sandbox_app.command("rm")
    def sandbox_rm(
        handle: str = typer.Argument(..., help="Container handle"),
        provider: str = typer.Option(None, "--provider", "-p", help="Sandbox provider name"),
    ) -> None:
        """Force-remove the container."""
        _run(_provider(provider).remove_container(handle))
        console.print(f"[green]✓[/green] Removed {handle}")
