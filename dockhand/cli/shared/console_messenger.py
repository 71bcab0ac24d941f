"""Agent messenger that prints to a rich console."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from dockhand.agent.messaging import AgentMessenger

_STYLES = {"info": "dim", "system": "green", "error": "red"}


class ConsoleMessenger(AgentMessenger):
    def __init__(self, console: Console):
        self.console = console

    def emit(self, level: str, line: str) -> None:
        style = _STYLES.get(level, "dim")
        self.console.print(f"[{style}]{escape(line)}[/{style}]")
