"""Messages reported to the invoking agent while a tool runs.

Purely observational: every line is prefixed with the source operation, e.g.
"[docker_build_image] Building image app:latest...".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger


class AgentMessenger(ABC):
    """Sink for info / system / error lines addressed to the agent."""

    @abstractmethod
    def emit(self, level: str, line: str) -> None:
        """level is one of "info", "system", "error"."""
        pass

    def info(self, source: str, message: str) -> None:
        self.emit("info", f"[{source}] {message}")

    def system(self, source: str, message: str) -> None:
        self.emit("system", f"[{source}] {message}")

    def error(self, source: str, message: str) -> None:
        self.emit("error", f"[{source}] {message}")


class LoguruMessenger(AgentMessenger):
    """Default messenger: forwards lines to loguru."""

    _LEVELS = {"info": "INFO", "system": "SUCCESS", "error": "ERROR"}

    def emit(self, level: str, line: str) -> None:
        logger.log(self._LEVELS.get(level, "INFO"), line)


class CollectingMessenger(AgentMessenger):
    """Keeps every line in memory, in order."""

    def __init__(self) -> None:
        self.lines: list[tuple[str, str]] = []

    def emit(self, level: str, line: str) -> None:
        self.lines.append((level, line))

    def text(self, level: str | None = None) -> str:
        return "\n".join(line for lvl, line in self.lines if level is None or lvl == level)
