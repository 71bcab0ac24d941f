"""Abstract interface and return contract for sandbox providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class SandboxOptions:
    """Creation options; not retained after the container is created."""

    image: str = "ubuntu:latest"
    working_dir: str | None = None
    environment: dict[str, str] | None = field(default=None)
    timeout: int = 30  # seconds


@dataclass
class SandboxResult:
    container_id: str
    status: str  # "running"


@dataclass
class ExecuteResult:
    """Output of a command run inside a sandbox; exit_code is the inner command's."""

    stdout: str
    stderr: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class LogsResult:
    logs: str


class SandboxProvider(ABC):
    """
    Persistent container lifecycle: create -> execute* -> stop -> remove.

    Handles are opaque runtime identifiers. Transitions are not validated
    locally; an illegal one surfaces as a runtime failure.
    """

    @abstractmethod
    async def create_container(self, options: SandboxOptions | None = None) -> SandboxResult:
        """Start a long-lived container and return its handle."""
        pass

    @abstractmethod
    async def execute_command(self, container_id: str, command: str) -> ExecuteResult:
        """Run `sh -c command` inside the container."""
        pass

    @abstractmethod
    async def stop_container(self, container_id: str) -> None:
        pass

    @abstractmethod
    async def get_logs(self, container_id: str) -> LogsResult:
        pass

    @abstractmethod
    async def remove_container(self, container_id: str) -> None:
        """Force-remove the container."""
        pass
