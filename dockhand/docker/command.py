"""Command-line builder: connection flags + operation args -> argv for the docker executable.

Commands are executed as argument arrays (no shell), so values are never re-split
on whitespace. `DockerCommand.display()` gives the shell-escaped rendering used
for log lines, with secrets masked.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import NamedTuple

from dockhand.docker.connection import DockerConnection

DOCKER_BINARY = "docker"
TIMEOUT_BINARY = "timeout"
SECRET_PLACEHOLDER = "[password hidden]"


class TimeoutBounds(NamedTuple):
    """Per-operation timeout range in seconds."""

    low: int
    high: int
    default: int


LIFECYCLE_BOUNDS = TimeoutBounds(5, 120, 30)


def clamp_timeout(value: int | float | None, bounds: TimeoutBounds) -> int:
    """Clamp a caller-supplied timeout into [low, high]; None takes the default."""
    if value is None:
        value = bounds.default
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        seconds = bounds.default
    return max(bounds.low, min(seconds, bounds.high))


@dataclass(frozen=True)
class DockerCommand:
    """A fully assembled docker invocation."""

    operation: str
    global_args: tuple[str, ...]
    args: tuple[str, ...]
    timeout: int
    wrap_timeout: bool = True
    input: str | None = None
    max_buffer: int | None = None
    secrets: tuple[str, ...] = field(default=(), repr=False)

    @property
    def docker_argv(self) -> list[str]:
        """`docker <global flags> <subcommand ...>` without the timeout prefix."""
        return [DOCKER_BINARY, *self.global_args, *self.args]

    @property
    def argv(self) -> list[str]:
        if self.wrap_timeout:
            return [TIMEOUT_BINARY, f"{self.timeout}s", *self.docker_argv]
        return self.docker_argv

    def display(self) -> str:
        """Shell-escaped rendering for logs; secret values are masked."""
        hidden = set(self.secrets)
        return " ".join(SECRET_PLACEHOLDER if part in hidden else shlex.quote(part) for part in self.argv)


def build_command(
    connection: DockerConnection,
    operation: str,
    args: list[str],
    *,
    timeout: int | float | None = None,
    bounds: TimeoutBounds = LIFECYCLE_BOUNDS,
    input: str | None = None,
    max_buffer: int | None = None,
    secrets: tuple[str, ...] = (),
) -> DockerCommand:
    """
    Assemble a docker command.

    Args:
        connection: Daemon address and TLS material.
        operation: Operation name, used as the prefix of every message.
        args: Subcommand and its flags/positionals, in order.
        timeout: Caller-supplied timeout in seconds, clamped into bounds.
        bounds: Operation-specific timeout range.
        input: Optional stdin text.
        max_buffer: Optional cap on captured output bytes.
        secrets: Values masked in display().
    """
    return DockerCommand(
        operation=operation,
        global_args=tuple(connection.global_args()),
        args=tuple(args),
        timeout=clamp_timeout(timeout, bounds),
        wrap_timeout=connection.timeout_wrapper,
        input=input,
        max_buffer=max_buffer if max_buffer is not None else connection.max_buffer_bytes,
        secrets=tuple(s for s in secrets if s),
    )


def key_value_flags(flag: str, mapping: dict[str, str] | None) -> list[str]:
    """Repeat `flag KEY=VALUE` for each entry, preserving order."""
    out: list[str] = []
    for key, value in (mapping or {}).items():
        out.extend([flag, f"{key}={value}"])
    return out
