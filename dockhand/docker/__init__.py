"""Docker CLI plumbing: connection flags, command building, process invocation, output parsing."""

from dockhand.docker.command import DockerCommand, TimeoutBounds, build_command, clamp_timeout
from dockhand.docker.connection import DockerConnection, TLSMaterial
from dockhand.docker.process import ProcessResult, run_process
from dockhand.docker.result import CommandResult
from dockhand.docker.runner import DockerRunner

__all__ = [
    "CommandResult",
    "DockerCommand",
    "DockerConnection",
    "DockerRunner",
    "ProcessResult",
    "TLSMaterial",
    "TimeoutBounds",
    "build_command",
    "clamp_timeout",
    "run_process",
]
