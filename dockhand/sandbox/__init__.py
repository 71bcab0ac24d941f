"""Sandbox isolation: provider interface, Docker provider, and provider service."""

from dockhand.sandbox.base import (
    ExecuteResult,
    LogsResult,
    SandboxOptions,
    SandboxProvider,
    SandboxResult,
)
from dockhand.sandbox.docker_provider import DockerSandboxProvider
from dockhand.sandbox.service import SandboxService

__all__ = [
    "DockerSandboxProvider",
    "ExecuteResult",
    "LogsResult",
    "SandboxOptions",
    "SandboxProvider",
    "SandboxResult",
    "SandboxService",
]
