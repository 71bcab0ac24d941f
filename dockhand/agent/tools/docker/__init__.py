"""Docker CLI operations exposed as agent tools."""

from __future__ import annotations

from pathlib import Path

from dockhand.agent.messaging import AgentMessenger
from dockhand.agent.tools.docker.base import DockerTool
from dockhand.agent.tools.docker.containers import (
    DockerRunTool,
    ExecInContainerTool,
    GetContainerLogsTool,
    GetContainerStatsTool,
    ListContainersTool,
    RemoveContainerTool,
    StartContainerTool,
    StopContainerTool,
)
from dockhand.agent.tools.docker.images import (
    BuildImageTool,
    ListImagesTool,
    PruneImagesTool,
    PushImageTool,
    RemoveImageTool,
    TagImageTool,
)
from dockhand.agent.tools.docker.registry_auth import AuthenticateRegistryTool
from dockhand.agent.tools.docker.resources import CreateNetworkTool, PruneVolumesTool
from dockhand.agent.tools.docker.stack import DockerStackTool
from dockhand.docker.connection import DockerConnection
from dockhand.docker.process import ProcessInvoker

DOCKER_TOOL_CLASSES: tuple[type[DockerTool], ...] = (
    DockerRunTool,
    BuildImageTool,
    ListImagesTool,
    ListContainersTool,
    PushImageTool,
    TagImageTool,
    RemoveImageTool,
    GetContainerStatsTool,
    GetContainerLogsTool,
    CreateNetworkTool,
    DockerStackTool,
    ExecInContainerTool,
    StartContainerTool,
    StopContainerTool,
    RemoveContainerTool,
    AuthenticateRegistryTool,
    PruneImagesTool,
    PruneVolumesTool,
)


def create_docker_tools(
    connection: DockerConnection | None,
    *,
    working_dir: str | Path | None = None,
    messenger: AgentMessenger | None = None,
    invoker: ProcessInvoker | None = None,
    max_output_chars: int = 10000,
) -> list[DockerTool]:
    """Instantiate every docker tool against one connection."""
    tools: list[DockerTool] = []
    for cls in DOCKER_TOOL_CLASSES:
        kwargs = {"messenger": messenger, "invoker": invoker, "max_output_chars": max_output_chars}
        if cls is DockerRunTool:
            kwargs["working_dir"] = working_dir
        tools.append(cls(connection, **kwargs))
    return tools


__all__ = [
    "DOCKER_TOOL_CLASSES",
    "AuthenticateRegistryTool",
    "BuildImageTool",
    "CreateNetworkTool",
    "DockerRunTool",
    "DockerStackTool",
    "DockerTool",
    "ExecInContainerTool",
    "GetContainerLogsTool",
    "GetContainerStatsTool",
    "ListContainersTool",
    "ListImagesTool",
    "PruneImagesTool",
    "PruneVolumesTool",
    "PushImageTool",
    "RemoveContainerTool",
    "RemoveImageTool",
    "StartContainerTool",
    "StopContainerTool",
    "TagImageTool",
    "create_docker_tools",
]
