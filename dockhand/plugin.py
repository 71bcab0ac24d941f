"""Plugin installation: wire config into a tool registry and a sandbox service.

Nothing is installed when the config has no `docker` section.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from dockhand.agent.messaging import AgentMessenger
from dockhand.agent.tools.docker import create_docker_tools
from dockhand.agent.tools.registry import ToolRegistry
from dockhand.config.schema import Config
from dockhand.docker.connection import DockerConnection
from dockhand.docker.process import ProcessInvoker
from dockhand.sandbox.docker_provider import DockerSandboxProvider
from dockhand.sandbox.service import SandboxService


@dataclass
class PluginInstallation:
    tools: ToolRegistry = field(default_factory=ToolRegistry)
    sandbox: SandboxService = field(default_factory=SandboxService)
    connection: DockerConnection | None = None


def install(
    config: Config,
    messenger: AgentMessenger | None = None,
    invoker: ProcessInvoker | None = None,
) -> PluginInstallation:
    """
    Build the docker tool registry and sandbox providers described by config.

    Args:
        config: Root configuration.
        messenger: Receives the tools' progress lines; defaults to loguru.
        invoker: Process invoker override (tests).

    Returns:
        The installation; empty when docker is not configured.
    """
    if config.docker is None:
        logger.info("Docker is not configured; no tools installed")
        return PluginInstallation()

    connection = DockerConnection.from_config(config.docker)
    tools = ToolRegistry(optional_allowlist=config.tools.optional_allowlist)
    for tool in create_docker_tools(
        connection,
        working_dir=config.tools.working_dir,
        messenger=messenger,
        invoker=invoker,
        max_output_chars=config.tools.max_output_chars,
    ):
        tools.register(tool, optional=True)

    sandbox_config = config.sandbox
    sandbox = SandboxService(default_provider=sandbox_config.default_provider if sandbox_config else "")
    if sandbox_config:
        for name, provider_config in sandbox_config.providers.items():
            if provider_config.type == "docker":
                sandbox.register_provider(name, DockerSandboxProvider(connection, invoker=invoker))

    logger.info(
        "Installed {} docker tool(s) and {} sandbox provider(s) for {}",
        len(tools),
        len(sandbox),
        connection.host,
    )
    return PluginInstallation(tools=tools, sandbox=sandbox, connection=connection)
