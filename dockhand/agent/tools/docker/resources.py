"""Network and volume tools."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from dockhand.agent.tools.docker.base import DockerTool, RequiredStr, TimeoutParams
from dockhand.docker.command import TimeoutBounds, key_value_flags
from dockhand.docker.parser import count_deleted_volumes, parse_reclaimed_space
from dockhand.docker.result import CommandResult

DEFAULT_NETWORK_DRIVER = "bridge"


class CreateNetworkParams(TimeoutParams):
    name: RequiredStr = Field(description="The name of the network")
    driver: str = Field(default=DEFAULT_NETWORK_DRIVER, description="Driver to manage the network")
    options: dict[str, str] = Field(default_factory=dict, description="Driver specific options")
    internal: bool = Field(default=False, description="Restrict external access to the network")
    subnet: str | None = Field(default=None, description="Subnet in CIDR format")
    gateway: str | None = Field(default=None, description="Gateway for the subnet")
    ip_range: str | None = Field(default=None, description="Allocate container IPs from a sub-range")


class CreateNetworkTool(DockerTool):
    tool_name = "docker_create_network"
    tool_description = "Create a Docker network"
    params_model = CreateNetworkParams

    def build_args(self, params: CreateNetworkParams) -> list[str]:
        args = ["network", "create"]
        if params.driver and params.driver != DEFAULT_NETWORK_DRIVER:
            args.extend(["-d", params.driver])
        args.extend(key_value_flags("-o", params.options))
        if params.internal:
            args.append("--internal")
        if params.subnet:
            args.append(f"--subnet={params.subnet}")
        if params.gateway:
            args.append(f"--gateway={params.gateway}")
        if params.ip_range:
            args.append(f"--ip-range={params.ip_range}")
        args.append(params.name)
        return args

    def parse(self, params: CreateNetworkParams, result: CommandResult) -> dict[str, Any]:
        # stdout is the new network's id
        return {"name": params.name, "id": result.stdout}

    def start_message(self, params: CreateNetworkParams) -> str:
        return f"Creating Docker network {params.name}..."

    def success_message(self, params: CreateNetworkParams, result: CommandResult) -> str:
        return f"Successfully created Docker network {params.name} ({result['id']})"


class PruneVolumesParams(TimeoutParams):
    filter: str | None = Field(default=None, description="Filter volumes based on conditions provided")


class PruneVolumesTool(DockerTool):
    tool_name = "docker_prune_volumes"
    tool_description = "Prune unused Docker volumes"
    params_model = PruneVolumesParams
    bounds = TimeoutBounds(5, 300, 60)

    def build_args(self, params: PruneVolumesParams) -> list[str]:
        args = ["volume", "prune", "-f"]
        if params.filter:
            args.extend(["--filter", params.filter])
        return args

    def parse(self, params: PruneVolumesParams, result: CommandResult) -> dict[str, Any]:
        return {
            "spaceReclaimed": parse_reclaimed_space(result.stdout),
            "volumesDeleted": count_deleted_volumes(result.stdout),
        }

    def start_message(self, params: PruneVolumesParams) -> str:
        return "Pruning unused Docker volumes..."

    def success_message(self, params: PruneVolumesParams, result: CommandResult) -> str:
        return (
            f"Successfully pruned {result['volumesDeleted']} unused Docker volume(s). "
            f"Space reclaimed: {result['spaceReclaimed']}"
        )
