"""Container tools: run, exec, lifecycle, listing, logs and stats."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field

from dockhand.agent.tools.docker.base import (
    LARGE_BUFFER,
    DockerTool,
    ListingParams,
    NameList,
    RequiredStr,
    TimeoutParams,
    format_args,
    parse_listing,
)
from dockhand.docker.command import TimeoutBounds, key_value_flags
from dockhand.docker.parser import parse_json_lines
from dockhand.docker.result import CommandResult
from dockhand.utils.helpers import get_workspace_path

WORKDIR = "/workdir"
DEFAULT_STOP_TIME = 10


class DockerRunParams(TimeoutParams):
    image: RequiredStr = Field(description="Docker image name (e.g., ubuntu:latest)")
    cmd: RequiredStr = Field(description="Command to run in the container (e.g., 'ls -l /')")


class DockerRunTool(DockerTool):
    """Ephemeral `docker run --rm` with the workspace mounted at /workdir."""

    tool_name = "docker_run"
    tool_description = (
        "Runs a shell command in an ephemeral Docker container (docker run --rm). "
        "Returns stdout, stderr and exit code. The workspace directory is bind mounted "
        "at /workdir, which is also the container's working directory."
    )
    params_model = DockerRunParams
    bounds = TimeoutBounds(5, 600, 60)

    def __init__(self, *args: Any, working_dir: str | Path | None = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._working_dir = working_dir

    @property
    def base_dir(self) -> Path:
        return get_workspace_path(str(self._working_dir) if self._working_dir else None)

    def build_args(self, params: DockerRunParams) -> list[str]:
        return [
            "run", "--rm",
            "-v", f"{self.base_dir}:{WORKDIR}:rw",
            "-w", WORKDIR,
            params.image, "sh", "-c", params.cmd,
        ]


class ExecInContainerParams(TimeoutParams):
    container: RequiredStr = Field(description="Container name or ID")
    command: NameList = Field(description="Command to execute, as a string or an argv list")
    interactive: bool = Field(default=False, description="Keep STDIN open even if not attached")
    tty: bool = Field(default=False, description="Allocate a pseudo-TTY")
    workdir: str | None = Field(default=None, description="Working directory inside the container")
    env: dict[str, str] = Field(default_factory=dict, description="Environment variables to set")
    privileged: bool = Field(default=False, description="Give extended privileges to the command")
    user: str | None = Field(default=None, description="Username or UID to execute the command as")


class ExecInContainerTool(DockerTool):
    tool_name = "docker_exec_in_container"
    tool_description = "Execute a command in a running Docker container"
    params_model = ExecInContainerParams
    bounds = TimeoutBounds(5, 300, 30)
    max_buffer = LARGE_BUFFER

    def build_args(self, params: ExecInContainerParams) -> list[str]:
        args = ["exec"]
        if params.interactive:
            args.append("-i")
        if params.tty:
            args.append("-t")
        if params.workdir:
            args.extend(["-w", params.workdir])
        args.extend(key_value_flags("-e", params.env))
        if params.privileged:
            args.append("--privileged")
        if params.user:
            args.extend(["-u", params.user])
        args.append(params.container)
        args.extend(params.command)
        return args

    def parse(self, params: ExecInContainerParams, result: CommandResult) -> dict[str, Any]:
        return {"container": params.container, "command": " ".join(params.command)}

    def start_message(self, params: ExecInContainerParams) -> str:
        return f"Executing command in container {params.container}..."

    def success_message(self, params: ExecInContainerParams, result: CommandResult) -> str:
        return f"Command executed successfully in container {params.container}"


class ContainersParams(TimeoutParams):
    containers: NameList = Field(description="Container name(s) or ID(s)")


class StartContainerParams(ContainersParams):
    attach: bool = Field(default=False, description="Attach STDOUT/STDERR and forward signals")
    interactive: bool = Field(default=False, description="Attach the container's STDIN")


class StartContainerTool(DockerTool):
    tool_name = "docker_start_container"
    tool_description = "Start one or more stopped Docker containers"
    params_model = StartContainerParams

    def build_args(self, params: StartContainerParams) -> list[str]:
        args = ["start"]
        if params.attach:
            args.append("-a")
        if params.interactive:
            args.append("-i")
        return args + params.containers

    def parse(self, params: StartContainerParams, result: CommandResult) -> dict[str, Any]:
        return {"containers": params.containers}

    def start_message(self, params: StartContainerParams) -> str:
        return f"Starting container(s): {', '.join(params.containers)}..."

    def success_message(self, params: StartContainerParams, result: CommandResult) -> str:
        return f"Successfully started container(s): {', '.join(params.containers)}"


class StopContainerParams(ContainersParams):
    time: int = Field(default=DEFAULT_STOP_TIME, description="Seconds to wait before killing the container")


class StopContainerTool(DockerTool):
    tool_name = "docker_stop_container"
    tool_description = "Stop one or more running Docker containers"
    params_model = StopContainerParams

    def build_args(self, params: StopContainerParams) -> list[str]:
        args = ["stop"]
        if params.time != DEFAULT_STOP_TIME:
            args.extend(["-t", str(params.time)])
        return args + params.containers

    def parse(self, params: StopContainerParams, result: CommandResult) -> dict[str, Any]:
        return {"containers": params.containers}

    def start_message(self, params: StopContainerParams) -> str:
        return f"Stopping container(s): {', '.join(params.containers)}..."

    def success_message(self, params: StopContainerParams, result: CommandResult) -> str:
        return f"Successfully stopped container(s): {', '.join(params.containers)}"


class RemoveContainerParams(ContainersParams):
    force: bool = Field(default=False, description="Force removal of a running container")
    volumes: bool = Field(default=False, description="Remove anonymous volumes attached to the container")
    link: bool = Field(default=False, description="Remove the specified link")


class RemoveContainerTool(DockerTool):
    tool_name = "docker_remove_container"
    tool_description = "Remove one or more Docker containers"
    params_model = RemoveContainerParams

    def build_args(self, params: RemoveContainerParams) -> list[str]:
        args = ["rm"]
        if params.force:
            args.append("-f")
        if params.volumes:
            args.append("-v")
        if params.link:
            args.append("-l")
        return args + params.containers

    def parse(self, params: RemoveContainerParams, result: CommandResult) -> dict[str, Any]:
        return {"containers": params.containers}

    def start_message(self, params: RemoveContainerParams) -> str:
        return f"Removing container(s): {', '.join(params.containers)}..."

    def success_message(self, params: RemoveContainerParams, result: CommandResult) -> str:
        return f"Successfully removed container(s): {', '.join(params.containers)}"


class ListContainersParams(ListingParams):
    all: bool = Field(default=False, description="Show all containers (default shows just running)")
    limit: int | None = Field(default=None, description="Number of containers to show")
    size: bool = Field(default=False, description="Display total file sizes")


class ListContainersTool(DockerTool):
    tool_name = "docker_list_containers"
    tool_description = "List Docker containers"
    params_model = ListContainersParams

    def build_args(self, params: ListContainersParams) -> list[str]:
        args = ["ps"]
        if params.all:
            args.append("-a")
        if params.quiet:
            args.append("-q")
        if params.limit:
            args.extend(["-n", str(params.limit)])
        if params.filter:
            args.extend(["--filter", params.filter])
        if params.size:
            args.append("-s")
        return args + format_args(params.format)

    def parse(self, params: ListContainersParams, result: CommandResult) -> dict[str, Any]:
        containers, count = parse_listing(self.name, params.format, params.quiet, result.stdout)
        return {"containers": containers, "count": count}

    def start_message(self, params: ListContainersParams) -> str:
        return "Listing containers..."

    def success_message(self, params: ListContainersParams, result: CommandResult) -> str:
        return f"Successfully listed {result['count']} container(s)"


class GetContainerLogsParams(TimeoutParams):
    name: RequiredStr = Field(description="The container name or ID")
    follow: bool = Field(default=False, description="Follow log output")
    timestamps: bool = Field(default=False, description="Show timestamps")
    since: str | None = Field(
        default=None,
        description="Show logs since a timestamp (e.g. 2013-01-02T13:23:37Z) or relative (e.g. 42m)",
    )
    until: str | None = Field(
        default=None,
        description="Show logs before a timestamp (e.g. 2013-01-02T13:23:37Z) or relative (e.g. 42m)",
    )
    tail: int = Field(default=100, description="Number of lines to show from the end of the logs")
    details: bool = Field(default=False, description="Show extra details provided to logs")


class GetContainerLogsTool(DockerTool):
    tool_name = "docker_get_container_logs"
    tool_description = "Get logs from a Docker container"
    params_model = GetContainerLogsParams
    bounds = TimeoutBounds(5, 300, 30)
    max_buffer = LARGE_BUFFER

    def build_args(self, params: GetContainerLogsParams) -> list[str]:
        args = ["logs"]
        if params.follow:
            args.append("--follow")
        if params.timestamps:
            args.append("--timestamps")
        if params.since:
            args.extend(["--since", params.since])
        if params.until:
            args.extend(["--until", params.until])
        args.extend(["--tail", str(params.tail)])
        if params.details:
            args.append("--details")
        args.append(params.name)
        return args

    def parse(self, params: GetContainerLogsParams, result: CommandResult) -> dict[str, Any]:
        logs = result.stdout
        # "".split("\n") is one line, as the agent has always been told
        return {"logs": logs, "lineCount": len(logs.split("\n")), "container": params.name}

    def start_message(self, params: GetContainerLogsParams) -> str:
        return f"Getting logs from container {params.name}..."

    def success_message(self, params: GetContainerLogsParams, result: CommandResult) -> str:
        return f"Successfully retrieved logs from container {params.name}"


class GetContainerStatsParams(ContainersParams):
    all: bool = Field(default=False, description="Show all containers (default shows just running)")
    no_stream: bool = Field(default=True, description="Disable streaming stats and only pull one sample")
    format: str = Field(default="json", description='"json", "table", or a Go template')


class GetContainerStatsTool(DockerTool):
    tool_name = "docker_get_container_stats"
    tool_description = "Get resource usage statistics from Docker containers"
    params_model = GetContainerStatsParams
    bounds = TimeoutBounds(5, 60, 10)

    def build_args(self, params: GetContainerStatsParams) -> list[str]:
        args = ["stats"]
        if params.no_stream:
            args.append("--no-stream")
        if params.all:
            args.append("--all")
        return args + format_args(params.format) + params.containers

    def parse(self, params: GetContainerStatsParams, result: CommandResult) -> dict[str, Any]:
        if params.format == "json":
            stats: Any = parse_json_lines(result.stdout, self.name)
        else:
            stats = result.stdout
        return {"stats": stats, "containers": params.containers}

    def start_message(self, params: GetContainerStatsParams) -> str:
        return f"Getting stats for container(s): {', '.join(params.containers)}..."

    def success_message(self, params: GetContainerStatsParams, result: CommandResult) -> str:
        return f"Successfully retrieved stats for container(s): {', '.join(params.containers)}"
