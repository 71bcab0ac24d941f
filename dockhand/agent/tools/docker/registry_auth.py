"""Registry authentication tool."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from dockhand.agent.tools.docker.base import DockerTool, RequiredStr, TimeoutParams
from dockhand.docker.result import CommandResult


class AuthenticateRegistryParams(TimeoutParams):
    server: RequiredStr = Field(description="The registry server URL (e.g., 'https://index.docker.io/v1/')")
    username: RequiredStr = Field(description="Username for the registry")
    password: RequiredStr = Field(description="Password for the registry")
    email: str | None = Field(default=None, description="Email for the registry account")
    password_stdin: bool = Field(default=False, description="Pass the password on stdin instead of -p")


class AuthenticateRegistryTool(DockerTool):
    tool_name = "docker_authenticate_registry"
    tool_description = "Authenticate against a Docker registry"
    params_model = AuthenticateRegistryParams

    def build_args(self, params: AuthenticateRegistryParams) -> list[str]:
        args = ["login", params.server, "-u", params.username]
        if params.password_stdin:
            args.append("--password-stdin")
        else:
            args.extend(["-p", params.password])
        if params.email:
            args.extend(["--email", params.email])
        return args

    def stdin(self, params: AuthenticateRegistryParams) -> str | None:
        return params.password if params.password_stdin else None

    def secrets(self, params: AuthenticateRegistryParams) -> tuple[str, ...]:
        return (params.password,)

    def parse(self, params: AuthenticateRegistryParams, result: CommandResult) -> dict[str, Any]:
        return {"server": params.server, "username": params.username}

    def start_message(self, params: AuthenticateRegistryParams) -> str:
        return f"Authenticating to registry {params.server}..."

    def success_message(self, params: AuthenticateRegistryParams, result: CommandResult) -> str:
        return f"Successfully authenticated to registry {params.server}"
