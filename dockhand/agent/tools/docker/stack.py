"""Swarm stack tool."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, model_validator

from dockhand.agent.tools.docker.base import DockerTool, RequiredStr, TimeoutParams
from dockhand.docker.command import TimeoutBounds
from dockhand.docker.result import CommandResult


class DockerStackParams(TimeoutParams):
    action: Literal["deploy", "remove", "ps"] = Field(description="Action to perform: 'deploy', 'remove', or 'ps'")
    stack_name: RequiredStr = Field(description="Name of the stack to deploy/remove/list")
    compose_file: str | None = Field(default=None, description="Path to docker-compose.yml (required for deploy)")

    @model_validator(mode="after")
    def _compose_file_for_deploy(self) -> "DockerStackParams":
        if self.action == "deploy" and not (self.compose_file or "").strip():
            raise ValueError("composeFile required for deploy")
        return self


class DockerStackTool(DockerTool):
    tool_name = "docker_stack"
    tool_description = (
        "Launch, update, or remove a Docker stack from the local Docker Swarm. "
        "Actions: deploy (requires composeFile), remove, ps."
    )
    params_model = DockerStackParams
    bounds = TimeoutBounds(5, 600, 60)

    def build_args(self, params: DockerStackParams) -> list[str]:
        if params.action == "deploy":
            return ["stack", "deploy", "-c", params.compose_file, params.stack_name]
        if params.action == "remove":
            return ["stack", "rm", params.stack_name]
        return ["stack", "ps", params.stack_name]

    def parse(self, params: DockerStackParams, result: CommandResult) -> dict[str, Any]:
        return {"action": params.action, "stackName": params.stack_name}

    def success_message(self, params: DockerStackParams, result: CommandResult) -> str:
        return f"Successfully executed {params.action} on stack {params.stack_name}"
