"""Shared plumbing for the docker tools.

Every tool follows the same build -> invoke -> check -> parse sequence; a
subclass only declares its parameters, its argv and how to read stdout.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BeforeValidator, Field, StringConstraints, WithJsonSchema

from dockhand.agent.messaging import AgentMessenger, LoguruMessenger
from dockhand.agent.tools.base import Tool, ToolParams
from dockhand.docker.command import LIFECYCLE_BOUNDS, DockerCommand, TimeoutBounds
from dockhand.docker.connection import DockerConnection
from dockhand.docker.parser import count_lines, parse_json_lines, parse_table
from dockhand.docker.process import ProcessInvoker
from dockhand.docker.result import CommandResult
from dockhand.docker.runner import DockerRunner
from dockhand.utils.exceptions import ConfigurationError, DockhandError

SMALL_BUFFER = 1024 * 1024
LARGE_BUFFER = 5 * 1024 * 1024


def _as_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


def _no_blank_names(values: list[str]) -> list[str]:
    names = [v.strip() for v in values]
    if not names or any(not n for n in names):
        raise ValueError("at least one non-empty name is required")
    return names


RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# A single name or a list of names; normalized to a non-empty list.
NameList = Annotated[
    list[str],
    BeforeValidator(_as_list),
    AfterValidator(_no_blank_names),
    WithJsonSchema({
        "anyOf": [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}, "minItems": 1},
        ]
    }),
]


class TimeoutParams(ToolParams):
    timeout_seconds: int | None = Field(
        default=None,
        description="Timeout in seconds; clamped to the tool's allowed range",
    )


class ListingParams(TimeoutParams):
    """Common options for `docker images` / `docker ps` style listings."""

    format: str = Field(
        default="json",
        description='"table", "json" (one object per item), or a Go template',
    )
    quiet: bool = Field(default=False, description="Only print IDs")
    filter: str | None = Field(default=None, description="Filter, e.g. dangling=true")


def format_args(fmt: str) -> list[str]:
    if fmt == "json":
        return ["--format", "{{json .}}"]
    if fmt == "table":
        return []
    return ["--format", fmt]


def parse_listing(operation: str, fmt: str, quiet: bool, stdout: str) -> tuple[Any, int]:
    """Parsed listing and item count; JSON objects only for format=json without quiet."""
    if fmt == "json" and not quiet:
        items = parse_json_lines(stdout, operation)
        return items, len(items)
    return parse_table(stdout), count_lines(stdout)


class DockerTool(Tool):
    """
    Base for tools that run exactly one docker command.

    Subclasses set `tool_name`, `tool_description`, `params_model`, `bounds`
    and implement `build_args`. Optional hooks: `stdin`, `secrets`, `parse`,
    `start_message`, `success_message`.
    """

    tool_name: ClassVar[str] = ""
    tool_description: ClassVar[str] = ""
    bounds: ClassVar[TimeoutBounds] = LIFECYCLE_BOUNDS
    max_buffer: ClassVar[int] = SMALL_BUFFER

    def __init__(
        self,
        connection: DockerConnection | None,
        *,
        messenger: AgentMessenger | None = None,
        invoker: ProcessInvoker | None = None,
        max_output_chars: int = 10000,
    ):
        self.connection = connection
        self.messenger = messenger or LoguruMessenger()
        self.max_output_chars = max_output_chars
        self._runner = DockerRunner(connection, invoker) if connection is not None else None

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def description(self) -> str:
        return self.tool_description

    # -- hooks -----------------------------------------------------------

    def build_args(self, params: Any) -> list[str]:
        raise NotImplementedError

    def stdin(self, params: Any) -> str | None:
        return None

    def secrets(self, params: Any) -> tuple[str, ...]:
        return ()

    def parse(self, params: Any, result: CommandResult) -> dict[str, Any]:
        return {}

    def start_message(self, params: Any) -> str | None:
        return None

    def success_message(self, params: Any, result: CommandResult) -> str | None:
        return None

    # -- execution -------------------------------------------------------

    def build(self, params: Any) -> DockerCommand:
        runner = self._require_runner()
        return runner.command(
            self.name,
            self.build_args(params),
            timeout=params.timeout_seconds,
            bounds=self.bounds,
            input=self.stdin(params),
            max_buffer=self.max_buffer,
            secrets=self.secrets(params),
        )

    async def run(self, **kwargs: Any) -> CommandResult:
        """
        Validate, build, invoke and parse.

        Raises:
            ConfigurationError: No docker connection is configured.
            ValidationError: Parameters are invalid.
            InvocationError: The command failed, timed out or overflowed its buffer.
            DecodeError: JSON output could not be parsed.
        """
        self._require_runner()
        params = self.parse_params(kwargs)
        command = self.build(params)
        start = self.start_message(params)
        if start:
            self.messenger.info(self.name, start)
        self.messenger.info(self.name, f"Executing: {command.display()}")
        try:
            result = await self._require_runner().run(command)
            result.fields.update(self.parse(params, result))
        except DockhandError as e:
            # message already carries the [tool] prefix
            self.messenger.emit("error", e.message)
            raise
        done = self.success_message(params, result)
        if done:
            self.messenger.system(self.name, done)
        return result

    async def execute(self, **kwargs: Any) -> str:
        result = await self.run(**kwargs)
        return result.to_json(self.max_output_chars)

    def _require_runner(self) -> DockerRunner:
        if self._runner is None:
            raise ConfigurationError("Docker connection is not configured", operation=self.name)
        return self._runner
