"""Docker sandbox provider: persistent containers kept alive with `sleep infinity`."""

from __future__ import annotations

import re

from loguru import logger

from dockhand.docker.command import LIFECYCLE_BOUNDS, TimeoutBounds, key_value_flags
from dockhand.docker.connection import DockerConnection
from dockhand.docker.process import ProcessInvoker
from dockhand.docker.runner import DockerRunner, failure_summary
from dockhand.sandbox.base import (
    ExecuteResult,
    LogsResult,
    SandboxOptions,
    SandboxProvider,
    SandboxResult,
)
from dockhand.utils.exceptions import InvocationError, ValidationError

IDLE_COMMAND = ["sleep", "infinity"]
EXEC_BOUNDS = TimeoutBounds(5, 600, 60)

# Leading stderr of the docker CLI itself; the inner command's stderr may mention the same words anywhere.
_DAEMON_ERROR_RE = re.compile(
    r"(?:Error response from daemon:|Error: No such container|"
    r"Cannot connect to the Docker daemon|error during connect)"
)


def _require_handle(operation: str, container_id: str) -> str:
    handle = (container_id or "").strip()
    if not handle:
        raise ValidationError("container id is required", field="container_id", operation=operation)
    return handle


class DockerSandboxProvider(SandboxProvider):
    """SandboxProvider backed by the docker CLI."""

    def __init__(
        self,
        connection: DockerConnection,
        *,
        exec_timeout: int = EXEC_BOUNDS.default,
        lifecycle_timeout: int = LIFECYCLE_BOUNDS.default,
        invoker: ProcessInvoker | None = None,
    ):
        self.connection = connection
        self._runner = DockerRunner(connection, invoker)
        self._exec_timeout = exec_timeout
        self._lifecycle_timeout = lifecycle_timeout

    async def create_container(self, options: SandboxOptions | None = None) -> SandboxResult:
        options = options or SandboxOptions()
        operation = "sandbox.create"
        image = (options.image or "").strip()
        if not image:
            raise ValidationError("image is required", field="image", operation=operation)

        args = ["run", "-d"]
        if options.working_dir:
            args.extend(["-w", options.working_dir])
        args.extend(key_value_flags("-e", options.environment))
        args.append(image)
        args.extend(IDLE_COMMAND)

        command = self._runner.command(operation, args, timeout=options.timeout)
        result = await self._runner.run(command)
        container_id = result.stdout.strip()
        if not container_id:
            raise InvocationError(operation, f"docker run returned no container id for image {image}")
        logger.info("[{}] Started container {} from {}", operation, container_id[:12], image)
        return SandboxResult(container_id=container_id, status="running")

    async def execute_command(self, container_id: str, command: str) -> ExecuteResult:
        operation = "sandbox.execute"
        handle = _require_handle(operation, container_id)
        cmd = self._runner.command(
            operation,
            ["exec", handle, "sh", "-c", command],
            timeout=self._exec_timeout,
            bounds=EXEC_BOUNDS,
        )
        result = await self._runner.invoke(cmd)
        if result.exit_code != 0 and _DAEMON_ERROR_RE.match(result.stderr.lstrip()):
            raise InvocationError(
                operation,
                f"container {handle}: {failure_summary(result)}",
                exit_code=result.exit_code,
                stdout=result.stdout.strip(),
                stderr=result.stderr.strip(),
            )
        return ExecuteResult(
            stdout=result.stdout.strip(),
            stderr=result.stderr.strip(),
            exit_code=result.exit_code,
        )

    async def stop_container(self, container_id: str) -> None:
        operation = "sandbox.stop"
        handle = _require_handle(operation, container_id)
        await self._runner.run(self._runner.command(operation, ["stop", handle], timeout=self._lifecycle_timeout))
        logger.info("[{}] Stopped container {}", operation, handle[:12])

    async def get_logs(self, container_id: str) -> LogsResult:
        operation = "sandbox.logs"
        handle = _require_handle(operation, container_id)
        result = await self._runner.run(
            self._runner.command(operation, ["logs", handle], timeout=self._lifecycle_timeout)
        )
        return LogsResult(logs=result.stdout)

    async def remove_container(self, container_id: str) -> None:
        operation = "sandbox.remove"
        handle = _require_handle(operation, container_id)
        result = await self._runner.run(
            self._runner.command(operation, ["rm", "-f", handle], timeout=self._lifecycle_timeout)
        )
        # rm echoes each removed container; newer CLIs exit 0 silently for a missing one under -f.
        if not result.stdout:
            raise InvocationError(operation, f"No such container: {handle}", exit_code=result.exit_code)
        logger.info("[{}] Removed container {}", operation, handle[:12])
