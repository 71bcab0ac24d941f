"""Generic build -> invoke -> check step shared by every docker operation."""

from __future__ import annotations

from time import monotonic

from loguru import logger

from dockhand.docker.command import DockerCommand, TimeoutBounds, LIFECYCLE_BOUNDS, build_command
from dockhand.docker.connection import DockerConnection
from dockhand.docker.process import ProcessInvoker, ProcessResult, run_process
from dockhand.docker.result import CommandResult
from dockhand.utils.exceptions import InvocationError, InvocationTimeoutError

# Exit status of coreutils `timeout` when it had to stop the command.
TIMEOUT_EXIT_CODE = 124


def failure_summary(result: ProcessResult) -> str:
    stderr = result.stderr.strip()
    if stderr:
        return stderr
    return f"Command failed with exit code {result.exit_code}"


class DockerRunner:
    """Builds commands against one connection and executes them through a process invoker."""

    def __init__(self, connection: DockerConnection, invoker: ProcessInvoker | None = None):
        self.connection = connection
        self._invoker = invoker or run_process

    def command(
        self,
        operation: str,
        args: list[str],
        *,
        timeout: int | float | None = None,
        bounds: TimeoutBounds = LIFECYCLE_BOUNDS,
        input: str | None = None,
        max_buffer: int | None = None,
        secrets: tuple[str, ...] = (),
    ) -> DockerCommand:
        return build_command(
            self.connection,
            operation,
            args,
            timeout=timeout,
            bounds=bounds,
            input=input,
            max_buffer=max_buffer,
            secrets=secrets,
        )

    async def invoke(self, command: DockerCommand) -> ProcessResult:
        """Run the command and return the raw process result, whatever its exit code."""
        logger.debug("[{}] Executing: {}", command.operation, command.display())
        started = monotonic()
        result = await self._invoker(
            command.argv,
            timeout=command.timeout,
            input=command.input,
            max_buffer=command.max_buffer,
            operation=command.operation,
        )
        elapsed = monotonic() - started
        # 124 from before the deadline is the inner command's own status
        if command.wrap_timeout and result.exit_code == TIMEOUT_EXIT_CODE and elapsed >= command.timeout:
            raise InvocationTimeoutError(
                command.operation,
                command.timeout,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result

    async def run(self, command: DockerCommand) -> CommandResult:
        """
        Run the command; a non-zero exit raises.

        Raises:
            InvocationError: Non-zero exit, failure to start, timeout or buffer overflow.
        """
        result = await self.invoke(command)
        if result.exit_code != 0:
            raise InvocationError(
                command.operation,
                failure_summary(result),
                exit_code=result.exit_code,
                stdout=result.stdout.strip(),
                stderr=result.stderr.strip(),
            )
        return CommandResult(
            ok=True,
            exit_code=result.exit_code,
            stdout=result.stdout.strip(),
            stderr=result.stderr.strip(),
        )
