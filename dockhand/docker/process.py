"""Process invoker: run an argv with a timeout, optional stdin and a capture limit."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from dockhand.utils.exceptions import (
    BufferExceededError,
    InvocationError,
    InvocationTimeoutError,
)

_CHUNK_SIZE = 64 * 1024


@dataclass
class ProcessResult:
    """Exit code and decoded output of a finished process."""

    exit_code: int
    stdout: str
    stderr: str


# (argv, *, timeout, input, max_buffer, operation) -> ProcessResult
ProcessInvoker = Callable[..., Awaitable[ProcessResult]]


def _kill(proc: asyncio.subprocess.Process) -> None:
    try:
        proc.kill()
    except ProcessLookupError:
        pass


async def run_process(
    argv: Sequence[str],
    *,
    timeout: float,
    input: str | None = None,
    max_buffer: int | None = None,
    operation: str = "docker",
) -> ProcessResult:
    """
    Execute argv without a shell.

    Raises:
        InvocationError: The executable could not be started.
        InvocationTimeoutError: The process ran past `timeout` seconds and was killed.
        BufferExceededError: stdout or stderr grew past `max_buffer` bytes and the process was killed.
    """
    if not argv:
        raise InvocationError(operation, "Empty command")
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.PIPE if input is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise InvocationError(operation, f"Executable not found: {argv[0]}") from e
    except OSError as e:
        raise InvocationError(operation, f"Failed to start {argv[0]}: {e}") from e

    out_buf = bytearray()
    err_buf = bytearray()
    exceeded = False

    async def pump(stream: asyncio.StreamReader | None, buf: bytearray) -> None:
        nonlocal exceeded
        if stream is None:
            return
        while True:
            chunk = await stream.read(_CHUNK_SIZE)
            if not chunk:
                break
            buf.extend(chunk)
            if max_buffer is not None and len(buf) > max_buffer:
                exceeded = True
                _kill(proc)
                break

    async def feed() -> None:
        if input is None or proc.stdin is None:
            return
        try:
            proc.stdin.write(input.encode("utf-8"))
            await proc.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            pass
        finally:
            proc.stdin.close()

    try:
        await asyncio.wait_for(
            asyncio.gather(feed(), pump(proc.stdout, out_buf), pump(proc.stderr, err_buf), proc.wait()),
            timeout=float(timeout),
        )
    except asyncio.TimeoutError:
        _kill(proc)
        await proc.wait()
        raise InvocationTimeoutError(
            operation,
            timeout,
            stdout=out_buf.decode("utf-8", errors="replace"),
            stderr=err_buf.decode("utf-8", errors="replace"),
        ) from None

    if exceeded:
        raise BufferExceededError(operation, max_buffer or 0)

    return ProcessResult(
        exit_code=proc.returncode if proc.returncode is not None else -1,
        stdout=out_buf.decode("utf-8", errors="replace"),
        stderr=err_buf.decode("utf-8", errors="replace"),
    )
