"""Tests for the subprocess invoker (runs small POSIX utilities, not docker)."""

import pytest

from dockhand.docker.process import run_process
from dockhand.utils.exceptions import (
    BufferExceededError,
    InvocationError,
    InvocationTimeoutError,
)


@pytest.mark.asyncio
async def test_captures_exit_code_and_both_streams():
    result = await run_process(["sh", "-c", "echo out; echo err >&2; exit 3"], timeout=5)
    assert result.exit_code == 3
    assert result.stdout == "out\n"
    assert result.stderr == "err\n"


@pytest.mark.asyncio
async def test_feeds_stdin():
    result = await run_process(["cat"], timeout=5, input="hello")
    assert result.exit_code == 0
    assert result.stdout == "hello"


@pytest.mark.asyncio
async def test_timeout_kills_process():
    with pytest.raises(InvocationTimeoutError) as exc_info:
        await run_process(["sleep", "5"], timeout=0.2, operation="sandbox.execute")
    assert exc_info.value.code == "TIMEOUT"
    assert "[sandbox.execute]" in exc_info.value.message


@pytest.mark.asyncio
async def test_missing_executable():
    with pytest.raises(InvocationError) as exc_info:
        await run_process(["dockhand-no-such-binary-xyz"], timeout=5)
    assert "Executable not found" in exc_info.value.message


@pytest.mark.asyncio
async def test_output_over_buffer_limit():
    with pytest.raises(BufferExceededError):
        await run_process(["sh", "-c", "head -c 200000 /dev/zero"], timeout=5, max_buffer=1024)


@pytest.mark.asyncio
async def test_empty_argv():
    with pytest.raises(InvocationError):
        await run_process([], timeout=5)
