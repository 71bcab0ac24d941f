"""Pytest hooks and fixtures."""

import asyncio
import itertools
import shutil
from dataclasses import dataclass, field

import pytest

from dockhand.docker.connection import DockerConnection
from dockhand.docker.process import ProcessResult


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_docker: talks to a real Docker daemon (skipped when none is reachable)",
    )


def _docker_reachable() -> bool:
    if shutil.which("docker") is None:
        return False

    async def _probe() -> bool:
        try:
            proc = await asyncio.create_subprocess_exec(
                "docker", "info",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            return await asyncio.wait_for(proc.wait(), timeout=10) == 0
        except (OSError, asyncio.TimeoutError):
            return False

    return asyncio.run(_probe())


def pytest_collection_modifyitems(config, items):
    """Skip requires_docker tests when no daemon answers `docker info`."""
    marked = [item for item in items if "requires_docker" in item.keywords]
    if not marked or _docker_reachable():
        return
    skip = pytest.mark.skip(reason="Docker daemon not available")
    for item in marked:
        item.add_marker(skip)


@dataclass
class Call:
    argv: list[str]
    timeout: float
    input: str | None
    max_buffer: int | None
    operation: str


@dataclass
class FakeInvoker:
    """Records every invocation and replays queued results (default: exit 0, empty output)."""

    calls: list[Call] = field(default_factory=list)
    results: list[ProcessResult | Exception] = field(default_factory=list)

    def push(self, stdout: str = "", stderr: str = "", exit_code: int = 0) -> "FakeInvoker":
        self.results.append(ProcessResult(exit_code=exit_code, stdout=stdout, stderr=stderr))
        return self

    def push_error(self, exc: Exception) -> "FakeInvoker":
        self.results.append(exc)
        return self

    @property
    def last(self) -> Call:
        return self.calls[-1]

    async def __call__(self, argv, *, timeout, input=None, max_buffer=None, operation="docker"):
        self.calls.append(Call(list(argv), timeout, input, max_buffer, operation))
        result = self.results.pop(0) if self.results else ProcessResult(0, "", "")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture
def invocation_takes(monkeypatch):
    """Make every invocation appear to the runner to last the given number of seconds."""

    def _apply(seconds: float) -> None:
        ticks = itertools.count(0, seconds)
        monkeypatch.setattr("dockhand.docker.runner.monotonic", lambda: next(ticks))

    return _apply


@pytest.fixture
def connection() -> DockerConnection:
    return DockerConnection()


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Point ~ at a temp dir so config, logs and workspace stay out of the real home."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
