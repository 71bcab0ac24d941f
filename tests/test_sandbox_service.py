import pytest

from dockhand.docker.connection import DockerConnection
from dockhand.sandbox.docker_provider import DockerSandboxProvider
from dockhand.sandbox.service import SandboxService
from dockhand.utils.exceptions import ConfigurationError


def _provider():
    return DockerSandboxProvider(DockerConnection())


def test_empty_service_has_no_provider():
    svc = SandboxService()
    assert len(svc) == 0
    with pytest.raises(ConfigurationError):
        svc.get_provider()


def test_first_registered_is_the_fallback():
    svc = SandboxService()
    first, second = _provider(), _provider()
    svc.register_provider("a", first)
    svc.register_provider("b", second)
    assert svc.get_provider() is first
    assert svc.get_provider("b") is second
    assert svc.provider_names == ["a", "b"]
    assert "b" in svc


def test_configured_default_wins():
    svc = SandboxService(default_provider="b")
    svc.register_provider("a", _provider())
    second = _provider()
    svc.register_provider("b", second)
    assert svc.get_provider() is second


def test_unknown_name_and_unregister():
    svc = SandboxService()
    svc.register_provider("a", _provider())
    with pytest.raises(ConfigurationError, match="not found: zzz"):
        svc.get_provider("zzz")
    svc.unregister_provider("a")
    assert "a" not in svc
