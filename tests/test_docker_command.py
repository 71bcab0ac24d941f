"""Tests for connection flags and command assembly."""

import pytest

from dockhand.config.schema import DockerConfig, TLSConfig
from dockhand.docker.command import (
    LIFECYCLE_BOUNDS,
    TimeoutBounds,
    build_command,
    clamp_timeout,
    key_value_flags,
)
from dockhand.docker.connection import DockerConnection, TLSMaterial


def test_default_socket_has_no_global_flags():
    conn = DockerConnection()
    assert conn.uses_default_host
    assert conn.global_args() == []


def test_remote_host_adds_h_flag():
    conn = DockerConnection(host="tcp://remote:2375")
    assert conn.global_args() == ["-H", "tcp://remote:2375"]


def test_tls_flags_order_and_optional_paths():
    conn = DockerConnection(
        host="tcp://remote:2376",
        tls=TLSMaterial(verify=True, ca_cert="/certs/ca.pem", key="/certs/key.pem"),
    )
    assert conn.global_args() == [
        "-H", "tcp://remote:2376",
        "--tls",
        "--tlscacert=/certs/ca.pem",
        "--tlskey=/certs/key.pem",
    ]


def test_tls_paths_ignored_without_verify():
    conn = DockerConnection(tls=TLSMaterial(verify=False, ca_cert="/ca.pem", cert="/c.pem"))
    assert conn.global_args() == []


def test_from_config_blank_host_falls_back_to_default():
    conn = DockerConnection.from_config(
        DockerConfig(host="  ", tls=TLSConfig(verify=True, cert="/c.pem"), timeout_wrapper=False)
    )
    assert conn.uses_default_host
    assert conn.global_args() == ["--tls", "--tlscert=/c.pem"]
    assert conn.timeout_wrapper is False


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 60),
        (1, 5),
        (5, 5),
        (42, 42),
        (600, 600),
        (10_000, 600),
        ("90", 90),
        ("soon", 60),
    ],
)
def test_clamp_timeout(value, expected):
    assert clamp_timeout(value, TimeoutBounds(5, 600, 60)) == expected


def test_build_command_prefixes_timeout_and_global_flags():
    conn = DockerConnection(host="ssh://me@box")
    cmd = build_command(conn, "docker_list_images", ["images", "-q"], timeout=999)
    assert cmd.timeout == LIFECYCLE_BOUNDS.high
    assert cmd.argv == ["timeout", "120s", "docker", "-H", "ssh://me@box", "images", "-q"]
    assert cmd.docker_argv == ["docker", "-H", "ssh://me@box", "images", "-q"]


def test_build_command_without_timeout_wrapper():
    conn = DockerConnection(timeout_wrapper=False)
    cmd = build_command(conn, "op", ["ps"])
    assert cmd.argv == ["docker", "ps"]
    assert cmd.timeout == LIFECYCLE_BOUNDS.default


def test_values_with_spaces_stay_single_arguments():
    cmd = build_command(DockerConnection(), "op", ["exec", "box", "sh", "-c", "echo a b; ls"])
    assert cmd.argv[-1] == "echo a b; ls"
    assert "'echo a b; ls'" in cmd.display()


def test_display_masks_secrets():
    cmd = build_command(
        DockerConnection(),
        "docker_authenticate_registry",
        ["login", "registry.local", "-u", "bob", "-p", "s3cret"],
        secrets=("s3cret",),
    )
    shown = cmd.display()
    assert "s3cret" not in shown
    assert "-u bob -p [password hidden]" in shown
    assert "s3cret" in cmd.argv


def test_max_buffer_defaults_to_connection():
    conn = DockerConnection(max_buffer_bytes=1234)
    assert build_command(conn, "op", ["ps"]).max_buffer == 1234
    assert build_command(conn, "op", ["ps"], max_buffer=10).max_buffer == 10


def test_key_value_flags_preserve_order():
    assert key_value_flags("-e", {"A": "1", "B": "x=y"}) == ["-e", "A=1", "-e", "B=x=y"]
    assert key_value_flags("-e", None) == []
