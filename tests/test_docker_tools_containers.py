"""Container tools: argv contract, result fields and agent messages."""

import json

import pytest

from dockhand.agent.messaging import CollectingMessenger
from dockhand.agent.tools.docker import (
    DockerRunTool,
    ExecInContainerTool,
    GetContainerLogsTool,
    GetContainerStatsTool,
    ListContainersTool,
    RemoveContainerTool,
    StartContainerTool,
    StopContainerTool,
)
from dockhand.utils.exceptions import (
    ConfigurationError,
    DecodeError,
    InvocationError,
    ValidationError,
)


def make(cls, connection, invoker, **kwargs):
    return cls(connection, invoker=invoker, messenger=CollectingMessenger(), **kwargs)


@pytest.mark.asyncio
async def test_docker_run_mounts_workspace(connection, invoker, tmp_path):
    invoker.push(stdout="hello\n")
    tool = make(DockerRunTool, connection, invoker, working_dir=tmp_path)
    result = await tool.run(image="alpine:3.18", cmd="echo hello", timeoutSeconds=9999)
    assert result.stdout == "hello"
    assert invoker.last.argv == [
        "timeout", "600s", "docker", "run", "--rm",
        "-v", f"{tmp_path.resolve()}:/workdir:rw",
        "-w", "/workdir",
        "alpine:3.18", "sh", "-c", "echo hello",
    ]


@pytest.mark.asyncio
async def test_docker_run_requires_image_and_cmd(connection, invoker, tmp_path):
    tool = make(DockerRunTool, connection, invoker, working_dir=tmp_path)
    with pytest.raises(ValidationError) as exc_info:
        await tool.run(image="", cmd="ls")
    assert "image" in exc_info.value.message
    with pytest.raises(ValidationError):
        await tool.run(image="alpine")
    assert invoker.calls == []


@pytest.mark.asyncio
async def test_docker_run_inner_failure_raises(connection, invoker, tmp_path):
    invoker.push(stderr="sh: nope: not found", exit_code=127)
    tool = make(DockerRunTool, connection, invoker, working_dir=tmp_path)
    with pytest.raises(InvocationError) as exc_info:
        await tool.run(image="alpine", cmd="nope")
    assert exc_info.value.exit_code == 127
    assert ("error", "[docker_run] sh: nope: not found") in tool.messenger.lines


@pytest.mark.asyncio
async def test_missing_connection_is_a_configuration_error(invoker):
    tool = ListContainersTool(None, invoker=invoker)
    with pytest.raises(ConfigurationError):
        await tool.run()
    assert invoker.calls == []


@pytest.mark.asyncio
async def test_exec_in_container_flags(connection, invoker):
    invoker.push(stdout="root\n")
    tool = make(ExecInContainerTool, connection, invoker)
    result = await tool.run(
        container="web",
        command=["id", "-un"],
        interactive=True,
        tty=True,
        workdir="/srv",
        env={"A": "1"},
        privileged=True,
        user="root",
    )
    assert invoker.last.argv[2:] == [
        "docker", "exec", "-i", "-t", "-w", "/srv", "-e", "A=1",
        "--privileged", "-u", "root", "web", "id", "-un",
    ]
    assert invoker.last.max_buffer == 5 * 1024 * 1024
    assert result["container"] == "web"
    assert result["command"] == "id -un"
    assert tool.messenger.lines[0] == ("info", "[docker_exec_in_container] Executing command in container web...")
    assert tool.messenger.lines[-1][0] == "system"


@pytest.mark.asyncio
async def test_exec_single_string_command(connection, invoker):
    tool = make(ExecInContainerTool, connection, invoker)
    await tool.run(container="web", command="ls -l /")
    assert invoker.last.argv[-2:] == ["web", "ls -l /"]
    with pytest.raises(ValidationError):
        await tool.run(container="web", command=[])


@pytest.mark.asyncio
async def test_start_container_accepts_string_or_list(connection, invoker):
    tool = make(StartContainerTool, connection, invoker)
    result = await tool.run(containers="a")
    assert invoker.last.argv[2:] == ["docker", "start", "a"]
    assert result["containers"] == ["a"]
    await tool.run(containers=["a", "b"], attach=True, interactive=True)
    assert invoker.last.argv[2:] == ["docker", "start", "-a", "-i", "a", "b"]


@pytest.mark.asyncio
async def test_empty_container_list_is_rejected(connection, invoker):
    tool = make(StartContainerTool, connection, invoker)
    with pytest.raises(ValidationError):
        await tool.run(containers=[])
    with pytest.raises(ValidationError):
        await tool.run(containers=["a", " "])
    assert invoker.calls == []


@pytest.mark.asyncio
async def test_stop_time_flag_only_when_not_default(connection, invoker):
    tool = make(StopContainerTool, connection, invoker)
    await tool.run(containers=["a"])
    assert invoker.last.argv[2:] == ["docker", "stop", "a"]
    await tool.run(containers=["a"], time=3)
    assert invoker.last.argv[2:] == ["docker", "stop", "-t", "3", "a"]


@pytest.mark.asyncio
async def test_remove_container_flags(connection, invoker):
    tool = make(RemoveContainerTool, connection, invoker)
    await tool.run(containers=["a", "b"], force=True, volumes=True, link=True)
    assert invoker.last.argv[2:] == ["docker", "rm", "-f", "-v", "-l", "a", "b"]


@pytest.mark.asyncio
async def test_list_containers_json(connection, invoker):
    invoker.push(stdout='{"ID": "1", "Names": "web"}\n\n{"ID": "2", "Names": "db"}\n')
    tool = make(ListContainersTool, connection, invoker)
    result = await tool.run(all=True, limit=5, filter="status=running", size=True)
    assert invoker.last.argv == [
        "timeout", "30s", "docker", "ps", "-a", "-n", "5",
        "--filter", "status=running", "-s", "--format", "{{json .}}",
    ]
    assert result["containers"] == [{"ID": "1", "Names": "web"}, {"ID": "2", "Names": "db"}]
    assert result["count"] == 2


@pytest.mark.asyncio
async def test_list_containers_quiet_json_stays_text(connection, invoker):
    invoker.push(stdout="abc\ndef\n")
    tool = make(ListContainersTool, connection, invoker)
    result = await tool.run(quiet=True)
    assert result["containers"] == "abc\ndef"
    assert result["count"] == 2


@pytest.mark.asyncio
async def test_list_containers_table_and_custom_format(connection, invoker):
    tool = make(ListContainersTool, connection, invoker)
    await tool.run(format="table")
    assert invoker.last.argv[2:] == ["docker", "ps"]
    await tool.run(format="{{.Names}}")
    assert invoker.last.argv[2:] == ["docker", "ps", "--format", "{{.Names}}"]


@pytest.mark.asyncio
async def test_list_containers_bad_json_line(connection, invoker):
    invoker.push(stdout='{"ID": "1"}\n{oops\n')
    tool = make(ListContainersTool, connection, invoker)
    with pytest.raises(DecodeError) as exc_info:
        await tool.run()
    assert "[docker_list_containers]" in exc_info.value.message


@pytest.mark.asyncio
async def test_container_logs(connection, invoker):
    invoker.push(stdout="one\ntwo\nthree\n")
    tool = make(GetContainerLogsTool, connection, invoker)
    result = await tool.run(name="web", timestamps=True, since="10m", tail=3)
    assert invoker.last.argv[2:] == [
        "docker", "logs", "--timestamps", "--since", "10m", "--tail", "3", "web",
    ]
    assert result["logs"] == "one\ntwo\nthree"
    assert result["lineCount"] == 3
    assert result["container"] == "web"


@pytest.mark.asyncio
async def test_container_logs_default_tail_and_empty_output(connection, invoker):
    tool = make(GetContainerLogsTool, connection, invoker)
    result = await tool.run(name="web")
    assert invoker.last.argv[2:] == ["docker", "logs", "--tail", "100", "web"]
    assert result["lineCount"] == 1


@pytest.mark.asyncio
async def test_container_stats(connection, invoker):
    invoker.push(stdout='{"Name": "web", "CPUPerc": "0.5%"}\n')
    tool = make(GetContainerStatsTool, connection, invoker)
    result = await tool.run(containers="web", timeoutSeconds=1000)
    assert invoker.last.argv == [
        "timeout", "60s", "docker", "stats", "--no-stream", "--format", "{{json .}}", "web",
    ]
    assert result["stats"] == [{"Name": "web", "CPUPerc": "0.5%"}]
    assert result["containers"] == ["web"]


@pytest.mark.asyncio
async def test_execute_returns_json_for_the_agent(connection, invoker):
    invoker.push(stdout="x" * 50)
    tool = ListContainersTool(connection, invoker=invoker, messenger=CollectingMessenger(), max_output_chars=10)
    data = json.loads(await tool.execute(format="table"))
    assert data["ok"] is True
    assert data["exitCode"] == 0
    assert data["count"] == 1
    assert data["stdout"].startswith("x" * 10)
    assert "truncated" in data["stdout"]
