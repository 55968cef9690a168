"""Tests for AgentSession."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ssh_registry.services import AgentSession, parse_agent_output

AGENT_OUTPUT = (
    "SSH_AUTH_SOCK=/tmp/ssh-abc/agent.41; export SSH_AUTH_SOCK;\n"
    "SSH_AGENT_PID=42; export SSH_AGENT_PID;\n"
    "echo Agent pid 42;\n"
)


def _process(stdout: bytes, returncode: int = 0, stderr: bytes = b"") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    return proc


def _agent_client() -> MagicMock:
    client = MagicMock()
    client.add_keys = AsyncMock()
    client.wait_closed = AsyncMock()
    return client


def test_parse_agent_output() -> None:
    assert parse_agent_output(AGENT_OUTPUT) == {
        "SSH_AUTH_SOCK": "/tmp/ssh-abc/agent.41",
        "SSH_AGENT_PID": "42",
    }


@pytest.mark.asyncio
async def test_ensure_running_uses_known_socket() -> None:
    """No agent is spawned when a socket is configured."""
    session = AgentSession(socket_path="/run/agent.sock", environ={})

    with patch("asyncio.create_subprocess_exec") as spawn:
        assert await session.ensure_running() == "/run/agent.sock"
        spawn.assert_not_called()


@pytest.mark.asyncio
async def test_ensure_running_starts_agent_and_exports_env() -> None:
    environ: dict[str, str] = {}
    session = AgentSession(environ=environ)
    spawn = AsyncMock(return_value=_process(AGENT_OUTPUT.encode()))

    with patch("asyncio.create_subprocess_exec", spawn):
        socket_path = await session.ensure_running()
        again = await session.ensure_running()

    assert socket_path == again == "/tmp/ssh-abc/agent.41"
    assert environ["SSH_AUTH_SOCK"] == "/tmp/ssh-abc/agent.41"
    assert session.agent_pid == "42"
    spawn.assert_awaited_once()
    assert spawn.await_args.args[:2] == ("ssh-agent", "-s")


@pytest.mark.asyncio
async def test_ensure_running_agent_missing() -> None:
    session = AgentSession(environ={})

    with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
        assert await session.ensure_running() is None


@pytest.mark.asyncio
async def test_ensure_running_agent_fails() -> None:
    session = AgentSession(environ={})
    spawn = AsyncMock(return_value=_process(b"", returncode=2, stderr=b"boom"))

    with patch("asyncio.create_subprocess_exec", spawn):
        assert await session.ensure_running() is None


@pytest.mark.asyncio
async def test_add_key_loads_key() -> None:
    session = AgentSession(socket_path="/run/agent.sock", environ={})
    client = _agent_client()

    with patch("asyncssh.connect_agent", AsyncMock(return_value=client)) as connect:
        assert await session.add_key(Path("/keys/id_x")) is True

    connect.assert_awaited_once_with("/run/agent.sock")
    client.add_keys.assert_awaited_once_with(["/keys/id_x"])
    client.close.assert_called_once()
    client.wait_closed.assert_awaited_once()


@pytest.mark.asyncio
async def test_add_key_rejected_is_warning(caplog: pytest.LogCaptureFixture) -> None:
    session = AgentSession(socket_path="/run/agent.sock", environ={})
    client = _agent_client()
    client.add_keys.side_effect = ValueError("Unable to add key")

    with patch("asyncssh.connect_agent", AsyncMock(return_value=client)):
        assert await session.add_key(Path("/keys/id_x")) is False

    client.close.assert_called_once()
    assert "rejected" in caplog.text


@pytest.mark.asyncio
async def test_add_key_unreachable_agent() -> None:
    session = AgentSession(socket_path="/run/missing.sock", environ={})

    with patch("asyncssh.connect_agent", AsyncMock(side_effect=OSError("no such socket"))):
        assert await session.add_key(Path("/keys/id_x")) is False


@pytest.mark.asyncio
async def test_add_key_without_agent() -> None:
    session = AgentSession(environ={})

    with patch.object(session, "ensure_running", AsyncMock(return_value=None)):
        assert await session.add_key(Path("/keys/id_x")) is False
