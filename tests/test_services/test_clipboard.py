"""Tests for Clipboard."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ssh_registry.services import Clipboard
from ssh_registry.utils.platform import Platform


def _which(*available: str):
    return lambda name: f"/usr/bin/{name}" if name in available else None


def test_wsl_prefers_clip_exe() -> None:
    board = Clipboard(Platform.WSL, which=_which("clip.exe", "xclip"))

    assert board.find_command() == ["clip.exe"]


def test_linux_uses_xclip() -> None:
    board = Clipboard(Platform.LINUX, which=_which("xclip"))

    assert board.find_command() == ["xclip", "-selection", "clipboard"]


def test_linux_ignores_clip_exe() -> None:
    board = Clipboard(Platform.RASPBERRY_PI, which=_which("clip.exe"))

    assert board.find_command() is None


@pytest.mark.asyncio
async def test_copy_without_tool_warns(caplog: pytest.LogCaptureFixture) -> None:
    board = Clipboard(Platform.LINUX, which=_which())

    assert await board.copy("ssh-ed25519 AAAA test") is False
    assert "manually" in caplog.text


@pytest.mark.asyncio
async def test_copy_pipes_text() -> None:
    board = Clipboard(Platform.MACOS, which=_which("pbcopy"))
    proc = MagicMock(returncode=0)
    proc.communicate = AsyncMock(return_value=(b"", b""))

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)) as spawn:
        assert await board.copy("ssh-ed25519 AAAA test\n") is True

    assert spawn.await_args.args == ("pbcopy",)
    proc.communicate.assert_awaited_once_with(b"ssh-ed25519 AAAA test\n")


@pytest.mark.asyncio
async def test_copy_tool_failure() -> None:
    board = Clipboard(Platform.LINUX, which=_which("wl-copy"))
    proc = MagicMock(returncode=1)
    proc.communicate = AsyncMock(return_value=(b"", b"no display"))

    with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
        assert await board.copy("key") is False
