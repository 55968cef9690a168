"""Shared fixtures for ssh_registry tests."""

from collections.abc import Iterator
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from ssh_registry.config import Settings
from ssh_registry.services import (
    AgentSession,
    Clipboard,
    HostRegistry,
    KeyManager,
    reset_state,
)


@pytest.fixture(autouse=True)
def _clean_state() -> Iterator[None]:
    """Drop global settings/registry between tests."""
    reset_state()
    yield
    reset_state()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Fake home directory (not created; the registry must create ~/.ssh)."""
    return tmp_path / "home"


@pytest.fixture
def settings(home: Path) -> Settings:
    """Settings rooted at the fake home."""
    return Settings(home=home)


@pytest.fixture
def agent() -> MagicMock:
    """Agent session that accepts every key."""
    session = MagicMock(spec=AgentSession)
    session.add_key = AsyncMock(return_value=True)
    return session


@pytest.fixture
def clipboard() -> MagicMock:
    """Clipboard without any copy tool."""
    board = MagicMock(spec=Clipboard)
    board.copy = AsyncMock(return_value=False)
    return board


@pytest.fixture
def keys() -> KeyManager:
    """Key manager with a fixed comment date."""
    return KeyManager(today=lambda: date(2026, 1, 2))


@pytest.fixture
def registry(
    settings: Settings,
    keys: KeyManager,
    agent: MagicMock,
    clipboard: MagicMock,
) -> HostRegistry:
    """Registry with real config/key handling and mocked agent/clipboard."""
    return HostRegistry(settings, keys=keys, agent=agent, clipboard=clipboard)
