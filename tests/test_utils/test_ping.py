"""Tests for host reachability probing."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ssh_registry.utils.ping import probe_host, probe_hosts


def _writer() -> MagicMock:
    writer = MagicMock()
    writer.wait_closed = AsyncMock()
    return writer


@pytest.mark.asyncio
async def test_probe_host_reachable() -> None:
    """Returns True when the SSH port accepts connections."""
    writer = _writer()

    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_conn:
        mock_conn.return_value = (MagicMock(), writer)

        assert await probe_host("github.com") is True

    mock_conn.assert_awaited_once_with("github.com", 22)
    writer.close.assert_called_once()


@pytest.mark.asyncio
async def test_probe_host_unreachable() -> None:
    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_conn:
        mock_conn.side_effect = ConnectionRefusedError()

        assert await probe_host("10.0.0.1") is False


@pytest.mark.asyncio
async def test_probe_hosts_by_alias() -> None:
    async def fake_open(host: str, port: int) -> tuple:
        if host == "github.com":
            return (MagicMock(), _writer())
        raise TimeoutError()

    with patch("asyncio.open_connection", side_effect=fake_open):
        results = await probe_hosts({"gh": "github.com", "lab": "gitlab.internal"})

    assert results == {"gh": True, "lab": False}


@pytest.mark.asyncio
async def test_probe_hosts_runs_concurrently() -> None:
    async def slow_open(host: str, port: int) -> tuple:
        await asyncio.sleep(0.1)
        return (MagicMock(), _writer())

    with patch("asyncio.open_connection", side_effect=slow_open):
        start = time.perf_counter()
        results = await probe_hosts({f"h{i}": f"10.0.0.{i}" for i in range(5)})
        elapsed = time.perf_counter() - start

    assert all(results.values())
    assert elapsed < 0.4


@pytest.mark.asyncio
async def test_probe_hosts_empty() -> None:
    assert await probe_hosts({}) == {}
