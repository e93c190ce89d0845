"""
Tests for the fixed-interval status poller.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from gasless_bridge.core.errors import PollTimeout, RelayExecutionFailed, StatusQueryFailed
from gasless_bridge.core.execution import StatusPoller


def _provider(*statuses):
    provider = MagicMock()
    provider.status = AsyncMock(side_effect=[s if isinstance(s, dict) else {"status": s} for s in statuses])
    return provider


@pytest.mark.asyncio
async def test_success_after_two_waits():
    sleep = AsyncMock()
    provider = _provider("pending", "pending", {"status": "success", "txHashes": ["0xdest"]})
    poller = StatusPoller(provider, interval_s=5.0, max_attempts=60, sleep=sleep)

    snapshot = await poller.poll_until_terminal("R1")

    assert snapshot.is_success
    assert snapshot.destination_tx_hash == "0xdest"
    assert sleep.await_count == 2
    sleep.assert_awaited_with(5.0)
    assert provider.status.await_count == 3


@pytest.mark.asyncio
async def test_timeout_after_max_attempts():
    sleep = AsyncMock()
    provider = _provider(*["pending"] * 4)
    poller = StatusPoller(provider, interval_s=1.0, max_attempts=4, sleep=sleep)

    with pytest.raises(PollTimeout) as exc_info:
        await poller.poll_until_terminal("R1")

    assert exc_info.value.attempts == 4
    assert exc_info.value.request_id == "R1"
    assert provider.status.await_count == 4
    assert "R1" in exc_info.value.message


@pytest.mark.asyncio
@pytest.mark.parametrize("status", ["failure", "refund"])
async def test_terminal_failure_stops_polling(status):
    sleep = AsyncMock()
    provider = _provider(status, "success")
    poller = StatusPoller(provider, interval_s=1.0, max_attempts=10, sleep=sleep)

    with pytest.raises(RelayExecutionFailed) as exc_info:
        await poller.poll_until_terminal("R1")

    assert exc_info.value.status == status
    assert provider.status.await_count == 1
    sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_waiting_and_submitted_are_non_terminal():
    sleep = AsyncMock()
    provider = _provider("waiting", "submitted", "success")
    seen = []
    poller = StatusPoller(provider, interval_s=0.1, max_attempts=5, sleep=sleep)

    await poller.poll_until_terminal("R1", on_snapshot=lambda attempt, total, snap: seen.append((attempt, total, snap.status)))

    assert seen == [(1, 5, "waiting"), (2, 5, "submitted"), (3, 5, "success")]


@pytest.mark.asyncio
async def test_unknown_status_keeps_polling():
    provider = _provider("delayed", "success")
    poller = StatusPoller(provider, interval_s=0.1, max_attempts=5, sleep=AsyncMock())

    snapshot = await poller.poll_until_terminal("R1")

    assert snapshot.is_success


@pytest.mark.asyncio
async def test_malformed_status_body():
    provider = _provider({"unexpected": True})
    poller = StatusPoller(provider, interval_s=0.1, max_attempts=5, sleep=AsyncMock())

    with pytest.raises(StatusQueryFailed):
        await poller.poll_until_terminal("R1")
