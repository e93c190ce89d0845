"""Fixed-cadence status polling until the relay reaches a terminal state."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from ...config import settings
from ..errors import PollTimeout, RelayExecutionFailed, StatusQueryFailed
from .models import StatusSnapshot


logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[int, int, StatusSnapshot], None]


class StatusPoller:
    """Polls /intents/status/v3 one request at a time.

    ``waiting``, ``pending`` and ``submitted`` keep polling; ``success``
    returns; ``failure`` and ``refund`` raise ``RelayExecutionFailed``.
    Unknown statuses are treated as non-terminal.
    """

    def __init__(
        self,
        provider,
        *,
        interval_s: Optional[float] = None,
        max_attempts: Optional[int] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._provider = provider
        self.interval_s = interval_s if interval_s is not None else settings.poll_interval_seconds
        self.max_attempts = max_attempts if max_attempts is not None else settings.poll_max_attempts
        self._sleep = sleep

    async def poll_until_terminal(
        self,
        request_id: str,
        *,
        on_snapshot: Optional[SnapshotCallback] = None,
    ) -> StatusSnapshot:
        attempts = self.max_attempts
        for attempt in range(1, attempts + 1):
            body = await self._provider.status(request_id)
            try:
                snapshot = StatusSnapshot.model_validate(body)
            except ValidationError as exc:
                raise StatusQueryFailed(200, f"Unexpected status response: {body}") from exc
            logger.info("Status %s [%d/%d]: %s", request_id, attempt, attempts, snapshot.status)
            if on_snapshot is not None:
                on_snapshot(attempt, attempts, snapshot)

            if snapshot.is_success:
                return snapshot
            if snapshot.is_failure:
                raise RelayExecutionFailed(snapshot.status, request_id)
            if snapshot.relay_status is None:
                logger.warning("Unknown relay status %r for %s", snapshot.status, request_id)

            if attempt < attempts:
                await self._sleep(self.interval_s)

        raise PollTimeout(request_id, attempts)
