"""
Current snapshot holder and periodic refresh.

At most one reload runs at a time. Each reload takes a sequence number and
its result is committed only if nothing newer was applied in the meantime.
A failed reload keeps the previous snapshot and records the error.
"""

import asyncio
import itertools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import datetime, timezone

from core.config import REFRESH_INTERVAL_SECONDS
from core.sheets import FeedError
from services.records import Snapshot

logger = logging.getLogger(__name__)

Loader = Callable[[], Snapshot]


class RecordStore:
    def __init__(self, loader: Loader):
        self._loader = loader
        self._snapshot = Snapshot()
        self._sequence = itertools.count(1)
        self._in_flight = False
        self.last_error: str | None = None
        self.last_attempt: datetime | None = None

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def refreshing(self) -> bool:
        return self._in_flight

    def commit(self, snapshot: Snapshot) -> bool:
        """Apply a loaded snapshot unless a newer one is already in place."""
        if snapshot.sequence <= self._snapshot.sequence:
            logger.info(
                "Discarding stale snapshot #%d (current #%d)",
                snapshot.sequence,
                self._snapshot.sequence,
            )
            return False
        self._snapshot = snapshot
        self.last_error = None
        return True

    async def refresh(self) -> bool:
        """
        Reload the feed unless a reload is already running.

        Returns True when a new snapshot was committed. Feed errors are
        recorded in last_error and never raised.
        """
        if self._in_flight:
            logger.info("Refresh already in flight, skipping")
            return False

        self._in_flight = True
        # Stay ahead of snapshots committed directly
        sequence = max(next(self._sequence), self._snapshot.sequence + 1)
        self.last_attempt = datetime.now(timezone.utc)
        try:
            loaded = await asyncio.to_thread(self._loader)
        except FeedError as e:
            self.last_error = str(e)
            logger.error("Refresh #%d failed, keeping previous data: %s", sequence, e)
            return False
        finally:
            self._in_flight = False

        return self.commit(replace(loaded, sequence=sequence))


class PeriodicRefresher:
    """
    Calls store.refresh() every `interval` seconds until stopped.

    `sleep` is injectable so tests can drive ticks without real timers.
    """

    def __init__(
        self,
        store: RecordStore,
        interval: float = REFRESH_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.store = store
        self.interval = interval
        self._sleep = sleep
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self):
        while True:
            try:
                await self.store.refresh()
            except Exception:
                # Keep ticking; the next tick is the retry
                logger.exception("Unexpected error during scheduled refresh")
            await self._sleep(self.interval)

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
