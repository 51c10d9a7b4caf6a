"""Periodic incremental refresh of the vault cache.

Uses APScheduler's AsyncIOScheduler with an interval trigger. Each tick
spawns one refresh cycle as its own task and returns at once, so:
- overlapping cycles are prevented only by the sync engine's guard
  (a tick that finds a cycle running does nothing and the next tick retries)
- stopping the scheduler never cancels a cycle that is already running
"""

from __future__ import annotations

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .sync import SyncEngine

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "vault-cache-refresh"


class RefreshScheduler:
    """Drives ``SyncEngine.sync(full_build=False)`` on a fixed interval."""

    def __init__(self, engine: SyncEngine) -> None:
        """Initialize refresh scheduler.

        Args:
            engine: Sync engine to refresh through
        """
        self.engine = engine
        self.scheduler: AsyncIOScheduler | None = None
        self.interval_ms: int | None = None
        self._running = False
        self._cycles: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._running

    async def start(self, interval_ms: int) -> None:
        """Start ticking every ``interval_ms`` milliseconds.

        Idempotent - a second call while running logs a warning and keeps the
        existing schedule.

        Args:
            interval_ms: Refresh cadence in milliseconds

        Raises:
            ValueError: If interval_ms is not positive
        """
        if self._running:
            logger.warning("Periodic refresh is already running.")
            return
        if interval_ms <= 0:
            raise ValueError(f"Refresh interval must be positive, got {interval_ms}ms")

        # A fresh scheduler per start so stop/start cycles bind to the running loop
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self.scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=interval_ms / 1000),
            id=REFRESH_JOB_ID,
            name="Vault cache refresh",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.start()
        self.interval_ms = interval_ms
        self._running = True
        logger.info(f"Vault cache periodic refresh scheduled every {interval_ms / 60000:g} minutes.")

    async def stop(self) -> None:
        """Stop future ticks.

        Safe to call any number of times, including during shutdown. A refresh
        cycle that is already running is left to finish.
        """
        if not self._running:
            logger.info("Periodic cache refresh was not running.")
            return

        if self.scheduler is not None:
            self.scheduler.shutdown(wait=False)
        self.scheduler = None
        self._running = False
        logger.info("Stopped periodic cache refresh.")

    @property
    def pending_cycles(self) -> set[asyncio.Task]:
        """Refresh cycles spawned by ticks that have not finished yet."""
        return set(self._cycles)

    async def _tick(self) -> None:
        if self.engine.building:
            logger.debug("Refresh tick skipped, a cycle is still running")
            return
        task = asyncio.create_task(self.engine.sync(full_build=False), name="vault-cache-refresh")
        self._cycles.add(task)
        task.add_done_callback(self._on_cycle_done)

    def _on_cycle_done(self, task: asyncio.Task) -> None:
        self._cycles.discard(task)
        if task.cancelled():
            logger.warning("Vault cache refresh cycle was cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Vault cache refresh cycle failed: {error}")
