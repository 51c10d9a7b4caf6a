"""Vault cache service.

One explicitly constructed instance owns the cache store and every component
that reads or writes it. Callers (the daemon, tool handlers, the startup and
shutdown sequences) only talk to this class.

Read methods (``get_entry``, ``get_all_entries``, ``is_ready``,
``is_building``) never raise. Readers are not isolated from a running cycle:
they may see some but not all of its changes applied.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from collections.abc import Mapping

from ..config.settings import VaultSettings
from ..remote.base import RemoteDocumentStore
from .lister import VaultLister
from .models import CacheEntry
from .models import CacheStatus
from .models import SearchResults
from .models import SyncResult
from .scheduler import RefreshScheduler
from .search import search_entries
from .store import CacheStore
from .sync import SyncEngine
from .updater import ProactiveUpdater

logger = logging.getLogger(__name__)


class VaultCacheService:
    """In-memory mirror of the vault's document content and mtimes."""

    def __init__(
        self,
        remote: RemoteDocumentStore,
        *,
        document_suffixes: Iterable[str] = (".md",),
        refresh_interval_ms: int | None = None,
        fetch_max_retries: int = 2,
        fetch_retry_delay_ms: int = 250,
        proactive_max_retries: int = 3,
        proactive_retry_delay_ms: int = 300,
    ) -> None:
        """Initialize vault cache service.

        Args:
            remote: Remote document store to mirror
            document_suffixes: File suffixes cached as documents
            refresh_interval_ms: Cadence used when periodic refresh starts after the background build
            fetch_max_retries: Attempts per content fetch during a cycle
            fetch_retry_delay_ms: Delay between those attempts
            proactive_max_retries: Attempts per proactive update
            proactive_retry_delay_ms: Delay between those attempts
        """
        self.remote = remote
        self.cache = CacheStore()
        self.lister = VaultLister(remote, document_suffixes)
        self.engine = SyncEngine(
            remote,
            self.cache,
            self.lister,
            fetch_max_retries=fetch_max_retries,
            fetch_retry_delay_ms=fetch_retry_delay_ms,
        )
        self.updater = ProactiveUpdater(
            remote,
            self.cache,
            max_retries=proactive_max_retries,
            retry_delay_ms=proactive_retry_delay_ms,
        )
        self.scheduler = RefreshScheduler(self.engine)
        self.refresh_interval_ms = refresh_interval_ms
        self._background: set[asyncio.Task] = set()
        self._closing = False
        logger.info("VaultCacheService initialized.")

    @classmethod
    def from_settings(cls, settings: VaultSettings, remote: RemoteDocumentStore) -> VaultCacheService:
        """Build a service configured from settings."""
        return cls(
            remote,
            document_suffixes=settings.document_suffixes,
            refresh_interval_ms=settings.refresh_interval_ms,
            fetch_max_retries=settings.fetch_max_retries,
            fetch_retry_delay_ms=settings.fetch_retry_delay_ms,
            proactive_max_retries=settings.proactive_max_retries,
            proactive_retry_delay_ms=settings.proactive_retry_delay_ms,
        )

    # =========================================================================
    # Build and refresh
    # =========================================================================

    async def build_initial(self) -> SyncResult | None:
        """Run the initial full build.

        No-op if the cache is already built or a cycle is running.

        Returns:
            Build result, or None if nothing was done
        """
        if self.engine.building:
            logger.warning("Cache build already in progress. Skipping.")
            return None
        if self.engine.ready:
            logger.info("Cache already built. Skipping.")
            return None
        return await self.engine.sync(full_build=True)

    async def refresh(self) -> SyncResult | None:
        """Run one incremental refresh now.

        Returns:
            Refresh result, or None if a cycle was already running
        """
        return await self.engine.sync(full_build=False)

    def start_background_build(self) -> asyncio.Task:
        """Spawn the initial build without waiting for it.

        Once the build finishes, periodic refresh starts if an interval was
        configured. The task's outcome is logged when it completes.

        Returns:
            The spawned task
        """
        logger.info("Triggering background vault cache build...")
        return self._spawn(self._build_then_schedule(), "vault-cache-build")

    async def _build_then_schedule(self) -> None:
        await self.build_initial()
        if self.refresh_interval_ms and not self._closing:
            await self.start_periodic_refresh(self.refresh_interval_ms)

    async def start_periodic_refresh(self, interval_ms: int | None = None) -> None:
        """Start periodic incremental refresh (idempotent).

        Args:
            interval_ms: Cadence; defaults to the configured interval

        Raises:
            ValueError: If no interval is given or configured
        """
        interval = interval_ms if interval_ms is not None else self.refresh_interval_ms
        if not interval:
            raise ValueError("No refresh interval given or configured")
        await self.scheduler.start(interval)

    async def stop_periodic_refresh(self) -> None:
        """Stop periodic refresh (idempotent); a running cycle is not cancelled."""
        await self.scheduler.stop()

    async def notify_changed(self, path: str) -> None:
        """Resynchronize one document after the caller wrote or deleted it."""
        await self.updater.notify_changed(path)

    # =========================================================================
    # Reads
    # =========================================================================

    def is_ready(self) -> bool:
        return self.engine.ready

    def is_building(self) -> bool:
        return self.engine.building

    def get_entry(self, path: str) -> CacheEntry | None:
        """Look up one document by exact vault-relative path."""
        return self.cache.get(path)

    def get_all_entries(self) -> Mapping[str, CacheEntry]:
        """Read-only live view of the whole cache."""
        return self.cache.view()

    @property
    def last_result(self) -> SyncResult | None:
        return self.engine.last_result

    def get_status(self) -> CacheStatus:
        """Snapshot of readiness, size and scheduling state."""
        return CacheStatus(
            ready=self.engine.ready,
            building=self.engine.building,
            total_entries=len(self.cache),
            refresh_running=self.scheduler.running,
            refresh_interval_ms=self.scheduler.interval_ms if self.scheduler.running else self.refresh_interval_ms,
            last_sync=self.engine.last_result,
        )

    def search(self, query: str, **options) -> SearchResults:
        """Search cached content; see ``search_entries`` for options.

        Raises:
            ValidationError: If the query is empty or an invalid regex
        """
        return search_entries(self.cache.view(), query, **options)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self, timeout: float | None = 10.0) -> None:
        """Stop refresh and wait for spawned build/refresh tasks.

        Tasks still running after ``timeout`` seconds are cancelled so that
        shutdown cannot hang on a slow vault.

        Args:
            timeout: Seconds to wait; None waits indefinitely
        """
        self._closing = True
        await self.stop_periodic_refresh()

        pending = self._background | self.scheduler.pending_cycles
        if not pending:
            return
        _, still_running = await asyncio.wait(pending, timeout=timeout)
        for task in still_running:
            logger.warning(f"Cancelling unfinished cache task at shutdown: {task.get_name()}")
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)

    def _spawn(self, coro, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=name)
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            logger.warning(f"Background task {task.get_name()} was cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Error occurred during background task {task.get_name()}: {error}")
            return
        logger.info(f"Background task {task.get_name()} finished; cache ready: {self.engine.ready}")
