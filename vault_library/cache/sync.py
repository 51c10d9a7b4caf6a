"""Full build and incremental refresh of the vault cache.

One ``sync()`` call is one cycle: list the vault, drop cached documents that
vanished, then fetch documents that are new or whose mtime advanced. At most
one cycle runs at a time; a call made while another is running returns
``None`` without touching the remote store.

Contract:
- Inputs: Remote store, cache store, lister
- Outputs: SyncResult per completed cycle
- Side Effects: Mutates the cache store; network requests
"""

from __future__ import annotations

import logging
import time
from datetime import UTC
from datetime import datetime

from ..errors import ListingError
from ..errors import is_transient
from ..remote.base import RemoteDocumentStore
from ..remote.base import SupportsMetadata
from ..remote.models import NoteJson
from ..utils.retry import retry_with_delay
from .lister import VaultLister
from .models import CacheEntry
from .models import SyncResult
from .store import CacheStore

logger = logging.getLogger(__name__)


class SyncEngine:
    """Brings the cache store into agreement with the remote store."""

    def __init__(
        self,
        remote: RemoteDocumentStore,
        cache: CacheStore,
        lister: VaultLister,
        *,
        fetch_max_retries: int = 2,
        fetch_retry_delay_ms: int = 250,
    ) -> None:
        """Initialize sync engine.

        Args:
            remote: Store to read documents from
            cache: Store to write documents to
            lister: Enumerates remote document paths
            fetch_max_retries: Attempts per content fetch
            fetch_retry_delay_ms: Delay between content fetch attempts
        """
        self.remote = remote
        self.cache = cache
        self.lister = lister
        self.fetch_max_retries = fetch_max_retries
        self.fetch_retry_delay_ms = fetch_retry_delay_ms

        self._ready = False
        self._building = False
        self.last_result: SyncResult | None = None

    @property
    def ready(self) -> bool:
        """True once a full build has completed without a listing failure."""
        return self._ready

    @property
    def building(self) -> bool:
        """True while a build or refresh cycle is running."""
        return self._building

    async def sync(self, full_build: bool = False) -> SyncResult | None:
        """Run one build or refresh cycle.

        A full build clears readiness for its duration and sets it again only
        if the vault listing succeeds. A failed refresh leaves both the cache
        and readiness untouched. Per-document failures are logged and the
        document is skipped.

        Args:
            full_build: Run as the initial full build

        Returns:
            Cycle result, or None if another cycle was already running
        """
        kind = "build" if full_build else "refresh"
        if self._building:
            logger.warning(f"Vault cache {kind} requested while a cycle is in progress. Skipping.")
            return None

        # No await between the check above and this assignment
        self._building = True
        if full_build:
            self._ready = False

        started_at = datetime.now(UTC)
        start = time.monotonic()
        result = SyncResult(full_build=full_build, success=False, started_at=started_at)
        logger.info(f"Starting vault cache {kind}")

        try:
            try:
                remote_paths = await self.lister.list("/")
            except ListingError as e:
                logger.error(f"Vault cache {kind} aborted, listing failed. Cache may be incomplete: {e}")
                result.error = str(e)
                return result

            result.removed = self._remove_vanished(remote_paths)

            for path in sorted(remote_paths):
                try:
                    outcome = await self._sync_path(path)
                except Exception as e:
                    logger.error(f"Failed to process document during vault cache {kind}: {path}. Skipping. Error: {e}")
                    result.failed_paths.append(path)
                    continue
                if outcome == "added":
                    result.added += 1
                elif outcome == "updated":
                    result.updated += 1

            result.success = True
            if full_build:
                self._ready = True
            return result
        finally:
            self._building = False
            result.duration_seconds = time.monotonic() - start
            result.total_cached = len(self.cache)
            self.last_result = result
            logger.info(result.summary())

    def _remove_vanished(self, remote_paths: set[str]) -> int:
        removed = 0
        for path in self.cache.paths() - remote_paths:
            if self.cache.delete(path):
                removed += 1
                logger.debug(f"Removed deleted document from cache: {path}")
        return removed

    async def _sync_path(self, path: str) -> str | None:
        """Bring one document up to date.

        Returns:
            "added", "updated", or None when the cached entry was current
        """
        cached = self.cache.get(path)

        remote_mtime: int | None = None
        if isinstance(self.remote, SupportsMetadata):
            metadata = await self.remote.get_metadata(path)
            remote_mtime = metadata.mtime

        if remote_mtime is not None and cached is not None and cached.mtime >= remote_mtime:
            return None

        note = await self._fetch(path)

        # Without metadata the freshness check happens after the fetch
        if cached is not None and cached.mtime >= note.stat.mtime:
            return None

        self.cache.set(path, CacheEntry(content=note.content, mtime=note.stat.mtime))
        if cached is None:
            logger.debug(f"Added new document to cache: {path}")
            return "added"
        logger.debug(f"Updated modified document in cache: {path}")
        return "updated"

    async def _fetch(self, path: str) -> NoteJson:
        return await retry_with_delay(
            lambda: self.remote.get_content(path),
            operation_name="syncFetchContent",
            max_retries=self.fetch_max_retries,
            delay_ms=self.fetch_retry_delay_ms,
            should_retry=is_transient,
        )
