"""Single-document cache updates after an external write."""

from __future__ import annotations

import logging

from ..errors import is_not_found
from ..errors import is_transient
from ..remote.base import RemoteDocumentStore
from ..utils.paths import document_key
from ..utils.retry import retry_with_delay
from .models import CacheEntry
from .store import CacheStore

logger = logging.getLogger(__name__)


class ProactiveUpdater:
    """Re-reads one document right after a caller has changed it.

    Runs outside the sync engine's single-flight guard. If it races a running
    cycle, whichever writes the entry last wins; both read the same remote
    document.
    """

    def __init__(
        self,
        remote: RemoteDocumentStore,
        cache: CacheStore,
        *,
        max_retries: int = 3,
        retry_delay_ms: int = 300,
    ) -> None:
        """Initialize updater.

        Args:
            remote: Store to read the document from
            cache: Store to update
            max_retries: Attempts before giving up on a transient failure
            retry_delay_ms: Delay between attempts
        """
        self.remote = remote
        self.cache = cache
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms

    async def notify_changed(self, path: str) -> None:
        """Resynchronize ``path`` immediately.

        Fetched content replaces the cached entry without an mtime check. A
        NotFound that survives the retries means the document was deleted, so
        the entry is dropped. Any other failure keeps the previous entry.
        Never raises.

        Args:
            path: Vault-relative path the caller just wrote or deleted
        """
        key = document_key(path)
        logger.debug(f"Proactively updating cache for document: {key}")

        try:
            note = await retry_with_delay(
                lambda: self.remote.get_content(key),
                operation_name="proactiveCacheUpdate",
                max_retries=self.max_retries,
                delay_ms=self.retry_delay_ms,
                should_retry=is_transient,
            )
        except Exception as e:
            if is_not_found(e):
                if self.cache.delete(key):
                    logger.info(f"Proactively removed deleted document from cache: {key}")
                else:
                    logger.debug(f"Document not found and not cached, nothing to remove: {key}")
                return
            logger.error(f"Failed to proactively update cache for {key}, keeping previous entry: {e}")
            return

        self.cache.set(key, CacheEntry(content=note.content, mtime=note.stat.mtime))
        logger.info(f"Proactively updated cache for: {key}")
