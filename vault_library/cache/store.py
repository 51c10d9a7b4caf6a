"""In-memory table of cached vault documents."""

from __future__ import annotations

from collections.abc import Iterator
from collections.abc import Mapping
from types import MappingProxyType

from .models import CacheEntry


class CacheStore:
    """Mapping from vault-relative path to ``CacheEntry``.

    Paths are case-sensitive and looked up exactly. The store does no locking:
    sync cycles are serialized by ``SyncEngine`` and proactive updates write
    through unguarded (last write wins).
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, path: str) -> CacheEntry | None:
        return self._entries.get(path)

    def set(self, path: str, entry: CacheEntry) -> CacheEntry | None:
        """Insert or replace an entry.

        Returns:
            The entry that was replaced, if any
        """
        previous = self._entries.get(path)
        self._entries[path] = entry
        return previous

    def delete(self, path: str) -> bool:
        """Remove an entry.

        Returns:
            True if the path was cached
        """
        return self._entries.pop(path, None) is not None

    def paths(self) -> set[str]:
        """Snapshot of the cached paths."""
        return set(self._entries)

    def view(self) -> Mapping[str, CacheEntry]:
        """Read-only live view of the whole table."""
        return MappingProxyType(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
