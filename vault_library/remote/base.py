"""Protocols describing the remote document store the cache mirrors.

The cache depends only on these protocols, so tests and alternative backends
can provide their own store without touching the sync logic.
"""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable

from .models import DocumentMetadata
from .models import NoteJson


@runtime_checkable
class RemoteDocumentStore(Protocol):
    """Minimal read surface of the remote store."""

    async def list_directory(self, dir_path: str) -> list[str]:
        """List entry names in a directory; subdirectories end with ``/``."""
        ...

    async def get_content(self, file_path: str) -> NoteJson:
        """Fetch a document's content together with its stat."""
        ...


@runtime_checkable
class SupportsMetadata(Protocol):
    """Stores that can report a document's mtime without sending its content."""

    async def get_metadata(self, file_path: str) -> DocumentMetadata:
        """Fetch lightweight metadata for a document."""
        ...
