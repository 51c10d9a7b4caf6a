"""Remote document store access.

Public Interface:
    - RemoteDocumentStore / SupportsMetadata: Protocols the cache depends on
    - ObsidianRestClient: httpx implementation for the Obsidian Local REST API
    - NoteJson, NoteStat, DocumentMetadata, DirectoryListing: Response models
"""

from .base import RemoteDocumentStore
from .base import SupportsMetadata
from .client import ObsidianRestClient
from .models import DirectoryListing
from .models import DocumentMetadata
from .models import NoteJson
from .models import NoteStat

__all__ = [
    "RemoteDocumentStore",
    "SupportsMetadata",
    "ObsidianRestClient",
    "DirectoryListing",
    "DocumentMetadata",
    "NoteJson",
    "NoteStat",
]
