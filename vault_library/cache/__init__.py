"""In-memory vault cache.

This module provides all cache functionality for vault documents:
- Cache store and entry model
- Vault enumeration with cycle protection
- Full build and incremental refresh
- Proactive single-document updates
- Periodic refresh scheduling
- Search over cached content

Architecture: All business logic in library, daemon provides thin HTTP wrappers.
"""

# Services
from .lister import VaultLister
from .scheduler import RefreshScheduler
from .service import VaultCacheService
from .store import CacheStore
from .sync import SyncEngine
from .updater import ProactiveUpdater

# Models
from .models import CacheEntry
from .models import CacheEntryResponse
from .models import CacheEntrySummary
from .models import CacheStatus
from .models import MatchContext
from .models import SearchHit
from .models import SearchResults
from .models import SyncResult

__all__ = [
    # Services
    "VaultCacheService",
    "CacheStore",
    "VaultLister",
    "SyncEngine",
    "ProactiveUpdater",
    "RefreshScheduler",
    # Models
    "CacheEntry",
    "CacheEntrySummary",
    "CacheEntryResponse",
    "CacheStatus",
    "SyncResult",
    "MatchContext",
    "SearchHit",
    "SearchResults",
]
