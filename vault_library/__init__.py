"""Vault library layer.

This is the business logic layer behind vaultd (transport): an in-memory
mirror of an Obsidian vault kept in sync through the Local REST API.

Public Interface:
    Modules:
    - cache: Cache store, sync engine, proactive updates, refresh scheduling
    - remote: REST API client and store protocols
    - config: Configuration loading
    - storage: Config and log locations
    - errors: Error taxonomy
"""

# Re-export key types for convenience
from .cache import CacheEntry
from .cache import VaultCacheService
from .remote import ObsidianRestClient

__all__ = [
    "CacheEntry",
    "ObsidianRestClient",
    "VaultCacheService",
]
