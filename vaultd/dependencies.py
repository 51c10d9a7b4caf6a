"""Shared dependency factories for FastAPI endpoints.

Services are created once by the application lifespan and stored on
``app.state``; these factories hand them to endpoints.
"""

from fastapi import HTTPException
from fastapi import Request

from vault_library.cache import VaultCacheService
from vault_library.config import VaultSettings


def get_settings(request: Request) -> VaultSettings:
    """Get the settings the daemon was started with.

    Returns:
        VaultSettings instance
    """
    return request.app.state.settings


def get_optional_cache_service(request: Request) -> VaultCacheService | None:
    """Get the vault cache service, or None when the cache is disabled.

    Returns:
        VaultCacheService instance or None
    """
    return getattr(request.app.state, "cache_service", None)


def get_cache_service(request: Request) -> VaultCacheService:
    """Get the vault cache service.

    Returns:
        VaultCacheService instance

    Raises:
        HTTPException: 503 if the cache is disabled or failed to start
    """
    service = get_optional_cache_service(request)
    if service is None:
        raise HTTPException(status_code=503, detail="Vault cache is disabled")
    return service
