"""Thin HTTP wrapper around vault_library.cache.

Architecture: This router contains ONLY HTTP handling.
All business logic is in vault_library.cache.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query

from vault_library.cache import CacheEntryResponse
from vault_library.cache import CacheEntrySummary
from vault_library.cache import CacheStatus
from vault_library.cache import SearchResults
from vault_library.cache import SyncResult
from vault_library.cache import VaultCacheService
from vault_library.errors import ValidationError
from vault_library.utils.paths import document_key
from vault_library.utils.paths import folder_prefix

from ..dependencies import get_cache_service
from ..dependencies import get_optional_cache_service
from ..models import NotifyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


# =============================================================================
# Status and Read Endpoints
# =============================================================================


@router.get("/status", response_model=CacheStatus)
async def get_cache_status(
    service: Annotated[VaultCacheService | None, Depends(get_optional_cache_service)],
) -> CacheStatus:
    """Get readiness, size and refresh state of the vault cache."""
    if service is None:
        return CacheStatus(
            enabled=False,
            ready=False,
            building=False,
            total_entries=0,
            refresh_running=False,
        )
    return service.get_status()


@router.get("/entries", response_model=list[CacheEntrySummary])
async def list_cache_entries(
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
    path_prefix: str | None = Query(None, description="Only list documents in this folder"),
) -> list[CacheEntrySummary]:
    """List cached documents without their content."""
    prefix = folder_prefix(path_prefix)
    return [
        CacheEntrySummary(path=path, mtime=entry.mtime, size=entry.size)
        for path, entry in sorted(service.get_all_entries().items())
        if path.startswith(prefix)
    ]


@router.get("/entries/{path:path}", response_model=CacheEntryResponse)
async def get_cache_entry(
    path: str,
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
) -> CacheEntryResponse:
    """Get one cached document by vault-relative path."""
    entry = service.get_entry(path)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Document not cached: {path}")
    return CacheEntryResponse(path=path, mtime=entry.mtime, size=entry.size, content=entry.content)


@router.get("/search", response_model=SearchResults)
async def search_cache(
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
    query: str = Query(..., min_length=1, description="Text or regex to search for"),
    regex: bool = Query(False, description="Treat query as a regular expression"),
    case_sensitive: bool = Query(False, description="Match case exactly"),
    path_prefix: str | None = Query(None, description="Only search documents in this folder"),
    context_length: int = Query(100, ge=0, le=2000, description="Characters of context around each match"),
    modified_since: int | None = Query(None, description="Only documents modified at or after (epoch ms)"),
    modified_until: int | None = Query(None, description="Only documents modified at or before (epoch ms)"),
    max_matches_per_file: int | None = Query(None, ge=1, description="Cap on snippets returned per document"),
    page: int = Query(1, ge=1, description="1-based page of results"),
    page_size: int = Query(50, ge=1, le=500, description="Documents per page"),
) -> SearchResults:
    """Search cached vault content."""
    if not service.is_ready():
        raise HTTPException(status_code=503, detail="Vault cache is not ready yet")
    try:
        return service.search(
            query,
            use_regex=regex,
            case_sensitive=case_sensitive,
            path_prefix=path_prefix,
            context_length=context_length,
            modified_since=modified_since,
            modified_until=modified_until,
            max_matches_per_file=max_matches_per_file,
            page=page,
            page_size=page_size,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# =============================================================================
# Sync Endpoints
# =============================================================================


@router.post("/build", response_model=SyncResult)
async def build_cache(
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
    force: bool = Query(False, description="Rebuild even if the cache is already built"),
) -> SyncResult:
    """Run a full build (the initial build, or a forced rebuild)."""
    if service.is_ready() and not force:
        raise HTTPException(status_code=409, detail="Vault cache is already built; pass force=true to rebuild")
    try:
        result = await service.engine.sync(full_build=True) if force else await service.build_initial()
    except Exception as exc:
        logger.error(f"Failed to build vault cache: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    if result is None:
        raise HTTPException(status_code=409, detail="A cache build or refresh is already running")
    return result


@router.post("/refresh", response_model=SyncResult)
async def refresh_cache(
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
) -> SyncResult:
    """Run one incremental refresh now."""
    try:
        result = await service.refresh()
    except Exception as exc:
        logger.error(f"Failed to refresh vault cache: {exc}")
        raise HTTPException(status_code=500, detail="Internal server error") from exc
    if result is None:
        raise HTTPException(status_code=409, detail="A cache build or refresh is already running")
    return result


@router.post("/notify/{path:path}", response_model=NotifyResponse)
async def notify_document_changed(
    path: str,
    service: Annotated[VaultCacheService, Depends(get_cache_service)],
) -> NotifyResponse:
    """Resynchronize one document after an external write or delete."""
    await service.notify_changed(path)
    key = document_key(path)
    entry = service.get_entry(key)
    return NotifyResponse(path=key, cached=entry is not None, mtime=entry.mtime if entry else None)
