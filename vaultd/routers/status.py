"""Status router for vaultd API.

Provides health check and status information.
"""

import logging
import time
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from vault_library.cache import VaultCacheService
from vault_library.config import VaultSettings

from .. import __version__
from ..dependencies import get_optional_cache_service
from ..dependencies import get_settings
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
async def get_status(
    settings: Annotated[VaultSettings, Depends(get_settings)],
    service: Annotated[VaultCacheService | None, Depends(get_optional_cache_service)],
) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status information including version, uptime and cache readiness
    """
    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        obsidian_base_url=settings.obsidian_base_url,
        cache_enabled=service is not None,
        cache_ready=service.is_ready() if service is not None else False,
    )


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
