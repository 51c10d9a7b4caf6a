"""API models for vaultd.

Cache models live in vault_library.cache and are re-exported by routers
directly; this package holds daemon-only responses.
"""

from .responses import NotifyResponse
from .responses import StatusResponse

__all__ = [
    "NotifyResponse",
    "StatusResponse",
]
