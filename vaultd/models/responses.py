"""Response models for vaultd API."""

from pydantic import Field

from vault_library.models.base import CamelCaseModel


class StatusResponse(CamelCaseModel):
    """Response for daemon status.

    Attributes:
        status: Status string (e.g., 'running')
        version: Daemon version
        uptime_seconds: Uptime in seconds
        obsidian_base_url: REST API the cache mirrors
        cache_enabled: Whether the vault cache is enabled
        cache_ready: Whether the initial cache build has completed
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="Daemon version")
    uptime_seconds: float = Field(..., description="Uptime in seconds")
    obsidian_base_url: str = Field(..., description="Obsidian REST API base URL")
    cache_enabled: bool = Field(..., description="Whether the vault cache is enabled")
    cache_ready: bool = Field(..., description="Whether the vault cache is ready")


class NotifyResponse(CamelCaseModel):
    """Cache state of a document after a change notification.

    Attributes:
        path: Vault-relative path that was resynchronized
        cached: Whether the document is cached after the update
        mtime: Cached modification time, if cached
    """

    path: str = Field(..., description="Vault-relative document path")
    cached: bool = Field(..., description="Whether the document is now cached")
    mtime: int | None = Field(default=None, description="Cached modification time in epoch milliseconds")
