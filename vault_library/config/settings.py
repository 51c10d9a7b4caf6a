"""Settings models for vaultd.

This module defines the configuration for the daemon transport layer and for
the vault cache that sits behind it.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class VaultSettings(BaseSettings):
    """Configuration for vaultd.

    Attributes:
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 8430)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        obsidian_base_url: Root URL of the Obsidian Local REST API
        obsidian_api_key: Bearer token for the REST API
        obsidian_verify_ssl: Verify TLS certificates of the REST API
        request_timeout_seconds: Timeout applied to every REST call
        cache_enabled: Build and serve the in-memory vault cache
        cache_refresh_interval_min: Minutes between incremental refreshes
        document_suffixes: File suffixes that are cached as documents

    Example:
        >>> settings = VaultSettings()
        >>> assert settings.port == 8430
        >>> assert settings.refresh_interval_ms == 600_000
    """

    model_config = SettingsConfigDict(
        env_prefix="VAULTD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8430
    log_level: str = "info"
    workers: int = 1

    obsidian_base_url: str = "http://127.0.0.1:27123"
    obsidian_api_key: str = ""
    obsidian_verify_ssl: bool = False
    request_timeout_seconds: float = 60.0

    cache_enabled: bool = True
    cache_refresh_interval_min: int = 10
    document_suffixes: list[str] = [".md"]

    # Retry behavior for content fetches inside a sync cycle
    fetch_max_retries: int = 2
    fetch_retry_delay_ms: int = 250

    # Retry behavior for single-path updates after an external write
    proactive_max_retries: int = 3
    proactive_retry_delay_ms: int = 300

    @field_validator("obsidian_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Drop a trailing slash so request paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("cache_refresh_interval_min", "fetch_max_retries", "proactive_max_retries")
    @classmethod
    def require_positive(cls, v: int) -> int:
        """Reject zero or negative counts and intervals.

        Args:
            v: Value to validate

        Returns:
            The value unchanged

        Raises:
            ValueError: If the value is not positive
        """
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("document_suffixes")
    @classmethod
    def normalize_suffixes(cls, v: list[str]) -> list[str]:
        """Lower-case suffixes and make sure each one starts with a dot."""
        return [s.lower() if s.startswith(".") else f".{s.lower()}" for s in v]

    @property
    def refresh_interval_ms(self) -> int:
        """Periodic refresh cadence in milliseconds."""
        return self.cache_refresh_interval_min * 60 * 1000
