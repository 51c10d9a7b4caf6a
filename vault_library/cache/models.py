"""Cache models for the in-memory vault mirror.

This module contains all data models for cache management including:
- The cache entry held per document
- Sync cycle results
- Status and search models for API responses
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import Field

from ..models.base import CamelCaseModel

# =============================================================================
# Cache Entry
# =============================================================================


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Last known synchronized state of one remote document.

    Entries are immutable; a change on the remote side replaces the entry
    wholesale.
    """

    content: str
    mtime: int  # epoch milliseconds

    @property
    def size(self) -> int:
        """Content length in characters."""
        return len(self.content)


# =============================================================================
# Sync Results
# =============================================================================


class SyncResult(CamelCaseModel):
    """Outcome of one build or refresh cycle."""

    full_build: bool = Field(
        ...,
        description="Whether this was a full build (True) or an incremental refresh",
    )
    success: bool = Field(
        ...,
        description="False when the vault listing failed and the cycle was aborted",
    )
    added: int = Field(0, description="Documents added to the cache")
    updated: int = Field(0, description="Documents replaced because their mtime advanced")
    removed: int = Field(0, description="Documents removed because they vanished from the vault")
    failed_paths: list[str] = Field(
        default_factory=list,
        description="Documents skipped because fetching them failed",
    )
    total_cached: int = Field(0, description="Cache size after the cycle")
    started_at: datetime = Field(..., description="When the cycle started")
    duration_seconds: float = Field(0.0, description="Wall-clock duration of the cycle")
    error: str | None = Field(None, description="Listing error that aborted the cycle")

    @property
    def change_count(self) -> int:
        """Total number of cache mutations applied."""
        return self.added + self.updated + self.removed

    def summary(self) -> str:
        """Human-readable summary."""
        kind = "Initial vault cache build" if self.full_build else "Vault cache refresh"
        if not self.success:
            return f"{kind} failed after {self.duration_seconds:.2f}s: {self.error}"
        return (
            f"{kind} completed in {self.duration_seconds:.2f}s. "
            f"Added: {self.added}, Updated: {self.updated}, Removed: {self.removed}, "
            f"Failed: {len(self.failed_paths)}. Total cached: {self.total_cached}."
        )


# =============================================================================
# Status and Search Models (API responses)
# =============================================================================


class CacheStatus(CamelCaseModel):
    """Point-in-time status of the vault cache."""

    enabled: bool = Field(True, description="Whether the cache is enabled")
    ready: bool = Field(..., description="Whether a full build has completed")
    building: bool = Field(..., description="Whether a build or refresh cycle is running")
    total_entries: int = Field(..., description="Number of cached documents")
    refresh_running: bool = Field(..., description="Whether periodic refresh is scheduled")
    refresh_interval_ms: int | None = Field(None, description="Periodic refresh cadence")
    last_sync: SyncResult | None = Field(None, description="Result of the most recent cycle")


class CacheEntrySummary(CamelCaseModel):
    """Cached document without its content."""

    path: str = Field(..., description="Vault-relative document path")
    mtime: int = Field(..., description="Modification time in epoch milliseconds")
    size: int = Field(..., description="Content length in characters")


class CacheEntryResponse(CacheEntrySummary):
    """Cached document including its content."""

    content: str = Field(..., description="Document content")


class MatchContext(CamelCaseModel):
    """One match inside a document."""

    context: str = Field(..., description="Snippet surrounding the match")
    match_text: str = Field(..., description="Matched text")
    position: int = Field(..., description="Offset of the match within the snippet")


class SearchHit(CamelCaseModel):
    """All matches found in one document."""

    path: str = Field(..., description="Vault-relative document path")
    mtime: int = Field(..., description="Modification time in epoch milliseconds")
    match_count: int = Field(..., description="Number of matches in the document")
    matches: list[MatchContext] = Field(default_factory=list, description="Match snippets")


class SearchResults(CamelCaseModel):
    """Result of searching the cached vault content."""

    query: str = Field(..., description="Query as given")
    total_files: int = Field(..., description="Documents with at least one match")
    total_matches: int = Field(..., description="Matches across all documents")
    searched_files: int = Field(..., description="Documents scanned")
    page: int = Field(1, description="1-based page of hits returned")
    page_size: int | None = Field(None, description="Hits per page; null when unpaged")
    results: list[SearchHit] = Field(
        default_factory=list, description="Hits on the requested page, most recently modified first"
    )
