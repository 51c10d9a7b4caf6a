"""Response models for the Obsidian Local REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class NoteStat(BaseModel):
    """File statistics reported with a note (timestamps in epoch milliseconds)."""

    model_config = ConfigDict(extra="ignore")

    ctime: int = 0
    mtime: int
    size: int = 0


class NoteJson(BaseModel):
    """A note as returned with ``Accept: application/vnd.olrapi.note+json``."""

    model_config = ConfigDict(extra="ignore")

    content: str
    stat: NoteStat
    path: str = ""
    tags: list[str] = Field(default_factory=list)
    frontmatter: dict[str, Any] = Field(default_factory=dict)


class DirectoryListing(BaseModel):
    """Directory listing; subdirectory names end with ``/``."""

    model_config = ConfigDict(extra="ignore")

    files: list[str]


class DocumentMetadata(BaseModel):
    """Lightweight metadata read from response headers.

    ``mtime`` is ``None`` when the server did not report it, which forces the
    caller to fall back to a full content fetch.
    """

    mtime: int | None = None
    ctime: int | None = None
    size: int | None = None
