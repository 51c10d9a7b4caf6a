"""
Shared pytest fixtures for vaultd test suite.

Provides fixtures for:
- Temporary storage directories
- An in-memory fake of the Obsidian vault with call counters
- Settings and cache services wired to the fake
"""

import asyncio
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from vault_library.cache import VaultCacheService
from vault_library.config import VaultSettings
from vault_library.errors import NotFoundError
from vault_library.remote import DocumentMetadata
from vault_library.remote import NoteJson
from vault_library.remote import NoteStat
from vault_library.utils.paths import document_key
from vault_library.utils.paths import normalize_dir_path


class FakeVaultWithoutMetadata:
    """In-memory remote document store.

    Directories are derived from the stored file paths. ``listings`` overrides
    what a directory reports (used to simulate malformed or cyclic listings),
    and ``list_errors`` / ``content_errors`` map a path to an exception
    raised on access.
    """

    def __init__(self, files: dict[str, tuple[str, int]] | None = None) -> None:
        self.files: dict[str, tuple[str, int]] = dict(files or {})
        self.listings: dict[str, list[str]] = {}
        self.list_errors: dict[str, Exception] = {}
        self.content_errors: dict[str, Exception] = {}
        # Number of NotFound responses to return before a path becomes visible
        self.not_found_before_visible: dict[str, int] = {}
        self.list_gate: asyncio.Event | None = None

        self.list_calls: list[str] = []
        self.content_calls: list[str] = []

    def put(self, path: str, content: str, mtime: int) -> None:
        self.files[path] = (content, mtime)

    def remove(self, path: str) -> None:
        self.files.pop(path, None)

    def _children(self, dir_path: str) -> list[str] | None:
        prefix = "" if dir_path == "/" else dir_path.lstrip("/") + "/"
        entries: list[str] = []
        found = dir_path == "/"
        for path in sorted(self.files):
            if not path.startswith(prefix):
                continue
            found = True
            rest = path[len(prefix) :]
            head, sep, _ = rest.partition("/")
            entry = head + "/" if sep else head
            if entry not in entries:
                entries.append(entry)
        return entries if found else None

    async def list_directory(self, dir_path: str) -> list[str]:
        normalized = normalize_dir_path(dir_path)
        self.list_calls.append(normalized)
        if self.list_gate is not None:
            await self.list_gate.wait()
        if normalized in self.list_errors:
            raise self.list_errors[normalized]
        if normalized in self.listings:
            return list(self.listings[normalized])
        entries = self._children(normalized)
        if entries is None:
            raise NotFoundError(f"Obsidian API Not Found: {normalized}")
        return entries

    def _lookup(self, file_path: str) -> tuple[str, int]:
        key = document_key(file_path)
        remaining = self.not_found_before_visible.get(key, 0)
        if remaining > 0:
            self.not_found_before_visible[key] = remaining - 1
            raise NotFoundError(f"Obsidian API Not Found: {key}")
        if key not in self.files:
            raise NotFoundError(f"Obsidian API Not Found: {key}")
        return self.files[key]

    async def get_content(self, file_path: str) -> NoteJson:
        key = document_key(file_path)
        self.content_calls.append(key)
        if key in self.content_errors:
            raise self.content_errors[key]
        content, mtime = self._lookup(key)
        return NoteJson(
            content=content,
            path=key,
            stat=NoteStat(ctime=mtime, mtime=mtime, size=len(content)),
        )


class FakeVault(FakeVaultWithoutMetadata):
    """Fake vault that also answers lightweight metadata requests."""

    def __init__(self, files: dict[str, tuple[str, int]] | None = None) -> None:
        super().__init__(files)
        self.metadata_calls: list[str] = []

    async def get_metadata(self, file_path: str) -> DocumentMetadata:
        key = document_key(file_path)
        self.metadata_calls.append(key)
        if key not in self.files:
            raise NotFoundError(f"Obsidian API Not Found: {key}")
        content, mtime = self.files[key]
        return DocumentMetadata(mtime=mtime, ctime=mtime, size=len(content))


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Yields:
        Path to temporary directory that is cleaned up after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point VAULTD_HOME at a temporary directory.

    Args:
        temp_storage_dir: Temporary directory fixture
        monkeypatch: pytest monkeypatch fixture

    Returns:
        Path to temporary storage directory
    """
    monkeypatch.setenv("VAULTD_HOME", str(temp_storage_dir))
    monkeypatch.delenv("VAULTD_CONFIG_DIR", raising=False)
    monkeypatch.delenv("VAULTD_LOG_DIR", raising=False)
    return temp_storage_dir


@pytest.fixture
def fake_vault() -> FakeVault:
    """Vault with two notes at the root and one in a subfolder."""
    return FakeVault(
        {
            "Welcome.md": ("Welcome to the vault", 100),
            "Todo.md": ("- [ ] write tests", 200),
            "Projects/Alpha.md": ("Alpha project notes", 300),
        }
    )


@pytest.fixture
def settings() -> VaultSettings:
    """Settings with an API key and no retry delays."""
    return VaultSettings(
        obsidian_api_key="test-key",
        fetch_retry_delay_ms=0,
        proactive_retry_delay_ms=0,
    )


@pytest.fixture
def cache_service(fake_vault: FakeVault) -> VaultCacheService:
    """Cache service over the fake vault with no retry delays."""
    return VaultCacheService(
        fake_vault,
        fetch_retry_delay_ms=0,
        proactive_retry_delay_ms=0,
    )


@pytest.fixture
def make_vault():
    """Factory for fake vaults.

    Example:
        >>> def test_sync(make_vault):
        ...     vault = make_vault({"A.md": ("a", 100)})
        ...     bare = make_vault({"A.md": ("a", 100)}, metadata=False)
    """

    def _make(files: dict[str, tuple[str, int]] | None = None, metadata: bool = True) -> FakeVaultWithoutMetadata:
        return FakeVault(files) if metadata else FakeVaultWithoutMetadata(files)

    return _make
