"""Enumeration of every document path in the vault.

The traversal runs on an explicit stack with a visited-set of normalized
directory paths, so a malformed or cyclic listing (a directory reporting
itself or an ancestor as a child, or the same directory listed twice) costs
one warning instead of unbounded recursion.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..errors import ErrorCode
from ..errors import ListingError
from ..errors import VaultError
from ..errors import is_not_found
from ..remote.base import RemoteDocumentStore
from ..utils.paths import child_dir_path
from ..utils.paths import join_vault_path
from ..utils.paths import normalize_dir_path

logger = logging.getLogger(__name__)


class VaultLister:
    """Lists all cacheable documents in the remote store."""

    def __init__(
        self,
        remote: RemoteDocumentStore,
        document_suffixes: Iterable[str] = (".md",),
    ) -> None:
        """Initialize lister.

        Args:
            remote: Store to enumerate
            document_suffixes: Lower-case file suffixes treated as documents
        """
        self.remote = remote
        self.document_suffixes = tuple(s.lower() for s in document_suffixes)

    def is_document(self, name: str) -> bool:
        """Check whether a file entry is a cacheable document."""
        return name.lower().endswith(self.document_suffixes)

    async def list(self, root: str = "/") -> set[str]:
        """Enumerate every document under ``root``.

        A subdirectory that no longer exists is an empty branch. Any other
        failure below the root is logged and that branch contributes nothing.

        Args:
            root: Directory to start from ("/" for the whole vault)

        Returns:
            Vault-relative document paths (no leading slash)

        Raises:
            ListingError: If the root itself cannot be listed
        """
        root_dir = normalize_dir_path(root)
        visited: set[str] = set()
        documents: set[str] = set()
        pending = [root_dir]

        while pending:
            dir_path = pending.pop()

            if dir_path in visited:
                logger.warning(f"Cycle detected or directory already visited during vault scan: {dir_path}. Skipping.")
                continue
            visited.add(dir_path)

            try:
                entries = await self.remote.list_directory(dir_path)
            except Exception as e:
                if dir_path == root_dir:
                    code = e.code if isinstance(e, VaultError) else ErrorCode.INTERNAL_ERROR
                    logger.error(f"Failed to list vault root {root_dir}: {e}")
                    raise ListingError(
                        f"Failed to list directory during vault scan: {root_dir}: {e}",
                        code=code,
                        details={"dir_path": root_dir},
                    ) from e
                if is_not_found(e):
                    logger.warning(f"Directory not found during vault scan, skipping: {dir_path}")
                else:
                    logger.error(f"Failed to list directory during vault scan, skipping branch {dir_path}: {e}")
                continue

            # Reverse so the stack pops subdirectories in listing order
            for entry in reversed(entries):
                if entry.endswith("/"):
                    pending.append(child_dir_path(dir_path, entry))
                elif self.is_document(entry):
                    documents.add(join_vault_path(dir_path, entry))

        logger.debug(f"Vault scan of {root_dir} found {len(documents)} documents in {len(visited)} directories")
        return documents
