"""Vault path helpers.

Vault paths are posix-style and vault-relative. Documents are keyed without a
leading slash (``Folder/Note.md``); directories are tracked in normalized form
with a leading slash (``/Folder``) so that ``""``, ``"/"`` and ``"."`` all
name the root.
"""

from __future__ import annotations

import posixpath
from urllib.parse import quote


def normalize_dir_path(dir_path: str) -> str:
    """Normalize a directory path for visited-set bookkeeping.

    Args:
        dir_path: Directory path in any of the accepted spellings

    Returns:
        Normalized path with a leading slash and no trailing slash

    Example:
        >>> normalize_dir_path("")
        '/'
        >>> normalize_dir_path("Notes/Daily/")
        '/Notes/Daily'
        >>> normalize_dir_path("/Notes/./Daily/../Daily")
        '/Notes/Daily'
    """
    stripped = dir_path.strip()
    if stripped in ("", "/", "."):
        return "/"
    return posixpath.normpath("/" + stripped.strip("/"))


def child_dir_path(dir_path: str, entry: str) -> str:
    """Resolve a subdirectory entry against its normalized parent.

    Example:
        >>> child_dir_path("/Notes", "Daily/")
        '/Notes/Daily'
        >>> child_dir_path("/Notes", "./")
        '/Notes'
    """
    return normalize_dir_path(posixpath.join(dir_path, entry))


def document_key(path: str) -> str:
    """Turn a document path into its cache key.

    Example:
        >>> document_key("/Notes/../Notes/Note.md")
        'Notes/Note.md'
        >>> document_key("Note.md")
        'Note.md'
    """
    return posixpath.normpath("/" + path.strip().lstrip("/")).lstrip("/")


def join_vault_path(dir_path: str, entry: str) -> str:
    """Join a normalized directory path and a file entry into a cache key.

    Example:
        >>> join_vault_path("/", "Note.md")
        'Note.md'
        >>> join_vault_path("/Notes", "Daily.md")
        'Notes/Daily.md'
    """
    return document_key(posixpath.join(dir_path, entry))


def encode_vault_path(file_path: str) -> str:
    """Encode a vault-relative path for use in a ``/vault`` URL.

    Each path component is percent-encoded individually; separators are kept.

    Returns:
        Encoded path with a leading slash, or an empty string for the root

    Example:
        >>> encode_vault_path("Notes/My File.md")
        '/Notes/My%20File.md'
        >>> encode_vault_path("/")
        ''
    """
    trimmed = file_path.strip().strip("/")
    if not trimmed:
        return ""
    return "/" + "/".join(quote(part, safe="") for part in trimmed.split("/"))


def folder_prefix(path: str | None) -> str:
    """Turn a folder filter into a key prefix that stays inside that folder.

    Example:
        >>> folder_prefix("/Notes/")
        'Notes/'
        >>> folder_prefix("/")
        ''
    """
    stripped = path.strip().strip("/") if path else ""
    return stripped + "/" if stripped else ""
