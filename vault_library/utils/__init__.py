"""Utility helpers for vault_library."""

from .paths import child_dir_path
from .paths import document_key
from .paths import encode_vault_path
from .paths import join_vault_path
from .paths import normalize_dir_path
from .retry import retry_with_delay

__all__ = [
    "child_dir_path",
    "document_key",
    "encode_vault_path",
    "join_vault_path",
    "normalize_dir_path",
    "retry_with_delay",
]
