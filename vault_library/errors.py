"""Error taxonomy for vault_library.

Every failure that crosses the remote-store boundary is raised as a
``VaultError`` subclass carrying an ``ErrorCode``. Callers branch on the class
(or on ``code``) rather than on HTTP status or exception text.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Failure kinds the cache and daemon know how to interpret."""

    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    VALIDATION_ERROR = "validation_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"


class VaultError(Exception):
    """Base exception for vault operations."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}

    def __str__(self) -> str:
        return self.message


class NotFoundError(VaultError):
    """The requested document or directory does not exist (possibly yet)."""

    code = ErrorCode.NOT_FOUND


class ServiceUnavailableError(VaultError):
    """The remote store is unreachable or temporarily refusing requests."""

    code = ErrorCode.SERVICE_UNAVAILABLE


class ValidationError(VaultError):
    """A request was rejected as malformed, or a response could not be parsed."""

    code = ErrorCode.VALIDATION_ERROR


class AuthError(VaultError):
    """The API key was rejected."""

    code = ErrorCode.UNAUTHORIZED


class ForbiddenError(VaultError):
    """The API key lacks permission for the operation."""

    code = ErrorCode.FORBIDDEN


class ConfigurationError(VaultError):
    """Required configuration is missing or invalid."""

    code = ErrorCode.CONFIGURATION_ERROR


class InternalError(VaultError):
    """Unexpected or unclassified failure."""

    code = ErrorCode.INTERNAL_ERROR


class ListingError(VaultError):
    """Enumerating the vault root failed; a sync cycle cannot proceed.

    The code of the underlying failure is preserved so callers can still tell
    an unreachable store from an authentication problem.
    """

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.code = code


def is_not_found(error: BaseException) -> bool:
    """Check whether ``error`` is a NotFound failure."""
    return isinstance(error, VaultError) and error.code == ErrorCode.NOT_FOUND


def is_transient(error: BaseException) -> bool:
    """Check whether ``error`` is worth retrying.

    NotFound counts as transient because the REST API is eventually consistent
    right after a write; ServiceUnavailable covers restarts and network blips.
    """
    return isinstance(error, VaultError) and error.code in (
        ErrorCode.NOT_FOUND,
        ErrorCode.SERVICE_UNAVAILABLE,
    )
