"""
Unit tests for the error taxonomy.
"""

import pytest

from vault_library.errors import AuthError
from vault_library.errors import ErrorCode
from vault_library.errors import InternalError
from vault_library.errors import ListingError
from vault_library.errors import NotFoundError
from vault_library.errors import ServiceUnavailableError
from vault_library.errors import ValidationError
from vault_library.errors import is_not_found
from vault_library.errors import is_transient


@pytest.mark.unit
class TestErrorClassification:
    """Test error kind helpers."""

    def test_not_found_is_transient(self) -> None:
        assert is_not_found(NotFoundError("missing"))
        assert is_transient(NotFoundError("missing"))

    def test_service_unavailable_is_transient(self) -> None:
        error = ServiceUnavailableError("down")

        assert is_transient(error)
        assert not is_not_found(error)

    @pytest.mark.parametrize(
        "error",
        [AuthError("x"), ValidationError("x"), InternalError("x"), RuntimeError("x")],
    )
    def test_other_errors_are_not_transient(self, error: Exception) -> None:
        assert not is_transient(error)
        assert not is_not_found(error)

    def test_listing_error_keeps_underlying_code(self) -> None:
        """Test ListingError reports the code of the failure it wraps."""
        error = ListingError("root failed", code=ErrorCode.UNAUTHORIZED)

        assert error.code == ErrorCode.UNAUTHORIZED
        assert ListingError("root failed").code == ErrorCode.INTERNAL_ERROR

    def test_message_and_details(self) -> None:
        error = NotFoundError("gone", details={"url": "/vault/a.md"})

        assert str(error) == "gone"
        assert error.details == {"url": "/vault/a.md"}
        assert NotFoundError("gone").details == {}
