"""
Unit tests for the retry helper.
"""

import pytest

from vault_library.errors import AuthError
from vault_library.errors import NotFoundError
from vault_library.errors import ServiceUnavailableError
from vault_library.errors import is_transient
from vault_library.utils.retry import retry_with_delay


class FlakyOperation:
    """Fails with the given errors in order, then returns 'ok'."""

    def __init__(self, *errors: Exception) -> None:
        self.errors = list(errors)
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return "ok"


@pytest.mark.unit
class TestRetryWithDelay:
    """Test retry_with_delay."""

    async def test_returns_first_success(self) -> None:
        """Test a succeeding operation runs once."""
        operation = FlakyOperation()

        result = await retry_with_delay(operation, operation_name="op", max_retries=3, delay_ms=0)

        assert result == "ok"
        assert operation.calls == 1

    async def test_retries_transient_errors(self) -> None:
        """Test transient failures are retried until success."""
        operation = FlakyOperation(NotFoundError("not yet"), ServiceUnavailableError("restarting"))

        result = await retry_with_delay(
            operation,
            operation_name="op",
            max_retries=3,
            delay_ms=0,
            should_retry=is_transient,
        )

        assert result == "ok"
        assert operation.calls == 3

    async def test_reraises_last_error_when_exhausted(self) -> None:
        """Test the final VaultError is re-raised with the attempt count."""
        operation = FlakyOperation(NotFoundError("a"), NotFoundError("b"), NotFoundError("c"))

        with pytest.raises(NotFoundError) as exc_info:
            await retry_with_delay(
                operation,
                operation_name="op",
                max_retries=2,
                delay_ms=0,
                should_retry=is_transient,
            )

        assert str(exc_info.value) == "b"
        assert exc_info.value.details["attempts"] == 2
        assert operation.calls == 2

    async def test_does_not_retry_when_predicate_rejects(self) -> None:
        """Test non-transient errors fail immediately."""
        operation = FlakyOperation(AuthError("bad key"))

        with pytest.raises(AuthError):
            await retry_with_delay(
                operation,
                operation_name="op",
                max_retries=5,
                delay_ms=0,
                should_retry=is_transient,
            )

        assert operation.calls == 1

    async def test_wraps_foreign_errors(self) -> None:
        """Test errors outside the taxonomy surface as ServiceUnavailableError."""
        operation = FlakyOperation(RuntimeError("boom"))

        with pytest.raises(ServiceUnavailableError, match="failed definitively after 1 attempt") as exc_info:
            await retry_with_delay(operation, operation_name="op", max_retries=1, delay_ms=0)

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_on_retry_callback(self) -> None:
        """Test on_retry receives each failed attempt number."""
        seen: list[int] = []
        operation = FlakyOperation(NotFoundError("a"), NotFoundError("b"))

        await retry_with_delay(
            operation,
            operation_name="op",
            max_retries=3,
            delay_ms=0,
            on_retry=lambda attempt, error: seen.append(attempt),
        )

        assert seen == [1, 2]

    async def test_rejects_zero_retries(self) -> None:
        with pytest.raises(ValueError):
            await retry_with_delay(FlakyOperation(), operation_name="op", max_retries=0, delay_ms=0)
