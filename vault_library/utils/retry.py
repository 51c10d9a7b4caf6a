"""Retry helper for remote operations.

Contract:
- Inputs: A zero-argument coroutine factory and retry policy
- Outputs: The operation's result
- Side Effects: Sleeps between attempts; logs retries and final failure
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from typing import TypeVar

from ..errors import ServiceUnavailableError
from ..errors import VaultError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_with_delay(
    operation: Callable[[], Awaitable[T]],
    *,
    operation_name: str,
    max_retries: int,
    delay_ms: int,
    should_retry: Callable[[BaseException], bool] | None = None,
    on_retry: Callable[[int, BaseException], None] | None = None,
) -> T:
    """Run ``operation`` up to ``max_retries`` times with a fixed delay.

    A failed attempt is retried only while attempts remain and
    ``should_retry(error)`` is true (every error is retried when no predicate
    is given). ``VaultError`` failures are re-raised as-is so callers can still
    branch on their kind; anything else is wrapped in
    ``ServiceUnavailableError``.

    Args:
        operation: Factory returning a fresh awaitable for each attempt
        operation_name: Name used in log messages
        max_retries: Total number of attempts (at least 1)
        delay_ms: Delay between attempts in milliseconds
        should_retry: Predicate deciding whether an error is retryable
        on_retry: Called with (attempt, error) instead of the default log line

    Returns:
        Result of the first successful attempt

    Raises:
        VaultError: The last error once retries are exhausted or not allowed
        ValueError: If max_retries is less than 1

    Example:
        >>> await retry_with_delay(
        ...     lambda: client.get_content("Note.md"),
        ...     operation_name="getContent",
        ...     max_retries=3,
        ...     delay_ms=300,
        ...     should_retry=is_transient,
        ... )
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")

    attempt = 0
    while True:
        attempt += 1
        try:
            return await operation()
        except Exception as error:
            retryable = should_retry(error) if should_retry is not None else True
            if attempt < max_retries and retryable:
                if on_retry is not None:
                    on_retry(attempt, error)
                else:
                    logger.warning(
                        f"Operation '{operation_name}' failed on attempt {attempt} of {max_retries}: "
                        f"{error}. Retrying in {delay_ms}ms..."
                    )
                await asyncio.sleep(delay_ms / 1000)
                continue

            logger.debug(f"Operation '{operation_name}' failed definitively after {attempt} attempt(s): {error}")
            if isinstance(error, VaultError):
                error.details.setdefault("attempts", attempt)
                raise
            raise ServiceUnavailableError(
                f"Operation '{operation_name}' failed definitively after {attempt} attempt(s). Last error: {error}",
                details={"attempts": attempt, "original_error": type(error).__name__},
            ) from error
