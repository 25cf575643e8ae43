"""
Retry utilities for handling rate limits and transient HTTP errors.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# HTTP status codes that represent transient errors worth retrying.
# All other status codes (400, 401, 404, 422, ...) are permanent.
_TRANSIENT_STATUS_CODES: frozenset[int] = frozenset({
    408,  # Request timeout
    425,  # Too early
    429,  # Rate limited
    500,  # Internal server error
    502,  # Bad gateway
    503,  # Service unavailable
    504,  # Gateway timeout
})


def is_transient_http_error(exception: BaseException) -> bool:
    """Check if an httpx error is transient and worth retrying.

    Timeouts and connection-level failures are transient, as are
    responses with a status code in the transient set.
    """
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in _TRANSIENT_STATUS_CODES
    if isinstance(exception, (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    return isinstance(exception, (TimeoutError, asyncio.TimeoutError))


def _retry_after_seconds(exception: BaseException) -> float | None:
    """Read a numeric Retry-After header from a rate-limited response."""
    if not isinstance(exception, httpx.HTTPStatusError):
        return None
    header = exception.response.headers.get("retry-after")
    if header is None:
        return None
    try:
        return max(float(header), 0.0)
    except ValueError:
        return None


async def run_with_retry(
    func: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    max_delay: float = 30.0,
) -> Any:
    """
    Execute an async function with retry logic for transient HTTP errors.

    Args:
        func: Async function to execute (no parameters)
        max_retries: Maximum number of attempts (including the first one)
        initial_delay: Initial delay in seconds before first retry
        backoff_factor: Multiplier for delay between retries
        max_delay: Upper bound for a single wait

    Returns:
        Result from the function

    Raises:
        Exception: The last error if attempts are exhausted or the error is permanent
    """
    for attempt in range(max_retries):
        try:
            return await func()
        except Exception as e:
            if not is_transient_http_error(e) or attempt >= max_retries - 1:
                raise

            wait_time = _retry_after_seconds(e)
            if wait_time is None:
                wait_time = initial_delay * (backoff_factor**attempt)
            wait_time = min(wait_time, max_delay)

            logger.warning(
                "Transient HTTP error detected (%s). Attempt %s/%s. Waiting %.1f seconds before retry...",
                e,
                attempt + 1,
                max_retries,
                wait_time,
            )
            await asyncio.sleep(wait_time)

    raise ValueError(f"max_retries must be at least 1, got {max_retries}")
