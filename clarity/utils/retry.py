"""
Retry utilities for handling rate limits and transient errors.
"""

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_TRANSIENT_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504, 529})


def is_transient_error(exception: BaseException) -> bool:
    """Check if an error is a timeout, connection problem or retryable HTTP status.

    Works for raw httpx errors and for SDK errors that expose ``status_code``.
    """
    if isinstance(exception, (TimeoutError, asyncio.TimeoutError, httpx.TransportError)):
        return True
    status_code = getattr(exception, "status_code", None)
    if isinstance(status_code, int) and status_code in _TRANSIENT_STATUS_CODES:
        return True
    if isinstance(exception, httpx.HTTPStatusError):
        return exception.response.status_code in _TRANSIENT_STATUS_CODES
    error_str = str(exception).lower()
    return (
        "overloaded" in error_str
        or "connection timeout" in error_str
        or "connection reset" in error_str
    )


def _is_rate_limit(exception: BaseException) -> bool:
    if getattr(exception, "status_code", None) == 429:
        return True
    message = str(exception).lower()
    return "rate limit" in message or "rate_limit" in message


def _retry_delay(
    exception: BaseException, attempt: int, initial_delay: float, backoff_factor: float
) -> float:
    """Honour a server-suggested wait ("retry in 12 seconds"), else back off exponentially."""
    suggested = re.search(r"(\d+)\s{0,10}seconds?", str(exception), re.IGNORECASE)
    if suggested:
        return float(suggested.group(1))
    return initial_delay * (backoff_factor**attempt)


async def run_with_retry(
    func: Callable[[], Awaitable[Any]],
    max_retries: int = 3,
    initial_delay: float = 5.0,
    backoff_factor: float = 2.0,
    retry_on_rate_limit: bool = True,
    operation: str = "LLM call",
) -> Any:
    """
    Execute an async function, retrying rate limit and transient errors.

    Args:
        func: Async function to execute (no parameters)
        max_retries: Maximum number of attempts
        initial_delay: Delay in seconds before the first retry
        backoff_factor: Multiplier applied to the delay after each attempt
        retry_on_rate_limit: Whether rate limit errors are retried
        operation: Label used in retry log lines

    Returns:
        Result from the function

    Raises:
        Exception: The last error once attempts run out, or any non-retryable error
    """
    if max_retries < 1:
        raise ValueError("max_retries must be at least 1")

    for attempt in range(1, max_retries + 1):
        try:
            return await func()
        except Exception as e:
            rate_limited = _is_rate_limit(e)
            retryable = retry_on_rate_limit if rate_limited else is_transient_error(e)
            if not retryable or attempt == max_retries:
                raise

            wait_time = _retry_delay(e, attempt - 1, initial_delay, backoff_factor)
            logger.warning(
                "%s failed with %s error (%s), attempt %d/%d, retrying in %.1fs",
                operation,
                "rate limit" if rate_limited else "transient",
                e,
                attempt,
                max_retries,
                wait_time,
            )
            await asyncio.sleep(wait_time)

    raise RuntimeError("unreachable")
