"""
Bounded retry for calls to external services.

Only failures the caller classifies as transient (rate limiting) are retried;
everything else propagates on the first attempt.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Iterator, Optional, TypeVar

import httpx

from .constants import (
    HTTP_TOO_MANY_REQUESTS, RETRY_BACKOFF_FACTOR, RETRY_BASE_DELAY_S, RETRY_MAX_ATTEMPTS,
)

logger = logging.getLogger("mixing-mcp.retry")

T = TypeVar("T")


class CollaboratorError(Exception):
    """Failure reported by an external collaborator (narrative or extraction service)."""


class RateLimitedError(CollaboratorError):
    """Transient failure: the service asked us to slow down."""


def exponential_backoff(base: float = RETRY_BASE_DELAY_S,
                        factor: float = RETRY_BACKOFF_FACTOR) -> Iterator[float]:
    """Yield base, base*factor, base*factor**2, ... (1 s, 2 s, 4 s with the defaults)."""
    delay = base
    while True:
        yield delay
        delay *= factor


def is_rate_limited(exc: BaseException) -> bool:
    """True for HTTP 429 responses and errors that report a 429 in their message."""
    if isinstance(exc, RateLimitedError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code == HTTP_TOO_MANY_REQUESTS
    return str(HTTP_TOO_MANY_REQUESTS) in str(exc)


async def call_with_retry(
    fn: Callable[[], Awaitable[T]],
    is_retryable: Callable[[BaseException], bool] = is_rate_limited,
    max_attempts: int = RETRY_MAX_ATTEMPTS,
    backoff: Optional[Iterator[float]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Await fn(), retrying retryable failures up to max_attempts calls in total.

    Args:
        fn: Zero-argument coroutine factory, called once per attempt
        is_retryable: Predicate classifying a failure as transient
        max_attempts: Total number of calls, including the first
        backoff: Iterator of delays in seconds between attempts
        sleep: Awaitable sleep, replaceable in tests

    Returns:
        The first successful result

    Raises:
        The last failure once attempts are exhausted, or any non-retryable failure
    """
    delays = backoff if backoff is not None else exponential_backoff()
    attempts = max(1, max_attempts)

    attempt = 1
    while True:
        try:
            return await fn()
        except Exception as e:
            if attempt >= attempts or not is_retryable(e):
                raise
            delay = next(delays)
            logger.warning(f"Attempt {attempt}/{attempts} rate limited ({e}); retrying in {delay:.1f} s")
            await sleep(delay)
            attempt += 1
