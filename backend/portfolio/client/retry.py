"""Retry Combinator — bounded exponential backoff around an async call.

Invariants:
    - At most 1 + retries attempts
    - Delay doubles after every failed attempt (delay, 2*delay, 4*delay...)
    - Only errors accepted by should_retry are retried; everything else
      propagates immediately, unchanged
    - The last error is re-raised once attempts are exhausted

Design Decisions:
    - Default predicate retries 5xx only: timeouts and connection errors surface
      at once so the UI can offer its own retry prompt
    - sleep injectable: tests run without real waiting
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from portfolio.client.errors import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_transient(error: BaseException) -> bool:
    """Server-side failure class worth retrying."""
    return isinstance(error, ApiError) and error.is_server_error


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    retries: int = 2,
    delay: float = 1.0,
    should_retry: Callable[[BaseException], bool] = is_transient,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Call fn, retrying transient failures with doubling delay."""
    attempt = 0
    while True:
        try:
            return await fn()
        except Exception as e:
            if attempt >= retries or not should_retry(e):
                raise
            attempt += 1
            logger.warning(
                f"Transient API error, retry after {delay}s: {e}",
                extra={"attempt": attempt},
            )
            await sleep(delay)
            delay *= 2
