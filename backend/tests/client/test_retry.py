"""Retry Combinator — verifies bounded doubling backoff.

Tests:
    - Success on first try never sleeps
    - Non-transient errors propagate unchanged
    - Custom predicate honored
"""

import pytest

from portfolio.client.errors import ApiError, ApiTimeoutError
from portfolio.client.retry import is_transient, with_retry


async def _no_sleep(seconds):
    pass


def test_only_server_errors_are_transient():
    assert is_transient(ApiError(503, "busy"))
    assert not is_transient(ApiError(404, "missing"))
    assert not is_transient(ApiTimeoutError())
    assert not is_transient(ValueError("x"))


async def test_first_success_returns_immediately():
    calls = []

    async def fn():
        calls.append(1)
        return "ok"

    assert await with_retry(fn, sleep=_no_sleep) == "ok"
    assert calls == [1]


async def test_non_transient_error_propagates():
    async def fn():
        raise ValueError("broken")

    with pytest.raises(ValueError):
        await with_retry(fn, sleep=_no_sleep)


async def test_zero_retries_single_attempt():
    attempts = []

    async def fn():
        attempts.append(1)
        raise ApiError(500, "down")

    with pytest.raises(ApiError):
        await with_retry(fn, retries=0, sleep=_no_sleep)
    assert len(attempts) == 1


async def test_custom_predicate_retries_timeouts():
    attempts = []

    async def fn():
        attempts.append(1)
        if len(attempts) < 2:
            raise ApiTimeoutError()
        return "late"

    result = await with_retry(
        fn, should_retry=lambda e: isinstance(e, ApiTimeoutError), sleep=_no_sleep,
    )
    assert result == "late"
    assert len(attempts) == 2
