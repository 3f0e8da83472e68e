"""Retry helpers."""

from __future__ import annotations

from typing import Callable

import httpx

RetryPolicy = Callable[[Exception], bool]


def retry_on_any_error(exc: Exception) -> bool:
    """Default policy: every transport error is retry-eligible."""
    return True


def retry_on_timeout_or_reset(exc: Exception) -> bool:
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))


def can_retry(
    *,
    attempt: int,
    max_retries: int | None,
) -> bool:
    """``attempt`` is the 0-based index of the attempt that just failed."""
    if not isinstance(max_retries, int) or isinstance(max_retries, bool):
        return False
    if max_retries <= 0:
        return False
    return attempt < max_retries


__all__ = [
    "RetryPolicy",
    "retry_on_any_error",
    "retry_on_timeout_or_reset",
    "can_retry",
]
