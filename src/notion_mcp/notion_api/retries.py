"""Retry decision logic and exponential backoff computation.

Two pure functions used by the transport:

* :func:`should_retry` -- decide whether a failed attempt is retryable.
* :func:`compute_backoff` -- the delay before the next attempt.
"""

from __future__ import annotations

import random

import httpx

# HTTP status codes that are safe to retry.
RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

_RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Decide whether a request should be retried.

    Parameters
    ----------
    status_code:
        Response status, or ``None`` when no response was received.
    exception:
        The transport exception, or ``None`` when a response was received.
    attempt:
        The current attempt number (0-indexed).
    max_attempts:
        Maximum total attempts, including the first.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, _RETRYABLE_EXCEPTIONS)
    return status_code in RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 30.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Compute the delay in seconds before the next attempt.

    A server-supplied ``Retry-After`` is a lower bound and is returned
    unchanged, without jitter.  Otherwise the
    delay is ``base * 2**attempt`` capped at *maximum*; with *jitter* it
    is scaled by a random factor in ``[0.5, 1.0)``.
    """
    if retry_after is not None:
        return retry_after

    delay = min(base * (2 ** attempt), maximum)
    if jitter:
        delay *= 0.5 + random.random() * 0.5

    return delay
