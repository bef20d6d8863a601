"""Async token bucket for client-side request pacing.

Notion enforces an average of three requests per second per
integration.  The MCP server may run several tool calls concurrently,
so all of them share one :class:`AsyncTokenBucket` through the
transport.
"""

from __future__ import annotations

import asyncio
import time


class AsyncTokenBucket:
    """Async-safe token bucket.

    Tokens refill at *rate_rps* per second up to *burst*.  A caller that
    finds the bucket empty reserves its token anyway (the balance goes
    negative) and sleeps until the reservation is covered, so concurrent
    waiters are served in arrival order without overshooting the rate.

    Parameters
    ----------
    rate_rps:
        Sustained refill rate in tokens per second.
    burst:
        Maximum number of tokens the bucket can hold.
    """

    __slots__ = ("_lock", "burst", "last_refill", "rate", "tokens")

    def __init__(self, rate_rps: float, burst: int = 3) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")

        self.rate: float = rate_rps
        self.burst: int = burst
        self.tokens: float = float(burst)
        self.last_refill: float = time.monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self, tokens: int = 1) -> float:
        """Take *tokens* from the bucket, sleeping if necessary.

        Returns the number of seconds waited (``0.0`` when tokens were
        immediately available).
        """
        async with self._lock:
            now = time.monotonic()
            self.tokens = min(
                float(self.burst),
                self.tokens + (now - self.last_refill) * self.rate,
            )
            self.last_refill = now
            self.tokens -= tokens
            wait = 0.0 if self.tokens >= 0 else -self.tokens / self.rate

        if wait > 0:
            await asyncio.sleep(wait)
        return wait
