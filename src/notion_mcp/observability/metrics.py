"""Metrics hook protocol and no-op default implementation.

The HTTP transport emits counters and timings for every Notion API
request.  By default a :class:`NoopMetricsHook` is used so there is zero
overhead; supply any object satisfying :class:`MetricsHook` through
``NotionMCPConfig(metrics=...)`` to route them to StatsD, Prometheus, etc.

Emitted metric names:

* ``notion_mcp.requests_total``       -- counter
* ``notion_mcp.retries_total``        -- counter
* ``notion_mcp.rate_limited_total``   -- counter
* ``notion_mcp.request_duration_ms``  -- timing
* ``notion_mcp.rate_limit_wait_ms``   -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict of string keys and values.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
