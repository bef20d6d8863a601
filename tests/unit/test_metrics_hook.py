"""Tests for the MetricsHook protocol and its wiring into the transport.

Covers:
  - Protocol conformance (isinstance, structural subtyping)
  - NoopMetricsHook behaviour
  - Metric names emitted by AsyncNotionTransport for success, retry,
    rate limiting and network failure
"""
from __future__ import annotations

from typing import Any

import httpx
import pytest

from notion_mcp.config import NotionMCPConfig
from notion_mcp.errors import NotionMCPNetworkError
from notion_mcp.notion_api.transport import AsyncNotionTransport
from notion_mcp.observability.metrics import MetricsHook, NoopMetricsHook

# ---------------------------------------------------------------------------
# Recording hook
# ---------------------------------------------------------------------------


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []
        self.gauges: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.gauges.append({"name": name, "value": value, "tags": tags})

    def names(self) -> list[str]:
        return [i["name"] for i in self.increments]


def make_transport(handler, hook, **overrides) -> AsyncNotionTransport:
    defaults = dict(
        token="test-token-1234",
        retry_max_attempts=3,
        retry_base_delay=0.0,
        retry_max_delay=0.0,
        retry_jitter=False,
        rate_limit_rps=10_000.0,
        metrics=hook,
    )
    defaults.update(overrides)
    return AsyncNotionTransport(
        NotionMCPConfig(**defaults), http_transport=httpx.MockTransport(handler)
    )


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class TestProtocol:
    def test_noop_satisfies_protocol(self):
        assert isinstance(NoopMetricsHook(), MetricsHook)

    def test_recording_hook_satisfies_protocol(self):
        assert isinstance(RecordingMetricsHook(), MetricsHook)

    def test_plain_object_does_not(self):
        assert not isinstance(object(), MetricsHook)

    def test_noop_methods_return_none(self):
        hook = NoopMetricsHook()
        assert hook.increment("x") is None
        assert hook.timing("x", 1.0) is None
        assert hook.gauge("x", 2.0, tags={"a": "b"}) is None


# ---------------------------------------------------------------------------
# Transport wiring
# ---------------------------------------------------------------------------


class TestTransportMetrics:
    @pytest.mark.asyncio
    async def test_success_emits_request_and_duration(self):
        hook = RecordingMetricsHook()
        transport = make_transport(lambda req: httpx.Response(200, json={"ok": True}), hook)
        await transport.request("GET", "/users/me")
        await transport.close()

        assert hook.names() == ["notion_mcp.requests_total"]
        assert hook.increments[0]["tags"]["status"] == "200"
        assert [t["name"] for t in hook.timings] == ["notion_mcp.request_duration_ms"]

    @pytest.mark.asyncio
    async def test_rate_limited_then_success(self):
        hook = RecordingMetricsHook()
        responses = iter([
            httpx.Response(429, json={"code": "rate_limited"}, headers={"retry-after": "0"}),
            httpx.Response(200, json={}),
        ])
        transport = make_transport(lambda req: next(responses), hook)
        await transport.request("POST", "/search", json={})
        await transport.close()

        names = hook.names()
        assert "notion_mcp.rate_limited_total" in names
        assert "notion_mcp.retries_total" in names
        retry = next(i for i in hook.increments if i["name"] == "notion_mcp.retries_total")
        assert retry["tags"]["reason"] == "rate_limited"

    @pytest.mark.asyncio
    async def test_network_error_counts_retries(self):
        hook = RecordingMetricsHook()

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        transport = make_transport(handler, hook, retry_max_attempts=2)
        with pytest.raises(NotionMCPNetworkError):
            await transport.request("GET", "/pages/x")
        await transport.close()

        retries = [i for i in hook.increments if i["name"] == "notion_mcp.retries_total"]
        assert len(retries) == 1
        assert retries[0]["tags"]["reason"] == "network_error"
        errors = [
            i for i in hook.increments
            if i["name"] == "notion_mcp.requests_total" and i["tags"]["status"] == "error"
        ]
        assert len(errors) == 2
