"""Async HTTP transport for the Notion API.

Request lifecycle:

1. Acquire a token-bucket slot (wait if needed).
2. Send the request with auth and version headers.
3. On ``2xx`` -- return the parsed JSON body.
4. On ``429`` -- honour ``Retry-After``, sleep, and retry.
5. On ``5xx`` / network error -- exponential backoff and retry.
6. On non-retryable ``4xx`` -- raise the matching typed error.
7. When attempts run out -- raise a rate-limit, server or network error.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, NoReturn

import httpx

from notion_mcp.config import NotionMCPConfig
from notion_mcp.errors import (
    NotionMCPAuthError,
    NotionMCPConflictError,
    NotionMCPNetworkError,
    NotionMCPNotFoundError,
    NotionMCPPermissionError,
    NotionMCPRateLimitError,
    NotionMCPServerError,
    NotionMCPValidationError,
)
from notion_mcp.observability import NoopMetricsHook, get_logger

from .rate_limit import AsyncTokenBucket
from .retries import RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("notion_mcp.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_retry_after(response: httpx.Response) -> float | None:
    """Extract the ``Retry-After`` header value as a float, or ``None``."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _raise_for_status(response: httpx.Response, method: str, path: str) -> NoReturn:
    """Raise the typed error for a non-retryable error response."""
    status = response.status_code
    body = _error_body(response)
    notion_message = body.get("message", response.text[:500])
    notion_code = body.get("code", "")
    ctx: dict[str, Any] = {
        "status_code": status,
        "notion_code": notion_code,
        "notion_message": notion_message,
    }

    if status == 401:
        raise NotionMCPAuthError(
            message=f"Authentication failed on {method} {path}: {notion_message}",
            context=ctx,
        )
    if status == 403:
        raise NotionMCPPermissionError(
            message=f"Permission denied on {method} {path}: {notion_message}",
            context={**ctx, "operation": f"{method} {path}"},
        )
    if status == 404:
        raise NotionMCPNotFoundError(
            message=f"Resource not found on {method} {path}: {notion_message}",
            context={**ctx, "path": path},
        )
    if status == 409:
        raise NotionMCPConflictError(
            message=f"Conflict on {method} {path}: {notion_message}",
            context=ctx,
        )

    if status >= 500:
        raise NotionMCPServerError(
            message=f"Server error {status} on {method} {path}: {notion_message}",
            context={**ctx, "body": body},
        )

    # 400 and any other client error.
    raise NotionMCPValidationError(
        message=f"Client error {status} on {method} {path}: {notion_message}",
        context={**ctx, "body": body},
    )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth, retry, and rate limiting.

    Parameters
    ----------
    config:
        Controls headers, timeouts, retries and pacing.
    http_transport:
        Optional httpx transport, e.g. :class:`httpx.MockTransport` in
        tests.  Defaults to httpx's network transport.
    """

    def __init__(
        self,
        config: NotionMCPConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._bucket = AsyncTokenBucket(rate_rps=config.rate_limit_rps)
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        client_kwargs: dict[str, Any] = {}
        if http_transport is not None:
            client_kwargs["transport"] = http_transport
        if config.http_proxy:
            client_kwargs["proxy"] = config.http_proxy

        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.token}",
                "Notion-Version": config.notion_version,
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(config.timeout_seconds),
            **client_kwargs,
        )

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute an HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request` (``json=``,
            ``params=``).

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for empty responses).

        Raises
        ------
        NotionMCPAuthError
            On 401 responses.
        NotionMCPPermissionError
            On 403 responses.
        NotionMCPNotFoundError
            On 404 responses.
        NotionMCPConflictError
            On 409 responses.
        NotionMCPValidationError
            On 400 and other non-retryable 4xx responses.
        NotionMCPRateLimitError
            When every attempt was answered with 429.
        NotionMCPServerError
            When attempts ran out on 5xx responses.
        NotionMCPNetworkError
            When attempts ran out on transport failures.
        """
        config = self._config
        max_attempts = config.retry_max_attempts
        tags = {"method": method, "path": path}
        last_response: httpx.Response | None = None

        for attempt in range(max_attempts):
            wait = await self._bucket.acquire()
            if wait > 0:
                self._metrics.timing("notion_mcp.rate_limit_wait_ms", wait * 1000, tags=tags)

            t0 = time.monotonic()
            try:
                response = await self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                delay = self._network_backoff(method, path, exc, attempt)
                await asyncio.sleep(delay)
                continue
            elapsed_ms = (time.monotonic() - t0) * 1000

            last_response = response
            status_tags = {**tags, "status": str(response.status_code)}
            self._metrics.increment("notion_mcp.requests_total", tags=status_tags)
            self._metrics.timing("notion_mcp.request_duration_ms", elapsed_ms, tags=status_tags)

            if 200 <= response.status_code < 300:
                if response.status_code == 204 or not response.content:
                    return {}
                result: dict = response.json()
                return result

            if response.status_code not in RETRYABLE_STATUSES:
                _raise_for_status(response, method, path)

            if not should_retry(response.status_code, None, attempt, max_attempts):
                break

            retry_after: float | None = None
            reason = "server_error"
            if response.status_code == 429:
                retry_after = _parse_retry_after(response)
                reason = "rate_limited"
                self._metrics.increment("notion_mcp.rate_limited_total", tags=tags)

            log.warning(
                "Retrying Notion API request",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "status_code": response.status_code,
                        "retry_after": retry_after,
                        "attempt": attempt + 1,
                    }
                },
            )
            delay = compute_backoff(
                attempt,
                base=config.retry_base_delay,
                maximum=config.retry_max_delay,
                jitter=config.retry_jitter,
                retry_after=retry_after,
            )
            self._metrics.increment("notion_mcp.retries_total", tags={**tags, "reason": reason})
            await asyncio.sleep(delay)

        self._raise_exhausted(method, path, max_attempts, last_response)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- internals ---------------------------------------------------------

    def _network_backoff(
        self, method: str, path: str, exc: Exception, attempt: int
    ) -> float:
        """Return the delay before retrying a network failure, or raise."""
        config = self._config
        self._metrics.increment(
            "notion_mcp.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "Notion API network error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(exc),
                }
            },
        )
        if should_retry(None, exc, attempt, config.retry_max_attempts):
            self._metrics.increment(
                "notion_mcp.retries_total",
                tags={"method": method, "path": path, "reason": "network_error"},
            )
            return compute_backoff(
                attempt,
                base=config.retry_base_delay,
                maximum=config.retry_max_delay,
                jitter=config.retry_jitter,
            )
        raise NotionMCPNetworkError(
            message=f"Network error on {method} {path}: {exc}",
            context={
                "url": path,
                "attempt": attempt + 1,
                "timeout": isinstance(exc, httpx.TimeoutException),
            },
            cause=exc,
        ) from exc

    @staticmethod
    def _raise_exhausted(
        method: str,
        path: str,
        attempts: int,
        response: httpx.Response | None,
    ) -> NoReturn:
        status = response.status_code if response is not None else None
        body = _error_body(response) if response is not None else {}
        ctx: dict[str, Any] = {
            "attempts": attempts,
            "last_status_code": status,
            "notion_code": body.get("code", ""),
            "notion_message": body.get("message", ""),
        }
        message = (
            f"All {attempts} attempts exhausted for {method} {path} "
            f"(last status: {status})"
        )
        if status == 429:
            raise NotionMCPRateLimitError(message=message, context=ctx)
        raise NotionMCPServerError(message=message, context=ctx)
