"""Configuration for the notion-mcp server.

:class:`NotionMCPConfig` is a dataclass that captures every tuneable knob
of the HTTP transport and the server.  It can be built directly or from
the process environment with :meth:`NotionMCPConfig.from_env`.

Environment variables read by :meth:`~NotionMCPConfig.from_env`:

* ``NOTION_API_TOKEN`` -- integration token (``NOTION_API_KEY`` is
  accepted as a fallback).  **Required.**
* ``NOTION_VERSION`` -- value of the ``Notion-Version`` header.
* ``LOG_LEVEL`` -- ``DEBUG``, ``INFO``, ``WARN``/``WARNING`` or ``ERROR``
  (case-insensitive).
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from notion_mcp.errors import NotionMCPConfigError

_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR"})


@dataclass
class NotionMCPConfig:
    """Complete configuration for the notion-mcp transport and server.

    Parameters
    ----------
    token:
        Notion integration token.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    retry_max_attempts:
        Maximum total attempts per request for retryable failures.
    retry_base_delay:
        Base delay (seconds) for exponential backoff.
    retry_max_delay:
        Upper cap (seconds) on computed backoff delay.
    retry_jitter:
        Scale each backoff by a random factor in ``[0.5, 1.0)``.
    rate_limit_rps:
        Target requests per second for client-side pacing.  Notion
        allows an average of three.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    log_level:
        Level applied to the ``notion_mcp`` loggers at server start.
    metrics:
        Optional :class:`~notion_mcp.observability.MetricsHook`.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── Retry & rate ────────────────────────────────────────────────────
    retry_max_attempts: int = 3

    retry_base_delay: float = 1.0

    retry_max_delay: float = 30.0

    retry_jitter: bool = True

    rate_limit_rps: float = 3.0

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 60.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    log_level: str = "INFO"

    metrics: Any | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if self.retry_max_attempts < 1:
            raise ValueError(f"retry_max_attempts must be >= 1, got {self.retry_max_attempts}")
        if self.retry_base_delay < 0:
            raise ValueError(f"retry_base_delay must be >= 0, got {self.retry_base_delay}")
        if self.retry_max_delay < 0:
            raise ValueError(f"retry_max_delay must be >= 0, got {self.retry_max_delay}")
        if self.rate_limit_rps <= 0:
            raise ValueError(f"rate_limit_rps must be > 0, got {self.rate_limit_rps}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")

        level = self.log_level.upper()
        if level == "WARN":
            level = "WARNING"
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}"
            )
        self.log_level = level

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> NotionMCPConfig:
        """Build a config from environment variables.

        Empty strings are treated as unset.  Keyword *overrides* take
        precedence over the environment.

        Raises
        ------
        NotionMCPConfigError
            If no integration token is available.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(name)
            return value or None

        values: dict[str, Any] = {}
        token = _get("NOTION_API_TOKEN") or _get("NOTION_API_KEY")
        if token is not None:
            values["token"] = token
        version = _get("NOTION_VERSION")
        if version is not None:
            values["notion_version"] = version
        log_level = _get("LOG_LEVEL")
        if log_level is not None:
            values["log_level"] = log_level
        values.update(overrides)

        if not values.get("token"):
            missing = ["NOTION_API_TOKEN"]
            raise NotionMCPConfigError(
                message=(
                    f"Missing required environment variables: {', '.join(missing)}\n"
                    "Please check your .env file or MCP server configuration."
                ),
                context={"missing": missing},
            )
        return cls(**values)

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionMCPConfig({', '.join(parts)})"
