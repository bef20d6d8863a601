"""Error hierarchy for notion-mcp.

Every error raised by the configuration and HTTP layers inherits from
:class:`NotionMCPError`.  Each carries a machine-readable ``code`` (from
:class:`ErrorCode`), a human-readable ``message``, an optional
structured ``context`` dict, and an optional ``cause``.

When the Notion API supplied an error body, its ``code`` field (for
example ``"object_not_found"``) is kept in ``context["notion_code"]`` so
the tool layer can pick a user-facing message for it.

The Markdown renderers never raise; nothing in :mod:`notion_mcp.converter`
uses these classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    CONFIG_ERROR = "CONFIG_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_ERROR = "SERVER_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionMCPError(Exception):
    """Base exception for all notion-mcp errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string).
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured diagnostic data.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def notion_code(self) -> str:
        """The Notion API error code, or ``""`` when none was returned."""
        return str(self.context.get("notion_code") or "")

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class NotionMCPConfigError(NotionMCPError):
    """Required configuration is missing or invalid.

    Context keys: ``missing`` (list of environment variable names).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# API / transport errors
# ---------------------------------------------------------------------------

class NotionMCPValidationError(NotionMCPError):
    """Notion API returned 400 (or another unclassified 4xx).

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPAuthError(NotionMCPError):
    """Notion API returned 401 -- the integration token is invalid.

    Context keys: ``status_code``, ``notion_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.AUTH_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPPermissionError(NotionMCPError):
    """Notion API returned 403 -- the integration lacks access.

    Context keys: ``status_code``, ``notion_code``, ``operation``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PERMISSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPNotFoundError(NotionMCPError):
    """Notion API returned 404.

    Context keys: ``status_code``, ``notion_code``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPConflictError(NotionMCPError):
    """Notion API returned 409 -- a concurrent update won.

    Context keys: ``status_code``, ``notion_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFLICT,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPRetryExhaustedError(NotionMCPError):
    """All retry attempts for a retryable request have been used.

    Context keys: ``attempts``, ``last_status_code``, ``notion_code``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.RETRY_EXHAUSTED,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )


class NotionMCPRateLimitError(NotionMCPRetryExhaustedError):
    """Retries ran out while Notion kept answering 429."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.RATE_LIMITED,
        )


class NotionMCPServerError(NotionMCPRetryExhaustedError):
    """Notion answered 5xx: a non-retryable status, or retries ran out."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            cause=cause,
            code=ErrorCode.SERVER_ERROR,
        )


class NotionMCPNetworkError(NotionMCPError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``, ``attempt``, ``timeout``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
