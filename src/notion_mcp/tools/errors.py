"""Translate notion-mcp errors into messages for the MCP client.

Every tool handler funnels its failures through :func:`handle_notion_error`,
which always raises :class:`~mcp.server.fastmcp.exceptions.ToolError`.
FastMCP reports a ``ToolError`` to the caller as a tool result with
``isError`` set, carrying only the message built here.
"""

from __future__ import annotations

from typing import NoReturn

from mcp.server.fastmcp.exceptions import ToolError

from notion_mcp.errors import ErrorCode, NotionMCPError, NotionMCPNetworkError
from notion_mcp.observability.logger import get_logger

log = get_logger("notion_mcp.tools")

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred when working with Notion API."

# Messages keyed by the ``code`` field of a Notion API error body.  Entries
# ending in ":" are followed by the message Notion returned.
_NOTION_CODE_MESSAGES: dict[str, str] = {
    "unauthorized": "Not authorized to access this Notion resource. Please check your API token.",
    "restricted_resource": "This Notion resource is restricted and cannot be accessed.",
    "object_not_found": "The requested Notion object was not found. Please check the ID.",
    "rate_limited": "Rate limit exceeded. Please try again later.",
    "invalid_json": "Invalid JSON was provided to Notion API.",
    "invalid_request_url": "Invalid request URL. This is likely a bug in the tool.",
    "invalid_request": "Invalid request to Notion API:",
    "validation_error": "Validation error:",
    "conflict_error": "Conflict error: Another update to this resource was made. Please try again.",
    "internal_server_error": "Notion API encountered an internal server error. Please try again later.",
    "service_unavailable": "Notion API service is currently unavailable. Please try again later.",
}

# Used when the response carried no Notion error code (empty or non-JSON body).
_FALLBACK_NOTION_CODES: dict[str, str] = {
    ErrorCode.AUTH_ERROR: "unauthorized",
    ErrorCode.PERMISSION_ERROR: "restricted_resource",
    ErrorCode.NOT_FOUND: "object_not_found",
    ErrorCode.CONFLICT: "conflict_error",
    ErrorCode.RATE_LIMITED: "rate_limited",
    ErrorCode.VALIDATION_ERROR: "validation_error",
}

_TIMEOUT_MESSAGE = "The request to Notion API timed out. Please try again."
_RESPONSE_ERROR_MESSAGE = "Received an unexpected response from Notion API."
_UNKNOWN_API_ERROR_MESSAGE = "Unknown Notion API error"


def handle_notion_error(exc: object, context: str | None = None) -> NoReturn:
    """Raise a :class:`ToolError` describing *exc*.

    Parameters
    ----------
    exc:
        The caught exception (or any other value that was raised).
    context:
        Short description of the failed operation, e.g.
        ``"Page retrieval (abc123)"``.  Rendered as a ``[context] `` prefix.

    Raises
    ------
    ToolError
        Always.  An existing :class:`ToolError` is re-raised unchanged.
    """
    if isinstance(exc, ToolError):
        raise exc

    prefix = f"[{context}] " if context else ""

    if isinstance(exc, NotionMCPError):
        log.warning(
            "Notion API call failed",
            extra={
                "extra_fields": {
                    "op": "handle_notion_error",
                    "context": context,
                    "error_code": (
                        exc.code.value if isinstance(exc.code, ErrorCode) else exc.code
                    ),
                    "notion_code": exc.notion_code,
                }
            },
        )
        raise ToolError(prefix + _message_for(exc)) from exc

    if isinstance(exc, Exception):
        raise ToolError(f"{prefix}Error: {exc}") from exc

    raise ToolError(UNKNOWN_ERROR_MESSAGE)


def _message_for(exc: NotionMCPError) -> str:
    if isinstance(exc, NotionMCPNetworkError):
        if exc.context.get("timeout"):
            return _TIMEOUT_MESSAGE
        return f"Error: {exc.message}"

    notion_code = exc.notion_code or _FALLBACK_NOTION_CODES.get(exc.code, "")
    if not notion_code:
        if exc.code == ErrorCode.SERVER_ERROR:
            return _RESPONSE_ERROR_MESSAGE
        return f"Error: {exc.message}"

    template = _NOTION_CODE_MESSAGES.get(notion_code)
    if template is None:
        return _UNKNOWN_API_ERROR_MESSAGE
    if template.endswith(":"):
        detail = exc.context.get("notion_message") or exc.message
        return f"{template} {detail}"
    return template
