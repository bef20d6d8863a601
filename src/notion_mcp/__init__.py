"""notion_mcp -- Notion tools for the Model Context Protocol.

Public re-exports
-----------------

* **Server:** :func:`build_server`, :func:`main`
* **Client:** :class:`AsyncNotionClient`
* **Configuration:** :class:`NotionMCPConfig`
* **Errors:** Every :class:`NotionMCPError` subclass and :class:`ErrorCode`
* **Conversion:** The Notion → Markdown renderers

Usage::

    from notion_mcp import NotionMCPConfig, build_server

    build_server(NotionMCPConfig.from_env()).run()
"""

from __future__ import annotations

# ── Client ─────────────────────────────────────────────────────────────
from notion_mcp.client import AsyncNotionClient

# ── Configuration ───────────────────────────────────────────────────────
from notion_mcp.config import NotionMCPConfig

# ── Conversion ──────────────────────────────────────────────────────────
from notion_mcp.converter import (
    convert_block_children_to_markdown,
    convert_block_to_markdown,
    convert_database_to_markdown,
    convert_list_databases_to_markdown,
    convert_page_to_markdown,
    escape_table_cell,
    extract_rich_text,
)

# ── Errors ──────────────────────────────────────────────────────────────
from notion_mcp.errors import (
    ErrorCode,
    NotionMCPAuthError,
    NotionMCPConfigError,
    NotionMCPConflictError,
    NotionMCPError,
    NotionMCPNetworkError,
    NotionMCPNotFoundError,
    NotionMCPPermissionError,
    NotionMCPRateLimitError,
    NotionMCPRetryExhaustedError,
    NotionMCPServerError,
    NotionMCPValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notion_mcp.models import BlockType, Hydration

# ── Server ──────────────────────────────────────────────────────────────
from notion_mcp.server import build_server, main

__all__ = [
    "AsyncNotionClient",
    "BlockType",
    "ErrorCode",
    "Hydration",
    "NotionMCPAuthError",
    "NotionMCPConfig",
    "NotionMCPConfigError",
    "NotionMCPConflictError",
    "NotionMCPError",
    "NotionMCPNetworkError",
    "NotionMCPNotFoundError",
    "NotionMCPPermissionError",
    "NotionMCPRateLimitError",
    "NotionMCPRetryExhaustedError",
    "NotionMCPServerError",
    "NotionMCPValidationError",
    "build_server",
    "convert_block_children_to_markdown",
    "convert_block_to_markdown",
    "convert_database_to_markdown",
    "convert_list_databases_to_markdown",
    "convert_page_to_markdown",
    "escape_table_cell",
    "extract_rich_text",
    "main",
]

__version__ = "0.1.0"
