"""Database tool handlers: query, retrieve, create, update."""

from __future__ import annotations

import json
from typing import Any, Literal

from mcp.server.fastmcp.exceptions import ToolError

from notion_mcp.client import AsyncNotionClient
from notion_mcp.converter.databases import convert_database_to_markdown
from notion_mcp.observability.logger import get_logger
from notion_mcp.tools.errors import handle_notion_error

log = get_logger("notion_mcp.tools")


def _plain_rich_text(text: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": text}}]


async def query_database(
    client: AsyncNotionClient,
    database_id: str,
    filter: dict[str, Any] | None = None,
    sorts: list[dict[str, Any]] | None = None,
    start_cursor: str | None = None,
    page_size: int | None = None,
) -> str:
    """Query one page of rows and return them with pagination info."""
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "query_database", "database_id": database_id}},
    )
    try:
        response = await client.databases.query(
            database_id,
            filter=filter,
            sorts=sorts,
            start_cursor=start_cursor,
            page_size=page_size,
        )
    except Exception as exc:
        handle_notion_error(exc, f"Database query ({database_id})")

    results = response.get("results", [])
    return json.dumps(
        {
            "results": results,
            "next_cursor": response.get("next_cursor"),
            "has_more": response.get("has_more", False),
            "result_count": len(results),
        },
        indent=2,
        ensure_ascii=False,
    )


async def retrieve_database(
    client: AsyncNotionClient,
    database_id: str,
    format: Literal["json", "markdown"] = "json",
) -> str:
    """Return a database's title, description and schema."""
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "retrieve_database", "database_id": database_id}},
    )
    try:
        response = await client.databases.retrieve(database_id)
    except Exception as exc:
        handle_notion_error(exc, f"Database retrieval ({database_id})")

    if format == "markdown":
        return convert_database_to_markdown(response)
    return json.dumps(response, indent=2, ensure_ascii=False)


async def create_database(
    client: AsyncNotionClient,
    page_id: str,
    title: str,
    properties: dict[str, Any],
    icon: dict[str, Any] | None = None,
    cover: dict[str, Any] | None = None,
) -> str:
    """Create a database under the parent page *page_id*.

    *properties* is the schema; exactly one entry must be a ``title``
    property.
    """
    title_count = sum(
        1 for spec in properties.values() if isinstance(spec, dict) and "title" in spec
    )
    if title_count != 1:
        raise ToolError("A database schema must contain exactly one title property")

    log.info(
        "tool call",
        extra={"extra_fields": {"op": "create_database", "parent_page_id": page_id}},
    )
    try:
        response = await client.databases.create(
            parent={"type": "page_id", "page_id": page_id},
            title=_plain_rich_text(title),
            properties=properties,
            icon=icon,
            cover=cover,
        )
    except Exception as exc:
        handle_notion_error(exc, "Database creation")

    return json.dumps(response, indent=2, ensure_ascii=False)


async def update_database(
    client: AsyncNotionClient,
    database_id: str,
    title: str | None = None,
    description: str | None = None,
    properties: dict[str, Any] | None = None,
) -> str:
    """Update a database's title, description or schema.

    Mapping a property name to ``None`` removes that property.
    """
    if title is None and description is None and not properties:
        raise ToolError("Nothing to update: provide a title, description or properties")

    log.info(
        "tool call",
        extra={"extra_fields": {"op": "update_database", "database_id": database_id}},
    )
    try:
        response = await client.databases.update(
            database_id,
            title=_plain_rich_text(title) if title is not None else None,
            description=_plain_rich_text(description) if description is not None else None,
            properties=properties,
        )
    except Exception as exc:
        handle_notion_error(exc, f"Database update ({database_id})")

    return json.dumps(response, indent=2, ensure_ascii=False)
