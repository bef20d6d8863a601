"""Page tool handlers: retrieve, create, create database item, update."""

from __future__ import annotations

import json
from typing import Any, Literal

from mcp.server.fastmcp.exceptions import ToolError

from notion_mcp.client import AsyncNotionClient
from notion_mcp.converter.pages import convert_page_to_markdown
from notion_mcp.models import is_full_page
from notion_mcp.observability.logger import get_logger
from notion_mcp.tools.errors import handle_notion_error

log = get_logger("notion_mcp.tools")

_PAGE_SUMMARY_KEYS = (
    "created_time",
    "last_edited_time",
    "url",
    "parent",
    "properties",
)
_ITEM_SUMMARY_KEYS = _PAGE_SUMMARY_KEYS + ("icon", "cover")


def _summarize(response: dict[str, Any], keys: tuple[str, ...]) -> str:
    """Pick *keys* (when present) from a page response, ``id`` first."""
    summary: dict[str, Any] = {"id": response.get("id")}
    for key in keys:
        if key in response:
            summary[key] = response[key]
    return json.dumps(summary, indent=2, ensure_ascii=False)


async def retrieve_page(
    client: AsyncNotionClient,
    page_id: str,
    filter_properties: list[str] | None = None,
    format: Literal["json", "markdown"] = "json",
) -> str:
    """Retrieve a page's properties as JSON or Markdown.

    The JSON form always carries ``id``; timestamps, ``archived``,
    ``properties``, ``url`` and ``parent`` are added for full pages.
    """
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "retrieve_page", "page_id": page_id}},
    )
    try:
        response = await client.pages.retrieve(page_id, filter_properties=filter_properties)
    except Exception as exc:
        handle_notion_error(exc, f"Page retrieval ({page_id})")

    if format == "markdown":
        return convert_page_to_markdown(response)

    formatted: dict[str, Any] = {"id": response.get("id")}
    if is_full_page(response):
        formatted["created_time"] = response.get("created_time")
        formatted["last_edited_time"] = response.get("last_edited_time")
        formatted["archived"] = response.get("archived")
        formatted["properties"] = response.get("properties")
        formatted["url"] = response.get("url")
        formatted["parent"] = response.get("parent")
    return json.dumps(formatted, indent=2, ensure_ascii=False)


async def create_page(
    client: AsyncNotionClient,
    page_id: str,
    title: str,
    children: list[dict[str, Any]] | None = None,
) -> str:
    """Create a page under the parent page *page_id*."""
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "create_page", "parent_page_id": page_id}},
    )
    properties = {"title": {"title": [{"text": {"content": title}}]}}
    try:
        response = await client.pages.create(
            parent={"page_id": page_id},
            properties=properties,
            children=children,
        )
    except Exception as exc:
        handle_notion_error(exc, "Page creation")

    return _summarize(response, _PAGE_SUMMARY_KEYS)


async def create_database_item(
    client: AsyncNotionClient,
    database_id: str,
    properties: dict[str, Any],
    children: list[dict[str, Any]] | None = None,
) -> str:
    """Create a row in *database_id* with the given property values."""
    if not properties:
        raise ToolError("Properties are required when creating an item in a database")

    log.info(
        "tool call",
        extra={
            "extra_fields": {
                "op": "create_database_item",
                "database_id": database_id,
                "property_count": len(properties),
            }
        },
    )
    try:
        response = await client.pages.create(
            parent={"database_id": database_id},
            properties=properties,
            children=children,
        )
    except Exception as exc:
        handle_notion_error(exc, "Database item creation")

    return _summarize(response, _ITEM_SUMMARY_KEYS)


async def update_page_properties(
    client: AsyncNotionClient,
    page_id: str,
    properties: dict[str, Any],
) -> str:
    """Update the given properties of an existing page."""
    if not properties:
        raise ToolError("At least one property must be specified for update")

    log.info(
        "tool call",
        extra={
            "extra_fields": {
                "op": "update_page_properties",
                "page_id": page_id,
                "property_count": len(properties),
            }
        },
    )
    try:
        response = await client.pages.update(page_id, properties=properties)
    except Exception as exc:
        handle_notion_error(exc, f"Page properties update ({page_id})")

    return _summarize(response, _ITEM_SUMMARY_KEYS)
