"""Block tool handlers: retrieve and append block children."""

from __future__ import annotations

import json
from typing import Any, Literal

from notion_mcp.client import AsyncNotionClient
from notion_mcp.converter.notion_to_md import convert_block_children_to_markdown
from notion_mcp.observability.logger import get_logger
from notion_mcp.tools.errors import handle_notion_error

log = get_logger("notion_mcp.tools")


async def retrieve_block_children(
    client: AsyncNotionClient,
    block_id: str,
    start_cursor: str | None = None,
    page_size: int | None = None,
    format: Literal["json", "markdown"] = "json",
) -> str:
    """Return one page of a block's children as JSON or Markdown.

    Only direct children are listed; nested children need further calls.
    """
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "retrieve_block_children", "block_id": block_id}},
    )
    try:
        response = await client.blocks.list_children(
            block_id, page_size=page_size, start_cursor=start_cursor
        )
    except Exception as exc:
        handle_notion_error(exc, f"Block children retrieval ({block_id})")

    if format == "markdown":
        return convert_block_children_to_markdown(response)

    return json.dumps(
        {
            "results": response.get("results", []),
            "next_cursor": response.get("next_cursor"),
            "has_more": response.get("has_more", False),
        },
        ensure_ascii=False,
    )


async def append_block_children(
    client: AsyncNotionClient,
    block_id: str,
    children: list[dict[str, Any]],
    after: str | None = None,
) -> str:
    """Append *children* to a block and return the created blocks as JSON."""
    log.info(
        "tool call",
        extra={
            "extra_fields": {
                "op": "append_block_children",
                "block_id": block_id,
                "count": len(children),
            }
        },
    )
    try:
        response = await client.blocks.append_children(block_id, children, after=after)
    except Exception as exc:
        handle_notion_error(exc, f"Block children append ({block_id})")

    return json.dumps({"results": response.get("results", [])}, ensure_ascii=False)
