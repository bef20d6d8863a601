"""Search tool handler."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Literal

from notion_mcp.client import AsyncNotionClient
from notion_mcp.converter.databases import convert_list_databases_to_markdown
from notion_mcp.observability.logger import get_logger
from notion_mcp.tools.errors import handle_notion_error

log = get_logger("notion_mcp.tools")


def _is_database_filter(filter: dict[str, Any] | None) -> bool:
    return bool(filter) and filter.get("value") == "database"


async def search(
    client: AsyncNotionClient,
    query: str | None = None,
    filter: dict[str, Any] | None = None,
    sort: dict[str, Any] | None = None,
    start_cursor: str | None = None,
    page_size: int | None = None,
    format: Literal["json", "markdown"] = "json",
) -> str:
    """Search pages and databases by title.

    ``format="markdown"`` is honoured only together with a database
    filter; any other search returns JSON with ``result_count`` and a
    per-``object`` tally in ``object_types``.
    """
    log.info(
        "tool call",
        extra={"extra_fields": {"op": "search", "query": query}},
    )
    try:
        response = await client.search(
            query=query,
            filter=filter,
            sort=sort,
            start_cursor=start_cursor,
            page_size=page_size,
        )
    except Exception as exc:
        handle_notion_error(exc, f"Search (query: {query})")

    results = response.get("results", [])
    if format == "markdown" and _is_database_filter(filter):
        return convert_list_databases_to_markdown(response)

    object_types = Counter(
        r.get("object") for r in results if isinstance(r, dict)
    )
    return json.dumps(
        {
            "results": results,
            "next_cursor": response.get("next_cursor"),
            "has_more": response.get("has_more", False),
            "result_count": len(results),
            "object_types": dict(object_types),
        },
        indent=2,
        ensure_ascii=False,
    )
