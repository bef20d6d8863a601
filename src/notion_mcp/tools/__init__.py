"""MCP tool handlers.

Each handler is an ``async`` function taking an
:class:`~notion_mcp.client.AsyncNotionClient` first and returning the
string sent back to the MCP client.  Failures surface as
:class:`~mcp.server.fastmcp.exceptions.ToolError`.
"""

from notion_mcp.tools.blocks import append_block_children, retrieve_block_children
from notion_mcp.tools.databases import (
    create_database,
    query_database,
    retrieve_database,
    update_database,
)
from notion_mcp.tools.errors import handle_notion_error
from notion_mcp.tools.pages import (
    create_database_item,
    create_page,
    retrieve_page,
    update_page_properties,
)
from notion_mcp.tools.search import search

__all__ = [
    "append_block_children",
    "create_database",
    "create_database_item",
    "create_page",
    "handle_notion_error",
    "query_database",
    "retrieve_block_children",
    "retrieve_database",
    "retrieve_page",
    "search",
    "update_database",
    "update_page_properties",
]
