"""FastMCP server exposing the Notion tools over stdio.

Run with::

    NOTION_API_TOKEN=ntn_... notion-mcp

stdout carries the MCP JSON-RPC stream; all logging goes to stderr.
"""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Literal

from mcp.server.fastmcp import FastMCP

from notion_mcp import tools
from notion_mcp.client import AsyncNotionClient
from notion_mcp.config import NotionMCPConfig
from notion_mcp.errors import NotionMCPConfigError
from notion_mcp.observability.logger import get_logger, set_level

SERVER_NAME = "Notion MCP"

log = get_logger("notion_mcp")


def build_server(
    config: NotionMCPConfig,
    client: AsyncNotionClient | None = None,
) -> FastMCP:
    """Create a :class:`FastMCP` server with every Notion tool registered.

    Parameters
    ----------
    config:
        Server configuration.  Used to build the client when *client*
        is not supplied.
    client:
        Optional pre-built client shared by all tools.  The server
        closes it when its lifespan ends.

    Returns
    -------
    FastMCP
        The configured server; call ``run()`` to serve.
    """
    notion = client if client is not None else AsyncNotionClient(config)

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await notion.close()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    # -- blocks ------------------------------------------------------------

    @mcp.tool(name="notion-retrieve-block-children")
    async def retrieve_block_children(
        block_id: str,
        start_cursor: str | None = None,
        page_size: int | None = None,
        format: Literal["json", "markdown"] = "json",
    ) -> str:
        """Retrieve the direct children of a block or page.

        Results are paginated; pass the returned next_cursor as
        start_cursor to continue.  format="markdown" renders the blocks
        as a Markdown document.
        """
        return await tools.retrieve_block_children(
            notion, block_id, start_cursor=start_cursor, page_size=page_size, format=format
        )

    @mcp.tool(name="notion-append-block-children")
    async def append_block_children(
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> str:
        """Append up to 100 child blocks to a block or page.

        When after is given the blocks are inserted after that child.
        """
        return await tools.append_block_children(notion, block_id, children, after=after)

    # -- pages -------------------------------------------------------------

    @mcp.tool(name="notion-retrieve-page")
    async def retrieve_page(
        page_id: str,
        filter_properties: list[str] | None = None,
        format: Literal["json", "markdown"] = "json",
    ) -> str:
        """Retrieve a page's properties (not its content blocks)."""
        return await tools.retrieve_page(
            notion, page_id, filter_properties=filter_properties, format=format
        )

    @mcp.tool(name="notion-create-page")
    async def create_page(
        page_id: str,
        title: str,
        children: list[dict[str, Any]] | None = None,
    ) -> str:
        """Create a page under a parent page, with optional content blocks."""
        return await tools.create_page(notion, page_id, title, children=children)

    @mcp.tool(name="notion-create-database-item")
    async def create_database_item(
        database_id: str,
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> str:
        """Create a database row; properties must match the database schema."""
        return await tools.create_database_item(
            notion, database_id, properties, children=children
        )

    @mcp.tool(name="notion-update-page-properties")
    async def update_page_properties(
        page_id: str,
        properties: dict[str, Any],
    ) -> str:
        """Update property values of an existing page."""
        return await tools.update_page_properties(notion, page_id, properties)

    # -- databases ---------------------------------------------------------

    @mcp.tool(name="notion-query-database")
    async def query_database(
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> str:
        """Query a database with optional Notion filter and sort objects."""
        return await tools.query_database(
            notion,
            database_id,
            filter=filter,
            sorts=sorts,
            start_cursor=start_cursor,
            page_size=page_size,
        )

    @mcp.tool(name="notion-retrieve-database")
    async def retrieve_database(
        database_id: str,
        format: Literal["json", "markdown"] = "json",
    ) -> str:
        """Retrieve a database's title, description and property schema."""
        return await tools.retrieve_database(notion, database_id, format=format)

    @mcp.tool(name="notion-create-database")
    async def create_database(
        page_id: str,
        title: str,
        properties: dict[str, Any],
        icon: dict[str, Any] | None = None,
        cover: dict[str, Any] | None = None,
    ) -> str:
        """Create a database under a parent page.

        properties is the schema and needs exactly one title property.
        """
        return await tools.create_database(
            notion, page_id, title, properties, icon=icon, cover=cover
        )

    @mcp.tool(name="notion-update-database")
    async def update_database(
        database_id: str,
        title: str | None = None,
        description: str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> str:
        """Update a database's title, description or schema.

        Set a property to null to remove it.
        """
        return await tools.update_database(
            notion,
            database_id,
            title=title,
            description=description,
            properties=properties,
        )

    # -- search ------------------------------------------------------------

    @mcp.tool(name="notion-search")
    async def search(
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
        format: Literal["json", "markdown"] = "json",
    ) -> str:
        """Search pages and databases shared with the integration by title.

        filter is {"property": "object", "value": "page" | "database"}.
        format="markdown" applies to database searches only.
        """
        return await tools.search(
            notion,
            query=query,
            filter=filter,
            sort=sort,
            start_cursor=start_cursor,
            page_size=page_size,
            format=format,
        )

    return mcp


def main() -> None:
    """Console entry point: load config from the environment and serve stdio."""
    try:
        config = NotionMCPConfig.from_env()
    except NotionMCPConfigError as exc:
        log.error(exc.message, extra={"extra_fields": {"op": "startup", **exc.context}})
        sys.exit(1)
    except ValueError as exc:
        log.error(str(exc), extra={"extra_fields": {"op": "startup"}})
        sys.exit(1)

    set_level(config.log_level)
    log.info(
        "Starting Notion MCP server",
        extra={"extra_fields": {"op": "startup", "notion_version": config.notion_version}},
    )
    build_server(config).run()


if __name__ == "__main__":
    main()
