"""Database API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncDatabaseAPI:
    """Asynchronous wrapper for the Notion Databases API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, database_id: str) -> dict[str, Any]:
        """Retrieve a database object (title, description, schema)."""
        return await self._transport.request("GET", f"/databases/{database_id}")

    async def query(
        self,
        database_id: str,
        filter: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Query one page of rows from a database.

        Parameters
        ----------
        database_id:
            The UUID of the database.
        filter:
            A Notion filter object.
        sorts:
            A list of property or timestamp sort objects.
        start_cursor:
            ``next_cursor`` from a previous response.
        page_size:
            Number of rows to return (1-100).
        """
        body: dict[str, Any] = {}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts
        if start_cursor:
            body["start_cursor"] = start_cursor
        if page_size:
            body["page_size"] = page_size
        return await self._transport.request(
            "POST", f"/databases/{database_id}/query", json=body
        )

    async def create(
        self,
        parent: dict[str, Any],
        title: list[dict[str, Any]],
        properties: dict[str, Any],
        icon: dict[str, Any] | None = None,
        cover: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Create a database under a parent page."""
        body: dict[str, Any] = {
            "parent": parent,
            "title": title,
            "properties": properties,
        }
        if icon is not None:
            body["icon"] = icon
        if cover is not None:
            body["cover"] = cover
        return await self._transport.request("POST", "/databases", json=body)

    async def update(
        self,
        database_id: str,
        title: list[dict[str, Any]] | None = None,
        description: list[dict[str, Any]] | None = None,
        properties: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Update a database's title, description or schema.

        A property mapped to ``None`` is removed from the schema.
        """
        body: dict[str, Any] = {}
        if title is not None:
            body["title"] = title
        if description is not None:
            body["description"] = description
        if properties is not None:
            body["properties"] = properties
        return await self._transport.request(
            "PATCH", f"/databases/{database_id}", json=body
        )
