"""Search API wrapper for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncSearchAPI:
    """Asynchronous wrapper for ``POST /search``.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def search(
        self,
        query: str | None = None,
        filter: dict[str, Any] | None = None,
        sort: dict[str, Any] | None = None,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """Search pages and databases shared with the integration.

        Parameters
        ----------
        query:
            Text matched against page and database titles.
        filter:
            ``{"property": "object", "value": "page" | "database"}``.
        sort:
            ``{"timestamp": "last_edited_time", "direction": ...}``.
        start_cursor:
            ``next_cursor`` from a previous response.
        page_size:
            Number of results to return (1-100).
        """
        body: dict[str, Any] = {}
        if query:
            body["query"] = query
        if filter:
            body["filter"] = filter
        if sort:
            body["sort"] = sort
        if start_cursor:
            body["start_cursor"] = start_cursor
        if page_size:
            body["page_size"] = page_size
        return await self._transport.request("POST", "/search", json=body)
