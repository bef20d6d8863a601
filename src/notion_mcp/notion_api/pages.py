"""Page API wrappers for the Notion API."""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncPageAPI:
    """Asynchronous wrapper for the Notion Pages API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a new page.

        Parameters
        ----------
        parent:
            ``{"page_id": "..."}`` or ``{"database_id": "..."}``.
        properties:
            Property values.  Under a page parent only ``title`` is
            allowed; under a database parent they must match its schema.
        children:
            Optional block objects for the page body.
        """
        body: dict[str, Any] = {
            "parent": parent,
            "properties": properties,
        }
        if children:
            body["children"] = children
        return await self._transport.request("POST", "/pages", json=body)

    async def retrieve(
        self,
        page_id: str,
        filter_properties: list[str] | None = None,
    ) -> dict[str, Any]:
        """Retrieve a page by its ID.

        *filter_properties* limits the returned properties to the given
        property IDs.
        """
        params: dict[str, Any] = {}
        if filter_properties:
            params["filter_properties"] = list(filter_properties)
        return await self._transport.request("GET", f"/pages/{page_id}", params=params)

    async def update(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        archived: bool | None = None,
    ) -> dict[str, Any]:
        """Update a page's properties or archive status.

        Only the properties included are changed.
        """
        body: dict[str, Any] = {}
        if properties is not None:
            body["properties"] = properties
        if archived is not None:
            body["archived"] = archived
        return await self._transport.request("PATCH", f"/pages/{page_id}", json=body)
