"""Block API wrappers for the Notion API.

Thin coroutine wrappers around the ``/blocks`` endpoints.  Listing is
*not* auto-paginated: the caller receives one page of children together
with ``has_more`` / ``next_cursor`` and decides whether to continue.
"""

from __future__ import annotations

from typing import Any

from .transport import AsyncNotionTransport


class AsyncBlockAPI:
    """Asynchronous wrapper for the Notion Blocks API.

    Parameters
    ----------
    transport:
        A configured :class:`AsyncNotionTransport` instance.
    """

    def __init__(self, transport: AsyncNotionTransport) -> None:
        self._transport = transport

    async def retrieve(self, block_id: str) -> dict[str, Any]:
        """Retrieve a single block by its ID."""
        return await self._transport.request("GET", f"/blocks/{block_id}")

    async def list_children(
        self,
        block_id: str,
        page_size: int | None = None,
        start_cursor: str | None = None,
    ) -> dict[str, Any]:
        """List one page of children of a block (or page).

        Parameters
        ----------
        block_id:
            The UUID of the parent block or page.
        page_size:
            Number of children to return (Notion caps this at 100).
        start_cursor:
            ``next_cursor`` from a previous response.

        Returns
        -------
        dict
            The list response: ``results``, ``has_more``, ``next_cursor``.
        """
        params: dict[str, Any] = {}
        if page_size is not None:
            params["page_size"] = page_size
        if start_cursor is not None:
            params["start_cursor"] = start_cursor
        return await self._transport.request(
            "GET", f"/blocks/{block_id}/children", params=params
        )

    async def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
        after: str | None = None,
    ) -> dict[str, Any]:
        """Append child blocks to a parent block or page.

        Parameters
        ----------
        block_id:
            The UUID of the parent block (or page).
        children:
            Block objects to append.  Notion accepts at most 100 per call.
        after:
            Optional UUID of an existing child; new blocks are inserted
            immediately after it instead of at the end.
        """
        body: dict[str, Any] = {"children": children}
        if after is not None:
            body["after"] = after
        return await self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json=body
        )
