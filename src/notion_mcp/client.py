"""Asynchronous Notion client used by the MCP tools.

:class:`AsyncNotionClient` owns one :class:`AsyncNotionTransport` and
exposes the endpoint wrappers as attributes::

    async with AsyncNotionClient(config) as client:
        listing = await client.blocks.list_children(page_id)
"""

from __future__ import annotations

from typing import Any

import httpx

from notion_mcp.config import NotionMCPConfig
from notion_mcp.notion_api.blocks import AsyncBlockAPI
from notion_mcp.notion_api.databases import AsyncDatabaseAPI
from notion_mcp.notion_api.pages import AsyncPageAPI
from notion_mcp.notion_api.search import AsyncSearchAPI
from notion_mcp.notion_api.transport import AsyncNotionTransport


class AsyncNotionClient:
    """Bundle of the Notion endpoint wrappers sharing one transport.

    Parameters
    ----------
    config:
        Client configuration.  Must carry a token.
    http_transport:
        Optional httpx transport forwarded to
        :class:`AsyncNotionTransport` (tests pass
        :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        config: NotionMCPConfig,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = AsyncNotionTransport(config, http_transport=http_transport)
        self.blocks = AsyncBlockAPI(self._transport)
        self.pages = AsyncPageAPI(self._transport)
        self.databases = AsyncDatabaseAPI(self._transport)
        self._search = AsyncSearchAPI(self._transport)

    @property
    def config(self) -> NotionMCPConfig:
        return self._config

    async def search(self, **kwargs: Any) -> dict[str, Any]:
        """Search pages and databases.  See :meth:`AsyncSearchAPI.search`."""
        return await self._search.search(**kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying HTTP transport."""
        await self._transport.close()

    async def __aenter__(self) -> AsyncNotionClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
