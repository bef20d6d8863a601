"""Tests for server.py: tool registration and the console entry point."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from notion_mcp.server import SERVER_NAME, build_server, main

EXPECTED_TOOLS = {
    "notion-retrieve-block-children",
    "notion-append-block-children",
    "notion-retrieve-page",
    "notion-create-page",
    "notion-create-database-item",
    "notion-update-page-properties",
    "notion-query-database",
    "notion-retrieve-database",
    "notion-create-database",
    "notion-update-database",
    "notion-search",
}


class TestBuildServer:
    @pytest.mark.asyncio
    async def test_registers_every_tool(self, config):
        server = build_server(config, client=MagicMock())
        tools = await server.list_tools()
        assert {t.name for t in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_tools_have_descriptions(self, config):
        server = build_server(config, client=MagicMock())
        for tool in await server.list_tools():
            assert tool.description

    @pytest.mark.asyncio
    async def test_format_parameter_exposed(self, config):
        server = build_server(config, client=MagicMock())
        tools = {t.name: t for t in await server.list_tools()}
        schema = tools["notion-retrieve-block-children"].inputSchema
        assert "format" in schema["properties"]
        assert schema["required"] == ["block_id"]

    def test_server_name(self, config):
        assert build_server(config, client=MagicMock()).name == SERVER_NAME

    @pytest.mark.asyncio
    async def test_tool_delegates_to_handler(self, config):
        client = MagicMock()
        server = build_server(config, client=client)
        with patch(
            "notion_mcp.server.tools.retrieve_page", new_callable=AsyncMock
        ) as handler:
            handler.return_value = "{}"
            await server.call_tool("notion-retrieve-page", {"page_id": "p1"})
        handler.assert_awaited_once_with(
            client, "p1", filter_properties=None, format="json"
        )


class TestMain:
    def test_missing_token_exits(self, monkeypatch):
        monkeypatch.delenv("NOTION_API_TOKEN", raising=False)
        monkeypatch.delenv("NOTION_API_KEY", raising=False)
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1

    def test_bad_log_level_exits(self, monkeypatch):
        monkeypatch.setenv("NOTION_API_TOKEN", "t")
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(SystemExit):
            main()

    def test_runs_server(self, monkeypatch):
        monkeypatch.setenv("NOTION_API_TOKEN", "t")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        server = MagicMock()
        with patch("notion_mcp.server.build_server", return_value=server) as build:
            main()
        assert build.call_args.args[0].log_level == "DEBUG"
        server.run.assert_called_once_with()
