"""Shared test fixtures for the notion-mcp test suite."""

from __future__ import annotations

import pytest

from notion_mcp.config import NotionMCPConfig


@pytest.fixture
def config() -> NotionMCPConfig:
    """Default test configuration with a dummy token."""
    return NotionMCPConfig(token="test_token_1234")
