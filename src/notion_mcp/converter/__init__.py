"""Notion → Markdown conversion.

Public API:

- :func:`extract_rich_text` -- rich_text array → inline Markdown.
- :func:`escape_table_cell` -- make text safe inside a table cell.
- :func:`convert_block_to_markdown` -- one block → Markdown fragment.
- :func:`convert_block_children_to_markdown` -- block listing → document.
- :func:`convert_page_to_markdown` -- page properties → document.
- :func:`convert_database_to_markdown` -- database schema → document.
- :func:`convert_list_databases_to_markdown` -- database search results.
"""

from notion_mcp.converter.databases import (
    convert_database_to_markdown,
    convert_list_databases_to_markdown,
)
from notion_mcp.converter.inline_renderer import escape_table_cell, extract_rich_text
from notion_mcp.converter.notion_to_md import (
    convert_block_children_to_markdown,
    convert_block_to_markdown,
)
from notion_mcp.converter.pages import convert_page_to_markdown

__all__ = [
    "convert_block_children_to_markdown",
    "convert_block_to_markdown",
    "convert_database_to_markdown",
    "convert_list_databases_to_markdown",
    "convert_page_to_markdown",
    "escape_table_cell",
    "extract_rich_text",
]
