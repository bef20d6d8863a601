"""Notion database objects to Markdown.

Renders a database's title, description and property *schema* (not its
rows) as a three-column table, and a list of databases returned by a
search as one document.
"""

from __future__ import annotations

from typing import Any

from notion_mcp.models import is_full_database

from .inline_renderer import escape_table_cell, extract_rich_text

# Fixed "Details" labels for property types without interesting config.
_PROPERTY_LABELS: dict[str, str] = {
    "created_by": "User reference",
    "last_edited_by": "User reference",
    "created_time": "Timestamp",
    "last_edited_time": "Timestamp",
    "date": "Date or date range",
    "email": "Email address",
    "files": "File attachments",
    "people": "People reference",
    "phone_number": "Phone number",
    "rich_text": "Formatted text",
    "title": "Database title",
    "url": "URL link",
    "checkbox": "Boolean value",
    "unique_id": "Auto-incrementing ID",
}


def convert_list_databases_to_markdown(response: Any) -> str:
    """Render every database in ``response["results"]``.

    Each result goes through :func:`convert_database_to_markdown`; partial
    results therefore contribute an empty section.
    """
    results = response.get("results") if isinstance(response, dict) else None
    if not isinstance(results, list):
        results = []
    converted = [convert_database_to_markdown(db) for db in results]
    return "# Search Results (Databases)\n\n" + "\n\n".join(converted)


def convert_database_to_markdown(database: Any) -> str:
    """Render a database object's schema to Markdown.

    Returns ``""`` when *database* is not a fully hydrated database.
    """
    if not is_full_database(database):
        return ""

    markdown = ""

    title = extract_rich_text(database.get("title"))
    if title:
        markdown += f"# {title} (Database)\n\n"

    description = extract_rich_text(database.get("description"))
    if description:
        markdown += f"{description}\n\n"

    properties = database.get("properties")
    if isinstance(properties, dict):
        markdown += "## Properties\n\n"
        markdown += "| Property Name | Type | Details |\n"
        markdown += "|------------|------|------|\n"

        for key, prop in properties.items():
            prop = prop if isinstance(prop, dict) else {}
            name = prop.get("name") or key
            prop_type = prop.get("type") or ""
            details = describe_property(prop)
            markdown += (
                f"| {escape_table_cell(name)} | {escape_table_cell(prop_type)} "
                f"| {escape_table_cell(details)} |\n"
            )

        markdown += "\n"

    url = database.get("url")
    if url:
        markdown += f"\n[View in Notion]({url})\n"

    return markdown


def describe_property(prop: dict) -> str:
    """Return the "Details" cell for one property schema entry."""
    prop_type = prop.get("type")
    if not isinstance(prop_type, str):
        return ""
    config = prop.get(prop_type)
    config = config if isinstance(config, dict) else {}

    if prop_type in ("select", "multi_select", "status"):
        options = config.get("options")
        names = [
            opt.get("name") if isinstance(opt.get("name"), str) else ""
            for opt in (options if isinstance(options, list) else [])
            if isinstance(opt, dict)
        ]
        return f"Options: {', '.join(names)}"
    if prop_type == "relation":
        return f"Related DB: {config.get('database_id') or ''}"
    if prop_type == "formula":
        return f"Formula: {config.get('expression') or ''}"
    if prop_type == "rollup":
        return f"Rollup: {config.get('function') or ''}"
    if prop_type == "number":
        return f"Format: {config.get('format') or 'plain number'}"
    return _PROPERTY_LABELS.get(prop_type, "")
