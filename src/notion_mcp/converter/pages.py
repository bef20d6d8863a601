"""Notion page objects to Markdown.

A page is rendered as its title, a two-column property table, a note
pointing at the block-children tool (page content is not part of the
page object), and a link back to Notion.

Property values are formatted per property ``type``; unknown types
render as ``(Unsupported property type)`` so new Notion property kinds
never break rendering.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from notion_mcp.models import is_full_page

from .inline_renderer import escape_table_cell, extract_rich_text

UNSUPPORTED_PROPERTY = "(Unsupported property type)"


def convert_page_to_markdown(page: Any) -> str:
    """Render a page object to Markdown.

    Returns ``""`` when *page* is not a fully hydrated page object.
    Properties are listed in the order of the ``properties`` mapping.
    """
    if not is_full_page(page):
        return ""

    markdown = ""

    title = extract_page_title(page)
    if title:
        markdown += f"# {title}\n\n"

    markdown += convert_properties_to_markdown(page.get("properties"))

    markdown += (
        "\n\n> This page contains child blocks. "
        "You can retrieve them using `retrieveBlockChildren`.\n"
    )
    markdown += f"> Block ID: `{page.get('id', '')}`\n"

    url = page.get("url")
    if url:
        markdown += f"\n[View in Notion]({url})\n"

    return markdown


def extract_page_title(page: Any) -> str:
    """Return the rendered value of the page's ``title`` property."""
    properties = page.get("properties") if isinstance(page, dict) else None
    if not isinstance(properties, dict):
        return ""

    for prop in properties.values():
        if (
            isinstance(prop, dict)
            and prop.get("type") == "title"
            and isinstance(prop.get("title"), list)
        ):
            return extract_rich_text(prop["title"])
    return ""


def convert_properties_to_markdown(properties: Any) -> str:
    """Render a page's property values as a ``Property | Value`` table."""
    if not isinstance(properties, dict):
        return ""

    markdown = "## Properties\n\n"
    markdown += "| Property | Value |\n"
    markdown += "|------------|----|\n"

    for name, prop in properties.items():
        value = format_property_value(prop)
        markdown += f"| {escape_table_cell(name)} | {escape_table_cell(value)} |\n"

    return markdown


def format_property_value(prop: Any) -> str:
    """Format one page property value as plain table-cell text."""
    if not isinstance(prop, dict):
        return UNSUPPORTED_PROPERTY
    kind = prop.get("type")
    formatter = _PROPERTY_FORMATTERS.get(kind) if isinstance(kind, str) else None
    if formatter is None:
        return UNSUPPORTED_PROPERTY
    return formatter(prop.get(kind))


# ------------------------------------------------------------------
# Property value formatters
# ------------------------------------------------------------------


def _format_rich_text(value: Any) -> str:
    return extract_rich_text(value)


def _format_number(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_named(value: Any) -> str:
    """select / status: the option name."""
    return _as_str(_as_dict(value).get("name"))


def _format_multi_select(value: Any) -> str:
    return ", ".join(_as_str(_as_dict(item).get("name")) for item in _as_list(value))


def _format_date(value: Any) -> str:
    value = _as_dict(value)
    start = _as_str(value.get("start"))
    end = _as_str(value.get("end"))
    return f"{start} → {end}" if end else start


def _format_people(value: Any) -> str:
    people = (_as_dict(person) for person in _as_list(value))
    return ", ".join(_as_str(p.get("name")) or _as_str(p.get("id")) for p in people)


def _format_files(value: Any) -> str:
    links: list[str] = []
    for item in _as_list(value):
        item = _as_dict(item)
        url = (
            _as_dict(item.get("file")).get("url")
            or _as_dict(item.get("external")).get("url")
            or "#"
        )
        links.append(f"[{item.get('name') or 'Attachment'}]({url})")
    return ", ".join(links)


def _format_checkbox(value: Any) -> str:
    return "✓" if value else "✗"


def _format_plain(value: Any) -> str:
    """url / email / phone_number / created_time / last_edited_time."""
    return _as_str(value)


def _format_formula(value: Any) -> str:
    value = _as_dict(value)
    kind = value.get("type")
    result = value.get(kind) if isinstance(kind, str) else None
    if kind == "number":
        return _format_number(result)
    if kind == "boolean":
        return "" if result is None else str(bool(result)).lower()
    if kind == "date":
        return _as_str(_as_dict(result).get("start"))
    if kind == "string":
        return _as_str(result)
    return ""


def _format_relation(value: Any) -> str:
    return ", ".join(f"`{_as_dict(rel).get('id', '')}`" for rel in _as_list(value))


def _format_rollup(value: Any) -> str:
    value = _as_dict(value)
    kind = value.get("type")
    if kind == "array":
        return json.dumps(
            value.get("array") or [],
            separators=(",", ":"),
            ensure_ascii=False,
            default=str,
        )
    if kind == "number":
        return _format_number(value.get("number"))
    if kind == "date":
        return _as_str(_as_dict(value.get("date")).get("start"))
    return ""


def _format_user(value: Any) -> str:
    """created_by / last_edited_by: the user id."""
    return _as_str(_as_dict(value).get("id"))


def _format_unique_id(value: Any) -> str:
    value = _as_dict(value)
    number = _format_number(value.get("number"))
    prefix = value.get("prefix")
    return f"{prefix}-{number}" if prefix and number else number


_PROPERTY_FORMATTERS: dict[str, Callable[[Any], str]] = {
    "title": _format_rich_text,
    "rich_text": _format_rich_text,
    "number": _format_number,
    "select": _format_named,
    "status": _format_named,
    "multi_select": _format_multi_select,
    "date": _format_date,
    "people": _format_people,
    "files": _format_files,
    "checkbox": _format_checkbox,
    "url": _format_plain,
    "email": _format_plain,
    "phone_number": _format_plain,
    "formula": _format_formula,
    "relation": _format_relation,
    "rollup": _format_rollup,
    "created_by": _format_user,
    "last_edited_by": _format_user,
    "created_time": _format_plain,
    "last_edited_time": _format_plain,
    "unique_id": _format_unique_id,
}


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""
