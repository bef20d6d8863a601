"""Notion block objects to Markdown.

Converts one Notion block (a dict as returned by the API) into a Markdown
fragment, and a ``GET /blocks/{id}/children`` listing into a small
Markdown document.

Rendering is one level deep.  Container blocks (toggles, tables, synced
blocks, child pages) are summarised with a placeholder that tells the
caller another request is needed; the renderer itself never fetches or
recurses into children.

Nothing in this module raises on malformed input.  ``None`` renders as
``""``, partial block references render as a fenced JSON dump of the raw
object, and unknown block types render as a placeholder naming the type.

Usage::

    from notion_mcp.converter.notion_to_md import (
        convert_block_children_to_markdown,
    )

    md = convert_block_children_to_markdown(response)
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from notion_mcp.models import BlockType, is_full_block

from .inline_renderer import escape_table_cell, extract_rich_text

TOGGLE_CHILDREN_NOTE = "*Additional API request is needed to display child blocks*"
EMPTY_TABLE_ROW = "*Empty table row*"
UNSUPPORTED_BLOCK = "*Unsupported block*"
MORE_RESULTS_NOTICE = (
    "> More results available. Use `start_cursor` parameter with the next request."
)


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------


def convert_block_to_markdown(block: Any) -> str:
    """Render a single Notion block to a Markdown fragment.

    Parameters
    ----------
    block:
        A block object.  May be ``None``, a partial block reference, or a
        block of a type this renderer does not know.

    Returns
    -------
    str
        The Markdown fragment, without a trailing newline.
    """
    if block is None:
        return ""

    if not is_full_block(block):
        return _render_partial(block)

    tag = block.get("type")
    block_type = BlockType.parse(tag)
    if block_type is None:
        return f"*Unsupported block type: {tag}*"

    payload = _as_dict(block.get(block_type.value))
    return _BLOCK_RENDERERS[block_type](block, payload)


def convert_block_children_to_markdown(response: Any) -> str:
    """Render a block-children listing to a Markdown document.

    Each block in ``response["results"]`` is rendered with
    :func:`convert_block_to_markdown` and fragments are separated by a
    blank line, in listing order.  When ``has_more`` is set a notice is
    appended, followed by the literal ``next_cursor`` when present.
    """
    response = _as_dict(response)
    results = response.get("results")
    if not isinstance(results, list):
        results = []

    converted = [convert_block_to_markdown(item) for item in results]
    markdown = "# Block Contents\n\n" + "\n\n".join(converted)

    if response.get("has_more"):
        markdown += f"\n{MORE_RESULTS_NOTICE}\n"
        next_cursor = response.get("next_cursor")
        if next_cursor:
            markdown += f"> Next cursor: `{next_cursor}`\n"

    return markdown


def resolve_file_url(payload: Any) -> str:
    """Return the URL of a Notion file object.

    Shared by image, video, audio, pdf and file blocks: ``external``
    sources keep their URL under ``external.url``, Notion-hosted uploads
    under ``file.url``.  Any other source type yields ``""``.
    """
    payload = _as_dict(payload)
    source = payload.get("type")
    if source not in ("external", "file"):
        return ""
    url = _as_dict(payload.get(source)).get("url")
    return url if isinstance(url, str) else ""


# ------------------------------------------------------------------
# Block type renderers
# ------------------------------------------------------------------


def _render_partial(block: Any) -> str:
    dumped = json.dumps(block, indent=2, ensure_ascii=False, default=str)
    return f"```json\n{dumped}\n```"


def _render_paragraph(block: dict, data: dict) -> str:
    return extract_rich_text(data.get("rich_text"))


def _render_heading_1(block: dict, data: dict) -> str:
    return f"# {extract_rich_text(data.get('rich_text'))}"


def _render_heading_2(block: dict, data: dict) -> str:
    return f"## {extract_rich_text(data.get('rich_text'))}"


def _render_heading_3(block: dict, data: dict) -> str:
    return f"### {extract_rich_text(data.get('rich_text'))}"


def _render_bulleted_list_item(block: dict, data: dict) -> str:
    return f"- {extract_rich_text(data.get('rich_text'))}"


def _render_numbered_list_item(block: dict, data: dict) -> str:
    # Every item is "1."; Markdown renderers number consecutive items.
    return f"1. {extract_rich_text(data.get('rich_text'))}"


def _render_to_do(block: dict, data: dict) -> str:
    checkbox = "[x]" if data.get("checked") else "[ ]"
    return f"- {checkbox} {extract_rich_text(data.get('rich_text'))}"


def _render_toggle(block: dict, data: dict) -> str:
    summary = extract_rich_text(data.get("rich_text"))
    return (
        f"<details>\n<summary>{summary}</summary>\n\n"
        f"{TOGGLE_CHILDREN_NOTE}\n\n</details>"
    )


def _render_code(block: dict, data: dict) -> str:
    language = data.get("language") or "plaintext"
    code_text = extract_rich_text(data.get("rich_text"))
    return f"```{language}\n{code_text}\n```"


def _render_quote(block: dict, data: dict) -> str:
    return f"> {extract_rich_text(data.get('rich_text'))}"


def _render_callout(block: dict, data: dict) -> str:
    icon = _as_dict(data.get("icon"))
    emoji = (icon.get("emoji") or "") if icon.get("type") == "emoji" else ""
    return f"> {emoji} {extract_rich_text(data.get('rich_text'))}"


def _render_divider(block: dict, data: dict) -> str:
    return "---"


def _render_image(block: dict, data: dict) -> str:
    caption = extract_rich_text(data.get("caption"))
    return f"![{caption}]({resolve_file_url(data)})"


def _render_video(block: dict, data: dict) -> str:
    caption = extract_rich_text(data.get("caption"))
    return f"🎬 [{caption}]({resolve_file_url(data)})"


def _render_audio(block: dict, data: dict) -> str:
    caption = extract_rich_text(data.get("caption"))
    return f"🔊 [{caption}]({resolve_file_url(data)})"


def _render_pdf(block: dict, data: dict) -> str:
    caption = extract_rich_text(data.get("caption"))
    return f"📄 [{caption}]({resolve_file_url(data)})"


def _render_file(block: dict, data: dict) -> str:
    name = data.get("name") or extract_rich_text(data.get("caption")) or "File"
    return f"📎 [{name}]({resolve_file_url(data)})"


def _render_bookmark(block: dict, data: dict) -> str:
    url = data.get("url") or ""
    caption = extract_rich_text(data.get("caption")) or url
    return f"[{caption}]({url})"


def _render_embed(block: dict, data: dict) -> str:
    url = data.get("url") or ""
    return f'<iframe src="{url}" frameborder="0"></iframe>'


def _render_link_preview(block: dict, data: dict) -> str:
    url = data.get("url") or ""
    return f"🔗 [Preview]({url})"


def _render_equation(block: dict, data: dict) -> str:
    expression = data.get("expression") or ""
    return f"$${expression}$$"


def _render_table(block: dict, data: dict) -> str:
    width = data.get("table_width") or 0
    return (
        f"*Table data ({width} columns) - "
        "Additional API request is needed to display details*"
    )


def _render_table_row(block: dict, data: dict) -> str:
    cells = data.get("cells")
    if not cells or not isinstance(cells, list):
        return EMPTY_TABLE_ROW
    rendered = [escape_table_cell(extract_rich_text(cell)) for cell in cells]
    return f"| {' | '.join(rendered)} |"


def _render_child_page(block: dict, data: dict) -> str:
    return f"📄 **Child Page**: {data.get('title') or ''}"


def _render_child_database(block: dict, data: dict) -> str:
    return f"📊 **Embedded Database**: `{block.get('id', '')}`"


def _render_link_to_page(block: dict, data: dict) -> str:
    link_text = "Link to page"
    link_id = ""
    target = data.get("type")
    if target == "page_id":
        link_id = data.get("page_id") or ""
    elif target == "database_id":
        link_text = "Link to database"
        link_id = data.get("database_id") or ""
    return f"🔗 **{link_text}**: `{link_id}`"


def _render_synced_block(block: dict, data: dict) -> str:
    synced_from = _as_dict(data.get("synced_from"))
    origin = f"`{synced_from.get('block_id', '')}`" if synced_from else "original"
    return (
        f"*Synced Block ({origin}) - "
        "Additional API request is needed to display content*"
    )


def _render_template(block: dict, data: dict) -> str:
    return f"*Template Block: {extract_rich_text(data.get('rich_text'))}*"


def _render_table_of_contents(block: dict, data: dict) -> str:
    return "[TOC]"


def _render_breadcrumb(block: dict, data: dict) -> str:
    return "[breadcrumb navigation]"


def _render_unsupported(block: dict, data: dict) -> str:
    return UNSUPPORTED_BLOCK


# ------------------------------------------------------------------
# Block renderer dispatch table
# ------------------------------------------------------------------

_BlockRenderer = Callable[[dict, dict], str]

_BLOCK_RENDERERS: dict[BlockType, _BlockRenderer] = {
    BlockType.PARAGRAPH: _render_paragraph,
    BlockType.HEADING_1: _render_heading_1,
    BlockType.HEADING_2: _render_heading_2,
    BlockType.HEADING_3: _render_heading_3,
    BlockType.BULLETED_LIST_ITEM: _render_bulleted_list_item,
    BlockType.NUMBERED_LIST_ITEM: _render_numbered_list_item,
    BlockType.TO_DO: _render_to_do,
    BlockType.TOGGLE: _render_toggle,
    BlockType.CODE: _render_code,
    BlockType.QUOTE: _render_quote,
    BlockType.CALLOUT: _render_callout,
    BlockType.DIVIDER: _render_divider,
    BlockType.IMAGE: _render_image,
    BlockType.VIDEO: _render_video,
    BlockType.AUDIO: _render_audio,
    BlockType.FILE: _render_file,
    BlockType.PDF: _render_pdf,
    BlockType.BOOKMARK: _render_bookmark,
    BlockType.EMBED: _render_embed,
    BlockType.LINK_PREVIEW: _render_link_preview,
    BlockType.EQUATION: _render_equation,
    BlockType.TABLE: _render_table,
    BlockType.TABLE_ROW: _render_table_row,
    BlockType.CHILD_PAGE: _render_child_page,
    BlockType.CHILD_DATABASE: _render_child_database,
    BlockType.LINK_TO_PAGE: _render_link_to_page,
    BlockType.SYNCED_BLOCK: _render_synced_block,
    BlockType.TEMPLATE: _render_template,
    BlockType.TABLE_OF_CONTENTS: _render_table_of_contents,
    BlockType.BREADCRUMB: _render_breadcrumb,
    BlockType.UNSUPPORTED: _render_unsupported,
}

# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _as_dict(value: Any) -> dict:
    """Return *value* if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}
