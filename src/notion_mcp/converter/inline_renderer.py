"""Inline rendering: Notion rich_text arrays to Markdown strings.

Two leaf helpers shared by every block, page and database renderer:

* :func:`extract_rich_text` -- a rich_text array to inline Markdown.
* :func:`escape_table_cell` -- make a string safe inside a table cell.

Neither function escapes general Markdown syntax in the text itself;
Notion's ``plain_text`` is emitted as-is and only annotation markers and
links are added around it.
"""

from __future__ import annotations

from typing import Any


def extract_rich_text(segments: Any) -> str:
    """Render a Notion rich_text array to an inline Markdown string.

    Annotation wrapping order (innermost first)::

        code -> bold -> italic -> strikethrough -> link

    Markers are concatenated literally, so a bold italic segment renders
    as ``***text***``.  ``underline`` and ``color`` have no Markdown form
    and are ignored.

    Parameters
    ----------
    segments:
        A list of rich_text objects.  ``None``, non-list values and
        non-dict items are tolerated and contribute nothing.

    Returns
    -------
    str
        The rendered Markdown, or ``""`` for empty/malformed input.
    """
    if not segments or not isinstance(segments, list):
        return ""

    parts: list[str] = []

    for seg in segments:
        if not isinstance(seg, dict):
            continue

        text = seg.get("plain_text") or ""
        if not isinstance(text, str):
            text = str(text)

        annotations = seg.get("annotations")
        if isinstance(annotations, dict):
            if annotations.get("code"):
                text = f"`{text}`"
            if annotations.get("bold"):
                text = f"**{text}**"
            if annotations.get("italic"):
                text = f"*{text}*"
            if annotations.get("strikethrough"):
                text = f"~~{text}~~"

        # Link (outermost wrapping)
        href = seg.get("href")
        if href:
            text = f"[{text}]({href})"

        parts.append(text)

    return "".join(parts)


def escape_table_cell(text: Any) -> str:
    """Escape characters that would break a Markdown table cell.

    Pipes become ``\\|``, newlines become a single space, and ``+``
    becomes ``\\+``, applied in that order.

    >>> escape_table_cell("a|b\\nc+d")
    'a\\\\|b c\\\\+d'
    """
    if text is None or text == "":
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text.replace("|", "\\|").replace("\n", " ").replace("+", "\\+")
