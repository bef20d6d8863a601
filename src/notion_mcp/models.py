"""Data model helpers for Notion API objects.

Notion objects are consumed as the plain dicts the API returns; this
module only names their discriminators.  :class:`BlockType` is the closed
set of block tags the renderer knows, and :class:`Hydration` makes the
"reference-only versus fully hydrated" distinction an explicit two-state
value derived structurally from the dict.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

ObjectKind = Literal["block", "page", "database"]


class BlockType(str, Enum):
    """Every block ``type`` tag with a dedicated Markdown rendering."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    CODE = "code"
    QUOTE = "quote"
    CALLOUT = "callout"
    DIVIDER = "divider"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"
    PDF = "pdf"
    BOOKMARK = "bookmark"
    EMBED = "embed"
    LINK_PREVIEW = "link_preview"
    EQUATION = "equation"
    TABLE = "table"
    TABLE_ROW = "table_row"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    LINK_TO_PAGE = "link_to_page"
    SYNCED_BLOCK = "synced_block"
    TEMPLATE = "template"
    TABLE_OF_CONTENTS = "table_of_contents"
    BREADCRUMB = "breadcrumb"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, tag: Any) -> BlockType | None:
        """Return the member for *tag*, or ``None`` for unknown tags."""
        try:
            return cls(tag)
        except (TypeError, ValueError):
            return None


class Hydration(str, Enum):
    """Whether an API object carries its full type-specific payload."""

    PARTIAL = "partial"
    """Only ``id`` (and sometimes ``object``/``type``) is guaranteed."""

    FULL = "full"
    """The complete object as returned to an integration with access."""


# Key that must be present, beyond a matching ``object``, for a full object.
_FULL_MARKERS: dict[str, str] = {
    "block": "type",
    "page": "url",
    "database": "title",
}


def hydration(obj: Any, kind: ObjectKind) -> Hydration:
    """Classify *obj* as a full or partial Notion object of *kind*.

    An object is full when its ``object`` field equals *kind* and it
    carries the kind's marker key (``type`` for blocks, ``url`` for
    pages, ``title`` for databases).  Anything else, including
    non-dict input, is partial.
    """
    if not isinstance(obj, dict):
        return Hydration.PARTIAL
    if obj.get("object") != kind or _FULL_MARKERS[kind] not in obj:
        return Hydration.PARTIAL
    return Hydration.FULL


def is_full_block(obj: Any) -> bool:
    return hydration(obj, "block") is Hydration.FULL


def is_full_page(obj: Any) -> bool:
    return hydration(obj, "page") is Hydration.FULL


def is_full_database(obj: Any) -> bool:
    return hydration(obj, "database") is Hydration.FULL
