"""Tests for converter/notion_to_md.py: per-block rendering and block listings."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from notion_mcp.converter.notion_to_md import (
    MORE_RESULTS_NOTICE,
    convert_block_children_to_markdown,
    convert_block_to_markdown,
    resolve_file_url,
)


def _seg(text, href=None, **annotations):
    return {
        "type": "text",
        "text": {"content": text},
        "plain_text": text,
        "annotations": {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
            **annotations,
        },
        "href": href,
    }


def make_block(block_type, payload=None, block_id="blk-1"):
    return {
        "object": "block",
        "id": block_id,
        "type": block_type,
        block_type: payload if payload is not None else {},
    }


def rich(text):
    return {"rich_text": [_seg(text)]}


# ---------------------------------------------------------------------------
# Text blocks
# ---------------------------------------------------------------------------

class TestTextBlocks:
    def test_paragraph(self):
        assert convert_block_to_markdown(make_block("paragraph", rich("Hello"))) == "Hello"

    def test_paragraph_with_annotations(self):
        block = make_block("paragraph", {"rich_text": [_seg("Hi", bold=True)]})
        assert convert_block_to_markdown(block) == "**Hi**"

    def test_empty_paragraph(self):
        assert convert_block_to_markdown(make_block("paragraph", {"rich_text": []})) == ""

    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_headings(self, level):
        block = make_block(f"heading_{level}", rich("Title"))
        assert convert_block_to_markdown(block) == f"{'#' * level} Title"

    def test_bulleted_list_item(self):
        assert convert_block_to_markdown(make_block("bulleted_list_item", rich("a"))) == "- a"

    def test_numbered_list_item_always_one(self):
        assert convert_block_to_markdown(make_block("numbered_list_item", rich("x"))) == "1. x"

    def test_to_do_checked(self):
        block = make_block("to_do", {**rich("Buy milk"), "checked": True})
        assert convert_block_to_markdown(block) == "- [x] Buy milk"

    def test_to_do_unchecked(self):
        block = make_block("to_do", {**rich("Buy milk"), "checked": False})
        assert convert_block_to_markdown(block) == "- [ ] Buy milk"

    def test_to_do_missing_checked(self):
        assert convert_block_to_markdown(make_block("to_do", rich("t"))) == "- [ ] t"

    def test_quote(self):
        assert convert_block_to_markdown(make_block("quote", rich("wise"))) == "> wise"

    def test_template(self):
        block = make_block("template", rich("Add task"))
        assert convert_block_to_markdown(block) == "*Template Block: Add task*"


class TestToggle:
    def test_toggle_placeholder(self):
        md = convert_block_to_markdown(make_block("toggle", rich("More")))
        assert md == (
            "<details>\n<summary>More</summary>\n\n"
            "*Additional API request is needed to display child blocks*\n\n</details>"
        )

    def test_toggle_children_not_expanded(self):
        block = make_block("toggle", rich("More"))
        block["has_children"] = True
        block["children"] = [make_block("paragraph", rich("hidden"))]
        assert "hidden" not in convert_block_to_markdown(block)


class TestCodeBlock:
    def test_code_with_language(self):
        block = make_block("code", {**rich("print(1)"), "language": "python"})
        assert convert_block_to_markdown(block) == "```python\nprint(1)\n```"

    def test_code_default_language(self):
        assert convert_block_to_markdown(make_block("code", rich("x"))) == "```plaintext\nx\n```"


class TestCallout:
    def test_callout_with_emoji(self):
        block = make_block(
            "callout", {**rich("Note"), "icon": {"type": "emoji", "emoji": "💡"}}
        )
        assert convert_block_to_markdown(block) == "> 💡 Note"

    def test_callout_without_icon(self):
        assert convert_block_to_markdown(make_block("callout", rich("Note"))) == ">  Note"

    def test_callout_non_emoji_icon_ignored(self):
        block = make_block(
            "callout",
            {**rich("Note"), "icon": {"type": "external", "external": {"url": "u"}}},
        )
        assert convert_block_to_markdown(block) == ">  Note"


# ---------------------------------------------------------------------------
# Media and links
# ---------------------------------------------------------------------------

class TestMediaBlocks:
    def test_image_external(self):
        block = make_block(
            "image",
            {"type": "external", "external": {"url": "https://img/a.png"},
             "caption": [_seg("Cat")]},
        )
        assert convert_block_to_markdown(block) == "![Cat](https://img/a.png)"

    def test_image_uploaded_file(self):
        block = make_block(
            "image", {"type": "file", "file": {"url": "https://s3/a.png"}, "caption": []}
        )
        assert convert_block_to_markdown(block) == "![](https://s3/a.png)"

    def test_image_unknown_source(self):
        block = make_block("image", {"type": "file_upload", "file_upload": {"id": "u1"}})
        assert convert_block_to_markdown(block) == "![]()"

    def test_video(self):
        block = make_block(
            "video",
            {"type": "external", "external": {"url": "https://yt/v"}, "caption": [_seg("Demo")]},
        )
        assert convert_block_to_markdown(block) == "🎬 [Demo](https://yt/v)"

    def test_audio(self):
        block = make_block(
            "audio",
            {"type": "external", "external": {"url": "https://a/s.mp3"}, "caption": [_seg("Song")]},
        )
        assert convert_block_to_markdown(block) == "🔊 [Song](https://a/s.mp3)"

    def test_pdf(self):
        block = make_block(
            "pdf",
            {"type": "file", "file": {"url": "https://s3/doc.pdf"}, "caption": [_seg("Spec")]},
        )
        assert convert_block_to_markdown(block) == "📄 [Spec](https://s3/doc.pdf)"

    def test_file_uses_name(self):
        block = make_block(
            "file",
            {"type": "file", "file": {"url": "https://s3/r.zip"}, "name": "r.zip",
             "caption": [_seg("Release")]},
        )
        assert convert_block_to_markdown(block) == "📎 [r.zip](https://s3/r.zip)"

    def test_file_falls_back_to_caption(self):
        block = make_block(
            "file",
            {"type": "external", "external": {"url": "https://x/f"}, "caption": [_seg("Cap")]},
        )
        assert convert_block_to_markdown(block) == "📎 [Cap](https://x/f)"

    def test_file_falls_back_to_generic_label(self):
        block = make_block("file", {"type": "external", "external": {"url": "https://x/f"}})
        assert convert_block_to_markdown(block) == "📎 [File](https://x/f)"


class TestLinkBlocks:
    def test_bookmark_with_caption(self):
        block = make_block("bookmark", {"url": "https://a.io", "caption": [_seg("A")]})
        assert convert_block_to_markdown(block) == "[A](https://a.io)"

    def test_bookmark_caption_falls_back_to_url(self):
        block = make_block("bookmark", {"url": "https://a.io", "caption": []})
        assert convert_block_to_markdown(block) == "[https://a.io](https://a.io)"

    def test_embed(self):
        block = make_block("embed", {"url": "https://maps/x"})
        assert convert_block_to_markdown(block) == (
            '<iframe src="https://maps/x" frameborder="0"></iframe>'
        )

    def test_link_preview(self):
        block = make_block("link_preview", {"url": "https://github.com/o/r"})
        assert convert_block_to_markdown(block) == "🔗 [Preview](https://github.com/o/r)"

    def test_link_to_page(self):
        block = make_block("link_to_page", {"type": "page_id", "page_id": "pg-9"})
        assert convert_block_to_markdown(block) == "🔗 **Link to page**: `pg-9`"

    def test_link_to_database(self):
        block = make_block("link_to_page", {"type": "database_id", "database_id": "db-9"})
        assert convert_block_to_markdown(block) == "🔗 **Link to database**: `db-9`"

    def test_link_to_comment_target(self):
        block = make_block("link_to_page", {"type": "comment_id", "comment_id": "c-1"})
        assert convert_block_to_markdown(block) == "🔗 **Link to page**: ``"


# ---------------------------------------------------------------------------
# Structural blocks
# ---------------------------------------------------------------------------

class TestStructuralBlocks:
    def test_divider(self):
        assert convert_block_to_markdown(make_block("divider")) == "---"

    def test_equation(self):
        block = make_block("equation", {"expression": "e^{i\\pi}+1=0"})
        assert convert_block_to_markdown(block) == "$$e^{i\\pi}+1=0$$"

    def test_table_placeholder(self):
        block = make_block("table", {"table_width": 3, "has_column_header": True})
        assert convert_block_to_markdown(block) == (
            "*Table data (3 columns) - Additional API request is needed to display details*"
        )

    def test_table_row(self):
        block = make_block("table_row", {"cells": [[_seg("a")], [_seg("b")]]})
        assert convert_block_to_markdown(block) == "| a | b |"

    def test_table_row_escapes_cells(self):
        block = make_block("table_row", {"cells": [[_seg("a|b")], [_seg("1+1\nx")]]})
        assert convert_block_to_markdown(block) == "| a\\|b | 1\\+1 x |"

    def test_table_row_empty_cells(self):
        assert convert_block_to_markdown(make_block("table_row", {"cells": []})) == (
            "*Empty table row*"
        )

    def test_table_row_missing_cells(self):
        assert convert_block_to_markdown(make_block("table_row")) == "*Empty table row*"

    def test_table_row_each_cell_extracted_then_escaped(self):
        block = make_block("table_row", {"cells": [[_seg("a")], [_seg("b")]]})
        with patch(
            "notion_mcp.converter.notion_to_md.extract_rich_text", return_value="x"
        ) as extract, patch(
            "notion_mcp.converter.notion_to_md.escape_table_cell", return_value="y"
        ) as escape:
            md = convert_block_to_markdown(block)
        assert extract.call_count == 2
        assert escape.call_count == 2
        escape.assert_called_with("x")
        assert md == "| y | y |"

    def test_child_page(self):
        block = make_block("child_page", {"title": "Roadmap"})
        assert convert_block_to_markdown(block) == "📄 **Child Page**: Roadmap"

    def test_child_database(self):
        block = make_block("child_database", {"title": "Tasks"}, block_id="db-42")
        assert convert_block_to_markdown(block) == "📊 **Embedded Database**: `db-42`"

    def test_synced_block_original(self):
        block = make_block("synced_block", {"synced_from": None})
        assert convert_block_to_markdown(block) == (
            "*Synced Block (original) - Additional API request is needed to display content*"
        )

    def test_synced_block_duplicate(self):
        block = make_block(
            "synced_block", {"synced_from": {"type": "block_id", "block_id": "src-1"}}
        )
        assert convert_block_to_markdown(block) == (
            "*Synced Block (`src-1`) - Additional API request is needed to display content*"
        )

    def test_table_of_contents(self):
        assert convert_block_to_markdown(make_block("table_of_contents")) == "[TOC]"

    def test_breadcrumb(self):
        assert convert_block_to_markdown(make_block("breadcrumb")) == "[breadcrumb navigation]"

    def test_unsupported(self):
        assert convert_block_to_markdown(make_block("unsupported")) == "*Unsupported block*"


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

class TestFallbacks:
    def test_none_block(self):
        assert convert_block_to_markdown(None) == ""

    def test_unknown_type_placeholder(self):
        block = make_block("ai_block", {"prompt": "x"})
        assert convert_block_to_markdown(block) == "*Unsupported block type: ai_block*"

    def test_partial_block_renders_json_dump(self):
        partial = {"object": "block", "id": "abc"}
        md = convert_block_to_markdown(partial)
        assert md.startswith("```json\n")
        assert md.endswith("\n```")
        assert json.loads(md[len("```json\n"):-len("\n```")]) == partial

    def test_partial_block_dump_is_indented(self):
        md = convert_block_to_markdown({"object": "block", "id": "abc"})
        assert '\n  "id": "abc"' in md

    def test_non_dict_block_dumped(self):
        assert convert_block_to_markdown("junk") == '```json\n"junk"\n```'

    def test_missing_payload_does_not_raise(self):
        block = {"object": "block", "id": "b", "type": "heading_1"}
        assert convert_block_to_markdown(block) == "# "

    def test_payload_of_wrong_type_does_not_raise(self):
        block = {"object": "block", "id": "b", "type": "to_do", "to_do": ["bad"]}
        assert convert_block_to_markdown(block) == "- [ ] "

    def test_rendering_is_deterministic(self):
        block = make_block("callout", {**rich("x"), "icon": {"type": "emoji", "emoji": "⚠"}})
        assert convert_block_to_markdown(block) == convert_block_to_markdown(block)


class TestResolveFileUrl:
    def test_external(self):
        assert resolve_file_url({"type": "external", "external": {"url": "e"}}) == "e"

    def test_file(self):
        assert resolve_file_url({"type": "file", "file": {"url": "f"}}) == "f"

    def test_other(self):
        assert resolve_file_url({"type": "file_upload"}) == ""

    def test_not_a_dict(self):
        assert resolve_file_url(None) == ""


# ---------------------------------------------------------------------------
# Block listings
# ---------------------------------------------------------------------------

class TestConvertBlockChildren:
    def test_header_and_join(self):
        response = {
            "object": "list",
            "results": [
                make_block("heading_1", rich("Title"), block_id="1"),
                make_block("paragraph", rich("Body"), block_id="2"),
                make_block("divider", block_id="3"),
            ],
            "next_cursor": None,
            "has_more": False,
        }
        assert convert_block_children_to_markdown(response) == (
            "# Block Contents\n\n# Title\n\nBody\n\n---"
        )

    def test_empty_results(self):
        response = {"results": [], "next_cursor": None, "has_more": False}
        assert convert_block_children_to_markdown(response) == "# Block Contents\n\n"

    def test_has_more_with_cursor(self):
        response = {
            "results": [make_block("paragraph", rich("p"))],
            "next_cursor": "cur-123",
            "has_more": True,
        }
        md = convert_block_children_to_markdown(response)
        assert md.endswith(
            f"p\n{MORE_RESULTS_NOTICE}\n> Next cursor: `cur-123`\n"
        )

    def test_has_more_without_cursor(self):
        response = {
            "results": [make_block("paragraph", rich("p"))],
            "next_cursor": None,
            "has_more": True,
        }
        md = convert_block_children_to_markdown(response)
        assert md.endswith(f"{MORE_RESULTS_NOTICE}\n")
        assert "Next cursor" not in md

    def test_no_notice_when_complete(self):
        response = {"results": [], "next_cursor": "ignored", "has_more": False}
        md = convert_block_children_to_markdown(response)
        assert "More results" not in md
        assert "ignored" not in md

    def test_order_preserved(self):
        results = [make_block("paragraph", rich(str(i)), block_id=str(i)) for i in range(5)]
        md = convert_block_children_to_markdown({"results": results, "has_more": False})
        assert md == "# Block Contents\n\n0\n\n1\n\n2\n\n3\n\n4"

    def test_mixed_partial_and_unknown(self):
        response = {
            "results": [
                {"object": "block", "id": "p1"},
                make_block("mystery"),
                None,
            ],
            "has_more": False,
        }
        md = convert_block_children_to_markdown(response)
        assert "```json" in md
        assert "*Unsupported block type: mystery*" in md

    def test_malformed_response(self):
        assert convert_block_children_to_markdown(None) == "# Block Contents\n\n"
        assert convert_block_children_to_markdown({"results": "x"}) == "# Block Contents\n\n"

    def test_children_not_fetched_or_expanded(self):
        parent = make_block("paragraph", rich("parent"))
        parent["has_children"] = True
        md = convert_block_children_to_markdown({"results": [parent], "has_more": False})
        assert md == "# Block Contents\n\nparent"
