"""Unit-test suite for the `richtext.staging.html` module."""

from __future__ import annotations

import logging

import pytest

from richtext.documents.elements import (
    EMPTY_STYLE,
    Block,
    BlockType,
    Chunk,
    InlineStyle,
    WrapperBlock,
    style_set,
)
from richtext.documents.registry import BlockSpec, InlineStyleSpec, TagRegistry
from richtext.errors import UnhandledTypeError
from richtext.staging.html import HtmlRenderer, blocks_to_html, editor_state_to_html
from test_richtext.unit_utils import ol_item, raw_block, tag_tree, ul_item, uniform

BOLD = style_set(InlineStyle.BOLD)
ITALIC = style_set(InlineStyle.ITALIC)
UNDERLINE = style_set(InlineStyle.UNDERLINE)
CODE = style_set(InlineStyle.CODE)

UNDERLINE_OPEN = '<span style="text-decoration:underline;">'


class Describe_blocks_to_html:
    """Unit-test suite for `richtext.staging.html.blocks_to_html()`."""

    def it_renders_an_empty_document_as_an_empty_string(self):
        assert blocks_to_html([]) == ""

    def it_renders_an_unstyled_block_as_a_paragraph(self):
        assert blocks_to_html([raw_block("Hello")]) == "<p>Hello</p>"

    def it_wraps_only_the_styled_characters(self):
        assert blocks_to_html([raw_block("Hi", styles=[EMPTY_STYLE, BOLD])]) == (
            "<p>H<strong>i</strong></p>"
        )

    def it_renders_an_empty_block_as_an_empty_element(self):
        assert blocks_to_html([raw_block("", BlockType.HEADER_ONE)]) == "<h1></h1>"

    @pytest.mark.parametrize(
        ("block_type", "expected_value"),
        [
            (BlockType.HEADER_ONE, "<h1>x</h1>"),
            (BlockType.HEADER_TWO, "<h2>x</h2>"),
            (BlockType.HEADER_THREE, "<h3>x</h3>"),
            (BlockType.HEADER_FOUR, "<h4>x</h4>"),
            (BlockType.HEADER_FIVE, "<h5>x</h5>"),
            (BlockType.HEADER_SIX, "<h6>x</h6>"),
            (BlockType.BLOCKQUOTE, "<blockquote>x</blockquote>"),
            (BlockType.CODE_BLOCK, "<pre>x</pre>"),
            (BlockType.UNORDERED_LIST_ITEM, "<ul><li>x</li></ul>"),
            (BlockType.ORDERED_LIST_ITEM, "<ol><li>x</li></ol>"),
        ],
    )
    def it_renders_each_block_type_with_its_registered_tag(
        self, block_type: str, expected_value: str
    ):
        assert blocks_to_html([raw_block("x", block_type)]) == expected_value

    def it_concatenates_top_level_renderings_without_separators(self):
        html = blocks_to_html(
            [raw_block("Title", BlockType.HEADER_ONE), raw_block("a"), raw_block("b")]
        )

        assert html == "<h1>Title</h1><p>a</p><p>b</p>"

    def it_nests_list_items_by_depth(self):
        html = blocks_to_html([ul_item("A", 0), ul_item("B", 1), ul_item("C", 1), ul_item("D", 0)])

        assert html == "<ul><li>A<ul><li>B</li><li>C</li></ul></li><li>D</li></ul>"

    def and_it_uses_the_outer_tag_of_the_list_kind(self):
        html = blocks_to_html([ol_item("A", 0), ol_item("B", 1), ol_item("C", 1), ol_item("D", 0)])

        assert html == "<ol><li>A<ol><li>B</li><li>C</li></ol></li><li>D</li></ol>"

    def it_starts_a_new_list_when_the_list_kind_changes(self):
        assert blocks_to_html([ul_item("a"), ol_item("b")]) == (
            "<ul><li>a</li></ul><ol><li>b</li></ol>"
        )

    def it_renders_deeply_nested_lists_as_well_formed_markup(self):
        html = blocks_to_html(
            [
                ul_item("a", 0),
                ul_item("b", 1),
                ol_item("c", 2),
                ol_item("d", 2),
                ul_item("e", 1),
                ul_item("f", 0),
                raw_block("after"),
            ]
        )

        assert html == (
            "<ul>"
            "<li>a"
            "<ul><li>b<ol><li>c</li><li>d</li></ol></li><li>e</li></ul>"
            "</li>"
            "<li>f</li>"
            "</ul>"
            "<p>after</p>"
        )
        assert tag_tree(html) == [
            ("ul", 0),
            ("li", 1),
            ("ul", 2),
            ("li", 3),
            ("ol", 4),
            ("li", 5),
            ("li", 5),
            ("li", 3),
            ("li", 1),
            ("p", 0),
        ]

    def it_puts_a_list_that_starts_below_depth_zero_in_an_empty_item(self):
        assert blocks_to_html([ul_item("a", 1), ul_item("b", 0)]) == (
            "<ul><li><ul><li>a</li></ul></li><li>b</li></ul>"
        )

    def it_embeds_text_verbatim_by_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("RICHTEXT_ESCAPE_TEXT", raising=False)

        assert blocks_to_html([raw_block("a < b & c")]) == "<p>a < b & c</p>"

    def it_escapes_text_when_asked_to(self):
        assert blocks_to_html([raw_block("<b>&")], escape_text=True) == (
            "<p>&lt;b&gt;&amp;</p>"
        )

    def and_it_escapes_text_when_the_environment_says_so(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RICHTEXT_ESCAPE_TEXT", "true")

        assert blocks_to_html([raw_block("<b>")]) == "<p>&lt;b&gt;</p>"

    def but_an_explicit_argument_overrides_the_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RICHTEXT_ESCAPE_TEXT", "true")

        assert blocks_to_html([raw_block("<b>")], escape_text=False) == "<p><b></p>"

    def it_is_deterministic(self):
        raw_blocks = [
            raw_block("Hi", BlockType.HEADER_ONE, styles=[BOLD, ITALIC]),
            ul_item("a"),
            ul_item("b", 1),
        ]

        assert blocks_to_html(raw_blocks) == blocks_to_html(list(raw_blocks))

    def it_raises_on_a_block_type_missing_from_the_registry(self):
        with pytest.raises(UnhandledTypeError, match="Unhandled block type: 'atomic'"):
            blocks_to_html([raw_block("ok"), raw_block("x", "atomic")])

    def it_renders_against_a_custom_registry(self):
        registry = TagRegistry.new(
            {BlockType.UNSTYLED: BlockSpec("blockquote")},
            {},
            {InlineStyle.BOLD: InlineStyleSpec(css={"font-weight": "bold"})},
        )

        assert blocks_to_html([raw_block("x", styles=[BOLD])], registry) == (
            '<blockquote><span style="font-weight:bold;">x</span></blockquote>'
        )

    def it_is_also_available_under_the_editor_name(self):
        assert editor_state_to_html is blocks_to_html


class DescribeHtmlRenderer:
    """Unit-test suite for `richtext.staging.html.HtmlRenderer`."""

    def it_applies_a_tag_style(self):
        block = Block(BlockType.UNSTYLED, (Chunk("x", ITALIC),))

        assert HtmlRenderer().apply_inline_styles(block) == "<em>x</em>"

    def it_applies_a_css_style_as_a_span(self):
        block = Block(BlockType.UNSTYLED, (Chunk("u", UNDERLINE),))

        assert HtmlRenderer().apply_inline_styles(block) == f"{UNDERLINE_OPEN}u</span>"

    def it_renders_the_code_style_with_the_editor_code_css(self):
        block = Block(BlockType.UNSTYLED, (Chunk("x", CODE),))

        assert HtmlRenderer().apply_inline_styles(block) == (
            '<span style="'
            "background-color:rgba(0, 0, 0, 0.5);"
            "font-family:&quot;Inconsolata&quot;, &quot;Menlo&quot;, &quot;Consolas&quot;, "
            "monospace;"
            "font-size:16px;"
            "padding:2px;"
            '">x</span>'
        )

    def it_nests_styles_in_registry_declaration_order_first_declared_innermost(self):
        # -- the style-set has no order of its own; only the registry order counts --
        block = Block(BlockType.UNSTYLED, (Chunk("text", frozenset(["ITALIC", "BOLD"])),))

        assert HtmlRenderer().apply_inline_styles(block) == "<em><strong>text</strong></em>"

    def it_wraps_tag_styles_inside_css_styles_declared_after_them(self):
        block = Block(BlockType.UNSTYLED, (Chunk("x", style_set("UNDERLINE", "BOLD")),))

        assert HtmlRenderer().apply_inline_styles(block) == (
            f"{UNDERLINE_OPEN}<strong>x</strong></span>"
        )

    def it_renders_each_chunk_separately(self):
        block = Block(
            BlockType.UNSTYLED,
            (Chunk("12", BOLD), Chunk("3", BOLD | ITALIC), Chunk("4")),
        )

        assert HtmlRenderer().apply_inline_styles(block) == (
            "<strong>12</strong><em><strong>3</strong></em>4"
        )

    def it_ignores_styles_the_registry_does_not_declare(self):
        block = Block(BlockType.UNSTYLED, (Chunk("x", style_set("STRIKETHROUGH")),))

        assert HtmlRenderer().apply_inline_styles(block) == "x"

    def it_renders_a_block_with_every_character_in_the_same_style(self):
        raw = raw_block("bold", styles=uniform(BOLD, "bold"))

        assert blocks_to_html([raw]) == "<p><strong>bold</strong></p>"

    def it_raises_on_a_wrapper_type_missing_from_the_registry(self):
        document = [WrapperBlock("checklist", (Block(BlockType.UNORDERED_LIST_ITEM),))]

        with pytest.raises(UnhandledTypeError, match="Unhandled wrapper type: 'checklist'"):
            HtmlRenderer().render(document)

    def it_logs_a_summary_at_detail_level(self, caplog: pytest.LogCaptureFixture):
        caplog.set_level(logging.DEBUG, logger="richtext")

        HtmlRenderer().render([Block(BlockType.UNSTYLED, (Chunk("x"),))])

        assert "rendered 1 blocks in 1 top-level nodes to 8 characters" in caplog.text
