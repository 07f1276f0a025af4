"""Tests for markdiff.wrapping: whole-block removed/added markers."""

import pytest

from markdiff import parse, render_markdown
from markdiff.nodes import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Heading,
    HtmlBlock,
    List,
    ListItem,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from markdiff.wrapping import wrap_added, wrap_block, wrap_removed


def _text(content: str) -> Text:
    return Text(content=content)


def _para(content: str) -> Paragraph:
    return Paragraph(children=(_text(content),))


class TestWrapRemoved:
    """Strikethrough wrapping per block kind."""

    def test_paragraph(self) -> None:
        block = Paragraph(children=(_text("a "), Strong(children=(_text("b"),))))
        assert wrap_removed(block) == Paragraph(
            children=(Strikethrough(children=block.children),),
        )

    def test_heading_keeps_level(self) -> None:
        block = Heading(level=2, children=(_text("Title"),))
        assert wrap_removed(block) == Heading(
            level=2, children=(Strikethrough(children=(_text("Title"),)),)
        )

    def test_code_block_becomes_code_span_paragraph(self) -> None:
        block = CodeBlock(code="x = 1\n\n", language="python")
        assert wrap_removed(block) == Paragraph(
            children=(Strikethrough(children=(CodeSpan(code="x = 1"),)),),
        )

    def test_blockquote_wraps_children(self) -> None:
        block = BlockQuote(children=(_para("one"), _para("two")))
        assert wrap_removed(block) == BlockQuote(
            children=(
                Paragraph(children=(Strikethrough(children=(_text("one"),)),)),
                Paragraph(children=(Strikethrough(children=(_text("two"),)),)),
            )
        )

    def test_list_keeps_kind_and_start(self) -> None:
        block = List(items=(ListItem(children=(_para("a"),)),), ordered=True, start=4)
        wrapped = wrap_removed(block)
        assert isinstance(wrapped, List)
        assert wrapped.ordered is True
        assert wrapped.start == 4
        assert wrapped.items == (
            ListItem(children=(Paragraph(children=(Strikethrough(children=(_text("a"),)),)),)),
        )

    def test_thematic_break(self) -> None:
        assert wrap_removed(ThematicBreak()) == Paragraph(
            children=(Strikethrough(children=(_text("---"),)),),
        )

    def test_html_block_trims_trailing_newlines(self) -> None:
        assert wrap_removed(HtmlBlock(html="<div>hi</div>\n")) == Paragraph(
            children=(Strikethrough(children=(_text("<div>hi</div>"),)),),
        )

    def test_multiline_html_block_becomes_lines(self) -> None:
        assert wrap_removed(HtmlBlock(html="<div>\n  hi\n\n</div>\n")) == Paragraph(
            children=(
                Strikethrough(
                    children=(_text("<div>"), SoftBreak(), _text("hi"), SoftBreak(), _text("</div>"))
                ),
            ),
        )

    def test_code_block_newlines_become_spaces(self) -> None:
        assert wrap_removed(CodeBlock(code="a = 1\n\nb = 2\n")) == Paragraph(
            children=(Strikethrough(children=(CodeSpan(code="a = 1  b = 2"),)),),
        )

    def test_table_wraps_each_cell(self) -> None:
        table = Table(
            alignments=("left", None),
            head=TableRow(cells=(TableCell(children=(_text("h1"),)), TableCell(children=()))),
            body=(TableRow(cells=(TableCell(children=(_text("c1"),)), TableCell(children=(_text("c2"),)))),),
        )
        wrapped = wrap_removed(table)
        assert isinstance(wrapped, Table)
        assert wrapped.alignments == ("left", None)
        assert wrapped.head.cells[0] == TableCell(children=(Strikethrough(children=(_text("h1"),)),))
        assert wrapped.head.cells[1] == TableCell(children=(Strikethrough(children=()),))
        assert wrapped.body[0].cells[1] == TableCell(children=(Strikethrough(children=(_text("c2"),)),))

    def test_input_unchanged(self) -> None:
        block = BlockQuote(children=(_para("keep"),))
        snapshot = BlockQuote(children=(_para("keep"),))
        wrap_removed(block)
        assert block == snapshot


class TestWrapAdded:
    """Strong wrapping mirrors the removed rules."""

    def test_paragraph(self) -> None:
        assert wrap_added(_para("new")) == Paragraph(children=(Strong(children=(_text("new"),)),))

    def test_code_block(self) -> None:
        assert wrap_added(CodeBlock(code="y\n")) == Paragraph(
            children=(Strong(children=(CodeSpan(code="y"),)),),
        )

    def test_nested_list(self) -> None:
        inner = List(items=(ListItem(children=(_para("b"),)),))
        block = List(items=(ListItem(children=(_para("a"), inner)),))
        out = render_markdown([wrap_added(block)])
        assert out == "- **a**\n\n  - **b**\n"


class TestRenderedWrapping:
    """Rendered output of wrapped blocks."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("Removed paragraph.", "~~Removed paragraph.~~\n"),
            ("## Title", "## ~~Title~~\n"),
            ("> quoted", "> ~~quoted~~\n"),
            ("- a\n- b", "- ~~a~~\n- ~~b~~\n"),
            ("```\nx = 1\n```", "~~`x = 1`~~\n"),
            ("---", "~~---~~\n"),
            ("<div>hi</div>", "~~\\<div>hi\\</div>~~\n"),
            ("<div>\nhi\n</div>", "~~\\<div>\nhi\n\\</div>~~\n"),
            ("| a |\n| --- |\n| 1 |", "| ~~a~~ |\n| --- |\n| ~~1~~ |\n"),
        ],
    )
    def test_removed(self, source: str, expected: str) -> None:
        blocks = parse(source).children
        assert render_markdown([wrap_removed(b) for b in blocks]) == expected

    def test_added_html(self) -> None:
        blocks = parse("<div>hi</div>").children
        assert render_markdown([wrap_added(b) for b in blocks]) == "**\\<div>hi\\</div>**\n"


class TestWrapBlock:
    """Custom markers and unknown nodes."""

    def test_custom_marker(self) -> None:
        def mark(children):  # type: ignore[no-untyped-def]
            return Strong(children=(Strikethrough(children=children),))

        assert render_markdown([wrap_block(_para("x"), mark)]) == "**~~x~~**\n"

    def test_unknown_block_raises(self) -> None:
        with pytest.raises(TypeError, match="Unknown block type"):
            wrap_removed(Document(children=()))  # type: ignore[arg-type]


class TestWrappedOutputReparses:
    """Marked blocks stay one block when the output is parsed again."""

    @pytest.mark.parametrize(
        "source",
        [
            "<div>\nhi\n</div>",
            "<div>\n- not a list\n# not a heading\n</div>",
            "<pre>\nkeep\n\nspacing\n</pre>",
            "```\nfirst\n\n- second\n```",
            "\\# literal hash",
        ],
    )
    def test_removed_block_stays_one_paragraph(self, source: str) -> None:
        (block,) = parse(source).children
        out = render_markdown([wrap_removed(block)])
        assert parse(out).children == (wrap_removed(block),)
