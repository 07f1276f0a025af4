"""Tests for markdiff.nodes: immutable tree nodes."""

import dataclasses
import typing

import pytest

from markdiff.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    Document,
    Heading,
    Inline,
    List,
    ListItem,
    Paragraph,
    Table,
    TableRow,
    Text,
    ThematicBreak,
    nesting_depth,
)


def _para(content: str) -> Paragraph:
    return Paragraph(children=(Text(content=content),))


class TestNodeValues:
    """Nodes are frozen values compared structurally."""

    def test_frozen(self) -> None:
        node = Text(content="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.content = "y"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        assert _para("a") == _para("a")
        assert _para("a") != _para("b")

    def test_different_kinds_never_equal(self) -> None:
        assert Paragraph(children=()) != Document(children=())

    def test_hashable(self) -> None:
        assert len({_para("a"), _para("a"), _para("b")}) == 2

    def test_defaults(self) -> None:
        assert CodeBlock(code="x").language is None
        block = List(items=())
        assert block.ordered is False
        assert block.start is None
        assert Table(alignments=(), head=TableRow(cells=())).body == ()

    def test_fieldless_nodes_equal(self) -> None:
        assert ThematicBreak() == ThematicBreak()


class TestNestingDepth:
    """Quote and list-item nesting."""

    def test_flat(self) -> None:
        assert nesting_depth([_para("a"), Heading(level=1, children=())]) == 0

    def test_empty(self) -> None:
        assert nesting_depth([]) == 0

    def test_quote(self) -> None:
        assert nesting_depth([BlockQuote(children=(_para("a"),))]) == 1

    def test_nested_quote(self) -> None:
        inner = BlockQuote(children=(_para("a"),))
        assert nesting_depth([BlockQuote(children=(inner,))]) == 2

    def test_list_items(self) -> None:
        nested = List(items=(ListItem(children=(_para("b"),)),))
        outer = List(items=(ListItem(children=(_para("a"), nested)),))
        assert nesting_depth([outer]) == 2

    def test_deepest_branch_wins(self) -> None:
        shallow = BlockQuote(children=(_para("a"),))
        deep = BlockQuote(children=(BlockQuote(children=(BlockQuote(children=()),)),))
        assert nesting_depth([shallow, deep]) == 3


class TestAnnotations:
    """Field annotations name the node aliases defined later in the module."""

    def test_inline_children_resolve(self) -> None:
        assert typing.get_type_hints(Paragraph)["children"] == tuple[Inline, ...]

    def test_block_children_resolve(self) -> None:
        assert typing.get_type_hints(BlockQuote)["children"] == tuple[Block, ...]
        assert typing.get_type_hints(Document)["children"] == tuple[Block, ...]
