"""Whole-block change markers.

Marks an entire block as removed (strikethrough) or added (strong) when no
finer pairing is possible. The two directions share one set of rules and
differ only in the wrapping inline node.

Rules per variant:
- Paragraph, Heading: content wrapped in one marker span, heading level kept
- CodeBlock: demoted to a paragraph holding one marked code span (trailing
  newlines trimmed, inner newlines turned into spaces, language dropped)
- BlockQuote, List: same container, every child block wrapped recursively
- Table: same shape, every header and body cell wrapped on its own
- ThematicBreak: paragraph holding the marked literal ``---``
- HtmlBlock: paragraph holding the marked raw HTML as literal text, one
  line per source line joined by soft breaks, blank lines dropped

Thread Safety:
    Pure functions. Input trees are never mutated.

"""

from collections.abc import Callable

from markdiff.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Heading,
    HtmlBlock,
    Inline,
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

type Marker = Callable[[tuple[Inline, ...]], Inline]


def _strike(children: tuple[Inline, ...]) -> Inline:
    return Strikethrough(children=children)


def _strong(children: tuple[Inline, ...]) -> Inline:
    return Strong(children=children)


def wrap_removed(block: Block) -> Block:
    """Mark a whole block as removed."""
    return wrap_block(block, _strike)


def wrap_added(block: Block) -> Block:
    """Mark a whole block as added."""
    return wrap_block(block, _strong)


def wrap_block(block: Block, mark: Marker) -> Block:
    """Wrap every piece of visible content in ``block`` with ``mark``.

    Args:
        block: Block to wrap
        mark: Builds the marker inline from the content it wraps

    Returns:
        New block; the input is left untouched.
    """
    match block:
        case Paragraph():
            return Paragraph(children=(mark(block.children),))
        case Heading():
            return Heading(level=block.level, children=(mark(block.children),))
        case CodeBlock():
            code = CodeSpan(code=block.code.rstrip("\n").replace("\n", " "))
            return Paragraph(children=(mark((code,)),))
        case BlockQuote():
            return BlockQuote(children=tuple(wrap_block(child, mark) for child in block.children))
        case List():
            items = tuple(
                ListItem(children=tuple(wrap_block(child, mark) for child in item.children))
                for item in block.items
            )
            return List(items=items, ordered=block.ordered, start=block.start)
        case ThematicBreak():
            return Paragraph(children=(mark((Text(content="---"),)),))
        case Table():
            return Table(
                alignments=block.alignments,
                head=_wrap_row(block.head, mark),
                body=tuple(_wrap_row(row, mark) for row in block.body),
            )
        case HtmlBlock():
            return Paragraph(children=(mark(_literal_lines(block.html)),))
        case _:
            msg = f"Unknown block type: {type(block).__name__}"
            raise TypeError(msg)


def _wrap_row(row: TableRow, mark: Marker) -> TableRow:
    return TableRow(cells=tuple(TableCell(children=(mark(cell.children),)) for cell in row.cells))


def _literal_lines(text: str) -> tuple[Inline, ...]:
    children: list[Inline] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if children:
            children.append(SoftBreak())
        children.append(Text(content=line))
    return tuple(children)


__all__ = [
    "wrap_added",
    "wrap_block",
    "wrap_removed",
]
