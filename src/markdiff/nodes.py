"""Typed document tree for markdiff.

All nodes are frozen dataclasses with slots:
- Structural equality: two trees are equal iff their text, child ordering
  and nesting are identical. The aligner relies on this for "Equal".
- Immutability: the differ never mutates its inputs, it builds new trees.
- Pattern matching: Python 3.10+ match statements work naturally

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── CodeBlock
│   ├── BlockQuote
│   ├── List
│   ├── ListItem
│   ├── ThematicBreak
│   ├── Table (TableRow, TableCell)
│   └── HtmlBlock
└── Inline (inline elements)
    ├── Text
    ├── CodeSpan
    ├── Emphasis
    ├── Strong
    ├── Strikethrough
    ├── Link
    ├── Image
    ├── SoftBreak
    ├── LineBreak
    └── HtmlInline

Nodes carry no source locations. Two blocks parsed from different versions
of a document must compare equal when their content is equal.

"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

type Alignment = Literal["left", "center", "right"] | None

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes."""


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content.

    The most common inline node, representing literal text.

    """

    content: str


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`

    """

    code: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text. Also marks added content in a diff.

    Markdown: **text** or __text__

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Strikethrough text. Also marks removed content in a diff.

    Markdown: ~~deleted~~

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title")

    """

    url: str
    title: str | None
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image. ``children`` holds the alt text as inline content.

    Markdown: ![alt](url "title")

    """

    url: str
    title: str | None
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in paragraph)."""


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break.

    Markdown: two trailing spaces before a newline

    """


@dataclass(frozen=True, slots=True)
class HtmlInline(Node):
    """Inline raw HTML, passed through unchanged."""

    html: str


# PEP 695 type alias for inline elements
type Inline = (
    Text
    | CodeSpan
    | Emphasis
    | Strong
    | Strikethrough
    | Link
    | Image
    | SoftBreak
    | LineBreak
    | HtmlInline
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block.

    Markdown: Text separated by blank lines

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading. Always rendered back as ATX.

    Markdown: # Heading

    """

    level: Literal[1, 2, 3, 4, 5, 6]
    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote. Children are a full block sequence.

    Markdown: > quoted text

    """

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced or indented code block.

    ``code`` is the literal content, usually ending with a newline.
    ``language`` is the fence info string, or None when absent.

    """

    code: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item. Children are a full block sequence.

    Markdown: - item or 1. item

    """

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list.

    ``start`` is None for unordered lists and the first number otherwise.

    """

    items: tuple[ListItem, ...]
    ordered: bool = False
    start: int | None = None


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule).

    Markdown: --- or *** or ___

    """


@dataclass(frozen=True, slots=True)
class TableCell(Node):
    """Table cell content."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class TableRow(Node):
    """Table row."""

    cells: tuple[TableCell, ...]


@dataclass(frozen=True, slots=True)
class Table(Node):
    """Table (GFM-style).

    Markdown:
        | A | B |
        |---|---|
        | 1 | 2 |

    """

    alignments: tuple[Alignment, ...]
    head: TableRow
    body: tuple[TableRow, ...] = ()


@dataclass(frozen=True, slots=True)
class HtmlBlock(Node):
    """Raw HTML block, passed through unchanged."""

    html: str


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node.

    Contains all top-level blocks in the document.

    """

    children: tuple[Block, ...]


# PEP 695 type alias for block elements
type Block = (
    Paragraph
    | Heading
    | BlockQuote
    | CodeBlock
    | List
    | ThematicBreak
    | Table
    | HtmlBlock
)


def nesting_depth(blocks: Iterable[Block]) -> int:
    """Return the deepest container nesting in a block sequence.

    Block quotes and list items each add one level. A sequence of leaf
    blocks has depth 0.
    """
    deepest = 0
    for block in blocks:
        match block:
            case BlockQuote():
                deepest = max(deepest, 1 + nesting_depth(block.children))
            case List():
                for item in block.items:
                    deepest = max(deepest, 1 + nesting_depth(item.children))
    return deepest
