"""Token-stream parser producing the typed document tree.

Markdown tokenizing is delegated to markdown-it-py (CommonMark plus the GFM
table and strikethrough rules). markdown-it emits a flat stream of
open/close token pairs with ``inline`` tokens carrying child tokens; this
module folds that stream into nested frozen nodes.

Token kinds the tree does not model (link reference definitions, front
matter from plugins, etc.) are skipped.

Thread Safety:
- Parser instances are single-use. Create one per parse operation.
- The shared MarkdownIt instance is only read after construction.
- The resulting tree is immutable and safe to share across threads.

"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt

from markdiff.errors import ParseError
from markdiff.nodes import (
    Alignment,
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Document,
    Emphasis,
    Heading,
    HtmlBlock,
    HtmlInline,
    Image,
    Inline,
    LineBreak,
    Link,
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
from markdiff.utils.logger import get_logger

if TYPE_CHECKING:
    from markdown_it.token import Token

logger = get_logger(__name__)

# Inline container tokens: open type -> (close type, node class)
_INLINE_CONTAINERS: dict[str, tuple[str, type[Emphasis | Strong | Strikethrough]]] = {
    "em_open": ("em_close", Emphasis),
    "strong_open": ("strong_close", Strong),
    "s_open": ("s_close", Strikethrough),
}

_ALIGNMENTS: dict[str, Alignment] = {
    "text-align:left": "left",
    "text-align:center": "center",
    "text-align:right": "right",
}


@cache
def markdown_it() -> MarkdownIt:
    """Return the shared tokenizer: CommonMark with tables and strikethrough."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


class Parser:
    """Fold a markdown-it token stream into document blocks.

    Usage:
        >>> parser = Parser("# Hello\\n\\nWorld")
        >>> parser.parse()
        [Heading(level=1, children=(Text(content='Hello'),)), Paragraph(...)]

    """

    __slots__ = ("_pos", "_source", "_tokens")

    def __init__(self, source: str) -> None:
        self._source = source
        self._tokens: list[Token] = []
        self._pos = 0

    def parse(self) -> list[Block]:
        """Parse the source into a list of top-level blocks."""
        self._tokens = markdown_it().parse(self._source)
        self._pos = 0
        return self._parse_blocks(stop=None)

    # -- Block level -----------------------------------------------------------

    def _parse_blocks(self, stop: str | None) -> list[Block]:
        """Parse blocks until a ``stop`` token (consumed) or end of stream."""
        blocks: list[Block] = []
        tokens = self._tokens
        while self._pos < len(tokens):
            tok = tokens[self._pos]
            if tok.type == stop:
                self._pos += 1
                return blocks
            self._pos += 1
            match tok.type:
                case "paragraph_open":
                    blocks.append(Paragraph(children=self._inline_content("paragraph_close")))
                case "heading_open":
                    level = int(tok.tag[1:])
                    children = self._inline_content("heading_close")
                    blocks.append(Heading(level=level, children=children))  # type: ignore[arg-type]
                case "blockquote_open":
                    blocks.append(BlockQuote(children=tuple(self._parse_blocks("blockquote_close"))))
                case "fence":
                    language = tok.info.strip() or None
                    blocks.append(CodeBlock(code=tok.content, language=language))
                case "code_block":
                    blocks.append(CodeBlock(code=tok.content))
                case "bullet_list_open":
                    items = self._parse_list_items("bullet_list_close")
                    blocks.append(List(items=items))
                case "ordered_list_open":
                    # markdown-it only sets "start" when it is not 1
                    start = tok.attrGet("start")
                    items = self._parse_list_items("ordered_list_close")
                    blocks.append(
                        List(items=items, ordered=True, start=1 if start is None else int(start))
                    )
                case "hr":
                    blocks.append(ThematicBreak())
                case "html_block":
                    blocks.append(HtmlBlock(html=tok.content))
                case "table_open":
                    blocks.append(self._parse_table())
                case _:
                    logger.debug("Skipping block token %r", tok.type)
        return blocks

    def _parse_list_items(self, close: str) -> tuple[ListItem, ...]:
        items: list[ListItem] = []
        tokens = self._tokens
        while self._pos < len(tokens):
            tok = tokens[self._pos]
            self._pos += 1
            if tok.type == close:
                break
            if tok.type == "list_item_open":
                items.append(ListItem(children=tuple(self._parse_blocks("list_item_close"))))
        return tuple(items)

    def _parse_table(self) -> Table:
        alignments: list[Alignment] = []
        head = TableRow(cells=())
        body: list[TableRow] = []
        in_head = False
        tokens = self._tokens
        while self._pos < len(tokens):
            tok = tokens[self._pos]
            self._pos += 1
            match tok.type:
                case "table_close":
                    break
                case "thead_open":
                    in_head = True
                case "thead_close":
                    in_head = False
                case "tr_open":
                    cells, aligns = self._parse_table_row()
                    if in_head:
                        head = TableRow(cells=cells)
                        alignments = aligns
                    else:
                        body.append(TableRow(cells=cells))
        return Table(alignments=tuple(alignments), head=head, body=tuple(body))

    def _parse_table_row(self) -> tuple[tuple[TableCell, ...], list[Alignment]]:
        cells: list[TableCell] = []
        aligns: list[Alignment] = []
        tokens = self._tokens
        while self._pos < len(tokens):
            tok = tokens[self._pos]
            self._pos += 1
            if tok.type == "tr_close":
                break
            if tok.type in ("th_open", "td_open"):
                style = tok.attrGet("style")
                aligns.append(_ALIGNMENTS.get(str(style)) if style else None)
                close = "th_close" if tok.type == "th_open" else "td_close"
                cells.append(TableCell(children=self._inline_content(close)))
        return tuple(cells), aligns

    def _inline_content(self, close: str) -> tuple[Inline, ...]:
        """Read the inline token between an open token and its ``close``."""
        children: tuple[Inline, ...] = ()
        tokens = self._tokens
        while self._pos < len(tokens):
            tok = tokens[self._pos]
            self._pos += 1
            if tok.type == close:
                break
            if tok.type == "inline":
                children = parse_inline_tokens(tok.children or [])
        return children


# -- Inline level --------------------------------------------------------------


def parse_inline_tokens(tokens: list[Token]) -> tuple[Inline, ...]:
    """Fold the child tokens of a markdown-it ``inline`` token into nodes."""
    inlines, _ = _parse_inlines(tokens, 0, stop=None)
    return tuple(inlines)


def _parse_inlines(tokens: list[Token], pos: int, stop: str | None) -> tuple[list[Inline], int]:
    inlines: list[Inline] = []
    while pos < len(tokens):
        tok = tokens[pos]
        pos += 1
        if tok.type == stop:
            break
        match tok.type:
            case "text" | "text_special":
                _append_text(inlines, tok.content)
            case "code_inline":
                inlines.append(CodeSpan(code=tok.content))
            case "softbreak":
                inlines.append(SoftBreak())
            case "hardbreak":
                inlines.append(LineBreak())
            case "html_inline":
                inlines.append(HtmlInline(html=tok.content))
            case "em_open" | "strong_open" | "s_open":
                close, node_cls = _INLINE_CONTAINERS[tok.type]
                children, pos = _parse_inlines(tokens, pos, stop=close)
                inlines.append(node_cls(children=tuple(children)))
            case "link_open":
                children, pos = _parse_inlines(tokens, pos, stop="link_close")
                inlines.append(
                    Link(
                        url=str(tok.attrGet("href") or ""),
                        title=_title(tok),
                        children=tuple(children),
                    )
                )
            case "image":
                alt = parse_inline_tokens(tok.children or [])
                inlines.append(Image(url=str(tok.attrGet("src") or ""), title=_title(tok), children=alt))
            case _:
                logger.debug("Skipping inline token %r", tok.type)
    return inlines, pos


def _append_text(inlines: list[Inline], content: str) -> None:
    """Append text, merging with a preceding text node."""
    if not content:
        return
    if inlines and isinstance(inlines[-1], Text):
        inlines[-1] = Text(content=inlines[-1].content + content)
    else:
        inlines.append(Text(content=content))


def _title(tok: Token) -> str | None:
    title = tok.attrGet("title")
    return str(title) if title else None


def parse(source: str) -> Document:
    """Parse Markdown source into a document tree.

    Args:
        source: Markdown source text

    Returns:
        Document root node

    Raises:
        ParseError: If ``source`` is not a string.
    """
    if not isinstance(source, str):
        msg = f"expected Markdown text (str), got {type(source).__name__}"
        raise ParseError(msg)
    return Document(children=tuple(Parser(source).parse()))
