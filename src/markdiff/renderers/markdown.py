"""Markdown renderer: turns a document tree back into CommonMark text.

The output re-parses to an equal tree for trees produced by
``markdiff.parser``. Text is literal: every character that could open
inline markup is backslash-escaped, and so is a block marker (``#``, ``>``,
``-``, ``+``, ``=``, ``1.``, ``1)``) at the start of a line. Diff markers
survive a further parse/render cycle: strikethrough renders as
``~~...~~`` and strong as ``**...**``.

Example:
    >>> from markdiff import parse
    >>> from markdiff.renderers.markdown import render_markdown
    >>> render_markdown(parse("Title\\n=====\\n\\n* a\\n* b"))
    '# Title\\n\\n- a\\n- b\\n'
    >>> render_markdown(parse("\\\\*not emphasis\\\\*"))
    '\\\\*not emphasis\\\\*\\n'

Thread Safety:
    MarkdownRenderer holds no per-render state. Every call builds its own
    StringBuilder, so one instance can be shared freely.

"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

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
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableRow,
    Text,
    ThematicBreak,
)
from markdiff.stringbuilder import StringBuilder

_BACKTICK_RUN = re.compile(r"`+")
_TILDE_RUN = re.compile(r"~+")

# Inline openers anywhere in text. An underscore between two alphanumerics
# cannot open or close emphasis; "&" only matters before an entity.
_INLINE_SPECIAL = re.compile(r"[\\`*~\[\]<]|(?<![^\W_])_|_(?![^\W_])|&(?=#?\w+;)")
_BLOCK_START = re.compile(
    r" {0,3}(?:(?P<marker>[#>+=-])|(?P<number>\d{1,9})(?=[.)](?:[ \t]|$)))"
)
_CLOSING_HASHES = re.compile(r"(?:^|(?<=[ \t]))#+$")

_ALIGN_RULES: dict[Alignment, str] = {
    None: "---",
    "left": ":--",
    "center": ":-:",
    "right": "--:",
}


def _longest_run(pattern: re.Pattern[str], s: str) -> int:
    return max((len(m) for m in pattern.findall(s)), default=0)


@dataclass(slots=True)
class _InlineState:
    """Where the next inline lands in the output of its block."""

    line_start: bool
    # Table cells escape pipes once over the whole cell
    pipes: bool = True


class MarkdownRenderer:
    """Render a document tree to Markdown text.

    Blocks are separated by one blank line and the output ends with a
    single newline. Quotes prefix every line with ``> ``; list items indent
    continuation lines to the width of their marker.
    """

    __slots__ = ()

    def render(self, node: Document | Iterable[Block]) -> str:
        """Render a document or a block sequence.

        Args:
            node: Document root, or any iterable of blocks

        Returns:
            Markdown text ending in one newline, or "" for no blocks.
        """
        blocks = node.children if isinstance(node, Document) else tuple(node)
        text = self.render_blocks(blocks)
        return f"{text}\n" if text else ""

    def render_blocks(self, blocks: Iterable[Block]) -> str:
        """Render blocks separated by blank lines, without a final newline."""
        sb = StringBuilder()
        previous: Block | None = None
        alternate = False
        for block in blocks:
            if sb:
                sb.append("\n\n")
            if isinstance(block, List):
                # Adjacent lists of the same kind would merge on reparse
                alternate = (
                    isinstance(previous, List)
                    and previous.ordered == block.ordered
                    and not alternate
                )
                self._render_list(block, sb, alternate=alternate)
            else:
                self._render_block(block, sb)
            previous = block
        return sb.build()

    def _render_block(self, block: Block, sb: StringBuilder) -> None:
        match block:
            case Paragraph():
                self._render_inlines(block.children, sb, _InlineState(line_start=True))
            case Heading():
                inner = StringBuilder()
                self._render_inlines(block.children, inner, _InlineState(line_start=True))
                # A trailing run of "#" would be read as a closing sequence
                content = _CLOSING_HASHES.sub(r"\\\g<0>", inner.build())
                sb.append("#" * block.level).append(" ").append(content)
            case BlockQuote():
                sb.append_prefixed(self.render_blocks(block.children), "> ")
            case CodeBlock():
                self._render_code_block(block, sb)
            case List():
                self._render_list(block, sb, alternate=False)
            case ThematicBreak():
                sb.append("---")
            case Table():
                self._render_table(block, sb)
            case HtmlBlock():
                sb.append(block.html.rstrip("\n"))
            case _:
                msg = f"Unknown block type: {type(block).__name__}"
                raise TypeError(msg)

    def _render_code_block(self, block: CodeBlock, sb: StringBuilder) -> None:
        info = block.language or ""
        if "`" in info:
            fence = "~" * max(3, _longest_run(_TILDE_RUN, block.code) + 1)
        else:
            fence = "`" * max(3, _longest_run(_BACKTICK_RUN, block.code) + 1)
        sb.append(fence).append(info).append("\n")
        sb.append(block.code)
        if block.code and not block.code.endswith("\n"):
            sb.append("\n")
        sb.append(fence)

    def _render_list(self, block: List, sb: StringBuilder, *, alternate: bool) -> None:
        start = block.start if block.start is not None else 1
        for i, item in enumerate(block.items):
            if i:
                sb.append("\n")
            if block.ordered:
                marker = f"{start + i}{')' if alternate else '.'} "
            else:
                marker = "* " if alternate else "- "
            inner = self.render_blocks(item.children)
            sb.append_prefixed(inner, " " * len(marker), first=marker)

    def _render_table(self, table: Table, sb: StringBuilder) -> None:
        self._render_table_row(table.head, sb)
        sb.append("\n|")
        for alignment in table.alignments:
            sb.append(" ").append(_ALIGN_RULES[alignment]).append(" |")
        for row in table.body:
            sb.append("\n")
            self._render_table_row(row, sb)

    def _render_table_row(self, row: TableRow, sb: StringBuilder) -> None:
        sb.append("|")
        for cell in row.cells:
            cell_sb = StringBuilder()
            state = _InlineState(line_start=False, pipes=False)
            self._render_inlines(cell.children, cell_sb, state)
            sb.append(" ").append(cell_sb.build().replace("|", "\\|")).append(" |")

    def _render_inlines(
        self, inlines: Iterable[Inline], sb: StringBuilder, state: _InlineState
    ) -> None:
        for inline in inlines:
            self._render_inline(inline, sb, state)

    def _render_inline(self, inline: Inline, sb: StringBuilder, state: _InlineState) -> None:
        match inline:
            case Text():
                sb.append(
                    escape_text(inline.content, line_start=state.line_start, pipes=state.pipes)
                )
                if inline.content.strip(" \t"):
                    state.line_start = inline.content.endswith("\n")
            case CodeSpan():
                sb.append(_code_span(inline.code))
                state.line_start = False
            case Emphasis():
                self._render_wrapped("*", inline.children, "*", sb, state)
            case Strong():
                self._render_wrapped("**", inline.children, "**", sb, state)
            case Strikethrough():
                self._render_wrapped("~~", inline.children, "~~", sb, state)
            case Link():
                close = f"]({_destination(inline.url, inline.title)})"
                self._render_wrapped("[", inline.children, close, sb, state)
            case Image():
                close = f"]({_destination(inline.url, inline.title)})"
                self._render_wrapped("![", inline.children, close, sb, state)
            case SoftBreak():
                sb.append("\n")
                state.line_start = True
            case LineBreak():
                sb.append("  \n")
                state.line_start = True
            case HtmlInline():
                sb.append(inline.html)
                state.line_start = False
            case _:
                msg = f"Unknown inline type: {type(inline).__name__}"
                raise TypeError(msg)

    def _render_wrapped(
        self,
        open_: str,
        children: Iterable[Inline],
        close: str,
        sb: StringBuilder,
        state: _InlineState,
    ) -> None:
        sb.append(open_)
        state.line_start = False
        self._render_inlines(children, sb, state)
        sb.append(close)
        state.line_start = False


def escape_text(text: str, *, line_start: bool = False, pipes: bool = True) -> str:
    """Backslash-escape literal text so it parses back to itself.

    Args:
        text: Literal text; may span several lines
        line_start: The text begins a line of its block
        pipes: Escape ``|`` as well (off inside table cells, which escape
            their pipes once over the whole cell)

    Returns:
        Markdown source for ``text``.

    Example:
        >>> escape_text("1984. A *good* year", line_start=True)
        '1984\\\\. A \\\\*good\\\\* year'
    """
    lines = []
    for i, line in enumerate(text.split("\n")):
        line = _INLINE_SPECIAL.sub(r"\\\g<0>", line)
        if pipes:
            line = line.replace("|", "\\|")
        if line_start or i:
            line = _escape_block_start(line)
        lines.append(line)
    return "\n".join(lines)


def _escape_block_start(line: str) -> str:
    match_ = _BLOCK_START.match(line)
    if match_ is None:
        return line
    at = match_.start("marker") if match_.group("marker") else match_.end()
    return f"{line[:at]}\\{line[at:]}"


def _code_span(code: str) -> str:
    """Delimit a code span so it parses back to exactly ``code``."""
    ticks = "`" * (_longest_run(_BACKTICK_RUN, code) + 1)
    # CommonMark strips one space from each side when both sides have one
    pad = (
        code.startswith("`")
        or code.endswith("`")
        or (code.startswith(" ") and code.endswith(" ") and code.strip(" ") != "")
    )
    if pad:
        return f"{ticks} {code} {ticks}"
    return f"{ticks}{code}{ticks}"


def _destination(url: str, title: str | None) -> str:
    if " " in url or url.count("(") != url.count(")"):
        url = f"<{url}>"
    if title:
        escaped = title.replace("\\", "\\\\").replace('"', '\\"')
        return f'{url} "{escaped}"'
    return url


def render_markdown(node: Document | Iterable[Block]) -> str:
    """Render a document or block sequence to Markdown text.

    Args:
        node: Document root, or any iterable of blocks

    Returns:
        Markdown text ending in one newline, or "" for no blocks.
    """
    return MarkdownRenderer().render(node)
