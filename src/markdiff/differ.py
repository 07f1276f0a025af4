"""Structure-aware Markdown diff.

Aligns the top-level blocks of two documents and produces one annotated
document: unchanged blocks pass through verbatim, removed content is struck
through (``~~...~~``) and added content is bold (``**...**``), while list
markers, quote prefixes, headings and tables keep their structure.

Two modes:

- Whole-block diff: every removed or added block is marked as a whole.
- Paired diff: a removed block is paired with a later added block of the
  same shape and the pair is diffed word by word inside the block.

Shapes that pair: Paragraph with Paragraph, Heading with Heading (any
level), BlockQuote with BlockQuote, CodeBlock with CodeBlock (any
language). Lists, tables, thematic breaks and HTML blocks never pair; a
changed list is shown as a whole removal followed by a whole addition.

A changed code block is demoted to a paragraph of inline code spans: a
fence cannot be nested in inline markup. This is the one result that does
not keep the shape of its input.

Example:
    >>> paired_inline_diff("The quick brown fox.\\n", "The slow brown fox.\\n")
    'The ~~quick~~ **slow** brown fox.\\n'

Thread Safety:
    All state (LCS table, pending removals, word runs) is local to a call.

"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from markdiff.align import Add, DiffOp, Equal, Remove, diff_sequences
from markdiff.config import get_diff_config
from markdiff.errors import NestingDepthError
from markdiff.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Heading,
    Inline,
    Paragraph,
    Strikethrough,
    Strong,
    Text,
    nesting_depth,
)
from markdiff.parser import parse
from markdiff.renderers.markdown import render_markdown
from markdiff.text import Word, append_inline, split_words
from markdiff.utils.logger import get_logger
from markdiff.wrapping import wrap_added, wrap_removed

logger = get_logger(__name__)

_PAIRABLE: tuple[type, ...] = (Paragraph, Heading, BlockQuote, CodeBlock)


# =============================================================================
# Public entry points
# =============================================================================


def whole_block_diff(old_text: str, new_text: str) -> str:
    """Diff two Markdown texts, marking changed blocks as a whole.

    Args:
        old_text: Original Markdown
        new_text: Changed Markdown

    Returns:
        Annotated Markdown text.

    Raises:
        ParseError: If either input is not text.
        NestingDepthError: If either input nests deeper than configured.
    """
    old_blocks, new_blocks = _parse_pair(old_text, new_text)
    return render_markdown(diff_blocks(old_blocks, new_blocks, paired=False))


def paired_inline_diff(old_text: str, new_text: str) -> str:
    """Diff two Markdown texts, word-diffing inside matching changed blocks.

    Args:
        old_text: Original Markdown
        new_text: Changed Markdown

    Returns:
        Annotated Markdown text.

    Raises:
        ParseError: If either input is not text.
        NestingDepthError: If either input nests deeper than configured.
    """
    old_blocks, new_blocks = _parse_pair(old_text, new_text)
    return render_markdown(diff_blocks(old_blocks, new_blocks, paired=True))


def diff_blocks(
    old: Sequence[Block],
    new: Sequence[Block],
    *,
    paired: bool = True,
) -> tuple[Block, ...]:
    """Diff two block sequences into one annotated block sequence.

    Args:
        old: Original blocks
        new: Changed blocks
        paired: Pair same-shape removed/added blocks for word-level diffing

    Returns:
        New annotated blocks. Neither input is modified.
    """
    ops = diff_sequences(old, new)
    logger.debug(
        "Aligned %d old / %d new blocks into %d ops (paired=%s)",
        len(old),
        len(new),
        len(ops),
        paired,
    )
    if not paired:
        return tuple(_whole_block(ops))
    return tuple(_paired(ops))


# =============================================================================
# Block orchestration
# =============================================================================


def _parse_pair(old_text: str, new_text: str) -> tuple[tuple[Block, ...], tuple[Block, ...]]:
    old_blocks = parse(old_text).children
    new_blocks = parse(new_text).children
    check_nesting(old_blocks, new_blocks)
    return old_blocks, new_blocks


def check_nesting(old: Sequence[Block], new: Sequence[Block]) -> None:
    """Reject inputs nested deeper than ``DiffConfig.max_nesting_depth``.

    Raises:
        NestingDepthError: If either side exceeds the configured limit.
    """
    limit = get_diff_config().max_nesting_depth
    if limit is None:
        return
    for name, blocks in (("old", old), ("new", new)):
        depth = nesting_depth(blocks)
        if depth > limit:
            raise NestingDepthError(depth, limit, source_name=name)


def _whole_block(ops: list[DiffOp[Block]]) -> list[Block]:
    result: list[Block] = []
    for op in ops:
        match op:
            case Equal():
                result.append(op.value)
            case Remove():
                result.append(wrap_removed(op.value))
            case Add():
                result.append(wrap_added(op.value))
    return result


def _paired(ops: list[DiffOp[Block]]) -> list[Block]:
    result: list[Block] = []
    # Removed blocks not yet emitted; each may still pair with a later Add
    pending: list[Block] = []
    for op in ops:
        match op:
            case Equal():
                _flush_removed(result, pending)
                result.append(op.value)
            case Remove():
                pending.append(op.value)
            case Add():
                added = op.value
                match_index = next(
                    (i for i, removed in enumerate(pending) if same_shape(removed, added)),
                    None,
                )
                if match_index is None:
                    _flush_removed(result, pending)
                    result.append(wrap_added(added))
                else:
                    removed = pending.pop(match_index)
                    logger.debug("Pairing %s blocks for inline diff", type(added).__name__)
                    result.append(diff_block_pair(removed, added))
    _flush_removed(result, pending)
    return result


def _flush_removed(result: list[Block], pending: list[Block]) -> None:
    result.extend(wrap_removed(block) for block in pending)
    pending.clear()


def same_shape(a: Block, b: Block) -> bool:
    """Return True when two blocks can be diffed inside one another."""
    return type(a) is type(b) and isinstance(a, _PAIRABLE)


# =============================================================================
# Variant-specific diffing
# =============================================================================


def diff_block_pair(old: Block, new: Block) -> Block:
    """Diff a removed block against the added block it was paired with.

    Paragraphs and headings are diffed word by word (the old heading level
    is kept). Quotes are diffed recursively through their rendered text.
    Code blocks are diffed as whitespace-separated tokens and demoted to a
    paragraph of code spans unless they are identical. Any other pair is
    shown as a plain removal of ``old``.
    """
    match old, new:
        case Paragraph(), Paragraph():
            return Paragraph(children=diff_inlines(old.children, new.children))
        case Heading(), Heading():
            return Heading(level=old.level, children=diff_inlines(old.children, new.children))
        case BlockQuote(), BlockQuote():
            inner = paired_inline_diff(
                render_markdown(old.children),
                render_markdown(new.children),
            )
            return BlockQuote(children=parse(inner).children)
        case CodeBlock(), CodeBlock():
            if old == new:
                return new
            logger.debug("Demoting changed code block (%s) to a paragraph", new.language)
            return Paragraph(
                children=_diff_words(_code_words(old.code), _code_words(new.code), _join_code)
            )
        case _:
            return wrap_removed(old)


def diff_inlines(old: Sequence[Inline], new: Sequence[Inline]) -> tuple[Inline, ...]:
    """Word-diff two inline sequences into a flat annotated sequence.

    Both sides are flattened to words (formatting dropped). Each run of
    removed words becomes one strikethrough span and each run of added
    words one strong span; unchanged words stay plain text. Code spans
    inside a word still render as code.
    """
    return _diff_words(split_words(old), split_words(new), _join_text)


def _code_words(code: str) -> list[Word]:
    return [Word(text=token, pieces=(CodeSpan(code=token),)) for token in code.split()]


def _join_text(words: Sequence[Word]) -> tuple[Inline, ...]:
    children: list[Inline] = []
    for i, word in enumerate(words):
        if i:
            append_inline(children, Text(content=" "))
        for piece in word.pieces:
            append_inline(children, piece)
    return tuple(children)


def _join_code(words: Sequence[Word]) -> tuple[Inline, ...]:
    return (CodeSpan(code=" ".join(word.text for word in words)),)


@dataclass(slots=True)
class _WordRuns:
    """Accumulates annotated words, collapsing consecutive changes into runs.

    Items are separated by single spaces. A pending removed run is always
    emitted before a pending added run.
    """

    join: Callable[[Sequence[Word]], tuple[Inline, ...]]
    inlines: list[Inline] = field(default_factory=list)
    removed: list[Word] = field(default_factory=list)
    added: list[Word] = field(default_factory=list)

    def equal(self, word: Word) -> None:
        self.flush()
        self._emit(word.pieces)

    def flush(self) -> None:
        if self.removed:
            self._emit((Strikethrough(children=self.join(self.removed)),))
            self.removed.clear()
        if self.added:
            self._emit((Strong(children=self.join(self.added)),))
            self.added.clear()

    def _emit(self, pieces: tuple[Inline, ...]) -> None:
        if self.inlines:
            self.inlines.append(Text(content=" "))
        self.inlines.extend(pieces)


def _diff_words(
    old: Sequence[Word],
    new: Sequence[Word],
    join: Callable[[Sequence[Word]], tuple[Inline, ...]],
) -> tuple[Inline, ...]:
    runs = _WordRuns(join)
    for op in diff_sequences(old, new):
        match op:
            case Equal():
                runs.equal(op.value)
            case Remove():
                runs.removed.append(op.value)
            case Add():
                runs.added.append(op.value)
    runs.flush()
    return tuple(runs.inlines)


__all__ = [
    "check_nesting",
    "diff_block_pair",
    "diff_blocks",
    "diff_inlines",
    "paired_inline_diff",
    "same_shape",
    "whole_block_diff",
]
