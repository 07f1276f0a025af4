"""Flatten inline content to plain text for word-level alignment.

Formatting and URLs are dropped so that a formatting-only change does not
show up as changed words. ``inline_text`` returns the flattened string;
``split_words`` returns the same words together with the inline pieces
that render each of them, so a diff can show a code span as code and
literal text as literal text.

Example:
    >>> from markdiff import parse
    >>> doc = parse("Use **`parse()`** and [the docs](https://example.com).")
    >>> inline_text(doc.children[0].children)
    'Use `parse()` and the docs.'
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from markdiff.nodes import (
    CodeSpan,
    Emphasis,
    HtmlInline,
    Image,
    Inline,
    LineBreak,
    Link,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
)

_CHUNK = re.compile(r"\S+|\s+")


@dataclass(frozen=True, slots=True)
class Word:
    """One whitespace-delimited word of flattened inline content.

    Words compare and hash by ``text`` alone. ``pieces`` holds the Text,
    CodeSpan and HtmlInline nodes the word is made of.
    """

    text: str
    pieces: tuple[Inline, ...] = field(default=(), compare=False)


def inline_text(inlines: Iterable[Inline]) -> str:
    """Flatten an inline sequence to a single string.

    Text and raw HTML contribute their literal content. Code spans keep their
    backticks so a changed span is visible as one token. Emphasis, strong,
    strikethrough, link and image contribute their children only. Soft and
    hard breaks contribute a single space.

    Args:
        inlines: Inline nodes to flatten

    Returns:
        Flattened text.
    """
    parts: list[str] = []
    _collect(inlines, parts)
    return "".join(parts)


def inline_words(inlines: Iterable[Inline]) -> list[str]:
    """Split flattened inline content into whitespace-delimited words."""
    return inline_text(inlines).split()


def split_words(inlines: Iterable[Inline]) -> list[Word]:
    """Split inline content into words that remember how they render.

    Word boundaries are whitespace in Text and raw HTML and every soft or
    hard break. A code span never splits, even when its code holds spaces.

    Args:
        inlines: Inline nodes to split

    Returns:
        Words in document order.
    """
    atoms: list[Inline] = []
    _collect_atoms(inlines, atoms)

    words: list[Word] = []
    text: list[str] = []
    pieces: list[Inline] = []
    for atom in atoms:
        match atom:
            case CodeSpan():
                text.append(f"`{atom.code}`")
                pieces.append(atom)
                continue
            case Text():
                content, raw = atom.content, False
            case HtmlInline():
                content, raw = atom.html, True
        for chunk in _CHUNK.findall(content):
            if chunk.isspace():
                _close_word(words, text, pieces)
            else:
                text.append(chunk)
                append_inline(pieces, HtmlInline(html=chunk) if raw else Text(content=chunk))
    _close_word(words, text, pieces)
    return words


def append_inline(inlines: list[Inline], inline: Inline) -> None:
    """Append ``inline``, merging it into a preceding Text when both are Text."""
    if inlines and isinstance(inline, Text) and isinstance(inlines[-1], Text):
        inlines[-1] = Text(content=inlines[-1].content + inline.content)
    else:
        inlines.append(inline)


def _close_word(words: list[Word], text: list[str], pieces: list[Inline]) -> None:
    if pieces:
        words.append(Word(text="".join(text), pieces=tuple(pieces)))
        text.clear()
        pieces.clear()


def _collect(inlines: Iterable[Inline], parts: list[str]) -> None:
    for inline in inlines:
        match inline:
            case Text():
                parts.append(inline.content)
            case HtmlInline():
                parts.append(inline.html)
            case CodeSpan():
                parts.append(f"`{inline.code}`")
            case Emphasis() | Strong() | Strikethrough() | Link() | Image():
                _collect(inline.children, parts)
            case SoftBreak() | LineBreak():
                parts.append(" ")


def _collect_atoms(inlines: Iterable[Inline], atoms: list[Inline]) -> None:
    for inline in inlines:
        match inline:
            case Text() | HtmlInline() | CodeSpan():
                atoms.append(inline)
            case Emphasis() | Strong() | Strikethrough() | Link() | Image():
                _collect_atoms(inline.children, atoms)
            case SoftBreak() | LineBreak():
                atoms.append(Text(content=" "))
