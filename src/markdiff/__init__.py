"""markdiff: structure-aware diffs of Markdown documents.

Parses two versions of a Markdown document into typed trees, aligns their
blocks, and renders one annotated document: unchanged content passes
through verbatim, removed content is ``~~struck~~`` and added content is
``**bold**``, without breaking list markers, quote prefixes, headings,
tables or fenced code.

Quick Start:
    >>> from markdiff import paired_inline_diff
    >>> print(paired_inline_diff("The quick brown fox.", "The slow brown fox."))
    The ~~quick~~ **slow** brown fox.

    >>> # Or use the high-level Differ class
    >>> from markdiff import Differ
    >>> differ = Differ(max_nesting_depth=32)
    >>> text = differ("# Old Title", "# New Title")

Working with trees:
    >>> from markdiff import diff_blocks, parse, render
    >>> old, new = parse("a b c"), parse("a c d")
    >>> render(diff_blocks(old.children, new.children))
    'a ~~b~~ c **d**\\n'

Installation:
    pip install markdiff
"""

from markdiff.align import Add, DiffOp, Equal, Remove, diff_sequences
from markdiff.config import (
    DiffConfig,
    diff_config_context,
    get_diff_config,
    reset_diff_config,
    set_diff_config,
)
from markdiff.differ import (
    check_nesting,
    diff_block_pair,
    diff_blocks,
    diff_inlines,
    paired_inline_diff,
    same_shape,
    whole_block_diff,
)
from markdiff.errors import MarkdiffError, NestingDepthError, ParseError, SerializationError
from markdiff.nodes import (
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
    nesting_depth,
)
from markdiff.parser import Parser, parse
from markdiff.renderers.markdown import MarkdownRenderer, render_markdown
from markdiff.serialization import from_dict, from_json, to_dict, to_json
from markdiff.text import Word, inline_text, inline_words, split_words
from markdiff.wrapping import wrap_added, wrap_removed

__version__ = "0.1.0"


def render(node: Document | tuple[Block, ...] | list[Block]) -> str:
    """Render a document tree (or block sequence) back to Markdown.

    Example:
        >>> render(parse("# Hello"))
        '# Hello\\n'
    """
    return render_markdown(node)


def diff(old_text: str, new_text: str, *, paired: bool | None = None) -> str:
    """Diff two Markdown texts.

    Args:
        old_text: Original Markdown
        new_text: Changed Markdown
        paired: Inline-aware paired diff (True) or whole-block diff (False).
            None uses ``DiffConfig.paired`` from the active config.

    Returns:
        Annotated Markdown text.
    """
    if paired is None:
        paired = get_diff_config().paired
    if paired:
        return paired_inline_diff(old_text, new_text)
    return whole_block_diff(old_text, new_text)


class Differ:
    """High-level diff processor holding one configuration.

    Usage:
        >>> differ = Differ()
        >>> differ("Hello world.", "Hello there.")
        'Hello ~~world.~~ **there.**\\n'

        >>> # Coarse mode, with an input nesting limit
        >>> differ = Differ(paired=False, max_nesting_depth=8)
        >>> differ("One.", "One.\\n\\nTwo.")
        'One.\\n\\n**Two.**\\n'

    Thread Safety:
        Uses ContextVar for per-call configuration. Safe to use multiple
        Differ instances concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(self, *, paired: bool = True, max_nesting_depth: int | None = None) -> None:
        """Initialize the differ.

        Args:
            paired: Pair same-shape changed blocks for word-level diffing
            max_nesting_depth: Reject inputs nested deeper than this
        """
        self._config = DiffConfig(paired=paired, max_nesting_depth=max_nesting_depth)

    @property
    def config(self) -> DiffConfig:
        """The immutable configuration used for every call."""
        return self._config

    def __call__(self, old_text: str, new_text: str) -> str:
        """Diff two Markdown texts using this differ's configuration."""
        with diff_config_context(self._config):
            return diff(old_text, new_text)

    def diff_documents(self, old: Document, new: Document) -> Document:
        """Diff two parsed documents into an annotated document."""
        with diff_config_context(self._config):
            check_nesting(old.children, new.children)
            children = diff_blocks(old.children, new.children, paired=self._config.paired)
        return Document(children=children)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "diff",
    "whole_block_diff",
    "paired_inline_diff",
    "diff_blocks",
    # High-level
    "Differ",
    # Block differ pieces
    "check_nesting",
    "diff_block_pair",
    "diff_inlines",
    "same_shape",
    "wrap_added",
    "wrap_removed",
    # Alignment
    "Add",
    "DiffOp",
    "Equal",
    "Remove",
    "diff_sequences",
    # Flattening
    "inline_text",
    "inline_words",
    "split_words",
    "Word",
    # Block nodes
    "Block",
    "BlockQuote",
    "CodeBlock",
    "Document",
    "Heading",
    "HtmlBlock",
    "List",
    "ListItem",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "ThematicBreak",
    "nesting_depth",
    # Inline nodes
    "Inline",
    "CodeSpan",
    "Emphasis",
    "HtmlInline",
    "Image",
    "LineBreak",
    "Link",
    "SoftBreak",
    "Strikethrough",
    "Strong",
    "Text",
    # Parser / renderer
    "Parser",
    "MarkdownRenderer",
    "render_markdown",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "DiffConfig",
    "get_diff_config",
    "set_diff_config",
    "reset_diff_config",
    "diff_config_context",
    # Errors
    "MarkdiffError",
    "NestingDepthError",
    "ParseError",
    "SerializationError",
]
