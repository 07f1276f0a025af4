"""Exception classes for markdiff.

The differ has no failure modes of its own. Errors are raised only at the
input boundary: text that cannot be parsed, trees nested deeper than the
configured limit, and malformed serialized trees.
"""

from __future__ import annotations


class MarkdiffError(Exception):
    """Base exception for all markdiff errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(MarkdiffError):
    """Error turning input into a document tree.

    Raised when the input is not Markdown text at all (e.g. bytes or None).
    """

    def __init__(self, message: str, source_name: str | None = None) -> None:
        """Initialize parse error.

        Args:
            message: Error description
            source_name: Label for the offending input (e.g. "old", "new")
        """
        self.message = message
        self.source_name = source_name

        prefix = f"{source_name}: " if source_name else ""
        super().__init__(f"{prefix}{message}")


class NestingDepthError(MarkdiffError):
    """Input nesting exceeds the configured limit.

    Raised before diffing when quotes or lists are nested deeper than
    ``DiffConfig.max_nesting_depth``.
    """

    def __init__(self, depth: int, limit: int, source_name: str | None = None) -> None:
        """Initialize nesting depth error.

        Args:
            depth: Nesting depth found in the input
            limit: Configured maximum depth
            source_name: Label for the offending input (e.g. "old", "new")
        """
        self.depth = depth
        self.limit = limit
        self.source_name = source_name

        prefix = f"{source_name}: " if source_name else ""
        super().__init__(f"{prefix}nesting depth {depth} exceeds limit {limit}")


class SerializationError(MarkdiffError, ValueError):
    """Serialized tree data is malformed.

    Subclasses ValueError so callers catching ValueError keep working.
    """

    pass
