"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end: O(n) total vs O(n²) for
repeated string concatenation. Also knows how to prefix every line of a
nested rendering, which is how quotes and list items are laid out.

Thread Safety:
StringBuilder instances are local to each render call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("# ").append("Title")
            >>> sb.append_prefixed("one\\n\\ntwo", "> ")
            >>> sb.build()
            '# Title> one\\n>\\n> two'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def append_prefixed(self, text: str, prefix: str, *, first: str | None = None) -> StringBuilder:
        """Append ``text`` with every line prefixed.

        Blank lines get the prefix with trailing whitespace removed, so a
        quote prefix ``"> "`` becomes ``">"`` and an indent becomes nothing.

        Args:
            text: Multi-line text, without a trailing newline
            prefix: Prefix for every line
            first: Prefix for the first line instead of ``prefix``

        Returns:
            self for method chaining
        """
        for i, line in enumerate(text.split("\n")):
            if i:
                self._parts.append("\n")
            lead = first if i == 0 and first is not None else prefix
            if line:
                self._parts.append(lead)
                self._parts.append(line)
            else:
                self.append(lead.rstrip())
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
