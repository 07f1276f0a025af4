"""Loggers under the ``markdiff`` namespace.

markdiff logs at DEBUG only, and only from the differ:

- block alignment: how many old and new blocks became how many ops
- pairing: which block kind was paired for a word-level diff
- demotion: a changed code block turned into a paragraph of code spans

The parser logs at DEBUG when it skips a token it has no node for. No
handlers are installed here; enable ``logging.getLogger("markdiff")`` to
see the messages.

Example:
    >>> import logging
    >>> logging.basicConfig(level=logging.DEBUG)
    >>> from markdiff import paired_inline_diff
    >>> paired_inline_diff("a b", "a c")  # logs "Aligned 1 old / 1 new blocks ..."
    'a ~~b~~ **c**\\n'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the ``markdiff`` namespace.

    Names already under ``markdiff`` are used as they are; anything else
    gets the ``markdiff.`` prefix.

    Example:
        >>> get_logger("mymodule").name
        'markdiff.mymodule'
    """
    if not (name == "markdiff" or name.startswith("markdiff.")):
        name = f"markdiff.{name}"
    return logging.getLogger(name)
