"""markdiff renderers.

Renderers convert document trees into output formats.

Available Renderers:
- MarkdownRenderer: Renders a tree back to CommonMark text (the inverse of
  ``markdiff.parser.parse``)

Thread Safety:
All renderers use a StringBuilder local to each render call.
Safe for concurrent use from multiple threads.

"""

from markdiff.renderers.markdown import MarkdownRenderer, render_markdown

__all__ = ["MarkdownRenderer", "render_markdown"]
