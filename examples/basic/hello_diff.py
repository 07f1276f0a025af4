"""Diff two revisions of a paragraph in 3 lines."""

from markdiff import diff

print(diff("The quick brown fox.", "The slow brown fox."), end="")
