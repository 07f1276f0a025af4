"""Diff parsed trees and inspect the annotated result as JSON."""

from markdiff import Differ, parse, render
from markdiff.serialization import to_json

old_doc = parse("## Old Title\n\n```python\nx = compute(1)\n```")
new_doc = parse("## New Title\n\n```python\nx = compute(2)\n```")

result = Differ().diff_documents(old_doc, new_doc)

print(to_json(result, indent=2))
print(render(result), end="")
