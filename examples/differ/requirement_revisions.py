"""Paired vs whole-block diff of a requirement that grew a clause."""

from markdiff import Differ

old = """\
> The server MUST validate all incoming session tokens
> before processing any request.

Connections MUST use TLS 1.3 or higher.
"""

new = """\
> The server MUST validate all incoming session tokens
> and verify their expiry before processing any request.

Connections MUST use TLS 1.3 or higher.

Legacy TLS 1.2 connections MAY be accepted during migration.
"""

print("Paired:")
print(Differ()(old, new))

print("Whole-block:")
print(Differ(paired=False)(old, new))
