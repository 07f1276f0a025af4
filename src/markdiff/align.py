"""LCS sequence alignment.

Aligns two sequences of comparable items into a list of Equal/Remove/Add
operations. The Equal and Add values, in order, rebuild ``new``; the Equal
and Remove values, in order, rebuild ``old``.

Example:
    >>> diff_sequences([1, 2, 3, 4, 5], [1, 3, 4, 6])
    [Equal(value=1), Remove(value=2), Equal(value=3), Equal(value=4), Remove(value=5), Add(value=6)]

Complexity is O(m*n) time and space. Inputs are block counts or the words of
one paragraph, never whole-document characters.

Thread Safety:
    Pure function, all state is local to the call.

"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Equal[T]:
    """Item present in both sequences."""

    value: T


@dataclass(frozen=True, slots=True)
class Remove[T]:
    """Item present only in the old sequence."""

    value: T


@dataclass(frozen=True, slots=True)
class Add[T]:
    """Item present only in the new sequence."""

    value: T


type DiffOp[T] = Equal[T] | Remove[T] | Add[T]


def lcs_table[T](old: Sequence[T], new: Sequence[T]) -> list[list[int]]:
    """Build the (m+1) x (n+1) longest-common-subsequence length table.

    ``table[i][j]`` is the LCS length of ``old[:i]`` and ``new[:j]``.
    """
    m = len(old)
    n = len(new)
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = table[i]
        prev = table[i - 1]
        item = old[i - 1]
        for j in range(1, n + 1):
            if item == new[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])
    return table


def diff_sequences[T](old: Sequence[T], new: Sequence[T]) -> list[DiffOp[T]]:
    """Align two sequences by longest common subsequence.

    Backtracks from the end of both sequences. When both an addition and a
    removal keep the alignment optimal, the addition is taken first; since
    the ops are collected in reverse, an adjacent replacement therefore
    reads as Remove followed by Add.

    Args:
        old: Original sequence
        new: Changed sequence

    Returns:
        Ordered list of Equal, Remove and Add operations.
    """
    table = lcs_table(old, new)

    ops: list[DiffOp[T]] = []
    i = len(old)
    j = len(new)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old[i - 1] == new[j - 1]:
            ops.append(Equal(old[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            ops.append(Add(new[j - 1]))
            j -= 1
        else:
            ops.append(Remove(old[i - 1]))
            i -= 1
    ops.reverse()
    return ops


__all__ = [
    "Add",
    "DiffOp",
    "Equal",
    "Remove",
    "diff_sequences",
    "lcs_table",
]
