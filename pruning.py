"""Monotonicity pruning for row-by-row table construction.

Row a of the packed table holds a·b for b = a..N-2. For a monotone operation
every column of the Cayley table is weakly increasing, so each entry of row a
must dominate the entry of row a-1 in the same column. Row a-1 is one cell
longer than row a (it also covers b = a-1), so the comparison runs against the
tail of the previous row, aligned from the right.

These rules only discard candidates that could never be monotone; the set of
accepted tables is unchanged by them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Sequence


@dataclass
class SearchStats:
    """Counters collected by one search branch."""

    rows_generated: int = 0
    rows_pruned: int = 0
    candidates_checked: int = 0
    candidates_rejected: int = 0
    accepted: int = 0

    def merge(self, other: "SearchStats") -> "SearchStats":
        return SearchStats(
            **{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)}
        )


def dominates_tail(row: Sequence[int], previous: Optional[Sequence[int]]) -> bool:
    """True if row[-k] >= previous[-k] for every k = 1..len(row).

    The first row has no predecessor and always passes.
    """
    if previous is None:
        return True
    for k in range(1, len(row) + 1):
        if row[-k] < previous[-k]:
            return False
    return True


def next_floor(row: Sequence[int]) -> int:
    """Lowest admissible diagonal value for the next row.

    The next row starts at (a+1)·(a+1) >= a·(a+1), which is row[1].
    """
    return row[1]


def row_ceiling(n: int, remaining: int) -> int:
    """Largest value allowed in the row built when `remaining` rows are left.

    That row belongs to element a = n-1-remaining, and a·b <= a·(n-1) = a.
    """
    return n - 1 - remaining
