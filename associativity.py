"""Associativity checks for packed candidate tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from chain_table import OperationTable, evaluate_values


@dataclass
class Violation:
    """A triple with (a·b)·c != a·(b·c)."""

    a: int
    b: int
    c: int
    left: int
    right: int


def find_associativity_violation(
    values: Sequence[int], n: int
) -> Optional[Violation]:
    """Return the first interior triple breaking associativity, or None.

    Triples touching 0 or N-1 always associate, so only a, b, c in 1..N-2 are
    tried. Rejected candidates usually fail within the first few triples.
    """
    interior = range(1, n - 1)
    for a in interior:
        for b in interior:
            ab = evaluate_values(values, n, a, b)
            for c in interior:
                left = evaluate_values(values, n, ab, c)
                right = evaluate_values(values, n, a, evaluate_values(values, n, b, c))
                if left != right:
                    return Violation(a=a, b=b, c=c, left=left, right=right)
    return None


def is_associative(
    table: Union[OperationTable, Sequence[int]], n: Optional[int] = None
) -> bool:
    """Exact check over the whole domain."""
    if isinstance(table, OperationTable):
        return find_associativity_violation(table.values, table.n) is None
    if n is None:
        raise ValueError("n is required when checking a raw vector")
    return find_associativity_violation(table, n) is None
