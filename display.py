"""Text rendering of full Cayley tables."""

from __future__ import annotations

from fractions import Fraction
from typing import List

from chain_table import OperationTable, evaluate


def element_labels(n: int, labels: str = "index") -> List[str]:
    """Labels for 0..n-1: plain indices, or the chain values k/(n-1)."""
    if labels == "index" or n == 1:
        return [str(k) for k in range(n)]
    if labels == "fraction":
        return [str(Fraction(k, n - 1)) for k in range(n)]
    raise ValueError(f"Unknown label style {labels}")


def format_cayley_table(table: OperationTable, labels: str = "index") -> str:
    """Render the n×n table, boundary rows and columns included.

        ⋅ | 0 1 2
       ==========
        0 | 0 0 0
        1 | 0 1 1
        2 | 0 1 2
    """
    n = table.n
    names = element_labels(n, labels)
    width = max(len(s) for s in names)

    def cell(k: int) -> str:
        return names[k].rjust(width)

    lines = [" " + "⋅".rjust(width) + " |" + "".join(" " + cell(k) for k in range(n))]
    lines.append("=" * len(lines[0]))
    for a in range(n):
        row = "".join(" " + cell(evaluate(table, a, b)) for b in range(n))
        lines.append(" " + cell(a) + " |" + row)
    return "\n".join(lines)
