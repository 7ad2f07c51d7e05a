"""Packed operation tables for FLew-chain multiplications.

A chain C_N = {0, 1/(N-1), ..., 1} is indexed by {0, ..., N-1}. The operation is
commutative, 0 is absorbing and N-1 is the identity, so the only free cells of the
N×N Cayley table are the upper triangle of the interior (N-2)×(N-2) block:

   ⋅  |  0  1/4 2/4 3/4  1
 ===========================
   0  |  0   0   0   0   0
  1/4 |  0   A   B   C  1/4
  2/4 |  0   B   D   E  2/4
  3/4 |  0   C   E   F  3/4
   1  |  0  1/4 2/4 3/4  1

For N=5 the table is stored as the vector (A, B, C, D, E, F): row a holds
a·b for b = a..N-2, rows concatenated.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import List, Sequence, Tuple


class OutOfDomainError(ValueError):
    """Raised when an element index falls outside {0, ..., N-1}."""


def packed_size(n: int) -> int:
    """Number of stored cells for a chain of n elements."""
    return ((n - 2) * (n - 1)) // 2 if n >= 2 else 0


def table_index(n: int, a: int, b: int) -> int:
    """0-based offset of the interior pair (a, b) in the packed vector."""
    lo, hi = (a, b) if a <= b else (b, a)
    return (n - 2) * (lo - 1) + hi - (lo * (lo - 1)) // 2 - 1


def evaluate_values(values: Sequence[int], n: int, a: int, b: int) -> int:
    """Evaluate a·b on a raw packed vector; no domain check."""
    if a == 0 or b == 0:
        return 0
    if a == n - 1:
        return b
    if b == n - 1:
        return a
    return values[table_index(n, a, b)]


@dataclass(frozen=True)
class OperationTable:
    """Immutable packed table of one FLew-chain multiplication."""

    n: int
    values: Tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ValueError(f"chain size must be >= 1, got {self.n}")
        values = tuple(_as_value(v) for v in self.values)
        expected = packed_size(self.n)
        if len(values) != expected:
            raise ValueError(
                f"table for n={self.n} needs {expected} values, got {len(values)}"
            )
        bad = [v for v in values if v < 0 or v > self.n - 1]
        if bad:
            raise ValueError(f"values {bad} outside 0..{self.n - 1}")
        object.__setattr__(self, "values", values)

    def __call__(self, a: int, b: int) -> int:
        return evaluate(self, a, b)


def _as_value(v: int) -> int:
    try:
        return operator.index(v)
    except TypeError as exc:
        raise ValueError(f"table value {v!r} is not an integer") from exc


def _check_domain(n: int, x: int, name: str) -> int:
    try:
        x = operator.index(x)
    except TypeError as exc:
        raise OutOfDomainError(f"{name}={x!r} is not an element index") from exc
    if x < 0 or x > n - 1:
        raise OutOfDomainError(f"{name}={x} is not in the domain 0..{n - 1}")
    return x


def evaluate(table: OperationTable, a: int, b: int) -> int:
    """Return a·b, including the absorbing and identity boundary rows."""
    a = _check_domain(table.n, a, "a")
    b = _check_domain(table.n, b, "b")
    return evaluate_values(table.values, table.n, a, b)


def cayley_matrix(table: OperationTable) -> List[List[int]]:
    """Rebuild the full n×n Cayley table."""
    n = table.n
    return [[evaluate_values(table.values, n, a, b) for b in range(n)] for a in range(n)]
