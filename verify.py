"""Full-law verification of accepted tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from associativity import Violation, find_associativity_violation
from chain_table import OperationTable, cayley_matrix


@dataclass
class TableReport:
    n: int
    values: List[int]
    monotone: bool
    commutative: bool
    boundaries: bool
    violation: Optional[Violation]

    @property
    def ok(self) -> bool:
        return (
            self.monotone
            and self.commutative
            and self.boundaries
            and self.violation is None
        )


def is_monotone(table: OperationTable) -> bool:
    """Every row and column of the full Cayley table is weakly increasing."""
    ct = cayley_matrix(table)
    n = table.n
    for a in range(n):
        for b in range(n - 1):
            if ct[a][b] > ct[a][b + 1] or ct[b][a] > ct[b + 1][a]:
                return False
    return True


def is_commutative(table: OperationTable) -> bool:
    ct = cayley_matrix(table)
    return all(ct[a][b] == ct[b][a] for a in range(table.n) for b in range(a))


def check_boundaries(table: OperationTable) -> bool:
    """0 absorbs everything and N-1 acts as identity."""
    ct = cayley_matrix(table)
    top = table.n - 1
    return all(
        ct[0][x] == 0 and ct[x][0] == 0 and ct[top][x] == x and ct[x][top] == x
        for x in range(table.n)
    )


def verify_table(table: OperationTable) -> TableReport:
    return TableReport(
        n=table.n,
        values=list(table.values),
        monotone=is_monotone(table),
        commutative=is_commutative(table),
        boundaries=check_boundaries(table),
        violation=find_associativity_violation(table.values, table.n),
    )
