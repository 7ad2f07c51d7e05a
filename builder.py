"""Row-by-row candidate construction with monotonicity pruning.

The packed table is filled one interior row at a time. The row of element a has
N-1-a cells, holds values in [floor, a], and must be weakly increasing (rows of a
monotone operation are). Each new row is checked against the previous one with
`pruning.dominates_tail`; complete candidates are kept only if associative.

Every call returns its own list of accepted tables; nothing is shared between
branches, which is what lets the search driver hand whole branches to workers.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from associativity import is_associative
from chain_table import OperationTable, packed_size
from pruning import SearchStats, dominates_tail, next_floor, row_ceiling
from rows import weakly_increasing
from verify import is_monotone

UNPRUNED_LIMIT = 5

Row = Tuple[int, ...]


@dataclass
class BranchResult:
    """Accepted tables and counters for one subtree of the search."""

    tables: List[OperationTable] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    first_row: Optional[Row] = None


def trivial_tables(n: int) -> List[OperationTable]:
    """The single table of a chain with no interior cells (n < 3)."""
    return [OperationTable(n, ())]


def first_rows(n: int) -> List[Row]:
    """Candidate rows for element 1, the top level of the recursion."""
    remaining = n - 2
    return weakly_increasing(0, row_ceiling(n, remaining), remaining)


def _descend(
    n: int,
    remaining: int,
    prefix: Row,
    previous: Optional[Row],
    floor: int,
) -> BranchResult:
    result = BranchResult()
    rows = weakly_increasing(floor, row_ceiling(n, remaining), remaining)
    result.stats.rows_generated += len(rows)
    for row in rows:
        if not dominates_tail(row, previous):
            result.stats.rows_pruned += 1
            continue
        sub = _accept_row(n, remaining, prefix, row)
        result.tables.extend(sub.tables)
        result.stats = result.stats.merge(sub.stats)
    return result


def _accept_row(n: int, remaining: int, prefix: Row, row: Row) -> BranchResult:
    candidate = prefix + row
    if remaining == 1:
        stats = SearchStats(candidates_checked=1)
        if is_associative(candidate, n):
            stats.accepted = 1
            return BranchResult(tables=[OperationTable(n, candidate)], stats=stats)
        stats.candidates_rejected = 1
        return BranchResult(stats=stats)
    return _descend(n, remaining - 1, candidate, row, next_floor(row))


def search_branch(n: int, row: Sequence[int]) -> BranchResult:
    """Finish the search below a fixed first row, sequentially."""
    row = tuple(row)
    result = _accept_row(n, n - 2, (), row)
    result.first_row = row
    return result


def build_with_stats(n: int) -> BranchResult:
    if n < 1:
        raise ValueError(f"chain size must be >= 1, got {n}")
    if n < 3:
        return BranchResult(tables=trivial_tables(n))
    return _descend(n, n - 2, (), None, 0)


def build(n: int) -> List[OperationTable]:
    """All FLew-chain tables for n elements, without any concurrency."""
    return build_with_stats(n).tables


def enumerate_unpruned(n: int) -> List[OperationTable]:
    """Reference search: try every vector in [0, n-1]^M, keep monotone associative ones.

    Exponential in M; refused above UNPRUNED_LIMIT.
    """
    if n < 1:
        raise ValueError(f"chain size must be >= 1, got {n}")
    if n > UNPRUNED_LIMIT:
        raise ValueError(
            f"unpruned enumeration is limited to n <= {UNPRUNED_LIMIT}, got {n}"
        )
    if n < 3:
        return trivial_tables(n)
    out: List[OperationTable] = []
    for values in itertools.product(range(n), repeat=packed_size(n)):
        table = OperationTable(n, values)
        if is_monotone(table) and is_associative(table):
            out.append(table)
    return out
