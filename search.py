"""Enumerate all FLew-chain multiplications on N elements with a parallel pruned search.

Problem: list every commutative, associative, monotone operation on the chain
{0, 1, ..., N-1} (standing for {0, 1/(N-1), ..., 1}) in which 0 is absorbing and
N-1 is the identity.

Method:
- Only the packed upper triangle of the interior block is searched (see chain_table).
- Rows are filled one at a time from weakly increasing sequences; a row that does
  not dominate the tail of the previous row cannot be monotone and is pruned.
- Complete candidates are kept only if associative (exact check over all interior
  triples, stopping at the first mismatch).
- The top level of the recursion fans out: each candidate first row becomes one job
  on a fixed-size pool, which finishes its subtree sequentially. Accepted tables go
  into one lock-guarded collector.

Capabilities:
- Single run for one N, optionally printing the Cayley tables (`--show`).
- Sequential census for N=1..K (`--seq K`), one line per N.
- `--verify` re-checks every accepted table against the full laws (monotone,
  commutative, boundaries, associative).
- `--cross-check` compares against the unpruned reference search (small N only).
- Backends: process pool (default, spawn context) or thread pool; the worker count
  comes from --workers, else $FLEW_WORKERS, else one per CPU.

Example commands:
  python search.py 6 --workers 8 --verify
  python search.py 4 --show --labels fraction
  python search.py --seq 8 --backend thread --verbose
"""

from __future__ import annotations

import concurrent.futures
import threading
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from builder import (
    UNPRUNED_LIMIT,
    BranchResult,
    enumerate_unpruned,
    first_rows,
    search_branch,
    trivial_tables,
)
from chain_table import OperationTable
from display import format_cayley_table
from executors import (
    BACKENDS,
    DEFAULT_BACKEND,
    ExecutorNotAvailable,
    create_executor,
    resolve_workers,
)
from pruning import SearchStats
from verify import verify_table


@dataclass
class SearchResult:
    n: int
    tables: List[OperationTable]
    stats: SearchStats
    runtime: float
    backend: Optional[str] = None  # None when no pool was started
    workers: int = 0

    @property
    def count(self) -> int:
        return len(self.tables)


class ResultCollector:
    """Append-only result set shared by all workers of one run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tables: List[OperationTable] = []

    def add(self, table: OperationTable) -> None:
        with self._lock:
            self._tables.append(table)

    def extend(self, tables: Iterable[OperationTable]) -> None:
        for table in tables:
            self.add(table)

    def snapshot(self) -> List[OperationTable]:
        with self._lock:
            return list(self._tables)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


def format_search_summary(stats: SearchStats, n: int) -> str:
    """Human-friendly one-line summary of search counters."""
    checked = stats.candidates_checked
    accept_rate = stats.accepted / checked if checked else 0.0
    parts = [
        f"[search] n={n}",
        f"rows_generated={stats.rows_generated}",
        f"rows_pruned={stats.rows_pruned}",
        f"candidates_checked={checked}",
        f"rejected={stats.candidates_rejected}",
        f"accepted={stats.accepted}",
        f"accept_rate={accept_rate:.3f}",
    ]
    return " | ".join(parts)


def _collect_branch(
    n: int, row: tuple, collector: ResultCollector
) -> BranchResult:
    """Thread worker: write accepted tables straight into the shared collector."""
    result = search_branch(n, row)
    collector.extend(result.tables)
    return result


def run_search(
    n: int,
    workers: Optional[int] = None,
    backend: Optional[str] = None,
    verbose: bool = False,
    allow_fallback: bool = True,
) -> SearchResult:
    """Full search for one chain size, fanning out over the first row.

    workers: pool size; defaults to $FLEW_WORKERS or the CPU count.
    backend: "process" (default) or "thread".
    allow_fallback: let a process pool that cannot be created degrade to threads.
    """
    if n < 1:
        raise ValueError(f"chain size must be >= 1, got {n}")
    t0 = time.perf_counter()
    if n < 3:
        return SearchResult(
            n=n,
            tables=trivial_tables(n),
            stats=SearchStats(),
            runtime=time.perf_counter() - t0,
        )

    rows = first_rows(n)
    pool_size = min(resolve_workers(workers), len(rows))
    stats = SearchStats(rows_generated=len(rows))
    collector = ResultCollector()
    try:
        handle = create_executor(
            backend or DEFAULT_BACKEND, pool_size, allow_fallback=allow_fallback
        )
    except ExecutorNotAvailable as exc:
        raise RuntimeError(str(exc)) from exc

    with handle.executor as ex:
        futures: Dict[concurrent.futures.Future[BranchResult], tuple] = {}
        for row in rows:
            if handle.shares_memory:
                fut = ex.submit(_collect_branch, n, row, collector)
            else:
                fut = ex.submit(search_branch, n, row)
            futures[fut] = row
        try:
            for fut in concurrent.futures.as_completed(futures):
                branch = fut.result()
                if not handle.shares_memory:
                    collector.extend(branch.tables)
                stats = stats.merge(branch.stats)
                if verbose:
                    print(
                        f"[worker] first_row={futures[fut]} accepted={branch.stats.accepted} "
                        f"pruned={branch.stats.rows_pruned}"
                    )
        except BaseException:
            # Cancel remaining work.
            for other in futures:
                other.cancel()
            raise

    return SearchResult(
        n=n,
        tables=collector.snapshot(),
        stats=stats,
        runtime=time.perf_counter() - t0,
        backend=handle.backend,
        workers=pool_size,
    )


def generate_tables(
    n: int, workers: Optional[int] = None, backend: Optional[str] = None
) -> List[OperationTable]:
    """Every FLew-chain table for n elements (no ordering across workers)."""
    return run_search(n, workers=workers, backend=backend).tables


def sort_tables(tables: Iterable[OperationTable]) -> List[OperationTable]:
    return sorted(tables, key=lambda t: t.values)


def cross_check(result: SearchResult) -> bool:
    """Compare a search result with the unpruned reference search as sets."""
    reference = enumerate_unpruned(result.n)
    return set(reference) == set(result.tables) and len(reference) == result.count


def verify_all(tables: Iterable[OperationTable]) -> List[OperationTable]:
    """Return the tables failing any of the full laws."""
    return [t for t in tables if not verify_table(t).ok]


def sequential_census(
    max_n: int,
    workers: Optional[int] = None,
    backend: Optional[str] = None,
    verbose: bool = False,
) -> List[SearchResult]:
    """Run n = 1..max_n, printing one line per size and the final sequence."""
    results: List[SearchResult] = []
    for n in range(1, max_n + 1):
        res = run_search(n, workers=workers, backend=backend, verbose=verbose)
        results.append(res)
        if verbose and n >= 3:
            print(format_search_summary(res.stats, n))
        print(f"n={n} -> tables={res.count} | time {res.runtime:.3f}s")
    print("counts:", ", ".join(str(r.count) for r in results))
    return results


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Enumerate FLew-chain multiplications with a parallel pruned search."
    )
    parser.add_argument(
        "N", type=int, nargs="?", help="Number of chain elements {0..N-1}"
    )
    parser.add_argument(
        "--seq", type=int, help="Run sequentially for n=1..SEQ and print the counts."
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker pool size (default: $FLEW_WORKERS or the CPU count).",
    )
    parser.add_argument(
        "--backend",
        choices=list(BACKENDS),
        default=DEFAULT_BACKEND,
        help="Worker pool: process (default) or thread.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Print per-branch progress and counters."
    )
    parser.add_argument(
        "--show", action="store_true", help="Print the Cayley table of every result."
    )
    parser.add_argument(
        "--max-show",
        type=int,
        default=20,
        help="Print at most this many tables with --show (0 for all).",
    )
    parser.add_argument(
        "--labels",
        choices=["index", "fraction"],
        default="index",
        help="Label elements by index or by their value k/(N-1).",
    )
    parser.add_argument(
        "--verify", action="store_true", help="Re-check every result against the full laws."
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help=f"Compare with the unpruned reference search (N <= {UNPRUNED_LIMIT}).",
    )
    args = parser.parse_args()

    if args.seq is not None:
        if args.seq < 1:
            parser.error("--seq must be >= 1.")
        sequential_census(
            args.seq, workers=args.workers, backend=args.backend, verbose=args.verbose
        )
        return

    if args.N is None:
        parser.error("Provide N or --seq.")
    if args.N < 1:
        parser.error("N must be >= 1.")

    res = run_search(
        args.N, workers=args.workers, backend=args.backend, verbose=args.verbose
    )
    print(f"T({args.N}) = {res.count}")
    print(
        f"time {res.runtime:.3f}s | backend={res.backend or 'none'} | workers={res.workers}"
    )
    if args.verbose and args.N >= 3:
        print(format_search_summary(res.stats, args.N))
    if args.verify:
        failed = verify_all(res.tables)
        print(f"verification: {'passed' if not failed else 'FAILED'}")
        for table in failed:
            print(f"  failing table: {list(table.values)}")
    if args.cross_check:
        if args.N > UNPRUNED_LIMIT:
            print(f"cross-check skipped: N > {UNPRUNED_LIMIT}")
        else:
            ok = cross_check(res)
            print(f"cross-check vs unpruned search: {'passed' if ok else 'FAILED'}")
    if args.show:
        shown = sort_tables(res.tables)
        if args.max_show > 0:
            shown = shown[: args.max_show]
        for i, table in enumerate(shown, start=1):
            print(f"\n#{i} {list(table.values)}")
            print(format_cayley_table(table, labels=args.labels))
        if len(shown) < res.count:
            print(f"\n... {res.count - len(shown)} more (raise --max-show)")


if __name__ == "__main__":
    main()
