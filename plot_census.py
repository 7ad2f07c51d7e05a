#!/usr/bin/env python3
"""
Plot and log FLew-chain census results.

This script runs the parallel search for n = 1..max_n, prints a small summary
table, and saves two plots:
- Count progression: number of FLew-chain tables per n on a log scale, with the
  ratio to the previous count annotated.
- Search effort: runtime per n next to the share of generated rows removed by
  monotonicity pruning.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from search import SearchResult, run_search  # noqa: E402


@dataclass
class CensusRow:
    n: int
    count: int
    runtime_seconds: float
    rows_generated: int
    rows_pruned: int
    candidates_checked: int

    @property
    def pruned_share(self) -> float:
        return self.rows_pruned / self.rows_generated if self.rows_generated else 0.0


def census_row(res: SearchResult) -> CensusRow:
    return CensusRow(
        n=res.n,
        count=res.count,
        runtime_seconds=res.runtime,
        rows_generated=res.stats.rows_generated,
        rows_pruned=res.stats.rows_pruned,
        candidates_checked=res.stats.candidates_checked,
    )


def collect_census(
    max_n: int, workers: Optional[int] = None, backend: Optional[str] = None
) -> List[CensusRow]:
    return [
        census_row(run_search(n, workers=workers, backend=backend))
        for n in range(1, max_n + 1)
    ]


def growth_ratios(rows: Sequence[CensusRow]) -> List[Optional[float]]:
    """count(n) / count(n-1); None for the first row."""
    ratios: List[Optional[float]] = [None]
    for prev, cur in zip(rows, rows[1:]):
        ratios.append(cur.count / prev.count if prev.count else None)
    return ratios[: len(rows)]


def print_summary(rows: Sequence[CensusRow]) -> None:
    if not rows:
        print("No census rows.")
        return
    print(f"Census spanning n={rows[0].n}..{rows[-1].n}.")
    print(
        f"{'n':>3}  {'tables':>8}  {'ratio':>6}  {'runtime (s)':>11}  {'pruned':>7}  {'checked':>9}"
    )
    print("-" * 56)
    for row, ratio in zip(rows, growth_ratios(rows)):
        ratio_s = f"{ratio:.2f}" if ratio is not None else "—"
        print(
            f"{row.n:>3}  {row.count:>8}  {ratio_s:>6}  {row.runtime_seconds:>11.3f}  "
            f"{row.pruned_share:>7.1%}  {row.candidates_checked:>9}"
        )
    print("counts:", ", ".join(str(r.count) for r in rows))


CENSUS_STYLE = {
    "font.family": "sans-serif",
    "font.size": 10,
    "axes.spines.top": False,
    "axes.spines.right": False,
    "axes.titlelocation": "left",
}


def write_figure(
    fig: plt.Figure, out_dir: Path, name: str, formats: Iterable[str], dpi: int = 200
) -> List[Path]:
    """Save one census figure per format and return the written paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for fmt in formats:
        path = out_dir / f"census_{name}.{fmt}"
        fig.savefig(path, bbox_inches="tight", dpi=dpi)
        written.append(path)
        print(f"[plot] wrote {path}")
    plt.close(fig)
    return written


def plot_counts(rows: Sequence[CensusRow], out_dir: Path, formats: Iterable[str]) -> None:
    ns = [r.n for r in rows]
    counts = [r.count for r in rows]

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(
        ns,
        counts,
        marker="o",
        markersize=5,
        linestyle="-",
        linewidth=1.5,
        color="#2a9d8f",
        label="FLew-chain tables",
    )
    for n, count, ratio in zip(ns, counts, growth_ratios(rows)):
        if ratio is not None:
            ax.annotate(
                f"×{ratio:.1f}",
                (n, count),
                textcoords="offset points",
                xytext=(0, 8),
                ha="center",
                fontsize=8,
                color="#264653",
            )
    ax.set_yscale("log")
    ax.set_xlabel("n (chain size)", fontsize=11)
    ax.set_ylabel("number of tables", fontsize=11)
    ax.set_title("FLew-chain multiplications per chain size", fontsize=13, fontweight="bold")
    ax.grid(True, linestyle="--", alpha=0.4)
    ax.legend(loc="upper left", frameon=True, framealpha=0.9)

    write_figure(fig, out_dir, "counts", formats)


def plot_effort(rows: Sequence[CensusRow], out_dir: Path, formats: Iterable[str]) -> None:
    ns = [r.n for r in rows]
    runtimes = [r.runtime_seconds for r in rows]
    pruned = [r.pruned_share for r in rows]

    fig, (ax_rt, ax_pr) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    ax_rt.bar(ns, runtimes, color="#2a9d8f", width=0.8, alpha=0.9)
    ax_rt.set_ylabel("Runtime (s)", fontsize=11)
    ax_rt.set_yscale("symlog", linthresh=0.01)
    ax_rt.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax_rt.set_title("Search effort", fontsize=13, fontweight="bold")

    ax_pr.plot(ns, pruned, marker="o", markersize=4, color="#264653")
    ax_pr.fill_between(ns, pruned, color="#264653", alpha=0.1)
    ax_pr.set_xlabel("n (chain size)", fontsize=11)
    ax_pr.set_ylabel("Rows pruned (share)", fontsize=11)
    ax_pr.set_ylim(0, 1)
    ax_pr.grid(True, linestyle="--", alpha=0.3)

    write_figure(fig, out_dir, "effort", formats)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--max-n", type=int, default=7, help="Run the census for n=1..MAX_N."
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker pool size (default: $FLEW_WORKERS or the CPU count).",
    )
    parser.add_argument(
        "--backend",
        choices=["process", "thread"],
        default="process",
        help="Worker pool used by each search.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("plots"),
        help="Where to save generated plots.",
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        default=["png"],
        help="Image formats to save (passed to matplotlib).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    plt.rcParams.update(CENSUS_STYLE)

    rows = collect_census(args.max_n, workers=args.workers, backend=args.backend)
    print_summary(rows)
    if not rows:
        return

    plot_counts(rows, args.out_dir, args.formats)
    plot_effort(rows, args.out_dir, args.formats)


if __name__ == "__main__":
    main()
