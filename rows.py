"""Weakly increasing integer sequences, used as candidate rows of a packed table."""

from __future__ import annotations

from typing import List, Tuple


def weakly_increasing(low: int, high: int, length: int) -> List[Tuple[int, ...]]:
    """All sequences s of the given length with low <= s[0] <= ... <= s[-1] <= high.

    Returned in lexicographic order. length == 0 always yields the single empty
    sequence; low > high with a positive length yields nothing.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    if length == 0:
        return [()]
    out: List[Tuple[int, ...]] = []
    for v in range(low, high + 1):
        for tail in weakly_increasing(v, high, length - 1):
            out.append((v,) + tail)
    return out
