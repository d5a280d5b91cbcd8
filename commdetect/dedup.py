"""Removal of duplicate undirected links from an edge table."""

from __future__ import annotations

from typing import Iterable, Sequence


def dedup_links(links: Iterable[Sequence[float]]) -> list[tuple[float, float, float]]:
    """Return the rows (v1, v2, weight) with duplicate undirected pairs removed.

    Rows with a zero in any column are dropped. For each unordered pair of
    endpoints the first row seen is kept; order of first appearance is kept.
    """
    kept: dict[frozenset, tuple[float, float, float]] = {}
    for row in links:
        if len(row) != 3:
            raise ValueError(f"Each link needs 3 columns, got {len(row)}.")
        v1, v2, weight = row
        if v1 == 0 or v2 == 0 or weight == 0.0:
            continue
        kept.setdefault(frozenset((v1, v2)), (v1, v2, weight))
    return list(kept.values())