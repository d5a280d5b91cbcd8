"""Per-vertex modularity moves: neighbour-community aggregation and best target choice."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import MutableSequence, Sequence

from commdetect.graph import Graph


@dataclass
class Community:
    """Total degree and number of vertices of one community."""

    degree: float = 0.0
    size: int = 0


@dataclass
class LocalMap:
    """Edge weight from one vertex into each neighbouring community.

    The first key of ``counters`` is the vertex's own community. ``eix`` is
    the weight into the own community without self-loops.
    """

    counters: dict[int, float] = field(default_factory=dict)
    self_loop: float = 0.0
    eix: float = 0.0

    @property
    def own_community(self) -> int:
        """The community the vertex currently belongs to."""
        return next(iter(self.counters))


def build_local_map_counter(
    graph: Graph, v: int, assignment: Sequence[int]
) -> LocalMap:
    """Sum the weight from v into each neighbouring community.

    Neighbours are visited in increasing vertex order; the own community is
    listed first even when no edge reaches it.
    """
    counters: dict[int, float] = {assignment[v]: 0.0}
    self_loop = 0.0
    for edge in sorted(graph.neighbors(v), key=lambda e: e.tail):
        if edge.tail == v:
            self_loop += edge.weight
        cid = assignment[edge.tail]
        counters[cid] = counters.get(cid, 0.0) + edge.weight
    eix = counters[assignment[v]] - self_loop
    return LocalMap(counters=counters, self_loop=self_loop, eix=eix)


def best_move(
    v: int,
    local_map: LocalMap,
    community_info: Sequence[Community],
    assignment: Sequence[int],
    constant: float,
    degrees: Sequence[float],
) -> int:
    """Return the community of largest positive modularity gain for v.

    Stays in the current community when no gain is positive; equal non-zero
    gains go to the smaller community id.
    """
    current = assignment[v]
    degree = degrees[v]
    ax = community_info[current].degree - degree
    best = current
    best_gain = 0.0
    for cid, eiy in local_map.counters.items():
        if cid == current:
            continue
        ay = community_info[cid].degree
        gain = 2 * (eiy - local_map.eix) - 2 * degree * (ay - ax) * constant
        if gain > best_gain or (gain == best_gain and gain != 0 and cid < best):
            best_gain = gain
            best = cid
    return best


def apply_move(
    v: int,
    target: int,
    community_info: MutableSequence[Community],
    assignment: MutableSequence[int],
    degrees: Sequence[float],
) -> bool:
    """Move v into target, updating the community totals. Returns whether v moved."""
    source = assignment[v]
    if target == source:
        return False
    assignment[v] = target
    community_info[target].degree += degrees[v]
    community_info[target].size += 1
    community_info[source].degree -= degrees[v]
    community_info[source].size -= 1
    return True