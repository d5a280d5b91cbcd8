"""Modularity-maximising community detection (one phase of the Louvain method)."""

from __future__ import annotations

from dataclasses import dataclass

from commdetect.graph import Graph
from commdetect.local_moves import Community, best_move, build_local_map_counter


@dataclass
class LouvainResult:
    """Community of each vertex, the modularity reached and the iterations run."""

    communities: list[int]
    modularity: float
    iterations: int


def vertex_degrees(graph: Graph) -> list[float]:
    """Return the weighted degree of each vertex (sum of its adjacency weights)."""
    return [
        float(sum(edge.weight for edge in graph.neighbors(v)))
        for v in range(graph.num_vertices)
    ]


def louvain(graph: Graph, lower: float = -1.0, threshold: float = 1e-6) -> LouvainResult:
    """Move every vertex to its best neighbouring community, round after round.

    All vertices decide on the same snapshot of the assignment. Iteration
    stops when the modularity gain falls below threshold; the assignment of
    the last accepted round is returned. The reported modularity is never
    below lower once a round has been accepted.
    """
    n = graph.num_vertices
    degrees = vertex_degrees(graph)
    total = sum(degrees)
    if total == 0:
        raise ValueError("The graph has no edge weight.")
    constant = 1.0 / total

    info = [Community(degree=d, size=1) for d in degrees]
    past = list(range(n))
    current = list(range(n))
    prev_mod = -1.0
    iterations = 0

    while True:
        iterations += 1
        internal = [0.0] * n
        updates = [Community() for _ in range(n)]
        target = [-1] * n

        for i in range(n):
            if graph.degree(i) > 0:
                local_map = build_local_map_counter(graph, i, current)
                internal[i] = local_map.counters[current[i]]
                target[i] = best_move(i, local_map, info, current, constant, degrees)
            if target[i] != current[i] and target[i] != -1:
                updates[target[i]].degree += degrees[i]
                updates[target[i]].size += 1
                updates[current[i]].degree -= degrees[i]
                updates[current[i]].size -= 1

        e_xx = sum(internal)
        a2_x = sum(c.degree * c.degree for c in info)
        curr_mod = e_xx * constant - a2_x * constant * constant

        if curr_mod - prev_mod < threshold:
            break

        prev_mod = max(curr_mod, lower)
        for community, update in zip(info, updates):
            community.size += update.size
            community.degree += update.degree
        past, current = current, target

    return LouvainResult(communities=past, modularity=prev_mod, iterations=iterations)