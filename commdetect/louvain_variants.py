"""Louvain variants: in-place (fully synchronised) moves and fast-track resistance."""

from __future__ import annotations

import math
from dataclasses import dataclass

from commdetect.graph import Graph
from commdetect.local_moves import (
    Community,
    apply_move,
    best_move,
    build_local_map_counter,
)
from commdetect.louvain import LouvainResult, vertex_degrees

MAX_FAST_TRACK_ITERATIONS = 200
"""Iteration count beyond which the fast-track method stops."""


@dataclass
class FastTrackResult:
    """Outcome of the fast-track resistance method.

    ``modularity_afg`` is the Arenas-Fernandez-Gomez modularity and ``r_min``
    the resistance of the last iteration (-1.0 and 0.0 when phase <= 1).
    ``modularity`` is the plain modularity of the last iteration.
    """

    communities: list[int]
    modularity_afg: float
    r_min: float
    modularity: float
    iterations: int


def _divide(numerator: float, denominator: float) -> float:
    """Divide with IEEE 754 semantics: a zero denominator gives inf or nan."""
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return math.copysign(math.inf, sign)


def _second_term_constant(degrees: list[float]) -> float:
    total = sum(degrees)
    if total == 0:
        raise ValueError("The graph has no edge weight.")
    return 1.0 / total


def louvain_full_sync(
    graph: Graph,
    lower: float = -1.0,
    threshold: float = 1e-6,
    lock_communities: bool = False,
) -> LouvainResult:
    """Move vertices one at a time, each seeing the moves made before it.

    Community totals are updated as soon as a vertex moves. Iteration stops
    when the modularity gain falls below threshold; the final assignment and
    the modularity of the last iteration are returned. ``lock_communities``
    selects whether neighbouring communities are held fixed while a vertex
    decides; with moves applied one after another both modes give the same
    result. ``lower`` is accepted for a uniform signature and is not used.
    """
    n = graph.num_vertices
    degrees = vertex_degrees(graph)
    constant = _second_term_constant(degrees)

    info = [Community(degree=d, size=1) for d in degrees]
    assignment = list(range(n))
    prev_mod = -1.0
    iterations = 0

    while True:
        iterations += 1
        for v in range(n):
            if graph.degree(v) == 0:
                continue
            local_map = build_local_map_counter(graph, v, assignment)
            target = best_move(v, local_map, info, assignment, constant, degrees)
            apply_move(v, target, info, assignment, degrees)

        e_xx = sum(
            edge.weight
            for v in range(n)
            for edge in graph.neighbors(v)
            if assignment[edge.tail] == assignment[v]
        )
        a2_x = sum(c.degree * c.degree for c in info)
        curr_mod = e_xx * constant - a2_x * constant * constant

        if curr_mod - prev_mod < threshold:
            break
        prev_mod = curr_mod

    return LouvainResult(communities=assignment, modularity=curr_mod, iterations=iterations)


def louvain_fast_track_resistance(
    graph: Graph,
    lower: float = -1.0,
    threshold: float = 1e-6,
    phase: int = 1,
) -> FastTrackResult:
    """Run snapshot Louvain rounds, tracking resistance and AFG modularity after phase 1.

    In phase 1 iteration stops when the modularity gain falls below
    threshold. In later phases the minimum resistance r_min and the AFG
    modularity are computed each round and iteration stops when the AFG
    modularity is exactly zero. At most a little over 200 rounds are run.
    """
    n = graph.num_vertices
    degrees = vertex_degrees(graph)
    constant = _second_term_constant(degrees)

    info = [Community(degree=d, size=1) for d in degrees]
    past = list(range(n))
    current = list(range(n))
    curr_mod = -1.0
    prev_mod = -1.0
    curr_mod_afg = -1.0
    r_min = 0.0
    iterations = 0

    while True:
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

        if phase > 1:
            n_c = sum(c.size * c.size for c in info)
            w_2 = 1.0 / constant
            nd = n - n_c / n
            r_min = _divide(-w_2, nd) * curr_mod
            denom_afg = _divide(1.0, w_2 - n * r_min)
            curr_mod_afg = denom_afg * (w_2 * curr_mod + r_min * nd)
            if curr_mod_afg == 0:
                break
        else:
            if curr_mod - prev_mod < threshold:
                break
            prev_mod = max(curr_mod, lower)

        for community, update in zip(info, updates):
            community.size += update.size
            community.degree += update.degree
        past, current = current, target

        if iterations > MAX_FAST_TRACK_ITERATIONS:
            break
        iterations += 1

    return FastTrackResult(
        communities=past,
        modularity_afg=curr_mod_afg,
        r_min=r_min,
        modularity=curr_mod,
        iterations=iterations,
    )