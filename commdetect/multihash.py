"""Graph coloring by repeated local max/min selection over several hashes."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Sequence

from commdetect.graph import Graph

_RAND_LIMIT = 2**31


@dataclass(frozen=True)
class IterationStats:
    """How many vertices were colored in one iteration and in total so far."""

    iteration: int
    colored: int
    total_colored: int


@dataclass
class MultiHashResult:
    """Outcome of a multi-hash max/min coloring.

    Vertices whose color equals ``num_colors`` were not colored.
    """

    colors: list[int]
    num_colors: int
    conflicts: int
    uncolored: int
    history: list[IterationStats] = field(default_factory=list)


def generate_random_values(count: int, rng: random.Random | None = None) -> list[float]:
    """Return count random non-negative integers as floats."""
    rng = rng if rng is not None else random.Random()
    return [float(rng.randrange(_RAND_LIMIT)) for _ in range(count)]


def _check_colored(graph: Graph, colors: Sequence[int], max_color: int) -> tuple[int, int]:
    conflicts = 0
    uncolored = 0
    for v in range(graph.num_vertices):
        if colors[v] == max_color:
            uncolored += 1
            continue
        conflicts += sum(
            1
            for edge in graph.neighbors(v)
            if edge.tail != v and colors[v] == colors[edge.tail]
        )
    return conflicts // 2, uncolored


def color_multi_hash_max_min(
    graph: Graph, n_hash: int, n_iters: int, seed: int | None = None
) -> MultiHashResult:
    """Color vertices that are local maxima or minima of one of n_hash random orders.

    Each iteration sweeps every hash; a sweep gives the local maxima among
    uncolored neighbours one new color and the local minima another.
    """
    if n_hash <= 0:
        raise ValueError("n_hash must be positive.")
    if n_iters <= 0:
        raise ValueError("n_iters must be positive.")
    nv = graph.num_vertices
    rng = random.Random(seed)
    hashes = [generate_random_values(nv, rng) for _ in range(n_hash)]

    max_color = 2 * n_hash * n_iters
    colors = [max_color] * nv
    history: list[IterationStats] = []
    total_colored = 0

    for itr in range(n_iters):
        colored_now = 0
        for ihash, values in enumerate(hashes):
            current = 2 * itr * n_hash + 2 * ihash
            for v in range(nv):
                if colors[v] != max_color:
                    continue
                is_max = is_min = True
                for edge in graph.neighbors(v):
                    w = edge.tail
                    if w == v or colors[w] < current:
                        continue
                    if values[v] <= values[w]:
                        is_max = False
                    if values[v] >= values[w]:
                        is_min = False
                if is_max:
                    colors[v] = current
                    colored_now += 1
                elif is_min:
                    colors[v] = current + 1
                    colored_now += 1
        total_colored += colored_now
        history.append(IterationStats(itr, colored_now, total_colored))
        if colored_now == 0 and total_colored == nv:
            max_color = 2 * (itr - 1) * n_hash + 2 * n_hash + 1
            break

    conflicts, uncolored = _check_colored(graph, colors, max_color)
    return MultiHashResult(colors, max_color, conflicts, uncolored, history)