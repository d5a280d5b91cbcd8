"""Distance-one vertex coloring by speculative first-fit with conflict resolution."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Sequence

from commdetect.coloring_utils import (
    MAX_DEGREE,
    ColorLimitError,
    count_conflicts,
    distance_one_conf_resolution,
    distance_one_mark_array,
)
from commdetect.graph import Graph


@dataclass
class ColoringResult:
    """Outcome of a distance-one coloring.

    ``max_color`` is the largest color index used (zero is a valid color,
    -1 for an empty graph). ``conflicts`` counts vertices recolored over all
    rounds; ``remaining_conflicts`` counts adjacent pairs that still share a
    color after the last round.
    """

    colors: list[int]
    max_color: int
    conflicts: int
    rounds: int
    remaining_conflicts: int

    @property
    def num_colors(self) -> int:
        """Number of distinct color indices from 0 to max_color."""
        return self.max_color + 1


def _random_values(graph: Graph, rand_values: Sequence[float] | None) -> list[float]:
    if rand_values is None:
        rng = random.Random()
        return [rng.random() for _ in range(graph.num_vertices)]
    values = [float(x) for x in rand_values]
    if len(values) != graph.num_vertices:
        raise ValueError(
            f"Need {graph.num_vertices} random values, got {len(values)}."
        )
    return values


def _first_fit_opt(graph: Graph, v: int, colors: list[int]) -> int:
    marked, max_color = distance_one_mark_array(graph, v, colors)
    return next((c for c in range(max_color + 1) if c not in marked), max_color + 1)


def _first_fit_plain(graph: Graph, v: int, colors: list[int]) -> int:
    used: set[int] = set()
    max_color = -1
    for edge in graph.neighbors(v):
        adj_color = colors[edge.tail]
        if adj_color < 0:
            continue
        if adj_color >= MAX_DEGREE:
            raise ColorLimitError(
                f"Maximum number of colors exceeded: {adj_color}. Increase MAX_DEGREE."
            )
        used.add(adj_color)
        max_color = max(max_color, adj_color)
    color = next((c for c in range(max_color + 1) if c not in used), max_color + 1)
    if color == max_color:
        color += 1
    return color


def _detect_plain(
    graph: Graph, v: int, colors: list[int], rand: list[float], queue: list[int]
) -> None:
    for edge in graph.neighbors(v):
        w = edge.tail
        if colors[v] != colors[w]:
            continue
        if rand[v] < rand[w] or (rand[v] == rand[w] and v < w):
            queue.append(v)
            colors[v] = -1
            return


def _run(
    graph: Graph,
    rand: list[float],
    choose: Callable[[Graph, int, list[int]], int],
    detect: Callable[[Graph, int, list[int], list[float], list[int]], None],
) -> ColoringResult:
    colors = [-1] * graph.num_vertices
    queue = list(range(graph.num_vertices))
    conflicts = 0
    rounds = 0
    while True:
        for v in queue:
            colors[v] = choose(graph, v, colors)
        recolor: list[int] = []
        for v in queue:
            detect(graph, v, colors, rand, recolor)
        conflicts += len(recolor)
        rounds += 1
        queue = recolor
        if not queue:
            break
    return ColoringResult(
        colors=colors,
        max_color=max(colors, default=-1),
        conflicts=conflicts,
        rounds=rounds,
        remaining_conflicts=count_conflicts(graph, colors),
    )


def distance_one_coloring(
    graph: Graph, rand_values: Sequence[float] | None = None
) -> ColoringResult:
    """Color the graph so that adjacent vertices differ, using first-fit rounds.

    Conflicts are settled by the random values: of two adjacent vertices with
    the same color, the one with the smaller value (smaller index on a tie)
    is recolored in the next round.
    """
    rand = _random_values(graph, rand_values)
    return _run(graph, rand, _first_fit_plain, _detect_plain)


def distance_one_coloring_opt(
    graph: Graph, rand_values: Sequence[float] | None = None
) -> ColoringResult:
    """Like distance_one_coloring, but self-loops are ignored and colors are capped."""
    rand = _random_values(graph, rand_values)
    freq = [0] * MAX_DEGREE

    def detect(
        g: Graph, v: int, colors: list[int], values: list[float], queue: list[int]
    ) -> None:
        distance_one_conf_resolution(g, v, colors, values, queue, freq, 0)

    return _run(graph, rand, _first_fit_opt, detect)