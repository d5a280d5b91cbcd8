"""Helpers shared by the distance-one graph coloring algorithms."""

from __future__ import annotations

from typing import MutableSequence, Sequence

from commdetect.graph import Graph

MAX_DEGREE = 4096
"""Largest number of colors the coloring routines can handle."""


class ColorLimitError(RuntimeError):
    """Raised when a color index reaches MAX_DEGREE."""


class ColoringConflictError(ValueError):
    """Raised when two adjacent vertices share a color."""


def distance_one_mark_array(
    graph: Graph, v: int, colors: Sequence[int]
) -> tuple[set[int], int]:
    """Collect the colors used by the neighbours of v.

    Self-loops and uncolored (negative) neighbours are ignored. Returns the
    set of used colors and the largest of them (-1 if there is none).
    """
    marked: set[int] = set()
    max_color = -1
    for edge in graph.neighbors(v):
        if edge.tail == v:
            continue
        adj_color = colors[edge.tail]
        if adj_color < 0:
            continue
        if adj_color >= MAX_DEGREE:
            raise ColorLimitError(
                f"Maximum number of colors exceeded: {adj_color}. Increase MAX_DEGREE."
            )
        marked.add(adj_color)
        max_color = max(max_color, adj_color)
    return marked, max_color


def compute_bin_sizes(colors: Sequence[int], num_colors: int) -> list[int]:
    """Return the number of vertices having each color in 0..num_colors-1."""
    sizes = [0] * num_colors
    for color in colors:
        if not 0 <= color < num_colors:
            raise ValueError(f"Color {color} is not in [0, {num_colors}).")
        sizes[color] += 1
    return sizes


def distance_one_conf_resolution(
    graph: Graph,
    v: int,
    colors: MutableSequence[int],
    rand_values: Sequence[float],
    queue: list[int],
    freq: MutableSequence[int],
    kind: int,
) -> bool:
    """Uncolor v and queue it if it loses a conflict with a neighbour.

    Of two adjacent vertices with the same color, the one with the smaller
    random value (or, on a tie, the smaller index) loses. When kind is not
    zero, the frequency of v's old color is decremented. Returns whether v
    was queued.
    """
    for edge in graph.neighbors(v):
        w = edge.tail
        if w == v or colors[v] != colors[w]:
            continue
        if rand_values[v] < rand_values[w] or (
            rand_values[v] == rand_values[w] and v < w
        ):
            queue.append(v)
            if kind != 0 and colors[v] != -1:
                freq[colors[v]] -= 1
            colors[v] = -1
            return True
    return False


def distance_one_checked(graph: Graph, colors: Sequence[int]) -> bool:
    """Return True if no two adjacent vertices share a color; raise otherwise."""
    for v in range(graph.num_vertices):
        for edge in graph.neighbors(v):
            if edge.tail != v and colors[v] == colors[edge.tail]:
                raise ColoringConflictError(
                    f"Vertices {v} and {edge.tail} share color {colors[v]}."
                )
    return True


def count_conflicts(graph: Graph, colors: Sequence[int]) -> int:
    """Return the number of edges whose endpoints share a color, self-loops aside."""
    hits = sum(
        1
        for v in range(graph.num_vertices)
        for edge in graph.neighbors(v)
        if edge.tail != v and colors[v] == colors[edge.tail]
    )
    return hits // 2