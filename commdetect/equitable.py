"""Rebalancing of a distance-one coloring so that color classes have similar sizes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from commdetect.coloring_utils import compute_bin_sizes
from commdetect.graph import Graph


@dataclass(frozen=True)
class ColorClassStats:
    """Size statistics of the color classes of a coloring."""

    min_size: int
    max_size: int
    mean: float
    variance: float

    def format(self) -> str:
        """Return a short printable report."""
        rule = "=" * 42
        return (
            f"{rule}\n"
            "Characteristics of color class sizes:\n"
            f"{rule}\n"
            f"MinSize  : {self.min_size}\n"
            f"MaxSize  : {self.max_size}\n"
            f"Mean     : {self.mean:g}\n"
            f"Variance : {self.variance:g}\n"
            f"{rule}\n"
        )

    def __str__(self) -> str:
        return self.format()


def build_color_size(colors: Sequence[int], num_colors: int) -> list[int]:
    """Return the size of each color class 0..num_colors-1."""
    return compute_bin_sizes(colors, num_colors)


def compute_variance(num_vertices: int, color_size: Sequence[int]) -> ColorClassStats:
    """Return the minimum, maximum, mean and variance of the color class sizes."""
    num_colors = len(color_size)
    if num_colors == 0:
        raise ValueError("At least one color class is needed.")
    avg = num_vertices / num_colors
    variance = sum((avg - size) ** 2 for size in color_size) / num_colors
    max_size = max(0, *color_size)
    min_size = min(num_vertices, *color_size)
    return ColorClassStats(min_size, max_size, avg, variance)


def equitable_distance_one_color_based(
    graph: Graph,
    colors: Sequence[int],
    num_colors: int,
    color_size: Sequence[int],
) -> tuple[list[int], list[int]]:
    """Move vertices out of oversized color classes into undersized ones.

    Classes are visited in color order. A vertex of a class larger than the
    rounded-up average takes the smallest color whose class is below the
    average and that none of its neighbours uses. Returns the new colors and
    the new class sizes; the inputs are left unchanged.
    """
    if num_colors <= 0:
        raise ValueError("num_colors must be positive.")
    if len(colors) != graph.num_vertices:
        raise ValueError(f"Need {graph.num_vertices} colors, got {len(colors)}.")
    if len(color_size) != num_colors:
        raise ValueError(f"Need {num_colors} class sizes, got {len(color_size)}.")
    for color in colors:
        if not 0 <= color < num_colors:
            raise ValueError(f"Color {color} is not in [0, {num_colors}).")

    new_colors = list(colors)
    sizes = list(color_size)
    members: list[list[int]] = [[] for _ in range(num_colors)]
    for v, color in enumerate(new_colors):
        members[color].append(v)

    avg = (graph.num_vertices + num_colors - 1) // num_colors

    for ci, vertices in enumerate(members):
        if sizes[ci] <= avg:
            continue
        for v in vertices:
            if sizes[ci] <= avg:
                continue
            blocked = {c for c, size in enumerate(sizes) if size >= avg}
            blocked.update(
                new_colors[edge.tail] for edge in graph.neighbors(v) if edge.tail != v
            )
            choice = next((c for c in range(num_colors) if c not in blocked), None)
            if choice is not None:
                new_colors[v] = choice
                sizes[choice] += 1
                sizes[ci] -= 1
    return new_colors, sizes