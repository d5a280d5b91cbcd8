"""Compressed adjacency graphs and construction of coarsened (next-level) graphs."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import accumulate, chain
from typing import Iterable, Sequence, Union

EdgeSpec = Union["Edge", Sequence[float]]


@dataclass(frozen=True)
class Edge:
    """A directed adjacency entry: head -> tail with a weight."""

    head: int
    tail: int
    weight: float = 1.0


@dataclass
class Graph:
    """An undirected graph in compressed adjacency form.

    Every non-self-loop edge appears twice in ``edge_list`` (once from each
    endpoint); self-loops appear once. ``edge_list_ptrs[v]`` to
    ``edge_list_ptrs[v + 1]`` delimits the entries of vertex ``v``.
    """

    num_vertices: int
    num_edges: int
    edge_list_ptrs: list[int]
    edge_list: list[Edge]
    s_vertices: int | None = None

    def __post_init__(self) -> None:
        if self.s_vertices is None:
            self.s_vertices = self.num_vertices
        if len(self.edge_list_ptrs) != self.num_vertices + 1:
            raise ValueError(
                f"edge_list_ptrs needs {self.num_vertices + 1} entries, "
                f"got {len(self.edge_list_ptrs)}."
            )
        if self.edge_list_ptrs[0] != 0 or self.edge_list_ptrs[-1] != len(self.edge_list):
            raise ValueError("edge_list_ptrs does not span edge_list.")

    @classmethod
    def from_edge_list(cls, num_vertices: int, edges: Iterable[EdgeSpec]) -> Graph:
        """Build a graph from undirected edges given as Edge or (head, tail[, weight]).

        Each edge is stored from both endpoints, self-loops once; the entries of
        a vertex keep the order in which the edges were given.
        """
        if num_vertices < 0:
            raise ValueError("num_vertices must not be negative.")
        adjacency: list[list[Edge]] = [[] for _ in range(num_vertices)]
        count = 0
        for item in edges:
            if isinstance(item, Edge):
                head, tail, weight = item.head, item.tail, item.weight
            else:
                if len(item) not in (2, 3):
                    raise ValueError(f"An edge needs 2 or 3 fields, got {len(item)}.")
                head, tail = int(item[0]), int(item[1])
                weight = item[2] if len(item) == 3 else 1.0
            for endpoint in (head, tail):
                if not 0 <= endpoint < num_vertices:
                    raise ValueError(f"Vertex {endpoint} is out of range.")
            adjacency[head].append(Edge(head, tail, weight))
            if head != tail:
                adjacency[tail].append(Edge(tail, head, weight))
            count += 1
        return cls._from_adjacency(adjacency, count)

    @classmethod
    def _from_adjacency(cls, adjacency: list[list[Edge]], num_edges: int) -> Graph:
        ptrs = list(accumulate((len(entries) for entries in adjacency), initial=0))
        return cls(len(adjacency), num_edges, ptrs, list(chain.from_iterable(adjacency)))

    def _check_vertex(self, v: int) -> None:
        if not 0 <= v < self.num_vertices:
            raise IndexError(f"Vertex {v} is out of range.")

    def neighbors(self, v: int) -> list[Edge]:
        """Return the adjacency entries of vertex v."""
        self._check_vertex(v)
        return self.edge_list[self.edge_list_ptrs[v] : self.edge_list_ptrs[v + 1]]

    def degree(self, v: int) -> int:
        """Return the number of adjacency entries of vertex v."""
        self._check_vertex(v)
        return self.edge_list_ptrs[v + 1] - self.edge_list_ptrs[v]


def renumber_clusters_contiguously(clusters: Sequence[int]) -> tuple[list[int], int]:
    """Renumber cluster ids to 0..k-1 in order of first appearance.

    Negative ids are left untouched. Returns the new ids and k.
    """
    size = len(clusters)
    mapping: dict[int, int] = {}
    renumbered: list[int] = []
    for cluster in clusters:
        if cluster >= size:
            raise ValueError(f"Cluster id {cluster} is not below {size}.")
        if cluster >= 0:
            cluster = mapping.setdefault(cluster, len(mapping))
        renumbered.append(cluster)
    return renumbered, len(mapping)


def _check_clusters(graph: Graph, clusters: Sequence[int], num_clusters: int) -> None:
    if len(clusters) != graph.num_vertices:
        raise ValueError(
            f"Need {graph.num_vertices} cluster ids, got {len(clusters)}."
        )
    for cluster in clusters:
        if not 0 <= cluster < num_clusters:
            raise ValueError(f"Cluster id {cluster} is not in [0, {num_clusters}).")


def build_next_level_graph_opt(
    graph: Graph, clusters: Sequence[int], num_clusters: int
) -> Graph:
    """Collapse each cluster into one vertex, summing edge weights.

    Every cluster gets a self-loop (weight zero if it has no internal edges).
    Cluster ids must already be contiguous.
    """
    _check_clusters(graph, clusters, num_clusters)
    weights: list[dict[int, float]] = [{i: 0.0} for i in range(num_clusters)]
    for v in range(graph.num_vertices):
        cv = clusters[v]
        local = weights[cv]
        for edge in graph.neighbors(v):
            ct = clusters[edge.tail]
            if cv >= ct:
                local[ct] = local.get(ct, 0.0) + edge.weight

    adjacency: list[list[Edge]] = [[] for _ in range(num_clusters)]
    between = 0
    for i, local in enumerate(weights):
        for other in sorted(local):
            weight = local[other]
            adjacency[i].append(Edge(i, other, weight))
            if other != i:
                adjacency[other].append(Edge(other, i, weight))
                between += 1
    return Graph._from_adjacency(adjacency, num_clusters + between)


def build_next_level_graph(
    graph: Graph, clusters: Sequence[int], num_clusters: int
) -> Graph:
    """Collapse each cluster into one vertex using a lower-triangular weight table.

    Only cluster pairs with positive total weight become edges; every cluster
    gets a self-loop. Cluster ids must already be contiguous.
    """
    _check_clusters(graph, clusters, num_clusters)
    rows: list[dict[int, float]] = [defaultdict(float) for _ in range(num_clusters)]
    for v in range(graph.num_vertices):
        cv = clusters[v]
        for edge in graph.neighbors(v):
            ct = clusters[edge.tail]
            if cv >= ct:
                rows[cv][ct] += edge.weight

    adjacency: list[list[Edge]] = [[] for _ in range(num_clusters)]
    between = 0
    for i, row in enumerate(rows):
        adjacency[i].append(Edge(i, i, row.get(i, 0)))
        for j in sorted(row):
            weight = row[j]
            if j < i and weight > 0:
                adjacency[i].append(Edge(i, j, weight))
                adjacency[j].append(Edge(j, i, weight))
                between += 1
    return Graph._from_adjacency(adjacency, num_clusters + between)


def build_community_based_on_voltages(
    graph: Graph, volts: Sequence[int]
) -> tuple[list[int], list[int]]:
    """Group connected vertices of equal voltage into communities.

    Returns the community of each vertex and the voltage of each community;
    communities are numbered in order of their lowest vertex.
    """
    if len(volts) != graph.num_vertices:
        raise ValueError(f"Need {graph.num_vertices} voltages, got {len(volts)}.")
    communities = [-1] * graph.num_vertices
    community_volts: list[int] = []
    for start in range(graph.num_vertices):
        if communities[start] >= 0:
            continue
        if volts[start] <= 0:
            raise ValueError(f"Vertex {start} has non-positive voltage {volts[start]}.")
        community = len(community_volts)
        community_volts.append(volts[start])
        communities[start] = community
        stack = [start]
        while stack:
            v = stack.pop()
            for edge in graph.neighbors(v):
                w = edge.tail
                if communities[w] < 0 and volts[w] == volts[v]:
                    communities[w] = community
                    stack.append(w)
    return communities, community_volts


def segregate_edges_based_on_voltages(
    graph: Graph, volts: Sequence[int]
) -> dict[int, list[tuple[int, int]]]:
    """Map each voltage level, in ascending order, to the edges whose endpoints both have it."""
    if len(volts) != graph.num_vertices:
        raise ValueError(f"Need {graph.num_vertices} voltages, got {len(volts)}.")
    result: dict[int, list[tuple[int, int]]] = {volt: [] for volt in sorted(set(volts))}
    for v in range(graph.num_vertices):
        for edge in graph.neighbors(v):
            if volts[v] == volts[edge.tail]:
                result[volts[v]].append((v, edge.tail))
    return result