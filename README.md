# commdetect

Community detection and graph coloring for weighted undirected graphs.
It is written in plain Python and has no third-party dependencies. It also
includes a generator of multiple independent random-number streams.

## Modules

- `commdetect.graph`
  - Provides `Graph`, a compressed adjacency structure of `Edge(head, tail, weight)`
    records. Build one with `Graph.from_edge_list(num_vertices, edges)`: every
    edge is stored from both endpoints, and self-loops are stored once.
    `Graph.neighbors(v)` and `Graph.degree(v)` give per-vertex access.
  - For multi-level clustering:
    - `renumber_clusters_contiguously(clusters)` returns the renumbered ids
      and the number of clusters.
    - `build_next_level_graph(graph, clusters, num_clusters)` and
      `build_next_level_graph_opt(...)` collapse each cluster into one vertex,
      which has a self-loop.
  - For voltage-labelled grids:
    - `build_community_based_on_voltages(graph, volts)` returns the community
      of each vertex and the voltage of each community.
    - `segregate_edges_based_on_voltages(graph, volts)` maps each voltage to
      the edges whose two endpoints both have it.
- `commdetect.louvain`
  - `louvain(graph, lower=-1.0, threshold=1e-6)` runs one Louvain
    modularity-maximisation phase. All vertices decide on the same snapshot
    in each round.
  - It returns a `LouvainResult` with `communities`, `modularity` and
    `iterations`.
  - `vertex_degrees(graph)` gives the weighted degrees.
- `commdetect.louvain_variants`
  - `louvain_full_sync(graph, lower, threshold, lock_communities)` moves
    vertices one at a time. Each vertex sees the moves made before it.
  - `louvain_fast_track_resistance(graph, lower, threshold, phase)` tracks
    the resistance `r_min` and the AFG modularity when `phase > 1`. It returns
    a `FastTrackResult`. It stops after about `MAX_FAST_TRACK_ITERATIONS`
    (200) rounds.
- `commdetect.local_moves` holds the per-vertex steps used by the Louvain
  routines:
  - `build_local_map_counter` returns a `LocalMap`;
  - `best_move` and `apply_move` act on a list of `Community` totals.
- `commdetect.coloring`
  - `distance_one_coloring(graph, rand_values=None)` and
    `distance_one_coloring_opt(...)` do speculative first-fit distance-one
    coloring with rounds of conflict resolution.
  - Both return a `ColoringResult` with `colors`, `max_color`, `num_colors`,
    `conflicts`, `rounds` and `remaining_conflicts`.
- `commdetect.multihash`
  - `color_multi_hash_max_min(graph, n_hash, n_iters, seed=None)` colors
    vertices that are local maxima or minima under several random orders.
  - It returns a `MultiHashResult` whose `history` lists `IterationStats`.
  - `generate_random_values(count, rng)` builds one random order.
- `commdetect.equitable`
  - `equitable_distance_one_color_based(graph, colors, num_colors, color_size)`
    moves vertices out of oversized color classes. It returns new colors and
    new class sizes.
  - `build_color_size` counts the class sizes.
  - `compute_variance` returns `ColorClassStats`, which can be printed as a
    report.
- `commdetect.coloring_utils` holds the shared helpers:
  - `distance_one_mark_array`, `distance_one_conf_resolution`,
    `compute_bin_sizes` and `count_conflicts`;
  - `distance_one_checked`, which raises `ColoringConflictError` on an
    improper coloring;
  - `MAX_DEGREE`, the color limit; going past it raises `ColorLimitError`.
- `commdetect.rngstream`
  - `RngStream` is a combined multiple-recursive generator with independent
    streams and substreams. It has `rand_u01`, `rand_int`, `advance_state`,
    `reset_*`, `set_seed`, `set_package_seed`, `get_state` and
    `format_state` / `write_state`.
  - Illegal seeds raise `InvalidSeedError`. `check_seed` validates a seed on
    its own.
- `commdetect.dedup`
  - `dedup_links(links)` drops rows that contain a zero.
  - It keeps the first row for each unordered pair of endpoints.

## Example

```python
from commdetect.graph import Graph, renumber_clusters_contiguously, build_next_level_graph
from commdetect.louvain import louvain

edges = [(0, 1, 1.0), (1, 2, 1.0), (0, 2, 1.0),
         (3, 4, 1.0), (4, 5, 1.0), (3, 5, 1.0),
         (2, 3, 1.0)]
g = Graph.from_edge_list(6, edges)

result = louvain(g, lower=0.0, threshold=1e-6)
print(result.modularity, result.communities)

clusters, count = renumber_clusters_contiguously(result.communities)
coarse = build_next_level_graph(g, clusters, count)
```

Random streams:

```python
from commdetect.rngstream import RngStream

stream = RngStream("demo")
values = [stream.rand_u01() for _ in range(3)]
stream.reset_start_stream()
assert values == [stream.rand_u01() for _ in range(3)]
```

## What it does not do

- There is no command-line program. The package is a library only.
- It reads and writes no graph file formats. Build graphs in memory with
  `Graph.from_edge_list`.
- It has no driver that runs the Louvain phases over several levels. Do that
  yourself by combining `louvain` with `renumber_clusters_contiguously` and
  `build_next_level_graph`, as in the example.
- All routines run sequentially in a single thread.

## Running the tests

```
pip install -e .[test]
pytest
```