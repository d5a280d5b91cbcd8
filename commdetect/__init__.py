"""Community detection, graph coloring and multiple-stream random numbers."""

__version__ = "0.1.0"

__all__ = [
    "coloring",
    "coloring_utils",
    "dedup",
    "equitable",
    "graph",
    "local_moves",
    "louvain",
    "louvain_variants",
    "multihash",
    "rngstream",
]