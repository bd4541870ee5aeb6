"""kspath: shortest and k-shortest loopless paths in directed graphs.

kspath finds the shortest path between two nodes with a single-direction or
bidirectional Dijkstra search, and enumerates the k shortest loopless paths
with Yen's algorithm.

Primary API:
    shortest_path() - Shortest path using the configured search mode
    k_shortest_paths() / ksp() - Yen's k-shortest loopless paths
    StrictDiGraph - Directed graph with non-negative edge costs
    Path - Search result with cumulative weights and path algebra
    from_networkx() - Convert a NetworkX graph

Example:
    from kspath import StrictDiGraph, k_shortest_paths, shortest_path

    graph = StrictDiGraph()
    for node in "SABT":
        graph.add_node(node)
    graph.add_edge("S", "A", cost=1)
    graph.add_edge("A", "T", cost=1)
    graph.add_edge("S", "B", cost=1)
    graph.add_edge("B", "T", cost=2)

    path, found = shortest_path(graph, "S", "T")
    paths = k_shortest_paths(graph, "S", "T", k=2)
"""

from __future__ import annotations

from kspath import cli, logging
from kspath.config import SEARCH_CONFIG, SearchConfig
from kspath.lib.algorithms.base import SearchMode
from kspath.lib.algorithms.ksp import k_shortest_paths, ksp
from kspath.lib.algorithms.spf import bidirectional_dijkstra, dijkstra, shortest_path
from kspath.lib.graph import Connection, GraphObject, StrictDiGraph
from kspath.lib.io import load_graph_document, load_graph_file
from kspath.lib.nx import from_networkx
from kspath.lib.path import Path, PathElement

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Graph
    "StrictDiGraph",
    "GraphObject",
    "Connection",
    "from_networkx",
    "load_graph_document",
    "load_graph_file",
    # Paths
    "Path",
    "PathElement",
    # Search
    "SearchMode",
    "SearchConfig",
    "SEARCH_CONFIG",
    "dijkstra",
    "bidirectional_dijkstra",
    "shortest_path",
    "ksp",
    "k_shortest_paths",
    # Utilities
    "cli",
    "logging",
]
