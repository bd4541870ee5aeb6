"""Yen's k-shortest loopless paths.

Starting from the shortest path, each accepted path is split into root paths.
For every root path, the edges that accepted paths take right after it are
banned, as are the edges entering the root path's earlier nodes, and a new
suffix is searched from the root's last node. Root and suffix are merged into
a candidate and queued by weight; the cheapest queued candidate becomes the
next accepted path.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import Iterator, List, Optional, Set, Tuple

from kspath.lib.algorithms.base import (
    BannedEdges,
    Cost,
    NodeID,
    ban_edge,
    empty_banned_edges,
)
from kspath.lib.algorithms.spf import SearchFunc, dijkstra
from kspath.lib.graph import GraphObject
from kspath.lib.path import Path
from kspath.logging import get_logger

logger = get_logger(__name__)


def _deviation_bans(
    graph: GraphObject, root_path: Path, accepted: List[Path]
) -> BannedEdges:
    """
    Build the banned-edge set for deviating at the end of `root_path`.

    Bans the edge each accepted path takes right after `root_path` (if it
    shares that prefix) and every edge entering a node of `root_path` other
    than its last one, so the suffix can neither repeat a known continuation
    nor loop back into the root.
    """
    banned = empty_banned_edges()
    for path in accepted:
        edge = path.outgoing_edge_for_sub_path(root_path)
        if edge is not None:
            ban_edge(banned, *edge)

    for node in root_path.nodes_seq[:-1]:
        for src, _ in graph.predecessors_for_node(node):
            ban_edge(banned, src, node)
    return banned


def ksp(
    graph: GraphObject,
    start_node: NodeID,
    end_node: NodeID,
    max_k: int,
    search_func: SearchFunc = dijkstra,
    max_path_cost: Cost = float("inf"),
) -> Iterator[Path]:
    """
    Generator of up to max_k shortest loopless paths using Yen's algorithm.

    Paths are yielded in non-decreasing order of weight. The generator stops
    early when the graph has no further loopless paths or when the next path
    would cost more than `max_path_cost`.

    Args:
        graph: The graph to search.
        start_node: The source node.
        end_node: The destination node.
        max_k: Maximum number of paths to yield. Nothing is searched if <= 0.
        search_func: Shortest path routine used for the initial path and every
            deviation, e.g. `dijkstra` or `bidirectional_dijkstra`.
        max_path_cost: Do not yield any path whose weight exceeds this value.

    Yields:
        Distinct Path objects from start_node to end_node.
    """
    if max_k <= 0:
        return

    first, found = search_func(graph, start_node, end_node, empty_banned_edges())
    if not found:
        return

    accepted: List[Path] = []
    seen: Set[Tuple[NodeID, ...]] = {first.nodes_seq}
    tiebreak = count()
    candidates: List[Tuple[Cost, int, Path]] = [(first.weight, next(tiebreak), first)]

    while candidates and len(accepted) < max_k:
        _, _, path = heappop(candidates)
        if path.weight > max_path_cost:
            break
        if any(path.nodes_seq == known.nodes_seq for known in accepted):
            logger.debug("Skipping already accepted path %r", path)
            continue

        accepted.append(path)
        logger.debug("Accepted path #%d: %r", len(accepted), path)
        yield path

        if len(accepted) >= max_k:
            break

        for root_path in path.iter_root_paths():
            banned = _deviation_bans(graph, root_path, accepted)
            suffix, found = search_func(
                graph, root_path.last_node().node, end_node, banned
            )
            if not found:
                continue

            candidate = root_path.merge_with(suffix)
            if candidate.nodes_seq in seen:
                logger.debug("Skipping duplicate candidate %r", candidate)
                continue
            seen.add(candidate.nodes_seq)
            heappush(candidates, (candidate.weight, next(tiebreak), candidate))


def k_shortest_paths(
    graph: GraphObject,
    start_node: NodeID,
    end_node: NodeID,
    k: int,
    search_func: SearchFunc = dijkstra,
    max_path_cost: Optional[Cost] = None,
) -> List[Path]:
    """
    Return up to k shortest loopless paths from start_node to end_node.

    Fewer than k paths means the graph holds no further loopless paths (or
    none within `max_path_cost`). k <= 0 returns an empty list without
    invoking `search_func`.

    Args:
        graph: The graph to search.
        start_node: The source node.
        end_node: The destination node.
        k: Number of paths requested.
        search_func: Shortest path routine matching `SearchFunc`.
        max_path_cost: Optional upper bound on path weight.

    Returns:
        Paths sorted by non-decreasing weight.
    """
    if max_path_cost is None:
        max_path_cost = float("inf")
    paths = list(
        ksp(graph, start_node, end_node, k, search_func, max_path_cost=max_path_cost)
    )
    logger.debug(
        "Found %d of %d requested paths %r->%r", len(paths), k, start_node, end_node
    )
    return paths
