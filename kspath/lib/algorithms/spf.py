"""Shortest-path-first (SPF) algorithms.

Implements a single-direction Dijkstra and a bidirectional Dijkstra over any
object exposing the `GraphObject` capability. Both return a `Path` built from
the winning candidates and honour an optional set of banned edges, which is
how the k-shortest-paths enumerator forces deviations.

Notes:
    Frontiers use lazy deletion: a node may be queued more than once and only
    its first (minimal) extraction settles it; later extractions are skipped.

    The bidirectional search stops once the two most recently popped weights
    add up to at least the best known solution. Meeting points are recorded
    both when a node gets settled by the second direction and when a newly
    queued candidate lands on a node the opposite search already settled, so
    the best solution is always recorded by the time the bound is reached.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from kspath.config import SEARCH_CONFIG
from kspath.lib.algorithms.base import (
    BannedEdges,
    NodeID,
    SearchMode,
    is_banned,
)
from kspath.lib.algorithms.candidate import Frontier, SearchCandidate, SearchSolution
from kspath.lib.graph import GraphObject
from kspath.lib.path import Path
from kspath.logging import get_logger

logger = get_logger(__name__)

#: Result of a single search: the path (or None) and whether one was found.
SearchResult = Tuple[Optional[Path], bool]

#: Signature shared by `dijkstra` and `bidirectional_dijkstra`.
SearchFunc = Callable[
    [GraphObject, NodeID, NodeID, Optional[BannedEdges]], SearchResult
]

Settled = Dict[NodeID, SearchCandidate]


def dijkstra(
    graph: GraphObject,
    start_node: NodeID,
    end_node: NodeID,
    banned_edges: Optional[BannedEdges] = None,
) -> SearchResult:
    """
    Find the shortest path with a single-direction Dijkstra search.

    The search terminates as soon as `end_node` is popped from the frontier.

    Args:
        graph: Graph exposing `successors_for_node`.
        start_node: Node to search from.
        end_node: Node to search to.
        banned_edges: Edges that must not be traversed.

    Returns:
        (path, True) for the shortest path, or (None, False) if `end_node` is
        unreachable from `start_node` without using banned edges.
    """
    frontier = Frontier()
    frontier.push(SearchCandidate(start_node, 0))
    settled: Settled = {}

    while frontier:
        candidate = frontier.pop()
        if candidate.node == end_node:
            solution = SearchSolution(candidate, SearchCandidate(end_node, 0))
            logger.debug(
                "Dijkstra %r->%r found weight=%s after settling %d nodes",
                start_node,
                end_node,
                solution.weight,
                len(settled),
            )
            return Path.from_solution(solution, start_node, end_node), True

        if candidate.node in settled:
            continue
        settled[candidate.node] = candidate

        for dst, weight in graph.successors_for_node(candidate.node):
            if dst in settled or is_banned(banned_edges, candidate.node, dst):
                continue
            frontier.push(candidate.child(dst, weight))

    logger.debug(
        "Dijkstra %r->%r found no path after settling %d nodes",
        start_node,
        end_node,
        len(settled),
    )
    return None, False


def _improves(best: Optional[SearchSolution], solution: SearchSolution) -> bool:
    return best is None or solution.weight < best.weight


def _forward_step(
    graph: GraphObject,
    candidate: SearchCandidate,
    frontier: Frontier,
    settled_fwd: Settled,
    settled_bwd: Settled,
    banned_edges: Optional[BannedEdges],
    best: Optional[SearchSolution],
) -> Optional[SearchSolution]:
    """Settle and expand one forward candidate; return the updated best solution."""
    node = candidate.node
    if node in settled_fwd:
        return best
    settled_fwd[node] = candidate

    meet = settled_bwd.get(node)
    if meet is not None:
        solution = SearchSolution(candidate, meet)
        if _improves(best, solution):
            best = solution

    for dst, weight in graph.successors_for_node(node):
        if dst in settled_fwd or is_banned(banned_edges, node, dst):
            continue
        child = candidate.child(dst, weight)
        frontier.push(child)
        meet = settled_bwd.get(dst)
        if meet is not None:
            solution = SearchSolution(child, meet)
            if _improves(best, solution):
                best = solution
    return best


def _backward_step(
    graph: GraphObject,
    candidate: SearchCandidate,
    frontier: Frontier,
    settled_bwd: Settled,
    settled_fwd: Settled,
    banned_edges: Optional[BannedEdges],
    best: Optional[SearchSolution],
) -> Optional[SearchSolution]:
    """Mirror of `_forward_step` walking edges against their direction."""
    node = candidate.node
    if node in settled_bwd:
        return best
    settled_bwd[node] = candidate

    meet = settled_fwd.get(node)
    if meet is not None:
        solution = SearchSolution(meet, candidate)
        if _improves(best, solution):
            best = solution

    for src, weight in graph.predecessors_for_node(node):
        # Edge src->node is checked in its forward orientation
        if src in settled_bwd or is_banned(banned_edges, src, node):
            continue
        child = candidate.child(src, weight)
        frontier.push(child)
        meet = settled_fwd.get(src)
        if meet is not None:
            solution = SearchSolution(meet, child)
            if _improves(best, solution):
                best = solution
    return best


def bidirectional_dijkstra(
    graph: GraphObject,
    start_node: NodeID,
    end_node: NodeID,
    banned_edges: Optional[BannedEdges] = None,
) -> SearchResult:
    """
    Find the shortest path with a bidirectional Dijkstra search.

    Each iteration pops the minimum candidate of the forward frontier (rooted
    at `start_node`) and of the backward frontier (rooted at `end_node`) and
    expands both. Iteration stops when either frontier runs empty or when the
    two popped weights together reach the best known solution, which is then
    optimal.

    Args:
        graph: Graph exposing `successors_for_node` and `predecessors_for_node`.
        start_node: Node to search from.
        end_node: Node to search to.
        banned_edges: Edges that must not be traversed, keyed by source node.

    Returns:
        (path, True) for the shortest path, or (None, False) if no path exists.
    """
    forward = Frontier()
    backward = Frontier()
    forward.push(SearchCandidate(start_node, 0))
    backward.push(SearchCandidate(end_node, 0))
    settled_fwd: Settled = {}
    settled_bwd: Settled = {}
    best: Optional[SearchSolution] = None

    while forward and backward:
        fwd_candidate = forward.pop()
        bwd_candidate = backward.pop()

        if (
            best is not None
            and fwd_candidate.weight + bwd_candidate.weight >= best.weight
        ):
            break

        best = _forward_step(
            graph, fwd_candidate, forward, settled_fwd, settled_bwd, banned_edges, best
        )
        best = _backward_step(
            graph, bwd_candidate, backward, settled_bwd, settled_fwd, banned_edges, best
        )

    if best is None:
        logger.debug(
            "Bidirectional search %r->%r found no path (settled %d/%d nodes)",
            start_node,
            end_node,
            len(settled_fwd),
            len(settled_bwd),
        )
        return None, False

    logger.debug(
        "Bidirectional search %r->%r met at %r with weight=%s (settled %d/%d nodes)",
        start_node,
        end_node,
        best.join_node,
        best.weight,
        len(settled_fwd),
        len(settled_bwd),
    )
    return Path.from_solution(best, start_node, end_node), True


_SEARCH_FUNCS: Dict[SearchMode, SearchFunc] = {
    SearchMode.VANILLA: dijkstra,
    SearchMode.BIDIR: bidirectional_dijkstra,
}


def search_func_for_mode(mode: SearchMode) -> SearchFunc:
    """
    Return the search function implementing `mode`.

    Raises:
        ValueError: If `mode` is not a known SearchMode.
    """
    try:
        return _SEARCH_FUNCS[SearchMode(mode)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown search mode: {mode!r}") from None


def shortest_path(
    graph: GraphObject,
    start_node: NodeID,
    end_node: NodeID,
    mode: Optional[SearchMode] = None,
) -> SearchResult:
    """
    Find the shortest path between two nodes.

    Args:
        graph: The graph to search.
        start_node: Node to search from.
        end_node: Node to search to.
        mode: Search strategy. Defaults to the globally configured mode
            (`kspath.config.SEARCH_CONFIG.mode`).

    Returns:
        (path, True) if a path exists, otherwise (None, False). An
        unrecognized mode also yields (None, False).
    """
    if mode is None:
        mode = SEARCH_CONFIG.mode

    try:
        search_func = search_func_for_mode(mode)
    except ValueError:
        logger.warning("Unknown search mode %r; no search performed", mode)
        return None, False
    return search_func(graph, start_node, end_node, None)
