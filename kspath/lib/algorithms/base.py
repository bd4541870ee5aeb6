from __future__ import annotations

from enum import IntEnum
from typing import Dict, Hashable, Optional, Set, Tuple, Union

#: Node identifier. Any hashable value accepted by networkx works.
NodeID = Hashable

#: Represents numeric cost of an edge or a path (e.g. distance, latency, etc.).
Cost = Union[int, float]

#: A directed edge as a (source, destination) pair.
EdgeTuple = Tuple[NodeID, NodeID]

#: Edges excluded from one search run: source node -> set of destination nodes.
BannedEdges = Dict[NodeID, Set[NodeID]]


class SearchMode(IntEnum):
    """
    Shortest path search strategies.
    """

    #: Single-direction Dijkstra that stops once the destination is settled.
    VANILLA = 1
    #: Bidirectional Dijkstra meeting in the middle.
    BIDIR = 2


def empty_banned_edges() -> BannedEdges:
    """Return a new, empty banned-edge set."""
    return {}


def ban_edge(banned_edges: BannedEdges, src_node: NodeID, dst_node: NodeID) -> None:
    """Mark the edge src_node->dst_node as not traversable."""
    banned_edges.setdefault(src_node, set()).add(dst_node)


def is_banned(
    banned_edges: Optional[BannedEdges], src_node: NodeID, dst_node: NodeID
) -> bool:
    """
    Check whether the edge src_node->dst_node is banned.

    Args:
        banned_edges: The banned-edge set, or None for no bans.
        src_node: Edge source.
        dst_node: Edge destination.

    Returns:
        True if the edge must not be traversed.
    """
    if not banned_edges:
        return False
    dsts = banned_edges.get(src_node)
    return dsts is not None and dst_node in dsts
