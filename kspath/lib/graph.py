from __future__ import annotations

from numbers import Real
from typing import Any, Dict, List, NamedTuple, Protocol, Sequence, Tuple

import networkx as nx

from kspath.lib.algorithms.base import Cost, EdgeTuple, NodeID

AttrDict = Dict[str, Any]

#: Default edge attribute holding the edge weight.
COST_ATTR = "cost"


class Connection(NamedTuple):
    """An adjacent node together with the weight of the connecting edge."""

    destination: NodeID
    weight: Cost


class GraphObject(Protocol):
    """
    Minimal read-only graph capability consumed by the path search algorithms.

    All weights must be non-negative. Implementations are never mutated by the
    algorithms and may be shared across independent searches.
    """

    def successors_for_node(self, node: NodeID) -> Sequence[Connection]:
        """Return (destination, weight) pairs for edges leaving `node`."""
        ...

    def predecessors_for_node(self, node: NodeID) -> Sequence[Connection]:
        """Return (source, weight) pairs for edges entering `node`."""
        ...

    def edge_weight(self, src_node: NodeID, dst_node: NodeID) -> Cost:
        """Return the weight of the edge src_node->dst_node."""
        ...


def check_cost(cost: Any) -> Cost:
    """Return `cost` unchanged if it is a valid edge weight, else raise ValueError."""
    if isinstance(cost, bool) or not isinstance(cost, Real):
        raise ValueError(f"Edge cost must be a number, got {cost!r}.")
    if cost < 0:
        raise ValueError(f"Edge cost must be non-negative, got {cost!r}.")
    return cost


class StrictDiGraph(nx.DiGraph):
    """
    A directed graph with strict rules that implements `GraphObject`.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raising ValueError on duplicates).
      - At most one edge per ordered node pair (raising ValueError on duplicates).
      - Non-negative numeric edge costs stored under the "cost" attribute.
      - Attempting to remove non-existent nodes or edges raises ValueError.

    Inherits from:
        networkx.DiGraph
    """

    #
    # Node management
    #
    def add_node(self, n: NodeID, **attr: Any) -> None:
        """
        Add a single node, disallowing duplicates.

        Args:
            n (NodeID): The node to add.
            **attr: Arbitrary attributes for this node.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if n in self:
            raise ValueError(f"Node '{n}' already exists in this graph.")
        super().add_node(n, **attr)

    def remove_node(self, n: NodeID) -> None:
        """
        Remove a single node and all incident edges.

        Raises:
            ValueError: If the node does not exist in the graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(
        self,
        u_of_edge: NodeID,
        v_of_edge: NodeID,
        cost: Cost = 1,
        **attr: Any,
    ) -> None:
        """
        Add a directed edge from u_of_edge to v_of_edge.

        This method does not create nodes automatically; both endpoints must
        already exist in the graph.

        Args:
            u_of_edge (NodeID): The source node. Must exist in the graph.
            v_of_edge (NodeID): The target node. Must exist in the graph.
            cost (Cost): Non-negative edge weight. Defaults to 1.
            **attr: Arbitrary edge attributes.

        Raises:
            ValueError: If either node does not exist, the edge already exists,
                or the cost is negative or not numeric.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source node '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target node '{v_of_edge}' does not exist.")
        if v_of_edge in self._succ[u_of_edge]:
            raise ValueError(
                f"Edge from '{u_of_edge}' to '{v_of_edge}' already exists."
            )
        attr[COST_ATTR] = check_cost(cost)
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def remove_edge(self, u: NodeID, v: NodeID) -> None:
        """
        Remove the edge from u to v.

        Raises:
            ValueError: If the edge does not exist.
        """
        if u not in self._succ or v not in self._succ[u]:
            raise ValueError(f"No edge from '{u}' to '{v}' to remove.")
        super().remove_edge(u, v)

    #
    # Convenience methods
    #
    def get_nodes(self) -> Dict[NodeID, AttrDict]:
        """
        Retrieve all nodes and their attributes as a dictionary.

        Returns:
            Dict[NodeID, AttrDict]: A mapping of node ID to its attributes.
        """
        return dict(self.nodes(data=True))

    def get_edges(self) -> Dict[EdgeTuple, AttrDict]:
        """
        Retrieve all edges keyed by their (source, target) pair.

        Returns:
            Dict[EdgeTuple, AttrDict]: A mapping of (u, v) to edge attributes.
        """
        return {(u, v): attrs for u, v, attrs in self.edges(data=True)}

    #
    # GraphObject capability
    #
    def successors_for_node(self, node: NodeID) -> List[Connection]:
        if node not in self._succ:
            return []
        return [
            Connection(dst, attrs[COST_ATTR]) for dst, attrs in self._succ[node].items()
        ]

    def predecessors_for_node(self, node: NodeID) -> List[Connection]:
        if node not in self._pred:
            return []
        return [
            Connection(src, attrs[COST_ATTR]) for src, attrs in self._pred[node].items()
        ]

    def edge_weight(self, src_node: NodeID, dst_node: NodeID) -> Cost:
        """
        Return the cost of the edge src_node->dst_node.

        Raises:
            KeyError: If no such edge exists.
        """
        try:
            return self._succ[src_node][dst_node][COST_ATTR]
        except KeyError:
            raise KeyError(f"No edge from '{src_node}' to '{dst_node}'.") from None


def graph_from_edges(
    edges: Sequence[Tuple[NodeID, NodeID, Cost]],
) -> StrictDiGraph:
    """
    Build a StrictDiGraph from (source, target, cost) triples.

    Nodes are created in order of first appearance.
    """
    graph = StrictDiGraph()
    for src, dst, _ in edges:
        for node in (src, dst):
            if node not in graph:
                graph.add_node(node)
    for src, dst, cost in edges:
        graph.add_edge(src, dst, cost=cost)
    return graph
