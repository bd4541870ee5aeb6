"""NetworkX graph conversion utilities.

This module converts arbitrary NetworkX graphs into the `StrictDiGraph` used by
the kspath search algorithms.

Example:
    >>> import networkx as nx
    >>> from kspath.lib.nx import from_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", cost=10)
    >>> G.add_edge("B", "C", cost=5)
    >>>
    >>> graph = from_networkx(G)
    >>> graph.edge_weight("A", "B")
    10
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Union

from kspath.lib.algorithms.base import Cost, EdgeTuple
from kspath.lib.graph import COST_ATTR, AttrDict, StrictDiGraph, check_cost

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


def from_networkx(
    G: NxGraph,
    *,
    cost_attr: str = COST_ATTR,
    default_cost: Cost = 1,
) -> StrictDiGraph:
    """Convert a NetworkX graph to a StrictDiGraph.

    Node attributes and edge attributes are preserved. The edge weight is read
    from `cost_attr` and stored under the "cost" attribute of the result.

    Undirected graphs produce one edge in each direction. Parallel edges of a
    multigraph collapse into a single edge carrying the minimum cost; the
    attributes of that cheapest edge are kept.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        cost_attr: Edge attribute name for cost (default: "cost")
        default_cost: Cost value when the attribute is missing (default: 1)

    Returns:
        A new StrictDiGraph.

    Raises:
        ValueError: If an edge carries a negative or non-numeric cost.
    """
    graph = StrictDiGraph(**dict(G.graph))
    for node, attrs in G.nodes(data=True):
        graph.add_node(node, **dict(attrs))

    directed = G.is_directed()
    cheapest: Dict[EdgeTuple, AttrDict] = {}
    for u, v, attrs in G.edges(data=True):
        pairs = [(u, v)] if directed or u == v else [(u, v), (v, u)]
        for pair in pairs:
            edge_attrs = dict(attrs)
            edge_attrs[COST_ATTR] = check_cost(edge_attrs.pop(cost_attr, default_cost))
            known = cheapest.get(pair)
            if known is None or edge_attrs[COST_ATTR] < known[COST_ATTR]:
                cheapest[pair] = edge_attrs

    for (u, v), attrs in cheapest.items():
        cost = attrs.pop(COST_ATTR)
        graph.add_edge(u, v, cost=cost, **attrs)
    return graph
