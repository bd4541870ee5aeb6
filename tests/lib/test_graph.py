import networkx as nx
import pytest

from kspath.lib.graph import Connection, StrictDiGraph, graph_from_edges


def test_init_empty_graph():
    """Ensure a newly initialized graph has no nodes or edges."""
    g = StrictDiGraph()
    assert len(g) == 0
    assert g.get_edges() == {}
    assert isinstance(g, nx.DiGraph)


def test_add_node():
    g = StrictDiGraph()
    g.add_node("A")
    assert "A" in g
    assert g.get_nodes() == {"A": {}}


def test_add_node_duplicate():
    """Adding a node that already exists should raise ValueError."""
    g = StrictDiGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="already exists"):
        g.add_node("A")


def test_remove_node_basic():
    """Node removal also drops incident edges."""
    g = graph_from_edges([("A", "B", 1), ("B", "C", 1)])
    g.remove_node("B")
    assert "B" not in g
    assert g.get_edges() == {}
    assert g.successors_for_node("A") == []
    assert g.predecessors_for_node("C") == []


def test_remove_node_missing():
    g = StrictDiGraph()
    with pytest.raises(ValueError, match="does not exist"):
        g.remove_node("B")


def test_add_edge_basic():
    g = StrictDiGraph()
    g.add_node("A")
    g.add_node("B")
    g.add_edge("A", "B", cost=4, label="ab")
    assert g.get_edges() == {("A", "B"): {"cost": 4, "label": "ab"}}


def test_add_edge_default_cost():
    g = graph_from_edges([("A", "B", 1)])
    g.add_edge("B", "A")
    assert g.edge_weight("B", "A") == 1


def test_add_edge_nonexistent_nodes():
    """StrictDiGraph does not create nodes implicitly."""
    g = StrictDiGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="Target node 'B' does not exist"):
        g.add_edge("A", "B")
    with pytest.raises(ValueError, match="Source node 'B' does not exist"):
        g.add_edge("B", "A")


def test_add_edge_duplicate():
    g = graph_from_edges([("A", "B", 1)])
    with pytest.raises(ValueError, match="already exists"):
        g.add_edge("A", "B", cost=2)
    # The reverse direction is a different edge
    g.add_edge("B", "A", cost=2)


@pytest.mark.parametrize("cost", [-1, -0.5, "1", None, True])
def test_add_edge_invalid_cost(cost):
    g = graph_from_edges([("A", "B", 1)])
    with pytest.raises(ValueError, match="Edge cost"):
        g.add_edge("B", "A", cost=cost)


def test_zero_and_float_costs():
    g = graph_from_edges([("A", "B", 0), ("B", "C", 2.5)])
    assert g.edge_weight("A", "B") == 0
    assert g.edge_weight("B", "C") == 2.5


def test_remove_edge():
    g = graph_from_edges([("A", "B", 1), ("B", "A", 1)])
    g.remove_edge("A", "B")
    assert list(g.get_edges()) == [("B", "A")]
    with pytest.raises(ValueError, match="No edge"):
        g.remove_edge("A", "B")
    with pytest.raises(ValueError, match="No edge"):
        g.remove_edge("X", "A")


def test_successors_and_predecessors():
    g = graph_from_edges([("A", "B", 1), ("A", "C", 2), ("C", "B", 3)])
    assert g.successors_for_node("A") == [Connection("B", 1), Connection("C", 2)]
    assert g.predecessors_for_node("B") == [("A", 1), ("C", 3)]
    assert g.successors_for_node("B") == []
    assert g.predecessors_for_node("A") == []
    assert g.successors_for_node("unknown") == []
    assert g.predecessors_for_node("unknown") == []
    assert g.successors_for_node("A")[0].destination == "B"


def test_edge_weight_missing():
    g = graph_from_edges([("A", "B", 1)])
    with pytest.raises(KeyError):
        g.edge_weight("B", "A")
    with pytest.raises(KeyError):
        g.edge_weight("X", "Y")


def test_graph_from_edges_node_order():
    g = graph_from_edges([("C", "A", 1), ("A", "B", 1)])
    assert list(g.nodes) == ["C", "A", "B"]


def test_networkx_algorithms_work():
    g = graph_from_edges([("A", "B", 1), ("B", "C", 1), ("A", "C", 5)])
    assert nx.dijkstra_path(g, "A", "C", weight="cost") == ["A", "B", "C"]
