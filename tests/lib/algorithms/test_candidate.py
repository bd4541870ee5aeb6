import pytest

from kspath.lib.algorithms.candidate import Frontier, SearchCandidate, SearchSolution


class TestSearchCandidate:
    def test_child_accumulates_weight(self):
        root = SearchCandidate("A", 0)
        child = root.child("B", 3)
        grandchild = child.child("C", 2)
        assert child.weight == 3
        assert grandchild.weight == 5
        assert grandchild.parent is child
        assert root.parent is None

    def test_chain_to_and_from_root(self):
        leaf = SearchCandidate("A", 0).child("B", 1).child("C", 1)
        assert [c.node for c in leaf.iter_to_root()] == ["C", "B", "A"]
        assert [c.node for c in leaf.chain_from_root()] == ["A", "B", "C"]

    def test_siblings_share_parent(self):
        root = SearchCandidate("A", 0)
        left, right = root.child("B", 1), root.child("C", 2)
        assert left.parent is right.parent is root

    def test_long_chain_is_walked_iteratively(self):
        cand = SearchCandidate(0, 0)
        for node in range(1, 5000):
            cand = cand.child(node, 1)
        chain = cand.chain_from_root()
        assert len(chain) == 5000
        assert chain[0].node == 0 and chain[-1].weight == 4999

    def test_immutable(self):
        cand = SearchCandidate("A", 0)
        with pytest.raises(AttributeError):
            cand.weight = 5

    def test_repr(self):
        cand = SearchCandidate("A", 0).child("B", 2)
        assert repr(cand) == "SearchCandidate(node='B', weight=2, parent='A')"


class TestSearchSolution:
    def test_weight_is_sum(self):
        fwd = SearchCandidate("S", 0).child("J", 2)
        bwd = SearchCandidate("T", 0).child("J", 3)
        solution = SearchSolution(fwd, bwd)
        assert solution.weight == 5
        assert solution.join_node == "J"


class TestFrontier:
    def test_pops_in_weight_order(self):
        frontier = Frontier()
        for node, weight in [("C", 3), ("A", 1), ("B", 2)]:
            frontier.push(SearchCandidate(node, weight))
        assert len(frontier) == 3
        assert [frontier.pop().node for _ in range(3)] == ["A", "B", "C"]
        assert not frontier

    def test_ties_pop_in_insertion_order(self):
        frontier = Frontier()
        for node in "XYZ":
            frontier.push(SearchCandidate(node, 1))
        assert [frontier.pop().node for _ in range(3)] == ["X", "Y", "Z"]

    def test_duplicates_are_kept(self):
        frontier = Frontier()
        frontier.push(SearchCandidate("A", 5))
        frontier.push(SearchCandidate("A", 2))
        assert frontier.pop().weight == 2
        assert frontier.pop().weight == 5

    def test_pop_empty(self):
        with pytest.raises(IndexError):
            Frontier().pop()

    def test_independent_instances(self):
        first, second = Frontier(), Frontier()
        first.push(SearchCandidate("A", 0))
        assert len(second) == 0
