import logging
import random
from itertools import islice
from unittest.mock import Mock

import networkx as nx
import pytest

from kspath.lib.algorithms.ksp import _deviation_bans, k_shortest_paths, ksp
from kspath.lib.algorithms.spf import bidirectional_dijkstra, dijkstra
from kspath.lib.nx import from_networkx
from kspath.lib.path import Path

YEN_ORDER = [
    ("S", "A", "C", "G", "T"),
    ("S", "A", "C", "E", "G", "T"),
    ("S", "A", "B", "D", "C", "G", "T"),
    ("S", "A", "C", "E", "F", "G", "T"),
]


class TestKSP:
    def test_multiple_paths(self, yen_graph):
        paths = k_shortest_paths(yen_graph, "S", "T", 4, dijkstra)
        assert [p.nodes_seq for p in paths] == YEN_ORDER
        assert [p.weight for p in paths] == [4, 5, 6, 6]

    def test_multiple_paths_bidirectional(self, yen_graph):
        paths = k_shortest_paths(yen_graph, "S", "T", 4, bidirectional_dijkstra)
        assert [p.weight for p in paths] == [4, 5, 6, 6]
        assert {p.nodes_seq for p in paths} == set(YEN_ORDER)
        assert paths[0].nodes_seq == YEN_ORDER[0]
        assert paths[1].nodes_seq == YEN_ORDER[1]

    def test_paths_are_valid_and_loopless(self, yen_graph):
        for path in k_shortest_paths(yen_graph, "S", "T", 10):
            path.validate()
            assert path.start_node == "S"
            assert path.end_node == "T"
            assert path.nodes_seq[0] == "S" and path.nodes_seq[-1] == "T"

    def test_enumerates_all_paths(self, yen_graph):
        paths = k_shortest_paths(yen_graph, "S", "T", 10)
        assert len(paths) == 6
        assert len({p.nodes_seq for p in paths}) == 6
        assert [p.weight for p in paths] == [4, 5, 6, 6, 7, 8]

    @pytest.mark.parametrize("k", range(1, 9))
    def test_increasing_k_is_a_prefix(self, yen_graph, k):
        paths = k_shortest_paths(yen_graph, "S", "T", k)
        assert len(paths) == min(k, 6)
        weights = [p.weight for p in paths]
        assert weights == sorted(weights)
        assert [p.nodes_seq for p in paths[:4]] == YEN_ORDER[: len(paths)]

    @pytest.mark.parametrize("k", [0, -1])
    def test_non_positive_k_does_not_search(self, yen_graph, k):
        search_func = Mock()
        assert k_shortest_paths(yen_graph, "S", "T", k, search_func) == []
        search_func.assert_not_called()

    def test_not_found(self, yen_graph):
        assert k_shortest_paths(yen_graph, "S", "U", 3) == []
        assert k_shortest_paths(yen_graph, "T", "S", 3) == []

    def test_single_path_graph(self, line1):
        paths = k_shortest_paths(line1, "A", "C", 5)
        assert [p.nodes_seq for p in paths] == [("A", "B", "C")]

    def test_start_equals_end(self, yen_graph):
        paths = k_shortest_paths(yen_graph, "C", "C", 3)
        assert [p.nodes_seq for p in paths] == [("C",)]

    def test_max_path_cost(self, yen_graph):
        paths = k_shortest_paths(yen_graph, "S", "T", 10, max_path_cost=5)
        assert [p.nodes_seq for p in paths] == YEN_ORDER[:2]
        paths = k_shortest_paths(yen_graph, "S", "T", 10, max_path_cost=6)
        assert [p.nodes_seq for p in paths] == YEN_ORDER
        assert k_shortest_paths(yen_graph, "S", "T", 10, max_path_cost=3) == []

    def test_generator_is_lazy(self, yen_graph):
        calls = []

        def counting_search(graph, start, end, banned):
            calls.append(start)
            return dijkstra(graph, start, end, banned)

        gen = ksp(yen_graph, "S", "T", 10, counting_search)
        first = next(gen)
        assert first.nodes_seq == YEN_ORDER[0]
        assert calls == ["S"]
        assert [p.nodes_seq for p in islice(gen, 1)] == [YEN_ORDER[1]]

    def test_duplicates_are_skipped(self, yen_graph, caplog):
        # Deviating from S-A-C-E-G-T at A yields S-A-B-D-C-G-T again.
        with caplog.at_level(logging.DEBUG, logger="kspath"):
            paths = k_shortest_paths(yen_graph, "S", "T", 3)
        assert [p.nodes_seq for p in paths] == YEN_ORDER[:3]
        assert any("duplicate" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("search_func", [dijkstra, bidirectional_dijkstra])
    @pytest.mark.parametrize("seed", [3, 11])
    def test_agrees_with_networkx(self, search_func, seed):
        rng = random.Random(seed)
        G = nx.DiGraph()
        G.add_nodes_from(range(12))
        for u in range(12):
            for v in range(12):
                if u != v and rng.random() < 0.3:
                    G.add_edge(u, v, cost=rng.randint(1, 9))
        graph = from_networkx(G)

        for src, dst in [(0, 11), (3, 7), (5, 1)]:
            paths = k_shortest_paths(graph, src, dst, 8, search_func)
            if not nx.has_path(G, src, dst):
                assert paths == []
                continue
            expected = [
                nx.path_weight(G, p, weight="cost")
                for p in islice(nx.shortest_simple_paths(G, src, dst, weight="cost"), 8)
            ]
            assert [p.weight for p in paths] == expected
            assert len({p.nodes_seq for p in paths}) == len(paths)
            for path in paths:
                path.validate()
                assert path == Path.from_nodes(path.nodes_seq, graph)


class TestDeviationBans:
    def test_bans_outgoing_and_root_entries(self, yen_graph):
        accepted = [Path.from_nodes(YEN_ORDER[0], yen_graph)]
        root = accepted[0].root_paths()[2]  # S-A-C
        banned = _deviation_bans(yen_graph, root, accepted)
        assert banned == {"C": {"G"}, "S": {"A"}}

    def test_first_root_has_no_entry_bans(self, yen_graph):
        accepted = [Path.from_nodes(YEN_ORDER[0], yen_graph)]
        root = accepted[0].root_paths()[0]  # S
        assert _deviation_bans(yen_graph, root, accepted) == {"S": {"A"}}
