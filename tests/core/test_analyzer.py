"""Tests for path enumeration and derived statistics."""

import math

import pytest

from dagstats.graph import DagAnalyzer, DirectedAcyclicGraph, PathLimitExceeded, depths
from dagstats.graph.analyzer import enumerate_paths, successor_map
from tests.core.graph_test_helpers import build_graph, path_lengths


def recursive_depths(graph, node):
    """Direct recursive definition, used as an oracle on acyclic graphs."""
    if node == 1:
        return {(1,)}
    result = set()
    for source, target in graph.edges():
        if source != node:
            continue
        for path in recursive_depths(graph, target):
            if node not in path:
                result.add((node, *path))
    return result


class TestDepths:
    """Tests for depths()."""

    def test_origin_has_single_path(self, sample_graph):
        assert depths(sample_graph, 1) == {(1,)}

    def test_origin_path_on_empty_graph(self):
        assert depths(DirectedAcyclicGraph(), 1) == {(1,)}

    def test_sample_paths(self, sample_graph):
        assert depths(sample_graph, 5) == {
            (5, 3, 1),
            (5, 3, 2, 1),
            (5, 6, 3, 1),
            (5, 6, 3, 2, 1),
        }
        assert depths(sample_graph, 4) == {(4, 2, 1)}

    def test_paths_start_at_node_and_end_at_origin(self, sample_graph):
        for node in sample_graph.nodes():
            for path in depths(sample_graph, node):
                assert path[0] == node
                assert path[-1] == 1
                assert len(set(path)) == len(path)

    def test_node_without_route_has_no_paths(self):
        dag = build_graph([(2, 1), (3, 0)])

        assert depths(dag, 3) == set()
        assert depths(dag, 0) == set()

    def test_absent_node_has_no_paths(self, sample_graph):
        assert depths(sample_graph, 99) == set()

    @pytest.mark.parametrize("fixture_name", ["sample_graph", "chain_graph", "diamond_graph"])
    def test_matches_recursive_definition(self, fixture_name, request):
        graph = request.getfixturevalue(fixture_name)

        for node in graph.nodes():
            assert depths(graph, node) == recursive_depths(graph, node)

    def test_paths_stop_at_origin(self):
        """A path ends the first time it reaches the origin."""
        dag = build_graph([(3, 1), (1, 2), (2, 0)])

        assert depths(dag, 3) == {(3, 1)}

    def test_cycle_terminates(self):
        dag = build_graph([(3, 4), (4, 3), (3, 2), (4, 1), (2, 1)])

        assert depths(dag, 3) == {(3, 2, 1), (3, 4, 1)}
        assert depths(dag, 4) == {(4, 1), (4, 3, 2, 1)}

    def test_long_chain_does_not_hit_recursion_limit(self):
        length = 3000
        dag = build_graph((n, n - 1) for n in range(2, length + 1))

        (path,) = depths(dag, length)

        assert len(path) == length
        assert path[0] == length and path[-1] == 1

    def test_max_paths_guard(self, diamond_graph):
        successors = successor_map(diamond_graph)

        assert len(enumerate_paths(5, successors, max_paths=3)) == 3
        with pytest.raises(PathLimitExceeded) as exc_info:
            enumerate_paths(5, successors, max_paths=2)

        assert exc_info.value.node == 5
        assert exc_info.value.limit == 2


class TestAvgDepth:
    def test_sample(self, sample_graph):
        assert DagAnalyzer(sample_graph).avg_depth() == pytest.approx(8 / 6)

    def test_uses_shortest_path(self, diamond_graph):
        # 1:0  2:1  3:2  4:1 (shortcut)  5:2
        assert DagAnalyzer(diamond_graph).avg_depth() == pytest.approx(6 / 5)

    def test_chain(self, chain_graph):
        assert DagAnalyzer(chain_graph).avg_depth() == pytest.approx(1.5)

    def test_origin_only(self, origin_only_graph):
        assert DagAnalyzer(origin_only_graph).avg_depth() == 0.0

    def test_empty_graph_is_nan(self):
        assert math.isnan(DagAnalyzer(DirectedAcyclicGraph()).avg_depth())

    def test_unreachable_node_is_nan(self):
        dag = build_graph([(2, 1), (3, 0)])

        assert math.isnan(DagAnalyzer(dag).avg_depth())


class TestAvgNodePerDepth:
    def test_sample(self, sample_graph):
        # lengths 2:2, 3:4, 4:3, 5:1
        assert DagAnalyzer(sample_graph).avg_node_per_depth() == pytest.approx(2.5)

    def test_counts_every_path(self, diamond_graph):
        # lengths 2:2, 3:3, 4:2
        assert DagAnalyzer(diamond_graph).avg_node_per_depth() == pytest.approx(7 / 3)

    def test_chain(self, chain_graph):
        assert DagAnalyzer(chain_graph).avg_node_per_depth() == pytest.approx(1.0)

    def test_origin_only_is_nan(self, origin_only_graph):
        assert math.isnan(DagAnalyzer(origin_only_graph).avg_node_per_depth())

    def test_unreachable_nodes_contribute_nothing(self):
        dag = build_graph([(2, 1), (3, 0)])

        assert DagAnalyzer(dag).avg_node_per_depth() == pytest.approx(1.0)


class TestAvgRef:
    def test_sample(self, sample_graph):
        assert DagAnalyzer(sample_graph).avg_ref() == pytest.approx(7 / 6)

    def test_equals_edges_over_nodes(self, diamond_graph):
        expected = diamond_graph.edge_count() / diamond_graph.node_count()
        assert DagAnalyzer(diamond_graph).avg_ref() == pytest.approx(expected)

    def test_origin_only(self, origin_only_graph):
        assert DagAnalyzer(origin_only_graph).avg_ref() == 0.0

    def test_empty_graph_is_nan(self):
        assert math.isnan(DagAnalyzer(DirectedAcyclicGraph()).avg_ref())


class TestMaxDepth:
    def test_sample(self, sample_graph):
        assert DagAnalyzer(sample_graph).max_depth() == 5

    def test_counts_nodes_not_edges(self, chain_graph):
        assert DagAnalyzer(chain_graph).max_depth() == 4

    def test_origin_only(self, origin_only_graph):
        assert DagAnalyzer(origin_only_graph).max_depth() == 1

    def test_empty_graph(self):
        assert DagAnalyzer(DirectedAcyclicGraph()).max_depth() == 0

    def test_longest_of_all_paths(self, diamond_graph):
        assert path_lengths(depths(diamond_graph, 5)) == [3, 4, 4]
        assert DagAnalyzer(diamond_graph).max_depth() == 4


class TestNoHiddenState:
    """Statistics are recomputed from the graph on every call."""

    def test_repeated_calls_identical(self, sample_graph):
        analyzer = DagAnalyzer(sample_graph)

        first = (
            analyzer.avg_depth(),
            analyzer.avg_node_per_depth(),
            analyzer.avg_ref(),
            analyzer.max_depth(),
        )
        second = (
            analyzer.avg_depth(),
            analyzer.avg_node_per_depth(),
            analyzer.avg_ref(),
            analyzer.max_depth(),
        )

        assert first == second

    def test_reflects_mutation(self, sample_graph):
        analyzer = DagAnalyzer(sample_graph)
        assert analyzer.max_depth() == 5

        sample_graph.remove_edge(5, 6)

        assert analyzer.max_depth() == 4

    def test_analyzer_never_mutates(self, sample_graph):
        nodes, edges = sample_graph.nodes(), sample_graph.edges()

        DagAnalyzer(sample_graph).avg_node_per_depth()

        assert sample_graph.nodes() == nodes
        assert sample_graph.edges() == edges

    def test_analyzer_max_paths(self, diamond_graph):
        with pytest.raises(PathLimitExceeded):
            DagAnalyzer(diamond_graph, max_paths=2).max_depth()


class TestSuccessorMap:
    def test_groups_targets_by_source(self, sample_graph):
        successors = successor_map(sample_graph)

        assert sorted(successors[5]) == [3, 6]
        assert sorted(successors[3]) == [1, 2]
        assert successors.get(1) is None
