"""Unit tests for transitive dependency and dependent traversal."""

import time

import pytest

from tooldeps.common.exceptions import InvalidQueryError
from tooldeps.graph import DependencyGraph, Direction


def _depths(nodes) -> dict[str, int]:
    return {n.id: n.depth for n in nodes}


@pytest.mark.unit
class TestTransitiveDependencies:
    """Test cases for outward BFS."""

    def test_linear_chain_depths(self, chain_graph: DependencyGraph):
        """Test that a chain reports one hop per link."""
        result = chain_graph.get_transitive_dependencies("a")

        assert _depths(result) == {"b": 1, "c": 2, "d": 3}
        assert [n.id for n in result] == ["b", "c", "d"]

    def test_diamond_counted_once(self, diamond_graph: DependencyGraph):
        """Test that a node reachable via two paths is reported once."""
        result = diamond_graph.get_transitive_dependencies("a")
        ids = [n.id for n in result]

        assert sorted(ids) == ["b", "c", "d"]
        assert len(ids) == len(set(ids))

    def test_diamond_uses_minimum_depth(self, make_graph):
        """Test that the shorter of two paths determines depth."""
        # a -> d directly and a -> b -> c -> d
        graph = make_graph([("a", "b"), ("b", "c"), ("c", "d"), ("a", "d")])

        assert _depths(graph.get_transitive_dependencies("a")) == {"b": 1, "d": 1, "c": 2}

    def test_diamond_depth_is_two(self, diamond_graph: DependencyGraph):
        """Test the depth of the shared node in a symmetric diamond."""
        assert _depths(diamond_graph.get_transitive_dependencies("a"))["d"] == 2

    def test_ordered_by_depth_then_name(self, make_graph):
        """Test deterministic result ordering."""
        graph = make_graph([("root", "zeta"), ("root", "alpha"), ("alpha", "beta"), ("zeta", "gamma")])

        assert [n.id for n in graph.get_transitive_dependencies("root")] == [
            "alpha", "zeta", "beta", "gamma",
        ]

    def test_cycle_excludes_start(self, cycle_graph: DependencyGraph):
        """Test that a cycle back to the start does not report the start."""
        assert _depths(cycle_graph.get_transitive_dependencies("a")) == {"b": 1, "c": 2}

    def test_self_loop_excludes_start(self, make_graph):
        """Test that a self-dependency does not make a tool its own dependency."""
        graph = make_graph([("a", "a"), ("a", "b")])

        assert _depths(graph.get_transitive_dependencies("a")) == {"b": 1}

    def test_leaf_has_no_dependencies(self, chain_graph: DependencyGraph):
        """Test a tool without dependencies."""
        assert chain_graph.get_transitive_dependencies("d") == []


@pytest.mark.unit
class TestTransitiveDependents:
    """Test cases for inward BFS."""

    def test_chain_dependents(self, chain_graph: DependencyGraph):
        """Test dependents of the deepest provider."""
        assert _depths(chain_graph.get_transitive_dependents("d")) == {"c": 1, "b": 2, "a": 3}

    def test_diamond_dependents(self, diamond_graph: DependencyGraph):
        """Test that the diamond top is reached once at depth two."""
        assert _depths(diamond_graph.get_transitive_dependents("d")) == {"b": 1, "c": 1, "a": 2}

    def test_traversal_result(self, ecosystem_graph: DependencyGraph):
        """Test the full traversal result summary."""
        result = ecosystem_graph.traverse("core", Direction.DEPENDENTS)

        assert result.root_id == "core"
        assert result.direction is Direction.DEPENDENTS
        assert result.total_nodes == 6
        assert result.max_depth == 3
        assert result.depths()["assistant"] == 3

    def test_depth_bound_cuts_chain(self, chain_graph: DependencyGraph):
        """Test that tools beyond the bound are not reported."""
        assert _depths(chain_graph.get_transitive_dependents("d", max_depth=2)) == {"c": 1, "b": 2}
        assert _depths(chain_graph.get_transitive_dependencies("a", max_depth=1)) == {"b": 1}

    def test_depth_bound_in_diamond(self, make_graph):
        """Test that a bounded walk still keeps minimum depths."""
        # d <- b <- a, d <- c <- a, d <- a, a <- top
        graph = make_graph([("b", "d"), ("c", "d"), ("a", "b"), ("a", "c"), ("a", "d"), ("top", "a")])

        assert _depths(graph.get_transitive_dependents("d", max_depth=1)) == {"a": 1, "b": 1, "c": 1}
        assert _depths(graph.get_transitive_dependents("d", max_depth=2)) == {
            "a": 1, "b": 1, "c": 1, "top": 2,
        }

    def test_depth_bound_larger_than_graph(self, chain_graph: DependencyGraph):
        """Test that a generous bound matches the unbounded walk."""
        assert chain_graph.get_transitive_dependents("d", max_depth=10) == (
            chain_graph.get_transitive_dependents("d")
        )

    @pytest.mark.parametrize("max_depth", [0, -2, True, 1.5, "2"])
    def test_invalid_depth_bound(self, chain_graph: DependencyGraph, max_depth):
        """Test that a bad bound fails fast instead of being clamped."""
        with pytest.raises(InvalidQueryError):
            chain_graph.traverse("d", Direction.DEPENDENTS, max_depth=max_depth)

    def test_unknown_root(self, ecosystem_graph: DependencyGraph):
        """Test that an unknown root yields an empty result."""
        result = ecosystem_graph.traverse("missing", Direction.DEPENDENTS)

        assert result.nodes == []
        assert result.max_depth == 0


@pytest.mark.unit
class TestNeighborhood:
    """Test cases for the focus neighborhood."""

    def test_both_directions_within_depth(self, chain_graph: DependencyGraph):
        """Test that the neighborhood spans dependencies and dependents."""
        assert chain_graph.neighborhood("b", 1) == {"a", "b", "c"}
        assert chain_graph.neighborhood("b", 2) == {"a", "b", "c", "d"}

    def test_depth_zero_is_focus_only(self, chain_graph: DependencyGraph):
        """Test the degenerate radius."""
        assert chain_graph.neighborhood("b", 0) == {"b"}

    def test_unknown_focus(self, chain_graph: DependencyGraph):
        """Test that an unknown focus yields nothing."""
        assert chain_graph.neighborhood("nope", 3) == set()


@pytest.mark.unit
@pytest.mark.slow
class TestTraversalPerformance:
    """Test cases for traversal cost on larger graphs."""

    def test_hundred_node_chain(self, make_graph):
        """Test loading and traversing a 100-node chain quickly."""
        started = time.perf_counter()
        graph = make_graph([(f"n{i}", f"n{i + 1}") for i in range(99)])
        result = graph.get_transitive_dependencies("n0")
        elapsed = time.perf_counter() - started

        assert len(result) == 99
        assert result[-1].id == "n99"
        assert result[-1].depth == 99
        assert elapsed < 0.1

    def test_deep_chain_does_not_recurse(self, make_graph):
        """Test that chains deeper than the recursion limit are handled."""
        graph = make_graph([(f"n{i}", f"n{i + 1}") for i in range(3000)])

        assert not graph.has_cycle()
        assert len(graph.topological_sort()) == 3001
        assert graph.find_all_paths("n0", "n3000", limit=1)[0][-1] == "n3000"
