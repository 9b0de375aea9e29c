"""Tests for GraphModel."""

import pytest

from topoviz._graph import DuplicateLabelError, Edge, GraphModel, Highlight


def make_graph(labels: str, edges: list[str]) -> GraphModel:
    """Build a graph from single-character labels and "AB"-style edges."""
    graph = GraphModel()
    for label in labels:
        graph.add_node(label)
    for source, target in edges:
        graph.toggle_edge(graph.node(source), graph.node(target))
    return graph


class TestNodes:
    """Tests for adding, looking up and removing nodes."""

    def test_empty_graph(self) -> None:
        graph = GraphModel()
        assert len(graph) == 0
        assert graph.nodes == ()
        assert graph.edges == ()

    def test_add_node_is_neutral(self) -> None:
        graph = GraphModel()
        node = graph.add_node("A")
        assert node.label == "A"
        assert node.highlight is Highlight.NEUTRAL
        assert graph.node("A") is node
        assert "A" in graph

    def test_nodes_keep_insertion_order(self) -> None:
        graph = make_graph("CAB", [])
        assert [node.label for node in graph.nodes] == ["C", "A", "B"]

    def test_duplicate_label_rejected(self) -> None:
        graph = make_graph("A", [])
        with pytest.raises(DuplicateLabelError, match="'A'") as exc_info:
            graph.add_node("A")
        assert exc_info.value.label == "A"
        assert len(graph) == 1

    def test_empty_label_rejected(self) -> None:
        graph = GraphModel()
        with pytest.raises(ValueError, match="empty"):
            graph.add_node("")

    def test_lookup_unknown_label(self) -> None:
        graph = GraphModel()
        with pytest.raises(KeyError):
            graph.node("missing")

    def test_remove_node_cascades_edges(self) -> None:
        graph = make_graph("ABC", ["AB", "BC", "AC"])
        graph.remove_node(graph.node("B"))
        assert "B" not in graph
        assert graph.edges == (Edge("A", "C"),)
        assert [n.label for n in graph.successors(graph.node("A"))] == ["C"]
        assert graph.in_degree_snapshot() == {"A": 0, "C": 1}

    def test_label_reusable_after_removal(self) -> None:
        graph = make_graph("A", [])
        graph.remove_node(graph.node("A"))
        graph.add_node("A")
        assert len(graph) == 1


class TestEdges:
    """Tests for edge toggling."""

    def test_toggle_adds_then_removes(self) -> None:
        graph = make_graph("AB", [])
        a, b = graph.node("A"), graph.node("B")
        assert graph.toggle_edge(a, b) is True
        assert graph.has_edge(a, b)
        assert graph.toggle_edge(a, b) is False
        assert not graph.has_edge(a, b)

    def test_toggle_twice_restores_edge_set(self) -> None:
        graph = make_graph("ABC", ["AB", "BC"])
        before = graph.edges
        graph.toggle_edge(graph.node("A"), graph.node("C"))
        graph.toggle_edge(graph.node("A"), graph.node("C"))
        assert graph.edges == before

    def test_opposite_directions_are_independent(self) -> None:
        graph = make_graph("AB", ["AB", "BA"])
        assert graph.edges == (Edge("A", "B"), Edge("B", "A"))
        graph.toggle_edge(graph.node("B"), graph.node("A"))
        assert graph.edges == (Edge("A", "B"),)

    def test_self_loop_rejected(self) -> None:
        graph = make_graph("A", [])
        with pytest.raises(ValueError, match="Self-loop"):
            graph.toggle_edge(graph.node("A"), graph.node("A"))

    def test_foreign_node_rejected(self) -> None:
        graph = make_graph("A", [])
        other = make_graph("B", [])
        with pytest.raises(KeyError):
            graph.toggle_edge(graph.node("A"), other.node("B"))

    def test_edge_str(self) -> None:
        assert str(Edge("A", "B")) == "A -> B"


class TestQueries:
    """Tests for in-degree and successor queries."""

    def test_in_degree_snapshot(self) -> None:
        graph = make_graph("ABCD", ["AB", "AC", "BD", "CD"])
        assert graph.in_degree_snapshot() == {"A": 0, "B": 1, "C": 1, "D": 2}

    def test_in_degree_snapshot_is_fresh(self) -> None:
        graph = make_graph("AB", [])
        snapshot = graph.in_degree_snapshot()
        snapshot["A"] = 42
        graph.toggle_edge(graph.node("A"), graph.node("B"))
        assert graph.in_degree_snapshot() == {"A": 0, "B": 1}

    def test_successors_in_edge_order(self) -> None:
        graph = make_graph("ABCD", ["AD", "AB", "AC"])
        assert [n.label for n in graph.successors(graph.node("A"))] == ["D", "B", "C"]
        assert list(graph.successors(graph.node("B"))) == []

    def test_reset_highlights(self) -> None:
        graph = make_graph("AB", [])
        graph.node("A").highlight = Highlight.ACTIVE
        graph.reset_highlights()
        assert all(node.highlight is Highlight.NEUTRAL for node in graph.nodes)

    def test_clear(self) -> None:
        graph = make_graph("ABC", ["AB", "BC"])
        graph.clear()
        assert len(graph) == 0
        assert graph.edges == ()
        assert graph.in_degree_snapshot() == {}
