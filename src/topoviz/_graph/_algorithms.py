"""Acyclicity check for graph models (Kahn's algorithm)."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._model import GraphModel, Node


class CyclicGraphError(Exception):
    """Raised when a topological ordering is requested for a cyclic graph.

    Attributes:
        unresolved: Labels of the nodes that lie on, or downstream of, a cycle.

    """

    def __init__(self, unresolved: tuple[str, ...]) -> None:
        self.unresolved = unresolved
        super().__init__(f"Graph contains a cycle involving: {', '.join(unresolved)}")


def kahn_order(graph: GraphModel) -> list[Node]:
    """Process nodes in Kahn's order (sources first).

    Works on a private copy of the in-degrees, so the graph and its nodes
    are left untouched.

    Args:
        graph: The graph to process.

    Returns:
        The nodes that could be processed. This is every node of the graph
        exactly when the graph is acyclic.

    Example:
        >>> from topoviz import GraphModel
        >>> graph = GraphModel()
        >>> a, b = graph.add_node("a"), graph.add_node("b")
        >>> graph.toggle_edge(b, a)
        True
        >>> [node.label for node in kahn_order(graph)]
        ['b', 'a']

    """
    indegree = graph.in_degree_snapshot()

    # Start with nodes that have no predecessors (in-degree 0)
    queue = deque(node for node in graph.nodes if indegree[node.label] == 0)
    order: list[Node] = []

    while queue:
        node = queue.popleft()
        order.append(node)
        for successor in graph.successors(node):
            indegree[successor.label] -= 1
            if indegree[successor.label] == 0:
                queue.append(successor)

    return order


def is_acyclic(graph: GraphModel) -> bool:
    """Check whether the graph is an AOV network (has no directed cycle)."""
    return len(kahn_order(graph)) == len(graph)


def ensure_acyclic(graph: GraphModel) -> None:
    """Raise if the graph contains a directed cycle.

    Raises:
        CyclicGraphError: With the labels Kahn's algorithm could not process.

    """
    processed = {node.label for node in kahn_order(graph)}
    if len(processed) != len(graph):
        unresolved = tuple(node.label for node in graph.nodes if node.label not in processed)
        raise CyclicGraphError(unresolved)
