"""Mutable directed graph edited by the user and searched by the enumerator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class DuplicateLabelError(Exception):
    """Raised when a node label is already used in the graph."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Node label '{label}' is already in use")


class Highlight(StrEnum):
    """Visual state of a node during a search."""

    NEUTRAL = "neutral"
    ACTIVE = "active"


@dataclass(slots=True, eq=False)
class Node:
    """A graph vertex identified by its label.

    The highlight is only mutated by a running search; it is reset to
    NEUTRAL whenever a search ends.
    """

    label: str
    highlight: Highlight = field(default=Highlight.NEUTRAL)

    def __repr__(self) -> str:
        return f"Node({self.label!r}, {self.highlight.value})"


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge ``source -> target`` between two node labels."""

    source: str
    target: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.target}"


class GraphModel:
    """Directed graph with unique node labels and toggled edges.

    Nodes iterate in insertion order and successors in edge insertion order.
    Both orders are fixed for a given sequence of edits, which makes every
    search over the graph reproducible.

    Edges are unique as ordered pairs. ``a -> b`` and ``b -> a`` are two
    independent edges.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, Node] = {}
        # Dicts are used as insertion-ordered sets
        self._edges: dict[Edge, None] = {}
        self._successors: dict[str, dict[str, None]] = {}

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in their fixed iteration order."""
        return tuple(self._nodes.values())

    @property
    def edges(self) -> tuple[Edge, ...]:
        """All edges in insertion order."""
        return tuple(self._edges)

    def node(self, label: str) -> Node:
        """Look up a node by its label.

        Raises:
            KeyError: If no node has this label.

        """
        return self._nodes[label]

    def add_node(self, label: str) -> Node:
        """Create a new neutral node.

        Args:
            label: Non-empty label, unique within the graph.

        Returns:
            The created node.

        Raises:
            ValueError: If the label is empty.
            DuplicateLabelError: If a node with this label already exists.

        """
        if not label:
            msg = "Node label must not be empty"
            raise ValueError(msg)
        if label in self._nodes:
            raise DuplicateLabelError(label)
        node = Node(label)
        self._nodes[label] = node
        self._successors[label] = {}
        logger.debug("Added node %s", label)
        return node

    def remove_node(self, node: Node) -> None:
        """Remove a node together with every edge touching it."""
        label = node.label
        del self._nodes[label]
        del self._successors[label]
        for edge in [e for e in self._edges if label in (e.source, e.target)]:
            del self._edges[edge]
            self._successors.get(edge.source, {}).pop(edge.target, None)
        logger.debug("Removed node %s", label)

    def toggle_edge(self, source: Node, target: Node) -> bool:
        """Insert the edge ``source -> target`` or remove it if present.

        Returns:
            True if the edge exists after the call, False if it was removed.

        Raises:
            ValueError: For a self-loop.
            KeyError: If either node is not part of this graph.

        """
        if source.label == target.label:
            msg = f"Self-loop on '{source.label}' is not allowed"
            raise ValueError(msg)
        for node in (source, target):
            if self._nodes.get(node.label) is not node:
                raise KeyError(node.label)

        edge = Edge(source.label, target.label)
        if edge in self._edges:
            del self._edges[edge]
            del self._successors[source.label][target.label]
            logger.debug("Removed edge %s", edge)
            return False

        self._edges[edge] = None
        self._successors[source.label][target.label] = None
        logger.debug("Added edge %s", edge)
        return True

    def has_edge(self, source: Node, target: Node) -> bool:
        """Check whether the edge ``source -> target`` exists."""
        return Edge(source.label, target.label) in self._edges

    def in_degree_snapshot(self) -> dict[str, int]:
        """Count incoming edges per node label, computed fresh on every call."""
        in_degree = dict.fromkeys(self._nodes, 0)
        for edge in self._edges:
            in_degree[edge.target] += 1
        return in_degree

    def successors(self, node: Node) -> Iterator[Node]:
        """Yield the direct successors of a node in edge insertion order."""
        for label in self._successors[node.label]:
            yield self._nodes[label]

    def reset_highlights(self) -> None:
        """Set every node back to NEUTRAL."""
        for node in self._nodes.values():
            node.highlight = Highlight.NEUTRAL

    def clear(self) -> None:
        """Remove all nodes and edges.

        The caller must make sure no search is reading this graph.
        """
        self._nodes.clear()
        self._edges.clear()
        self._successors.clear()
        logger.debug("Cleared graph")

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __contains__(self, label: object) -> bool:
        """Check if a node label is in the graph."""
        return label in self._nodes
