"""Facade combining graph editing, run control and observation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._controller import DEFAULT_DELAY, ExecutionController, RunState
from ._graph import GraphModel

if TYPE_CHECKING:
    from ._graph import Node
    from ._sink import SearchSnapshot, SearchStateSink


class UnknownNodeError(KeyError):
    """Raised when a label does not name a node of the graph."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(label)

    def __str__(self) -> str:
        return f"Unknown node '{self.label}'"


class GraphLockedError(Exception):
    """Raised when the graph is edited while an enumeration is running."""

    def __init__(self) -> None:
        super().__init__("The graph cannot be edited while an enumeration is running; stop or reset it first")


class GraphWorkbench:
    """Entry point used by editors and renderers.

    Structural edits are refused while a run is active, except ``clear``,
    which hard-resets the run before touching the graph.
    """

    def __init__(
        self,
        graph: GraphModel | None = None,
        *,
        delay: float = DEFAULT_DELAY,
        sink: SearchStateSink | None = None,
    ) -> None:
        self.graph = graph if graph is not None else GraphModel()
        self.controller = ExecutionController(self.graph, sink, delay=delay)

    @property
    def state(self) -> RunState:
        return self.controller.state

    # --- graph mutation ---

    def add_node(self, label: str) -> Node:
        self._ensure_editable()
        return self.graph.add_node(label)

    def remove_node(self, label: str) -> None:
        self._ensure_editable()
        self.graph.remove_node(self._lookup(label))

    def toggle_edge(self, source: str, target: str) -> bool:
        """Toggle the edge ``source -> target``.

        Returns:
            True if the edge now exists, False if it was removed.

        """
        self._ensure_editable()
        return self.graph.toggle_edge(self._lookup(source), self._lookup(target))

    def clear(self) -> None:
        """Stop any run, then empty the graph."""
        self.controller.hard_reset()
        self.graph.clear()

    # --- run control ---

    def run_enumeration(self) -> None:
        """Start enumerating orderings in the background.

        Raises:
            AlreadyRunningError: If a run is active.
            EmptyGraphError: If the graph has no nodes.
            CyclicGraphError: If the graph contains a cycle.

        """
        self.controller.start()

    def request_soft_stop(self) -> None:
        self.controller.request_soft_stop()

    def hard_reset(self) -> None:
        self.controller.hard_reset()

    # --- observation ---

    def latest_snapshot(self) -> SearchSnapshot:
        return self.controller.latest_snapshot()

    def _lookup(self, label: str) -> Node:
        try:
            return self.graph.node(label)
        except KeyError:
            raise UnknownNodeError(label) from None

    def _ensure_editable(self) -> None:
        if self.controller.running:
            raise GraphLockedError
