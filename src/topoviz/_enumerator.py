"""Backtracking enumeration of every topological ordering of a graph.

The search mutates shared state (in-degrees, the used set, the partial
ordering and node highlights) on the way down and restores it on the way
back up. Restoration runs in ``finally`` blocks, so a cancelled branch
leaves the same state behind as a branch that returned normally.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from ._graph import Highlight, ensure_acyclic

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._graph import GraphModel, Node

logger = logging.getLogger(__name__)


class CancelMode(StrEnum):
    """How a search was asked to stop."""

    SOFT = "soft"  # Requested by the user, results are kept
    HARD = "hard"  # Search abandoned, results are discarded by the owner


class SearchCancelled(Exception):  # noqa: N818
    """Raised at a pause point once the search has been cancelled."""

    def __init__(self, mode: CancelMode) -> None:
        self.mode = mode
        super().__init__(f"Search cancelled ({mode})")


class CancellationToken:
    """Cooperative cancellation flag shared by a search and its owner.

    Pausing on the token returns early as soon as it is cancelled, so a
    cancellation is observed at the next pause point without waiting for
    the animation interval to elapse. A soft cancellation can be upgraded
    to a hard one, never the reverse.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._mode: CancelMode | None = None

    @property
    def mode(self) -> CancelMode | None:
        """The cancellation mode, or None while not cancelled."""
        return self._mode

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, mode: CancelMode = CancelMode.SOFT) -> None:
        with self._lock:
            if self._mode is not CancelMode.HARD:
                self._mode = mode
            self._event.set()

    def pause(self, seconds: float) -> None:
        """Sleep for up to ``seconds``, waking immediately on cancellation."""
        if seconds > 0:
            self._event.wait(seconds)

    def raise_if_cancelled(self) -> None:
        """Raise SearchCancelled if cancellation was requested."""
        if self._event.is_set():
            raise SearchCancelled(self._mode or CancelMode.SOFT)


class SearchEventKind(StrEnum):
    """Kinds of observable search steps."""

    ENTERED = "entered"  # A node was appended to the partial ordering
    LEFT = "left"  # A node was removed from the partial ordering
    RESULT_FOUND = "result_found"  # The partial ordering is complete
    FINISHED = "finished"  # The exhaustive search is over
    STOPPED = "stopped"  # The search was cancelled and cleaned up


@dataclass(frozen=True, slots=True)
class SearchEvent:
    """Immutable record of one search step.

    All collections are copies; nothing here refers to live search state.
    """

    kind: SearchEventKind
    partial_order: tuple[str, ...]
    highlighted: frozenset[str]
    node: str | None = None
    result: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class EnumerationReport:
    """Outcome of one call to TopologicalEnumerator.run."""

    results: tuple[tuple[str, ...], ...]
    completed: bool
    cancel_mode: CancelMode | None = None


class TopologicalEnumerator:
    """Depth-first search producing every topological ordering of a DAG.

    Candidates at each level are the unused nodes of in-degree zero, tried
    in the graph's node order, so discovery order is deterministic.

    After every step an event is handed to ``on_event``, the search pauses
    for ``delay`` seconds on the token and then checks for cancellation. A
    cancellation aborts the whole remaining search tree.
    """

    def __init__(
        self,
        graph: GraphModel,
        *,
        token: CancellationToken | None = None,
        delay: float = 0.0,
        on_event: Callable[[SearchEvent], None] | None = None,
    ) -> None:
        """Initialize the enumerator.

        Args:
            graph: The graph to search. Must be acyclic.
            token: Cancellation token observed at every pause point.
            delay: Pause in seconds after every step.
            on_event: Callback receiving every search event in order.

        Raises:
            CyclicGraphError: If the graph contains a cycle.

        """
        ensure_acyclic(graph)
        self._graph = graph
        self._token = token if token is not None else CancellationToken()
        self._delay = delay
        self._on_event = on_event

        self._in_degree: dict[str, int] = {}
        self._used: set[str] = set()
        self._order: list[Node] = []
        self._results: list[tuple[str, ...]] = []

    def run(self) -> EnumerationReport:
        """Run the exhaustive search.

        Returns:
            The orderings found, and whether the search ran to completion.

        """
        self._in_degree = self._graph.in_degree_snapshot()
        self._used = set()
        self._order = []
        self._results = []
        logger.debug("Enumerating orderings of %d nodes", len(self._graph))

        try:
            self._search()
        except SearchCancelled as exc:
            self._graph.reset_highlights()
            if exc.mode is CancelMode.SOFT:
                self._emit(SearchEventKind.STOPPED)
            logger.debug("Search cancelled (%s) after %d orderings", exc.mode, len(self._results))
            return EnumerationReport(results=tuple(self._results), completed=False, cancel_mode=exc.mode)

        self._emit(SearchEventKind.FINISHED)
        logger.debug("Search finished with %d orderings", len(self._results))
        return EnumerationReport(results=tuple(self._results), completed=True)

    def _search(self) -> None:
        if len(self._order) == len(self._graph):
            result = tuple(node.label for node in self._order)
            self._results.append(result)
            self._step(SearchEventKind.RESULT_FOUND, result=result)
            return

        for node in self._graph.nodes:
            if node.label in self._used or self._in_degree[node.label] != 0:
                continue

            self._used.add(node.label)
            self._order.append(node)
            node.highlight = Highlight.ACTIVE
            try:
                self._step(SearchEventKind.ENTERED, node=node)
                released = self._release(node)
                try:
                    self._search()
                finally:
                    for successor in released:
                        self._in_degree[successor.label] += 1
            finally:
                self._order.pop()
                self._used.discard(node.label)
                node.highlight = Highlight.NEUTRAL
            self._step(SearchEventKind.LEFT, node=node)

    def _release(self, node: Node) -> list[Node]:
        """Decrement the in-degree of every successor of ``node``."""
        released: list[Node] = []
        for successor in self._graph.successors(node):
            assert self._in_degree[successor.label] > 0, f"in-degree of {successor.label} would go negative"
            self._in_degree[successor.label] -= 1
            released.append(successor)
        return released

    def _step(
        self,
        kind: SearchEventKind,
        *,
        node: Node | None = None,
        result: tuple[str, ...] | None = None,
    ) -> None:
        self._emit(kind, node=node, result=result)
        self._token.pause(self._delay)
        self._token.raise_if_cancelled()

    def _emit(
        self,
        kind: SearchEventKind,
        *,
        node: Node | None = None,
        result: tuple[str, ...] | None = None,
    ) -> None:
        event = SearchEvent(
            kind=kind,
            partial_order=tuple(n.label for n in self._order),
            highlighted=frozenset(n.label for n in self._graph.nodes if n.highlight is Highlight.ACTIVE),
            node=node.label if node is not None else None,
            result=result,
        )
        logger.debug("%s %s", kind, " ".join(event.partial_order))
        if self._on_event is not None:
            self._on_event(event)


def enumerate_topological_orders(graph: GraphModel) -> list[tuple[str, ...]]:
    """Return every topological ordering of the graph, without animation.

    Raises:
        CyclicGraphError: If the graph contains a cycle.

    Example:
        >>> from topoviz import GraphModel
        >>> graph = GraphModel()
        >>> a, b, c = (graph.add_node(label) for label in "ABC")
        >>> graph.toggle_edge(a, b), graph.toggle_edge(a, c)
        (True, True)
        >>> enumerate_topological_orders(graph)
        [('A', 'B', 'C'), ('A', 'C', 'B')]

    """
    return list(TopologicalEnumerator(graph).run().results)
