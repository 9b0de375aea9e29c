"""Publish point between a background search and the renderer."""

from __future__ import annotations

import queue
import threading
import time
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ._enumerator import SearchEvent, SearchEventKind

if TYPE_CHECKING:
    from collections.abc import Callable


class SearchSnapshot(BaseModel):
    """Immutable view of the search as last published.

    Attributes:
        results: Orderings found so far, in discovery order.
        partial_order: The ordering currently being explored.
        highlighted: Labels of the nodes currently highlighted.
        version: Incremented on every publication.
        last_event: Kind of the event that produced this snapshot.

    """

    model_config = ConfigDict(frozen=True)

    results: tuple[tuple[str, ...], ...] = ()
    partial_order: tuple[str, ...] = ()
    highlighted: frozenset[str] = frozenset()
    version: int = 0
    last_event: SearchEventKind | None = None


class SearchStateSink:
    """Thread-safe holder of the latest SearchSnapshot.

    The search thread calls ``publish`` once per step. Readers only ever
    see complete snapshots: each publication replaces the snapshot object
    as a whole under the lock. Subscribers additionally receive every
    event, in publication order, through their own queue.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._snapshot = SearchSnapshot()
        self._subscribers: list[queue.SimpleQueue[SearchEvent]] = []

    def latest_snapshot(self) -> SearchSnapshot:
        with self._condition:
            return self._snapshot

    def publish(self, event: SearchEvent) -> None:
        """Fold one search event into a new snapshot."""
        with self._condition:
            current = self._snapshot
            results = current.results
            if event.kind is SearchEventKind.RESULT_FOUND and event.result is not None:
                results = (*results, event.result)
            self._replace(
                results=results,
                partial_order=event.partial_order,
                highlighted=event.highlighted,
                last_event=event.kind,
            )
            for subscriber in self._subscribers:
                subscriber.put(event)

    def begin(self) -> None:
        """Start a fresh run: drop previous results and highlights."""
        with self._condition:
            self._replace(results=(), partial_order=(), highlighted=frozenset(), last_event=None)

    def settle(self) -> None:
        """Mark the search as no longer exploring, keeping its results."""
        with self._condition:
            self._replace(
                results=self._snapshot.results,
                partial_order=(),
                highlighted=frozenset(),
                last_event=self._snapshot.last_event,
            )

    def reset(self) -> None:
        """Discard everything, including results."""
        self.begin()

    def subscribe(self) -> queue.SimpleQueue[SearchEvent]:
        """Return a queue receiving every event published from now on."""
        subscriber: queue.SimpleQueue[SearchEvent] = queue.SimpleQueue()
        with self._condition:
            self._subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: queue.SimpleQueue[SearchEvent]) -> None:
        with self._condition:
            self._subscribers.remove(subscriber)

    def wait_for(
        self,
        predicate: Callable[[SearchSnapshot], bool],
        timeout: float | None = None,
    ) -> SearchSnapshot | None:
        """Block until the latest snapshot satisfies ``predicate``.

        Returns:
            The matching snapshot, or None if the timeout expired first.

        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._condition:
            while not predicate(self._snapshot):
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return None
                self._condition.wait(remaining)
            return self._snapshot

    def _replace(
        self,
        *,
        results: tuple[tuple[str, ...], ...],
        partial_order: tuple[str, ...],
        highlighted: frozenset[str],
        last_event: SearchEventKind | None,
    ) -> None:
        self._snapshot = SearchSnapshot(
            results=results,
            partial_order=partial_order,
            highlighted=highlighted,
            version=self._snapshot.version + 1,
            last_event=last_event,
        )
        self._condition.notify_all()
