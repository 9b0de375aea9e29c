"""Lifecycle of background enumeration runs over one graph."""

from __future__ import annotations

import logging
import threading
from enum import StrEnum
from typing import TYPE_CHECKING

from ._enumerator import CancellationToken, CancelMode, EnumerationReport, TopologicalEnumerator
from ._graph import ensure_acyclic
from ._sink import SearchSnapshot, SearchStateSink

if TYPE_CHECKING:
    from ._graph import GraphModel

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 1.0


class AlreadyRunningError(Exception):
    """Raised when a run is requested while another one is active."""

    def __init__(self) -> None:
        super().__init__("An enumeration is already running on this graph")


class EmptyGraphError(Exception):
    """Raised when a run is requested for a graph without nodes."""

    def __init__(self) -> None:
        super().__init__("Add at least one node before running an enumeration")


class RunState(StrEnum):
    """State of an ExecutionController."""

    IDLE = "idle"
    RUNNING = "running"


class RunOutcome(StrEnum):
    """How the last run ended."""

    COMPLETED = "completed"
    STOPPED = "stopped"  # Soft stop, results kept
    RESET = "reset"  # Hard reset, results discarded


class ExecutionController:
    """Owns at most one background enumeration over a graph.

    State machine: IDLE -> RUNNING -> IDLE. The transition back to IDLE
    happens exactly once per run, performed either by the background thread
    (completion or soft stop) or by ``hard_reset``. Whichever side takes the
    run's token under the lock does the cleanup.
    """

    def __init__(
        self,
        graph: GraphModel,
        sink: SearchStateSink | None = None,
        *,
        delay: float = DEFAULT_DELAY,
    ) -> None:
        """Initialize the controller.

        Args:
            graph: The graph searched by every run.
            sink: Where search events are published. A new one is created if omitted.
            delay: Animation pause in seconds after every search step.

        """
        self.graph = graph
        self.sink = sink if sink is not None else SearchStateSink()
        self.delay = delay
        self._lock = threading.Lock()
        self._state = RunState.IDLE
        self._token: CancellationToken | None = None
        self._thread: threading.Thread | None = None
        self._idle = threading.Event()
        self._idle.set()
        self.last_outcome: RunOutcome | None = None
        self.last_report: EnumerationReport | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is RunState.RUNNING

    def latest_snapshot(self) -> SearchSnapshot:
        return self.sink.latest_snapshot()

    def start(self) -> None:
        """Launch an enumeration on a background thread.

        Raises:
            AlreadyRunningError: If a run is active.
            EmptyGraphError: If the graph has no nodes.
            CyclicGraphError: If the graph contains a cycle.

        """
        with self._lock:
            if self._state is not RunState.IDLE:
                raise AlreadyRunningError
            if len(self.graph) == 0:
                raise EmptyGraphError
            ensure_acyclic(self.graph)

            self.graph.reset_highlights()
            self.sink.begin()
            token = CancellationToken()
            enumerator = TopologicalEnumerator(
                self.graph,
                token=token,
                delay=self.delay,
                on_event=self.sink.publish,
            )
            thread = threading.Thread(
                target=self._run,
                args=(enumerator, token),
                name="topoviz-enumerator",
                daemon=True,
            )
            self._token = token
            self._thread = thread
            self._state = RunState.RUNNING
            self._idle.clear()
            self.last_outcome = None
            self.last_report = None
            thread.start()
        logger.info("Started enumeration over %d nodes", len(self.graph))

    def request_soft_stop(self) -> None:
        """Ask the running search to stop at its next pause point.

        No-op while idle.
        """
        with self._lock:
            if self._token is None:
                return
            self._token.cancel(CancelMode.SOFT)
        logger.info("Soft stop requested")

    def hard_reset(self) -> None:
        """Abandon any run, discard results and return to IDLE.

        Valid in any state. Returns once the background thread is gone and
        every node is neutral.
        """
        with self._lock:
            token, thread = self._token, self._thread
            if token is not None:
                token.cancel(CancelMode.HARD)

        if thread is not None and thread is not threading.current_thread():
            thread.join()

        with self._lock:
            self._token = None
            self._thread = None
            self.graph.reset_highlights()
            self.sink.reset()
            self.last_report = None
            if self._state is RunState.RUNNING:
                self.last_outcome = RunOutcome.RESET
            self._state = RunState.IDLE
            self._idle.set()
        logger.info("Hard reset")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the controller is idle.

        Returns:
            True if idle, False if the timeout expired first.

        """
        return self._idle.wait(timeout)

    def _run(self, enumerator: TopologicalEnumerator, token: CancellationToken) -> None:
        report: EnumerationReport | None = None
        try:
            report = enumerator.run()
        finally:
            with self._lock:
                # A hard reset that cancelled this run performs the cleanup itself
                if self._token is token and token.mode is not CancelMode.HARD:
                    self._finish(report)

    def _finish(self, report: EnumerationReport | None) -> None:
        self.graph.reset_highlights()
        self.sink.settle()
        self._token = None
        self._thread = None
        self.last_report = report
        if report is not None and report.completed:
            self.last_outcome = RunOutcome.COMPLETED
        else:
            self.last_outcome = RunOutcome.STOPPED
        self._state = RunState.IDLE
        self._idle.set()
        logger.info("Enumeration %s", self.last_outcome)
