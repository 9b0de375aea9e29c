"""Animated enumeration of every topological ordering of a directed graph."""

__all__ = [
    "AlreadyRunningError",
    "CancelMode",
    "CancellationToken",
    "CyclicGraphError",
    "DuplicateLabelError",
    "Edge",
    "EmptyGraphError",
    "EnumerationReport",
    "ExecutionController",
    "GraphLockedError",
    "GraphModel",
    "GraphWorkbench",
    "Highlight",
    "Node",
    "RunOutcome",
    "RunState",
    "SearchCancelled",
    "SearchEvent",
    "SearchEventKind",
    "SearchSnapshot",
    "SearchStateSink",
    "TopologicalEnumerator",
    "UnknownNodeError",
    "enumerate_topological_orders",
    "is_acyclic",
    "kahn_order",
]

from ._controller import AlreadyRunningError, EmptyGraphError, ExecutionController, RunOutcome, RunState
from ._enumerator import (
    CancellationToken,
    CancelMode,
    EnumerationReport,
    SearchCancelled,
    SearchEvent,
    SearchEventKind,
    TopologicalEnumerator,
    enumerate_topological_orders,
)
from ._graph import CyclicGraphError, DuplicateLabelError, Edge, GraphModel, Highlight, Node, is_acyclic, kahn_order
from ._sink import SearchSnapshot, SearchStateSink
from ._workbench import GraphLockedError, GraphWorkbench, UnknownNodeError
