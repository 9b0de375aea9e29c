"""Graph module providing the editable graph model.

This module contains:
- GraphModel: A mutable directed graph with unique node labels
- is_acyclic / kahn_order: Kahn's algorithm for the acyclicity precondition
"""

from ._algorithms import CyclicGraphError, ensure_acyclic, is_acyclic, kahn_order
from ._model import DuplicateLabelError, Edge, GraphModel, Highlight, Node

__all__ = [
    "CyclicGraphError",
    "DuplicateLabelError",
    "Edge",
    "GraphModel",
    "Highlight",
    "Node",
    "ensure_acyclic",
    "is_acyclic",
    "kahn_order",
]
