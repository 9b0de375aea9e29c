"""Custom widgets rendering the graph and the search progress."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from textual.widgets import DataTable, Static

if TYPE_CHECKING:
    from topoviz._controller import RunState
    from topoviz._graph import GraphModel
    from topoviz._sink import SearchSnapshot


class GraphView(Static):
    """Lists the nodes and edges of the graph.

    Highlighting comes from the published snapshot, never from live node state.
    """

    def show_graph(self, graph: GraphModel, highlighted: frozenset[str]) -> None:
        if len(graph) == 0:
            self.update("[dim]No nodes yet. Type 'node A' to add one.[/dim]")
            return

        node_parts = []
        for node in graph.nodes:
            label = escape(node.label)
            if node.label in highlighted:
                node_parts.append(f"[bold white on red] {label} [/]")
            else:
                node_parts.append(f"[bold] {label} [/]")

        lines = ["Nodes:", "  " + " ".join(node_parts), "", "Edges:"]
        if graph.edges:
            lines.extend(f"  {escape(edge.source)} → {escape(edge.target)}" for edge in graph.edges)
        else:
            lines.append("  [dim](none)[/dim]")
        self.update("\n".join(lines))


class ExplorationView(Static):
    """Shows the run state and the ordering currently being explored."""

    def show_progress(self, state: RunState, snapshot: SearchSnapshot) -> None:
        partial = escape(" ".join(snapshot.partial_order)) or "[dim](nothing)[/dim]"
        self.update(
            f"State: [bold]{state.value}[/bold]    "
            f"Orderings: [bold]{len(snapshot.results)}[/bold]\n"
            f"Currently exploring: {partial}",
        )


class ResultsTable(DataTable):
    """Numbered list of the orderings found so far."""

    _rendered: tuple[tuple[str, ...], ...] = ()

    def show_results(self, results: tuple[tuple[str, ...], ...]) -> None:
        """Append new orderings; start over when they do not extend the rendered ones."""
        if not self.columns:
            self.add_columns("#", "Ordering")
        if results[: len(self._rendered)] != self._rendered:
            self.clear()
        self._rendered = results
        for index in range(self.row_count, len(results)):
            self.add_row(str(index + 1), " ".join(results[index]))
