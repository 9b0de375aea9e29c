"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from topoviz._enumerator import SearchEventKind

if TYPE_CHECKING:
    from rich.console import Console

    from topoviz._enumerator import SearchEvent
    from topoviz._graph import GraphModel


def render_graph_table(graph: GraphModel, console: Console) -> None:
    """Render nodes with their in-degree and successors.

    Args:
        graph: The graph to render.
        console: Rich Console to output to.

    """
    if len(graph) == 0:
        console.print("[dim]The graph has no nodes[/dim]")
        return

    in_degree = graph.in_degree_snapshot()
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Node", style="bold")
    table.add_column("In", justify="right")
    table.add_column("Successors")

    for node in graph.nodes:
        successors = ", ".join(escape(s.label) for s in graph.successors(node))
        table.add_row(escape(node.label), str(in_degree[node.label]), successors or "[dim]-[/dim]")

    console.print(table)
    console.print(f"\n[dim]Total: {len(graph)} nodes, {len(graph.edges)} edges[/dim]")


def render_orders_table(orders: list[tuple[str, ...]], console: Console) -> None:
    """Render topological orderings as a numbered table.

    Args:
        orders: Orderings in discovery order.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Ordering")

    for index, order in enumerate(orders, start=1):
        table.add_row(str(index), escape(" ".join(order)))

    console.print(table)


def format_event(event: SearchEvent) -> str:
    """Format one search event as a single line of rich markup."""
    partial = escape(" ".join(event.partial_order)) or "[dim](empty)[/dim]"
    match event.kind:
        case SearchEventKind.ENTERED:
            return f"[red]+ {escape(event.node or '')}[/red]  {partial}"
        case SearchEventKind.LEFT:
            return f"[dim]- {escape(event.node or '')}[/dim]  {partial}"
        case SearchEventKind.RESULT_FOUND:
            return f"[green]✓ {escape(' '.join(event.result or ()))}[/green]"
        case SearchEventKind.FINISHED:
            return "[green]Search finished[/green]"
        case SearchEventKind.STOPPED:
            return "[yellow]Search stopped[/yellow]"
