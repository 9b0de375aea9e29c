import logging
import queue
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from topoviz._enumerator import SearchEvent, TopologicalEnumerator
from topoviz._graph import CyclicGraphError, GraphModel, ensure_acyclic
from topoviz._sink import SearchSnapshot, SearchStateSink
from topoviz._workbench import GraphWorkbench

from .config import ConfigError, TopovizConfig, get_config
from .graph_args import GraphArgumentError, build_graph
from .render import format_event, render_graph_table, render_orders_table

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

NodesOption = Annotated[
    list[str] | None,
    typer.Option("-n", "--node", help="Node label (repeatable)"),
]
EdgesOption = Annotated[
    list[str] | None,
    typer.Option("-e", "--edge", help="Directed edge as SOURCE:TARGET (repeatable)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topoviz CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_graph(nodes: list[str] | None, edges: list[str] | None) -> GraphModel:
    try:
        graph = build_graph(nodes or [], edges or [])
    except GraphArgumentError as e:
        raise typer.BadParameter(str(e)) from e
    logger.debug(f"Loaded graph with {len(graph)} nodes and {len(graph.edges)} edges")
    return graph


def _load_config() -> TopovizConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _echo_event(event: SearchEvent, *, echo: bool) -> None:
    if echo:
        err_console.print(format_event(event))


def _drain(events: queue.SimpleQueue[SearchEvent], *, echo: bool) -> None:
    while not events.empty():
        _echo_event(events.get(), echo=echo)


def _animate(graph: GraphModel, delay: float, *, echo: bool = True) -> SearchSnapshot:
    """Run the search in the background, printing every event as it arrives when ``echo`` is set."""
    workbench = GraphWorkbench(graph, delay=delay)
    events = workbench.controller.sink.subscribe()
    workbench.run_enumeration()

    try:
        while True:
            try:
                event = events.get(timeout=0.1)
            except queue.Empty:
                if workbench.controller.running:
                    continue
                _drain(events, echo=echo)
                break
            _echo_event(event, echo=echo)
    except KeyboardInterrupt:
        err_console.print("[yellow]Stopping after the current step...[/yellow]")
        workbench.request_soft_stop()
        workbench.controller.wait()
        _drain(events, echo=echo)

    return workbench.latest_snapshot()


@app.command()
def check(
    *,
    nodes: NodesOption = None,
    edges: EdgesOption = None,
) -> None:
    """Check whether the graph is an AOV network (contains no cycle)."""
    graph = _load_graph(nodes, edges)

    err_console.print()
    render_graph_table(graph, err_console)
    err_console.print()

    try:
        ensure_acyclic(graph)
    except CyclicGraphError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print("[green]✓ Graph is acyclic[/green]")
    err_console.print()


@app.command()
def orders(
    *,
    nodes: NodesOption = None,
    edges: EdgesOption = None,
    animate: Annotated[
        bool,
        typer.Option("--animate", help="Run the paced background search and print every step"),
    ] = False,
    delay: Annotated[
        float | None,
        typer.Option("--delay", min=0.0, help="Seconds between animation steps (overrides [tool.topoviz].delay)"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the final search snapshot as JSON"),
    ] = False,
) -> None:
    """Enumerate every topological ordering of the graph."""
    graph = _load_graph(nodes, edges)
    if len(graph) == 0:
        err_console.print("[red]Error: add at least one node with --node or --edge[/red]")
        raise typer.Exit(code=1)

    try:
        ensure_acyclic(graph)
    except CyclicGraphError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if animate:
        config = _load_config()
        snapshot = _animate(graph, config.resolve_delay(delay), echo=not as_json)
    else:
        sink = SearchStateSink()
        TopologicalEnumerator(graph, on_event=sink.publish).run()
        snapshot = sink.latest_snapshot()

    if as_json:
        typer.echo(snapshot.model_dump_json(indent=2))
        return

    render_orders_table(list(snapshot.results), out_console)
    err_console.print()
    err_console.print(f"[green]✓ {len(snapshot.results)} topological ordering(s)[/green]")


@app.command()
def tui(
    *,
    nodes: NodesOption = None,
    edges: EdgesOption = None,
    delay: Annotated[
        float | None,
        typer.Option("--delay", min=0.0, help="Seconds between animation steps (overrides [tool.topoviz].delay)"),
    ] = None,
) -> None:
    """Edit a graph and watch the enumeration in an interactive TUI.

    Controls:
    - node A / rm A / edge A B / clear: Edit the graph
    - F5 or 'run': Start the enumeration
    - F6 or 'stop': Stop after the current step (keep results)
    - F8 or 'reset': Abandon the run and discard results
    """
    # Import TUI components here to avoid loading textual for other commands
    from .tui.app import TopovizApp  # noqa: PLC0415

    graph = _load_graph(nodes, edges)
    config = _load_config()
    workbench = GraphWorkbench(graph, delay=config.resolve_delay(delay))

    tui_app = TopovizApp(workbench)
    tui_app.run()


def main() -> None:
    app()
