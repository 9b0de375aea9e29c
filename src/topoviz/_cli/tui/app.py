"""Main TUI application: graph editor and search renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Input, Label

from topoviz._controller import AlreadyRunningError, EmptyGraphError, RunState
from topoviz._graph import CyclicGraphError, DuplicateLabelError
from topoviz._workbench import GraphLockedError, UnknownNodeError

from .commands import Command, CommandError, CommandKind, parse_command
from .screens import ConfirmRemoveScreen
from .widgets import ExplorationView, GraphView, ResultsTable

if TYPE_CHECKING:
    from topoviz._workbench import GraphWorkbench

# Errors the user can cause from the command line
_USER_ERRORS = (
    AlreadyRunningError,
    CommandError,
    CyclicGraphError,
    DuplicateLabelError,
    EmptyGraphError,
    GraphLockedError,
    UnknownNodeError,
)


class TopovizApp(App[None]):
    """TUI application for building a graph and watching its orderings being enumerated."""

    TITLE = "topoviz"

    CSS = """
    #panes {
        height: 1fr;
    }

    .pane {
        width: 1fr;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }

    GraphView {
        height: 1fr;
    }

    ExplorationView {
        height: 3;
        background: $surface;
        padding: 0 1;
    }

    ResultsTable {
        height: 1fr;
    }

    #command {
        dock: bottom;
    }
    """

    BINDINGS: ClassVar[list[Binding]] = [
        Binding("f5", "run", "Run", show=True),
        Binding("f6", "stop", "Stop", show=True),
        Binding("f8", "reset", "Reset", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    # Seconds between two polls of the published snapshot
    REFRESH_INTERVAL = 1 / 20

    def __init__(self, workbench: GraphWorkbench) -> None:
        """Initialize the app.

        Args:
            workbench: The graph and run controller to drive

        """
        super().__init__()
        self.workbench = workbench
        self._seen: tuple[int, RunState] | None = None

    def compose(self) -> ComposeResult:
        """Compose the app layout."""
        yield Header()
        with Horizontal(id="panes"):
            with Vertical(classes="pane"):
                yield Label("Graph", classes="pane-title")
                yield GraphView(id="graph")
            with Vertical(classes="pane"):
                yield Label("Topological orderings", classes="pane-title")
                yield ExplorationView(id="progress")
                yield ResultsTable(id="results", cursor_type="row")
        yield Input(placeholder="node A | rm A | edge A B | run | stop | reset | clear", id="command")
        yield Footer()

    def on_mount(self) -> None:
        """Start polling the published search state."""
        self.query_one("#command", Input).focus()
        self.refresh_view(force=True)
        self.set_interval(self.REFRESH_INTERVAL, self.refresh_view)

    def on_unmount(self) -> None:
        """Make sure no search keeps running after the app is gone."""
        self.workbench.hard_reset()

    def refresh_view(self, *, force: bool = False) -> None:
        """Redraw when a new snapshot was published or the run state changed."""
        snapshot = self.workbench.latest_snapshot()
        seen = (snapshot.version, self.workbench.state)
        if not force and seen == self._seen:
            return
        self._seen = seen

        self.query_one("#graph", GraphView).show_graph(self.workbench.graph, snapshot.highlighted)
        self.query_one("#progress", ExplorationView).show_progress(self.workbench.state, snapshot)
        self.query_one("#results", ResultsTable).show_results(snapshot.results)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Execute the typed command."""
        text = event.value.strip()
        event.input.value = ""
        if not text:
            return
        try:
            self.execute(parse_command(text))
        except _USER_ERRORS as e:
            self.notify(str(e), severity="error")
        self.refresh_view(force=True)

    def execute(self, command: Command) -> None:
        """Apply a parsed command to the workbench.

        Raises:
            The domain errors listed in _USER_ERRORS; the caller reports them.

        """
        match command.kind:
            case CommandKind.ADD_NODE:
                self.workbench.add_node(command.args[0])
            case CommandKind.REMOVE_NODE:
                self._confirm_remove(command.args[0])
            case CommandKind.TOGGLE_EDGE:
                source, target = command.args
                if source == target:
                    msg = "Self-loops are not allowed"
                    raise CommandError(msg)
                added = self.workbench.toggle_edge(source, target)
                self.notify(f"{'Added' if added else 'Removed'} edge {source} → {target}")
            case CommandKind.CLEAR:
                self.workbench.clear()
            case CommandKind.RUN:
                self.workbench.run_enumeration()
            case CommandKind.STOP:
                self.workbench.request_soft_stop()
            case CommandKind.RESET:
                self.workbench.hard_reset()

    def _confirm_remove(self, label: str) -> None:
        if self.workbench.controller.running:
            raise GraphLockedError
        if label not in self.workbench.graph:
            raise UnknownNodeError(label)

        edge_count = sum(1 for edge in self.workbench.graph.edges if label in (edge.source, edge.target))

        def remove(confirmed: bool | None) -> None:
            if not confirmed:
                return
            try:
                self.workbench.remove_node(label)
            except _USER_ERRORS as e:
                self.notify(str(e), severity="error")
            self.refresh_view(force=True)

        self.push_screen(ConfirmRemoveScreen(label, edge_count), remove)

    def _run_command(self, kind: CommandKind) -> None:
        try:
            self.execute(Command(kind))
        except _USER_ERRORS as e:
            self.notify(str(e), severity="error")
        self.refresh_view(force=True)

    def action_run(self) -> None:
        """Start the enumeration."""
        self._run_command(CommandKind.RUN)

    def action_stop(self) -> None:
        """Stop the enumeration after the current step, keeping its results."""
        self._run_command(CommandKind.STOP)

    def action_reset(self) -> None:
        """Abandon the enumeration and discard its results."""
        self._run_command(CommandKind.RESET)
