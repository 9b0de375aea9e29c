"""Modal screens for the TUI."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from rich.markup import escape
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

if TYPE_CHECKING:
    from textual.app import ComposeResult


class ConfirmRemoveScreen(ModalScreen[bool]):
    """Modal dialog to confirm removing a node and its edges."""

    BINDINGS: ClassVar[list[tuple[str, str, str]]] = [
        ("escape", "cancel", "Cancel"),
    ]

    CSS = """
    ConfirmRemoveScreen {
        align: center middle;
    }

    #dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $warning;
    }

    #dialog Label {
        margin-bottom: 1;
        text-align: center;
        width: 100%;
    }

    #buttons {
        width: 100%;
        height: auto;
        align: center middle;
        margin-top: 1;
    }

    #buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, label: str, edge_count: int) -> None:
        """Initialize the confirmation screen.

        Args:
            label: Label of the node to remove
            edge_count: Number of edges removed together with the node

        """
        super().__init__()
        self.label = label
        self.edge_count = edge_count

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        with Vertical(id="dialog"):
            yield Label(f"Remove node '{escape(self.label)}'?")
            yield Label(f"{self.edge_count} connected edge(s) will be removed too.")
            with Horizontal(id="buttons"):
                yield Button("Remove", variant="warning", id="remove")
                yield Button("Cancel", id="cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button clicks."""
        self.dismiss(event.button.id == "remove")

    def action_cancel(self) -> None:
        """Handle escape key."""
        self.dismiss(False)  # noqa: FBT003
