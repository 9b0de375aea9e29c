"""TUI components for topoviz."""

from .app import TopovizApp
from .commands import Command, CommandError, CommandKind, parse_command

__all__ = ["Command", "CommandError", "CommandKind", "TopovizApp", "parse_command"]
