"""Parsing of the commands typed into the TUI command line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CommandError(ValueError):
    """Raised for a command line that cannot be understood."""


class CommandKind(StrEnum):
    ADD_NODE = "node"
    REMOVE_NODE = "rm"
    TOGGLE_EDGE = "edge"
    CLEAR = "clear"
    RUN = "run"
    STOP = "stop"
    RESET = "reset"


_ALIASES: dict[str, CommandKind] = {
    "add": CommandKind.ADD_NODE,
    "remove": CommandKind.REMOVE_NODE,
    "del": CommandKind.REMOVE_NODE,
}

_ARITY: dict[CommandKind, int] = {
    CommandKind.ADD_NODE: 1,
    CommandKind.REMOVE_NODE: 1,
    CommandKind.TOGGLE_EDGE: 2,
}


@dataclass(frozen=True, slots=True)
class Command:
    kind: CommandKind
    args: tuple[str, ...] = ()


def parse_command(text: str) -> Command:
    """Parse a command such as ``node A``, ``edge A B`` or ``run``.

    ``edge`` also accepts the ``A:B`` form used on the command line.

    Raises:
        CommandError: For unknown commands or a wrong number of arguments.

    """
    words = text.split()
    if not words:
        msg = "Empty command"
        raise CommandError(msg)

    name, args = words[0].lower(), words[1:]
    if name in _ALIASES:
        kind = _ALIASES[name]
    else:
        try:
            kind = CommandKind(name)
        except ValueError:
            msg = f"Unknown command '{words[0]}'"
            raise CommandError(msg) from None

    if kind is CommandKind.TOGGLE_EDGE and len(args) == 1 and ":" in args[0]:
        args = args[0].split(":", 1)

    expected = _ARITY.get(kind, 0)
    if len(args) != expected or not all(args):
        msg = f"'{kind}' expects {expected} argument(s), got {len(args)}"
        raise CommandError(msg)

    return Command(kind, tuple(args))
