"""Command loop that runs editor commands and fires the post-command hook."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from inline_diagnostics.runtime import telemetry

from .document import Cursor
from .surface import POST_COMMAND, EditingSurface

CommandHandler = Callable[..., object]
CursorVector = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class CommandRef:
    """A named, user-invocable command."""

    id: str
    handler: CommandHandler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("command id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, surface: EditingSurface, *args: object) -> object:
        return self.handler(surface, *args)


@dataclass(frozen=True, slots=True)
class CommandEvent:
    """Payload of the post-command hook."""

    command: str
    cursor: Cursor
    previous: Cursor


def _move_by(surface: EditingSurface, delta: CursorVector) -> Cursor:
    row, col = surface.cursor
    d_row, d_col = delta
    return surface.set_cursor(*surface.document.clamp(row + d_row, col + d_col))


def next_line(surface: EditingSurface) -> Cursor:
    return _move_by(surface, (1, 0))


def previous_line(surface: EditingSurface) -> Cursor:
    return _move_by(surface, (-1, 0))


def forward_char(surface: EditingSurface) -> Cursor:
    return _move_by(surface, (0, 1))


def backward_char(surface: EditingSurface) -> Cursor:
    return _move_by(surface, (0, -1))


def line_start(surface: EditingSurface) -> Cursor:
    return surface.set_cursor(surface.cursor[0], 0)


def line_end(surface: EditingSurface) -> Cursor:
    return surface.set_cursor(*surface.document.line_end(surface.cursor[0]))


def buffer_start(surface: EditingSurface) -> Cursor:
    return surface.set_cursor(0, 0)


def buffer_end(surface: EditingSurface) -> Cursor:
    return surface.set_cursor(*surface.document.line_end(surface.document.last_row))


def goto(surface: EditingSurface, row: int, col: int = 0) -> Cursor:
    return surface.set_cursor(*surface.document.clamp(row, col))


DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef("next-line", next_line, "Move the cursor down one row"),
    CommandRef("previous-line", previous_line, "Move the cursor up one row"),
    CommandRef("forward-char", forward_char, "Move the cursor right"),
    CommandRef("backward-char", backward_char, "Move the cursor left"),
    CommandRef("line-start", line_start, "Move to the start of the row"),
    CommandRef("line-end", line_end, "Move to the end of the row"),
    CommandRef("buffer-start", buffer_start, "Move to the start of the document"),
    CommandRef("buffer-end", buffer_end, "Move to the end of the document"),
    CommandRef("goto", goto, "Move to an explicit row and column"),
)


class CommandLoop:
    """Runs commands against one surface, one at a time."""

    def __init__(
        self,
        surface: EditingSurface,
        *,
        commands: Optional[Iterable[CommandRef]] = None,
        load_defaults: bool = True,
    ) -> None:
        self.surface = surface
        self._commands: Dict[str, CommandRef] = {}
        if load_defaults:
            for command in DEFAULT_COMMANDS:
                self.register(command)
        for command in commands or ():
            self.register(command)

    def register(self, command: CommandRef, *, replace: bool = False) -> CommandRef:
        if not replace and command.id in self._commands:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command
        return command

    def unregister(self, command_id: str) -> Optional[CommandRef]:
        return self._commands.pop(command_id, None)

    def get(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def command_ids(self) -> tuple[str, ...]:
        return tuple(sorted(self._commands))

    def execute(self, command_id: str, *args: object) -> object:
        """Run ``command_id`` then the post-command hook, even on a no-op move."""

        command = self.get(command_id)
        previous = self.surface.cursor
        with telemetry.span(
            f"command::{command.id}",
            component="commands",
            metadata={"surface": self.surface.name, "command": command.id},
        ):
            result = command(self.surface, *args)
        self.surface.hooks.emit(
            POST_COMMAND,
            CommandEvent(command=command.id, cursor=self.surface.cursor, previous=previous),
        )
        return result


__all__ = [
    "CommandRef",
    "CommandEvent",
    "CommandLoop",
    "DEFAULT_COMMANDS",
    "next_line",
    "previous_line",
    "forward_char",
    "backward_char",
    "line_start",
    "line_end",
    "buffer_start",
    "buffer_end",
    "goto",
]
