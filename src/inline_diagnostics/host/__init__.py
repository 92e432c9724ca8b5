"""In-memory host editor: documents, diagnostics, overlays, and the command loop."""

from .commands import CommandEvent, CommandLoop, CommandRef, DEFAULT_COMMANDS
from .diagnostics import Diagnostic, DiagnosticSource, DiagnosticStore
from .document import Cursor, PositionError, TextDocument
from .overlays import DisplayLine, Overlay, OverlayLayer, compose_lines
from .surface import POST_COMMAND, EditingSurface, HookBus

__all__ = [
    "Cursor",
    "PositionError",
    "TextDocument",
    "Diagnostic",
    "DiagnosticSource",
    "DiagnosticStore",
    "DisplayLine",
    "Overlay",
    "OverlayLayer",
    "compose_lines",
    "POST_COMMAND",
    "EditingSurface",
    "HookBus",
    "CommandEvent",
    "CommandLoop",
    "CommandRef",
    "DEFAULT_COMMANDS",
]
