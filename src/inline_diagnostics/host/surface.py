"""Editing surface: one open view of a document plus its hooks."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from .diagnostics import DiagnosticStore
from .document import Cursor, TextDocument
from .overlays import OverlayLayer

POST_COMMAND = "post-command"

HookCallback = Callable[[object], None]


class HookBus:
    """Named hooks; callbacks run synchronously in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[HookCallback]] = {}

    def subscribe(self, event: str, callback: HookCallback) -> None:
        callbacks = self._subscribers.setdefault(event, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, event: str, callback: HookCallback) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def subscribers(self, event: str) -> tuple[HookCallback, ...]:
        return tuple(self._subscribers.get(event, ()))

    def emit(self, event: str, payload: object | None = None) -> None:
        # Copy so a callback may unsubscribe itself.
        for callback in tuple(self._subscribers.get(event, ())):
            callback(payload)


class EditingSurface:
    """A document shown in a view, with cursor, overlays and diagnostics."""

    def __init__(
        self,
        *,
        name: str = "untitled",
        document: Optional[TextDocument] = None,
        diagnostics: Optional[DiagnosticStore] = None,
        overlays: Optional[OverlayLayer] = None,
        hooks: Optional[HookBus] = None,
    ) -> None:
        self.name = name
        self.document = document or TextDocument()
        self.diagnostics = diagnostics or DiagnosticStore()
        self.overlays = overlays or OverlayLayer()
        self.hooks = hooks or HookBus()
        self._cursor: Cursor = (0, 0)

    @classmethod
    def from_text(cls, text: str, *, name: str = "untitled") -> "EditingSurface":
        return cls(name=name, document=TextDocument.from_text(text))

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    def set_cursor(self, row: int, col: int) -> Cursor:
        """Move the cursor without running hooks; the command loop does that."""

        self._cursor = self.document.ensure((row, col))
        return self._cursor

    def __repr__(self) -> str:
        return f"EditingSurface(name={self.name!r}, cursor={self._cursor!r})"


__all__ = ["POST_COMMAND", "HookBus", "HookCallback", "EditingSurface"]
