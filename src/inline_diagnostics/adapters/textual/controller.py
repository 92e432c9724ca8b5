"""Adapter that drives an InlineMode surface from Textual key events."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from inline_diagnostics.annotation import Annotation
from inline_diagnostics.host import CommandLoop, CommandRef, Cursor, DisplayLine, compose_lines
from inline_diagnostics.host.surface import EditingSurface
from inline_diagnostics.mode import InlineMode

SHOW_COMMAND = "inline.show-at-point"
TOGGLE_COMMAND = "inline.toggle"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to push state into Textual widgets."""

    update_buffer: Callable[[Sequence[DisplayLine], Cursor], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


DEFAULT_KEYMAP: Mapping[str, str] = MappingProxyType(
    {
        "up": "previous-line",
        "k": "previous-line",
        "down": "next-line",
        "j": "next-line",
        "left": "backward-char",
        "h": "backward-char",
        "right": "forward-char",
        "l": "forward-char",
        "home": "line-start",
        "0": "line-start",
        "end": "line-end",
        "$": "line-end",
        "g": "buffer-start",
        "G": "buffer-end",
        "?": SHOW_COMMAND,
        "enter": SHOW_COMMAND,
        "i": TOGGLE_COMMAND,
    }
)


class TextualInlineAdapter:
    """Maps keys to host commands and republishes the composed view."""

    def __init__(
        self,
        mode: InlineMode,
        hooks: TextualUIHooks,
        *,
        loop: Optional[CommandLoop] = None,
        keymap: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.mode = mode
        self.hooks = hooks
        self.loop = loop or CommandLoop(mode.surface)
        self.keymap: Dict[str, str] = dict(keymap or DEFAULT_KEYMAP)
        self.loop.register(
            CommandRef(SHOW_COMMAND, self._show_command, "Show diagnostics at point"),
            replace=True,
        )
        self.loop.register(
            CommandRef(TOGGLE_COMMAND, self._toggle_command, "Toggle inline diagnostics"),
            replace=True,
        )
        self._refresh()

    @property
    def surface(self) -> EditingSurface:
        return self.mode.surface

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        """Run the command bound to ``text`` (preferred) or ``key``."""

        command_id = None
        if text:
            command_id = self.keymap.get(text)
        if command_id is None:
            command_id = self.keymap.get(key)
        if command_id is None:
            self._log_state("key -> unbound", key=key, text=text)
            return False

        self._log_state("key ->", key=key, command=command_id)
        self.loop.execute(command_id)
        self._refresh()
        return True

    def show_at_point(self) -> List[Annotation]:
        result = self.loop.execute(SHOW_COMMAND)
        self._refresh()
        return list(result) if isinstance(result, list) else []

    def wants_auto_show(self) -> bool:
        """Whether a host timer should call ``show_at_point`` after a move."""

        if not (self.mode.enabled and self.mode.config.auto_show):
            return False
        return bool(self.surface.diagnostics.at(self.surface.cursor))

    def status_text(self) -> str:
        row, col = self.surface.cursor
        parts = [
            self.surface.name,
            f"{row + 1}:{col + 1}",
            f"inline:{self.mode.state.value}",
        ]
        count = len(self.mode.annotations)
        if count:
            parts.append(f"shown:{count}")
        at_point = self.surface.diagnostics.at(self.surface.cursor)
        if at_point:
            parts.append(f"{len(at_point)} at point")
        return "  ".join(parts)

    def _show_command(self, surface: EditingSurface) -> List[Annotation]:
        del surface
        return self.mode.show_at_point()

    def _toggle_command(self, surface: EditingSurface) -> str:
        del surface
        return self.mode.toggle().value

    def _refresh(self) -> None:
        lines = compose_lines(self.surface.document, self.surface.overlays)
        self.hooks.update_buffer(lines, self.surface.cursor)
        self.hooks.update_status(self.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts = [prefix, f"surface={self.surface.name!r}", f"cursor={self.surface.cursor!r}"]
        parts.extend(f"{key}={value!r}" for key, value in fields.items() if value is not None)
        self.hooks.log(" ".join(parts))


__all__ = [
    "DEFAULT_KEYMAP",
    "SHOW_COMMAND",
    "TOGGLE_COMMAND",
    "TextualInlineAdapter",
    "TextualUIHooks",
]
