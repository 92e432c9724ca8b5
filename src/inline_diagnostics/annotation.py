"""Annotation handle: one diagnostic message shown inline via an overlay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from inline_diagnostics.host.diagnostics import Diagnostic
from inline_diagnostics.host.document import Cursor
from inline_diagnostics.host.overlays import Overlay

OVERLAY_TAG = "inline-diagnostic"


@dataclass(eq=False, slots=True)
class Annotation:
    overlay: Overlay
    diagnostic: Optional[Diagnostic] = field(default=None)

    @property
    def start(self) -> Cursor:
        return self.overlay.start

    @property
    def end(self) -> Cursor:
        return self.overlay.end

    @property
    def text(self) -> str:
        return self.overlay.text

    @property
    def style(self) -> str:
        return self.overlay.style

    @property
    def row(self) -> int:
        """Row the overlay is anchored on."""

        return self.overlay.start[0]

    @property
    def display_row(self) -> int:
        """Visual row the message occupies, directly beneath its anchor."""

        return self.row + 1

    @property
    def message(self) -> str:
        return self.text.lstrip("\n")

    @property
    def live(self) -> bool:
        return self.overlay.live

    def destroy(self) -> None:
        self.overlay.delete()


__all__ = ["Annotation", "OVERLAY_TAG"]
