"""Overlay primitive: non-editable text attached after a span of the document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional

from .document import Cursor, TextDocument


@dataclass(eq=False, slots=True)
class Overlay:
    """Handle to a single overlay. ``text`` renders after ``end``."""

    start: Cursor
    end: Cursor
    text: str
    style: str
    properties: Dict[str, object] = field(default_factory=dict)
    layer: Optional["OverlayLayer"] = field(default=None, repr=False)

    @property
    def live(self) -> bool:
        return self.layer is not None

    @property
    def tag(self) -> Optional[str]:
        value = self.properties.get("tag")
        return value if isinstance(value, str) else None

    def delete(self) -> None:
        if self.layer is not None:
            self.layer.delete(self)


class OverlayLayer:
    """All overlays of one surface, in creation order."""

    def __init__(self) -> None:
        self._overlays: List[Overlay] = []

    def create(
        self,
        start: Cursor,
        end: Cursor,
        *,
        text: str,
        style: str,
        properties: Optional[Mapping[str, object]] = None,
    ) -> Overlay:
        if end < start:
            raise ValueError(f"overlay ends before it starts: {start}..{end}")
        overlay = Overlay(
            start=start,
            end=end,
            text=text,
            style=style,
            properties=dict(properties or {}),
            layer=self,
        )
        self._overlays.append(overlay)
        return overlay

    def delete(self, overlay: Overlay) -> None:
        if overlay.layer is not self:
            return
        self._overlays.remove(overlay)
        overlay.layer = None

    def overlays(self, tag: Optional[str] = None) -> tuple[Overlay, ...]:
        if tag is None:
            return tuple(self._overlays)
        return tuple(o for o in self._overlays if o.tag == tag)

    def starting_on_row(self, row: int, tag: Optional[str] = None) -> tuple[Overlay, ...]:
        return tuple(o for o in self.overlays(tag) if o.start[0] == row)

    def __len__(self) -> int:
        return len(self._overlays)

    def __iter__(self) -> Iterator[Overlay]:
        return iter(self.overlays())


@dataclass(frozen=True, slots=True)
class DisplayLine:
    """One rendered row: a document row, or a row produced by an overlay."""

    text: str
    style: Optional[str] = None
    source_row: Optional[int] = None

    @property
    def phantom(self) -> bool:
        return self.source_row is None


def compose_lines(document: TextDocument, layer: OverlayLayer) -> list[DisplayLine]:
    """Interleave document rows with the rows their overlays render.

    An overlay's text is placed after the row holding its ``start``. Text
    that begins with a newline (used on the final row, which has no newline
    of its own to hang from) has that newline dropped; each remaining line
    becomes its own display row.
    """

    by_row: Dict[int, List[Overlay]] = {}
    for overlay in layer.overlays():
        by_row.setdefault(overlay.start[0], []).append(overlay)

    lines: list[DisplayLine] = []
    for row, text in enumerate(document.snapshot()):
        lines.append(DisplayLine(text=text, source_row=row))
        for overlay in by_row.get(row, ()):
            body = overlay.text[1:] if overlay.text.startswith("\n") else overlay.text
            for chunk in body.split("\n"):
                lines.append(DisplayLine(text=chunk, style=overlay.style))
    return lines


__all__ = ["Overlay", "OverlayLayer", "DisplayLine", "compose_lines"]
