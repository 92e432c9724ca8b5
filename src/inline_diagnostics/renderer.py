"""Rendering strategies that place diagnostic messages beneath their line."""

from __future__ import annotations

from typing import Optional, Protocol

from inline_diagnostics.host.diagnostics import Diagnostic
from inline_diagnostics.host.document import Cursor
from inline_diagnostics.runtime import telemetry
from inline_diagnostics.severity import Severity

from .annotation import OVERLAY_TAG, Annotation
from .context import SurfaceContext


class InlineRenderer(Protocol):
    """Pluggable display/clear pair used by ``InlineMode``."""

    def display(
        self,
        context: SurfaceContext,
        message: str,
        position: Optional[Cursor] = None,
        diagnostic: Optional[Diagnostic] = None,
        *,
        style: Optional[str] = None,
    ) -> Optional[Annotation]:
        ...

    def clear_all(self, context: SurfaceContext) -> None:
        ...


class PhantomRenderer:
    """Shows each message as an overlay hanging off the end of a row.

    Messages stack: when a row already anchors an annotation the next free
    row below it is used instead.
    """

    def __init__(self, *, logger_name: str | None = "inline_diagnostics.renderer") -> None:
        self._logger_name = logger_name

    def display(
        self,
        context: SurfaceContext,
        message: str,
        position: Optional[Cursor] = None,
        diagnostic: Optional[Diagnostic] = None,
        *,
        style: Optional[str] = None,
    ) -> Optional[Annotation]:
        surface = context.surface
        document = surface.document
        position = surface.cursor if position is None else document.clamp(*position)
        if diagnostic is None:
            attached = surface.diagnostics.at(position)
            diagnostic = attached[0] if attached else None

        # Recorded even when nothing new is shown below.
        context.last_position = surface.cursor

        row = self.target_row(context, position[0])
        text = self.render_text(context, message, row)
        with telemetry.span(
            "inline::display",
            logger_name=self._logger_name,
            component="inline",
            metadata={"surface": surface.name, "row": row},
        ) as handle:
            if text in self._displayed_texts(context):
                handle.add_metadata("skipped", "duplicate_text")
                return None
            if diagnostic is not None and context.registry.displays(diagnostic):
                handle.add_metadata("skipped", "duplicate_diagnostic")
                return None

            start, end = self.anchor(context, row)
            overlay = surface.overlays.create(
                start,
                end,
                text=text,
                style=style or self._default_style(context, diagnostic),
                properties={"tag": OVERLAY_TAG, "diagnostic": diagnostic},
            )
            annotation = context.registry.add(Annotation(overlay, diagnostic))
            handle.add_metadata("display_row", annotation.display_row)
            return annotation

    def clear_all(self, context: SurfaceContext) -> None:
        context.registry.clear_all()

    def target_row(self, context: SurfaceContext, row: int) -> int:
        document = context.surface.document
        overlays = context.surface.overlays
        while not document.is_last_row(row) and overlays.starting_on_row(
            row, tag=OVERLAY_TAG
        ):
            row += 1
        return row

    def render_text(self, context: SurfaceContext, message: str, row: int) -> str:
        text = f"{context.config.prefix}{message}"
        if context.surface.document.is_last_row(row):
            return "\n" + text
        return text

    def anchor(self, context: SurfaceContext, row: int) -> tuple[Cursor, Cursor]:
        document = context.surface.document
        line_end = document.line_end(row)
        if document.is_last_row(row) or not document.get_line(row):
            return (row, 0), line_end
        return line_end, (row + 1, 0)

    @staticmethod
    def _displayed_texts(context: SurfaceContext) -> set[str]:
        return {o.text for o in context.surface.overlays.overlays(tag=OVERLAY_TAG)}

    @staticmethod
    def _default_style(context: SurfaceContext, diagnostic: Optional[Diagnostic]) -> str:
        severity = diagnostic.severity if diagnostic is not None else Severity.NOTE
        return context.config.style_for(severity)


__all__ = ["InlineRenderer", "PhantomRenderer"]
