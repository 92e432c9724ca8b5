"""State the inline mode keeps for a single editing surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from inline_diagnostics.host.document import Cursor
from inline_diagnostics.host.surface import EditingSurface

from .annotation import Annotation
from .config import InlineConfig
from .registry import AnnotationRegistry


@dataclass(slots=True)
class SurfaceContext:
    """Registry and last-shown cursor marker owned by one surface."""

    surface: EditingSurface
    config: InlineConfig = field(default_factory=InlineConfig)
    registry: AnnotationRegistry = field(
        default_factory=lambda: AnnotationRegistry(logger_name="inline_diagnostics.registry")
    )
    last_position: Optional[Cursor] = None

    @property
    def cursor(self) -> Cursor:
        return self.surface.cursor

    def cursor_moved(self) -> bool:
        return self.surface.cursor != self.last_position

    def remove_stale(self) -> list[Annotation]:
        return self.registry.remove_stale(
            self.surface.cursor, self.surface.diagnostics.current()
        )


__all__ = ["SurfaceContext"]
