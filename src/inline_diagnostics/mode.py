"""The inline diagnostics minor mode and its global variant."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from inline_diagnostics.host.surface import POST_COMMAND, EditingSurface
from inline_diagnostics.runtime import telemetry

from .annotation import Annotation
from .config import InlineConfig
from .context import SurfaceContext
from .formatter import DiagnosticFormatter
from .renderer import InlineRenderer, PhantomRenderer


class ModeState(str, Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"


class InlineMode:
    """Shows diagnostics under their line on one surface.

    While enabled, every command the host runs is followed by a check that
    drops annotations the cursor has left. ``show_at_point`` displays the
    diagnostics under the cursor.
    """

    def __init__(
        self,
        surface: EditingSurface,
        *,
        config: Optional[InlineConfig] = None,
        renderer: Optional[InlineRenderer] = None,
        formatter: Optional[DiagnosticFormatter] = None,
    ) -> None:
        config = config or InlineConfig()
        self.context = SurfaceContext(surface=surface, config=config)
        self.renderer: InlineRenderer = renderer or PhantomRenderer()
        self.formatter = formatter or DiagnosticFormatter(config)
        self.state = ModeState.DISABLED
        self.logger = telemetry.get_logger("inline_diagnostics.mode")

    @property
    def surface(self) -> EditingSurface:
        return self.context.surface

    @property
    def config(self) -> InlineConfig:
        return self.context.config

    @property
    def enabled(self) -> bool:
        return self.state is ModeState.ENABLED

    @property
    def annotations(self) -> tuple[Annotation, ...]:
        return tuple(self.context.registry)

    def enable(self) -> None:
        if self.enabled:
            return
        self.surface.hooks.subscribe(POST_COMMAND, self._on_post_command)
        self.state = ModeState.ENABLED
        telemetry.record_event("inline.enable", data={"surface": self.surface.name})

    def disable(self) -> None:
        was_enabled = self.enabled
        self.surface.hooks.unsubscribe(POST_COMMAND, self._on_post_command)
        self.renderer.clear_all(self.context)
        self.state = ModeState.DISABLED
        if was_enabled:
            telemetry.record_event(
                "inline.disable", data={"surface": self.surface.name}
            )

    def toggle(self) -> ModeState:
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.state

    def hide_stale(self) -> List[Annotation]:
        """Drop annotations the cursor has left since they were last shown."""

        if not self.context.cursor_moved():
            return []
        return self.context.remove_stale()

    def show_at_point(self) -> List[Annotation]:
        if not self.enabled:
            return []
        self.hide_stale()

        surface = self.surface
        created: List[Annotation] = []
        for diagnostic in surface.diagnostics.at(surface.cursor):
            if self.context.registry.displays(diagnostic):
                continue
            formatted = self.formatter.format(diagnostic, surface.name)
            annotation = self.renderer.display(
                self.context,
                formatted.text,
                diagnostic.begin,
                diagnostic,
                style=formatted.style,
            )
            if annotation is not None:
                created.append(annotation)
        return created

    def _on_post_command(self, payload: object | None) -> None:
        del payload
        self.hide_stale()


SurfacePredicate = Callable[[EditingSurface], bool]


def _always(surface: EditingSurface) -> bool:
    del surface
    return True


class GlobalInlineMode:
    """Turns ``InlineMode`` on for every attached surface that qualifies."""

    def __init__(
        self,
        *,
        config: Optional[InlineConfig] = None,
        renderer: Optional[InlineRenderer] = None,
        predicate: SurfacePredicate = _always,
    ) -> None:
        self.config = config or InlineConfig()
        self.renderer: InlineRenderer = renderer or PhantomRenderer()
        self.predicate = predicate
        self.state = ModeState.DISABLED
        self._modes: Dict[EditingSurface, InlineMode] = {}

    @property
    def enabled(self) -> bool:
        return self.state is ModeState.ENABLED

    @property
    def surfaces(self) -> tuple[EditingSurface, ...]:
        return tuple(self._modes)

    def mode_for(self, surface: EditingSurface) -> InlineMode:
        mode = self._modes.get(surface)
        if mode is None:
            raise KeyError(f"{surface!r} is not attached")
        return mode

    def attach(self, surface: EditingSurface) -> InlineMode:
        mode = self._modes.get(surface)
        if mode is None:
            mode = InlineMode(surface, config=self.config, renderer=self.renderer)
            self._modes[surface] = mode
        if self.enabled and self.predicate(surface):
            mode.enable()
        return mode

    def detach(self, surface: EditingSurface) -> None:
        mode = self._modes.pop(surface, None)
        if mode is not None:
            mode.disable()

    def enable(self) -> None:
        self.state = ModeState.ENABLED
        for surface, mode in self._modes.items():
            if self.predicate(surface):
                mode.enable()
        telemetry.record_event("inline.global_enable", data={"surfaces": len(self._modes)})

    def disable(self) -> None:
        self.state = ModeState.DISABLED
        for mode in self._modes.values():
            mode.disable()
        telemetry.record_event("inline.global_disable", data={"surfaces": len(self._modes)})

    def toggle(self) -> ModeState:
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.state


__all__ = ["ModeState", "InlineMode", "GlobalInlineMode", "SurfacePredicate"]
