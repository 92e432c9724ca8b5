"""User-facing options for the inline diagnostics mode."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional, Union

from inline_diagnostics.runtime.telemetry import env, env_flag

from .severity import DEFAULT_STYLES, Severity

DEFAULT_PREFIX = "~> "
DEFAULT_DISPLAY_DELAY = 0.9


@dataclass(frozen=True, slots=True)
class InlineConfig:
    """Options shared by every surface the mode is enabled on.

    ``display_delay`` (seconds) and ``auto_show`` are read by hosts that
    debounce automatic display; the mode itself acts immediately. ``styles``
    may name only some severities; the rest keep their default style.
    """

    prefix: str = DEFAULT_PREFIX
    display_error_id: bool = True
    display_delay: float = DEFAULT_DISPLAY_DELAY
    auto_show: bool = False
    styles: Mapping[Severity, str] = field(default_factory=lambda: DEFAULT_STYLES, hash=False)

    def __post_init__(self) -> None:
        styles = dict(DEFAULT_STYLES)
        styles.update((Severity.from_tag(tag), style) for tag, style in self.styles.items())
        object.__setattr__(self, "styles", MappingProxyType(styles))

    def style_for(self, severity: Union[Severity, str]) -> str:
        return self.styles[Severity.from_tag(severity)]

    def with_styles(self, **overrides: str) -> "InlineConfig":
        """Return a copy with styles replaced, keyed by severity tag."""

        styles = dict(self.styles)
        for tag, style in overrides.items():
            styles[Severity.from_tag(tag)] = style
        return replace(self, styles=styles)

    @classmethod
    def from_env(cls, base: Optional["InlineConfig"] = None) -> "InlineConfig":
        """Overlay ``INLINE_DIAGNOSTICS_*`` variables on ``base``."""

        config = base or cls()
        delay_raw = env("DELAY")
        return replace(
            config,
            prefix=env("PREFIX", config.prefix) or "",
            display_error_id=env_flag("DISPLAY_ERROR_ID", config.display_error_id),
            display_delay=float(delay_raw) if delay_raw else config.display_delay,
            auto_show=env_flag("AUTO_SHOW", config.auto_show),
        )


__all__ = ["InlineConfig", "DEFAULT_PREFIX", "DEFAULT_DISPLAY_DELAY"]
