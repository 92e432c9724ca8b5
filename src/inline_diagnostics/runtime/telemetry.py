"""Telemetry for the inline diagnostics mode, built on telelog.

Public surface:

``configure(...)`` -- pick a preset or adopt an explicit ``telelog.Config``
``get_logger(name)`` -- cached logger bound to the active configuration
``record_event(name, ...)`` -- structured one-off events (mode toggles, skips)
``span(name, ...)`` -- profiled block with optional component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "INLINE_DIAGNOSTICS_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "inline_diagnostics")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _build_preset_config(preset: str) -> Any:
    config = tl.Config()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "quiet":
        # Terminal UIs own stdout; only keep a file sink.
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(env("LOG_FILE") or "inline_diagnostics.log")
        config.with_buffering(True)
    elif key == "profiling":
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_buffering(True)
        config.with_file_output(env("LOG_FILE") or "inline_diagnostics-profile.log")
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    config.with_profiling(True)
    return config


def _build_default_config() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "WARNING").upper())

    if env_flag("DISABLE_CONSOLE", False):
        config.with_console_output(False)
    else:
        config.with_console_output(True)
        config.with_colored_output(not env_flag("NO_COLOR", False))

    if env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` and ``preset`` (``"development"``, ``"quiet"``,
    ``"profiling"``) are mutually exclusive; with neither, the configuration
    is rebuilt from ``INLINE_DIAGNOSTICS_*`` environment variables. Cached
    loggers are dropped so the next ``get_logger`` picks up the change.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _build_default_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so the block can attach results as metadata."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        for key, value in (extra or {}).items():
            payload[key] = _stringify(value)
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        _emit(self.logger, "warning", "span::cancel", self._payload(extra))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block and, when ``component`` is given, track it as one.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    pushed as logger context for the duration of the block.
    """

    log = get_logger(logger_name)
    component_name: Optional[str] = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in serialized:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "ENV_PREFIX",
    "SpanHandle",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
