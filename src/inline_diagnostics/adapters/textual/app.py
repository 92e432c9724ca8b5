"""Executable Textual app showing a file with its diagnostics inline."""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.timer import Timer
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use inline_diagnostics.adapters.textual.app"
    ) from exc

from inline_diagnostics.config import InlineConfig
from inline_diagnostics.host import (
    Cursor,
    Diagnostic,
    DisplayLine,
    EditingSurface,
    TextDocument,
)
from inline_diagnostics.mode import InlineMode
from inline_diagnostics.runtime import telemetry

from .controller import TextualInlineAdapter, TextualUIHooks

STYLE_THEME: Mapping[str, str] = {
    "inline.error": "bold red",
    "inline.warning": "yellow",
    "inline.note": "cyan",
}


def load_diagnostics(
    path: Path, document: Optional[TextDocument] = None
) -> list[Diagnostic]:
    """Read a JSON list of checker records (see ``Diagnostic.from_mapping``)."""

    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON list of diagnostics")
    return [Diagnostic.from_mapping(record, document) for record in records]


def render_lines(
    lines: Sequence[DisplayLine],
    cursor: Cursor,
    theme: Mapping[str, str] = STYLE_THEME,
) -> Text:
    rendered = Text()
    for index, line in enumerate(lines):
        if index:
            rendered.append("\n")
        if line.phantom:
            rendered.append(line.text, style=theme.get(line.style or "", ""))
            continue
        if line.source_row != cursor[0]:
            rendered.append(line.text)
            continue
        col = cursor[1]
        rendered.append(line.text[:col])
        rendered.append(line.text[col : col + 1] or " ", style="reverse")
        rendered.append(line.text[col + 1 :])
    return rendered


class InlineDiagnosticsApp(App[None]):
    """Read-only viewer embedding the inline diagnostics mode."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, surface: EditingSurface, *, config: InlineConfig) -> None:
        super().__init__()
        self.surface = surface
        self.config = config
        self.adapter: TextualInlineAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._auto_show_timer: Timer | None = None
        self._logger = telemetry.get_logger("inline_diagnostics.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        mode = InlineMode(self.surface, config=self.config)
        mode.enable()
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualInlineAdapter(mode, hooks)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        if event.key in {"ctrl+c", "ctrl+q"}:
            return
        if self.adapter.handle_textual_key(event.key, text=event.character):
            event.stop()
            self._schedule_auto_show()

    def _schedule_auto_show(self) -> None:
        if self._auto_show_timer is not None:
            self._auto_show_timer.stop()
            self._auto_show_timer = None
        if self.adapter and self.adapter.wants_auto_show():
            self._auto_show_timer = self.set_timer(
                self.config.display_delay, self._auto_show
            )

    def _auto_show(self) -> None:
        self._auto_show_timer = None
        if self.adapter:
            self.adapter.show_at_point()

    def _update_buffer(self, lines: Sequence[DisplayLine], cursor: Cursor) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_lines(lines, cursor))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self._logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = InlineConfig.from_env()
    parser = argparse.ArgumentParser(
        description="View a file with checker diagnostics shown inline."
    )
    parser.add_argument("path", type=Path, help="File to display")
    parser.add_argument(
        "--diagnostics",
        type=Path,
        help="JSON list of diagnostics (line, column, severity, message, id, ...)",
    )
    parser.add_argument(
        "--prefix",
        default=defaults.prefix,
        help=f"Text placed before every message (default: {defaults.prefix!r})",
    )
    parser.add_argument(
        "--hide-error-id",
        action="store_true",
        help="Do not append [id] to messages",
    )
    parser.add_argument(
        "--auto-show",
        action="store_true",
        default=defaults.auto_show,
        help="Show diagnostics automatically when the cursor rests on one",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=defaults.display_delay,
        help="Seconds to wait before auto-showing (default: %(default)s)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "quiet", "profiling"),
        default="quiet",
        help="Telemetry preset (default: quiet, logs to a file)",
    )
    return parser.parse_args(argv)


def build_surface(path: Path, diagnostics: Optional[Path]) -> EditingSurface:
    surface = EditingSurface.from_text(path.read_text(encoding="utf-8"), name=str(path))
    if diagnostics is not None:
        surface.diagnostics.replace(load_diagnostics(diagnostics, surface.document))
    return surface


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = replace(
        InlineConfig.from_env(),
        prefix=args.prefix,
        display_error_id=not args.hide_error_id,
        auto_show=args.auto_show,
        display_delay=args.delay,
    )
    app = InlineDiagnosticsApp(build_surface(args.path, args.diagnostics), config=config)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()


__all__ = [
    "InlineDiagnosticsApp",
    "build_surface",
    "load_diagnostics",
    "render_lines",
    "main",
]
