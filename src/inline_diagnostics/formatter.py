"""Turns diagnostics into the text and style of an inline annotation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from inline_diagnostics.host.diagnostics import Diagnostic

from .config import InlineConfig


@dataclass(frozen=True, slots=True)
class FormattedDiagnostic:
    text: str
    style: str


class DiagnosticFormatter:
    def __init__(self, config: Optional[InlineConfig] = None) -> None:
        self.config = config or InlineConfig()

    def message(self, diagnostic: Diagnostic, surface_name: Optional[str] = None) -> str:
        """``In "<origin>":`` header, message, then the optional ``[id]``."""

        parts = []
        if diagnostic.origin and diagnostic.origin != surface_name:
            parts.append(f'In "{diagnostic.origin}":\n')
        parts.append(diagnostic.message)
        if diagnostic.error_id and self.config.display_error_id:
            parts.append(f" [{diagnostic.error_id}]")
        return "".join(parts)

    def style(self, diagnostic: Diagnostic) -> str:
        return self.config.style_for(diagnostic.severity)

    def format(
        self, diagnostic: Diagnostic, surface_name: Optional[str] = None
    ) -> FormattedDiagnostic:
        return FormattedDiagnostic(
            text=self.message(diagnostic, surface_name),
            style=self.style(diagnostic),
        )


__all__ = ["DiagnosticFormatter", "FormattedDiagnostic"]
