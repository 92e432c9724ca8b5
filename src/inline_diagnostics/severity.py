"""Canonical diagnostic severities and the producer tag aliases that map to them."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class Severity(str, Enum):
    """The three severity classes the inline mode knows how to style."""

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"

    @classmethod
    def from_tag(cls, tag: Union["Severity", str, int]) -> "Severity":
        """Resolve a producer-specific tag (``"W"``, ``"lsp-warning"``, ``2``...)."""

        if isinstance(tag, Severity):
            return tag
        key = str(tag).strip().lower()
        try:
            return SEVERITY_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown severity tag {tag!r}") from None


SEVERITY_ALIASES: Mapping[str, Severity] = MappingProxyType(
    {
        # generic
        "error": Severity.ERROR,
        "warning": Severity.WARNING,
        "note": Severity.NOTE,
        "info": Severity.NOTE,
        "information": Severity.NOTE,
        "hint": Severity.NOTE,
        # short codes (pycodestyle, ruff, compilers)
        "e": Severity.ERROR,
        "err": Severity.ERROR,
        "fatal": Severity.ERROR,
        "w": Severity.WARNING,
        "warn": Severity.WARNING,
        "i": Severity.NOTE,
        "n": Severity.NOTE,
        # checker-prefixed tags
        "flycheck-error": Severity.ERROR,
        "flycheck-warning": Severity.WARNING,
        "flycheck-info": Severity.NOTE,
        "lsp-error": Severity.ERROR,
        "lsp-warning": Severity.WARNING,
        "lsp-information": Severity.NOTE,
        "lsp-hint": Severity.NOTE,
        # LSP DiagnosticSeverity numbers
        "1": Severity.ERROR,
        "2": Severity.WARNING,
        "3": Severity.NOTE,
        "4": Severity.NOTE,
    }
)

DEFAULT_STYLES: Mapping[Severity, str] = MappingProxyType(
    {
        Severity.ERROR: "inline.error",
        Severity.WARNING: "inline.warning",
        Severity.NOTE: "inline.note",
    }
)


__all__ = ["Severity", "SEVERITY_ALIASES", "DEFAULT_STYLES"]
