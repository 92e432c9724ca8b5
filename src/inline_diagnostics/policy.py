"""Decides which annotations survive a cursor move."""

from __future__ import annotations

from enum import Enum
from typing import AbstractSet

from inline_diagnostics.host.diagnostics import Diagnostic
from inline_diagnostics.host.document import Cursor

from .annotation import Annotation


class Visibility(str, Enum):
    KEEP = "keep"
    REMOVE = "remove"


def should_remove(
    annotation: Annotation, cursor: Cursor, live: AbstractSet[Diagnostic]
) -> Visibility:
    """Keep only annotations whose live diagnostic still spans ``cursor``."""

    diagnostic = annotation.diagnostic
    if diagnostic is None or diagnostic not in live:
        return Visibility.REMOVE
    if not diagnostic.contains(cursor):
        return Visibility.REMOVE
    return Visibility.KEEP


__all__ = ["Visibility", "should_remove"]
