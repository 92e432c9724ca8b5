"""Diagnostic records and the in-memory store a checker publishes into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Protocol, Sequence, Union

from inline_diagnostics.severity import Severity

from .document import Cursor, TextDocument


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One issue reported by a checker.

    ``end`` may be omitted, in which case the diagnostic covers the whole row
    of ``begin``. ``origin`` names the buffer the checker reported against;
    ``None`` means the buffer the diagnostic is attached to.
    """

    severity: Severity
    message: str
    begin: Cursor
    end: Optional[Cursor] = None
    error_id: Optional[str] = None
    origin: Optional[str] = None
    checker: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.from_tag(self.severity))
        if not self.message:
            raise ValueError("diagnostic message cannot be empty")
        if self.end is not None and self.end < self.begin:
            raise ValueError(f"diagnostic span ends before it begins: {self.begin}..{self.end}")

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], document: Optional[TextDocument] = None
    ) -> "Diagnostic":
        """Build from a checker's JSON record (1-based ``line``/``column``).

        A record with ``end_line`` but no ``end_column`` ends at the end of
        that row; without a ``document`` to measure it, a same-row record
        becomes row-wide and a multi-row one runs to the start of the row
        after ``end_line``.
        """

        begin = (int(data["line"]) - 1, max(int(data.get("column", 1)) - 1, 0))
        end: Optional[Cursor] = None
        if "end_line" in data:
            end_row = int(data["end_line"]) - 1
            if "end_column" in data:
                end = (end_row, max(int(data["end_column"]) - 1, 0))
            elif document is not None and 0 <= end_row < document.line_count:
                end = document.line_end(end_row)
            elif end_row > begin[0]:
                end = (end_row + 1, 0)
            if end is not None and end < begin:
                end = None
        return cls(
            severity=data.get("severity", "error"),
            message=str(data.get("message", "")),
            begin=begin,
            end=end,
            error_id=data.get("id") or data.get("code"),
            origin=data.get("origin"),
            checker=data.get("checker"),
        )

    @property
    def row(self) -> int:
        return self.begin[0]

    def contains(self, position: Cursor) -> bool:
        if self.end is None:
            return position[0] == self.begin[0]
        return self.begin <= position <= self.end


class DiagnosticSource(Protocol):
    """What the inline mode needs from a host diagnostics engine."""

    def at(self, position: Cursor) -> Sequence[Diagnostic]:
        """Diagnostics whose span contains ``position``, in report order."""
        ...

    def current(self) -> frozenset[Diagnostic]:
        """Every diagnostic currently live for the surface."""
        ...


class DiagnosticStore:
    """Ordered, replaceable diagnostic set for one surface."""

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        self._diagnostics: List[Diagnostic] = []
        self.replace(diagnostics)

    def replace(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Swap in a new check result, as a checker does after each run."""

        self._diagnostics = list(dict.fromkeys(diagnostics))

    def add(
        self,
        severity: Union[Severity, str, int],
        message: str,
        begin: Cursor,
        end: Optional[Cursor] = None,
        **extra: Optional[str],
    ) -> Diagnostic:
        diagnostic = Diagnostic(severity, message, begin, end, **extra)
        if diagnostic not in self._diagnostics:
            self._diagnostics.append(diagnostic)
        return diagnostic

    def discard(self, diagnostic: Diagnostic) -> None:
        if diagnostic in self._diagnostics:
            self._diagnostics.remove(diagnostic)

    def clear(self) -> None:
        self._diagnostics.clear()

    def at(self, position: Cursor) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self._diagnostics if d.contains(position))

    def current(self) -> frozenset[Diagnostic]:
        return frozenset(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(tuple(self._diagnostics))


__all__ = ["Diagnostic", "DiagnosticSource", "DiagnosticStore"]
