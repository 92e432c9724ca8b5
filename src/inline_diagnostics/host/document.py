"""Line-addressed text storage for editing surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

Cursor = Tuple[int, int]  # (row, column)


class PositionError(RuntimeError):
    """Raised when a host hands out a position outside the document."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


@dataclass(slots=True)
class TextDocument:
    """List-of-lines document; always holds at least one (possibly empty) row."""

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        lines = text.splitlines()
        if not lines:
            lines = [""]
        elif text.endswith("\n"):
            lines.append("")
        return cls(_lines=list(lines))

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_row(self) -> int:
        return len(self._lines) - 1

    def get_line(self, row: int) -> str:
        return self._lines[row]

    def line_end(self, row: int) -> Cursor:
        return (row, len(self._lines[row]))

    def is_last_row(self, row: int) -> bool:
        return row >= self.last_row

    def ensure(self, cursor: Cursor) -> Cursor:
        row, col = cursor
        if row < 0 or row >= self.line_count:
            raise PositionError("Row out of range", cursor=cursor)
        if col < 0 or col > len(self._lines[row]):
            raise PositionError("Column out of range", cursor=cursor)
        return cursor

    def clamp(self, row: int, col: int) -> Cursor:
        row = max(0, min(row, self.last_row))
        col = max(0, min(col, len(self._lines[row])))
        return (row, col)


__all__ = ["Cursor", "PositionError", "TextDocument"]
