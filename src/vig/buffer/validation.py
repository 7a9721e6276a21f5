"""Cursor validation and clamping shared by buffers and motions."""

from __future__ import annotations

from typing import Sequence

from .document import BufferDocument
from .state import Cursor


class BufferValidationError(RuntimeError):
    """Raised when a caller hands a buffer an out-of-bounds cursor."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    """Pass ``cursor`` through when it addresses a character; raise otherwise."""

    row, col = cursor
    if not 0 <= row < document.line_count:
        raise BufferValidationError(
            f"row {row} outside 0..{document.line_count - 1}", cursor=cursor
        )
    limit = last_col(document.get_line(row))
    if not 0 <= col <= limit:
        raise BufferValidationError(f"column {col} outside 0..{limit}", cursor=cursor)
    return cursor


def last_col(line: str) -> int:
    return max(len(line) - 1, 0)


def clamp_cursor(lines: Sequence[str], row: int, col: int) -> Cursor:
    """Clamp into ``[0, rows) x [0, len(line))``; empty content pins (0, 0)."""

    if not lines:
        return (0, 0)
    row = max(0, min(row, len(lines) - 1))
    col = max(0, min(col, last_col(lines[row])))
    return (row, col)
