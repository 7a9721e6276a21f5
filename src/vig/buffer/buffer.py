"""Buffer façade combining a read-only document with cursor state."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from vig.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Cursor
from .validation import clamp_cursor, ensure_cursor


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def set_lines(self, lines: Iterable[str]) -> None:
        """Swap in new content and pull cursor and selection back in bounds."""

        with telemetry.span(
            f"buffer::set_lines::{self.name}",
            component="buffer",
            metadata={"buffer": self.name},
        ):
            self.document = self.document.replace(lines)
            content = self.document.snapshot()
            self.state.cursor = clamp_cursor(content, *self.state.cursor)
            if self.state.selection is not None:
                anchor, cursor = self.state.selection
                self.state.selection = (
                    clamp_cursor(content, *anchor),
                    clamp_cursor(content, *cursor),
                )

    def get_lines(self, first: int, last: int) -> list[str]:
        """Whole lines ``first..last`` inclusive, in either order, clamped."""

        if self.document.is_empty:
            return []
        lo, hi = sorted((first, last))
        lo = max(lo, 0)
        hi = min(hi, self.document.line_count - 1)
        return list(self.document.snapshot()[lo : hi + 1])

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        """Characters from ``start`` through ``end`` inclusive."""

        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if start > end:
            start, end = end, start
        lines = self.document.snapshot()
        (start_row, start_col), (end_row, end_col) = start, end
        if start_row == end_row:
            return lines[start_row][start_col : end_col + 1]
        parts = [lines[start_row][start_col:]]
        parts.extend(lines[start_row + 1 : end_row])
        parts.append(lines[end_row][: end_col + 1])
        return "\n".join(parts)


__all__ = ["Buffer"]
