"""Cursor and selection state tied to a pane's content buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, column)
Selection = Tuple[Cursor, Cursor]  # (anchor, cursor) as captured


@dataclass(slots=True)
class BufferState:
    """Mutable cursor + selection info for one BufferDocument."""

    cursor: Cursor = (0, 0)
    selection: Optional[Selection] = None

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def clear_selection(self) -> None:
        self.selection = None

    def set_selection(self, anchor: Cursor, cursor: Cursor) -> None:
        self.selection = (anchor, cursor)

    @property
    def anchor(self) -> Optional[Cursor]:
        return self.selection[0] if self.selection else None
