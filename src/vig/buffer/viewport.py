"""Vertical and horizontal scroll offsets for one pane."""

from __future__ import annotations

from dataclasses import dataclass

HORIZONTAL_STEP = 4


@dataclass(slots=True)
class Viewport:
    """Scroll offsets clamped to ``[0, rows - height]`` and ``[0, width)``."""

    offset_y: int = 0
    offset_x: int = 0
    height: int = 20
    content_rows: int = 0
    content_width: int = 0

    @property
    def max_offset_y(self) -> int:
        return max(0, self.content_rows - self.height)

    @property
    def max_offset_x(self) -> int:
        return max(0, self.content_width - 1)

    @property
    def half_page(self) -> int:
        return max(self.height // 2, 1)

    def scroll_to(self, row: int) -> None:
        self.offset_y = max(0, min(row, self.max_offset_y))

    def scroll_by(self, delta: int) -> None:
        self.scroll_to(self.offset_y + delta)

    def scroll_x_by(self, delta: int) -> None:
        self.offset_x = max(0, min(self.offset_x + delta, self.max_offset_x))

    def ensure_visible(self, row: int) -> None:
        if row < self.offset_y:
            self.scroll_to(row)
        elif row >= self.offset_y + self.height:
            self.scroll_to(row - self.height + 1)

    def center_on(self, row: int) -> None:
        self.scroll_to(row - self.height // 2)

    def resize(self, height: int) -> None:
        self.height = max(1, height)
        self.scroll_to(self.offset_y)

    def set_content(self, rows: int, width: int = 0) -> None:
        self.content_rows = max(0, rows)
        self.content_width = max(0, width)
        self.scroll_to(self.offset_y)
        self.offset_x = min(self.offset_x, self.max_offset_x)

    def position_label(self) -> str:
        if self.content_rows <= self.height:
            return "All"
        if self.offset_y == 0:
            return "Top"
        if self.offset_y >= self.max_offset_y:
            return "Bot"
        return f"{self.offset_y * 100 // self.max_offset_y}%"


__all__ = ["HORIZONTAL_STEP", "Viewport"]
