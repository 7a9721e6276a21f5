"""Scroll-mode commands.

List panes treat the cursor row as their selected item, so these commands
move the selection there. Viewport panes (DiffView, Detail) move the scroll
offset and leave the cursor alone.
"""

from __future__ import annotations

from vig.buffer import HORIZONTAL_STEP, clamp_cursor
from vig.modes.base_mode import ModeContext, ModeResult


def _scroll(context: ModeContext, delta: int) -> ModeResult:
    if context.list_selection:
        row, col = context.cursor
        context.move_cursor(clamp_cursor(context.buffer.lines, row + delta, col))
    else:
        context.viewport.scroll_by(delta)
    return ModeResult(consumed=True, status="scroll")


def _jump(context: ModeContext, row: int) -> ModeResult:
    if context.list_selection:
        context.move_cursor(clamp_cursor(context.buffer.lines, row, 0))
    else:
        context.viewport.scroll_to(row)
    return ModeResult(consumed=True, status="scroll")


def scroll_down(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    return _scroll(context, count)


def scroll_up(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    return _scroll(context, -count)


def half_page_down(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    return _scroll(context, context.viewport.half_page * count)


def half_page_up(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    return _scroll(context, -context.viewport.half_page * count)


def scroll_to_top(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    return _jump(context, count - 1 if explicit else 0)


def scroll_to_bottom(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    if explicit:
        return _jump(context, count - 1)
    last = max(len(context.buffer.lines) - 1, 0)
    return _jump(context, last)


def scroll_left(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    context.viewport.scroll_x_by(-HORIZONTAL_STEP * count)
    return ModeResult(consumed=True, status="scroll")


def scroll_right(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del explicit
    context.viewport.scroll_x_by(HORIZONTAL_STEP * count)
    return ModeResult(consumed=True, status="scroll")


__all__ = [
    "half_page_down",
    "half_page_up",
    "scroll_down",
    "scroll_left",
    "scroll_right",
    "scroll_to_bottom",
    "scroll_to_top",
    "scroll_up",
]
