"""Selection ranges and the yank side effect shared by modes."""

from __future__ import annotations

from typing import Optional

from vig.buffer import RegisterValue, YankKind, clamp_cursor, last_col
from vig.motions import YankRange
from vig.runtime import telemetry

from .base_mode import ModeContext, ModeKind


def selection_range(context: ModeContext) -> Optional[YankRange]:
    """The derived selection for the context's current visual mode."""

    anchor = context.anchor
    if anchor is None or not context.mode.is_visual:
        return None
    cursor = context.cursor
    if context.mode is ModeKind.VISUAL_LINE:
        top, bottom = sorted((anchor[0], cursor[0]))
        lines = context.buffer.lines
        end_col = last_col(lines[bottom]) if bottom < len(lines) else 0
        return YankRange((top, 0), (bottom, end_col), YankKind.LINE)
    start, end = sorted((anchor, cursor))
    return YankRange(start, end, YankKind.CHARACTER)


def apply_yank(context: ModeContext, yank: YankRange) -> Optional[RegisterValue]:
    """Copy ``yank`` out of the buffer into the register and announce it."""

    buffer = context.buffer
    lines = buffer.lines
    if not lines:
        return None
    if yank.kind is YankKind.LINE:
        text = "\n".join(buffer.get_lines(yank.start[0], yank.end[0]))
    else:
        text = buffer.get_text_range(
            clamp_cursor(lines, *yank.start), clamp_cursor(lines, *yank.end)
        )
    value = context.registers.yank(text, yank.kind)
    context.bus.emit("yank", value)
    telemetry.record_event(
        "yank",
        data={"pane": buffer.name, "kind": yank.kind.value, "chars": len(text)},
    )
    return value


def describe_yank(value: Optional[RegisterValue]) -> str:
    if value is None:
        return "nothing to yank"
    if value.kind is YankKind.LINE:
        count = value.text.count("\n") + 1
        return f"{count} line{'s' if count != 1 else ''} yanked"
    return f"{len(value.text)} chars yanked"


__all__ = ["apply_yank", "describe_yank", "selection_range"]
