"""Mode-switch and pane-level actions shared across modes."""

from __future__ import annotations

from vig.modes.base_mode import ModeContext, ModeKind, ModeResult


def enter_normal_mode(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del count, explicit
    if not context.buffer.lines:
        return ModeResult(consumed=True, status="noop", message="Nothing to select")
    return ModeResult(consumed=True, switch_to=ModeKind.NORMAL)


def enter_visual_mode(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del context, count, explicit
    return ModeResult(consumed=True, switch_to=ModeKind.VISUAL)


def enter_visual_line_mode(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del context, count, explicit
    return ModeResult(consumed=True, switch_to=ModeKind.VISUAL_LINE)


def exit_to_normal_mode(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del context, count, explicit
    return ModeResult(consumed=True, switch_to=ModeKind.NORMAL)


def exit_to_scroll_mode(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del count, explicit
    context.pending.clear()
    return ModeResult(consumed=True, switch_to=ModeKind.SCROLL)


def side_left(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del context, count, explicit
    return ModeResult(consumed=True, status="pane", command="side.left")


def side_right(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del context, count, explicit
    return ModeResult(consumed=True, status="pane", command="side.right")


__all__ = [
    "enter_normal_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "exit_to_scroll_mode",
    "side_left",
    "side_right",
]
