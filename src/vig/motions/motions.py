"""Cursor motions. Each takes ``MotionArgs`` and returns a clamped target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from vig.buffer import Cursor, clamp_cursor, last_col

from .words import word_backward, word_end, word_forward


@dataclass(frozen=True, slots=True)
class MotionArgs:
    lines: Sequence[str]
    cursor: Cursor
    count: int = 1
    explicit_count: bool = False
    viewport_height: int = 1
    for_operator: bool = False


Motion = Callable[[MotionArgs], Cursor]


def _half_page(args: MotionArgs) -> int:
    return max(args.viewport_height // 2, 1) * args.count


def line_down(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row + args.count, col)


def line_up(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row - args.count, col)


def char_left(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row, col - args.count)


def char_right(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row, col + args.count)


def half_page_down(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row + _half_page(args), col)


def half_page_up(args: MotionArgs) -> Cursor:
    row, col = args.cursor
    return clamp_cursor(args.lines, row - _half_page(args), col)


def to_top(args: MotionArgs) -> Cursor:
    """``gg``; with a count, jump to that 1-based line instead."""

    row = args.count - 1 if args.explicit_count else 0
    return clamp_cursor(args.lines, row, 0)


def to_bottom(args: MotionArgs) -> Cursor:
    """``G``; with a count, jump to that 1-based line instead."""

    row = args.count - 1 if args.explicit_count else len(args.lines) - 1
    return clamp_cursor(args.lines, row, 0)


def line_start(args: MotionArgs) -> Cursor:
    return clamp_cursor(args.lines, args.cursor[0], 0)


def line_end(args: MotionArgs) -> Cursor:
    """``$``; a count moves ``count - 1`` lines down first."""

    row = args.cursor[0] + args.count - 1
    target_row, _ = clamp_cursor(args.lines, row, 0)
    if not args.lines:
        return (0, 0)
    return (target_row, last_col(args.lines[target_row]))


def _past_end(lines: Sequence[str], position: Cursor) -> bool:
    return bool(lines) and position == (len(lines) - 1, len(lines[-1]))


def _repeat(step: Callable[[Sequence[str], Cursor], Cursor]) -> Motion:
    def motion(args: MotionArgs) -> Cursor:
        position = args.cursor
        for _ in range(args.count):
            moved = step(args.lines, position)
            if moved == position:
                break
            position = moved
        if args.for_operator and _past_end(args.lines, position):
            return position
        return clamp_cursor(args.lines, *position)

    motion.__name__ = step.__name__
    motion.__doc__ = step.__doc__
    return motion


word_forward_motion = _repeat(word_forward)
word_end_motion = _repeat(word_end)
word_backward_motion = _repeat(word_backward)


__all__ = [
    "Motion",
    "MotionArgs",
    "char_left",
    "char_right",
    "half_page_down",
    "half_page_up",
    "line_down",
    "line_end",
    "line_start",
    "line_up",
    "to_bottom",
    "to_top",
    "word_backward_motion",
    "word_end_motion",
    "word_forward_motion",
]
