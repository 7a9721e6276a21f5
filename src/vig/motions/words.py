"""Word classification and word motions over a list of lines.

A word is a maximal run of alphanumeric-or-underscore characters, or a
maximal run of other non-whitespace characters. Whitespace separates words
and an empty line counts as a word of its own for ``w`` and ``b``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

Position = Tuple[int, int]

BLANK, WORD, PUNCT = 0, 1, 2


def char_class(ch: str) -> int:
    if ch.isspace():
        return BLANK
    if ch.isalnum() or ch == "_":
        return WORD
    return PUNCT


def _class_at(lines: Sequence[str], pos: Position) -> int:
    row, col = pos
    line = lines[row]
    if col >= len(line):
        return BLANK
    return char_class(line[col])


def _forward(lines: Sequence[str], pos: Position) -> Position | None:
    """Next position, stepping onto the following line's start at line end."""

    row, col = pos
    if col + 1 < len(lines[row]):
        return (row, col + 1)
    if row + 1 < len(lines):
        return (row + 1, 0)
    return None


def _backward(lines: Sequence[str], pos: Position) -> Position | None:
    row, col = pos
    if col > 0:
        return (row, min(col - 1, max(len(lines[row]) - 1, 0)))
    if row > 0:
        return (row - 1, max(len(lines[row - 1]) - 1, 0))
    return None


def _is_empty_line(lines: Sequence[str], pos: Position) -> bool:
    return not lines[pos[0]]


def _last_position(lines: Sequence[str]) -> Position:
    row = len(lines) - 1
    return (row, max(len(lines[row]) - 1, 0))


def word_forward(lines: Sequence[str], pos: Position) -> Position:
    """``w``: start of the next word, crossing lines.

    With no later word the result is one column past the last line's end,
    so an exclusive operator still covers the final character.
    """

    if not lines:
        return (0, 0)
    start_row = pos[0]
    cls = _class_at(lines, pos)
    current: Position | None = pos
    if cls != BLANK:
        while current is not None and current[0] == start_row:
            if _class_at(lines, current) != cls:
                break
            current = _forward(lines, current)
    while current is not None:
        if current[0] != start_row and _is_empty_line(lines, current):
            return current
        if _class_at(lines, current) != BLANK:
            return current
        current = _forward(lines, current)
    return (len(lines) - 1, len(lines[-1]))


def word_end(lines: Sequence[str], pos: Position) -> Position:
    """``e``: end of the current or next word; empty lines are skipped."""

    if not lines:
        return (0, 0)
    current = _forward(lines, pos)
    while current is not None and _class_at(lines, current) == BLANK:
        current = _forward(lines, current)
    if current is None:
        return _last_position(lines)
    cls = _class_at(lines, current)
    row = current[0]
    line = lines[row]
    col = current[1]
    while col + 1 < len(line) and char_class(line[col + 1]) == cls:
        col += 1
    return (row, col)


def word_backward(lines: Sequence[str], pos: Position) -> Position:
    """``b``: start of the current or previous word, crossing lines."""

    if not lines:
        return (0, 0)
    start_row = pos[0]
    current = _backward(lines, pos)
    while current is not None:
        if current[0] != start_row and _is_empty_line(lines, current):
            return current
        if _class_at(lines, current) != BLANK:
            break
        current = _backward(lines, current)
    if current is None:
        return (0, 0)
    cls = _class_at(lines, current)
    row, col = current
    line = lines[row]
    while col > 0 and char_class(line[col - 1]) == cls:
        col -= 1
    return (row, col)


__all__ = [
    "BLANK",
    "PUNCT",
    "WORD",
    "char_class",
    "word_backward",
    "word_end",
    "word_forward",
]
