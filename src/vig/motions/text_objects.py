"""Text objects resolved on the cursor's line.

Every function returns an inclusive ``(start_col, end_col)`` span or ``None``
when nothing suitable encloses or follows the cursor. Delimiters spanning
several lines are not matched.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from .words import BLANK, char_class

Span = Tuple[int, int]
TextObject = Callable[[str, int], Optional[Span]]


def inner_word(line: str, col: int) -> Optional[Span]:
    if not line:
        return None
    col = max(0, min(col, len(line) - 1))
    cls = char_class(line[col])
    start = end = col
    while start > 0 and char_class(line[start - 1]) == cls:
        start -= 1
    while end + 1 < len(line) and char_class(line[end + 1]) == cls:
        end += 1
    return (start, end)


def a_word(line: str, col: int) -> Optional[Span]:
    span = inner_word(line, col)
    if span is None:
        return None
    start, end = span
    if char_class(line[start]) == BLANK:
        if end + 1 < len(line):
            following = inner_word(line, end + 1)
            if following is not None:
                end = following[1]
        return (start, end)
    if end + 1 < len(line) and char_class(line[end + 1]) == BLANK:
        while end + 1 < len(line) and char_class(line[end + 1]) == BLANK:
            end += 1
    else:
        while start > 0 and char_class(line[start - 1]) == BLANK:
            start -= 1
    return (start, end)


def _quote_pair(line: str, col: int, quote: str) -> Optional[Span]:
    positions = [
        index
        for index, ch in enumerate(line)
        if ch == quote and (index == 0 or line[index - 1] != "\\")
    ]
    pairs = list(zip(positions[0::2], positions[1::2]))
    for start, end in pairs:
        if start <= col <= end:
            return (start, end)
    for start, end in pairs:
        if start > col:
            return (start, end)
    return None


def _closing_index(line: str, start: int, opener: str, closer: str) -> Optional[int]:
    depth = 0
    for index in range(start + 1, len(line)):
        ch = line[index]
        if ch == opener:
            depth += 1
        elif ch == closer:
            if depth == 0:
                return index
            depth -= 1
    return None


def _opening_index(line: str, col: int, opener: str, closer: str) -> Optional[int]:
    depth = 0
    for index in range(col, -1, -1):
        ch = line[index]
        if ch == closer and index != col:
            depth += 1
        elif ch == opener:
            if depth == 0:
                return index
            depth -= 1
    return None


def _bracket_pair(line: str, col: int, opener: str, closer: str) -> Optional[Span]:
    if not line:
        return None
    col = max(0, min(col, len(line) - 1))
    if line[col] == closer:
        start = _opening_index(line, col - 1, opener, closer) if col else None
        if start is not None:
            return (start, col)
    else:
        start = _opening_index(line, col, opener, closer)
        if start is not None:
            end = _closing_index(line, start, opener, closer)
            if end is not None:
                return (start, end)
    for index in range(col + 1, len(line)):
        if line[index] == opener:
            end = _closing_index(line, index, opener, closer)
            return (index, end) if end is not None else None
    return None


def _shape(span: Optional[Span], inner: bool) -> Optional[Span]:
    if span is None:
        return None
    start, end = span
    if not inner:
        return span
    if end - start < 2:
        return None
    return (start + 1, end - 1)


def quoted(quote: str, *, inner: bool) -> TextObject:
    def resolve(line: str, col: int) -> Optional[Span]:
        return _shape(_quote_pair(line, col, quote), inner)

    resolve.__name__ = f"{'inner' if inner else 'a'}_quote"
    return resolve


def bracketed(opener: str, closer: str, *, inner: bool) -> TextObject:
    def resolve(line: str, col: int) -> Optional[Span]:
        return _shape(_bracket_pair(line, col, opener, closer), inner)

    resolve.__name__ = f"{'inner' if inner else 'a'}_block"
    return resolve


__all__ = [
    "Span",
    "TextObject",
    "a_word",
    "bracketed",
    "inner_word",
    "quoted",
]
