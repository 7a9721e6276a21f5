"""Case-insensitive substring search shared by every pane.

Each pane hands the engine its own notion of a row: a plain string, or a
tuple of strings when a row has several fields (the two sides of a diff
row). Matches are recomputed whenever the pattern or the rows change and
the current match index survives a recompute when it is still in range.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from vig.buffer import Cursor
from vig.runtime import telemetry

Row = Union[str, Tuple[Optional[str], ...]]


@dataclass(frozen=True, slots=True)
class SearchMatch:
    row: int
    col_start: int
    col_end: int
    field: int = 0


@dataclass(frozen=True, slots=True)
class SearchOrigin:
    """Scroll and cursor state captured when a search starts."""

    offset_y: int
    cursor: Cursor


def _fields(row: Row) -> Tuple[Optional[str], ...]:
    if isinstance(row, str):
        return (row,)
    return tuple(row)


def find_matches(
    pattern: str, rows: Sequence[Row], *, per_row: bool = True
) -> list[SearchMatch]:
    """Every occurrence of ``pattern`` in ``rows``, in row order.

    With ``per_row`` only the first occurrence of each row is reported, which
    is what list panes want: one match per item.
    """

    needle = pattern.casefold()
    if not needle:
        return []
    matches: list[SearchMatch] = []
    for index, row in enumerate(rows):
        for field, text in enumerate(_fields(row)):
            if not text:
                continue
            haystack = text.casefold()
            start = haystack.find(needle)
            while start != -1:
                matches.append(SearchMatch(index, start, start + len(needle), field))
                if per_row:
                    break
                start = haystack.find(needle, start + len(needle))
            if per_row and matches and matches[-1].row == index:
                break
    return matches


class SearchEngine:
    """start / next / previous / clear over one pane's rows."""

    def __init__(self, *, per_row: bool = True) -> None:
        self.per_row = per_row
        self.pattern = ""
        self.active = False
        self._rows: Tuple[Row, ...] = ()
        self._matches: list[SearchMatch] = []
        self._current: Optional[int] = None
        self._selected = False
        self._origin: Optional[SearchOrigin] = None

    @property
    def matches(self) -> Tuple[SearchMatch, ...]:
        return tuple(self._matches)

    @property
    def current_index(self) -> Optional[int]:
        return self._current

    @property
    def current(self) -> Optional[SearchMatch]:
        if self._current is None:
            return None
        return self._matches[self._current]

    def start(
        self, pattern: str, rows: Sequence[Row], origin: SearchOrigin
    ) -> Tuple[SearchMatch, ...]:
        """Begin or retarget a search. The origin of a running search is kept."""

        with telemetry.span("search::start", component="search"):
            if not self.active:
                self._origin = origin
                self._selected = False
            self.active = True
            self.pattern = pattern
            self._rows = tuple(rows)
            self._matches = find_matches(pattern, self._rows, per_row=self.per_row)
            self._current = None
        telemetry.record_event(
            "search.start",
            level="debug",
            data={"pattern": pattern, "matches": len(self._matches)},
        )
        return self.matches

    def update_rows(self, rows: Sequence[Row]) -> None:
        rows = tuple(rows)
        if rows == self._rows:
            return
        self._rows = rows
        if not self.active:
            return
        self._matches = find_matches(self.pattern, rows, per_row=self.per_row)
        if not self._matches:
            self._current = None
        elif self._current is not None:
            self._current = min(self._current, len(self._matches) - 1)

    def next(self) -> Optional[SearchMatch]:
        if not self._matches:
            return None
        if self._current is None:
            self._current = 0
        else:
            self._current = (self._current + 1) % len(self._matches)
        self._selected = True
        return self._matches[self._current]

    def previous(self) -> Optional[SearchMatch]:
        if not self._matches:
            return None
        if self._current is None:
            self._current = len(self._matches) - 1
        else:
            self._current = (self._current - 1) % len(self._matches)
        self._selected = True
        return self._matches[self._current]

    def clear(self) -> Optional[SearchOrigin]:
        """End the search; returns the origin to restore if nothing was selected."""

        restore = None if self._selected else self._origin
        self.active = False
        self.pattern = ""
        self._matches = []
        self._current = None
        self._selected = False
        self._origin = None
        return restore

    def matches_on_row(self, row: int) -> Tuple[SearchMatch, ...]:
        return tuple(match for match in self._matches if match.row == row)

    def status_label(self) -> str:
        if not self.active:
            return ""
        position = 0 if self._current is None else self._current + 1
        return f"[{position}/{len(self._matches)}]"


__all__ = ["Row", "SearchEngine", "SearchMatch", "SearchOrigin", "find_matches"]
