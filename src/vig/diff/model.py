"""Value types shared by the diff parser, alignment model and renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ChangeTag(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class DiffSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def label(self) -> str:
        return self.value.upper()

    def other(self) -> "DiffSide":
        return DiffSide.RIGHT if self is DiffSide.LEFT else DiffSide.LEFT


class FileStatus(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    UNTRACKED = "untracked"

    @property
    def icon(self) -> str:
        return _STATUS_ICONS[self]


_STATUS_ICONS = {
    FileStatus.ADDED: "A",
    FileStatus.DELETED: "D",
    FileStatus.MODIFIED: "M",
    FileStatus.RENAMED: "R",
    FileStatus.UNTRACKED: "?",
}


@dataclass(frozen=True, slots=True)
class HunkLine:
    """One line of a unified hunk as reported by the collaborator."""

    tag: ChangeTag
    text: str
    old_no: Optional[int] = None
    new_no: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Hunk:
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: Tuple[HunkLine, ...] = ()
    header: str = ""


@dataclass(frozen=True, slots=True)
class DiffLine:
    """One side of a rendered row; ``line_no`` is 1-based."""

    tag: ChangeTag
    text: str
    line_no: Optional[int] = None


@dataclass(frozen=True, slots=True)
class AlignedRow:
    """A left/right pair; ``None`` marks a blank placeholder on that side."""

    left: Optional[DiffLine]
    right: Optional[DiffLine]

    def side(self, side: DiffSide) -> Optional[DiffLine]:
        return self.left if side is DiffSide.LEFT else self.right

    def text(self, side: DiffSide) -> str:
        line = self.side(side)
        return line.text if line is not None else ""

    @property
    def tag(self) -> ChangeTag:
        if self.left is not None and self.left.tag is ChangeTag.REMOVED:
            return ChangeTag.REMOVED
        if self.right is not None and self.right.tag is ChangeTag.ADDED:
            return ChangeTag.ADDED
        return ChangeTag.UNCHANGED


@dataclass(frozen=True, slots=True)
class AlignedDiff:
    """Side-by-side rows for one file; both sides always have equal length."""

    rows: Tuple[AlignedRow, ...] = ()
    hunk_starts: Tuple[int, ...] = ()
    headers: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def side_lines(self, side: DiffSide) -> Tuple[str, ...]:
        return tuple(row.text(side) for row in self.rows)

    def line_number(self, row: int, side: DiffSide) -> Optional[int]:
        if not 0 <= row < len(self.rows):
            return None
        line = self.rows[row].side(side)
        return line.line_no if line is not None else None

    def hunk_index(self, row: int) -> Optional[int]:
        index = None
        for position, start in enumerate(self.hunk_starts):
            if start > row:
                break
            index = position
        return index

    def window(self, start: int, height: int) -> Tuple[AlignedRow, ...]:
        start = max(0, start)
        return self.rows[start : start + max(0, height)]

    @property
    def max_width(self) -> int:
        return max(
            (
                max(len(row.text(DiffSide.LEFT)), len(row.text(DiffSide.RIGHT)))
                for row in self.rows
            ),
            default=0,
        )


@dataclass(frozen=True, slots=True)
class FileDiff:
    path: str
    status: FileStatus
    hunks: Tuple[Hunk, ...] = ()
    is_binary: bool = False
    old_path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DiffStats:
    additions: int = 0
    deletions: int = 0


__all__ = [
    "AlignedDiff",
    "AlignedRow",
    "ChangeTag",
    "DiffLine",
    "DiffSide",
    "DiffStats",
    "FileDiff",
    "FileStatus",
    "Hunk",
    "HunkLine",
]
