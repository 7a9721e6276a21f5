"""Diff alignment model: hunks in, side-by-side rows out."""

from .alignment import align_hunk, build
from .model import (
    AlignedDiff,
    AlignedRow,
    ChangeTag,
    DiffLine,
    DiffSide,
    DiffStats,
    FileDiff,
    FileStatus,
    Hunk,
    HunkLine,
)
from .store import EMPTY_DIFF, DiffSnapshot, DiffStore, compute_stats

__all__ = [
    "AlignedDiff",
    "AlignedRow",
    "ChangeTag",
    "DiffLine",
    "DiffSide",
    "DiffSnapshot",
    "DiffStats",
    "DiffStore",
    "EMPTY_DIFF",
    "FileDiff",
    "FileStatus",
    "Hunk",
    "HunkLine",
    "align_hunk",
    "build",
    "compute_stats",
]
