"""Holder that swaps in freshly built diff snapshots in one assignment."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from vig.runtime import telemetry

from .alignment import build
from .model import AlignedDiff, ChangeTag, DiffStats, FileDiff

EMPTY_DIFF = AlignedDiff()


@dataclass(frozen=True, slots=True)
class DiffSnapshot:
    """Everything the viewer knows about one diff computation."""

    files: Tuple[FileDiff, ...] = ()
    aligned: Mapping[str, AlignedDiff] = field(
        default_factory=lambda: MappingProxyType({})
    )
    branch: str = ""
    base_ref: Optional[str] = None
    stats: DiffStats = DiffStats()
    generation: int = 0

    def for_path(self, path: Optional[str]) -> AlignedDiff:
        if path is None:
            return EMPTY_DIFF
        return self.aligned.get(path, EMPTY_DIFF)

    def file(self, path: Optional[str]) -> Optional[FileDiff]:
        for item in self.files:
            if item.path == path:
                return item
        return None


def compute_stats(aligned: Iterable[AlignedDiff]) -> DiffStats:
    additions = deletions = 0
    for diff in aligned:
        for row in diff.rows:
            if row.left is not None and row.left.tag is ChangeTag.REMOVED:
                deletions += 1
            if row.right is not None and row.right.tag is ChangeTag.ADDED:
                additions += 1
    return DiffStats(additions=additions, deletions=deletions)


class DiffStore:
    """Owns the current ``DiffSnapshot``; readers only ever see whole ones."""

    def __init__(self) -> None:
        self._current = DiffSnapshot()

    @property
    def current(self) -> DiffSnapshot:
        return self._current

    def rebuild(
        self,
        files: Iterable[FileDiff],
        *,
        branch: str = "",
        base_ref: Optional[str] = None,
        generation: int = 0,
    ) -> DiffSnapshot:
        file_tuple = tuple(files)
        with telemetry.span(
            "diff::rebuild",
            component="diff",
            metadata={"files": len(file_tuple), "generation": generation},
        ):
            aligned = {item.path: build(item.hunks) for item in file_tuple}
            snapshot = DiffSnapshot(
                files=file_tuple,
                aligned=MappingProxyType(aligned),
                branch=branch,
                base_ref=base_ref,
                stats=compute_stats(aligned.values()),
                generation=generation,
            )
        self._current = snapshot
        telemetry.record_event(
            "diff.rebuild",
            data={
                "files": len(file_tuple),
                "additions": snapshot.stats.additions,
                "deletions": snapshot.stats.deletions,
                "generation": generation,
            },
        )
        return snapshot


__all__ = ["DiffSnapshot", "DiffStore", "EMPTY_DIFF", "compute_stats"]
