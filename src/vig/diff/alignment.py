"""Turn unified hunks into side-by-side aligned rows."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .model import AlignedDiff, AlignedRow, ChangeTag, DiffLine, Hunk, HunkLine


def _numbered(hunk: Hunk) -> List[HunkLine]:
    """Fill in missing line numbers from the hunk's start positions."""

    old_no, new_no = hunk.old_start, hunk.new_start
    lines: List[HunkLine] = []
    for line in hunk.lines:
        old: Optional[int] = None
        new: Optional[int] = None
        if line.tag is not ChangeTag.ADDED:
            old = line.old_no if line.old_no is not None else old_no
            old_no = old + 1
        if line.tag is not ChangeTag.REMOVED:
            new = line.new_no if line.new_no is not None else new_no
            new_no = new + 1
        lines.append(HunkLine(tag=line.tag, text=line.text, old_no=old, new_no=new))
    return lines


def align_hunk(lines: Sequence[HunkLine]) -> List[AlignedRow]:
    """Pair a removed run with the added run that follows it, row for row.

    The block is ``max(removed, added)`` rows tall; the shorter side is padded
    with blank placeholders at the bottom.
    """

    rows: List[AlignedRow] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if line.tag is ChangeTag.UNCHANGED:
            rows.append(
                AlignedRow(
                    left=DiffLine(ChangeTag.UNCHANGED, line.text, line.old_no),
                    right=DiffLine(ChangeTag.UNCHANGED, line.text, line.new_no),
                )
            )
            index += 1
            continue

        removed: List[HunkLine] = []
        while index < len(lines) and lines[index].tag is ChangeTag.REMOVED:
            removed.append(lines[index])
            index += 1
        added: List[HunkLine] = []
        while index < len(lines) and lines[index].tag is ChangeTag.ADDED:
            added.append(lines[index])
            index += 1

        for offset in range(max(len(removed), len(added))):
            old = removed[offset] if offset < len(removed) else None
            new = added[offset] if offset < len(added) else None
            rows.append(
                AlignedRow(
                    left=(
                        DiffLine(ChangeTag.REMOVED, old.text, old.old_no)
                        if old is not None
                        else None
                    ),
                    right=(
                        DiffLine(ChangeTag.ADDED, new.text, new.new_no)
                        if new is not None
                        else None
                    ),
                )
            )
    return rows


def build(hunks: Iterable[Hunk]) -> AlignedDiff:
    """Build the aligned rows for every hunk of one file, in file order."""

    rows: List[AlignedRow] = []
    starts: List[int] = []
    headers: List[str] = []
    for hunk in hunks:
        starts.append(len(rows))
        headers.append(hunk.header)
        rows.extend(align_hunk(_numbered(hunk)))
    return AlignedDiff(
        rows=tuple(rows), hunk_starts=tuple(starts), headers=tuple(headers)
    )


__all__ = ["align_hunk", "build"]
