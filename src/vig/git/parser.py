"""Parse ``git diff`` unified output into ``FileDiff`` records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from vig.diff import ChangeTag, FileDiff, FileStatus, Hunk, HunkLine

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$")
_GIT_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")

_TAGS = {" ": ChangeTag.UNCHANGED, "-": ChangeTag.REMOVED, "+": ChangeTag.ADDED}


@dataclass(slots=True)
class _HunkDraft:
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header: str
    lines: List[HunkLine] = field(default_factory=list)

    def freeze(self) -> Hunk:
        return Hunk(
            old_start=self.old_start,
            old_count=self.old_count,
            new_start=self.new_start,
            new_count=self.new_count,
            lines=tuple(self.lines),
            header=self.header,
        )


@dataclass(slots=True)
class _FileDraft:
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    status: FileStatus = FileStatus.MODIFIED
    is_binary: bool = False
    hunks: List[_HunkDraft] = field(default_factory=list)

    def freeze(self) -> Optional[FileDiff]:
        path = self.new_path or self.old_path
        if path is None:
            return None
        renamed = self.status is FileStatus.RENAMED
        return FileDiff(
            path=path,
            status=self.status,
            hunks=tuple(hunk.freeze() for hunk in self.hunks),
            is_binary=self.is_binary,
            old_path=self.old_path if renamed else None,
        )


def _strip_prefix(raw: str) -> Optional[str]:
    path = raw.split("\t", 1)[0]
    if path == "/dev/null":
        return None
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def parse_unified_diff(text: str) -> List[FileDiff]:
    """Files in the order git printed them.

    ``\\ No newline at end of file`` markers are dropped; binary files carry
    no hunks.
    """

    files: List[FileDiff] = []
    current: Optional[_FileDraft] = None
    hunk: Optional[_HunkDraft] = None

    def flush() -> None:
        if current is not None:
            frozen = current.freeze()
            if frozen is not None:
                files.append(frozen)

    for line in text.splitlines():
        header = _GIT_HEADER_RE.match(line)
        if header:
            flush()
            current = _FileDraft(old_path=header.group(1), new_path=header.group(2))
            hunk = None
            continue
        if current is None:
            continue

        if hunk is not None:
            tag = _TAGS.get(line[:1]) if line else ChangeTag.UNCHANGED
            if tag is not None:
                hunk.lines.append(HunkLine(tag=tag, text=line[1:]))
                continue
            if line.startswith("\\"):
                continue

        match = _HUNK_RE.match(line)
        if match:
            old_start, old_count, new_start, new_count, _context = match.groups()
            hunk = _HunkDraft(
                old_start=int(old_start),
                old_count=int(old_count) if old_count is not None else 1,
                new_start=int(new_start),
                new_count=int(new_count) if new_count is not None else 1,
                header=line,
            )
            current.hunks.append(hunk)
        elif line.startswith("new file mode"):
            current.status = FileStatus.ADDED
        elif line.startswith("deleted file mode"):
            current.status = FileStatus.DELETED
        elif line.startswith("rename from "):
            current.old_path = line[len("rename from ") :]
            current.status = FileStatus.RENAMED
        elif line.startswith("rename to "):
            current.new_path = line[len("rename to ") :]
            current.status = FileStatus.RENAMED
        elif line.startswith("Binary files ") or line == "GIT binary patch":
            current.is_binary = True
        elif line.startswith("--- "):
            current.old_path = _strip_prefix(line[4:]) or current.old_path
        elif line.startswith("+++ "):
            new_path = _strip_prefix(line[4:])
            if new_path is None:
                current.status = FileStatus.DELETED
            else:
                current.new_path = new_path
    flush()
    return files


def untracked_file_diff(path: str, lines: Iterable[str], *, binary: bool) -> FileDiff:
    """A whole-file addition for a path git does not track yet."""

    if binary:
        return FileDiff(path=path, status=FileStatus.UNTRACKED, is_binary=True)
    body = tuple(HunkLine(tag=ChangeTag.ADDED, text=line) for line in lines)
    if not body:
        return FileDiff(path=path, status=FileStatus.UNTRACKED)
    hunk = Hunk(
        old_start=0,
        old_count=0,
        new_start=1,
        new_count=len(body),
        lines=body,
        header=f"@@ -0,0 +1,{len(body)} @@",
    )
    return FileDiff(path=path, status=FileStatus.UNTRACKED, hunks=(hunk,))


__all__ = ["parse_unified_diff", "untracked_file_diff"]
