"""Group changed paths into a collapsible directory tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from vig.diff import FileStatus

INDENT = "  "


@dataclass(frozen=True, slots=True)
class TreeEntry:
    path: str
    label: str
    depth: int
    status: Optional[FileStatus] = None
    collapsed: bool = False

    @property
    def is_dir(self) -> bool:
        return self.status is None

    def render(self) -> str:
        indent = INDENT * self.depth
        if self.is_dir:
            marker = "▸" if self.collapsed else "▾"
            return f"{indent}{marker} {self.label}/"
        assert self.status is not None
        return f"{indent}{self.status.icon} {self.label}"


@dataclass(slots=True)
class _Node:
    dirs: Dict[str, "_Node"] = field(default_factory=dict)
    files: Dict[str, FileStatus] = field(default_factory=dict)


def build_tree(
    files: Iterable[Tuple[str, FileStatus]], collapsed: Set[str] = frozenset()
) -> List[TreeEntry]:
    """Directories first, then files, each sorted by name.

    A directory whose only content is one file is folded into that file's
    row (``docs/README.md``) instead of getting a row of its own.
    """

    root = _Node()
    for path, status in files:
        *parents, name = path.split("/")
        node = root
        for part in parents:
            node = node.dirs.setdefault(part, _Node())
        node.files[name] = status

    entries: List[TreeEntry] = []
    _walk(root, "", 0, collapsed, entries)
    return entries


def _walk(
    node: _Node, prefix: str, depth: int, collapsed: Set[str], out: List[TreeEntry]
) -> None:
    for name in sorted(node.dirs):
        child = node.dirs[name]
        path = f"{prefix}{name}"
        if not child.dirs and len(child.files) == 1:
            file_name, status = next(iter(child.files.items()))
            out.append(
                TreeEntry(
                    path=f"{path}/{file_name}",
                    label=f"{name}/{file_name}",
                    depth=depth,
                    status=status,
                )
            )
            continue
        folded = path in collapsed
        out.append(TreeEntry(path=path, label=name, depth=depth, collapsed=folded))
        if not folded:
            _walk(child, f"{path}/", depth + 1, collapsed, out)
    for name in sorted(node.files):
        out.append(
            TreeEntry(
                path=f"{prefix}{name}",
                label=name,
                depth=depth,
                status=node.files[name],
            )
        )


class FileTree:
    """Changed files plus the set of collapsed directories."""

    def __init__(self) -> None:
        self._files: Tuple[Tuple[str, FileStatus], ...] = ()
        self._collapsed: Set[str] = set()
        self.entries: List[TreeEntry] = []

    def set_files(self, files: Iterable[Tuple[str, FileStatus]]) -> None:
        self._files = tuple(files)
        self._rebuild()

    def toggle(self, path: str) -> bool:
        entry = self.find(path)
        if entry is None or not entry.is_dir:
            return False
        if path in self._collapsed:
            self._collapsed.discard(path)
        else:
            self._collapsed.add(path)
        self._rebuild()
        return True

    def find(self, path: str) -> Optional[TreeEntry]:
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None

    def index_of(self, path: Optional[str]) -> Optional[int]:
        for index, entry in enumerate(self.entries):
            if entry.path == path:
                return index
        return None

    def lines(self) -> List[str]:
        return [entry.render() for entry in self.entries]

    def _rebuild(self) -> None:
        self.entries = build_tree(self._files, self._collapsed)


__all__ = ["FileTree", "TreeEntry", "build_tree"]
