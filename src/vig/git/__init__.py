"""Version-control collaborator, diff parser, watcher and file tree."""

from .parser import parse_unified_diff, untracked_file_diff
from .repository import EMPTY_TREE, Repository, parse_porcelain
from .tree import FileTree, TreeEntry, build_tree
from .types import BranchInfo, CommitInfo, GitCommandError, ReflogEntry
from .watcher import RepositoryWatcher, build_watch_signature

__all__ = [
    "BranchInfo",
    "CommitInfo",
    "EMPTY_TREE",
    "FileTree",
    "GitCommandError",
    "ReflogEntry",
    "Repository",
    "RepositoryWatcher",
    "TreeEntry",
    "build_tree",
    "build_watch_signature",
    "parse_porcelain",
    "parse_unified_diff",
    "untracked_file_diff",
]
