"""Records returned by the version-control collaborator."""

from __future__ import annotations

from dataclasses import dataclass


class GitCommandError(RuntimeError):
    """Raised when a ``git`` invocation exits non-zero or cannot start."""

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(command)} failed: {detail}")


@dataclass(frozen=True, slots=True)
class BranchInfo:
    name: str
    is_current: bool = False


@dataclass(frozen=True, slots=True)
class CommitInfo:
    hash: str
    subject: str
    author: str
    date: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


@dataclass(frozen=True, slots=True)
class ReflogEntry:
    hash: str
    selector: str
    action: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


__all__ = ["BranchInfo", "CommitInfo", "GitCommandError", "ReflogEntry"]
