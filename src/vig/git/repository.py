"""Version-control collaborator backed by the ``git`` binary.

Every call is a ``git -C <root> ...`` subprocess. Read operations return
plain records; the two mutating operations (``switch`` and ``delete_branch``)
raise ``GitCommandError`` with git's own stderr when git refuses.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from vig.diff import FileDiff, FileStatus
from vig.runtime import telemetry

from .parser import parse_unified_diff, untracked_file_diff
from .types import BranchInfo, CommitInfo, GitCommandError, ReflogEntry

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
BINARY_SNIFF_BYTES = 8000
DEFAULT_TIMEOUT = 30.0

_PORCELAIN_STATUS = {
    "A": FileStatus.ADDED,
    "D": FileStatus.DELETED,
    "M": FileStatus.MODIFIED,
    "R": FileStatus.RENAMED,
    "C": FileStatus.ADDED,
    "T": FileStatus.MODIFIED,
    "U": FileStatus.MODIFIED,
}


class Repository:
    def __init__(self, root: str | Path, *, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout
        self.logger = telemetry.get_logger("vig.git")
        toplevel = self._run_at(Path(root), ("rev-parse", "--show-toplevel"))
        self.root = Path(toplevel.strip()).resolve()
        git_dir = Path(self.run("rev-parse", "--git-dir").strip())
        if not git_dir.is_absolute():
            git_dir = self.root / git_dir
        self.git_dir = git_dir.resolve()

    def run(self, *args: str, ok_codes: Sequence[int] = (0,)) -> str:
        return self._run_at(self.root, args, ok_codes=ok_codes)

    def _run_at(
        self, root: Path, args: Sequence[str], *, ok_codes: Sequence[int] = (0,)
    ) -> str:
        command = tuple(args)
        verb = next(
            (arg for arg in command if not arg.startswith("-") and "=" not in arg),
            command[0],
        )
        with telemetry.span(
            f"git::{verb}",
            component="git",
            metadata={"args": " ".join(command[1:4])},
        ) as handle:
            try:
                proc = subprocess.run(
                    ["git", "-C", str(root), *command],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                    timeout=self.timeout,
                )
            except (OSError, subprocess.TimeoutExpired) as exc:
                handle.fail(str(exc))
                raise GitCommandError(command, -1, str(exc)) from exc
            if proc.returncode not in ok_codes:
                handle.fail(proc.stderr.strip())
                raise GitCommandError(command, proc.returncode, proc.stderr)
        return proc.stdout

    def has_commits(self) -> bool:
        try:
            self.run("rev-parse", "--verify", "--quiet", "HEAD")
        except GitCommandError:
            return False
        return True

    def branch_name(self) -> str:
        """Current branch, or the short hash when HEAD is detached."""

        try:
            name = self.run("symbolic-ref", "--quiet", "--short", "HEAD").strip()
        except GitCommandError:
            name = ""
        if name:
            return name
        try:
            return self.run("rev-parse", "--short=7", "HEAD").strip()
        except GitCommandError:
            return "HEAD"

    def diff(
        self, base_ref: Optional[str] = None, path_filter: Optional[str] = None
    ) -> List[FileDiff]:
        """Working tree (with index) against ``base_ref`` or HEAD."""

        base = base_ref or ("HEAD" if self.has_commits() else EMPTY_TREE)
        args = [
            "-c",
            "core.quotePath=false",
            "diff",
            "--no-color",
            "--no-ext-diff",
            "-M",
            "-U3",
            base,
        ]
        if path_filter:
            args.extend(["--", path_filter])
        files = parse_unified_diff(self.run(*args))
        files.extend(self._untracked(path_filter))
        return files

    def _untracked(self, path_filter: Optional[str]) -> List[FileDiff]:
        args = ["ls-files", "--others", "--exclude-standard", "-z"]
        if path_filter:
            args.extend(["--", path_filter])
        output = self.run(*args)
        files: List[FileDiff] = []
        for path in sorted(filter(None, output.split("\0"))):
            try:
                data = (self.root / path).read_bytes()
            except OSError:
                continue
            binary = b"\0" in data[:BINARY_SNIFF_BYTES]
            text = "" if binary else data.decode("utf-8", errors="replace")
            files.append(untracked_file_diff(path, text.splitlines(), binary=binary))
        return files

    def list_branches(self) -> List[BranchInfo]:
        output = self.run(
            "for-each-ref", "--format=%(HEAD)%00%(refname:short)", "refs/heads"
        )
        branches = []
        for line in output.splitlines():
            marker, _, name = line.partition("\0")
            if name:
                branches.append(BranchInfo(name=name, is_current=marker == "*"))
        branches.sort(key=lambda branch: (not branch.is_current, branch.name))
        return branches

    def list_commits(self, ref: str = "HEAD", limit: int = 100) -> List[CommitInfo]:
        if not self.has_commits():
            return []
        output = self.run(
            "log",
            "--format=%H%x00%an%x00%ad%x00%s",
            "--date=short",
            f"--max-count={limit}",
            ref,
            "--",
        )
        commits = []
        for line in output.splitlines():
            parts = line.split("\0")
            if len(parts) != 4:
                continue
            commit_hash, author, date, subject = parts
            commits.append(
                CommitInfo(hash=commit_hash, subject=subject, author=author, date=date)
            )
        return commits

    def list_reflog(self, limit: int = 50) -> List[ReflogEntry]:
        if not self.has_commits():
            return []
        output = self.run(
            "reflog", "show", "--format=%H%x00%gs", f"--max-count={limit}", "HEAD"
        )
        entries = []
        for index, line in enumerate(output.splitlines()):
            commit_hash, _, raw = line.partition("\0")
            action, sep, message = raw.partition(": ")
            if not sep:
                action = message = raw
            entries.append(
                ReflogEntry(
                    hash=commit_hash,
                    selector=f"HEAD@{{{index}}}",
                    action=action,
                    message=message,
                )
            )
        return entries

    def switch(self, branch_name: str) -> None:
        self.run("switch", branch_name)
        telemetry.record_event("git.switch", data={"branch": branch_name})

    def delete_branch(self, branch_name: str, force: bool = False) -> None:
        """``git branch -d``; git refuses unmerged branches unless forced."""

        self.run("branch", "-D" if force else "-d", branch_name)
        telemetry.record_event(
            "git.delete_branch", data={"branch": branch_name, "force": force}
        )

    def status(self) -> Dict[str, FileStatus]:
        output = self.run("-c", "core.quotePath=false", "status", "--porcelain", "-z")
        return parse_porcelain(output)


def parse_porcelain(output: str) -> Dict[str, FileStatus]:
    """Map ``git status --porcelain -z`` records to a status per path."""

    result: Dict[str, FileStatus] = {}
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue
        code, path = token[:2], token[3:]
        if code == "??":
            result[path] = FileStatus.UNTRACKED
            continue
        if "R" in code or "C" in code:
            # -z appends the original path as its own token
            index += 1
        letter = "R" if "R" in code else (code[1] if code[1] != " " else code[0])
        result[path] = _PORCELAIN_STATUS.get(letter, FileStatus.MODIFIED)
    return result


__all__ = ["EMPTY_TREE", "Repository", "parse_porcelain"]
