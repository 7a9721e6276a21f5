"""Fakes and helpers shared by the session and adapter tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from vig.diff import ChangeTag, FileDiff, FileStatus, Hunk, HunkLine
from vig.git import BranchInfo, CommitInfo, GitCommandError, ReflogEntry
from vig.github import (
    GitHubError,
    IssueDetail,
    IssueSummary,
    PullRequestDetail,
    PullRequestSummary,
)
from vig.modes import KeyInput
from vig.runtime import BackgroundLoader, EventQueue
from vig.runtime.loader import Job
from vig.session import ViewerSession


def modified(path: str, *lines: Tuple[str, str], start: int = 1) -> FileDiff:
    tags = {" ": ChangeTag.UNCHANGED, "-": ChangeTag.REMOVED, "+": ChangeTag.ADDED}
    body = tuple(HunkLine(tags[marker], text) for marker, text in lines)
    old = sum(1 for line in body if line.tag is not ChangeTag.ADDED)
    new = sum(1 for line in body if line.tag is not ChangeTag.REMOVED)
    return FileDiff(path, FileStatus.MODIFIED, (Hunk(start, old, start, new, body),))


def commit(sha: str, subject: str) -> CommitInfo:
    return CommitInfo(hash=sha * 40, subject=subject, author="dev", date="2024-05-01")


class FakeRepository:
    """In-memory stand-in for ``vig.git.Repository``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.files: List[FileDiff] = [
            modified("src/app.py", (" ", "import os"), ("-", "old()"), ("+", "new()")),
            modified("README.md", ("+", "More docs")),
        ]
        self.branches = [BranchInfo("main", is_current=True), BranchInfo("topic")]
        self.commits: Dict[str, List[CommitInfo]] = {
            "HEAD": [
                commit("a", "Fix bug"),
                commit("b", "Add feature"),
                commit("c", "FIX typo"),
            ],
            "main": [commit("a", "Fix bug")],
            "topic": [commit("d", "Topic work"), commit("a", "Fix bug")],
        }
        self.reflog = [
            ReflogEntry("a" * 40, "HEAD@{0}", "commit", "Fix bug"),
            ReflogEntry("e" * 40, "HEAD@{1}", "checkout", "moving from topic"),
        ]
        self.current = "main"
        self.diff_calls: List[Optional[str]] = []
        self.delete_calls: List[Tuple[str, bool]] = []
        self.switch_calls: List[str] = []
        self.delete_error: Optional[GitCommandError] = None
        self.switch_error: Optional[GitCommandError] = None

    def diff(
        self, base_ref: Optional[str] = None, path_filter: Optional[str] = None
    ) -> List[FileDiff]:
        self.diff_calls.append(base_ref)
        return list(self.files)

    def branch_name(self) -> str:
        return self.current

    def list_branches(self) -> List[BranchInfo]:
        return list(self.branches)

    def list_commits(self, ref: str = "HEAD", limit: int = 100) -> List[CommitInfo]:
        return list(self.commits.get(ref, []))[:limit]

    def list_reflog(self, limit: int = 50) -> List[ReflogEntry]:
        return list(self.reflog)[:limit]

    def switch(self, branch_name: str) -> None:
        self.switch_calls.append(branch_name)
        if self.switch_error is not None:
            raise self.switch_error
        self.current = branch_name

    def delete_branch(self, branch_name: str, force: bool = False) -> None:
        self.delete_calls.append((branch_name, force))
        if self.delete_error is not None:
            raise self.delete_error
        self.branches = [b for b in self.branches if b.name != branch_name]


class FakeGitHub:
    def __init__(self) -> None:
        self.authenticated = True
        self.opened: List[str] = []
        self.fetched: List[int] = []
        self.issues = [
            IssueSummary(7, "Crash on start", "OPEN", "ana", url="https://gh/7"),
            IssueSummary(9, "Docs typo", "OPEN", "bo", url="https://gh/9"),
        ]
        self.pulls = [
            PullRequestSummary(12, "Add search", "OPEN", "cy", url="https://gh/12")
        ]

    def auth_status(self) -> str:
        if not self.authenticated:
            raise GitHubError("You are not logged into any GitHub hosts")
        return "authenticated"

    def list_issues(self, limit: int = 50) -> List[IssueSummary]:
        return self.issues[:limit]

    def list_pull_requests(self, limit: int = 50) -> List[PullRequestSummary]:
        return self.pulls[:limit]

    def fetch_issue(self, number: int) -> IssueDetail:
        self.fetched.append(number)
        summary = next(item for item in self.issues if item.number == number)
        return IssueDetail(
            number=number,
            title=summary.title,
            state=summary.state,
            author=summary.author,
            body="Steps to reproduce",
            url=summary.url,
        )

    def fetch_pull_request(self, number: int) -> PullRequestDetail:
        return PullRequestDetail(
            number=number,
            title="Add search",
            state="OPEN",
            author="cy",
            body="",
            url=f"https://gh/{number}",
        )

    def open_in_browser(self, url: str) -> None:
        self.opened.append(url)


class ManualLoader(BackgroundLoader):
    """Holds jobs until a test runs them, in whatever order it likes."""

    def __init__(self, events: EventQueue) -> None:
        super().__init__(events)
        self.jobs: List[Tuple[str, Job, Optional[int]]] = []

    def submit(self, name: str, job: Job, *, generation: Optional[int] = None) -> None:
        self.jobs.append((name, job, generation))

    def run(self, name: str, generation: Optional[int] = None) -> None:
        for index, (job_name, job, job_generation) in enumerate(self.jobs):
            wanted = generation is None or generation == job_generation
            if job_name == name and wanted:
                del self.jobs[index]
                self._run(job_name, job, job_generation)
                return
        raise LookupError(f"no pending job {name!r} for generation {generation}")


class EditorCalls:
    def __init__(self) -> None:
        self.commands: List[Sequence[str]] = []
        self.code = 0

    def __call__(self, command: Sequence[str]) -> int:
        self.commands.append(list(command))
        return self.code


def settle(session: ViewerSession) -> None:
    for _ in range(20):
        if not session.process_events():
            return
    raise AssertionError("event queue never drained")


def press(session: ViewerSession, key: str, *modifiers: str) -> bool:
    text = key if len(key) == 1 and not modifiers else None
    return session.handle_key(KeyInput(key=key, modifiers=modifiers, text=text))


def type_text(session: ViewerSession, text: str) -> None:
    for char in text:
        press(session, char)
