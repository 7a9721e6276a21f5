"""Cached GitHub listings and details plus the detail text layout."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from .types import IssueDetail, IssueSummary, PullRequestDetail, PullRequestSummary

Detail = Union[IssueDetail, PullRequestDetail]
DetailKey = Tuple[str, int]

ISSUE = "issue"
PULL_REQUEST = "pr"


class GitHubState:
    """Lists, per-number detail cache, loading flags, and the last error."""

    def __init__(self) -> None:
        self.auth_ok: Optional[bool] = None
        self.issues: Tuple[IssueSummary, ...] = ()
        self.pull_requests: Tuple[PullRequestSummary, ...] = ()
        self.issues_loading = False
        self.prs_loading = False
        self.detail_loading: Optional[DetailKey] = None
        self.current: Optional[DetailKey] = None
        self.error: Optional[str] = None
        self.initialized = False
        self._details: Dict[DetailKey, Detail] = {}

    def begin_lists(self) -> None:
        self.initialized = True
        self.issues_loading = True
        self.prs_loading = True
        self.error = None

    def clear(self) -> None:
        """Forget everything fetched so the next visit reloads it."""

        self._details.clear()
        self.issues = ()
        self.pull_requests = ()
        self.current = None
        self.detail_loading = None
        self.initialized = False

    def set_issues(self, issues: Tuple[IssueSummary, ...]) -> None:
        self.issues = tuple(issues)
        self.issues_loading = False

    def set_pull_requests(self, pull_requests: Tuple[PullRequestSummary, ...]) -> None:
        self.pull_requests = tuple(pull_requests)
        self.prs_loading = False

    def cached(self, kind: str, number: int) -> Optional[Detail]:
        return self._details.get((kind, number))

    def store_detail(self, kind: str, number: int, detail: Detail) -> None:
        self._details[(kind, number)] = detail
        if self.detail_loading == (kind, number):
            self.detail_loading = None

    def fail(self, message: str) -> None:
        self.error = message
        self.issues_loading = False
        self.prs_loading = False
        self.detail_loading = None

    def current_detail(self) -> Optional[Detail]:
        if self.current is None:
            return None
        return self._details.get(self.current)

    def detail_lines(self) -> List[str]:
        if self.current is None:
            return ["Select an issue or pull request and press Enter."]
        if self.detail_loading == self.current:
            kind, number = self.current
            return [f"Loading {kind} #{number}..."]
        detail = self.current_detail()
        if detail is None:
            return [self.error or "No detail loaded."]
        return format_detail(detail)


def _block(text: str) -> List[str]:
    return text.splitlines() or ["(empty)"]


def format_detail(detail: Detail) -> List[str]:
    lines = [
        f"#{detail.number} {detail.title}",
        f"State: {detail.state}    Author: @{detail.author}",
    ]
    if detail.labels:
        lines.append("Labels: " + ", ".join(detail.labels))
    if isinstance(detail, PullRequestDetail):
        lines.append(f"Branch: {detail.head_ref}")
        lines.append(f"Review: {detail.review_decision or 'none'}")
        lines.append(
            f"Changes: +{detail.additions} -{detail.deletions} "
            f"in {detail.changed_files} files"
        )
    lines.append("")
    lines.extend(_block(detail.body))

    if isinstance(detail, PullRequestDetail):
        if detail.checks:
            lines.extend(["", "Checks:"])
            for check in detail.checks:
                outcome = check.conclusion or check.status
                lines.append(f"  {outcome:<10} {check.name}")
        if detail.reviews:
            lines.extend(["", "Reviews:"])
            for review in detail.reviews:
                lines.append(f"  @{review.author} {review.state}")
                lines.extend(f"    {line}" for line in review.body.splitlines())

    if detail.comments:
        lines.extend(["", f"Comments ({len(detail.comments)}):"])
        for comment in detail.comments:
            lines.append(f"  @{comment.author} {comment.created_at[:10]}")
            lines.extend(f"    {line}" for line in comment.body.splitlines())
    return lines


__all__ = ["Detail", "GitHubState", "ISSUE", "PULL_REQUEST", "format_detail"]
