"""Remote issue-tracker collaborator backed by the ``gh`` CLI."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from vig.integrations.browser import open_in_browser
from vig.runtime import telemetry

from .types import IssueDetail, IssueSummary, PullRequestDetail, PullRequestSummary

ISSUE_LIST_FIELDS = "number,title,state,author,labels,createdAt,url"
PR_LIST_FIELDS = (
    "number,title,state,author,labels,headRefName,createdAt,reviewDecision,"
    "isDraft,url"
)
ISSUE_VIEW_FIELDS = "number,title,state,author,body,comments,labels,createdAt,url"
PR_VIEW_FIELDS = (
    "number,title,state,author,body,comments,reviews,labels,createdAt,"
    "reviewDecision,statusCheckRollup,additions,deletions,changedFiles,"
    "headRefName,url"
)
DEFAULT_TIMEOUT = 30.0


class GitHubError(RuntimeError):
    """``gh`` is missing, failed, or printed something that is not JSON."""


class GitHubClient:
    def __init__(
        self,
        cwd: str | Path = ".",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        opener: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.cwd = Path(cwd)
        self.timeout = timeout
        self._opener = opener or open_in_browser
        self.logger = telemetry.get_logger("vig.github")

    def _gh(self, args: Sequence[str]) -> str:
        with telemetry.span(
            f"gh::{' '.join(args[:2])}",
            component="github",
            metadata={"args": " ".join(args[:3])},
        ) as handle:
            try:
                proc = subprocess.run(
                    ["gh", *args],
                    cwd=self.cwd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                    timeout=self.timeout,
                )
            except FileNotFoundError as exc:
                handle.fail("gh not found")
                raise GitHubError("gh not found; install the GitHub CLI") from exc
            except (OSError, subprocess.TimeoutExpired) as exc:
                handle.fail(str(exc))
                raise GitHubError(f"gh {' '.join(args[:2])} failed: {exc}") from exc
            if proc.returncode != 0:
                handle.fail(proc.stderr.strip())
                raise GitHubError(proc.stderr.strip() or f"gh exited {proc.returncode}")
        return proc.stdout

    def _json(self, args: Sequence[str]) -> Any:
        output = self._gh(args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise GitHubError(f"JSON parse error: {exc}") from exc

    def auth_status(self) -> str:
        """Raises ``GitHubError`` when gh is missing or not logged in."""

        self._gh(["auth", "status"])
        return "authenticated"

    def list_issues(self, limit: int = 50) -> List[IssueSummary]:
        data = self._json(
            ["issue", "list", "--json", ISSUE_LIST_FIELDS, "--limit", str(limit)]
        )
        return [IssueSummary.from_json(item) for item in data]

    def list_pull_requests(self, limit: int = 50) -> List[PullRequestSummary]:
        data = self._json(
            ["pr", "list", "--json", PR_LIST_FIELDS, "--limit", str(limit)]
        )
        return [PullRequestSummary.from_json(item) for item in data]

    def fetch_issue(self, number: int) -> IssueDetail:
        data = self._json(["issue", "view", str(number), "--json", ISSUE_VIEW_FIELDS])
        return IssueDetail.from_json(data)

    def fetch_pull_request(self, number: int) -> PullRequestDetail:
        data = self._json(["pr", "view", str(number), "--json", PR_VIEW_FIELDS])
        return PullRequestDetail.from_json(data)

    def open_in_browser(self, url: str) -> None:
        self._opener(url)


__all__ = ["GitHubClient", "GitHubError"]
