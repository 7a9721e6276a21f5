"""Remote issue-tracker collaborator (``gh`` CLI) and its cached state."""

from .client import GitHubClient, GitHubError
from .state import ISSUE, PULL_REQUEST, Detail, GitHubState, format_detail
from .types import (
    Comment,
    IssueDetail,
    IssueSummary,
    PullRequestDetail,
    PullRequestSummary,
    Review,
    StatusCheck,
)

__all__ = [
    "Comment",
    "Detail",
    "GitHubClient",
    "GitHubError",
    "GitHubState",
    "ISSUE",
    "IssueDetail",
    "IssueSummary",
    "PULL_REQUEST",
    "PullRequestDetail",
    "PullRequestSummary",
    "Review",
    "StatusCheck",
    "format_detail",
]
