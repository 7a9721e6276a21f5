"""Records decoded from ``gh ... --json`` output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


def _login(data: Mapping[str, Any]) -> str:
    author = data.get("author") or {}
    return str(author.get("login") or "ghost")


def _labels(data: Mapping[str, Any]) -> Tuple[str, ...]:
    return tuple(str(label.get("name", "")) for label in data.get("labels") or ())


@dataclass(frozen=True, slots=True)
class Comment:
    author: str
    body: str
    created_at: str

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Comment":
        return cls(
            author=_login(data),
            body=str(data.get("body") or ""),
            created_at=str(data.get("createdAt") or ""),
        )


@dataclass(frozen=True, slots=True)
class Review:
    author: str
    state: str
    body: str
    submitted_at: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Review":
        return cls(
            author=_login(data),
            state=str(data.get("state") or ""),
            body=str(data.get("body") or ""),
            submitted_at=data.get("submittedAt"),
        )


@dataclass(frozen=True, slots=True)
class StatusCheck:
    name: str
    status: str
    conclusion: Optional[str] = None
    workflow: Optional[str] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "StatusCheck":
        return cls(
            name=str(data.get("name") or data.get("context") or ""),
            status=str(data.get("status") or data.get("state") or ""),
            conclusion=data.get("conclusion"),
            workflow=data.get("workflowName"),
        )


@dataclass(frozen=True, slots=True)
class IssueSummary:
    number: int
    title: str
    state: str
    author: str
    labels: Tuple[str, ...] = ()
    created_at: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "IssueSummary":
        return cls(
            number=int(data["number"]),
            title=str(data.get("title") or ""),
            state=str(data.get("state") or ""),
            author=_login(data),
            labels=_labels(data),
            created_at=str(data.get("createdAt") or ""),
            url=str(data.get("url") or ""),
        )

    def row(self) -> str:
        return f"#{self.number} {self.title}"


@dataclass(frozen=True, slots=True)
class PullRequestSummary:
    number: int
    title: str
    state: str
    author: str
    head_ref: str = ""
    labels: Tuple[str, ...] = ()
    created_at: str = ""
    review_decision: Optional[str] = None
    is_draft: bool = False
    url: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PullRequestSummary":
        return cls(
            number=int(data["number"]),
            title=str(data.get("title") or ""),
            state=str(data.get("state") or ""),
            author=_login(data),
            head_ref=str(data.get("headRefName") or ""),
            labels=_labels(data),
            created_at=str(data.get("createdAt") or ""),
            review_decision=data.get("reviewDecision") or None,
            is_draft=bool(data.get("isDraft")),
            url=str(data.get("url") or ""),
        )

    def row(self) -> str:
        draft = " [draft]" if self.is_draft else ""
        return f"#{self.number} {self.title}{draft}"


@dataclass(frozen=True, slots=True)
class IssueDetail:
    number: int
    title: str
    state: str
    author: str
    body: str
    labels: Tuple[str, ...] = ()
    comments: Tuple[Comment, ...] = ()
    created_at: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "IssueDetail":
        return cls(
            number=int(data["number"]),
            title=str(data.get("title") or ""),
            state=str(data.get("state") or ""),
            author=_login(data),
            body=str(data.get("body") or ""),
            labels=_labels(data),
            comments=tuple(Comment.from_json(c) for c in data.get("comments") or ()),
            created_at=str(data.get("createdAt") or ""),
            url=str(data.get("url") or ""),
        )


@dataclass(frozen=True, slots=True)
class PullRequestDetail:
    number: int
    title: str
    state: str
    author: str
    body: str
    head_ref: str = ""
    labels: Tuple[str, ...] = ()
    comments: Tuple[Comment, ...] = ()
    reviews: Tuple[Review, ...] = ()
    checks: Tuple[StatusCheck, ...] = ()
    review_decision: Optional[str] = None
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0
    created_at: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "PullRequestDetail":
        return cls(
            number=int(data["number"]),
            title=str(data.get("title") or ""),
            state=str(data.get("state") or ""),
            author=_login(data),
            body=str(data.get("body") or ""),
            head_ref=str(data.get("headRefName") or ""),
            labels=_labels(data),
            comments=tuple(Comment.from_json(c) for c in data.get("comments") or ()),
            reviews=tuple(Review.from_json(r) for r in data.get("reviews") or ()),
            checks=tuple(
                StatusCheck.from_json(c) for c in data.get("statusCheckRollup") or ()
            ),
            review_decision=data.get("reviewDecision") or None,
            additions=int(data.get("additions") or 0),
            deletions=int(data.get("deletions") or 0),
            changed_files=int(data.get("changedFiles") or 0),
            created_at=str(data.get("createdAt") or ""),
            url=str(data.get("url") or ""),
        )


__all__ = [
    "Comment",
    "IssueDetail",
    "IssueSummary",
    "PullRequestDetail",
    "PullRequestSummary",
    "Review",
    "StatusCheck",
]
