"""Discrete events delivered from background producers to the session."""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from . import telemetry


@dataclass(frozen=True, slots=True)
class RefreshRequested:
    reason: str = "manual"


@dataclass(frozen=True, slots=True)
class DiffLoaded:
    generation: int
    files: Tuple[Any, ...]
    branch: str
    base_ref: Optional[str]


@dataclass(frozen=True, slots=True)
class ListingsLoaded:
    generation: int
    branches: Tuple[Any, ...]
    reflog: Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class CommitsLoaded:
    generation: int
    ref: str
    commits: Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class AuthChecked:
    ok: bool
    message: str = ""


@dataclass(frozen=True, slots=True)
class IssuesLoaded:
    issues: Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class PullRequestsLoaded:
    pull_requests: Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class DetailLoaded:
    kind: str
    number: int
    detail: Any


@dataclass(frozen=True, slots=True)
class CollaboratorFailed:
    source: str
    message: str
    generation: Optional[int] = None


Event = (
    RefreshRequested
    | DiffLoaded
    | ListingsLoaded
    | CommitsLoaded
    | AuthChecked
    | IssuesLoaded
    | PullRequestsLoaded
    | DetailLoaded
    | CollaboratorFailed
)


class EventQueue:
    """Thread-safe FIFO consumed from the input thread.

    Only ``RefreshRequested`` is bounded: at most ``maxsize`` of them wait at
    once and further ones are dropped, since one refresh covers them all.
    Loader results and failures are always queued.
    """

    def __init__(self, maxsize: int = 256) -> None:
        self._queue: "queue.Queue[Event]" = queue.Queue()
        self._lock = threading.Lock()
        self._waiting_refreshes = 0
        self.maxsize = maxsize
        self.dropped = 0

    def post(self, event: Event) -> bool:
        if isinstance(event, RefreshRequested):
            with self._lock:
                accepted = self._waiting_refreshes < self.maxsize
                if accepted:
                    self._waiting_refreshes += 1
                else:
                    self.dropped += 1
            if not accepted:
                telemetry.record_event(
                    "events.dropped",
                    level="warning",
                    data={"event": type(event).__name__, "dropped": self.dropped},
                )
                return False
        self._queue.put(event)
        return True

    def drain(self, limit: Optional[int] = None) -> List[Event]:
        events: List[Event] = []
        while limit is None or len(events) < limit:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            if isinstance(event, RefreshRequested):
                with self._lock:
                    self._waiting_refreshes -= 1
            events.append(event)
        return events

    def __len__(self) -> int:
        return self._queue.qsize()


__all__ = [
    "AuthChecked",
    "CollaboratorFailed",
    "CommitsLoaded",
    "DetailLoaded",
    "DiffLoaded",
    "Event",
    "EventQueue",
    "IssuesLoaded",
    "ListingsLoaded",
    "PullRequestsLoaded",
    "RefreshRequested",
]
