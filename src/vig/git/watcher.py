"""Poll-based repository watcher feeding ``RefreshRequested`` events.

The signature is a blake2b digest over the git control files, the porcelain
status output, and the stat of every changed path. A changed digest posts
one refresh event; the session treats refresh as idempotent, so a full queue
simply drops it.
"""

from __future__ import annotations

import hashlib
import threading
from pathlib import Path
from typing import Optional, Protocol

from vig.runtime import telemetry
from vig.runtime.events import EventQueue, RefreshRequested

from .types import GitCommandError

CONTROL_FILES = ("index", "HEAD", "packed-refs", "MERGE_HEAD")


class WatchedRepository(Protocol):
    root: Path
    git_dir: Path

    def run(self, *args: str) -> str: ...


def _update_digest(digest, token: str) -> None:
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _stat_token(path: Path) -> str:
    try:
        st = path.stat()
    except FileNotFoundError:
        return "missing"
    except OSError:
        return "error"
    return f"{st.st_mtime_ns}:{st.st_size}"


def _head_ref(git_dir: Path) -> str:
    try:
        head = (git_dir / "HEAD").read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""
    head = head.strip()
    return head[5:].strip() if head.startswith("ref: ") else ""


def build_watch_signature(repository: WatchedRepository) -> str:
    digest = hashlib.blake2b(digest_size=20)
    git_dir = repository.git_dir
    for name in CONTROL_FILES:
        _update_digest(digest, f"{name}:{_stat_token(git_dir / name)}")
    ref = _head_ref(git_dir)
    _update_digest(digest, f"head_ref:{ref}")
    if ref:
        _update_digest(digest, f"ref_file:{_stat_token(git_dir / ref)}")

    try:
        status = repository.run("status", "--porcelain", "-z")
    except GitCommandError as exc:
        _update_digest(digest, f"status_error:{exc.returncode}")
        return digest.hexdigest()
    _update_digest(digest, status)
    for record in status.split("\0"):
        if len(record) > 3 and record[2] == " ":
            path = record[3:]
            _update_digest(digest, f"{path}:{_stat_token(repository.root / path)}")
    return digest.hexdigest()


class RepositoryWatcher:
    """Daemon thread comparing signatures every ``interval_ms``."""

    def __init__(
        self,
        repository: WatchedRepository,
        events: EventQueue,
        *,
        interval_ms: int = 500,
    ) -> None:
        self.repository = repository
        self.events = events
        self.interval = max(interval_ms, 50) / 1000.0
        self.logger = telemetry.get_logger("vig.watcher")
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._signature: Optional[str] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._signature = build_watch_signature(self.repository)
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="vig-watcher", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
        self._thread = None

    def poll(self) -> bool:
        """Compare once; post a refresh and return True when anything moved."""

        signature = build_watch_signature(self.repository)
        if signature == self._signature:
            return False
        self._signature = signature
        telemetry.record_event("refresh.request", data={"reason": "watch"})
        self.events.post(RefreshRequested(reason="watch"))
        return True

    def poll_safely(self) -> bool:
        """``poll`` for the watch thread: a failure is logged, never raised."""

        try:
            return self.poll()
        except Exception as exc:
            telemetry.record_event(
                "collaborator.failure",
                level="warning",
                data={"job": "watch", "error": f"{type(exc).__name__}: {exc}"},
            )
            return False

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll_safely()


__all__ = ["RepositoryWatcher", "build_watch_signature"]
