"""Run collaborator calls off the input thread and post their results."""

from __future__ import annotations

import threading
from typing import Callable, Optional

from . import telemetry
from .events import CollaboratorFailed, Event, EventQueue

Job = Callable[[], Event]


class BackgroundLoader:
    """Runs each job on a daemon thread; results land in the event queue."""

    def __init__(self, events: EventQueue) -> None:
        self.events = events
        self.logger = telemetry.get_logger("vig.loader")

    def submit(self, name: str, job: Job, *, generation: Optional[int] = None) -> None:
        thread = threading.Thread(
            target=self._run,
            args=(name, job, generation),
            name=f"vig-{name}",
            daemon=True,
        )
        thread.start()

    def _run(self, name: str, job: Job, generation: Optional[int]) -> None:
        try:
            with telemetry.span(
                f"loader::{name}",
                component="loader",
                metadata={"job": name, "generation": generation},
            ):
                event = job()
        except Exception as exc:
            telemetry.record_event(
                "collaborator.failure",
                level="error",
                data={"job": name, "error": str(exc)},
            )
            self.events.post(
                CollaboratorFailed(source=name, message=str(exc), generation=generation)
            )
            return
        self.events.post(event)


class InlineLoader(BackgroundLoader):
    """Runs jobs synchronously on the caller's thread."""

    def submit(self, name: str, job: Job, *, generation: Optional[int] = None) -> None:
        self._run(name, job, generation)


__all__ = ["BackgroundLoader", "InlineLoader", "Job"]
