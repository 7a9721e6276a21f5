"""Bridges Textual key events and timers to a ``ViewerSession``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from vig.modes import KeyInput
from vig.runtime import telemetry
from vig.session import ViewerSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    refresh: Callable[[], None]
    quit: Callable[[], None] = _noop


class TextualViewerAdapter:
    """Feeds keys and background events into the session, then repaints."""

    def __init__(self, session: ViewerSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self.logger = telemetry.get_logger("vig.adapters.textual")

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        consumed = self.session.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._log_state("key", key=key, mods=normalized_modifiers, consumed=consumed)
        self._after_step()
        return consumed

    def process_events(self) -> int:
        """Apply queued background results; repaint only when any arrived."""

        handled = self.session.process_events()
        if handled:
            self._log_state("events", handled=handled)
            self._after_step()
        return handled

    def _after_step(self) -> None:
        if self.session.should_quit:
            self.hooks.quit()
            return
        self.hooks.refresh()

    def _log_state(self, name: str, **fields: object) -> None:
        data = self._state_metadata()
        data.update({k: v for k, v in fields.items() if v is not None})
        telemetry.record_event(f"adapter.{name}", level="debug", data=data)

    def _state_metadata(self) -> Dict[str, object]:
        snapshot = self.session.snapshot()
        return {
            "view": snapshot.view.value,
            "focus": snapshot.focus.value,
            "mode": snapshot.mode.value,
            "cursor": self.session.pane.cursor,
            "overlay": snapshot.overlay.value,
            "pending": snapshot.pending,
        }


__all__ = ["TextualUIHooks", "TextualViewerAdapter"]
