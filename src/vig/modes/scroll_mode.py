"""Scroll mode: the initial, read-only mode of every pane."""

from __future__ import annotations

from typing import Optional

from vig.motions import EngineView
from vig.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeKind, ModeResult
from .keymap_helpers import (
    key_to_token,
    keymap_flags,
    motion_engine,
    run_action,
)


class ScrollMode(Mode):
    """Accepts scroll and jump keys only; no cursor, no selection."""

    name = ModeKind.SCROLL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vig.modes.scroll")
        self._engine = motion_engine(context)
        self._flags = keymap_flags(context)

    def on_enter(self, previous: Optional[ModeKind]) -> None:
        del previous
        self.context.pending.clear()
        self.context.anchor = None
        self.context.buffer.state.clear_selection()

    def handle_key(self, key: KeyInput) -> ModeResult:
        context = self.context
        result = self._engine.feed(
            self.keyspace,
            context.pending,
            key_to_token(key),
            EngineView(
                lines=context.buffer.lines,
                cursor=context.cursor,
                viewport_height=context.viewport.height,
            ),
            flags=self._flags,
        )
        if result.status == "action" and result.match is not None:
            return run_action(
                context,
                result.match,
                count=result.count,
                explicit=result.explicit_count,
            )
        return ModeResult(consumed=result.consumed, status=result.status)
