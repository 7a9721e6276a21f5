"""Normal mode: cursor-addressable, yanks via operator + motion."""

from __future__ import annotations

from typing import Optional

from vig.buffer import clamp_cursor
from vig.motions import EngineView
from vig.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeKind, ModeResult
from .keymap_helpers import (
    key_to_token,
    keymap_flags,
    motion_engine,
    run_action,
)
from .selection import apply_yank, describe_yank


class NormalMode(Mode):
    name = ModeKind.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vig.modes.normal")
        self._engine = motion_engine(context)
        self._flags = keymap_flags(context)

    def on_enter(self, previous: Optional[ModeKind]) -> None:
        context = self.context
        context.pending.clear()
        context.anchor = None
        context.buffer.state.clear_selection()
        lines = context.buffer.lines
        if previous is ModeKind.SCROLL and not context.list_selection:
            row = max(context.cursor[0], context.viewport.offset_y)
            row = min(row, context.viewport.offset_y + context.viewport.height - 1)
            context.move_cursor(clamp_cursor(lines, row, context.cursor[1]))
        else:
            context.move_cursor(clamp_cursor(lines, *context.cursor))

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

        if result.status == "motion" and result.cursor is not None:
            context.move_cursor(result.cursor)
            return ModeResult(consumed=True, status="motion")

        if result.status == "yank" and result.yank is not None:
            value = apply_yank(context, result.yank)
            if result.cursor is not None:
                context.move_cursor(result.cursor)
            return ModeResult(
                consumed=True, status="yank", message=describe_yank(value)
            )

        if result.status == "action" and result.match is not None:
            return run_action(
                context,
                result.match,
                count=result.count,
                explicit=result.explicit_count,
            )

        return ModeResult(consumed=result.consumed, status=result.status)
