"""Character-wise and line-wise visual modes."""

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
from .selection import apply_yank, describe_yank, selection_range


class VisualMode(Mode):
    """Selection from a fixed anchor to the moving cursor.

    The anchor is set on entry from Normal and survives a switch between the
    two visual kinds, so ``v`` then ``V`` keeps the same starting point.
    """

    name = ModeKind.VISUAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"vig.modes.{self.name.value}")
        self._engine = motion_engine(context)
        self._flags = keymap_flags(context)

    def on_enter(self, previous: Optional[ModeKind]) -> None:
        context = self.context
        context.pending.clear()
        if previous is None or not previous.is_visual or context.anchor is None:
            context.anchor = context.cursor
        self._flags["visual_active"] = True
        self._sync_selection()

    def on_exit(self, next_mode: Optional[ModeKind]) -> None:
        context = self.context
        context.pending.clear()
        if next_mode is None or not next_mode.is_visual:
            context.anchor = None
            context.buffer.state.clear_selection()
            self._flags["visual_active"] = False

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
                visual=True,
            ),
            flags=self._flags,
        )

        if result.status == "motion" and result.cursor is not None:
            context.move_cursor(result.cursor)
            self._sync_selection()
            return ModeResult(consumed=True, status="motion")

        if result.status == "select" and result.select is not None:
            start, end = result.select
            context.anchor = start
            context.move_cursor(end)
            self._sync_selection()
            return ModeResult(consumed=True, status="select")

        if result.status == "operator":
            return self._yank_selection()

        if result.status == "action" and result.match is not None:
            outcome = run_action(
                context,
                result.match,
                count=result.count,
                explicit=result.explicit_count,
            )
            self._sync_selection()
            return outcome

        return ModeResult(consumed=result.consumed, status=result.status)

    def _yank_selection(self) -> ModeResult:
        context = self.context
        span = selection_range(context)
        if span is None:
            return ModeResult(consumed=True, switch_to=ModeKind.NORMAL, status="noop")
        value = apply_yank(context, span)
        context.move_cursor(clamp_cursor(context.buffer.lines, *span.start))
        return ModeResult(
            consumed=True,
            switch_to=ModeKind.NORMAL,
            status="yank",
            message=describe_yank(value),
        )

    def _sync_selection(self) -> None:
        context = self.context
        span = selection_range(context)
        if span is None:
            context.buffer.state.clear_selection()
        else:
            context.buffer.state.set_selection(span.start, span.end)


class VisualLineMode(VisualMode):
    name = ModeKind.VISUAL_LINE


__all__ = ["VisualLineMode", "VisualMode"]
