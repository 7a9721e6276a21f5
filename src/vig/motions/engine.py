"""Motion & text-object engine.

``MotionEngine.feed`` is a pure step: given the pending accumulator, one key
token and a read-only view of the buffer it either extends the accumulator or
completes a motion, a yank, a text-object selection or hands back an action
for the mode to run. The engine keeps no state of its own; everything carried
between keystrokes lives in ``PendingInput``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Mapping, Optional, Sequence

from vig.buffer import Cursor, YankKind, clamp_cursor, last_col
from vig.runtime import telemetry

from .motions import MotionArgs
from .pending import Operator, PendingInput

if TYPE_CHECKING:
    from vig.keymaps import KeymapResolver, ResolutionMatch

TEXT_OBJECT_KEYSPACE = "text_object"
TEXT_OBJECT_PREFIXES = frozenset({"i", "a"})

Status = Literal[
    "pending",
    "discarded",
    "unhandled",
    "motion",
    "yank",
    "select",
    "operator",
    "action",
    "noop",
]


@dataclass(frozen=True, slots=True)
class EngineView:
    lines: Sequence[str]
    cursor: Cursor
    viewport_height: int = 1
    visual: bool = False


@dataclass(frozen=True, slots=True)
class YankRange:
    """Inclusive range; for ``LINE`` only the rows matter."""

    start: Cursor
    end: Cursor
    kind: YankKind


@dataclass(frozen=True, slots=True)
class EngineResult:
    status: Status
    consumed: bool
    cursor: Optional[Cursor] = None
    yank: Optional[YankRange] = None
    select: Optional[tuple[Cursor, Cursor]] = None
    match: Optional["ResolutionMatch"] = None
    count: int = 1
    explicit_count: bool = False


class MotionEngine:
    """Resolves keys against a keymap and computes cursor outcomes."""

    def __init__(self, resolver: "KeymapResolver") -> None:
        self.resolver = resolver

    def feed(
        self,
        keyspace: str,
        pending: PendingInput,
        token: str,
        view: EngineView,
        *,
        flags: Optional[Mapping[str, bool]] = None,
    ) -> EngineResult:
        if self._accepts_digit(pending, token):
            pending.push_digit(int(token))
            return EngineResult("pending", True)

        space = pending.keyspace or keyspace
        if (
            not pending.keys
            and token in TEXT_OBJECT_PREFIXES
            and (pending.operator is not None or view.visual)
        ):
            space = TEXT_OBJECT_KEYSPACE

        tokens = pending.keys + (token,)
        result = self.resolver.resolve(space, tokens, context=flags)
        if result.status == "pending":
            pending.keys = tokens
            pending.keyspace = space
            return EngineResult("pending", True)
        if result.status == "miss" or result.match is None:
            had_pending = not pending.is_empty
            pending.clear()
            if had_pending:
                telemetry.record_event(
                    "motion.discard", level="debug", data={"keys": " ".join(tokens)}
                )
                return EngineResult("discarded", True)
            return EngineResult("unhandled", False)

        return self._complete(pending, result.match, view)

    @staticmethod
    def _accepts_digit(pending: PendingInput, token: str) -> bool:
        if pending.keys or len(token) != 1 or not token.isdigit():
            return False
        return token != "0" or pending.count > 0

    def _complete(
        self, pending: PendingInput, match: "ResolutionMatch", view: EngineView
    ) -> EngineResult:
        action = match.action
        count = pending.effective_count
        explicit = pending.explicit_count
        operator = pending.operator

        if action.category == "operator":
            if view.visual:
                pending.clear()
                return EngineResult("operator", True, match=match)
            if operator is not None:
                pending.clear()
                return self._yank_lines(view, count)
            pending.begin_operator(Operator(action()))
            return EngineResult("pending", True)

        pending.clear()

        if action.category == "motion":
            args = MotionArgs(
                lines=view.lines,
                cursor=view.cursor,
                count=count,
                explicit_count=explicit,
                viewport_height=view.viewport_height,
                for_operator=operator is not None,
            )
            target = action(args)
            if operator is Operator.YANK:
                return self._yank_motion(view, target, action.metadata)
            return EngineResult("motion", True, cursor=target)

        if action.category == "text_object":
            return self._text_object(view, action, yank=operator is not None)

        if operator is not None:
            return EngineResult("discarded", True)
        return EngineResult(
            "action", True, match=match, count=count, explicit_count=explicit
        )

    def _yank_lines(self, view: EngineView, count: int) -> EngineResult:
        if not view.lines:
            return EngineResult("noop", True)
        row = view.cursor[0]
        last = min(row + count - 1, len(view.lines) - 1)
        return EngineResult(
            "yank",
            True,
            cursor=view.cursor,
            yank=YankRange((row, 0), (last, 0), YankKind.LINE),
        )

    def _yank_motion(
        self, view: EngineView, target: Cursor, metadata: Mapping[str, object]
    ) -> EngineResult:
        if not view.lines:
            return EngineResult("noop", True)
        cursor = view.cursor
        if metadata.get("linewise"):
            top, bottom = sorted((cursor[0], target[0]))
            moved = target if target[0] < cursor[0] else cursor
            return EngineResult(
                "yank",
                True,
                cursor=clamp_cursor(view.lines, moved[0], cursor[1]),
                yank=YankRange((top, 0), (bottom, 0), YankKind.LINE),
            )

        start, end = sorted((cursor, target))
        if not metadata.get("inclusive"):
            if start == end:
                return EngineResult("noop", True)
            end_row, end_col = end
            if end_col == 0:
                end_row -= 1
                end = (end_row, last_col(view.lines[end_row]))
                if end_row < start[0]:
                    return EngineResult("noop", True)
            else:
                end = (end_row, end_col - 1)
        return EngineResult(
            "yank",
            True,
            cursor=start,
            yank=YankRange(start, end, YankKind.CHARACTER),
        )

    def _text_object(self, view: EngineView, action, *, yank: bool) -> EngineResult:
        if not view.lines:
            return EngineResult("noop", True)
        row, col = view.cursor
        span = action(view.lines[row], col)
        if span is None:
            return EngineResult("noop", True)
        start, end = (row, span[0]), (row, span[1])
        if yank:
            return EngineResult(
                "yank",
                True,
                cursor=start,
                yank=YankRange(start, end, YankKind.CHARACTER),
            )
        return EngineResult("select", True, cursor=end, select=(start, end))


__all__ = [
    "EngineResult",
    "EngineView",
    "MotionEngine",
    "TEXT_OBJECT_KEYSPACE",
    "TEXT_OBJECT_PREFIXES",
    "YankRange",
]
