"""Pane focus state machine.

Every key enters ``PaneNavigator.dispatch``. It is consumed, in order, by a
half-typed ``ctrl+w`` chord, the focused pane's active search (``escape``,
``n``, ``N``), the pane's own pending mode input, the navigator bindings, and
finally the pane's mode manager. ``escape`` left over in Scroll mode on a
main pane returns to the remembered upper pane.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from vig.diff import DiffSide
from vig.keymaps.resolver import KeymapResolver
from vig.modes import KeyInput, ModeKind, ModeResult
from vig.modes.keymap_helpers import key_to_token
from vig.runtime import telemetry

from .panes import GIT_CYCLE, GITHUB_CYCLE, PaneId, PaneState, ViewKind

NAVIGATOR_KEYSPACE = "navigator"
SEARCH_KEYS = frozenset({"escape", "n", "N"})

Availability = Callable[[PaneId], bool]


@dataclass(frozen=True, slots=True)
class NavigationResult:
    focus: PaneId
    consumed: bool
    mode_result: Optional[ModeResult] = None
    message: Optional[str] = None


def _always(pane_id: PaneId) -> bool:
    del pane_id
    return True


class PaneNavigator:
    """Owns focus plus, per view, the last focused pane and last upper pane."""

    def __init__(
        self,
        panes: Mapping[PaneId, PaneState],
        *,
        resolver: KeymapResolver,
        available: Optional[Availability] = None,
    ) -> None:
        self.panes = dict(panes)
        self.resolver = resolver
        self.available = available or _always
        self.view = ViewKind.GIT
        self.focus = PaneId.FILE_TREE
        self._last_upper = {
            ViewKind.GIT: PaneId.FILE_TREE,
            ViewKind.GITHUB: PaneId.ISSUE_LIST,
        }
        self._view_focus = {ViewKind.GIT: PaneId.FILE_TREE}
        self._chord: Tuple[str, ...] = ()
        self.logger = telemetry.get_logger("vig.navigation")

    @property
    def pane(self) -> PaneState:
        return self.panes[self.focus]

    @property
    def last_upper(self) -> PaneId:
        """The upper pane focused most recently in the current view."""

        return self._last_upper[self.view]

    @property
    def chord(self) -> Tuple[str, ...]:
        return self._chord

    @property
    def cycle_order(self) -> Tuple[PaneId, ...]:
        return GIT_CYCLE if self.view is ViewKind.GIT else GITHUB_CYCLE

    def can_focus(self, target: PaneId) -> bool:
        return (
            target in self.panes
            and target in self.cycle_order
            and self.available(target)
        )

    def focus_pane(self, target: PaneId) -> bool:
        """Move focus to ``target``; unknown or unavailable targets are refused."""

        if not self.can_focus(target):
            return False
        previous = self.focus
        if previous is target:
            return True
        if target.is_upper:
            self._last_upper[target.view] = target
        self.focus = target
        self._view_focus[self.view] = target
        telemetry.record_event(
            "focus.change", data={"from": previous.value, "to": target.value}
        )
        return True

    def cycle(self, step: int) -> bool:
        order = self.cycle_order
        start = order.index(self.focus) if self.focus in order else 0
        for offset in range(1, len(order)):
            candidate = order[(start + step * offset) % len(order)]
            if self.can_focus(candidate):
                return self.focus_pane(candidate)
        return False

    def move_upper(self, step: int) -> bool:
        """Step among the upper panes of the current view, clamped at the ends."""

        if not self.focus.is_upper:
            return self.focus_pane(self.last_upper)
        uppers = [pane for pane in self.cycle_order if pane.is_upper]
        index = uppers.index(self.focus) + step
        while 0 <= index < len(uppers):
            if self.focus_pane(uppers[index]):
                return True
            index += step
        return False

    def main_target(self) -> PaneId:
        if self.view is ViewKind.GITHUB:
            return PaneId.DETAIL
        source = self.focus if self.focus.is_upper else self.last_upper
        if source in (PaneId.BRANCH_LIST, PaneId.REFLOG):
            return PaneId.COMMIT_LOG
        return PaneId.DIFF_VIEW

    def enter_main(self) -> bool:
        if not self.focus.is_upper:
            return False
        return self.focus_pane(self.main_target())

    def back(self) -> bool:
        return self.focus_pane(self.last_upper)

    def toggle_view(self) -> bool:
        target = ViewKind.GITHUB if self.view is ViewKind.GIT else ViewKind.GIT
        default = PaneId.ISSUE_LIST if target is ViewKind.GITHUB else PaneId.FILE_TREE
        if default not in self.panes or not self.available(default):
            return False
        self._view_focus[self.view] = self.focus
        self.view = target
        self._chord = ()
        remembered = self._view_focus.get(target, default)
        if not self.focus_pane(remembered):
            self.focus_pane(default)
        if self.focus.view is not target:
            self.focus = default
        telemetry.record_event("view.toggle", data={"view": target.value})
        return True

    def ensure_focus_available(self) -> None:
        """Re-home focus after content changes made the focused pane vanish."""

        if self.can_focus(self.focus):
            return
        if not self.focus_pane(self.last_upper):
            self.focus = self.cycle_order[0]

    def dispatch(self, key: KeyInput) -> NavigationResult:
        token = key_to_token(key)
        pane = self.pane

        if self._chord:
            return self._continue_chord(token)

        if pane.search.active and token in SEARCH_KEYS:
            return self._search_key(pane, token)

        if pane.context.pending.is_empty:
            handled = self._navigator_key(token)
            if handled is not None:
                return handled

        result = pane.manager.handle_key(key)
        if result.command:
            self._pane_command(pane, result.command)
        if result.consumed:
            return NavigationResult(self.focus, True, mode_result=result)

        if token == "escape" and pane.mode is ModeKind.SCROLL:
            if not pane.id.is_upper and self.back():
                return NavigationResult(self.focus, True)
        return NavigationResult(self.focus, False, mode_result=result)

    def _continue_chord(self, token: str) -> NavigationResult:
        tokens = self._chord + (token,)
        self._chord = ()
        result = self.resolver.resolve(NAVIGATOR_KEYSPACE, tokens)
        if result.status == "pending":
            self._chord = tokens
        elif result.status == "match" and result.match is not None:
            result.match.action(self)
        return NavigationResult(self.focus, True)

    def _navigator_key(self, token: str) -> Optional[NavigationResult]:
        result = self.resolver.resolve(NAVIGATOR_KEYSPACE, (token,))
        if result.status == "pending":
            self._chord = (token,)
            return NavigationResult(self.focus, True)
        if result.status == "match" and result.match is not None:
            changed = result.match.action(self)
            message = None if changed else "Pane unavailable"
            return NavigationResult(self.focus, True, message=message)
        return None

    def _search_key(self, pane: PaneState, token: str) -> NavigationResult:
        if token == "escape":
            origin = pane.search.clear()
            if origin is not None:
                pane.restore(origin)
            return NavigationResult(self.focus, True)
        match = pane.search.next() if token == "n" else pane.search.previous()
        if match is None:
            return NavigationResult(self.focus, True, message="No matches")
        pane.show_match(match)
        return NavigationResult(self.focus, True)

    @staticmethod
    def _pane_command(pane: PaneState, command: str) -> None:
        if command == "side.left":
            pane.switch_side(DiffSide.LEFT)
        elif command == "side.right":
            pane.switch_side(DiffSide.RIGHT)


__all__ = ["NAVIGATOR_KEYSPACE", "NavigationResult", "PaneNavigator"]
