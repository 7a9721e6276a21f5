from __future__ import annotations

from typing import Callable, Optional

from vig.buffer import YankRegister
from vig.diff import ChangeTag, DiffSide, Hunk, HunkLine, build
from vig.keymaps import default_resolver
from vig.modes import KeyInput, ModeBus, ModeKind
from vig.navigation import (
    NavigationResult,
    PaneId,
    PaneNavigator,
    ViewKind,
    build_pane,
)
from vig.search import SearchOrigin


def make_navigator(
    available: Optional[Callable[[PaneId], bool]] = None,
) -> PaneNavigator:
    resolver = default_resolver()
    registers = YankRegister()
    bus = ModeBus()
    panes = {
        pane_id: build_pane(pane_id, registers=registers, bus=bus, resolver=resolver)
        for pane_id in PaneId
    }
    return PaneNavigator(panes, resolver=resolver, available=available)


def press(
    navigator: PaneNavigator, key: str, *modifiers: str, text: Optional[str] = None
) -> NavigationResult:
    return navigator.dispatch(KeyInput(key=key, modifiers=modifiers, text=text))


def chord(navigator: PaneNavigator, key: str) -> NavigationResult:
    press(navigator, "w", "ctrl")
    return press(navigator, key)


def test_tab_cycles_git_panes_and_wraps() -> None:
    navigator = make_navigator()
    seen = [navigator.focus]

    for _ in range(5):
        press(navigator, "tab")
        seen.append(navigator.focus)

    assert seen == [
        PaneId.FILE_TREE,
        PaneId.BRANCH_LIST,
        PaneId.REFLOG,
        PaneId.COMMIT_LOG,
        PaneId.DIFF_VIEW,
        PaneId.FILE_TREE,
    ]
    press(navigator, "tab", "shift")
    assert navigator.focus is PaneId.DIFF_VIEW


def test_cycle_skips_unavailable_panes() -> None:
    navigator = make_navigator(available=lambda pane: pane is not PaneId.REFLOG)

    press(navigator, "tab")
    press(navigator, "tab")

    assert navigator.focus is PaneId.COMMIT_LOG


def test_window_keys_step_upper_panes_and_clamp() -> None:
    navigator = make_navigator()

    chord(navigator, "k")
    assert navigator.focus is PaneId.FILE_TREE

    chord(navigator, "j")
    chord(navigator, "j")
    chord(navigator, "j")
    assert navigator.focus is PaneId.REFLOG


def test_enter_main_depends_on_upper_pane() -> None:
    navigator = make_navigator()

    chord(navigator, "l")
    assert navigator.focus is PaneId.DIFF_VIEW

    chord(navigator, "h")
    chord(navigator, "j")
    chord(navigator, "l")
    assert navigator.focus is PaneId.COMMIT_LOG
    assert navigator.last_upper is PaneId.BRANCH_LIST


def test_escape_in_scroll_mode_returns_to_upper_pane() -> None:
    navigator = make_navigator()
    chord(navigator, "j")
    chord(navigator, "l")

    result = press(navigator, "escape")

    assert result.consumed
    assert navigator.focus is PaneId.BRANCH_LIST


def test_view_toggle_remembers_focus_per_view() -> None:
    navigator = make_navigator()
    press(navigator, "tab")

    press(navigator, "g", "ctrl")
    assert navigator.view is ViewKind.GITHUB
    assert navigator.focus is PaneId.ISSUE_LIST

    press(navigator, "tab")
    assert navigator.focus is PaneId.PR_LIST

    press(navigator, "g", "ctrl")
    assert navigator.focus is PaneId.BRANCH_LIST

    press(navigator, "g", "ctrl")
    assert navigator.focus is PaneId.PR_LIST


def test_view_toggle_refused_without_github() -> None:
    navigator = make_navigator(available=lambda pane: pane.view is ViewKind.GIT)

    result = press(navigator, "g", "ctrl")

    assert navigator.view is ViewKind.GIT
    assert result.message == "Pane unavailable"


def test_pending_input_blocks_navigator_keys() -> None:
    navigator = make_navigator()
    navigator.pane.set_content(["a.py", "b.py"])
    press(navigator, "i", text="i")
    press(navigator, "2", text="2")

    result = press(navigator, "tab")

    assert result.consumed
    assert navigator.focus is PaneId.FILE_TREE
    assert navigator.pane.context.pending.is_empty


def test_search_keys_step_and_clear() -> None:
    navigator = make_navigator()
    pane = navigator.panes[PaneId.COMMIT_LOG]
    pane.set_content(["Fix bug", "Add feature", "FIX typo"])
    navigator.focus_pane(PaneId.COMMIT_LOG)
    pane.search.start("fix", pane.rows, SearchOrigin(offset_y=0, cursor=(1, 0)))

    press(navigator, "n", text="n")
    assert pane.cursor == (0, 0)
    press(navigator, "n", text="n")
    assert pane.cursor == (2, 0)
    press(navigator, "N", text="N")
    assert pane.cursor == (0, 0)

    press(navigator, "escape")
    assert not pane.search.active
    assert pane.cursor == (0, 0)
    assert navigator.focus is PaneId.COMMIT_LOG


def test_escape_without_selection_restores_origin() -> None:
    navigator = make_navigator()
    pane = navigator.pane
    pane.set_content(["one", "two", "three"])
    pane.buffer.state.set_cursor(2, 0)
    pane.search.start("one", pane.rows, pane.origin())
    pane.buffer.state.set_cursor(0, 0)

    press(navigator, "escape")

    assert pane.cursor == (2, 0)


def test_diff_side_keys_switch_buffer_side() -> None:
    navigator = make_navigator()
    pane = navigator.panes[PaneId.DIFF_VIEW]
    lines = (HunkLine(ChangeTag.REMOVED, "old"), HunkLine(ChangeTag.ADDED, "new"))
    pane.set_diff(build([Hunk(1, 1, 1, 1, lines)]))
    navigator.focus_pane(PaneId.DIFF_VIEW)
    press(navigator, "i", text="i")
    assert pane.mode is ModeKind.NORMAL
    assert tuple(pane.buffer.lines) == ("new",)

    press(navigator, "H", text="H")

    assert pane.side is DiffSide.LEFT
    assert tuple(pane.buffer.lines) == ("old",)
