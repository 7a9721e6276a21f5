from __future__ import annotations

from typing import Optional

import pytest

from vig.buffer import YankKind, YankRegister
from vig.keymaps import default_resolver
from vig.modes import KeyInput, ModeBus, ModeKind, ModeResult
from vig.navigation import PaneId, PaneState, build_pane


def make_pane(pane_id: PaneId = PaneId.FILE_TREE, *lines: str) -> PaneState:
    pane = build_pane(
        pane_id,
        registers=YankRegister(),
        bus=ModeBus(),
        resolver=default_resolver(),
    )
    pane.set_content(lines or ("alpha beta", "gamma delta", "epsilon"))
    return pane


def press(pane: PaneState, key: str, text: Optional[str] = None) -> ModeResult:
    return pane.manager.handle_key(KeyInput(key=key, text=text))


def test_panes_start_in_scroll_mode() -> None:
    pane = make_pane()

    assert pane.mode is ModeKind.SCROLL
    assert pane.context.pending.is_empty


def test_scroll_keys_move_list_selection() -> None:
    pane = make_pane()

    press(pane, "j")
    press(pane, "G")

    assert pane.cursor == (2, 0)
    assert pane.mode is ModeKind.SCROLL


def test_i_enters_normal_and_escape_returns_to_scroll() -> None:
    pane = make_pane()

    press(pane, "i")
    assert pane.mode is ModeKind.NORMAL

    press(pane, "escape")
    assert pane.mode is ModeKind.SCROLL


def test_scroll_only_pane_refuses_normal_mode() -> None:
    pane = make_pane(PaneId.BRANCH_LIST, "main", "feature")

    result = press(pane, "i")

    assert pane.mode is ModeKind.SCROLL
    assert result.status == "unsupported"


def test_visual_escape_keeps_cursor_and_clears_selection() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "v")
    press(pane, "l")
    press(pane, "l")
    assert pane.buffer.state.selection is not None

    press(pane, "escape")

    assert pane.mode is ModeKind.NORMAL
    assert pane.cursor == (0, 2)
    assert pane.buffer.state.selection is None
    assert pane.context.anchor is None


def test_visual_yank_copies_selection_and_returns_to_normal() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "w")
    press(pane, "v")
    press(pane, "e")

    result = press(pane, "y")

    assert result.message == "4 chars yanked"
    assert pane.context.registers.value.text == "beta"
    assert pane.mode is ModeKind.NORMAL
    assert pane.cursor == (0, 6)


def test_visual_line_yank_is_linewise() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "V")
    press(pane, "j")

    result = press(pane, "y")

    value = pane.context.registers.value
    assert value.kind is YankKind.LINE
    assert value.text == "alpha beta\ngamma delta"
    assert result.message == "2 lines yanked"


def test_visual_text_object_extends_selection() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "j")
    press(pane, "v")
    press(pane, "i")
    press(pane, "w")

    assert pane.context.anchor == (1, 0)
    assert pane.cursor == (1, 4)


def test_v_then_capital_v_keeps_anchor() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "l")
    press(pane, "v")
    press(pane, "V")

    assert pane.mode is ModeKind.VISUAL_LINE
    assert pane.context.anchor == (0, 1)


def test_yank_in_normal_mode_announces_lines() -> None:
    pane = make_pane()
    yanked = []
    pane.context.bus.subscribe("yank", yanked.append)
    press(pane, "i")

    press(pane, "y")
    result = press(pane, "y")

    assert result.message == "1 line yanked"
    assert yanked and yanked[0].text == "alpha beta"


@pytest.mark.parametrize(
    "keys",
    [
        ("i", "G", "$", "l", "j"),
        ("i", "9", "9", "w", "e", "k"),
        ("i", "v", "G", "$", "l"),
        ("i", "V", "g", "g", "h"),
    ],
)
def test_cursor_stays_within_content(keys: tuple[str, ...]) -> None:
    pane = make_pane()

    for key in keys:
        press(pane, key)
        row, col = pane.cursor
        assert 0 <= row < len(pane.buffer.lines)
        assert 0 <= col <= max(len(pane.buffer.lines[row]) - 1, 0)


def test_emptied_content_resets_to_scroll() -> None:
    pane = make_pane()
    press(pane, "i")
    press(pane, "2")

    pane.set_content(())

    assert pane.mode is ModeKind.SCROLL
    assert pane.context.pending.is_empty
    assert pane.cursor == (0, 0)
