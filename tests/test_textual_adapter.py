from __future__ import annotations

from typing import Callable, List

import pytest
from textual import events

from support import settle
from vig.adapters.textual import TextualUIHooks, TextualViewerAdapter, normalize_key
from vig.adapters.textual.highlight import SyntaxHighlighter
from vig.adapters.textual.render import (
    pane_title,
    render_diff_side,
    render_help,
    render_list,
    render_prompt,
    render_status,
)
from vig.diff import DiffSide
from vig.modes import ModeKind
from vig.navigation import PaneId
from vig.session import ViewerSession

SessionFactory = Callable[..., ViewerSession]


class RecordingHooks:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def build(self) -> TextualUIHooks:
        return TextualUIHooks(
            refresh=lambda: self.calls.append("refresh"),
            quit=lambda: self.calls.append("quit"),
        )


def loaded(make_session: SessionFactory) -> ViewerSession:
    session = make_session()
    session.request_refresh("startup")
    settle(session)
    return session


def test_adapter_dispatches_keys_and_repaints(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    recorder = RecordingHooks()
    adapter = TextualViewerAdapter(session, recorder.build())

    consumed = adapter.handle_textual_key("i", text="i")

    assert consumed
    assert session.pane.mode is ModeKind.NORMAL
    assert recorder.calls == ["refresh"]


def test_adapter_normalizes_modifier_case(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    adapter = TextualViewerAdapter(session, RecordingHooks().build())

    adapter.handle_textual_key("w", modifiers=("Ctrl",))
    adapter.handle_textual_key("l", text="l")

    assert session.focus is PaneId.DIFF_VIEW


def test_adapter_quits_instead_of_repainting(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    recorder = RecordingHooks()
    adapter = TextualViewerAdapter(session, recorder.build())

    adapter.handle_textual_key("q", text="q")

    assert recorder.calls == ["quit"]


def test_adapter_repaints_only_when_events_arrive(
    make_session: SessionFactory,
) -> None:
    session = make_session()
    recorder = RecordingHooks()
    adapter = TextualViewerAdapter(session, recorder.build())

    session.request_refresh()
    assert adapter.process_events() > 0
    assert recorder.calls == ["refresh"]

    assert adapter.process_events() == 0
    assert recorder.calls == ["refresh"]


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("a", "a", ("a", "a", ())),
        ("space", " ", ("space", " ", ())),
        ("ctrl+w", None, ("w", None, ("ctrl",))),
        ("enter", "\r", ("enter", None, ())),
        ("shift+tab", None, ("tab", None, ("shift",))),
        ("ctrl+q", None, None),
    ],
)
def test_normalize_key(key: str, character, expected) -> None:
    assert normalize_key(events.Key(key, character)) == expected


def test_render_list_shows_rows(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    pane = session.panes[PaneId.FILE_TREE]

    text = render_list(pane, focused=True)

    assert text.plain == "M src/app.py\nM README.md"
    empty = session.panes[PaneId.ISSUE_LIST]
    assert render_list(empty, focused=False, placeholder="No issues").plain == (
        "No issues"
    )


def test_render_diff_side_columns(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    pane = session.panes[PaneId.DIFF_VIEW]
    file = session.selected_file()
    highlighter = SyntaxHighlighter()

    left = render_diff_side(
        pane, DiffSide.LEFT, file=file, highlighter=highlighter, focused=False
    )
    right = render_diff_side(
        pane, DiffSide.RIGHT, file=file, highlighter=highlighter, focused=True
    )

    assert left.plain == "    1 import os\n    2 old()"
    assert right.plain == "    1 import os\n    2 new()"
    assert (
        render_diff_side(
            pane, DiffSide.RIGHT, file=None, highlighter=highlighter, focused=True
        ).plain
        == "No changes"
    )


def test_render_chrome(make_session: SessionFactory) -> None:
    session = loaded(make_session)
    snapshot = session.snapshot()

    status = render_status(snapshot).plain

    assert status.startswith(" SCROLL ")
    assert "base: HEAD" in status
    assert render_prompt(snapshot).plain == ""
    assert pane_title("Files", "SCROLL", ["", "1/2"]) == "Files [SCROLL] 1/2"
    assert render_help(["Application", "  q  Quit"]).plain.startswith(
        "Application\n  q  Quit"
    )
