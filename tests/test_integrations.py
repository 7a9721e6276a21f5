from __future__ import annotations

from typing import List, Sequence

import pyperclip
import pytest

from vig.buffer import YankKind, YankRegister
from vig.integrations import (
    ClipboardError,
    ClipboardWriter,
    EditorLaunchError,
    EditorLauncher,
    build_editor_command,
    open_in_browser,
)


def test_register_values_reach_the_clipboard() -> None:
    copied: List[str] = []
    writer = ClipboardWriter(copy=copied.append)
    registers = YankRegister()
    registers.subscribe(writer)

    registers.yank("alpha\nbeta", YankKind.LINE)

    assert copied == ["alpha\nbeta"]
    assert writer.take_error() is None


def test_clipboard_failure_is_kept_not_raised() -> None:
    def broken(text: str) -> None:
        raise pyperclip.PyperclipException("no copy mechanism")

    writer = ClipboardWriter(copy=broken)
    registers = YankRegister()
    registers.subscribe(writer)

    value = registers.yank("alpha")

    assert value.text == "alpha"
    assert writer.take_error() == "Clipboard unavailable: no copy mechanism"
    assert writer.take_error() is None
    with pytest.raises(ClipboardError):
        writer.write("alpha")


@pytest.mark.parametrize(
    ("editor", "line", "expected"),
    [
        ("vim", None, ["vim", "src/app.py"]),
        ("vim", 12, ["vim", "+12", "src/app.py"]),
        ("code --wait", 0, ["code", "--wait", "src/app.py"]),
        ("", None, ["vi", "src/app.py"]),
    ],
)
def test_build_editor_command(editor: str, line, expected: List[str]) -> None:
    assert build_editor_command(editor, "src/app.py", line) == expected


def test_launcher_reports_exit_status(tmp_path) -> None:
    codes = iter([0, 3])
    seen: List[Sequence[str]] = []

    def runner(command: Sequence[str]) -> int:
        seen.append(command)
        return next(codes)

    launcher = EditorLauncher(tmp_path, environ={"VISUAL": "nano"}, runner=runner)

    assert launcher.open("a.txt") == "Edited a.txt"
    assert launcher.open("a.txt", 4) == "Editor exited with: 3"
    assert seen[-1] == ["nano", "+4", str(tmp_path / "a.txt")]


def test_launcher_wraps_os_errors(tmp_path) -> None:
    def runner(command: Sequence[str]) -> int:
        raise FileNotFoundError("nope")

    launcher = EditorLauncher(tmp_path, environ={"EDITOR": "nope"}, runner=runner)

    with pytest.raises(EditorLaunchError, match="Failed to open editor"):
        launcher.open("a.txt")


def test_open_in_browser_ignores_empty_url() -> None:
    assert open_in_browser("") is False


def test_open_in_browser_delegates_to_webbrowser(monkeypatch) -> None:
    calls: List[tuple] = []

    def fake_open(url: str, new: int = 0) -> bool:
        calls.append((url, new))
        return True

    monkeypatch.setattr("vig.integrations.browser.webbrowser.open", fake_open)

    assert open_in_browser("https://example.org") is True
    assert calls == [("https://example.org", 2)]
