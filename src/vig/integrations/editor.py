"""Launch ``$EDITOR`` on a file, optionally at a line."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from vig.runtime import telemetry
from vig.runtime.config import resolve_editor

Runner = Callable[[Sequence[str]], int]


class EditorLaunchError(RuntimeError):
    pass


def build_editor_command(
    editor: str, path: str | Path, line: Optional[int] = None
) -> List[str]:
    """``$EDITOR`` may carry its own arguments (``code --wait``)."""

    command = shlex.split(editor) or ["vi"]
    if line is not None and line > 0:
        command.append(f"+{line}")
    command.append(str(path))
    return command


def _run(command: Sequence[str]) -> int:
    return subprocess.call(list(command))


class EditorLauncher:
    def __init__(
        self,
        root: str | Path,
        *,
        environ: Optional[Mapping[str, str]] = None,
        runner: Optional[Runner] = None,
    ) -> None:
        self.root = Path(root)
        self.editor = resolve_editor(environ)
        self._runner = runner or _run

    def open(self, path: str, line: Optional[int] = None) -> str:
        """Block until the editor exits; returns the status message to show."""

        command = build_editor_command(self.editor, self.root / path, line)
        with telemetry.span(
            "editor::open",
            component="editor",
            metadata={"editor": command[0], "path": path, "line": line},
        ) as handle:
            try:
                code = self._runner(command)
            except OSError as exc:
                handle.fail(str(exc))
                raise EditorLaunchError(f"Failed to open editor: {exc}") from exc
            if code != 0:
                handle.fail(f"exit {code}")
                return f"Editor exited with: {code}"
        return f"Edited {path}"


__all__ = ["EditorLaunchError", "EditorLauncher", "build_editor_command"]
