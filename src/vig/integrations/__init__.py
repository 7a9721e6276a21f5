"""Desktop collaborators: clipboard, editor, and browser."""

from .browser import open_in_browser
from .clipboard import ClipboardError, ClipboardWriter
from .editor import EditorLaunchError, EditorLauncher, build_editor_command

__all__ = [
    "ClipboardError",
    "ClipboardWriter",
    "EditorLaunchError",
    "EditorLauncher",
    "build_editor_command",
    "open_in_browser",
]
