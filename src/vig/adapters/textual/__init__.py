"""Textual front end."""

from .app import VigApp, main, normalize_key
from .controller import TextualUIHooks, TextualViewerAdapter

__all__ = [
    "TextualUIHooks",
    "TextualViewerAdapter",
    "VigApp",
    "main",
    "normalize_key",
]
