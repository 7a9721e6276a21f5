"""Handlers bound to keymap actions."""

from . import app, core, navigation, register, scroll
from .core import (
    enter_normal_mode,
    enter_visual_line_mode,
    enter_visual_mode,
    exit_to_normal_mode,
    exit_to_scroll_mode,
    side_left,
    side_right,
)
from .register import put_to_clipboard, yank_operator

__all__ = [
    "app",
    "core",
    "enter_normal_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "exit_to_scroll_mode",
    "navigation",
    "put_to_clipboard",
    "register",
    "scroll",
    "side_left",
    "side_right",
    "yank_operator",
]
