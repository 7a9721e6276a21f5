"""Pane modes, the mode manager, and key dispatch helpers."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeKind, ModeResult
from .mode_manager import ModeManager
from .normal_mode import NormalMode
from .scroll_mode import ScrollMode
from .selection import apply_yank, describe_yank, selection_range
from .visual_mode import VisualLineMode, VisualMode

ALL_MODES = (ScrollMode, NormalMode, VisualMode, VisualLineMode)

__all__ = [
    "ALL_MODES",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeKind",
    "ModeManager",
    "ModeResult",
    "NormalMode",
    "ScrollMode",
    "VisualLineMode",
    "VisualMode",
    "apply_yank",
    "describe_yank",
    "selection_range",
]
