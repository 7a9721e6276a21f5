"""Read-only content buffers, cursor state and the yank register."""

from .buffer import Buffer
from .document import BufferDocument
from .registers import RegisterValue, YankKind, YankRegister
from .state import BufferState, Cursor, Selection
from .validation import BufferValidationError, clamp_cursor, ensure_cursor, last_col
from .viewport import HORIZONTAL_STEP, Viewport

__all__ = [
    "Buffer",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "Cursor",
    "HORIZONTAL_STEP",
    "RegisterValue",
    "Selection",
    "YankKind",
    "Viewport",
    "YankRegister",
    "clamp_cursor",
    "ensure_cursor",
    "last_col",
]
