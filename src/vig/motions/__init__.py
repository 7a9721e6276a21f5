"""Motion & text-object engine with its pending-input accumulator."""

from .engine import (
    TEXT_OBJECT_KEYSPACE,
    EngineResult,
    EngineView,
    MotionEngine,
    YankRange,
)
from .motions import MotionArgs
from .pending import Operator, PendingInput
from .text_objects import a_word, bracketed, inner_word, quoted
from .words import char_class, word_backward, word_end, word_forward

__all__ = [
    "EngineResult",
    "EngineView",
    "MotionArgs",
    "MotionEngine",
    "Operator",
    "PendingInput",
    "TEXT_OBJECT_KEYSPACE",
    "YankRange",
    "a_word",
    "bracketed",
    "char_class",
    "inner_word",
    "quoted",
    "word_backward",
    "word_end",
    "word_forward",
]
