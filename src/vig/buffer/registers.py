"""The process-wide yank register and its clipboard hand-off."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional


class YankKind(str, Enum):
    CHARACTER = "character"
    LINE = "line"
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    kind: YankKind = YankKind.CHARACTER


ClipboardSink = Callable[[RegisterValue], None]


class YankRegister:
    """Single slot holding the most recent yank.

    Every ``yank`` overwrites the slot and notifies the sinks, which is how the
    clipboard collaborator learns about new text. ``put_to_clipboard`` re-sends
    the current value on request.
    """

    def __init__(self) -> None:
        self._value: Optional[RegisterValue] = None
        self._sinks: List[ClipboardSink] = []

    @property
    def value(self) -> Optional[RegisterValue]:
        return self._value

    def subscribe(self, sink: ClipboardSink) -> None:
        self._sinks.append(sink)

    def yank(self, text: str, kind: YankKind = YankKind.CHARACTER) -> RegisterValue:
        value = RegisterValue(text=text, kind=kind)
        self._value = value
        self._notify(value)
        return value

    def put_to_clipboard(self) -> Optional[RegisterValue]:
        if self._value is None:
            return None
        self._notify(self._value)
        return self._value

    def _notify(self, value: RegisterValue) -> None:
        for sink in self._sinks:
            sink(value)
