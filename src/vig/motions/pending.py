"""The pending-input accumulator carried between keystrokes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

MAX_COUNT = 99_999


class Operator(str, Enum):
    YANK = "y"


@dataclass(slots=True)
class PendingInput:
    """Count, operator and partial key sequence typed so far.

    ``count`` is what was typed after the operator (or with no operator);
    ``operator_count`` is what was typed before it, so ``2y3j`` yanks 6 lines.
    Zero means unset.
    """

    count: int = 0
    operator: Optional[Operator] = None
    operator_count: int = 0
    keys: Tuple[str, ...] = ()
    keyspace: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.count or self.operator or self.keys)

    @property
    def explicit_count(self) -> bool:
        return bool(self.count or self.operator_count)

    @property
    def effective_count(self) -> int:
        return min(max(self.count, 1) * max(self.operator_count, 1), MAX_COUNT)

    def push_digit(self, digit: int) -> None:
        self.count = min(self.count * 10 + digit, MAX_COUNT)

    def begin_operator(self, operator: Operator) -> None:
        self.operator = operator
        self.operator_count = self.count
        self.count = 0
        self.keys = ()
        self.keyspace = None

    def clear(self) -> None:
        self.count = 0
        self.operator = None
        self.operator_count = 0
        self.keys = ()
        self.keyspace = None

    def display(self) -> str:
        """What the status line echoes while a chord is incomplete."""

        parts = []
        if self.operator_count:
            parts.append(str(self.operator_count))
        if self.operator:
            parts.append(self.operator.value)
        if self.count:
            parts.append(str(self.count))
        parts.extend(self.keys)
        return "".join(parts)


__all__ = ["MAX_COUNT", "Operator", "PendingInput"]
