"""Read-only line storage backing every pane's content buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class BufferDocument:
    """Immutable list-of-lines document.

    Panes never edit their content; a refresh produces a new document with a
    bumped ``version`` instead.
    """

    lines: Tuple[str, ...] = field(default_factory=tuple)
    version: int = 0

    def snapshot(self) -> Sequence[str]:
        return self.lines

    def replace(self, lines: Iterable[str]) -> "BufferDocument":
        """Return a new document with ``lines`` and the next version."""

        return BufferDocument(lines=tuple(lines), version=self.version + 1)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, index: int) -> str:
        return self.lines[index]
