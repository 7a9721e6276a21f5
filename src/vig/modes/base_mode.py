"""Base classes and shared utilities for pane modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from vig.buffer import Buffer, Cursor, Viewport, YankRegister
from vig.motions.pending import PendingInput


class ModeKind(str, Enum):
    SCROLL = "scroll"
    NORMAL = "normal"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"

    @property
    def badge(self) -> str:
        return _BADGES[self]

    @property
    def is_visual(self) -> bool:
        return self in (ModeKind.VISUAL, ModeKind.VISUAL_LINE)


_BADGES = {
    ModeKind.SCROLL: "SCROLL",
    ModeKind.NORMAL: "NORMAL",
    ModeKind.VISUAL: "VISUAL",
    ModeKind.VISUAL_LINE: "V-LINE",
}


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def is_printable(self) -> bool:
        return not self.modifiers and self.text is not None and len(self.text) == 1


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``command`` names a pane-level request (for example ``"side.left"``) that
    the owning pane carries out after the mode returns.
    """

    consumed: bool
    switch_to: Optional[ModeKind] = None
    status: str = "ok"
    message: Optional[str] = None
    command: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Per-pane state every mode can access.

    ``registers`` and ``bus`` are shared by all panes; the rest belongs to the
    pane. ``list_selection`` marks panes whose cursor row is their selected
    item, so scroll keys move the selection instead of the viewport.
    """

    buffer: Buffer
    registers: YankRegister
    bus: "ModeBus"
    viewport: Viewport = field(default_factory=Viewport)
    pending: PendingInput = field(default_factory=PendingInput)
    mode: ModeKind = ModeKind.SCROLL
    anchor: Optional[Cursor] = None
    list_selection: bool = False
    extras: Dict[str, object] = field(default_factory=dict)

    @property
    def cursor(self) -> Cursor:
        return self.buffer.state.cursor

    def move_cursor(self, cursor: Cursor) -> None:
        self.buffer.state.set_cursor(*cursor)
        self.viewport.ensure_visible(cursor[0])


class ModeBus:
    """Minimal event bus letting modes publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete pane modes inherit from."""

    name: ModeKind = ModeKind.SCROLL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def keyspace(self) -> str:
        return self.name.value

    def on_enter(self, previous: Optional[ModeKind]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[ModeKind]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
