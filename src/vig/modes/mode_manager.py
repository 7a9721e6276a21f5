"""Mode manager owning one pane's active mode and its transitions."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Optional, Type

from vig.keymaps.resolver import KeymapResolver
from vig.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeKind, ModeResult
from .keymap_helpers import keymap_flags, motion_engine


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    Panes register only the modes they support. A request to switch into an
    unregistered mode is answered with an ``"unsupported"`` result and leaves
    the pane where it was.
    """

    def __init__(
        self, context: ModeContext, *, keymap_resolver: KeymapResolver
    ) -> None:
        self.context = context
        self._modes: Dict[ModeKind, Mode] = {}
        self._active: Optional[ModeKind] = None
        self.logger = telemetry.get_logger("vig.modes")
        self.keymap_resolver = keymap_resolver
        self.context.extras.setdefault("keymap_resolver", keymap_resolver)
        keymap_flags(self.context)
        self.context.extras.setdefault("mode_manager", self)
        motion_engine(self.context)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_kind(self) -> ModeKind:
        return self._active or ModeKind.SCROLL

    def supports(self, kind: ModeKind) -> bool:
        return kind in self._modes

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        mode = mode_cls(self.context)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self.context.mode = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, kind: ModeKind) -> None:
        if kind not in self._modes:
            raise KeyError(f"Unknown mode '{kind.value}'")
        previous = self.active_mode
        if previous is not None and previous.name is kind:
            return
        if previous is not None:
            previous.on_exit(kind)
        self._active = kind
        self.context.mode = kind
        self._modes[kind].on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            data={"pane": self.context.buffer.name, "mode": kind.value},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component="modes",
            metadata={"key": key.key, "pane": self.context.buffer.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        target = result.switch_to
        if target is None:
            return result
        if not self.supports(target):
            return replace(
                result,
                switch_to=None,
                status="unsupported",
                message=f"{target.badge} is not available in this pane",
            )
        self.switch_mode(target)
        return result

    def reset(self) -> None:
        """Return to Scroll and drop pending input, e.g. after a content swap."""

        self.context.pending.clear()
        if ModeKind.SCROLL in self._modes:
            self.switch_mode(ModeKind.SCROLL)

    def pending_display(self) -> str:
        return self.context.pending.display()


__all__ = ["ModeManager"]
