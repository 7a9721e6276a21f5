"""Actions reading the process-wide yank register."""

from __future__ import annotations

from vig.modes.base_mode import ModeContext, ModeResult
from vig.motions import Operator


def yank_operator() -> Operator:
    """Operator handler; the motion engine decides what the operator sweeps."""

    return Operator.YANK


def put_to_clipboard(
    context: ModeContext, *, count: int = 1, explicit: bool = False
) -> ModeResult:
    del count, explicit
    value = context.registers.put_to_clipboard()
    if value is None:
        return ModeResult(consumed=True, status="noop", message="Register is empty")
    return ModeResult(consumed=True, status="register", message="Copied register")


__all__ = ["put_to_clipboard", "yank_operator"]
