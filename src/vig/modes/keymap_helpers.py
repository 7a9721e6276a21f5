"""Glue between a pane's ``ModeContext`` and the keymap machinery.

The context keeps its collaborators in ``extras``: the shared resolver under
``keymap_resolver``, the pane's motion engine under ``motion_engine`` and the
when-condition flags under ``keymap_flags``.
"""

from __future__ import annotations

from typing import Dict

from vig.keymaps.models import normalize_token
from vig.keymaps.resolver import KeymapResolver, ResolutionMatch
from vig.motions.engine import MotionEngine
from vig.runtime import telemetry

from .base_mode import KeyInput, ModeContext, ModeResult


def key_to_token(key: KeyInput) -> str:
    if not key.key:
        return ""
    return normalize_token("+".join([*key.modifiers, key.key]))


def keymap_resolver(context: ModeContext) -> KeymapResolver:
    found = context.extras.get("keymap_resolver")
    if isinstance(found, KeymapResolver):
        return found
    raise RuntimeError("no keymap resolver attached to this pane")


def motion_engine(context: ModeContext) -> MotionEngine:
    """The pane's engine, created on first use from its resolver."""

    engine = context.extras.get("motion_engine")
    if not isinstance(engine, MotionEngine):
        engine = context.extras["motion_engine"] = MotionEngine(
            keymap_resolver(context)
        )
    return engine


def keymap_flags(context: ModeContext) -> Dict[str, bool]:
    """Live flag dict; modes hold on to it and see later updates."""

    return context.extras.setdefault("keymap_flags", {})


def run_action(
    context: ModeContext,
    match: ResolutionMatch,
    *,
    count: int = 1,
    explicit: bool = False,
) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, count=count, explicit=explicit)
    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult(consumed=True, status=match.action.category)


__all__ = [
    "key_to_token",
    "keymap_flags",
    "keymap_resolver",
    "motion_engine",
    "run_action",
]
