"""Keyspaces of bindings, their resolver, and the built-in keymaps."""

from .models import ActionRef, Binding, KeySequence, normalize_token
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_BINDINGS, build_default_actions, load_default_keymaps


def default_resolver() -> KeymapResolver:
    """A resolver over a fresh registry holding the built-in keymaps."""

    registry = KeymapRegistry(logger_name="vig.keymaps")
    load_default_keymaps(registry)
    return KeymapResolver(registry, logger_name="vig.keymaps")


__all__ = [
    "ActionRef",
    "Binding",
    "DEFAULT_BINDINGS",
    "KeySequence",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
    "build_default_actions",
    "default_resolver",
    "load_default_keymaps",
    "normalize_token",
]
