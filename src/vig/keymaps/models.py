"""Bindings, key sequences and the actions they point at.

A key sequence is a tuple of tokens in the vocabulary produced by
``vig.modes.keymap_helpers.key_to_token``: a bare key (``"j"``, ``"G"``,
``"escape"``) or modifiers joined to it with ``+`` in sorted order
(``"ctrl+w"``, ``"ctrl+shift+tab"``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIERS = frozenset({"alt", "ctrl", "shift"})


def normalize_token(text: str) -> str:
    """``"Shift+Ctrl+Tab"`` -> ``"ctrl+shift+Tab"``; a lone ``"+"`` stays a key."""

    parts = text.split("+")
    modifiers = set()
    while len(parts) > 1 and parts[0].strip().lower() in MODIFIERS:
        modifiers.add(parts.pop(0).strip().lower())
    key = "+".join(parts)
    if not key:
        raise ValueError(f"no key in {text!r}")
    return "+".join([*sorted(modifiers), key])


@dataclass(frozen=True, slots=True)
class KeySequence:
    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("a key sequence needs at least one key")
        object.__setattr__(
            self, "tokens", tuple(normalize_token(token) for token in self.tokens)
        )

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(key for key in keys if key))

    @classmethod
    def parse(cls, notation: str) -> "KeySequence":
        """``"g g"`` or ``"ctrl+w j"``: keys separated by spaces."""

        return cls.from_strings(*notation.split(" "))

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return " ".join(self.tokens)


def parse_condition(expression: str) -> tuple[str, bool]:
    """``"diff_pane"`` requires a flag, ``"!diff_pane"`` forbids it."""

    expr = expression.strip()
    expected = not expr.startswith("!")
    flag = expr.lstrip("!").strip()
    if not flag:
        raise ValueError(f"empty condition {expression!r}")
    return flag, expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A handler plus how the motion engine should treat it.

    ``category`` is one of ``motion``, ``text_object``, ``operator``,
    ``scroll``, ``mode``, ``pane``, ``register``, ``navigator`` or ``app``.
    Motions carry ``linewise``/``inclusive`` hints in ``metadata``.
    """

    id: str
    handler: Callable[..., object]
    category: str = "action"
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for {self.id!r} is not callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key sequence bound to one action inside one keyspace (``mode``)."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[str, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        object.__setattr__(self, "when", _dedupe(self.when))

    @property
    def requirements(self) -> Mapping[str, bool]:
        return dict(parse_condition(expression) for expression in self.when)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(
            bool(flags.get(flag, False)) is expected
            for flag, expected in self.requirements.items()
        )

    @property
    def key_signature(self) -> str:
        return str(self.sequence)


def _dedupe(expressions: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(expr.strip() for expr in expressions if expr.strip()))


__all__ = [
    "MODIFIERS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "normalize_token",
    "parse_condition",
]
