"""Turn pending key tokens into a match, a pending prefix, or a miss."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Set

from vig.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    next_expected: tuple[str, ...] = ()


MISS = ResolutionResult("miss")


@dataclass(slots=True)
class _CompiledKeyspace:
    """Exact sequences plus the tokens that may follow each proper prefix."""

    revision: int
    exact: Dict[tuple[str, ...], List[Binding]]
    followers: Dict[tuple[str, ...], tuple[str, ...]]


def _compile(registry: KeymapRegistry, mode: str) -> _CompiledKeyspace:
    exact: Dict[tuple[str, ...], List[Binding]] = defaultdict(list)
    followers: Dict[tuple[str, ...], Set[str]] = defaultdict(set)
    for binding in registry.iter_bindings(mode):
        tokens = binding.sequence.tokens
        exact[tokens].append(binding)
        for size in range(1, len(tokens)):
            followers[tokens[:size]].add(tokens[size])
    for candidates in exact.values():
        candidates.sort(key=lambda binding: (-binding.priority, binding.id))
    return _CompiledKeyspace(
        revision=registry.revision(),
        exact=dict(exact),
        followers={prefix: tuple(sorted(nxt)) for prefix, nxt in followers.items()},
    )


class KeymapResolver:
    """Resolves token sequences per keyspace, recompiling after registry edits.

    A complete sequence whose bindings the flags all reject falls back to
    ``pending`` when longer sequences start with it, else to ``miss``.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: Optional[str] = None
    ) -> None:
        self.registry = registry
        self._logger_name = logger_name
        self._compiled: Dict[str, _CompiledKeyspace] = {}

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        keys = tuple(tokens)
        if not keys:
            return MISS
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"keyspace": mode, "keys": " ".join(keys)},
        ) as handle:
            table = self._table(mode)
            for binding in table.exact.get(keys, ()):
                if binding.allows(flags):
                    handle.add_metadata("binding", binding.id)
                    action = self.registry.get_action(binding.action_id)
                    return ResolutionResult("match", ResolutionMatch(binding, action))
            following = table.followers.get(keys)
            if following:
                return ResolutionResult("pending", next_expected=following)
            return MISS

    def _table(self, mode: str) -> _CompiledKeyspace:
        table = self._compiled.get(mode)
        if table is None or table.revision != self.registry.revision():
            table = _compile(self.registry, mode)
            self._compiled[mode] = table
        return table


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
