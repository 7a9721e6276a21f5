"""Actions and bindings, grouped by keyspace and key sequence."""

from __future__ import annotations

from collections import defaultdict
from typing import DefaultDict, Dict, Iterable, Iterator, List, Optional

from vig.runtime.telemetry import record_event, span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Two bindings in one keyspace claim the same keys under the same flags."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]) -> None:
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(conflict.id for conflict in self.conflicts)
        super().__init__(
            f"{binding.mode}: '{binding.key_signature}' for {binding.id} "
            f"is already bound by {taken}"
        )


Keyspace = DefaultDict[tuple[str, ...], List[str]]


class KeymapRegistry:
    """Owns every action and binding; ``revision`` moves on each binding change.

    Two bindings of one keyspace conflict when they share a key sequence and
    their when-conditions are identical. Differing conditions (``diff_pane``
    versus none, or ``diff_pane`` versus ``!diff_pane``) may coexist; the
    resolver picks among whichever ones the current flags allow.
    """

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._keyspaces: DefaultDict[str, Keyspace] = defaultdict(
            lambda: defaultdict(list)
        )
        self._logger_name = logger_name
        self._revision = 0

    def __len__(self) -> int:
        return len(self._bindings)

    def revision(self) -> int:
        return self._revision

    def keyspaces(self) -> tuple[str, ...]:
        return tuple(sorted(name for name, space in self._keyspaces.items() if space))

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"unknown action '{action_id}'")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"unknown binding '{binding_id}'")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"action '{action.id}' is already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding": binding.id, "keyspace": binding.mode},
        ):
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"binding '{binding.id}' points at unknown action "
                    f"'{binding.action_id}'"
                )
            conflicts = self.conflicts_with(binding)
            if binding.id in self._bindings:
                conflicts.append(self._bindings[binding.id])
            if conflicts and not replace:
                if any(conflict.id == binding.id for conflict in conflicts):
                    raise ValueError(f"binding '{binding.id}' is already registered")
                raise KeymapConflictError(binding, conflicts)
            for conflict in conflicts:
                self._drop(conflict)
            self._bindings[binding.id] = binding
            self._keyspaces[binding.mode][binding.sequence.tokens].append(binding.id)
            self._revision += 1
        if conflicts:
            record_event(
                "keymaps.override",
                level="debug",
                logger_name=self._logger_name,
                data={"binding": binding.id, "replaced": [c.id for c in conflicts]},
            )
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def conflicts_with(self, binding: Binding) -> List[Binding]:
        keyspace = self._keyspaces.get(binding.mode)
        if keyspace is None:
            return []
        conflicts = []
        for other_id in keyspace.get(binding.sequence.tokens, ()):
            other = self._bindings[other_id]
            if other.id != binding.id and other.requirements == binding.requirements:
                conflicts.append(other)
        return conflicts

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        keyspace = self._keyspaces.get(mode, {})
        for tokens in sorted(keyspace):
            for binding_id in keyspace[tokens]:
                yield self._bindings[binding_id]

    def describe(self, mode: str) -> list[tuple[str, str]]:
        """``(keys, description)`` rows for one keyspace, sorted by keys."""

        rows = {
            (binding.key_signature, binding.description or binding.action_id)
            for binding in self.iter_bindings(mode)
        }
        return sorted(rows)

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        keyspace = self._keyspaces.get(binding.mode)
        if keyspace is None:
            return
        ids = keyspace.get(binding.sequence.tokens)
        if ids and binding.id in ids:
            ids.remove(binding.id)
            if not ids:
                del keyspace[binding.sequence.tokens]


__all__ = ["KeymapConflictError", "KeymapRegistry"]
