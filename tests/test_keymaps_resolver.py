from __future__ import annotations

from typing import Iterable

from vig.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    default_resolver,
)


def resolver_for(bindings: Iterable[Binding]) -> KeymapResolver:
    bindings = list(bindings)
    registry = KeymapRegistry()
    for action_id in sorted({binding.action_id for binding in bindings}):
        registry.register_action(
            ActionRef(id=action_id, handler=lambda *a, **k: None, category="motion")
        )
    for binding in bindings:
        registry.register_binding(binding)
    return KeymapResolver(registry)


def scroll_binding(
    binding_id: str,
    keys: str,
    action_id: str,
    *,
    when: tuple[str, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode="scroll",
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=when,
        priority=priority,
    )


TOP = scroll_binding("scroll.gg", "g g", "scroll.top")
BOTTOM = scroll_binding("scroll.G", "G", "scroll.bottom")


def test_complete_sequence_matches() -> None:
    result = resolver_for([TOP, BOTTOM]).resolve("scroll", ["g", "g"])

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding is TOP
    assert result.match.action.id == "scroll.top"


def test_prefix_waits_for_the_next_key() -> None:
    resolver = resolver_for(
        [TOP, scroll_binding("scroll.ge", "g e", "scroll.word_end_back")]
    )

    result = resolver.resolve("scroll", ["g"])

    assert result.status == "pending"
    assert result.match is None
    assert result.next_expected == ("e", "g")


def test_dead_ends_and_other_keyspaces_miss() -> None:
    resolver = resolver_for([TOP])

    assert resolver.resolve("scroll", ["g", "x"]).status == "miss"
    assert resolver.resolve("scroll", []).status == "miss"
    assert resolver.resolve("normal", ["g", "g"]).status == "miss"


def test_flags_choose_between_conditional_bindings() -> None:
    side = scroll_binding(
        "scroll.H.diff", "H", "pane.side_left", when=("diff_pane",)
    )
    screen = scroll_binding(
        "scroll.H.list", "H", "scroll.screen_top", when=("!diff_pane",)
    )
    resolver = resolver_for([side, screen])

    in_diff = resolver.resolve("scroll", ["H"], context={"diff_pane": True})
    in_list = resolver.resolve("scroll", ["H"], context={})

    assert in_diff.match is not None and in_diff.match.binding is side
    assert in_list.match is not None and in_list.match.binding is screen


def test_rejected_sequence_that_prefixes_others_stays_pending() -> None:
    resolver = resolver_for(
        [
            scroll_binding(
                "scroll.g.diff", "g", "scroll.diff_only", when=("diff_pane",)
            ),
            TOP,
        ]
    )

    assert resolver.resolve("scroll", ["g"], context={}).status == "pending"
    matched = resolver.resolve("scroll", ["g"], context={"diff_pane": True})
    assert matched.status == "match"


def test_higher_priority_wins_when_both_apply() -> None:
    low = scroll_binding("scroll.G.a", "G", "scroll.bottom", when=("a",))
    high = scroll_binding("scroll.G.b", "G", "scroll.end", when=("b",), priority=5)
    resolver = resolver_for([low, high])

    result = resolver.resolve("scroll", ["G"], context={"a": True, "b": True})

    assert result.match is not None
    assert result.match.binding is high


def test_registry_edits_are_picked_up() -> None:
    resolver = resolver_for([TOP])
    assert resolver.resolve("scroll", ["G"]).status == "miss"

    resolver.registry.register_action(
        ActionRef(id="scroll.bottom", handler=lambda *a, **k: None)
    )
    resolver.registry.register_binding(BOTTOM)

    assert resolver.resolve("scroll", ["G"]).status == "match"

    resolver.registry.unregister_binding(BOTTOM.id)

    assert resolver.resolve("scroll", ["G"]).status == "miss"


def test_default_window_chords() -> None:
    resolver = default_resolver()

    pending = resolver.resolve("navigator", ["ctrl+w"])
    assert pending.status == "pending"
    assert set(pending.next_expected) >= {"h", "j", "k", "l"}

    result = resolver.resolve("navigator", ["ctrl+w", "l"])
    assert result.match is not None
    assert result.match.action.id == "window.main"


def test_default_text_objects_after_prefix() -> None:
    resolver = default_resolver()

    result = resolver.resolve("text_object", ["i", '"'])

    assert result.match is not None
    assert result.match.action.id == "object.inner_double_quote"
    assert result.match.action.category == "text_object"
