import pytest

from vig.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
    normalize_token,
)


def noop(*args: object, **kwargs: object) -> None:
    return None


def registry_with(*action_ids: str) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in action_ids:
        registry.register_action(ActionRef(id=action_id, handler=noop))
    return registry


def bind(
    binding_id: str,
    keys: str = "y y",
    *,
    mode: str = "normal",
    action_id: str = "operator.yank_line",
    when: tuple[str, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        when=when,
    )


@pytest.mark.parametrize(
    ("raw", "token"),
    [
        ("j", "j"),
        ("Ctrl+w", "ctrl+w"),
        ("Shift+Ctrl+Tab", "ctrl+shift+Tab"),
        ("+", "+"),
        ("ctrl++", "ctrl++"),
    ],
)
def test_tokens_are_normalized(raw: str, token: str) -> None:
    assert normalize_token(raw) == token


def test_sequence_parses_space_separated_keys() -> None:
    sequence = KeySequence.parse("ctrl+w  j")

    assert sequence.tokens == ("ctrl+w", "j")
    assert len(sequence) == 2
    assert str(sequence) == "ctrl+w j"


def test_empty_sequence_is_rejected() -> None:
    with pytest.raises(ValueError):
        KeySequence(())


def test_binding_conditions_gate_on_flags() -> None:
    diff_only = bind("normal.side.H", "H", when=("diff_pane", " diff_pane "))
    lists_only = bind("normal.side.L", "L", when=("!diff_pane",))

    assert diff_only.when == ("diff_pane",)
    assert diff_only.allows({"diff_pane": True})
    assert not diff_only.allows({})
    assert lists_only.allows({})
    assert not lists_only.allows({"diff_pane": True})


def test_yank_line_binding_is_listed_in_its_keyspace() -> None:
    registry = registry_with("operator.yank_line")
    binding = registry.register_binding(bind("normal.yy"))

    assert len(registry) == 1
    assert registry.keyspaces() == ("normal",)
    assert list(registry.iter_bindings("normal")) == [binding]
    assert list(registry.iter_bindings("visual")) == []


def test_same_keys_same_conditions_conflict() -> None:
    registry = registry_with("operator.yank_line")
    registry.register_binding(bind("normal.yy"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(bind("normal.yy.again"))

    assert [c.id for c in excinfo.value.conflicts] == ["normal.yy"]
    assert "normal: 'y y' for normal.yy.again" in str(excinfo.value)


def test_reusing_a_binding_id_is_a_value_error() -> None:
    registry = registry_with("operator.yank_line")
    registry.register_binding(bind("normal.yy"))

    with pytest.raises(ValueError):
        registry.register_binding(bind("normal.yy", "Y"))


def test_keyspaces_and_conditions_separate_bindings() -> None:
    registry = registry_with("operator.yank_line")

    registry.register_binding(bind("normal.yy"))
    registry.register_binding(bind("scroll.yy", mode="scroll"))
    registry.register_binding(bind("normal.yy.diff", when=("diff_pane",)))
    registry.register_binding(bind("normal.yy.list", when=("!diff_pane",)))

    assert len(registry) == 4
    assert registry.conflicts_with(bind("other", when=("diff_pane",)))[0].id == (
        "normal.yy.diff"
    )


def test_replace_evicts_the_colliding_binding() -> None:
    registry = registry_with("operator.yank_line", "mode.enter_visual")
    registry.register_binding(bind("normal.v", "v", action_id="mode.enter_visual"))
    remap = bind("normal.v.remap", "v")

    registry.register_binding(remap, replace=True)

    assert list(registry.iter_bindings()) == [remap]
    with pytest.raises(KeyError):
        registry.get_binding("normal.v")


def test_binding_to_an_unregistered_action_fails() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(bind("normal.yy"))
    assert len(registry) == 0


def test_unregister_moves_the_revision() -> None:
    registry = registry_with("operator.yank_line")
    binding = registry.register_binding(bind("normal.yy"))
    revision = registry.revision()

    assert registry.unregister_binding("normal.yy") == binding
    assert registry.unregister_binding("normal.yy") is None
    assert len(registry) == 0
    assert registry.keyspaces() == ()
    assert registry.revision() == revision + 1


def test_default_keymaps_cover_every_keyspace() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    assert registry.keyspaces() == (
        "app",
        "navigator",
        "normal",
        "scroll",
        "text_object",
        "visual",
        "visual_line",
    )
    binding = registry.get_binding("normal.mode.enter_visual.v")
    assert binding.action_id == "mode.enter_visual"
    window = registry.get_binding("navigator.window.down.ctrl+w_j")
    assert window.sequence.tokens == ("ctrl+w", "j")


def test_per_mode_overrides_replace_defaults() -> None:
    registry = KeymapRegistry()
    remap = Binding(
        id="normal.mode.enter_visual.v",
        mode="normal",
        sequence=KeySequence.parse("x"),
        action_id="mode.enter_visual",
    )

    load_default_keymaps(registry, per_mode_overrides={"normal": (remap,)})

    assert registry.get_binding("normal.mode.enter_visual.v").sequence.tokens == (
        "x",
    )


def test_per_mode_override_must_target_its_mode() -> None:
    registry = KeymapRegistry()
    stray = Binding(
        id="scroll.stray",
        mode="scroll",
        sequence=KeySequence.parse("x"),
        action_id="mode.enter_normal",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={"normal": (stray,)})


def test_describe_lists_keys_for_help() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    described = dict(registry.describe("app"))

    assert described["q"] == "Quit"
    assert described["?"] == "Help"
