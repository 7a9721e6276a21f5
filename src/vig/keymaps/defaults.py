"""Built-in keymaps that seed every keyspace with the viewer's vocabulary.

Keyspaces are the registry ``mode`` field: one per pane mode, plus
``text_object`` (consulted after ``i``/``a`` while an operator is pending or a
visual selection is active), ``navigator`` (pane focus keys) and ``app``
(session keys tried last).
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

LINEWISE = {"linewise": True}
INCLUSIVE = {"inclusive": True}

VISUAL_KEYSPACES = ("visual", "visual_line")
CURSOR_KEYSPACES = ("normal",) + VISUAL_KEYSPACES

_MOTION_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("motion.line_down", ("j", "down"), "Line down"),
    ("motion.line_up", ("k", "up"), "Line up"),
    ("motion.char_left", ("h", "left"), "Character left"),
    ("motion.char_right", ("l", "right"), "Character right"),
    ("motion.half_page_down", ("ctrl+d", "pagedown"), "Half page down"),
    ("motion.half_page_up", ("ctrl+u", "pageup"), "Half page up"),
    ("motion.to_top", ("g g",), "Jump to top"),
    ("motion.to_bottom", ("G",), "Jump to bottom"),
    ("motion.word_forward", ("w",), "Next word start"),
    ("motion.word_end", ("e",), "Word end"),
    ("motion.word_backward", ("b",), "Previous word start"),
    ("motion.line_end", ("$", "end"), "End of line"),
    ("motion.line_start", ("0", "home"), "Start of line"),
)

_SCROLL_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("scroll.down", ("j", "down"), "Scroll down"),
    ("scroll.up", ("k", "up"), "Scroll up"),
    ("scroll.half_page_down", ("ctrl+d", "pagedown"), "Half page down"),
    ("scroll.half_page_up", ("ctrl+u", "pageup"), "Half page up"),
    ("scroll.top", ("g g", "home"), "Jump to top"),
    ("scroll.bottom", ("G", "end"), "Jump to bottom"),
    ("scroll.left", ("h", "left"), "Scroll left"),
    ("scroll.right", ("l", "right"), "Scroll right"),
)

_TEXT_OBJECT_KEYS: tuple[tuple[str, str, str], ...] = (
    ("w", "w", "word"),
    ('"', "double_quote", "double quotes"),
    ("'", "single_quote", "single quotes"),
    ("(", "paren", "parentheses"),
    (")", "paren", "parentheses"),
    ("{", "brace", "braces"),
    ("}", "brace", "braces"),
    ("[", "bracket", "brackets"),
    ("]", "bracket", "brackets"),
)

_OBJECT_PREFIXES = (("i", "inner", "Inside"), ("a", "a", "Around"))


def build_default_actions() -> tuple[ActionRef, ...]:
    """Every built-in action. Handlers are imported on first use."""

    from vig import actions
    from vig.motions import motions, text_objects

    motion_handlers = {
        "motion.line_down": (motions.line_down, LINEWISE),
        "motion.line_up": (motions.line_up, LINEWISE),
        "motion.char_left": (motions.char_left, {}),
        "motion.char_right": (motions.char_right, {}),
        "motion.half_page_down": (motions.half_page_down, LINEWISE),
        "motion.half_page_up": (motions.half_page_up, LINEWISE),
        "motion.to_top": (motions.to_top, LINEWISE),
        "motion.to_bottom": (motions.to_bottom, LINEWISE),
        "motion.word_forward": (motions.word_forward_motion, {}),
        "motion.word_end": (motions.word_end_motion, INCLUSIVE),
        "motion.word_backward": (motions.word_backward_motion, {}),
        "motion.line_end": (motions.line_end, INCLUSIVE),
        "motion.line_start": (motions.line_start, {}),
    }
    refs: list[ActionRef] = []
    for action_id, _keys, description in _MOTION_KEYS:
        handler, metadata = motion_handlers[action_id]
        refs.append(
            ActionRef(
                id=action_id,
                handler=handler,
                category="motion",
                description=description,
                metadata=metadata,
            )
        )

    scroll_handlers = {
        "scroll.down": actions.scroll.scroll_down,
        "scroll.up": actions.scroll.scroll_up,
        "scroll.half_page_down": actions.scroll.half_page_down,
        "scroll.half_page_up": actions.scroll.half_page_up,
        "scroll.top": actions.scroll.scroll_to_top,
        "scroll.bottom": actions.scroll.scroll_to_bottom,
        "scroll.left": actions.scroll.scroll_left,
        "scroll.right": actions.scroll.scroll_right,
    }
    refs.extend(
        ActionRef(
            id=action_id,
            handler=scroll_handlers[action_id],
            category="scroll",
            description=description,
        )
        for action_id, _keys, description in _SCROLL_KEYS
    )

    text_object_kinds = {
        "w": (text_objects.inner_word, text_objects.a_word),
        "double_quote": (
            text_objects.quoted('"', inner=True),
            text_objects.quoted('"', inner=False),
        ),
        "single_quote": (
            text_objects.quoted("'", inner=True),
            text_objects.quoted("'", inner=False),
        ),
        "paren": (
            text_objects.bracketed("(", ")", inner=True),
            text_objects.bracketed("(", ")", inner=False),
        ),
        "brace": (
            text_objects.bracketed("{", "}", inner=True),
            text_objects.bracketed("{", "}", inner=False),
        ),
        "bracket": (
            text_objects.bracketed("[", "]", inner=True),
            text_objects.bracketed("[", "]", inner=False),
        ),
    }
    seen: set[str] = set()
    for _key, kind, label in _TEXT_OBJECT_KEYS:
        if kind in seen:
            continue
        seen.add(kind)
        inner, around = text_object_kinds[kind]
        refs.append(
            ActionRef(
                id=f"object.inner_{kind}",
                handler=inner,
                category="text_object",
                description=f"Inside {label}",
            )
        )
        refs.append(
            ActionRef(
                id=f"object.a_{kind}",
                handler=around,
                category="text_object",
                description=f"Around {label}",
            )
        )

    core = actions.core
    nav = actions.navigation
    app = actions.app
    refs.extend(
        (
            ActionRef(
                "operator.yank",
                actions.yank_operator,
                category="operator",
                description="Yank",
            ),
            ActionRef(
                "mode.enter_normal",
                core.enter_normal_mode,
                category="mode",
                description="Enter normal mode",
            ),
            ActionRef(
                "mode.enter_visual",
                core.enter_visual_mode,
                category="mode",
                description="Enter visual mode",
            ),
            ActionRef(
                "mode.enter_visual_line",
                core.enter_visual_line_mode,
                category="mode",
                description="Enter visual line mode",
            ),
            ActionRef(
                "mode.exit_to_normal",
                core.exit_to_normal_mode,
                category="mode",
                description="Back to normal mode",
            ),
            ActionRef(
                "mode.exit_to_scroll",
                core.exit_to_scroll_mode,
                category="mode",
                description="Back to scroll mode",
            ),
            ActionRef(
                "pane.side_left",
                core.side_left,
                category="pane",
                description="Old side",
            ),
            ActionRef(
                "pane.side_right",
                core.side_right,
                category="pane",
                description="New side",
            ),
            ActionRef(
                "register.put_clipboard",
                actions.put_to_clipboard,
                category="register",
                description="Copy register to clipboard",
            ),
            ActionRef(
                "focus.next",
                nav.focus_next,
                category="navigator",
                description="Next pane",
            ),
            ActionRef(
                "focus.previous",
                nav.focus_previous,
                category="navigator",
                description="Previous pane",
            ),
            ActionRef(
                "window.down",
                nav.window_down,
                category="navigator",
                description="Next upper pane",
            ),
            ActionRef(
                "window.up",
                nav.window_up,
                category="navigator",
                description="Previous upper pane",
            ),
            ActionRef(
                "window.main",
                nav.window_main,
                category="navigator",
                description="Enter main pane",
            ),
            ActionRef(
                "window.back",
                nav.window_back,
                category="navigator",
                description="Back to last upper pane",
            ),
            ActionRef(
                "view.toggle",
                nav.toggle_view,
                category="navigator",
                description="Toggle Git / GitHub view",
            ),
            ActionRef("app.quit", app.quit_app, category="app", description="Quit"),
            ActionRef("app.help", app.show_help, category="app", description="Help"),
            ActionRef(
                "app.refresh", app.refresh, category="app", description="Refresh"
            ),
            ActionRef(
                "app.search", app.open_search, category="app", description="Search"
            ),
            ActionRef(
                "app.editor",
                app.open_editor,
                category="app",
                description="Open file in editor",
            ),
            ActionRef(
                "app.activate",
                app.activate,
                category="app",
                description="Open selected item",
            ),
            ActionRef(
                "app.toggle_directory",
                app.toggle_directory,
                category="app",
                description="Collapse or expand directory",
            ),
            ActionRef(
                "app.browser",
                app.open_browser,
                category="app",
                description="Open in browser",
            ),
        )
    )
    return tuple(refs)


def _bind(
    mode: str,
    keys: str,
    action_id: str,
    description: str = "",
    *,
    when: Sequence[str] = (),
) -> Binding:
    slug = keys.replace(" ", "_")
    return Binding(
        id=f"{mode}.{action_id}.{slug}",
        mode=mode,
        sequence=KeySequence.parse(keys),
        action_id=action_id,
        description=description,
        when=tuple(when),
    )


def _default_bindings() -> tuple[Binding, ...]:
    bindings: list[Binding] = []

    for action_id, keys, description in _SCROLL_KEYS:
        bindings.extend(_bind("scroll", key, action_id, description) for key in keys)
    bindings.append(_bind("scroll", "i", "mode.enter_normal", "Enter normal mode"))

    for mode in CURSOR_KEYSPACES:
        for action_id, keys, description in _MOTION_KEYS:
            bindings.extend(_bind(mode, key, action_id, description) for key in keys)
        bindings.append(_bind(mode, "y", "operator.yank", "Yank"))
        bindings.append(_bind(mode, "p", "register.put_clipboard", "Copy register"))
        bindings.append(
            _bind(mode, "H", "pane.side_left", "Old side", when=("diff_pane",))
        )
        bindings.append(
            _bind(mode, "L", "pane.side_right", "New side", when=("diff_pane",))
        )

    bindings.extend(
        (
            _bind("normal", "v", "mode.enter_visual", "Visual"),
            _bind("normal", "V", "mode.enter_visual_line", "Visual line"),
            _bind("normal", "escape", "mode.exit_to_scroll", "Scroll mode"),
            _bind("visual", "v", "mode.exit_to_normal", "Normal mode"),
            _bind("visual", "V", "mode.enter_visual_line", "Visual line"),
            _bind("visual", "escape", "mode.exit_to_normal", "Normal mode"),
            _bind("visual_line", "V", "mode.exit_to_normal", "Normal mode"),
            _bind("visual_line", "v", "mode.enter_visual", "Visual"),
            _bind("visual_line", "escape", "mode.exit_to_normal", "Normal mode"),
        )
    )

    for key, kind, label in _TEXT_OBJECT_KEYS:
        for prefix, name, verb in _OBJECT_PREFIXES:
            sequence = f"{prefix} {key}"
            action_id = f"object.{name}_{kind}"
            bindings.append(
                _bind("text_object", sequence, action_id, f"{verb} {label}")
            )

    bindings.extend(
        (
            _bind("navigator", "tab", "focus.next", "Next pane"),
            _bind("navigator", "shift+tab", "focus.previous", "Previous pane"),
            _bind("navigator", "ctrl+w j", "window.down", "Next upper pane"),
            _bind("navigator", "ctrl+w k", "window.up", "Previous upper pane"),
            _bind("navigator", "ctrl+w l", "window.main", "Enter main pane"),
            _bind("navigator", "ctrl+w h", "window.back", "Back to upper pane"),
            _bind("navigator", "ctrl+w w", "focus.next", "Next pane"),
            _bind("navigator", "ctrl+g", "view.toggle", "Git / GitHub view"),
            _bind("app", "q", "app.quit", "Quit"),
            _bind("app", "?", "app.help", "Help"),
            _bind("app", "r", "app.refresh", "Refresh"),
            _bind("app", "/", "app.search", "Search"),
            _bind("app", "e", "app.editor", "Open in editor"),
            _bind("app", "enter", "app.activate", "Open selected item"),
            _bind("app", "space", "app.toggle_directory", "Toggle directory"),
            _bind("app", "o", "app.browser", "Open in browser"),
        )
    )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _default_bindings()


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every keyspace."""

    for action in build_default_actions():
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_BINDINGS", "build_default_actions", "load_default_keymaps"]
