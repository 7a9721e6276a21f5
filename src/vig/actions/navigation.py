"""Navigator-level actions. Each receives the ``PaneNavigator``."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vig.navigation import PaneNavigator


def focus_next(navigator: "PaneNavigator") -> bool:
    return navigator.cycle(1)


def focus_previous(navigator: "PaneNavigator") -> bool:
    return navigator.cycle(-1)


def window_down(navigator: "PaneNavigator") -> bool:
    return navigator.move_upper(1)


def window_up(navigator: "PaneNavigator") -> bool:
    return navigator.move_upper(-1)


def window_main(navigator: "PaneNavigator") -> bool:
    return navigator.enter_main()


def window_back(navigator: "PaneNavigator") -> bool:
    return navigator.back()


def toggle_view(navigator: "PaneNavigator") -> bool:
    return navigator.toggle_view()


__all__ = [
    "focus_next",
    "focus_previous",
    "toggle_view",
    "window_back",
    "window_down",
    "window_main",
    "window_up",
]
