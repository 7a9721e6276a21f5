"""Pane identities, per-pane state, and the focus navigator."""

from vig.buffer import Viewport

from .navigator import NAVIGATOR_KEYSPACE, NavigationResult, PaneNavigator
from .panes import (
    EDITABLE_PANES,
    GIT_CYCLE,
    GITHUB_CYCLE,
    UPPER_PANES,
    PaneId,
    PaneState,
    ViewKind,
    build_pane,
)

__all__ = [
    "EDITABLE_PANES",
    "GITHUB_CYCLE",
    "GIT_CYCLE",
    "NAVIGATOR_KEYSPACE",
    "NavigationResult",
    "PaneId",
    "PaneNavigator",
    "PaneState",
    "UPPER_PANES",
    "ViewKind",
    "Viewport",
    "build_pane",
]
