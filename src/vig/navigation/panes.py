"""Pane identities and the per-pane state the navigator moves between."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from vig.buffer import Buffer, Cursor, Viewport, YankRegister, clamp_cursor
from vig.diff import AlignedDiff, DiffLine, DiffSide
from vig.keymaps.resolver import KeymapResolver
from vig.modes import (
    ALL_MODES,
    ModeBus,
    ModeContext,
    ModeKind,
    ModeManager,
    ScrollMode,
)
from vig.search import Row, SearchEngine, SearchMatch, SearchOrigin


class ViewKind(str, Enum):
    GIT = "git"
    GITHUB = "github"


class PaneId(str, Enum):
    FILE_TREE = "file_tree"
    BRANCH_LIST = "branch_list"
    REFLOG = "reflog"
    COMMIT_LOG = "commit_log"
    DIFF_VIEW = "diff_view"
    ISSUE_LIST = "issue_list"
    PR_LIST = "pr_list"
    DETAIL = "detail"

    @property
    def title(self) -> str:
        return _TITLES[self]

    @property
    def view(self) -> ViewKind:
        return ViewKind.GITHUB if self in GITHUB_CYCLE else ViewKind.GIT

    @property
    def is_upper(self) -> bool:
        return self in UPPER_PANES

    @property
    def is_list(self) -> bool:
        return self not in (PaneId.DIFF_VIEW, PaneId.DETAIL)


_TITLES = {
    PaneId.FILE_TREE: "Files",
    PaneId.BRANCH_LIST: "Branches",
    PaneId.REFLOG: "Reflog",
    PaneId.COMMIT_LOG: "Commits",
    PaneId.DIFF_VIEW: "Diff",
    PaneId.ISSUE_LIST: "Issues",
    PaneId.PR_LIST: "Pull Requests",
    PaneId.DETAIL: "Detail",
}

GIT_CYCLE = (
    PaneId.FILE_TREE,
    PaneId.BRANCH_LIST,
    PaneId.REFLOG,
    PaneId.COMMIT_LOG,
    PaneId.DIFF_VIEW,
)
GITHUB_CYCLE = (PaneId.ISSUE_LIST, PaneId.PR_LIST, PaneId.DETAIL)
UPPER_PANES = (
    PaneId.FILE_TREE,
    PaneId.BRANCH_LIST,
    PaneId.REFLOG,
    PaneId.ISSUE_LIST,
    PaneId.PR_LIST,
)
EDITABLE_PANES = frozenset({PaneId.FILE_TREE, PaneId.DIFF_VIEW})


def _text_or_none(line: Optional[DiffLine]) -> Optional[str]:
    return line.text if line is not None else None


@dataclass(slots=True)
class PaneState:
    """Content, viewport, search, and mode state of one pane.

    DiffView shows one side of an ``AlignedDiff`` in its buffer at a time so
    motions address that side only; its search rows carry both sides.
    """

    id: PaneId
    context: ModeContext
    manager: ModeManager
    search: SearchEngine
    side: DiffSide = DiffSide.RIGHT
    aligned: Optional[AlignedDiff] = None
    rows: tuple[Row, ...] = field(default_factory=tuple)

    @property
    def mode(self) -> ModeKind:
        return self.manager.active_kind

    @property
    def buffer(self) -> Buffer:
        return self.context.buffer

    @property
    def viewport(self) -> Viewport:
        return self.context.viewport

    @property
    def cursor(self) -> Cursor:
        return self.context.cursor

    @property
    def is_empty(self) -> bool:
        return not self.buffer.lines

    @property
    def selected_row(self) -> Optional[int]:
        """Row the pane is pointing at: the cursor in lists, the top otherwise."""

        if self.is_empty:
            return None
        if self.id.is_list or self.mode is not ModeKind.SCROLL:
            return self.cursor[0]
        return self.viewport.offset_y

    def set_content(
        self, lines: Sequence[str], rows: Optional[Sequence[Row]] = None
    ) -> None:
        lines = tuple(lines)
        self.rows = tuple(rows) if rows is not None else lines
        self.buffer.set_lines(lines)
        width = max((len(line) for line in lines), default=0)
        self.viewport.set_content(len(lines), width)
        if self.is_empty:
            self.manager.reset()
        self.search.update_rows(self.rows)

    def set_diff(self, aligned: AlignedDiff) -> None:
        self.aligned = aligned
        rows = tuple(
            (_text_or_none(row.left), _text_or_none(row.right)) for row in aligned.rows
        )
        self.set_content(aligned.side_lines(self.side), rows)
        self.viewport.set_content(len(aligned), aligned.max_width)

    def switch_side(self, side: DiffSide) -> bool:
        if self.aligned is None or side is self.side:
            return False
        self.side = side
        self.buffer.set_lines(self.aligned.side_lines(side))
        return True

    def origin(self) -> SearchOrigin:
        return SearchOrigin(offset_y=self.viewport.offset_y, cursor=self.cursor)

    def show_match(self, match: SearchMatch) -> None:
        if self.id is PaneId.DIFF_VIEW:
            self.switch_side(DiffSide.LEFT if match.field == 0 else DiffSide.RIGHT)
        target = clamp_cursor(self.buffer.lines, match.row, match.col_start)
        self.buffer.state.set_cursor(*target)
        self.viewport.center_on(match.row)

    def restore(self, origin: SearchOrigin) -> None:
        self.buffer.state.set_cursor(*clamp_cursor(self.buffer.lines, *origin.cursor))
        self.viewport.scroll_to(origin.offset_y)


def build_pane(
    pane_id: PaneId,
    *,
    registers: YankRegister,
    bus: ModeBus,
    resolver: KeymapResolver,
) -> PaneState:
    context = ModeContext(
        buffer=Buffer(name=pane_id.value),
        registers=registers,
        bus=bus,
        list_selection=pane_id.is_list,
    )
    context.extras["keymap_flags"] = {
        "diff_pane": pane_id is PaneId.DIFF_VIEW,
        "visual_active": False,
    }
    manager = ModeManager(context, keymap_resolver=resolver)
    modes = ALL_MODES if pane_id in EDITABLE_PANES else (ScrollMode,)
    for mode_cls in modes:
        manager.register_mode(mode_cls)
    search = SearchEngine(per_row=pane_id is not PaneId.DIFF_VIEW)
    return PaneState(id=pane_id, context=context, manager=manager, search=search)


__all__ = [
    "EDITABLE_PANES",
    "GITHUB_CYCLE",
    "GIT_CYCLE",
    "PaneId",
    "PaneState",
    "UPPER_PANES",
    "ViewKind",
    "build_pane",
]
