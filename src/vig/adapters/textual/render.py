"""Rich ``Text`` renderers for panes, the status line and the overlays."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from rich.style import Style
from rich.text import Text

from vig.buffer import YankKind
from vig.diff import AlignedRow, ChangeTag, DiffSide, FileDiff
from vig.modes import ModeKind
from vig.modes.selection import selection_range
from vig.navigation import PaneState
from vig.session import ViewSnapshot

from .highlight import SyntaxHighlighter

GUTTER_WIDTH = 6

REMOVED = Style(bgcolor="#3f1d22")
ADDED = Style(bgcolor="#1d3f27")
PLACEHOLDER = Style(color="grey30")
GUTTER = Style(color="grey50")
HUNK_GUTTER = Style(color="cyan", bold=True)
CURSOR = Style(reverse=True)
CURSOR_ROW = Style(bgcolor="grey23")
SELECTION = Style(bgcolor="#44475a")
MATCH = Style(color="black", bgcolor="yellow")
CURRENT_MATCH = Style(color="black", bgcolor="dark_orange", bold=True)
BADGES = {
    ModeKind.SCROLL: Style(color="black", bgcolor="grey62", bold=True),
    ModeKind.NORMAL: Style(color="black", bgcolor="dodger_blue1", bold=True),
    ModeKind.VISUAL: Style(color="black", bgcolor="orange1", bold=True),
    ModeKind.VISUAL_LINE: Style(color="black", bgcolor="orange1", bold=True),
}


def _join(rows: List[Text]) -> Text:
    return Text("\n", no_wrap=True, overflow="crop").join(rows)


def _visible_rows(pane: PaneState) -> range:
    viewport = pane.viewport
    end = min(viewport.offset_y + viewport.height, viewport.content_rows)
    return range(viewport.offset_y, end)


def _mark_span(
    line: Text, start: int, end: int, style: Style, *, shift: int, width: int
) -> None:
    lo = max(start - shift, 0)
    hi = min(end - shift, width)
    if hi > lo:
        line.stylize(style, GUTTER_WIDTH + lo, GUTTER_WIDTH + hi)


def _decorate(
    line: Text,
    pane: PaneState,
    row: int,
    *,
    field: Optional[int],
    focused: bool,
    active: bool = True,
) -> None:
    """Overlay selection, search matches and the cursor onto one row."""

    shift = pane.viewport.offset_x
    width = len(line) - GUTTER_WIDTH
    current = pane.search.current
    for match in pane.search.matches_on_row(row):
        if field is not None and match.field != field:
            continue
        style = CURRENT_MATCH if match == current else MATCH
        _mark_span(
            line, match.col_start, match.col_end, style, shift=shift, width=width
        )

    if not active:
        return
    selection = selection_range(pane.context)
    if selection is not None and selection.start[0] <= row <= selection.end[0]:
        first = selection.start[1] if row == selection.start[0] else 0
        last = selection.end[1] + 1 if row == selection.end[0] else width + shift
        if selection.kind is YankKind.LINE:
            first, last = 0, max(width + shift, 1)
        _mark_span(line, first, last, SELECTION, shift=shift, width=width)

    if not focused or pane.mode is ModeKind.SCROLL:
        return
    cursor_row, cursor_col = pane.cursor
    if cursor_row == row:
        line.stylize(CURSOR_ROW, 0, GUTTER_WIDTH)
        _mark_span(line, cursor_col, cursor_col + 1, CURSOR, shift=shift, width=width)


def render_list(
    pane: PaneState, *, focused: bool, placeholder: str = "(empty)"
) -> Text:
    """List panes highlight the selected row and every matching row."""

    lines = pane.buffer.lines
    if not lines:
        return Text(placeholder, style=PLACEHOLDER)
    matched = {match.row for match in pane.search.matches}
    current = pane.search.current
    selected = pane.cursor[0]
    rows: List[Text] = []
    for row in _visible_rows(pane):
        line = Text(lines[row][pane.viewport.offset_x :])
        if row in matched:
            hit = current is not None and current.row == row
            line.stylize(CURRENT_MATCH if hit else MATCH)
        if row == selected:
            line.stylize(CURSOR if focused else SELECTION)
        rows.append(line)
    return _join(rows)


def render_text(
    pane: PaneState, *, focused: bool, placeholder: str = "(empty)"
) -> Text:
    """Free text panes (Detail) with match spans and the mode cursor."""

    lines = pane.buffer.lines
    if not lines:
        return Text(placeholder, style=PLACEHOLDER)
    rows: List[Text] = []
    for row in _visible_rows(pane):
        line = Text(" " * GUTTER_WIDTH)
        line.append(lines[row][pane.viewport.offset_x :])
        _decorate(line, pane, row, field=None, focused=focused)
        rows.append(line)
    return _join(rows)


def _diff_gutter(row: AlignedRow, side: DiffSide, hunk_start: bool) -> Text:
    line = row.side(side)
    number = "" if line is None or line.line_no is None else str(line.line_no)
    style = HUNK_GUTTER if hunk_start else GUTTER
    return Text(f"{number:>{GUTTER_WIDTH - 1}} ", style=style)


def render_diff_side(
    pane: PaneState,
    side: DiffSide,
    *,
    file: Optional[FileDiff],
    highlighter: SyntaxHighlighter,
    focused: bool,
) -> Text:
    """One column of the side-by-side diff, cropped to the viewport."""

    if file is None:
        return Text("No changes", style=PLACEHOLDER)
    if file.is_binary:
        return Text(f"Binary file {file.path} differs", style=PLACEHOLDER)
    aligned = pane.aligned
    if aligned is None or not aligned.rows:
        return Text(f"{file.path}: no textual changes", style=PLACEHOLDER)

    path = file.old_path if side is DiffSide.LEFT and file.old_path else file.path
    starts = set(aligned.hunk_starts)
    field = 0 if side is DiffSide.LEFT else 1
    active = focused and side is pane.side
    rows: List[Text] = []
    for index in _visible_rows(pane):
        row = aligned.rows[index]
        line = _diff_gutter(row, side, index in starts)
        content = row.side(side)
        if content is None:
            line.append("╱" * 4, style=PLACEHOLDER)
        else:
            body = highlighter.highlight(content.text, path)
            line.append_text(body[pane.viewport.offset_x :])
            if content.tag is ChangeTag.REMOVED:
                line.stylize(REMOVED, GUTTER_WIDTH)
            elif content.tag is ChangeTag.ADDED:
                line.stylize(ADDED, GUTTER_WIDTH)
        _decorate(
            line, pane, index, field=field, focused=active, active=side is pane.side
        )
        rows.append(line)
    return _join(rows)


def render_status(snapshot: ViewSnapshot) -> Text:
    out = Text(no_wrap=True, overflow="ellipsis")
    fields = snapshot.status_fields
    out.append(f" {fields[0]} ", style=BADGES[snapshot.mode])
    for field in fields[1:]:
        out.append("  ")
        out.append(field)
    if snapshot.message:
        out.append("  ")
        out.append(snapshot.message, style="bold")
    return out


def render_prompt(snapshot: ViewSnapshot) -> Text:
    if snapshot.prompt is None:
        return Text("")
    return Text(snapshot.prompt, style="bold")


def render_help(lines: Iterable[str]) -> Text:
    out = Text()
    for index, line in enumerate(lines):
        if index:
            out.append("\n")
        heading = bool(line) and not line.startswith(" ")
        out.append(line, style="bold underline" if heading else "")
    out.append("\n\nPress any key to close.", style=PLACEHOLDER)
    return out


def pane_title(title: str, badge: str, counts: Sequence[str] = ()) -> str:
    extra = " ".join(part for part in counts if part)
    return f"{title} [{badge}] {extra}".rstrip()


__all__ = [
    "pane_title",
    "render_diff_side",
    "render_help",
    "render_list",
    "render_prompt",
    "render_status",
    "render_text",
]
