"""Textual application hosting the diff viewer."""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from vig.diff import DiffSide
from vig.git import GitCommandError, Repository, RepositoryWatcher
from vig.github import GitHubClient
from vig.integrations import ClipboardWriter
from vig.navigation import PaneId, ViewKind
from vig.runtime import telemetry
from vig.runtime.config import ViewerConfig, load_config
from vig.session import Overlay, ViewerSession

from .controller import TextualUIHooks, TextualViewerAdapter
from .highlight import SyntaxHighlighter
from .render import (
    pane_title,
    render_diff_side,
    render_help,
    render_list,
    render_prompt,
    render_status,
    render_text,
)

EVENT_POLL_SECONDS = 0.05
_DIFF_COLUMNS = ((DiffSide.LEFT, "#diff-left"), (DiffSide.RIGHT, "#diff-right"))

_PLACEHOLDERS = {
    PaneId.FILE_TREE: "No changes",
    PaneId.BRANCH_LIST: "No branches",
    PaneId.REFLOG: "No reflog",
    PaneId.COMMIT_LOG: "No commits",
    PaneId.ISSUE_LIST: "No issues",
    PaneId.PR_LIST: "No pull requests",
    PaneId.DETAIL: "Select an issue or pull request and press Enter.",
}


def normalize_key(
    event: events.Key,
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """``(key, text, modifiers)`` in the token vocabulary of the keymaps."""

    key = event.key
    if key == "ctrl+q":
        return None
    if event.is_printable and event.character:
        character = event.character
        return ("space" if character == " " else character, character, ())
    *modifiers, name = key.split("+")
    if name == "return":
        name = "enter"
    return (name, None, tuple(modifiers))


class VigApp(App[None]):
    """Git view on the left and right, GitHub view behind ``ctrl+g``."""

    CSS = """
	Screen {
		layout: vertical;
		layers: base overlay;
	}

	#git-view, #github-view {
		height: 1fr;
	}

	#sidebar {
		width: 38%;
	}

	.pane {
		border: round $panel;
		height: 1fr;
		overflow: hidden;
	}

	.pane.focused {
		border: round $accent;
	}

	#commit_log {
		height: 35%;
	}

	#diff_view {
		height: 1fr;
		border: round $panel;
	}

	#diff_view.focused {
		border: round $accent;
	}

	.diff-side {
		width: 1fr;
		overflow: hidden;
	}

	#help {
		layer: overlay;
		dock: top;
		height: auto;
		max-height: 80%;
		margin: 2 8;
		padding: 1 2;
		background: $surface;
		border: heavy $accent;
		display: none;
	}

	#prompt-line {
		height: 1;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        session: ViewerSession,
        *,
        watcher: Optional[RepositoryWatcher] = None,
    ) -> None:
        super().__init__()
        self.session = session
        self.watcher = watcher
        self.highlighter = SyntaxHighlighter()
        self.adapter = TextualViewerAdapter(
            session, TextualUIHooks(refresh=self.refresh_view, quit=self.exit)
        )
        self._panes: Dict[PaneId, Static] = {}
        session.suspend = self.suspend

    def compose(self) -> ComposeResult:
        with Horizontal(id="git-view"):
            with Vertical(id="sidebar"):
                yield self._pane(PaneId.FILE_TREE)
                yield self._pane(PaneId.BRANCH_LIST)
                yield self._pane(PaneId.REFLOG)
            with Vertical(id="content"):
                yield self._pane(PaneId.COMMIT_LOG)
                with Horizontal(id="diff_view"):
                    yield Static("", id="diff-left", classes="diff-side")
                    yield Static("", id="diff-right", classes="diff-side")
        with Horizontal(id="github-view"):
            with Vertical(id="github-lists"):
                yield self._pane(PaneId.ISSUE_LIST)
                yield self._pane(PaneId.PR_LIST)
            yield self._pane(PaneId.DETAIL)
        yield Static("", id="help")
        yield Static("", id="prompt-line")
        yield Static("", id="status-line")

    def _pane(self, pane_id: PaneId) -> Static:
        widget = Static("", id=pane_id.value, classes="pane")
        self._panes[pane_id] = widget
        return widget

    def on_mount(self) -> None:
        self.session.request_refresh("startup")
        if self.watcher is not None:
            self.watcher.start()
        self.set_interval(EVENT_POLL_SECONDS, self.adapter.process_events)
        self.refresh_view()

    def on_unmount(self) -> None:
        if self.watcher is not None:
            self.watcher.stop()

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self.refresh_view)

    def on_key(self, event: events.Key) -> None:
        normalized = normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        event.prevent_default()

    def refresh_view(self) -> None:
        session = self.session
        snapshot = session.snapshot()
        github = snapshot.view is ViewKind.GITHUB
        self.query_one("#git-view").display = not github
        self.query_one("#github-view").display = github

        diff_box = self.query_one("#diff_view")
        self._resize(PaneId.DIFF_VIEW, diff_box.content_size.height)
        for pane_id, widget in self._panes.items():
            self._resize(pane_id, widget.content_size.height)
            self._render_pane(pane_id, widget, focused=pane_id is snapshot.focus)
        self._render_diff(focused=snapshot.focus is PaneId.DIFF_VIEW)

        help_widget = self.query_one("#help", Static)
        help_widget.display = snapshot.overlay is Overlay.HELP
        if help_widget.display:
            help_widget.update(render_help(session.help_lines()))
        self.query_one("#prompt-line", Static).update(render_prompt(snapshot))
        self.query_one("#status-line", Static).update(render_status(snapshot))

    def _resize(self, pane_id: PaneId, height: int) -> None:
        if height > 0:
            self.session.resize(pane_id, height)

    def _render_pane(self, pane_id: PaneId, widget: Static, *, focused: bool) -> None:
        pane = self.session.panes[pane_id]
        counts = [pane.search.status_label()]
        if pane_id.is_list and pane.buffer.lines:
            counts.append(f"{pane.cursor[0] + 1}/{len(pane.buffer.lines)}")
        widget.border_title = pane_title(pane_id.title, pane.mode.badge, counts)
        widget.set_class(focused, "focused")
        placeholder = self._placeholder(pane_id)
        if pane_id.is_list:
            widget.update(render_list(pane, focused=focused, placeholder=placeholder))
        else:
            widget.update(render_text(pane, focused=focused, placeholder=placeholder))

    def _placeholder(self, pane_id: PaneId) -> str:
        state = self.session.github_state
        if pane_id is PaneId.ISSUE_LIST and state.issues_loading:
            return "Loading issues..."
        if pane_id is PaneId.PR_LIST and state.prs_loading:
            return "Loading pull requests..."
        if pane_id.view is ViewKind.GITHUB and state.error:
            return state.error
        return _PLACEHOLDERS.get(pane_id, "")

    def _render_diff(self, *, focused: bool) -> None:
        session = self.session
        pane = session.panes[PaneId.DIFF_VIEW]
        file = session.selected_file()
        box = self.query_one("#diff_view")
        box.set_class(focused, "focused")
        title = file.path if file is not None else PaneId.DIFF_VIEW.title
        box.border_title = pane_title(
            title, pane.mode.badge, [pane.side.label, pane.search.status_label()]
        )
        for side, selector in _DIFF_COLUMNS:
            self.query_one(selector, Static).update(
                render_diff_side(
                    pane,
                    side,
                    file=file,
                    highlighter=self.highlighter,
                    focused=focused,
                )
            )


def build_session(
    config: ViewerConfig,
) -> Tuple[ViewerSession, Optional[RepositoryWatcher]]:
    repository = Repository(config.repo)
    github = GitHubClient(repository.root) if config.github else None
    session = ViewerSession(
        repository, config=config, github=github, clipboard=ClipboardWriter()
    )
    watcher = None
    if config.watch:
        watcher = RepositoryWatcher(
            repository, session.events, interval_ms=config.watch_interval_ms
        )
    return session, watcher


def main(argv: Optional[Sequence[str]] = None) -> None:
    config = load_config(argv)
    telemetry.configure(preset=config.log_preset)
    try:
        session, watcher = build_session(config)
    except GitCommandError as exc:
        raise SystemExit(f"vig: not a git repository: {exc.stderr or exc}") from exc
    VigApp(session, watcher=watcher).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
