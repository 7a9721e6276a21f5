"""Top-level application object.

``ViewerSession`` owns every piece of process-scoped state: the yank
register, the panes and their navigator, the diff store, the listings, the
GitHub cache, the overlays and the transient status message. Keys and
background events are both applied here, one at a time, from the input
thread; renderers read ``snapshot()`` plus the panes after each step.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import (
    Any,
    Callable,
    ContextManager,
    Dict,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Type,
)

from vig.buffer import YankRegister
from vig.diff import DiffSide, DiffSnapshot, DiffStore, FileDiff, FileStatus
from vig.git import (
    BranchInfo,
    CommitInfo,
    FileTree,
    GitCommandError,
    ReflogEntry,
    TreeEntry,
)
from vig.github import ISSUE, PULL_REQUEST, GitHubClient, GitHubError, GitHubState
from vig.integrations import ClipboardWriter, EditorLaunchError, EditorLauncher
from vig.keymaps import KeymapResolver, default_resolver
from vig.modes import KeyInput, ModeBus, ModeKind
from vig.modes.keymap_helpers import key_to_token
from vig.navigation import PaneId, PaneNavigator, PaneState, ViewKind, build_pane
from vig.runtime import telemetry
from vig.runtime.config import ViewerConfig
from vig.runtime.events import (
    AuthChecked,
    CollaboratorFailed,
    CommitsLoaded,
    DetailLoaded,
    DiffLoaded,
    Event,
    EventQueue,
    IssuesLoaded,
    ListingsLoaded,
    PullRequestsLoaded,
    RefreshRequested,
)
from vig.runtime.loader import BackgroundLoader

APP_KEYSPACE = "app"
HELP_SECTIONS = (
    ("Scroll", "scroll"),
    ("Normal", "normal"),
    ("Visual", "visual"),
    ("Text objects", "text_object"),
    ("Panes", "navigator"),
    ("Application", "app"),
)
GIT_SOURCES = frozenset({"diff", "listings", "commits"})


class VersionControl(Protocol):
    root: Path

    def diff(
        self, base_ref: Optional[str] = None, path_filter: Optional[str] = None
    ) -> List[FileDiff]: ...

    def branch_name(self) -> str: ...

    def list_branches(self) -> List[BranchInfo]: ...

    def list_commits(self, ref: str = "HEAD", limit: int = 100) -> List[CommitInfo]: ...

    def list_reflog(self, limit: int = 50) -> List[ReflogEntry]: ...

    def switch(self, branch_name: str) -> None: ...

    def delete_branch(self, branch_name: str, force: bool = False) -> None: ...


class Overlay(str, Enum):
    NONE = "none"
    HELP = "help"
    BRANCH_MENU = "branch_menu"
    SEARCH = "search"


@dataclass(slots=True)
class BranchMenu:
    branch: str
    confirming: bool = False

    def prompt(self, base_ref: Optional[str]) -> str:
        if self.confirming:
            return f"Delete branch {self.branch}? (y/n)"
        base = "unset base" if base_ref == self.branch else "set as base"
        return f"{self.branch}: [b] {base}  [s] switch  [d] delete  [esc] cancel"


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Read-only summary of the session for the renderer's chrome."""

    view: ViewKind
    focus: PaneId
    mode: ModeKind
    side: Optional[DiffSide]
    position: str
    pending: str
    branch: str
    base_ref: Optional[str]
    additions: int
    deletions: int
    search: str
    overlay: Overlay
    prompt: Optional[str]
    message: Optional[str]
    selected_path: Optional[str]

    @property
    def status_fields(self) -> Tuple[str, ...]:
        fields = [self.mode.badge]
        if self.side is not None:
            fields.append(self.side.label)
        fields.append(self.position)
        if self.pending:
            fields.append(self.pending)
        fields.append(self.branch or "-")
        fields.append(f"base: {self.base_ref or 'HEAD'}")
        fields.append(f"+{self.additions} -{self.deletions}")
        if self.search:
            fields.append(self.search)
        return tuple(fields)


def _branch_row(branch: BranchInfo) -> str:
    return f"{'*' if branch.is_current else ' '} {branch.name}"


def _commit_row(commit: CommitInfo) -> str:
    return f"{commit.short_hash} {commit.date} {commit.subject} ({commit.author})"


def _reflog_row(entry: ReflogEntry) -> str:
    return f"{entry.short_hash} {entry.selector} {entry.action}: {entry.message}"


class ViewerSession:
    def __init__(
        self,
        repository: VersionControl,
        *,
        config: Optional[ViewerConfig] = None,
        github: Optional[GitHubClient] = None,
        clipboard: Optional[ClipboardWriter] = None,
        editor: Optional[EditorLauncher] = None,
        events: Optional[EventQueue] = None,
        loader_cls: Type[BackgroundLoader] = BackgroundLoader,
        resolver: Optional[KeymapResolver] = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.repository = repository
        self.github = github if self.config.github else None
        self.clipboard = clipboard
        self.editor = editor or EditorLauncher(repository.root)
        self.events = (
            events if events is not None else EventQueue(self.config.queue_size)
        )
        self.loader = loader_cls(self.events)
        self.logger = telemetry.get_logger("vig.session")

        self.registers = YankRegister()
        if clipboard is not None:
            self.registers.subscribe(clipboard)
        self.bus = ModeBus()
        self.resolver = resolver or default_resolver()
        self.panes: Dict[PaneId, PaneState] = {
            pane_id: build_pane(
                pane_id, registers=self.registers, bus=self.bus, resolver=self.resolver
            )
            for pane_id in PaneId
        }
        self.navigator = PaneNavigator(
            self.panes, resolver=self.resolver, available=self.is_available
        )

        self.store = DiffStore()
        self.tree = FileTree()
        self.branches: Tuple[BranchInfo, ...] = ()
        self.reflog: Tuple[ReflogEntry, ...] = ()
        self.commits: Tuple[CommitInfo, ...] = ()
        self.commits_ref = "HEAD"
        self.base_ref = self.config.base_ref
        self.branch = ""
        self.selected_path: Optional[str] = None
        self.github_state = GitHubState()

        self.overlay = Overlay.NONE
        self.branch_menu: Optional[BranchMenu] = None
        self.search_input = ""
        self.status: Optional[str] = None
        self.should_quit = False
        self.suspend: Callable[[], ContextManager[Any]] = nullcontext

        self._generation = 0
        self._diff_generation = 0
        self._listing_generation = 0
        self._commits_requested = 0
        self._commits_generation = 0
        self._shown_diff: Optional[Tuple[Optional[str], int]] = None

    # -- state queries -------------------------------------------------

    @property
    def focus(self) -> PaneId:
        return self.navigator.focus

    @property
    def pane(self) -> PaneState:
        return self.navigator.pane

    @property
    def diff(self) -> DiffSnapshot:
        return self.store.current

    def is_available(self, pane_id: PaneId) -> bool:
        if pane_id is PaneId.REFLOG:
            return bool(self.reflog)
        if pane_id is PaneId.COMMIT_LOG:
            return bool(self.commits)
        if pane_id.view is ViewKind.GITHUB:
            return self.github is not None
        return True

    def selected_tree_entry(self) -> Optional[TreeEntry]:
        row = self.panes[PaneId.FILE_TREE].selected_row
        if row is None or row >= len(self.tree.entries):
            return None
        return self.tree.entries[row]

    def selected_file(self) -> Optional[FileDiff]:
        return self.diff.file(self.selected_path)

    def _selected(self, pane_id: PaneId, items: Sequence[Any]) -> Optional[Any]:
        row = self.panes[pane_id].selected_row
        if row is None or row >= len(items):
            return None
        return items[row]

    def help_lines(self) -> List[str]:
        registry = self.resolver.registry
        lines: List[str] = []
        for title, keyspace in HELP_SECTIONS:
            rows = registry.describe(keyspace)
            if not rows:
                continue
            if lines:
                lines.append("")
            lines.append(title)
            lines.extend(f"  {keys:<14} {description}" for keys, description in rows)
        return lines

    def snapshot(self) -> ViewSnapshot:
        pane = self.pane
        stats = self.diff.stats
        prompt = None
        if self.overlay is Overlay.SEARCH:
            prompt = f"/{self.search_input}"
        elif self.overlay is Overlay.BRANCH_MENU and self.branch_menu is not None:
            prompt = self.branch_menu.prompt(self.base_ref)
        chord = " ".join(self.navigator.chord)
        return ViewSnapshot(
            view=self.navigator.view,
            focus=pane.id,
            mode=pane.mode,
            side=pane.side if pane.id is PaneId.DIFF_VIEW else None,
            position=pane.viewport.position_label(),
            pending=chord or pane.manager.pending_display(),
            branch=self.branch,
            base_ref=self.base_ref,
            additions=stats.additions,
            deletions=stats.deletions,
            search=pane.search.status_label(),
            overlay=self.overlay,
            prompt=prompt,
            message=self.status,
            selected_path=self.selected_path,
        )

    def resize(self, pane_id: PaneId, height: int) -> None:
        self.panes[pane_id].viewport.resize(height)

    # -- key handling --------------------------------------------------

    def handle_key(self, key: KeyInput) -> bool:
        """Apply one key; returns whether anything consumed it."""

        self.status = None
        token = key_to_token(key)
        if self.overlay is Overlay.HELP:
            self.overlay = Overlay.NONE
            return True
        if self.overlay is Overlay.BRANCH_MENU:
            return self._branch_menu_key(token)
        if self.overlay is Overlay.SEARCH:
            return self._search_prompt_key(key, token)

        view = self.navigator.view
        result = self.navigator.dispatch(key)
        consumed = result.consumed
        if result.message:
            self.status = result.message
        elif result.mode_result is not None and result.mode_result.message:
            self.status = result.mode_result.message
        if not consumed:
            consumed = self._app_key(token)
        if self.navigator.view is not view:
            self._entered_view()
        self._take_clipboard_error()
        self._sync_selection()
        return consumed

    def _app_key(self, token: str) -> bool:
        result = self.resolver.resolve(APP_KEYSPACE, (token,))
        if result.status != "match" or result.match is None:
            return False
        message = result.match.action(self)
        if message:
            self.status = message
        return True

    def _take_clipboard_error(self) -> None:
        if self.clipboard is None:
            return
        error = self.clipboard.take_error()
        if error:
            self.status = error

    # -- actions invoked from the app keyspace ------------------------

    def request_quit(self) -> None:
        self.should_quit = True

    def toggle_help(self) -> None:
        self.overlay = Overlay.NONE if self.overlay is Overlay.HELP else Overlay.HELP

    def open_search_prompt(self) -> None:
        self.overlay = Overlay.SEARCH
        self.search_input = ""

    def activate(self) -> Optional[str]:
        pane_id = self.focus
        if pane_id is PaneId.FILE_TREE:
            entry = self.selected_tree_entry()
            if entry is None:
                return None
            if entry.is_dir:
                return self.toggle_directory()
            self.navigator.focus_pane(PaneId.DIFF_VIEW)
            return None
        if pane_id is PaneId.BRANCH_LIST:
            branch = self._selected(pane_id, self.branches)
            if branch is not None:
                self.branch_menu = BranchMenu(branch.name)
                self.overlay = Overlay.BRANCH_MENU
            return None
        if pane_id is PaneId.REFLOG:
            entry = self._selected(pane_id, self.reflog)
            if entry is None:
                return None
            self.set_base(entry.hash)
            return f"Base set to {entry.selector} ({entry.short_hash})"
        if pane_id is PaneId.COMMIT_LOG:
            commit = self._selected(pane_id, self.commits)
            if commit is None:
                return None
            self.set_base(commit.hash)
            return f"Base set to {commit.short_hash}"
        if pane_id is PaneId.ISSUE_LIST:
            issue = self._selected(pane_id, self.github_state.issues)
            if issue is not None:
                self._show_detail(ISSUE, issue.number)
            return None
        if pane_id is PaneId.PR_LIST:
            pull = self._selected(pane_id, self.github_state.pull_requests)
            if pull is not None:
                self._show_detail(PULL_REQUEST, pull.number)
            return None
        return None

    def toggle_directory(self) -> Optional[str]:
        if self.focus is not PaneId.FILE_TREE:
            return None
        entry = self.selected_tree_entry()
        if entry is None or not entry.is_dir:
            return None
        self.tree.toggle(entry.path)
        self._render_tree(keep=entry.path)
        return None

    def open_editor(self) -> Optional[str]:
        if self.focus not in (PaneId.FILE_TREE, PaneId.DIFF_VIEW):
            return None
        if self.focus is PaneId.FILE_TREE:
            entry = self.selected_tree_entry()
            if entry is None or entry.is_dir:
                return "No file selected"
        file = self.selected_file()
        if file is None:
            return "No file selected"
        if file.status is FileStatus.DELETED:
            return f"{file.path} was deleted"
        line = None
        if self.focus is PaneId.DIFF_VIEW:
            pane = self.pane
            row = pane.selected_row
            if pane.aligned is not None and row is not None:
                line = pane.aligned.line_number(row, DiffSide.RIGHT)
        try:
            with self.suspend():
                message = self.editor.open(file.path, line)
        except EditorLaunchError as exc:
            self._collaborator_failure("editor", str(exc))
            return str(exc)
        self.request_refresh("editor")
        return message

    def open_in_browser(self) -> Optional[str]:
        if self.github is None or self.navigator.view is not ViewKind.GITHUB:
            return None
        item: Any = None
        if self.focus is PaneId.ISSUE_LIST:
            item = self._selected(self.focus, self.github_state.issues)
        elif self.focus is PaneId.PR_LIST:
            item = self._selected(self.focus, self.github_state.pull_requests)
        elif self.focus is PaneId.DETAIL:
            item = self.github_state.current_detail()
        if item is None or not item.url:
            return "Nothing to open"
        self.github.open_in_browser(item.url)
        return f"Opened #{item.number} in browser"

    def set_base(self, base_ref: Optional[str]) -> None:
        self.base_ref = base_ref
        self.request_refresh("base")

    # -- overlays ------------------------------------------------------

    def _branch_menu_key(self, token: str) -> bool:
        menu = self.branch_menu
        if menu is None:
            self.overlay = Overlay.NONE
            return True
        if menu.confirming:
            if token == "y":
                self._close_menu()
                self._delete_branch(menu.branch)
            elif token in ("n", "escape"):
                self._close_menu()
            return True
        if token == "b":
            self._close_menu()
            if self.base_ref == menu.branch:
                self.set_base(None)
                self.status = "Base reset to HEAD"
            else:
                self.set_base(menu.branch)
                self.status = f"Base set to {menu.branch}"
        elif token == "s":
            self._close_menu()
            self._switch_branch(menu.branch)
        elif token == "d":
            menu.confirming = True
        elif token in ("escape", "q"):
            self._close_menu()
        return True

    def _close_menu(self) -> None:
        self.overlay = Overlay.NONE
        self.branch_menu = None

    def _switch_branch(self, name: str) -> None:
        try:
            self.repository.switch(name)
        except GitCommandError as exc:
            self._collaborator_failure("switch", exc.stderr or str(exc))
            self.status = f"Switch failed: {exc.stderr or exc}"
            return
        self.status = f"Switched to {name}"
        self.request_refresh("switch")

    def _delete_branch(self, name: str) -> None:
        try:
            self.repository.delete_branch(name)
        except GitCommandError as exc:
            self._collaborator_failure("delete_branch", exc.stderr or str(exc))
            self.status = f"Delete failed: {exc.stderr or exc}"
            return
        if self.base_ref == name:
            self.base_ref = None
        self.status = f"Deleted branch {name}"
        self.request_refresh("delete")

    def _search_prompt_key(self, key: KeyInput, token: str) -> bool:
        pane = self.pane
        if token == "escape":
            self.overlay = Overlay.NONE
            self.search_input = ""
            origin = pane.search.clear()
            if origin is not None:
                pane.restore(origin)
            return True
        if token == "enter":
            self.overlay = Overlay.NONE
            if not self.search_input:
                pane.search.clear()
                return True
            match = pane.search.next()
            if match is None:
                self.status = f"Pattern not found: {self.search_input}"
            else:
                pane.show_match(match)
                self._sync_selection()
            return True
        if token == "backspace":
            self.search_input = self.search_input[:-1]
        elif key.is_printable and key.text is not None:
            self.search_input += key.text
        else:
            return True
        pane.search.start(self.search_input, pane.rows, pane.origin())
        return True

    # -- refresh pipeline ----------------------------------------------

    def request_refresh(self, reason: str = "manual") -> int:
        """Start diff, listing and commit jobs; returns the new generation."""

        self._generation += 1
        generation = self._generation
        base_ref = self.base_ref
        repository = self.repository
        config = self.config
        telemetry.record_event(
            "refresh.request", data={"reason": reason, "generation": generation}
        )

        def load_diff() -> Event:
            files = repository.diff(base_ref)
            return DiffLoaded(
                generation=generation,
                files=tuple(files),
                branch=repository.branch_name(),
                base_ref=base_ref,
            )

        def load_listings() -> Event:
            return ListingsLoaded(
                generation=generation,
                branches=tuple(repository.list_branches()),
                reflog=tuple(repository.list_reflog(config.reflog_limit)),
            )

        self.loader.submit("diff", load_diff, generation=generation)
        self.loader.submit("listings", load_listings, generation=generation)
        self._load_commits(self.commits_ref)
        if self.github_state.initialized:
            self.github_state.clear()
            if self.navigator.view is ViewKind.GITHUB:
                self._load_github()
        return generation

    def _load_commits(self, ref: str) -> None:
        self.commits_ref = ref
        self._commits_requested += 1
        generation = self._commits_requested
        repository = self.repository
        limit = self.config.commit_limit

        def load() -> Event:
            return CommitsLoaded(
                generation=generation,
                ref=ref,
                commits=tuple(repository.list_commits(ref, limit)),
            )

        self.loader.submit("commits", load, generation=generation)

    def process_events(self, limit: Optional[int] = None) -> int:
        """Apply queued background results; returns how many were handled."""

        events = self.events.drain(limit)
        for event in events:
            self.apply_event(event)
        if events:
            self._sync_selection()
        return len(events)

    def apply_event(self, event: Event) -> None:
        if isinstance(event, RefreshRequested):
            self.request_refresh(event.reason)
        elif isinstance(event, DiffLoaded):
            self._apply_diff(event)
        elif isinstance(event, ListingsLoaded):
            self._apply_listings(event)
        elif isinstance(event, CommitsLoaded):
            self._apply_commits(event)
        elif isinstance(event, AuthChecked):
            self._apply_auth(event)
        elif isinstance(event, IssuesLoaded):
            self.github_state.set_issues(event.issues)
            self._render_github_lists()
        elif isinstance(event, PullRequestsLoaded):
            self.github_state.set_pull_requests(event.pull_requests)
            self._render_github_lists()
        elif isinstance(event, DetailLoaded):
            self.github_state.store_detail(event.kind, event.number, event.detail)
            if self.github_state.current == (event.kind, event.number):
                self._render_detail()
        elif isinstance(event, CollaboratorFailed):
            self._apply_failure(event)

    def _apply_diff(self, event: DiffLoaded) -> None:
        if event.generation < self._diff_generation:
            telemetry.record_event(
                "diff.discarded",
                level="debug",
                data={"generation": event.generation, "current": self._diff_generation},
            )
            return
        self._diff_generation = event.generation
        self.store.rebuild(
            event.files,
            branch=event.branch,
            base_ref=event.base_ref,
            generation=event.generation,
        )
        self.branch = event.branch
        self.tree.set_files((item.path, item.status) for item in event.files)
        self._render_tree(keep=self.selected_path)
        self._sync_selection()

    def _apply_listings(self, event: ListingsLoaded) -> None:
        if event.generation < self._listing_generation:
            return
        self._listing_generation = event.generation
        branch_pane = self.panes[PaneId.BRANCH_LIST]
        current = self._selected(PaneId.BRANCH_LIST, self.branches)
        self.branches = tuple(event.branches)
        branch_pane.set_content(
            [_branch_row(branch) for branch in self.branches],
            [branch.name for branch in self.branches],
        )
        if current is not None:
            names = [branch.name for branch in self.branches]
            if current.name in names:
                self._select_row(branch_pane, names.index(current.name))
        self.reflog = tuple(event.reflog)
        lines = [_reflog_row(entry) for entry in self.reflog]
        self.panes[PaneId.REFLOG].set_content(lines)
        self.navigator.ensure_focus_available()

    def _apply_commits(self, event: CommitsLoaded) -> None:
        if event.ref != self.commits_ref or event.generation < self._commits_generation:
            return
        self._commits_generation = event.generation
        self.commits = tuple(event.commits)
        self.panes[PaneId.COMMIT_LOG].set_content(
            [_commit_row(commit) for commit in self.commits],
            [(commit.subject, commit.short_hash) for commit in self.commits],
        )
        self.navigator.ensure_focus_available()

    def _apply_failure(self, event: CollaboratorFailed) -> None:
        if event.source in GIT_SOURCES:
            self.status = f"Refresh error: {event.message}"
            return
        self.github_state.fail(event.message)
        self._render_github_lists()
        self._render_detail()
        self.status = f"GitHub error: {event.message}"

    def _collaborator_failure(self, source: str, message: str) -> None:
        telemetry.record_event(
            "collaborator.failure",
            level="warning",
            data={"job": source, "error": message},
        )

    # -- content sync --------------------------------------------------

    @staticmethod
    def _select_row(pane: PaneState, row: int) -> None:
        pane.buffer.state.set_cursor(row, 0)
        pane.viewport.ensure_visible(row)

    def _render_tree(self, keep: Optional[str]) -> None:
        pane = self.panes[PaneId.FILE_TREE]
        pane.set_content(self.tree.lines(), [entry.path for entry in self.tree.entries])
        index = self.tree.index_of(keep)
        if index is not None:
            self._select_row(pane, index)

    def _sync_selection(self) -> None:
        """Follow list selections into the panes that depend on them."""

        entry = self.selected_tree_entry()
        if entry is not None and not entry.is_dir:
            self.selected_path = entry.path
        elif entry is None and not self.tree.entries:
            self.selected_path = None
        self._show_diff()

        if self.focus is PaneId.BRANCH_LIST:
            branch = self._selected(PaneId.BRANCH_LIST, self.branches)
            if branch is not None and branch.name != self.commits_ref:
                self._load_commits(branch.name)
        elif self.focus is PaneId.REFLOG:
            entry_ref = self._selected(PaneId.REFLOG, self.reflog)
            if entry_ref is not None and entry_ref.hash != self.commits_ref:
                self._load_commits(entry_ref.hash)

    def _show_diff(self) -> None:
        key = (self.selected_path, self.diff.generation)
        if key == self._shown_diff:
            return
        pane = self.panes[PaneId.DIFF_VIEW]
        if self._shown_diff is None or self._shown_diff[0] != self.selected_path:
            pane.buffer.state.set_cursor(0, 0)
            pane.viewport.scroll_to(0)
            pane.viewport.scroll_x_by(-pane.viewport.offset_x)
        self._shown_diff = key
        pane.set_diff(self.diff.for_path(self.selected_path))

    # -- GitHub view ---------------------------------------------------

    def _entered_view(self) -> None:
        if self.navigator.view is ViewKind.GITHUB and not self.github_state.initialized:
            self._load_github()

    def _load_github(self) -> None:
        client = self.github
        if client is None:
            return
        self.github_state.begin_lists()
        self._render_github_lists()

        def check_auth() -> Event:
            try:
                client.auth_status()
            except GitHubError as exc:
                return AuthChecked(ok=False, message=str(exc))
            return AuthChecked(ok=True)

        self.loader.submit("auth", check_auth)

    def _load_github_lists(self) -> None:
        client = self.github
        if client is None:
            return
        limit = self.config.issue_limit

        def load_issues() -> Event:
            return IssuesLoaded(issues=tuple(client.list_issues(limit)))

        def load_pull_requests() -> Event:
            return PullRequestsLoaded(
                pull_requests=tuple(client.list_pull_requests(limit))
            )

        self.loader.submit("issues", load_issues)
        self.loader.submit("pull_requests", load_pull_requests)

    def _apply_auth(self, event: AuthChecked) -> None:
        self.github_state.auth_ok = event.ok
        if not event.ok:
            self.github_state.fail(event.message or "gh is not authenticated")
            self._render_github_lists()
            self.status = f"GitHub error: {self.github_state.error}"
            return
        self._load_github_lists()

    def _show_detail(self, kind: str, number: int) -> None:
        state = self.github_state
        state.current = (kind, number)
        client = self.github
        if state.cached(kind, number) is None and client is not None:
            state.detail_loading = (kind, number)

            def load() -> Event:
                if kind == ISSUE:
                    detail: Any = client.fetch_issue(number)
                else:
                    detail = client.fetch_pull_request(number)
                return DetailLoaded(kind=kind, number=number, detail=detail)

            self.loader.submit("detail", load)
        self._render_detail()
        self.navigator.focus_pane(PaneId.DETAIL)

    def _render_github_lists(self) -> None:
        state = self.github_state
        self.panes[PaneId.ISSUE_LIST].set_content([i.row() for i in state.issues])
        self.panes[PaneId.PR_LIST].set_content([p.row() for p in state.pull_requests])

    def _render_detail(self) -> None:
        pane = self.panes[PaneId.DETAIL]
        pane.set_content(self.github_state.detail_lines())
        pane.buffer.state.set_cursor(0, 0)
        pane.viewport.scroll_to(0)


__all__ = ["BranchMenu", "Overlay", "ViewSnapshot", "ViewerSession"]
