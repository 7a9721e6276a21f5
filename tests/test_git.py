from __future__ import annotations

from pathlib import Path

import pytest

from vig.diff import ChangeTag, FileStatus
from vig.git import (
    FileTree,
    GitCommandError,
    RepositoryWatcher,
    build_tree,
    parse_porcelain,
    parse_unified_diff,
    untracked_file_diff,
)
from vig.runtime.events import EventQueue, RefreshRequested

DIFF = """\
diff --git a/src/app.py b/src/app.py
index 1111111..2222222 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@ def main():
 import os
-print("old")
+print("new")
+print("extra")
 done()
\\ No newline at end of file
diff --git a/notes.txt b/notes.txt
deleted file mode 100644
--- a/notes.txt
+++ /dev/null
@@ -1 +0,0 @@
-gone
diff --git a/old_name.py b/new_name.py
similarity index 90%
rename from old_name.py
rename to new_name.py
diff --git a/logo.png b/logo.png
new file mode 100644
Binary files /dev/null and b/logo.png differ
"""


def test_parse_unified_diff_files_and_statuses() -> None:
    files = parse_unified_diff(DIFF)

    assert [item.path for item in files] == [
        "src/app.py",
        "notes.txt",
        "new_name.py",
        "logo.png",
    ]
    assert [item.status for item in files] == [
        FileStatus.MODIFIED,
        FileStatus.DELETED,
        FileStatus.RENAMED,
        FileStatus.ADDED,
    ]
    assert files[2].old_path == "old_name.py"
    assert files[3].is_binary
    assert files[3].hunks == ()


def test_parse_unified_diff_hunk_body() -> None:
    hunk = parse_unified_diff(DIFF)[0].hunks[0]

    assert (hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count) == (
        1,
        3,
        1,
        4,
    )
    assert [line.tag for line in hunk.lines] == [
        ChangeTag.UNCHANGED,
        ChangeTag.REMOVED,
        ChangeTag.ADDED,
        ChangeTag.ADDED,
        ChangeTag.UNCHANGED,
    ]
    assert hunk.lines[1].text == 'print("old")'


def test_single_line_hunk_counts_default_to_one() -> None:
    hunk = parse_unified_diff(DIFF)[1].hunks[0]

    assert (hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count) == (
        1,
        1,
        0,
        0,
    )


def test_untracked_file_is_one_added_hunk() -> None:
    diff = untracked_file_diff("new.txt", ["a", "b"], binary=False)

    assert diff.status is FileStatus.UNTRACKED
    assert diff.hunks[0].new_count == 2
    assert all(line.tag is ChangeTag.ADDED for line in diff.hunks[0].lines)
    assert untracked_file_diff("blob.bin", [], binary=True).is_binary
    assert untracked_file_diff("empty.txt", [], binary=False).hunks == ()


def test_parse_porcelain_handles_renames_and_untracked() -> None:
    output = "\0".join(
        [" M src/app.py", "R  new.py", "old.py", "?? scratch.txt", "D  gone.txt", ""]
    )

    statuses = parse_porcelain(output)

    assert statuses == {
        "src/app.py": FileStatus.MODIFIED,
        "new.py": FileStatus.RENAMED,
        "scratch.txt": FileStatus.UNTRACKED,
        "gone.txt": FileStatus.DELETED,
    }


def test_build_tree_groups_directories_first() -> None:
    entries = build_tree(
        [
            ("src/vig/app.py", FileStatus.MODIFIED),
            ("src/vig/tree.py", FileStatus.ADDED),
            ("docs/README.md", FileStatus.MODIFIED),
            ("setup.cfg", FileStatus.DELETED),
        ]
    )

    assert [entry.render() for entry in entries] == [
        "M docs/README.md",
        "▾ src/",
        "  ▾ vig/",
        "    M app.py",
        "    A tree.py",
        "D setup.cfg",
    ]


def test_file_tree_toggle_collapses_directory() -> None:
    tree = FileTree()
    tree.set_files(
        [("pkg/a.py", FileStatus.MODIFIED), ("pkg/b.py", FileStatus.MODIFIED)]
    )

    assert tree.toggle("pkg")
    assert tree.lines() == ["▸ pkg/"]
    assert not tree.toggle("pkg/a.py")
    assert tree.toggle("pkg")
    assert tree.index_of("pkg/b.py") == 2


class FakeRepository:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.git_dir = root / ".git"
        self.git_dir.mkdir()
        (self.git_dir / "HEAD").write_text("ref: refs/heads/main\n")
        self.status = ""
        self.fail = False
        self.crash: Exception | None = None

    def run(self, *args: str) -> str:
        if self.crash is not None:
            raise self.crash
        if self.fail:
            raise GitCommandError(args, 128, "fatal: broken")
        return self.status


def test_watcher_posts_refresh_only_on_change(tmp_path: Path) -> None:
    repository = FakeRepository(tmp_path)
    events = EventQueue()
    watcher = RepositoryWatcher(repository, events)

    assert watcher.poll()
    assert not watcher.poll()

    (tmp_path / "file.txt").write_text("x")
    repository.status = "?? file.txt\0"
    assert watcher.poll()
    assert events.drain() == [RefreshRequested("watch"), RefreshRequested("watch")]


def test_watcher_survives_status_errors(tmp_path: Path) -> None:
    repository = FakeRepository(tmp_path)
    events = EventQueue()
    watcher = RepositoryWatcher(repository, events)
    repository.fail = True

    assert watcher.poll()
    assert not watcher.poll()


def test_watch_thread_poll_outlives_unexpected_errors(tmp_path: Path) -> None:
    repository = FakeRepository(tmp_path)
    events = EventQueue()
    watcher = RepositoryWatcher(repository, events)
    repository.crash = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    assert not watcher.poll_safely()

    repository.crash = None
    assert watcher.poll_safely()
    assert events.drain() == [RefreshRequested("watch")]


def test_git_command_error_message() -> None:
    error = GitCommandError(("branch", "-d", "topic"), 1, "error: not merged\n")

    assert error.stderr == "error: not merged"
    assert "not merged" in str(error)
    with pytest.raises(RuntimeError):
        raise error
