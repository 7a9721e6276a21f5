from __future__ import annotations

import pytest

from vig.runtime import EventQueue, InlineLoader, load_config, resolve_editor
from vig.runtime.events import CollaboratorFailed, CommitsLoaded, RefreshRequested
from vig.runtime.telemetry import LogSettings


def test_load_config_defaults() -> None:
    config = load_config([], environ={})

    assert config.repo == "."
    assert config.base_ref is None
    assert config.watch and config.github
    assert config.watch_interval_ms == 500


def test_environment_seeds_flag_defaults() -> None:
    environ = {
        "VIG_BASE": "origin/main",
        "VIG_COMMIT_LIMIT": "20",
        "VIG_NO_GITHUB": "yes",
        "VIG_WATCH_INTERVAL_MS": "not-a-number",
    }

    config = load_config([], environ=environ)

    assert config.base_ref == "origin/main"
    assert config.commit_limit == 20
    assert not config.github
    assert config.watch_interval_ms == 500


def test_cli_flags_override_environment() -> None:
    config = load_config(
        ["--repo", "/src/app", "--base", "topic", "--commit-limit", "5", "--no-watch"],
        environ={"VIG_BASE": "main", "VIG_COMMIT_LIMIT": "20"},
    )

    assert config.repo == "/src/app"
    assert config.base_ref == "topic"
    assert config.commit_limit == 5
    assert not config.watch


def test_non_positive_limits_are_rejected() -> None:
    with pytest.raises(SystemExit):
        load_config(["--commit-limit", "0"], environ={})


@pytest.mark.parametrize(
    ("environ", "expected"),
    [
        ({"EDITOR": "nvim", "VISUAL": "code"}, "nvim"),
        ({"VISUAL": "code --wait"}, "code --wait"),
        ({}, "vi"),
    ],
)
def test_resolve_editor(environ: dict, expected: str) -> None:
    assert resolve_editor(environ) == expected


def test_full_queue_drops_and_counts() -> None:
    events = EventQueue(maxsize=1)

    assert events.post(RefreshRequested("watch"))
    assert not events.post(RefreshRequested("watch"))

    assert events.dropped == 1
    assert len(events) == 1
    assert events.drain() == [RefreshRequested("watch")]
    assert len(events) == 0


def test_loader_results_are_never_dropped() -> None:
    events = EventQueue(maxsize=1)
    loader = InlineLoader(events)
    events.post(RefreshRequested("watch"))

    for generation in range(1, 4):
        loader.submit(
            "commits",
            lambda generation=generation: CommitsLoaded(generation, "HEAD", ()),
        )

    drained = events.drain()
    assert events.dropped == 0
    assert [type(event).__name__ for event in drained] == [
        "RefreshRequested",
        "CommitsLoaded",
        "CommitsLoaded",
        "CommitsLoaded",
    ]
    assert events.post(RefreshRequested("watch"))


def test_drain_respects_limit() -> None:
    events = EventQueue()
    for reason in ("a", "b", "c"):
        events.post(RefreshRequested(reason))

    assert [event.reason for event in events.drain(2)] == ["a", "b"]
    assert [event.reason for event in events.drain()] == ["c"]


def test_failed_job_posts_collaborator_failure() -> None:
    events = EventQueue()
    loader = InlineLoader(events)

    def broken() -> RefreshRequested:
        raise RuntimeError("git exploded")

    loader.submit("diff", broken, generation=4)

    assert events.drain() == [
        CollaboratorFailed(source="diff", message="git exploded", generation=4)
    ]


def test_log_settings_from_environment() -> None:
    settings = LogSettings.from_env(
        {
            "VIG_LOG_LEVEL": "debug",
            "VIG_LOG_CONSOLE": "1",
            "VIG_LOG_FILE": "/tmp/vig.log",
            "VIG_LOG_BUFFER_SIZE": "many",
        }
    )

    assert settings.level == "DEBUG"
    assert settings.console
    assert settings.file == "/tmp/vig.log"
    assert settings.buffer_size == 2048


def test_log_presets_keep_explicit_file() -> None:
    base = LogSettings(file="/tmp/own.log")

    production = base.for_preset("production")
    performance = LogSettings().for_preset("performance")

    assert production.file == "/tmp/own.log"
    assert production.buffered and not production.console
    assert performance.json and performance.file == "vig-performance.log"
    with pytest.raises(ValueError):
        base.for_preset("verbose")
