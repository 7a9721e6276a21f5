"""Viewer configuration assembled from CLI flags and ``VIG_*`` variables."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .telemetry import ENV_PREFIX, PRESETS


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """Resolved settings for one viewer process."""

    repo: str = "."
    base_ref: Optional[str] = None
    commit_limit: int = 100
    reflog_limit: int = 50
    issue_limit: int = 50
    watch: bool = True
    watch_interval_ms: int = 500
    github: bool = True
    queue_size: int = 256
    log_preset: Optional[str] = None


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _env_flag(environ: Mapping[str, str], key: str) -> bool:
    value = environ.get(f"{ENV_PREFIX}{key}", "")
    return value.lower() in {"1", "true", "yes", "on"}


def _positive(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    defaults = ViewerConfig()
    parser = argparse.ArgumentParser(
        prog="vig", description="Side-by-side git diff viewer with vim motions."
    )
    parser.add_argument(
        "--repo",
        default=environ.get(f"{ENV_PREFIX}REPO", defaults.repo),
        help="Repository path (default: current directory)",
    )
    parser.add_argument(
        "--base",
        dest="base_ref",
        default=environ.get(f"{ENV_PREFIX}BASE") or None,
        help="Diff base ref (default: HEAD)",
    )
    parser.add_argument(
        "--commit-limit",
        type=_positive,
        default=_env_int(environ, "COMMIT_LIMIT", defaults.commit_limit),
        help="Commits listed per ref (default: 100)",
    )
    parser.add_argument(
        "--reflog-limit",
        type=_positive,
        default=_env_int(environ, "REFLOG_LIMIT", defaults.reflog_limit),
        help="Reflog entries listed (default: 50)",
    )
    parser.add_argument(
        "--issue-limit",
        type=_positive,
        default=_env_int(environ, "ISSUE_LIMIT", defaults.issue_limit),
        help="Issues and pull requests fetched from GitHub (default: 50)",
    )
    parser.add_argument(
        "--watch-interval",
        dest="watch_interval_ms",
        type=_positive,
        default=_env_int(environ, "WATCH_INTERVAL_MS", defaults.watch_interval_ms),
        help="Working tree poll interval in milliseconds (default: 500)",
    )
    parser.add_argument(
        "--no-watch",
        action="store_true",
        default=_env_flag(environ, "NO_WATCH"),
        help="Disable automatic refresh on working tree changes",
    )
    parser.add_argument(
        "--no-github",
        action="store_true",
        default=_env_flag(environ, "NO_GITHUB"),
        help="Disable the GitHub view",
    )
    parser.add_argument(
        "--queue-size",
        type=_positive,
        default=_env_int(environ, "QUEUE_SIZE", defaults.queue_size),
        help="Capacity of the background event queue (default: 256)",
    )
    parser.add_argument(
        "--log-preset",
        choices=PRESETS,
        default=environ.get(f"{ENV_PREFIX}LOG_PRESET") or None,
        help="telelog preset to use instead of the VIG_LOG_* variables",
    )
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ViewerConfig:
    env = os.environ if environ is None else environ
    args = build_parser(env).parse_args(argv)
    return ViewerConfig(
        repo=args.repo,
        base_ref=args.base_ref,
        commit_limit=args.commit_limit,
        reflog_limit=args.reflog_limit,
        issue_limit=args.issue_limit,
        watch=not args.no_watch,
        watch_interval_ms=args.watch_interval_ms,
        github=not args.no_github,
        queue_size=args.queue_size,
        log_preset=args.log_preset,
    )


def resolve_editor(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return env.get("EDITOR") or env.get("VISUAL") or "vi"


__all__ = ["ViewerConfig", "build_parser", "load_config", "resolve_editor"]
