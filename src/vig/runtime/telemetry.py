"""Structured logging and profiling for vig, on top of telelog.

Everything else in the package goes through four calls: ``configure``,
``get_logger``, ``record_event`` and ``span``. The terminal belongs to the
TUI, so nothing is printed unless ``VIG_LOG_CONSOLE`` is set; ``VIG_LOG_FILE``
names a log file. ``--log-preset`` (or ``VIG_LOG_PRESET``) swaps the
environment-derived settings for one of ``PRESETS``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "VIG_"
PRESETS = ("development", "production", "performance")
TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(f"{ENV_PREFIX}{name}", "").lower() in TRUTHY


@dataclass(frozen=True, slots=True)
class LogSettings:
    """What the telelog config should look like, decoupled from building it."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LogSettings":
        env = os.environ if environ is None else environ
        size = env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", "")
        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            console=_flag(env, "LOG_CONSOLE"),
            colored=not _flag(env, "NO_COLOR"),
            json=_flag(env, "LOG_JSON"),
            file=env.get(f"{ENV_PREFIX}LOG_FILE") or None,
            buffered=_flag(env, "LOG_BUFFERED"),
            buffer_size=int(size) if size.isdigit() else 2048,
        )

    def for_preset(self, preset: str) -> "LogSettings":
        """Preset levels and sinks; an explicit ``VIG_LOG_FILE`` still wins."""

        key = preset.lower()
        if key == "development":
            return replace(self, level="DEBUG", file=self.file or "vig-debug.log")
        if key == "production":
            return replace(
                self,
                level="INFO",
                console=False,
                buffered=True,
                file=self.file or "vig.log",
            )
        if key == "performance":
            return replace(
                self,
                level="DEBUG",
                console=False,
                buffered=True,
                json=True,
                file=self.file or "vig-performance.log",
            )
        raise ValueError(f"unknown log preset '{preset}'; expected one of {PRESETS}")

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


_loggers: Dict[str, Any] = {}
_config: Optional[Any] = None


def configure(
    *, preset: Optional[str] = None, settings: Optional[LogSettings] = None
) -> LogSettings:
    """Rebuild the telelog config; cached loggers are dropped and recreated."""

    global _config
    resolved = settings or LogSettings.from_env()
    if preset:
        resolved = resolved.for_preset(preset)
    _config = resolved.build()
    _loggers.clear()
    return resolved


def get_logger(name: Optional[str] = None) -> Any:
    key = name or os.environ.get(f"{ENV_PREFIX}LOGGER", "vig")
    log = _loggers.get(key)
    if log is None:
        if _config is None:
            configure()
        log = _loggers[key] = tl.Logger.with_config(key, _config)
    return log


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(log: Any, level: str, message: str, fields: Mapping[str, Any]) -> None:
    """``<level>_with`` takes ``(key, value)`` pairs; plain levels get a suffix."""

    name = level.lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in fields.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"unsupported log level '{level}'")
    plain(f"{message} {dict(fields)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """One ``event::<name>`` line carrying ``data`` as fields."""

    fields = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", fields)


@dataclass
class SpanHandle:
    log: Any
    name: str
    component: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.fields[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.name, **self.fields, "reason": reason}
        if self.component:
            payload["component"] = self.component
        _emit(self.log, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``; ``metadata`` rides along as log context.

    An exception escaping the block is logged through ``fail`` and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(log, name, component)
    with ExitStack() as stack:
        for key, value in (metadata or {}).items():
            handle.add_metadata(key, value)
            log.add_context(key, handle.fields[key])
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "ENV_PREFIX",
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
