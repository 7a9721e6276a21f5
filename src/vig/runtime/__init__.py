"""Process-level services: telemetry, configuration, events, loaders."""

from .config import ViewerConfig, load_config, resolve_editor
from .events import EventQueue
from .loader import BackgroundLoader, InlineLoader

__all__ = [
    "BackgroundLoader",
    "EventQueue",
    "InlineLoader",
    "ViewerConfig",
    "load_config",
    "resolve_editor",
]
