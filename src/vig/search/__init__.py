"""Search engine shared by every pane."""

from .engine import Row, SearchEngine, SearchMatch, SearchOrigin, find_matches

__all__ = ["Row", "SearchEngine", "SearchMatch", "SearchOrigin", "find_matches"]
