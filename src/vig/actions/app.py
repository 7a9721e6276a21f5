"""Application-level actions. Each receives the ``ViewerSession``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from vig.session import ViewerSession


def quit_app(session: "ViewerSession") -> Optional[str]:
    session.request_quit()
    return None


def show_help(session: "ViewerSession") -> Optional[str]:
    session.toggle_help()
    return None


def refresh(session: "ViewerSession") -> Optional[str]:
    session.request_refresh("manual")
    return "Refreshing..."


def open_search(session: "ViewerSession") -> Optional[str]:
    session.open_search_prompt()
    return None


def open_editor(session: "ViewerSession") -> Optional[str]:
    return session.open_editor()


def activate(session: "ViewerSession") -> Optional[str]:
    return session.activate()


def toggle_directory(session: "ViewerSession") -> Optional[str]:
    return session.toggle_directory()


def open_browser(session: "ViewerSession") -> Optional[str]:
    return session.open_in_browser()


__all__ = [
    "activate",
    "open_browser",
    "open_editor",
    "open_search",
    "quit_app",
    "refresh",
    "show_help",
    "toggle_directory",
]
