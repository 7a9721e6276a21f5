"""Hand URLs to the desktop's default browser."""

from __future__ import annotations

import webbrowser

from vig.runtime import telemetry


def open_in_browser(url: str) -> bool:
    if not url:
        return False
    opened = webbrowser.open(url, new=2)
    telemetry.record_event("browser.open", data={"url": url, "opened": opened})
    return opened


__all__ = ["open_in_browser"]
