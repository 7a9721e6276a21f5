"""System clipboard sink for the yank register, backed by pyperclip."""

from __future__ import annotations

from typing import Callable, Optional

import pyperclip

from vig.buffer.registers import RegisterValue
from vig.runtime import telemetry


class ClipboardError(RuntimeError):
    pass


class ClipboardWriter:
    """Copies every register value to the system clipboard.

    Failures never reach the yank itself; the last error is kept so the
    session can show it as a status message.
    """

    def __init__(self, copy: Optional[Callable[[str], None]] = None) -> None:
        self._copy = copy or pyperclip.copy
        self.last_error: Optional[str] = None

    def write(self, text: str) -> None:
        try:
            self._copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard unavailable: {exc}") from exc

    def __call__(self, value: RegisterValue) -> None:
        try:
            self.write(value.text)
        except ClipboardError as exc:
            self.last_error = str(exc)
            telemetry.record_event(
                "clipboard.failure", level="warning", data={"error": str(exc)}
            )
            return
        self.last_error = None
        telemetry.record_event(
            "clipboard.copy", data={"chars": len(value.text), "kind": value.kind.value}
        )

    def take_error(self) -> Optional[str]:
        error, self.last_error = self.last_error, None
        return error


__all__ = ["ClipboardError", "ClipboardWriter"]
