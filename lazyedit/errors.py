"""Exception hierarchy shared by the editor runtime.

Fatal errors end the session after the terminal is restored.
Recoverable errors are shown in the message bar and the editor keeps running.
"""

from __future__ import annotations


class LazyEditError(Exception):
    """Base class for all editor errors."""


class TerminalError(LazyEditError):
    """Terminal mode switching, measurement, or reading failed."""


class PersistenceError(LazyEditError):
    """Loading or saving a file failed; ``message`` is shown to the user."""

    def __init__(self, step: str, reason: str) -> None:
        super().__init__(f"{step} error: {reason}")
        self.step = step
        self.reason = reason

    @property
    def message(self) -> str:
        return f"{self.step} error: {self.reason}"
