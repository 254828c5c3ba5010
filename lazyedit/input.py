"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key events: a plain byte
(``int``) or one of the named string tokens below. Handles ESC-sequence
timing so a lone Escape never waits for a second keypress.
"""

from __future__ import annotations

import os
import select
from collections import deque
from collections.abc import Callable

from .errors import TerminalError

ESC_SEQUENCE_TIMEOUT_MS = 25
READ_TIMEOUT_MS = 100
ESC_LOOKAHEAD_MAX_BYTES = 3

Key = int | str

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
DELETE = "DELETE"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
ESC = "ESC"
RETURN = "RETURN"
BACKSPACE = "BACKSPACE"

_TILDE_CODES: dict[bytes, str] = {
    b"1": HOME,
    b"3": DELETE,
    b"4": END,
    b"5": PAGE_UP,
    b"6": PAGE_DOWN,
    b"7": HOME,
    b"8": END,
}
_CSI_LETTERS: dict[bytes, str] = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
    b"H": HOME,
    b"F": END,
}
_SS3_LETTERS: dict[bytes, str] = {
    b"H": HOME,
    b"F": END,
}


def ctrl_key(ch: str) -> int:
    """Return the byte a terminal sends for Ctrl+``ch``."""
    return ord(ch) & 0x1F


class InputDecoder:
    """Turns the stdin byte stream of one terminal into key events."""

    def __init__(
        self,
        fd: int,
        read_timeout_ms: int = READ_TIMEOUT_MS,
        esc_sequence_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS,
    ) -> None:
        self.fd = fd
        self.read_timeout_ms = read_timeout_ms
        self.esc_sequence_timeout_ms = esc_sequence_timeout_ms
        self._pending: deque[bytes] = deque(maxlen=ESC_LOOKAHEAD_MAX_BYTES)

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        """Read one byte if it arrives within ``timeout_ms``; ``None`` on timeout."""
        if self._pending:
            return self._pending.popleft()
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        except InterruptedError:
            return None
        if not ready:
            return None
        try:
            ch = os.read(self.fd, 1)
        except (InterruptedError, BlockingIOError):
            return None
        except OSError as exc:
            raise TerminalError(f"read: {exc}") from exc
        if not ch:
            return None
        return ch

    def poll_key(self) -> Key | None:
        """Wait once (bounded) for input and decode one key, or return ``None``."""
        ch = self._read_ready_byte(self.read_timeout_ms)
        if ch is None:
            return None
        if ch == b"\r":
            return RETURN
        if ch in {b"\x08", b"\x7f"}:
            return BACKSPACE
        if ch != b"\x1b":
            return ch[0]
        return self._decode_escape()

    def next_key(self, idle: Callable[[], None] | None = None) -> Key:
        """Block until a key arrives, calling ``idle`` after every empty wait."""
        while True:
            key = self.poll_key()
            if key is not None:
                return key
            if idle is not None:
                idle()

    def _decode_escape(self) -> str:
        timeout = self.esc_sequence_timeout_ms
        first = self._read_ready_byte(timeout)
        if first is None:
            return ESC
        if first not in {b"[", b"O"}:
            self._pending.append(first)
            return ESC
        second = self._read_ready_byte(timeout)
        if second is None:
            return ESC

        if first == b"O":
            return _SS3_LETTERS.get(second, ESC)
        if second.isdigit():
            third = self._read_ready_byte(timeout)
            if third != b"~":
                return ESC
            return _TILDE_CODES.get(second, ESC)
        return _CSI_LETTERS.get(second, ESC)
