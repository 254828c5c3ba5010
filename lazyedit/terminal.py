"""Terminal control for the editing session.

Owns raw-mode lifecycle, alternate-screen switching, and viewport measurement.
Resize notifications only raise a flag; the main loop does the real work.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import select
import signal
import termios
import tty

from .errors import TerminalError

logger = logging.getLogger(__name__)

CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)R$")
CURSOR_REPORT_MAX_BYTES = 32
CURSOR_REPORT_TIMEOUT_MS = 1000
# VTIME is in tenths of a second.
READ_TIMEOUT_DECISECONDS = 1


class TerminalSession:
    """Raw-mode session bound to one pair of stdin/stdout descriptors."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture the original tty attributes so they can be restored later."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"tcgetattr: {exc}") from exc
        self._active = False
        self._previous_winch_handler: object = None
        self.resize_pending = False

    def enter(self) -> None:
        """Switch to raw mode with a short read timeout and the alternate screen.

        Echo, canonical input, signal keys, and output post-processing are
        disabled and 8-bit characters pass through unchanged.
        """
        self._active = True
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            attrs = termios.tcgetattr(self.stdin_fd)
            attrs[tty.CC][termios.VMIN] = 0
            attrs[tty.CC][termios.VTIME] = READ_TIMEOUT_DECISECONDS
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, attrs)
        except termios.error as exc:
            raise TerminalError(f"tcsetattr: {exc}") from exc
        os.write(self.stdout_fd, b"\x1b[?1049h")

    def exit(self) -> None:
        """Clear the screen, leave the alternate screen, and restore tty attributes."""
        if not self._active:
            return
        self._active = False
        try:
            self.clear_screen()
            os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def clear_screen(self) -> None:
        os.write(self.stdout_fd, b"\x1b[2J\x1b[H")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that restores the terminal on every exit path."""
        try:
            self.enter()
            yield self
        finally:
            self.exit()

    def measure(self) -> tuple[int, int]:
        """Return ``(rows, cols)``, falling back to a cursor-position probe."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0 and size.lines > 0:
            return size.lines, size.columns
        logger.debug("window size query failed, probing cursor position")
        os.write(self.stdout_fd, b"\x1b[999C\x1b[999B")
        return self.cursor_position()

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position and parse its reply."""
        os.write(self.stdout_fd, b"\x1b[6n")
        reply = bytearray()
        while len(reply) < CURSOR_REPORT_MAX_BYTES - 1:
            try:
                ready, _, _ = select.select([self.stdin_fd], [], [], CURSOR_REPORT_TIMEOUT_MS / 1000.0)
            except InterruptedError:
                continue
            if not ready:
                break
            ch = os.read(self.stdin_fd, 1)
            if not ch:
                break
            reply += ch
            if ch == b"R":
                break
        match = CURSOR_REPORT_RE.match(bytes(reply))
        if match is None:
            raise TerminalError("measure_window: unreadable cursor position report")
        return int(match.group(1)), int(match.group(2))

    def install_resize_handler(self) -> None:
        """Route SIGWINCH to a handler that only sets ``resize_pending``."""
        self._previous_winch_handler = signal.signal(signal.SIGWINCH, self._on_resize)

    def restore_resize_handler(self) -> None:
        if self._previous_winch_handler is None:
            return
        signal.signal(signal.SIGWINCH, self._previous_winch_handler)
        self._previous_winch_handler = None

    def _on_resize(self, _signum: int, _frame: object) -> None:
        self.resize_pending = True

    def consume_resize(self) -> bool:
        """Return and clear the pending-resize flag."""
        pending = self.resize_pending
        self.resize_pending = False
        return pending
