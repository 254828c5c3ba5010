"""Editor context object: the document plus cursor, viewport, and messages.

One ``EditorState`` is created at start-up and passed by reference to every
operation. The render column ``rx`` is derived from ``cx`` on demand.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .config import EditorConfig
from .document import Document, Row
from .utf8 import cx_to_rx

HEADER_ROWS = 1
FOOTER_ROWS = 1


class QuitConfirmation:
    """Counts down quit presses while the buffer has unsaved changes.

    ``remaining == threshold`` is the clean state; anything lower means a
    warning has been shown and that many more presses are required.
    """

    def __init__(self, threshold: int) -> None:
        self.threshold = max(0, threshold)
        self.remaining = self.threshold

    def request(self, dirty: bool) -> bool:
        """Register one quit press; return ``True`` when the editor should exit."""
        if not dirty or self.remaining <= 0:
            return True
        self.remaining -= 1
        return False

    def reset(self) -> None:
        self.remaining = self.threshold


@dataclass
class EditorState:
    config: EditorConfig
    document: Document
    cx: int = 0
    cy: int = 0
    rowoff: int = 0
    coloff: int = 0
    winrows: int = 0
    wincols: int = 0
    gutter_width: int = 2
    status_message: bytes = b""
    status_message_time: float = 0.0
    quit_confirmation: QuitConfirmation = field(init=False)

    def __post_init__(self) -> None:
        self.quit_confirmation = QuitConfirmation(self.config.quit_times)

    @classmethod
    def create(cls, config: EditorConfig | None = None) -> EditorState:
        config = config or EditorConfig()
        return cls(config=config, document=Document(tab_stop=config.tab_stop))

    @property
    def current_row(self) -> Row | None:
        if 0 <= self.cy < self.document.nrows:
            return self.document.rows[self.cy]
        return None

    @property
    def rx(self) -> int:
        row = self.current_row
        if row is None:
            return 0
        return cx_to_rx(row.chars, self.cx, self.config.tab_stop)

    @property
    def text_width(self) -> int:
        """Columns left for row text once the gutter is reserved."""
        return max(0, self.wincols - self.gutter_width)

    def set_viewport(self, rows: int, cols: int) -> None:
        """Apply a measured terminal size, reserving the two status bars."""
        self.winrows = max(1, rows - HEADER_ROWS - FOOTER_ROWS)
        self.wincols = max(1, cols)

    def set_status_message(self, message: str, now: float | None = None) -> None:
        """Store a transient message, truncated like a fixed-size C buffer.

        At most ``status_message_max_bytes - 1`` bytes are kept and a
        multi-byte character cut at the limit is dropped whole.
        """
        limit = self.config.status_message_max_bytes - 1
        encoded = message.encode("utf-8")[:limit]
        self.status_message = encoded.decode("utf-8", errors="ignore").encode("utf-8")
        self.status_message_time = time.time() if now is None else now

    def visible_status_message(self, now: float | None = None) -> bytes:
        """Return the message, clearing it once it is older than the timeout."""
        now = time.time() if now is None else now
        if self.status_message and now - self.status_message_time >= self.config.status_message_seconds:
            self.status_message = b""
        return self.status_message
