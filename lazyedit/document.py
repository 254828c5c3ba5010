"""Row storage for one open file.

A ``Document`` is an ordered list of ``Row`` objects plus a dirty counter and
the associated path. Row contents are raw UTF-8 bytes; each row keeps a
render form (tabs expanded) that is rebuilt whenever its bytes change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .utf8 import expand_tabs, glyph_count

logger = logging.getLogger(__name__)


@dataclass
class Row:
    """One line of text without its trailing newline."""

    chars: bytearray
    tab_stop: int
    render: bytes = field(init=False, default=b"")
    glyphs: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.chars = bytearray(self.chars)
        self.update()

    @property
    def len(self) -> int:
        return len(self.chars)

    @property
    def rlen(self) -> int:
        return len(self.render)

    def update(self) -> None:
        """Recompute ``render`` and ``glyphs`` from ``chars``."""
        self.render = expand_tabs(self.chars, self.tab_stop)
        self.glyphs = glyph_count(self.render)


class Document:
    """Ordered rows, dirty counter, and the path used for saving."""

    def __init__(self, tab_stop: int = 4, path: Path | None = None) -> None:
        self.tab_stop = tab_stop
        self.path = path
        self.rows: list[Row] = []
        self.dirty = 0

    @property
    def nrows(self) -> int:
        return len(self.rows)

    def lines(self) -> list[bytes]:
        return [bytes(row.chars) for row in self.rows]

    def insert_row(self, at: int, data: bytes = b"") -> Row | None:
        """Insert a row before index ``at``; indices outside ``[0, nrows]`` are ignored."""
        if at < 0 or at > self.nrows:
            return None
        row = Row(bytearray(data), self.tab_stop)
        self.rows.insert(at, row)
        self.dirty += 1
        return row

    def delete_row(self, at: int) -> None:
        if at < 0 or at >= self.nrows:
            return
        del self.rows[at]
        self.dirty += 1

    def insert_char(self, row: Row, at: int, value: int) -> None:
        """Insert one raw byte; ``at`` outside the row appends at the end."""
        if at < 0 or at > row.len:
            at = row.len
        row.chars.insert(at, value)
        row.update()
        self.dirty += 1

    def delete_char(self, row: Row, at: int) -> None:
        if at < 0 or at >= row.len:
            return
        del row.chars[at]
        row.update()
        self.dirty += 1

    def append_to_row(self, row: Row, data: bytes | bytearray) -> None:
        row.chars += data
        row.update()
        self.dirty += 1

    def truncate_row(self, row: Row, length: int) -> None:
        """Cut ``row`` down to its first ``length`` bytes."""
        del row.chars[max(0, length):]
        row.update()
        self.dirty += 1

    def replace_lines(self, lines: list[bytes]) -> None:
        """Load ``lines`` as the whole document and mark it clean."""
        self.rows = [Row(bytearray(line), self.tab_stop) for line in lines]
        self.dirty = 0
        logger.debug("document loaded with %d rows", self.nrows)

    def mark_clean(self) -> None:
        self.dirty = 0
