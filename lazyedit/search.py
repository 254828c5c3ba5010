"""Incremental find over rendered rows.

``find_step`` runs once per prompt keystroke: arrow keys pick the direction
and repeat from the last match, any other key restarts from the row the
search began on. Matching wraps around both ends of the document.
"""

from __future__ import annotations

from dataclasses import dataclass

from .input import DOWN, ESC, LEFT, RETURN, RIGHT, UP, Key
from .state import EditorState
from .utf8 import glyph_offset, rx_to_cx

FORWARD_KEYS = frozenset({RIGHT, DOWN})
BACKWARD_KEYS = frozenset({LEFT, UP})
END_KEYS = frozenset({RETURN, ESC})


@dataclass
class SearchState:
    """Search progress plus the cursor/scroll snapshot taken when it started."""

    saved_cx: int
    saved_cy: int
    saved_rowoff: int
    saved_coloff: int
    last_match: int = -1
    direction: int = 1

    @classmethod
    def begin(cls, state: EditorState) -> SearchState:
        return cls(
            saved_cx=state.cx,
            saved_cy=state.cy,
            saved_rowoff=state.rowoff,
            saved_coloff=state.coloff,
        )

    def restore(self, state: EditorState) -> None:
        state.cx = self.saved_cx
        state.cy = self.saved_cy
        state.rowoff = self.saved_rowoff
        state.coloff = self.saved_coloff


def find_step(state: EditorState, search: SearchState, query: str, key: Key) -> bool:
    """Advance the search for ``query`` after ``key``; return whether it matched."""
    if key in END_KEYS:
        search.last_match = -1
        search.direction = 1
        return False
    if key in FORWARD_KEYS:
        search.direction = 1
    elif key in BACKWARD_KEYS:
        search.direction = -1
    else:
        search.last_match = -1
        search.direction = 1

    if not query:
        return False

    document = state.document
    nrows = document.nrows
    if search.last_match == -1:
        search.direction = 1
        current = search.saved_cy - 1
    else:
        current = search.last_match

    needle = query.encode("utf-8")
    for _ in range(nrows):
        current += search.direction
        if current < 0:
            current = nrows - 1
        elif current >= nrows:
            current = 0

        row = document.rows[current]
        offset = row.render.find(needle)
        if offset < 0:
            continue
        search.last_match = current
        state.cy = current
        state.cx = rx_to_cx(row.chars, glyph_offset(row.render, offset), state.config.tab_stop)
        # Past the end so the next scroll pass puts the match on the top row.
        state.rowoff = nrows
        return True
    return False
