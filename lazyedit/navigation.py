"""Cursor movement primitives.

Movement is UTF-8 aware: horizontal steps skip whole code points and
vertical steps snap ``cx`` back onto a code point start on the new row.
This module has no rendering concerns.
"""

from __future__ import annotations

from .input import DOWN, LEFT, PAGE_UP, RIGHT, UP
from .state import EditorState
from .utf8 import next_boundary, prev_boundary, snap_to_boundary


def move_cursor(state: EditorState, key: str) -> None:
    """Move one step for an arrow key token, then clamp ``cx`` to the row."""
    document = state.document
    row = state.current_row
    if key == UP:
        if state.cy > 0:
            state.cy -= 1
    elif key == DOWN:
        if state.cy < document.nrows:
            state.cy += 1
    elif key == LEFT:
        if state.cx > 0 and row is not None:
            state.cx = prev_boundary(row.chars, state.cx)
        elif state.cy > 0:
            state.cy -= 1
            state.cx = document.rows[state.cy].len
    elif key == RIGHT:
        if row is not None and state.cx < row.len:
            state.cx = next_boundary(row.chars, state.cx)
        elif row is not None and state.cx == row.len:
            state.cy += 1
            state.cx = 0

    row = state.current_row
    state.cx = snap_to_boundary(row.chars, state.cx) if row is not None else 0


def move_home(state: EditorState) -> None:
    state.cx = 0


def move_end(state: EditorState) -> None:
    row = state.current_row
    if row is not None:
        state.cx = row.len


def page_cursor(state: EditorState, key: str) -> None:
    """Handle PAGE_UP/PAGE_DOWN: snap to the viewport edge, then step a page."""
    if key == PAGE_UP:
        state.cy = state.rowoff
        step = UP
    else:
        state.cy = min(state.rowoff + state.winrows - 1, state.document.nrows)
        step = DOWN
    for _ in range(state.winrows):
        move_cursor(state, step)
