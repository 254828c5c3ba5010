"""Cursor-level edits: typing, backspace, delete, and newline.

Each function mutates ``state.document`` through its row operations and then
fixes up the cursor so ``cx`` lands on a code point boundary.
"""

from __future__ import annotations

from .input import RIGHT
from .navigation import move_cursor
from .state import EditorState
from .utf8 import is_continuation_byte


def insert_char(state: EditorState, value: int) -> None:
    """Insert one raw byte at the cursor and advance past it.

    Typing on the line after the last row first creates that row.
    """
    document = state.document
    if state.cy == document.nrows:
        document.insert_row(document.nrows, b"")
    row = document.rows[state.cy]
    document.insert_char(row, state.cx, value)
    state.cx += 1


def backspace(state: EditorState) -> None:
    """Delete the code point before the cursor, or join with the previous row."""
    document = state.document
    if state.cx == 0 and state.cy == 0:
        return
    if state.cy >= document.nrows:
        return

    row = document.rows[state.cy]
    if state.cx > 0:
        while state.cx > 1 and is_continuation_byte(row.chars[state.cx - 1]):
            document.delete_char(row, state.cx - 1)
            state.cx -= 1
        document.delete_char(row, state.cx - 1)
        state.cx -= 1
        return

    previous = document.rows[state.cy - 1]
    state.cx = previous.len
    document.append_to_row(previous, row.chars)
    document.delete_row(state.cy)
    state.cy -= 1


def delete_forward(state: EditorState) -> None:
    """Delete the code point under the cursor (joins the next row at end of line)."""
    document = state.document
    if state.cy >= document.nrows:
        return
    if state.cy == document.nrows - 1 and state.cx >= document.rows[state.cy].len:
        return
    move_cursor(state, RIGHT)
    backspace(state)


def newline(state: EditorState) -> None:
    """Split the current row at the cursor and move to the start of the new row."""
    document = state.document
    if state.cx == 0:
        document.insert_row(state.cy, b"")
    else:
        row = document.rows[state.cy]
        document.insert_row(state.cy + 1, bytes(row.chars[state.cx:]))
        document.truncate_row(document.rows[state.cy], state.cx)
    state.cy += 1
    state.cx = 0
