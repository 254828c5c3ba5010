"""Frame composition for the editor screen.

Builds the whole frame (status bar, gutter + text rows, message bar, cursor
placement) into one ``ByteBuffer`` and flushes it with a single write so the
terminal never shows a half-drawn screen.
"""

from __future__ import annotations

import os
import sys
import unicodedata
from pathlib import Path

from .byte_buffer import ByteBuffer
from .config import APP_NAME, VERSION
from .state import HEADER_ROWS, EditorState
from .utf8 import glyph_count, slice_glyphs
from .viewport import scroll

ESC = "\x1b["
HIDE_CURSOR = ESC + "?25l"
SHOW_CURSOR = ESC + "?25h"
CURSOR_HOME = ESC + "H"
CLEAR_LINE = ESC + "K"
REVERSE = ESC + "7m"
LINE_NUMBER_COLOR = ESC + "31m"
RESET = ESC + "m"
NEW_FILE_LABEL = "[New]"
FILENAME_MAX_CHARS = 20

WELCOME_LINES: tuple[str, ...] = (
    f"{APP_NAME} - a small terminal text editor",
    f"version {VERSION}",
    "^X exit   ^S save   ^F find",
)


def char_display_width(ch: str) -> int:
    """Terminal cells used by ``ch``: 0 for combining marks, 2 for wide forms."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_to_width(text: str, max_cols: int) -> str:
    """Return the longest prefix of ``text`` that fits in ``max_cols`` cells."""
    used = 0
    for index, ch in enumerate(text):
        used += char_display_width(ch)
        if used > max_cols:
            return text[:index]
    return text


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    """Lay out ``left_text`` and ``right_text`` across exactly ``width`` cells.

    The right side wins when space runs out; the left side is cut first.
    """
    if width <= 0:
        return ""
    right = clip_to_width(right_text, width)
    left = clip_to_width(left_text, width - display_width(right))
    gap = max(0, width - display_width(left) - display_width(right))
    return f"{left}{' ' * gap}{right}"


def display_name(path: Path | None) -> str:
    """Filename for the status bar; undecodable bytes show as U+FFFD."""
    if path is None:
        return NEW_FILE_LABEL
    return os.fsencode(path).decode("utf-8", errors="replace")


def status_bar_text(state: EditorState) -> str:
    document = state.document
    name = display_name(document.path)
    marker = "*" if document.dirty else " "
    left = f"[{marker}] {name[:FILENAME_MAX_CHARS]}"
    row = state.current_row
    line = state.cy + 1 if document.nrows else 0
    cols = row.glyphs if row is not None else 0
    right = f"line {line}/{document.nrows}, col {state.rx + 1}/{cols}"
    return build_status_line(left, state.wincols, right)


def _draw_welcome(out: ByteBuffer, state: EditorState, line: int) -> None:
    text = WELCOME_LINES[line] if 0 <= line < len(WELCOME_LINES) else ""
    text = text[: state.wincols]
    pad = (state.wincols - len(text)) // 2
    if pad:
        out.append("~")
        pad -= 1
    out.append(" " * pad)
    out.append(text)


def _draw_rows(out: ByteBuffer, state: EditorState) -> None:
    document = state.document
    number_width = state.gutter_width - 1
    for y in range(state.winrows):
        filerow = y + state.rowoff
        if filerow >= document.nrows:
            if document.nrows == 0 and y >= state.winrows // 3:
                _draw_welcome(out, state, y - state.winrows // 3)
            else:
                out.append("~")
        else:
            row = document.rows[filerow]
            out.append(LINE_NUMBER_COLOR)
            out.append(str(filerow + 1).rjust(number_width))
            out.append(RESET)
            out.append(" ")
            out.append(slice_glyphs(row.render, state.coloff, state.text_width))
        out.append(CLEAR_LINE)
        out.append("\r\n")


def _draw_message_bar(out: ByteBuffer, state: EditorState, now: float | None) -> None:
    out.append(CLEAR_LINE)
    out.append(REVERSE)
    message = slice_glyphs(state.visible_status_message(now), 0, state.wincols)
    out.append(message)
    out.append(" " * max(0, state.wincols - glyph_count(message)))
    out.append(RESET)


def compose_frame(state: EditorState, now: float | None = None) -> bytes:
    """Run the scroll policy and return the bytes of one full frame."""
    scroll(state)

    out = ByteBuffer()
    out.append(HIDE_CURSOR)
    out.append(CURSOR_HOME)

    out.append(REVERSE)
    out.append(status_bar_text(state))
    out.append(RESET)
    out.append("\r\n")

    _draw_rows(out, state)
    _draw_message_bar(out, state, now)

    cursor_row = state.cy - state.rowoff + HEADER_ROWS + 1
    cursor_col = state.rx - state.coloff + state.gutter_width + 1
    out.append(f"{ESC}{cursor_row};{cursor_col}H")
    out.append(SHOW_CURSOR)
    return out.getvalue()


def refresh_screen(state: EditorState, stdout_fd: int | None = None, now: float | None = None) -> None:
    """Compose a frame and emit it with one ``os.write`` call."""
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    os.write(fd, compose_frame(state, now))
