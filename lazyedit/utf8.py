"""Byte-level UTF-8 and tab-expansion helpers for row content.

Rows store raw UTF-8 bytes. A *raw column* is a byte offset into that
content; a *render column* counts display cells after tabs are expanded,
with every multi-byte sequence occupying one cell.
"""

from __future__ import annotations

TAB = 0x09


def is_continuation_byte(value: int) -> bool:
    """Return whether ``value`` is a ``10xxxxxx`` trailing byte."""
    return (value & 0xC0) == 0x80


def _advance(rx: int, value: int, tab_stop: int) -> int:
    if value == TAB:
        return rx + tab_stop - (rx % tab_stop)
    if is_continuation_byte(value):
        return rx
    return rx + 1


def cx_to_rx(chars: bytes | bytearray, cx: int, tab_stop: int) -> int:
    """Map raw column ``cx`` to its render column."""
    rx = 0
    for value in chars[:max(0, cx)]:
        rx = _advance(rx, value, tab_stop)
    return rx


def rx_to_cx(chars: bytes | bytearray, rx: int, tab_stop: int) -> int:
    """Map render column ``rx`` back to the raw column of the glyph covering it.

    Render columns past the end of the row map to ``len(chars)``.
    """
    cur_rx = 0
    for cx, value in enumerate(chars):
        if is_continuation_byte(value):
            continue
        cur_rx = _advance(cur_rx, value, tab_stop)
        if cur_rx > rx:
            return cx
    return len(chars)


def next_boundary(chars: bytes | bytearray, cx: int) -> int:
    """Return the raw column just past the code point starting at ``cx``."""
    length = len(chars)
    if cx >= length:
        return length
    cx += 1
    while cx < length and is_continuation_byte(chars[cx]):
        cx += 1
    return cx


def prev_boundary(chars: bytes | bytearray, cx: int) -> int:
    """Return the raw column of the code point ending just before ``cx``."""
    if cx <= 0:
        return 0
    cx = min(cx, len(chars)) - 1
    while cx > 0 and is_continuation_byte(chars[cx]):
        cx -= 1
    return cx


def expand_tabs(chars: bytes | bytearray, tab_stop: int) -> bytes:
    """Build the render form: tabs become spaces up to the next tab stop.

    Tab stops are measured in render columns, so a multi-byte character before
    a tab counts once. Every other byte, continuation bytes included, is copied.
    """
    out = bytearray()
    col = 0
    for value in chars:
        if value == TAB:
            width = tab_stop - (col % tab_stop)
            out += b" " * width
            col += width
            continue
        out.append(value)
        if not is_continuation_byte(value):
            col += 1
    return bytes(out)


def glyph_count(data: bytes | bytearray) -> int:
    """Count visible cells: every byte that is not a continuation byte."""
    return sum(1 for value in data if not is_continuation_byte(value))


def glyph_offset(data: bytes | bytearray, byte_index: int) -> int:
    """Return the render column of ``byte_index`` inside rendered bytes."""
    return glyph_count(data[:max(0, byte_index)])


def slice_glyphs(data: bytes | bytearray, start: int, width: int) -> bytes:
    """Return up to ``width`` whole glyphs of ``data`` beginning at glyph ``start``.

    Slicing is done by glyph count, so multi-byte characters are never split
    at either edge of the window.
    """
    if width <= 0 or start < 0:
        return b""
    begin: int | None = None
    glyph = -1
    for index, value in enumerate(data):
        if is_continuation_byte(value):
            continue
        glyph += 1
        if glyph == start:
            begin = index
        elif glyph == start + width:
            return bytes(data[begin:index]) if begin is not None else b""
    if begin is None:
        return b""
    return bytes(data[begin:])


def snap_to_boundary(chars: bytes | bytearray, cx: int) -> int:
    """Clamp ``cx`` into the row and move it back onto a code point start."""
    cx = max(0, min(cx, len(chars)))
    while 0 < cx < len(chars) and is_continuation_byte(chars[cx]):
        cx -= 1
    return cx
