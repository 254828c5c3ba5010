"""Scroll-offset policy and gutter sizing."""

from __future__ import annotations

from .state import EditorState


def digit_count(value: int) -> int:
    return len(str(abs(value)))


def gutter_width(nrows: int) -> int:
    """Digits of the highest line number plus one separator column."""
    return digit_count(nrows) + 1


def scroll(state: EditorState) -> None:
    """Update the gutter, then move ``rowoff``/``coloff`` so the cursor is visible.

    Gutter width is settled first because the horizontal rule depends on it.
    """
    state.gutter_width = gutter_width(state.document.nrows)
    rx = state.rx

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.winrows:
        state.rowoff = state.cy - state.winrows + 1

    if rx < state.coloff:
        state.coloff = rx
    if rx + state.gutter_width >= state.coloff + state.wincols:
        state.coloff = rx + state.gutter_width - state.wincols + 1
