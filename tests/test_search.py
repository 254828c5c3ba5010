"""Tests for incremental find."""

from __future__ import annotations

import unittest

from lazyedit.input import DOWN, ESC, LEFT, RETURN, RIGHT, UP
from lazyedit.search import SearchState, find_step
from lazyedit.state import EditorState


def _state(*lines: bytes, cy: int = 0) -> EditorState:
    state = EditorState.create()
    state.document.replace_lines(list(lines))
    state.set_viewport(10, 40)
    state.cy = cy
    return state


class FindStepTests(unittest.TestCase):
    def test_first_search_starts_at_origin_row(self) -> None:
        state = _state(b"foo", b"bar", b"foo bar", cy=1)
        search = SearchState.begin(state)

        self.assertTrue(find_step(state, search, "foo", ord("o")))

        self.assertEqual(state.cy, 2)
        self.assertEqual(search.last_match, 2)

    def test_next_match_wraps_from_last_line_to_first(self) -> None:
        state = _state(b"foo", b"bar", b"foo bar", cy=2)
        search = SearchState.begin(state)
        find_step(state, search, "foo", ord("o"))
        self.assertEqual(state.cy, 2)

        find_step(state, search, "foo", DOWN)

        self.assertEqual(state.cy, 0)

    def test_backward_search_wraps_to_last_line(self) -> None:
        state = _state(b"foo", b"bar", b"foo bar")
        search = SearchState.begin(state)
        find_step(state, search, "foo", ord("o"))
        self.assertEqual(state.cy, 0)

        find_step(state, search, "foo", UP)
        self.assertEqual(state.cy, 2)

        find_step(state, search, "foo", LEFT)
        self.assertEqual(state.cy, 0)

        find_step(state, search, "foo", RIGHT)
        self.assertEqual(state.cy, 2)

    def test_match_moves_cursor_to_raw_column_and_forces_scroll(self) -> None:
        state = _state(b"\tx foo", b"other")
        search = SearchState.begin(state)

        find_step(state, search, "foo", ord("o"))

        self.assertEqual((state.cx, state.cy), (3, 0))
        self.assertEqual(state.rowoff, state.document.nrows)

    def test_no_match_leaves_cursor(self) -> None:
        state = _state(b"foo", b"bar", cy=1)
        search = SearchState.begin(state)

        self.assertFalse(find_step(state, search, "zzz", ord("z")))

        self.assertEqual(state.cy, 1)
        self.assertEqual(search.last_match, -1)

    def test_empty_query_does_nothing(self) -> None:
        state = _state(b"foo")
        search = SearchState.begin(state)

        self.assertFalse(find_step(state, search, "", DOWN))

    def test_end_keys_reset_without_searching(self) -> None:
        state = _state(b"foo", b"foo")
        search = SearchState.begin(state)
        find_step(state, search, "foo", ord("o"))
        search.direction = -1

        for key in (RETURN, ESC):
            self.assertFalse(find_step(state, search, "foo", key))
            self.assertEqual(search.last_match, -1)
            self.assertEqual(search.direction, 1)
        self.assertEqual(state.cy, 0)

    def test_restore_puts_back_cursor_and_scroll(self) -> None:
        state = _state(b"a", b"b", b"needle", cy=1)
        state.cx = 1
        state.coloff = 2
        search = SearchState.begin(state)
        find_step(state, search, "needle", ord("e"))

        search.restore(state)

        self.assertEqual((state.cx, state.cy, state.rowoff, state.coloff), (1, 1, 0, 2))


if __name__ == "__main__":
    unittest.main()
