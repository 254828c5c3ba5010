"""Tests for quit confirmation, viewport sizing, and status messages."""

from __future__ import annotations

import unittest

from lazyedit.config import EditorConfig
from lazyedit.state import EditorState, QuitConfirmation


class QuitConfirmationTests(unittest.TestCase):
    def test_clean_buffer_quits_immediately(self) -> None:
        confirmation = QuitConfirmation(3)

        self.assertTrue(confirmation.request(dirty=False))
        self.assertEqual(confirmation.remaining, 3)

    def test_dirty_buffer_needs_threshold_plus_one_presses(self) -> None:
        confirmation = QuitConfirmation(3)

        results = [confirmation.request(dirty=True) for _ in range(4)]

        self.assertEqual(results, [False, False, False, True])

    def test_reset_restores_full_count(self) -> None:
        confirmation = QuitConfirmation(3)
        confirmation.request(dirty=True)
        self.assertEqual(confirmation.remaining, 2)

        confirmation.reset()

        self.assertEqual(confirmation.remaining, 3)

    def test_zero_threshold_never_asks(self) -> None:
        self.assertTrue(QuitConfirmation(0).request(dirty=True))


class EditorStateTests(unittest.TestCase):
    def test_create_uses_config_tab_stop(self) -> None:
        state = EditorState.create(EditorConfig(tab_stop=8))

        self.assertEqual(state.document.tab_stop, 8)
        self.assertEqual(state.quit_confirmation.remaining, 3)

    def test_set_viewport_reserves_two_bars(self) -> None:
        state = EditorState.create()

        state.set_viewport(24, 80)
        self.assertEqual((state.winrows, state.wincols), (22, 80))

        state.set_viewport(2, 80)
        self.assertEqual(state.winrows, 1)

    def test_rx_follows_cx_through_tabs(self) -> None:
        state = EditorState.create()
        state.document.replace_lines([b"a\tb"])
        state.cx = 2

        self.assertEqual(state.rx, 4)

    def test_rx_on_line_after_last_is_zero(self) -> None:
        state = EditorState.create()
        state.document.replace_lines([b"abc"])
        state.cy = 1
        state.cx = 2

        self.assertIsNone(state.current_row)
        self.assertEqual(state.rx, 0)

    def test_status_message_is_truncated(self) -> None:
        state = EditorState.create()

        state.set_status_message("a" * 200, now=0.0)

        self.assertEqual(len(state.status_message), 127)

    def test_status_message_truncation_drops_split_character(self) -> None:
        state = EditorState.create()

        state.set_status_message("é" * 100, now=0.0)

        self.assertEqual(state.status_message, ("é" * 63).encode("utf-8"))

    def test_visible_status_message_expires(self) -> None:
        state = EditorState.create()
        state.set_status_message("hi", now=10.0)

        self.assertEqual(state.visible_status_message(now=11.9), b"hi")
        self.assertEqual(state.visible_status_message(now=12.0), b"")


if __name__ == "__main__":
    unittest.main()
