"""Tests for row storage and dirty tracking."""

from __future__ import annotations

import unittest

from lazyedit.document import Document, Row


class RowTests(unittest.TestCase):
    def test_render_expands_tabs_and_counts_glyphs(self) -> None:
        row = Row(bytearray(b"a\tb"), tab_stop=4)

        self.assertEqual(row.render, b"a   b")
        self.assertEqual(row.rlen, 5)
        self.assertEqual(row.glyphs, 5)

    def test_multibyte_render_keeps_bytes_and_counts_one_glyph(self) -> None:
        row = Row(bytearray("é\tx".encode("utf-8")), tab_stop=4)

        self.assertEqual(row.render, "é   x".encode("utf-8"))
        self.assertEqual(row.len, 4)
        self.assertEqual(row.glyphs, 5)


class DocumentTests(unittest.TestCase):
    def _document(self, *lines: bytes) -> Document:
        document = Document(tab_stop=4)
        document.replace_lines(list(lines))
        return document

    def test_replace_lines_loads_clean_document(self) -> None:
        document = self._document(b"one", b"two")

        self.assertEqual(document.lines(), [b"one", b"two"])
        self.assertEqual(document.dirty, 0)

    def test_insert_row_in_range_increments_dirty(self) -> None:
        document = self._document(b"one", b"three")

        row = document.insert_row(1, b"two")

        self.assertIsNotNone(row)
        self.assertEqual(document.lines(), [b"one", b"two", b"three"])
        self.assertEqual(document.dirty, 1)

    def test_insert_row_out_of_range_is_ignored(self) -> None:
        document = self._document(b"one")

        self.assertIsNone(document.insert_row(5, b"x"))
        self.assertIsNone(document.insert_row(-1, b"x"))
        self.assertEqual(document.lines(), [b"one"])
        self.assertEqual(document.dirty, 0)

    def test_insert_row_at_end_appends(self) -> None:
        document = self._document(b"one")

        document.insert_row(document.nrows, b"two")

        self.assertEqual(document.lines(), [b"one", b"two"])

    def test_delete_row_out_of_range_is_ignored(self) -> None:
        document = self._document(b"one")

        document.delete_row(1)

        self.assertEqual(document.nrows, 1)
        self.assertEqual(document.dirty, 0)

    def test_insert_char_past_end_appends(self) -> None:
        document = self._document(b"ab")
        row = document.rows[0]

        document.insert_char(row, 99, ord("c"))

        self.assertEqual(bytes(row.chars), b"abc")
        self.assertEqual(document.dirty, 1)

    def test_delete_char_out_of_range_is_ignored(self) -> None:
        document = self._document(b"ab")
        row = document.rows[0]

        document.delete_char(row, 2)

        self.assertEqual(bytes(row.chars), b"ab")
        self.assertEqual(document.dirty, 0)

    def test_insert_then_delete_restores_content_but_stays_dirty(self) -> None:
        document = self._document(b"abc")
        row = document.rows[0]

        document.insert_char(row, 1, ord("x"))
        document.delete_char(row, 1)

        self.assertEqual(bytes(row.chars), b"abc")
        self.assertEqual(row.render, b"abc")
        self.assertEqual(document.dirty, 2)

    def test_append_and_truncate_refresh_render(self) -> None:
        document = self._document(b"ab")
        row = document.rows[0]

        document.append_to_row(row, b"\tc")
        self.assertEqual(row.render, b"ab  c")

        document.truncate_row(row, 1)
        self.assertEqual(bytes(row.chars), b"a")
        self.assertEqual(row.render, b"a")
        self.assertEqual(document.dirty, 2)

    def test_mark_clean_resets_dirty(self) -> None:
        document = self._document(b"ab")
        document.insert_row(0, b"")

        document.mark_clean()

        self.assertEqual(document.dirty, 0)


if __name__ == "__main__":
    unittest.main()
