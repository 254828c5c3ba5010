"""Growable byte container used to assemble one terminal frame.

Everything a frame draws is appended here and flushed with a single write.
"""

from __future__ import annotations


class ByteBuffer:
    def __init__(self, initial: bytes = b"") -> None:
        self._data = bytearray(initial)

    def __len__(self) -> int:
        return len(self._data)

    def append(self, data: bytes | bytearray | str) -> ByteBuffer:
        """Append raw bytes (or ASCII/UTF-8 text) and return ``self``."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._data += data
        return self

    def append_byte(self, value: int) -> ByteBuffer:
        self._data.append(value)
        return self

    def pop(self, count: int = 1) -> None:
        """Drop up to ``count`` trailing bytes; popping an empty buffer is a no-op."""
        if count <= 0:
            return
        del self._data[max(0, len(self._data) - count):]

    def clear(self) -> None:
        self._data.clear()

    def getvalue(self) -> bytes:
        return bytes(self._data)
