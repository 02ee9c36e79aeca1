"""Little-endian write cursor over a fixed-size byte buffer."""

from __future__ import annotations

import struct


class ByteCursor:
    """Owns a write offset into ``buffer`` and advances it on every write.

    The buffer is never resized; writing past its end raises ``IndexError``.
    """

    def __init__(self, buffer: bytearray, position: int = 0) -> None:
        self._buffer = buffer
        self._position = position

    @property
    def position(self) -> int:
        return self._position

    def write_u16le(self, value: int) -> None:
        self._put(struct.pack("<H", value))

    def write_u32le(self, value: int) -> None:
        self._put(struct.pack("<I", value))

    def write_bytes(self, data: bytes) -> None:
        self._put(bytes(data))

    def skip(self, count: int) -> None:
        if count < 0:
            raise ValueError("Cannot skip a negative number of bytes")
        self._reserve(count)
        self._position += count

    def _reserve(self, count: int) -> None:
        if self._position + count > len(self._buffer):
            raise IndexError(
                f"Write of {count} bytes at offset {self._position} overruns "
                f"buffer of {len(self._buffer)} bytes"
            )

    def _put(self, data: bytes) -> None:
        self._reserve(len(data))
        end = self._position + len(data)
        self._buffer[self._position:end] = data
        self._position = end
