"""Sequential little-endian reader over an in-memory byte source."""

from __future__ import annotations

import struct
from typing import Union
from uuid import UUID

from .errors import malformed, offset_out_of_range, truncated

__all__ = ["BinaryCursor", "ByteSource"]

ByteSource = Union[bytes, bytearray, memoryview]

_I16 = struct.Struct("<h")
_U16 = struct.Struct("<H")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_I64 = struct.Struct("<q")
_GUID = struct.Struct("<IIII")

_I32_MIN = -(2**31)


class BinaryCursor:
    """Seekable reader whose position always stays within ``[0, length]``.

    A failed read raises ``TruncatedData`` and leaves the position where it
    was.
    """

    __slots__ = ("_data", "_pos")

    def __init__(self, data: ByteSource, position: int = 0):
        self._data = memoryview(data).cast("B")
        self._pos = 0
        self.seek(position)

    @property
    def length(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def seek(self, offset: int) -> None:
        if offset < 0 or offset > len(self._data):
            raise offset_out_of_range(offset, len(self._data))
        self._pos = offset

    def save_position(self) -> int:
        return self._pos

    def restore_position(self, mark: int) -> None:
        self.seek(mark)

    def _take(self, size: int, label: str) -> memoryview:
        if size < 0:
            raise malformed(f"negative size {size} for {label}", position=self._pos)
        if size > self.remaining:
            raise truncated(self._pos, size, self.remaining, label)
        start = self._pos
        self._pos += size
        return self._data[start : self._pos]

    def skip(self, size: int, label: str = "skip") -> None:
        self._take(size, label)

    def read_bytes(self, size: int, label: str = "bytes") -> bytes:
        return bytes(self._take(size, label))

    def peek_bytes(self, size: int) -> bytes:
        """Return up to ``size`` bytes without moving."""
        return bytes(self._data[self._pos : self._pos + size])

    def read_i16(self) -> int:
        return _I16.unpack(self._take(2, "int16"))[0]

    def read_u16(self) -> int:
        return _U16.unpack(self._take(2, "uint16"))[0]

    def read_i32(self) -> int:
        return _I32.unpack(self._take(4, "int32"))[0]

    def read_u32(self) -> int:
        return _U32.unpack(self._take(4, "uint32"))[0]

    def read_i64(self) -> int:
        return _I64.unpack(self._take(8, "int64"))[0]

    def read_bool(self) -> bool:
        # Booleans are stored as 32-bit integers.
        return self.read_u32() != 0

    def read_guid(self) -> UUID:
        a, b, c, d = _GUID.unpack(self._take(16, "guid"))
        return UUID(int=(a << 96) | (b << 64) | (c << 32) | d)

    def read_length_prefixed_string(self) -> str:
        """Read a string stored as a signed count followed by characters.

        A positive count is that many single-byte characters, a negative count
        is ``-count`` UTF-16 code units. The count includes the terminating
        NUL, which is not part of the returned text.
        """
        mark = self._pos
        count = self.read_i32()
        if count == 0:
            return ""
        if count == _I32_MIN:
            self._pos = mark
            raise malformed("string length out of range", position=mark)
        if count > 0:
            size, encoding = count, "latin-1"
        else:
            size, encoding = -count * 2, "utf-16-le"
        if size > self.remaining:
            self._pos = mark
            raise truncated(self._pos + 4, size, self.remaining - 4, "string")
        raw = bytes(self._take(size, "string"))
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as exc:
            self._pos = mark
            raise malformed(
                f"invalid {encoding} string: {exc.reason}", position=mark
            ) from None
        if text.endswith("\x00"):
            text = text[:-1]
        return text

    def __repr__(self) -> str:  # pragma: no cover
        return f"BinaryCursor(position={self._pos}, length={len(self._data)})"
