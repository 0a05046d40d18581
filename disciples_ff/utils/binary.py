"""Binary reading utilities for little-endian MQDB data."""

import struct
from io import BytesIO
from typing import BinaryIO, Union

# Legacy code page used by the game for record, image and frame names
NAME_ENCODING = "cp1251"


class BinaryReader:
    """Helper for reading little-endian binary data."""

    def __init__(self, data: Union[bytes, BinaryIO]):
        if isinstance(data, (bytes, bytearray)):
            self._stream = BytesIO(data)
        else:
            self._stream = data

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._stream.seek(offset, whence)

    def read(self, size: int = -1) -> bytes:
        return self._stream.read(size)

    def read_bytes(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) < size:
            raise EOFError(f"Expected {size} bytes, got {len(data)}")
        return data

    def read_u8(self) -> int:
        return struct.unpack("<B", self.read_bytes(1))[0]

    def read_u16(self) -> int:
        return struct.unpack("<H", self.read_bytes(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]

    def read_cstring(self, encoding: str = NAME_ENCODING) -> str:
        """Read a null-terminated string.

        The terminator is consumed. Running out of data before it is found
        raises EOFError, since the caller's layout is then out of sync.
        """
        chars = []
        while True:
            byte = self._stream.read(1)
            if not byte:
                raise EOFError("Unterminated string")
            if byte == b"\x00":
                break
            chars.append(byte)
        return b"".join(chars).decode(encoding, errors="replace")

    def read_fixed_string(self, length: int, encoding: str = NAME_ENCODING) -> str:
        """Read a fixed-length, null-padded string field.

        The last byte of the field is always treated as a terminator, so a
        field filled up to its end yields at most ``length - 1`` characters.
        """
        data = self.read_bytes(length)[: length - 1]
        end = data.find(b"\x00")
        if end != -1:
            data = data[:end]
        return data.decode(encoding, errors="replace")

    def skip(self, count: int) -> None:
        """Skip forward by count bytes."""
        self._stream.seek(count, 1)

    def remaining(self) -> int:
        """Return number of bytes remaining in stream."""
        current = self.tell()
        self._stream.seek(0, 2)  # Seek to end
        end = self.tell()
        self._stream.seek(current)
        return end - current

    def peek(self, size: int) -> bytes:
        """Read bytes without advancing position."""
        data = self._stream.read(size)
        self._stream.seek(-len(data), 1)
        return data


def write_u32_le(value: int) -> bytes:
    """Write a little-endian 32-bit unsigned integer."""
    return struct.pack("<I", value)
