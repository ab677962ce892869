"""
Byte source with endianness-aware primitive reads.

Wraps raw bytes (or hex text as PostGIS returns it for geometry columns)
and reads the fixed-width fields EWKB is made of: one byte markers,
32-bit integers and 64-bit doubles.
"""

import binascii
import struct
from enum import Enum
from typing import Optional, Union

from .errors import MalformedEncoding, TruncatedInput


ByteSource = Union[bytes, bytearray, memoryview, str]


class ByteOrder(Enum):
    """Byte order markers used at the start of every EWKB node."""
    XDR = 0  # big endian
    NDR = 1  # little endian

    @property
    def prefix(self) -> str:
        """struct format prefix for this byte order."""
        return ">" if self is ByteOrder.XDR else "<"

    @classmethod
    def from_marker(cls, marker: int, position: Optional[int] = None) -> "ByteOrder":
        try:
            return cls(marker)
        except ValueError:
            raise MalformedEncoding(f"Unknown byte order marker: {marker}", position) from None

    @classmethod
    def from_name(cls, name: str) -> "ByteOrder":
        """Parse 'ndr'/'xdr' (or 'little'/'big') case-insensitively."""
        aliases = {
            "ndr": cls.NDR,
            "little": cls.NDR,
            "xdr": cls.XDR,
            "big": cls.XDR,
        }
        try:
            return aliases[name.strip().lower()]
        except KeyError:
            raise ValueError(f"Invalid byte order: {name!r} (expected ndr or xdr)") from None


def to_bytes(source: ByteSource) -> bytes:
    """
    Normalise a column value to bytes.

    Args:
        source: Raw bytes (bytes, bytearray, memoryview) or a hex string
            with two hex digits per byte

    Returns:
        The decoded bytes

    Raises:
        MalformedEncoding: If hex text has odd length or non-hex characters
    """
    if isinstance(source, str):
        if len(source) % 2:
            raise MalformedEncoding(f"Hex input has odd length: {len(source)}")
        try:
            # unhexlify rejects whitespace and any non-hex digit
            return binascii.unhexlify(source)
        except (binascii.Error, ValueError) as e:
            raise MalformedEncoding(f"Invalid hex input: {e}") from e
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    raise TypeError(f"Expected bytes or hex string, got {type(source).__name__}")


class ByteCursor:
    """
    Sequential reader over a finite byte buffer.

    The byte order is fixed when the cursor is created and applies to
    every multi-byte read. The cursor only ever moves forward.
    """

    def __init__(self, data: bytes, byte_order: ByteOrder):
        self._data = data
        self._pos = 0
        self.byte_order = byte_order

        prefix = byte_order.prefix
        self._int32 = struct.Struct(f"{prefix}i")
        self._uint32 = struct.Struct(f"{prefix}I")
        self._float64 = struct.Struct(f"{prefix}d")

    @classmethod
    def from_source(cls, source: ByteSource, byte_order: Optional[ByteOrder] = None) -> "ByteCursor":
        """
        Create a cursor, detecting the byte order from the first byte.

        Args:
            source: Bytes or hex text
            byte_order: Force a byte order instead of detecting it

        Returns:
            A cursor positioned at byte 0
        """
        data = to_bytes(source)
        if byte_order is None:
            byte_order = ByteOrder.from_marker(peek_first_byte(data), 0)
        return cls(data, byte_order)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def __len__(self) -> int:
        return len(self._data)

    def peek_first_byte(self) -> int:
        return peek_first_byte(self._data)

    def require(self, size: int):
        """Fail with TruncatedInput unless `size` more bytes are available."""
        if size > self.remaining:
            raise TruncatedInput(
                f"Need {size} bytes but only {self.remaining} remain",
                self._pos
            )

    def read_byte(self) -> int:
        self.require(1)
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read_int32(self) -> int:
        return self._unpack(self._int32)

    def read_uint32(self) -> int:
        return self._unpack(self._uint32)

    def read_float64(self) -> float:
        return self._unpack(self._float64)

    def read_float64s(self, count: int) -> tuple[float, ...]:
        """Read `count` consecutive doubles in one call."""
        if count == 0:
            return ()
        size = 8 * count
        self.require(size)
        values = struct.unpack_from(f"{self.byte_order.prefix}{count}d", self._data, self._pos)
        self._pos += size
        return values

    def _unpack(self, fmt: struct.Struct):
        self.require(fmt.size)
        value = fmt.unpack_from(self._data, self._pos)[0]
        self._pos += fmt.size
        return value


def peek_first_byte(data: bytes) -> int:
    """Return the first byte without consuming it."""
    if not data:
        raise TruncatedInput("Empty input", 0)
    return data[0]
