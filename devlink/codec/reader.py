"""
ByteReader - forward-only cursor for decoding wire payloads.

The reader tracks a position in a caller-owned buffer and decodes scalars,
fixed-size byte arrays and length-prefixed buffers from it. Every read
checks bounds first: if a field needs more bytes than remain, ShortReadError
is raised and nothing is consumed.

Key features:
- Position tracking with skip operations
- Little-endian scalar reads (via ScalarKind)
- Enum-validated byte reads
- Sub-readers scoped to a length-prefixed region

Example:
    >>> from devlink.codec.reader import ByteReader
    >>> reader = ByteReader(bytes.fromhex("02053412"))
    >>> reader.read_u8()
    2
    >>> reader.read_u8()
    5
    >>> reader.read_u16()
    4660
"""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from devlink.exceptions import ShortReadError
from devlink.protocol.enums import validate_enum
from devlink.protocol.length_indicators import decode_length_prefix
from devlink.protocol.primitives import ScalarKind, unpack_scalar

TEnum = TypeVar("TEnum", bound=IntEnum)


class ByteReader:
    """
    Reader for decoding little-endian binary data.

    Attributes:
        position: Current read position in bytes.
        remaining: Number of bytes remaining.
        data: The underlying buffer being read.

    Example:
        >>> reader = ByteReader(b"\\x01\\x00\\x00\\x00")
        >>> reader.read_u32()
        1
        >>> reader.is_at_end()
        True
    """

    __slots__ = ("_data", "_position", "_length")

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """
        Initialize the reader.

        Args:
            data: Buffer to decode. Copied into an immutable bytes object so
                later mutation by the caller cannot affect decoding.
        """
        self._data = bytes(data)
        self._position = 0
        self._length = len(self._data)

    @property
    def position(self) -> int:
        """Current position in bytes (0-indexed)."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bytes remaining to read."""
        return self._length - self._position

    @property
    def data(self) -> bytes:
        """The underlying buffer."""
        return self._data

    def is_at_end(self) -> bool:
        """Check if reader has reached the end of data."""
        return self._position >= self._length

    def has_bytes(self, count: int) -> bool:
        """Check if at least `count` bytes are available to read."""
        return self.remaining >= count

    def _check_bounds(self, count: int, operation: str) -> None:
        """Verify sufficient data is available for operation."""
        if self._position + count > self._length:
            raise ShortReadError(
                f"Cannot {operation}",
                needed=count,
                available=self.remaining,
                offset=self._position,
            )

    # ===== Position Control =====

    def skip(self, count: int) -> None:
        """
        Skip forward by the specified number of bytes.

        Raises:
            ShortReadError: If skip would exceed data bounds.
        """
        self._check_bounds(count, f"skip {count} bytes")
        self._position += count

    # ===== Scalar Reading =====

    def read_scalar(self, kind: ScalarKind):
        """
        Read a scalar of the given kind and advance position.

        Args:
            kind: Scalar kind to decode.

        Returns:
            Decoded int, float or bool.

        Raises:
            ShortReadError: If insufficient data available.
        """
        self._check_bounds(kind.width, f"read {kind.name}")
        value = unpack_scalar(kind, self._data, self._position)
        self._position += kind.width
        return value

    def read_u8(self) -> int:
        """Read an unsigned byte."""
        return self.read_scalar(ScalarKind.U8)

    def read_i8(self) -> int:
        """Read a signed byte."""
        return self.read_scalar(ScalarKind.I8)

    def read_bool(self) -> bool:
        """
        Read a boolean byte.

        Any nonzero byte is True, even though encoding only emits 0x00/0x01.
        """
        return self.read_scalar(ScalarKind.BOOL)

    def read_u16(self) -> int:
        """Read an unsigned 16-bit value."""
        return self.read_scalar(ScalarKind.U16)

    def read_i16(self) -> int:
        """Read a signed 16-bit value."""
        return self.read_scalar(ScalarKind.I16)

    def read_u32(self) -> int:
        """Read an unsigned 32-bit value."""
        return self.read_scalar(ScalarKind.U32)

    def read_i32(self) -> int:
        """Read a signed 32-bit value."""
        return self.read_scalar(ScalarKind.I32)

    def read_u64(self) -> int:
        """Read an unsigned 64-bit value."""
        return self.read_scalar(ScalarKind.U64)

    def read_i64(self) -> int:
        """Read a signed 64-bit value."""
        return self.read_scalar(ScalarKind.I64)

    def read_f32(self) -> float:
        """Read an IEEE 754 single-precision value."""
        return self.read_scalar(ScalarKind.F32)

    def read_f64(self) -> float:
        """Read an IEEE 754 double-precision value."""
        return self.read_scalar(ScalarKind.F64)

    def read_enum(self, enum_cls: type[TEnum]) -> TEnum:
        """
        Read a byte and validate it against an enumeration.

        Args:
            enum_cls: Enumeration the byte must belong to.

        Returns:
            The matching enum member.

        Raises:
            ShortReadError: If no byte is available.
            InvalidEnumValueError: If the byte is not a declared value.
        """
        return validate_enum(enum_cls, self.read_u8())

    # ===== Byte Reading =====

    def read_bytes(self, count: int) -> bytes:
        """
        Read a fixed number of raw bytes and advance position.

        Args:
            count: Number of bytes to read.

        Returns:
            Bytes object containing the read data.

        Raises:
            ShortReadError: If insufficient data available.
        """
        self._check_bounds(count, f"read {count} bytes")
        result = self._data[self._position : self._position + count]
        self._position += count
        return result

    def read_length_prefixed(self, prefix_width: int) -> bytes:
        """
        Read a length prefix and then exactly that many bytes.

        Position is only advanced when both the prefix and the body are
        available.

        Args:
            prefix_width: Width of the length prefix (1, 2 or 4).

        Returns:
            The buffer body, without its prefix.

        Raises:
            ShortReadError: If the prefix or body is truncated.
        """
        length = decode_length_prefix(self._data, prefix_width, self._position)
        self._check_bounds(prefix_width + length, f"read {length}-byte buffer")
        start = self._position + prefix_width
        self._position = start + length
        return self._data[start : start + length]

    def read_remaining(self) -> bytes:
        """
        Read all remaining data and advance to end.
        """
        return self.read_bytes(self.remaining)

    def create_subreader(self, prefix_width: int) -> ByteReader:
        """
        Create a reader scoped to a length-prefixed region and advance past it.

        Useful for parsing nested record sequences where parsing must not
        run past the declared region.

        Args:
            prefix_width: Width of the region's length prefix.

        Returns:
            New ByteReader over the region body.

        Raises:
            ShortReadError: If the region is truncated.
        """
        return ByteReader(self.read_length_prefixed(prefix_width))

    def __repr__(self) -> str:
        return (
            f"ByteReader(pos={self._position}, "
            f"remaining={self.remaining}, "
            f"total={self._length})"
        )

    def __len__(self) -> int:
        """Return total length in bytes."""
        return self._length
