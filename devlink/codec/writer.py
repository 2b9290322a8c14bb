"""
ByteWriter - append-only buffer for encoding wire payloads.

The writer mirrors ByteReader: each ``write_*`` method appends the
little-endian encoding of one field. A writer may be given a capacity, in
which case any write that would overflow raises BufferTooSmallError before
anything is appended.

Example:
    >>> writer = ByteWriter()
    >>> writer.write_u8(2)
    >>> writer.write_u8(5)
    >>> writer.write_length_prefixed(b"\\xaa\\xbb", 2)
    >>> writer.getvalue().hex(" ")
    '02 05 02 00 aa bb'
"""

from __future__ import annotations

from enum import IntEnum

from devlink.exceptions import BufferTooSmallError, InvalidDataError
from devlink.protocol.length_indicators import encode_length_prefixed
from devlink.protocol.primitives import ScalarKind, pack_scalar


class ByteWriter:
    """
    Writer for encoding little-endian binary data.

    Attributes:
        capacity: Maximum number of bytes, or None for unbounded.
    """

    __slots__ = ("_buffer", "_capacity")

    def __init__(self, capacity: int | None = None) -> None:
        """
        Initialize the writer.

        Args:
            capacity: Optional upper bound on the encoded size.
        """
        if capacity is not None and capacity < 0:
            raise ValueError(f"Capacity must not be negative, got {capacity}")
        self._buffer = bytearray()
        self._capacity = capacity

    @property
    def capacity(self) -> int | None:
        """Maximum number of bytes this writer accepts."""
        return self._capacity

    def _append(self, data: bytes | bytearray | memoryview) -> None:
        required = len(self._buffer) + len(data)
        if self._capacity is not None and required > self._capacity:
            raise BufferTooSmallError(
                "Encoded value does not fit destination buffer",
                capacity=self._capacity,
                required=required,
            )
        self._buffer += data

    # ===== Scalar Writing =====

    def write_scalar(self, kind: ScalarKind, value: int | float | bool) -> None:
        """
        Append a scalar of the given kind.

        Raises:
            InvalidDataError: If the value is out of range for the kind.
            BufferTooSmallError: If capacity would be exceeded.
        """
        self._append(pack_scalar(kind, value))

    def write_u8(self, value: int) -> None:
        self.write_scalar(ScalarKind.U8, value)

    def write_i8(self, value: int) -> None:
        self.write_scalar(ScalarKind.I8, value)

    def write_bool(self, value: bool) -> None:
        """Append 0x01 for True, 0x00 for False."""
        self.write_scalar(ScalarKind.BOOL, value)

    def write_u16(self, value: int) -> None:
        self.write_scalar(ScalarKind.U16, value)

    def write_i16(self, value: int) -> None:
        self.write_scalar(ScalarKind.I16, value)

    def write_u32(self, value: int) -> None:
        self.write_scalar(ScalarKind.U32, value)

    def write_i32(self, value: int) -> None:
        self.write_scalar(ScalarKind.I32, value)

    def write_u64(self, value: int) -> None:
        self.write_scalar(ScalarKind.U64, value)

    def write_i64(self, value: int) -> None:
        self.write_scalar(ScalarKind.I64, value)

    def write_f32(self, value: float) -> None:
        self.write_scalar(ScalarKind.F32, value)

    def write_f64(self, value: float) -> None:
        self.write_scalar(ScalarKind.F64, value)

    def write_enum(self, value: IntEnum) -> None:
        """Append an enum member as its single-byte value."""
        self.write_u8(int(value))

    # ===== Byte Writing =====

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append raw bytes with no prefix."""
        self._append(data)

    def write_fixed_bytes(self, data: bytes | bytearray | memoryview, size: int) -> None:
        """
        Append a fixed-size byte array.

        Raises:
            InvalidDataError: If ``data`` is not exactly ``size`` bytes.
        """
        if len(data) != size:
            raise InvalidDataError(f"Fixed field requires exactly {size} bytes, got {len(data)}")
        self._append(data)

    def write_length_prefixed(self, data: bytes | bytearray | memoryview, prefix_width: int) -> None:
        """
        Append a length prefix followed by ``data``.

        Raises:
            ValueTooLargeError: If ``data`` is too long for the prefix width.
        """
        self._append(encode_length_prefixed(data, prefix_width))

    def getvalue(self) -> bytes:
        """Return the encoded bytes."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"ByteWriter(size={len(self._buffer)}, capacity={self._capacity})"
