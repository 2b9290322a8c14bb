"""
Fixed-width scalar encodings.

The whole protocol uses a single byte order: little-endian. Every scalar
kind has a fixed width and a struct format; the reader and writer look the
kind up here instead of hard-coding format strings.

| Kind | Width | Range                       |
| ---- | ----- | --------------------------- |
| U8   | 1     | 0 .. 255                    |
| I8   | 1     | -128 .. 127                 |
| BOOL | 1     | 0x00 / 0x01 (nonzero reads True) |
| U16  | 2     | 0 .. 65535                  |
| I16  | 2     | -32768 .. 32767             |
| U32  | 4     | 0 .. 4294967295             |
| I32  | 4     | -2**31 .. 2**31-1           |
| F32  | 4     | IEEE 754 single             |
| U64  | 8     | 0 .. 2**64-1                |
| I64  | 8     | -2**63 .. 2**63-1           |
| F64  | 8     | IEEE 754 double             |
"""

from __future__ import annotations

import struct
from enum import Enum
from typing import Final

from devlink.exceptions import InvalidDataError

BYTE_ORDER: Final[str] = "<"
"""struct prefix for the protocol byte order (little-endian, no padding)."""


class ScalarKind(Enum):
    """Scalar kinds with their struct format character and width."""

    U8 = ("B", 1)
    I8 = ("b", 1)
    BOOL = ("?", 1)
    U16 = ("H", 2)
    I16 = ("h", 2)
    U32 = ("I", 4)
    I32 = ("i", 4)
    F32 = ("f", 4)
    U64 = ("Q", 8)
    I64 = ("q", 8)
    F64 = ("d", 8)

    def __init__(self, format_char: str, width: int) -> None:
        self.format_char = format_char
        self.width = width
        self.codec = struct.Struct(BYTE_ORDER + format_char)

    @property
    def is_float(self) -> bool:
        """True for IEEE 754 kinds."""
        return self.format_char in ("f", "d")


def pack_scalar(kind: ScalarKind, value: int | float | bool) -> bytes:
    """
    Encode a scalar in its little-endian wire form.

    Booleans are written as 0x00 or 0x01.

    Args:
        kind: Scalar kind.
        value: Value to encode.

    Returns:
        ``kind.width`` bytes.

    Raises:
        InvalidDataError: If the value is out of range for the kind.

    Example:
        >>> pack_scalar(ScalarKind.U16, 0x1234)
        b'4\\x12'
    """
    if kind is ScalarKind.BOOL:
        value = 1 if value else 0
    try:
        return kind.codec.pack(value)
    except (struct.error, OverflowError) as e:
        raise InvalidDataError(f"Value {value!r} out of range for {kind.name}") from e


def unpack_scalar(
    kind: ScalarKind, data: bytes | bytearray | memoryview, offset: int = 0
) -> int | float | bool:
    """
    Decode a scalar from ``data`` at ``offset``.

    Any nonzero byte decodes as True for BOOL, so decode is intentionally
    looser than encode.

    Args:
        kind: Scalar kind.
        data: Source buffer (must hold ``kind.width`` bytes at offset).
        offset: Byte offset to read from.

    Returns:
        Decoded int, float or bool.
    """
    value = kind.codec.unpack_from(data, offset)[0]
    if kind is ScalarKind.BOOL:
        return value != 0
    return value
