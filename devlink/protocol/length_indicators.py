"""
Length prefix handling for variable-length fields.

A variable-length field is written as a fixed-width count followed
immediately by that many raw bytes. The count width is declared per field:

- 1-byte prefix: buffers of at most 255 bytes (SetConfigCommand.value)
- 2-byte prefix: buffers of at most 65535 bytes (everything else)
- 4-byte prefix: supported for completeness, unused by current messages

The prefix is always little-endian, like every other multi-byte value.

CRITICAL: encoding validates the length against the prefix width and raises
ValueTooLargeError. It never truncates the count to its low bytes.
"""

from __future__ import annotations

from typing import Final

from devlink.exceptions import ShortReadError, ValueTooLargeError

PREFIX_WIDTHS: Final[frozenset[int]] = frozenset({1, 2, 4})
"""Supported length prefix widths in bytes."""


def max_length_for(width: int) -> int:
    """
    Largest length representable by a prefix of ``width`` bytes.

    Args:
        width: Prefix width in bytes (1, 2 or 4).

    Returns:
        Maximum length value.

    Raises:
        ValueError: If width is not a supported prefix width.

    Example:
        >>> max_length_for(1)
        255
        >>> max_length_for(2)
        65535
    """
    if width not in PREFIX_WIDTHS:
        raise ValueError(f"Length prefix width must be 1, 2 or 4, got {width}")
    return (1 << (8 * width)) - 1


def encode_length_prefix(length: int, width: int) -> bytes:
    """
    Encode a buffer length as a little-endian prefix.

    Args:
        length: Number of bytes that follow the prefix.
        width: Prefix width in bytes (1, 2 or 4).

    Returns:
        ``width`` bytes.

    Raises:
        ValueTooLargeError: If length does not fit the prefix width.
        ValueError: If length is negative or width unsupported.

    Example:
        >>> encode_length_prefix(2, 2)
        b'\\x02\\x00'
        >>> encode_length_prefix(300, 1)
        Traceback (most recent call last):
        ...
        devlink.exceptions.ValueTooLargeError: ...
    """
    maximum = max_length_for(width)
    if length < 0:
        raise ValueError(f"Length must not be negative, got {length}")
    if length > maximum:
        raise ValueTooLargeError(
            f"Length {length} exceeds {width}-byte prefix",
            value=length,
            maximum=maximum,
        )
    return length.to_bytes(width, "little")


def decode_length_prefix(
    data: bytes | bytearray | memoryview,
    width: int,
    offset: int = 0,
) -> int:
    """
    Decode a little-endian length prefix.

    Args:
        data: Source buffer.
        width: Prefix width in bytes (1, 2 or 4).
        offset: Byte offset of the prefix.

    Returns:
        Decoded length.

    Raises:
        ShortReadError: If fewer than ``width`` bytes remain at offset.

    Example:
        >>> decode_length_prefix(b"\\x2c\\x01", 2)
        300
    """
    max_length_for(width)
    available = len(data) - offset
    if available < width:
        raise ShortReadError(
            "Cannot read length prefix",
            needed=width,
            available=max(available, 0),
            offset=offset,
        )
    return int.from_bytes(bytes(data[offset : offset + width]), "little")


def encode_length_prefixed(payload: bytes | bytearray | memoryview, width: int) -> bytes:
    """
    Encode ``payload`` preceded by its length prefix.

    Args:
        payload: Raw bytes.
        width: Prefix width in bytes.

    Returns:
        Prefix followed by the payload.

    Raises:
        ValueTooLargeError: If the payload is too long for the prefix.
    """
    return encode_length_prefix(len(payload), width) + bytes(payload)
