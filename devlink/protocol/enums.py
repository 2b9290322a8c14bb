"""
Single-byte enumerations carried in message fields.

Each enumeration is a closed set: decoding a byte that is not a declared
value fails with InvalidEnumValueError carrying that byte. No enumeration
ever falls back to a default member.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from devlink.exceptions import InvalidEnumValueError

TEnum = TypeVar("TEnum", bound=IntEnum)


def validate_enum(enum_cls: type[TEnum], raw_value: int) -> TEnum:
    """
    Convert a raw byte into a member of ``enum_cls``.

    Args:
        enum_cls: Enumeration to validate against.
        raw_value: Byte read from the wire.

    Returns:
        The matching member.

    Raises:
        InvalidEnumValueError: If ``raw_value`` is not a declared value.

    Example:
        >>> validate_enum(DeviceStatus, 1)
        <DeviceStatus.ONLINE: 1>
    """
    try:
        return enum_cls(raw_value)
    except ValueError:
        raise InvalidEnumValueError(raw_value, enum_cls.__name__) from None


class _ByteEnum(IntEnum):
    @classmethod
    def from_byte(cls: type[TEnum], raw_value: int) -> TEnum:
        """Validate a raw byte against this enumeration."""
        return validate_enum(cls, raw_value)


class Endian(_ByteEnum):
    """
    Byte order marker.

    Reserved: no message field references it, the whole protocol is
    little-endian.
    """

    LITTLE = 0
    BIG = 1


class DeviceStatus(_ByteEnum):
    """Operational status reported in DeviceInfoResponse."""

    OFFLINE = 0
    ONLINE = 1
    BUSY = 2
    ERROR = 3


class ErrorCode(_ByteEnum):
    """Result code carried by response messages."""

    NONE = 0
    """No error."""

    INVALID_COMMAND = 1
    """Command identifier not supported by the device."""

    INVALID_PARAMETER = 2
    """A command field was out of range."""

    TIMEOUT = 3
    """Device timed out executing the command."""

    DEVICE_ERROR = 4
    """Device-side failure."""

    UNKNOWN = 255
    """Unspecified failure."""
