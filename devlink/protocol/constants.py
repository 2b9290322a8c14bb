"""
Device link protocol command identifiers and constants.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from types import MappingProxyType
from typing import Final


class CommandCode(IntEnum):
    """
    Command identifiers carried in the ``command_id`` header field.

    Commands sent by the controller use the low range (0x01-0x10); the
    matching responses set the high bit (0x81-0x90). The high bit is a
    naming convention only and is not enforced by the codec.
    """

    # ===== Commands (controller -> device) =====

    PING = 0x01
    """Round-trip timing check."""

    GET_DEVICE_INFO = 0x02
    """Request device identification and status."""

    SEND_DATA = 0x03
    """Write a buffer to a device channel."""

    SET_CONFIG = 0x04
    """Set a single configuration value."""

    BATCH = 0x10
    """Execute several sub-commands in one frame."""

    # ===== Responses (device -> controller) =====

    PING_RESPONSE = 0x81
    """Ping reply carrying both timestamps."""

    DEVICE_INFO_RESPONSE = 0x82
    """Device identification and status."""

    SEND_DATA_RESPONSE = 0x83
    """Result of a SEND_DATA command."""

    SET_CONFIG_RESPONSE = 0x84
    """Result of a SET_CONFIG command."""

    SENSOR_DATA_RESPONSE = 0x85
    """Sensor samples. Device-initiated, has no paired command."""

    BATCH_RESPONSE = 0x90
    """Per-item results of a BATCH command."""


class ProtocolConstants:
    """
    Device link protocol constants.

    Contains frame sizes, header defaults and length-prefix limits used
    throughout the codec.
    """

    # ===== Framing =====

    HEADER_SIZE: Final[int] = 14
    """Size of the protocol header in bytes."""

    DEFAULT_MAGIC: Final[int] = 0xBEEF
    """Magic value written by default. Not validated by the codec."""

    PROTOCOL_VERSION: Final[int] = 1
    """Protocol version written by default."""

    RESPONSE_FLAG: Final[int] = 0x80
    """High bit set on response command identifiers."""

    MAX_PAYLOAD_LENGTH: Final[int] = 0xFFFFFFFF
    """Largest payload length representable in the header."""

    # ===== Length prefixes =====

    MAX_U8_PREFIX_LENGTH: Final[int] = 0xFF
    """Largest buffer a 1-byte length prefix can describe."""

    MAX_U16_PREFIX_LENGTH: Final[int] = 0xFFFF
    """Largest buffer a 2-byte length prefix can describe."""

    MAX_RECORD_COUNT: Final[int] = 0xFF
    """Largest record count a container message can declare."""

    # ===== Fixed-size fields =====

    DEVICE_NAME_SIZE: Final[int] = 32
    """Size of the device name byte array."""

    FIRMWARE_VERSION_SIZE: Final[int] = 16
    """Size of the firmware version byte array."""


COMMAND_CODES: Final[frozenset[int]] = frozenset({
    CommandCode.PING,
    CommandCode.GET_DEVICE_INFO,
    CommandCode.SEND_DATA,
    CommandCode.SET_CONFIG,
    CommandCode.BATCH,
})
"""Identifiers of controller-to-device commands."""

RESPONSE_CODES: Final[frozenset[int]] = frozenset({
    CommandCode.PING_RESPONSE,
    CommandCode.DEVICE_INFO_RESPONSE,
    CommandCode.SEND_DATA_RESPONSE,
    CommandCode.SET_CONFIG_RESPONSE,
    CommandCode.SENSOR_DATA_RESPONSE,
    CommandCode.BATCH_RESPONSE,
})
"""Identifiers of device-to-controller responses."""

RESPONSE_FOR_COMMAND: Final[Mapping[int, int]] = MappingProxyType({
    CommandCode.PING: CommandCode.PING_RESPONSE,
    CommandCode.GET_DEVICE_INFO: CommandCode.DEVICE_INFO_RESPONSE,
    CommandCode.SEND_DATA: CommandCode.SEND_DATA_RESPONSE,
    CommandCode.SET_CONFIG: CommandCode.SET_CONFIG_RESPONSE,
    CommandCode.BATCH: CommandCode.BATCH_RESPONSE,
})
"""Command identifier to the identifier of its response."""


def is_response_code(command_id: int) -> bool:
    """
    Check whether a command identifier follows the response convention.

    Args:
        command_id: Header command identifier.

    Returns:
        True if the high bit is set.

    Example:
        >>> is_response_code(0x81)
        True
        >>> is_response_code(0x01)
        False
    """
    return bool(command_id & ProtocolConstants.RESPONSE_FLAG)
