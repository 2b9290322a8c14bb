"""
Protocol layer for device link communication.

This package contains the low-level wire definitions:
- Command codes and protocol constants
- Single-byte enumerations and their validation
- Little-endian scalar packing
- Length-prefix encoding/decoding

The header codec and frame builder/parser live in
``devlink.protocol.header`` and ``devlink.protocol.frame_reader``; they
build on ``devlink.codec`` and are re-exported from ``devlink``.
"""

from devlink.protocol.constants import (
    COMMAND_CODES,
    RESPONSE_CODES,
    RESPONSE_FOR_COMMAND,
    CommandCode,
    ProtocolConstants,
    is_response_code,
)
from devlink.protocol.enums import DeviceStatus, Endian, ErrorCode, validate_enum
from devlink.protocol.length_indicators import (
    PREFIX_WIDTHS,
    decode_length_prefix,
    encode_length_prefix,
    encode_length_prefixed,
    max_length_for,
)
from devlink.protocol.primitives import BYTE_ORDER, ScalarKind, pack_scalar, unpack_scalar

__all__ = [
    # Constants
    "CommandCode",
    "ProtocolConstants",
    "COMMAND_CODES",
    "RESPONSE_CODES",
    "RESPONSE_FOR_COMMAND",
    "is_response_code",
    # Enumerations
    "Endian",
    "DeviceStatus",
    "ErrorCode",
    "validate_enum",
    # Primitives
    "BYTE_ORDER",
    "ScalarKind",
    "pack_scalar",
    "unpack_scalar",
    # Length prefixes
    "PREFIX_WIDTHS",
    "max_length_for",
    "encode_length_prefix",
    "decode_length_prefix",
    "encode_length_prefixed",
]
