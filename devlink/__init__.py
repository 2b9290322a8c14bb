"""
devlink - binary wire-protocol codec for controller/device messaging.

This library converts a fixed catalog of command and response messages to
and from exact little-endian byte sequences, frames them behind a 14-byte
protocol header, and resolves received payloads by command identifier.

Example:
    >>> from devlink import PingCommand, build_frame, create_default_registry, parse_frame
    >>>
    >>> data = build_frame(PingCommand(timestamp=1), sequence_id=42)
    >>> frame = parse_frame(data)
    >>> frame.decode_payload(create_default_registry())
    PingCommand(timestamp=1)
"""

from devlink.codec.message import WireMessage, WireRecord
from devlink.codec.registry import COMMAND_TYPES, CommandRegistry, create_default_registry
from devlink.exceptions import (
    BufferTooSmallError,
    DevlinkError,
    FrameError,
    InvalidDataError,
    InvalidEnumValueError,
    LengthMismatchError,
    ProtocolError,
    ShortReadError,
    UnknownCommandError,
    ValueTooLargeError,
)
from devlink.models.messages import (
    BatchCommand,
    BatchResponse,
    DeviceInfoResponse,
    GetDeviceInfoCommand,
    PingCommand,
    PingResponse,
    SendDataCommand,
    SendDataResponse,
    SensorDataResponse,
    SetConfigCommand,
    SetConfigResponse,
)
from devlink.models.records import BatchItem, BatchResult, SensorData, Vector3D
from devlink.protocol.constants import CommandCode, ProtocolConstants
from devlink.protocol.enums import DeviceStatus, Endian, ErrorCode
from devlink.protocol.frame_reader import Frame, FrameReader, build_frame, parse_frame
from devlink.protocol.header import ProtocolHeader

__version__ = "0.1.0"
__all__ = [
    # Codec
    "WireRecord",
    "WireMessage",
    "CommandRegistry",
    "COMMAND_TYPES",
    "create_default_registry",
    # Framing
    "ProtocolHeader",
    "Frame",
    "FrameReader",
    "build_frame",
    "parse_frame",
    # Constants and enumerations
    "CommandCode",
    "ProtocolConstants",
    "Endian",
    "DeviceStatus",
    "ErrorCode",
    # Records
    "Vector3D",
    "SensorData",
    "BatchItem",
    "BatchResult",
    # Messages
    "PingCommand",
    "PingResponse",
    "GetDeviceInfoCommand",
    "DeviceInfoResponse",
    "SendDataCommand",
    "SendDataResponse",
    "SetConfigCommand",
    "SetConfigResponse",
    "BatchCommand",
    "BatchResponse",
    "SensorDataResponse",
    # Exceptions
    "DevlinkError",
    "ProtocolError",
    "ShortReadError",
    "InvalidDataError",
    "ValueTooLargeError",
    "LengthMismatchError",
    "BufferTooSmallError",
    "InvalidEnumValueError",
    "FrameError",
    "UnknownCommandError",
    # Version
    "__version__",
]
