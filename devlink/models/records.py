"""
Pydantic models for composite records.

Composite records are nested values built from primitive fields. They have
no command identifier of their own; they appear inline inside messages
(Vector3D inside SensorData) or as elements of counted sequences
(SensorData, BatchItem, BatchResult).

Design principles:
- All models are frozen (immutable)
- Integer fields are range-checked at construction against their wire width
- A nested record is encoded inline, never length-prefixed
- Fixed-size byte arrays are raw bytes; text policy is opt-in via helpers
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pydantic import Field

from devlink.codec.message import F32, U8, U64, WireMessage, WireRecord
from devlink.exceptions import ValueTooLargeError
from devlink.protocol.enums import ErrorCode

if TYPE_CHECKING:
    from devlink.codec.reader import ByteReader
    from devlink.codec.registry import CommandRegistry
    from devlink.codec.writer import ByteWriter


def fixed_bytes_from_text(text: str, size: int, encoding: str = "utf-8") -> bytes:
    """
    Encode text into a NUL-padded fixed-size byte array.

    Args:
        text: Text to encode.
        size: Exact size of the byte array.
        encoding: Text encoding.

    Returns:
        ``size`` bytes, text followed by zero padding.

    Raises:
        ValueTooLargeError: If the encoded text is longer than ``size``.

    Example:
        >>> fixed_bytes_from_text("v1.2", 8)
        b'v1.2\\x00\\x00\\x00\\x00'
    """
    encoded = text.encode(encoding)
    if len(encoded) > size:
        raise ValueTooLargeError(
            f"Text {text!r} does not fit a {size}-byte field",
            value=len(encoded),
            maximum=size,
        )
    return encoded.ljust(size, b"\x00")


def text_from_fixed_bytes(data: bytes, encoding: str = "utf-8") -> str:
    """
    Decode a NUL-padded fixed-size byte array as text.

    Decoding stops at the first NUL byte; the whole array is used when no
    NUL is present.

    Example:
        >>> text_from_fixed_bytes(b"dev-01\\x00\\x00")
        'dev-01'
    """
    end = data.find(b"\x00")
    if end == -1:
        end = len(data)
    return data[:end].decode(encoding)


class Vector3D(WireRecord):
    """
    Three-component single-precision vector.

    Layout (12 bytes): x f32, y f32, z f32.
    """

    FIXED_SIZE: ClassVar[int | None] = 12

    x: F32 = 0.0
    y: F32 = 0.0
    z: F32 = 0.0

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_f32(self.x)
        writer.write_f32(self.y)
        writer.write_f32(self.z)

    @classmethod
    def read_from(cls, reader: ByteReader) -> Vector3D:
        return cls(
            x=reader.read_f32(),
            y=reader.read_f32(),
            z=reader.read_f32(),
        )


class SensorData(WireRecord):
    """
    A single sensor sample.

    Layout (29 bytes):
        - timestamp: u64
        - sensor_id: u8
        - position: Vector3D (12 bytes, inline)
        - temperature: f32
        - humidity: f32
    """

    FIXED_SIZE: ClassVar[int | None] = 29

    timestamp: U64
    sensor_id: U8
    position: Vector3D = Field(default_factory=Vector3D)
    temperature: F32 = 0.0
    humidity: F32 = 0.0

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u64(self.timestamp)
        writer.write_u8(self.sensor_id)
        self.position.write_to(writer)
        writer.write_f32(self.temperature)
        writer.write_f32(self.humidity)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SensorData:
        timestamp = reader.read_u64()
        sensor_id = reader.read_u8()
        position = Vector3D.read_from(reader)
        temperature = reader.read_f32()
        humidity = reader.read_f32()
        return cls(
            timestamp=timestamp,
            sensor_id=sensor_id,
            position=position,
            temperature=temperature,
            humidity=humidity,
        )


class BatchItem(WireRecord):
    """
    One sub-command inside a BatchCommand.

    Layout: command_id u8, payload (u16-length-prefixed). The payload is
    the encoded message of the sub-command; ``decode_message`` turns it
    back into a typed message through a registry.
    """

    command_id: U8
    payload: bytes = b""

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u8(self.command_id)
        writer.write_length_prefixed(self.payload, 2)

    @classmethod
    def read_from(cls, reader: ByteReader) -> BatchItem:
        command_id = reader.read_u8()
        payload = reader.read_length_prefixed(2)
        return cls(command_id=command_id, payload=payload)

    @classmethod
    def from_message(cls, message: WireMessage) -> BatchItem:
        """Wrap a typed command as a batch item."""
        return cls(command_id=message.COMMAND_ID, payload=message.encode())

    def decode_message(self, registry: CommandRegistry) -> WireMessage:
        """
        Decode the payload as the message type registered for command_id.

        Raises:
            UnknownCommandError: If the registry has no type for command_id.
        """
        return registry.decode(self.command_id, self.payload)


class BatchResult(WireRecord):
    """
    Outcome of one sub-command inside a BatchResponse.

    Layout: command_id u8, success bool, error_code ErrorCode byte,
    payload (u16-length-prefixed). The payload holds the encoded response
    message, or is empty when the sub-command produced none.
    """

    command_id: U8
    success: bool
    error_code: ErrorCode = ErrorCode.NONE
    payload: bytes = b""

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u8(self.command_id)
        writer.write_bool(self.success)
        writer.write_enum(self.error_code)
        writer.write_length_prefixed(self.payload, 2)

    @classmethod
    def read_from(cls, reader: ByteReader) -> BatchResult:
        command_id = reader.read_u8()
        success = reader.read_bool()
        error_code = reader.read_enum(ErrorCode)
        payload = reader.read_length_prefixed(2)
        return cls(
            command_id=command_id,
            success=success,
            error_code=error_code,
            payload=payload,
        )

    @classmethod
    def from_message(
        cls,
        message: WireMessage,
        success: bool = True,
        error_code: ErrorCode = ErrorCode.NONE,
    ) -> BatchResult:
        """Wrap a typed response as a batch result."""
        return cls(
            command_id=message.COMMAND_ID,
            success=success,
            error_code=error_code,
            payload=message.encode(),
        )

    def decode_message(self, registry: CommandRegistry) -> WireMessage:
        """
        Decode the payload as the message type registered for command_id.

        Raises:
            UnknownCommandError: If the registry has no type for command_id.
        """
        return registry.decode(self.command_id, self.payload)
