"""
Command and response messages.

Each message is an immutable Pydantic model whose fields are written in
declared order with no padding. Commands (controller -> device) use
command identifiers in the low range; responses set the high bit.

| Message              | Id   | Layout                                              |
| -------------------- | ---- | --------------------------------------------------- |
| PingCommand          | 0x01 | timestamp u64                                       |
| PingResponse         | 0x81 | request_timestamp u64, response_timestamp u64       |
| GetDeviceInfoCommand | 0x02 | include_details bool                                |
| DeviceInfoResponse   | 0x82 | status, name[32], firmware[16], uptime u32, temp i16, battery u8 |
| SendDataCommand      | 0x03 | channel u8, priority u8, data (u16 prefix)          |
| SendDataResponse     | 0x83 | success bool, error_code, bytes_written u32         |
| SetConfigCommand     | 0x04 | config_id u8, value_type u8, value (u8 prefix)      |
| SetConfigResponse    | 0x84 | success bool, error_code                            |
| BatchCommand         | 0x10 | count u8, BatchItem sequence (u16 prefix)           |
| BatchResponse        | 0x90 | success u8, failure u8, BatchResult sequence (u16)  |
| SensorDataResponse   | 0x85 | count u8, SensorData sequence (u16 prefix)          |

Container messages derive their count fields from the typed sequence when
encoding and cross-check them when decoding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from pydantic import Field

from devlink.codec.message import I16, U8, U32, U64, WireMessage
from devlink.codec.sequences import (
    read_record_sequence,
    write_record_count,
    write_record_sequence,
)
from devlink.exceptions import LengthMismatchError
from devlink.models.records import (
    BatchItem,
    BatchResult,
    SensorData,
)
from devlink.protocol.constants import CommandCode, ProtocolConstants
from devlink.protocol.enums import DeviceStatus, ErrorCode

if TYPE_CHECKING:
    from devlink.codec.reader import ByteReader
    from devlink.codec.writer import ByteWriter


class PingCommand(WireMessage):
    """Liveness check carrying the sender's timestamp."""

    COMMAND_ID: ClassVar[int] = CommandCode.PING
    FIXED_SIZE: ClassVar[int | None] = 8

    timestamp: U64

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u64(self.timestamp)

    @classmethod
    def read_from(cls, reader: ByteReader) -> PingCommand:
        return cls(timestamp=reader.read_u64())


class PingResponse(WireMessage):
    """Ping reply echoing the request timestamp."""

    COMMAND_ID: ClassVar[int] = CommandCode.PING_RESPONSE
    FIXED_SIZE: ClassVar[int | None] = 16

    request_timestamp: U64
    response_timestamp: U64

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u64(self.request_timestamp)
        writer.write_u64(self.response_timestamp)

    @classmethod
    def read_from(cls, reader: ByteReader) -> PingResponse:
        request_timestamp = reader.read_u64()
        response_timestamp = reader.read_u64()
        return cls(
            request_timestamp=request_timestamp,
            response_timestamp=response_timestamp,
        )


class GetDeviceInfoCommand(WireMessage):
    COMMAND_ID: ClassVar[int] = CommandCode.GET_DEVICE_INFO
    FIXED_SIZE: ClassVar[int | None] = 1

    include_details: bool = False

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_bool(self.include_details)

    @classmethod
    def read_from(cls, reader: ByteReader) -> GetDeviceInfoCommand:
        return cls(include_details=reader.read_bool())


class DeviceInfoResponse(WireMessage):
    """
    Device identification and status.

    ``device_name`` and ``firmware_version`` are raw byte arrays of exactly
    32 and 16 bytes. The codec applies no text encoding or termination; see
    ``fixed_bytes_from_text``/``text_from_fixed_bytes`` for the NUL-padded
    convention.

    Layout (56 bytes):
        - status: DeviceStatus (1 byte)
        - device_name: 32 bytes
        - firmware_version: 16 bytes
        - uptime_seconds: u32
        - temperature: i16
        - battery_level: u8
    """

    COMMAND_ID: ClassVar[int] = CommandCode.DEVICE_INFO_RESPONSE
    FIXED_SIZE: ClassVar[int | None] = 56

    status: DeviceStatus
    device_name: bytes = Field(
        min_length=ProtocolConstants.DEVICE_NAME_SIZE,
        max_length=ProtocolConstants.DEVICE_NAME_SIZE,
    )
    firmware_version: bytes = Field(
        min_length=ProtocolConstants.FIRMWARE_VERSION_SIZE,
        max_length=ProtocolConstants.FIRMWARE_VERSION_SIZE,
    )
    uptime_seconds: U32 = 0
    temperature: I16 = 0
    battery_level: U8 = 0

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_enum(self.status)
        writer.write_fixed_bytes(self.device_name, ProtocolConstants.DEVICE_NAME_SIZE)
        writer.write_fixed_bytes(self.firmware_version, ProtocolConstants.FIRMWARE_VERSION_SIZE)
        writer.write_u32(self.uptime_seconds)
        writer.write_i16(self.temperature)
        writer.write_u8(self.battery_level)

    @classmethod
    def read_from(cls, reader: ByteReader) -> DeviceInfoResponse:
        status = reader.read_enum(DeviceStatus)
        device_name = reader.read_bytes(ProtocolConstants.DEVICE_NAME_SIZE)
        firmware_version = reader.read_bytes(ProtocolConstants.FIRMWARE_VERSION_SIZE)
        uptime_seconds = reader.read_u32()
        temperature = reader.read_i16()
        battery_level = reader.read_u8()
        return cls(
            status=status,
            device_name=device_name,
            firmware_version=firmware_version,
            uptime_seconds=uptime_seconds,
            temperature=temperature,
            battery_level=battery_level,
        )


class SendDataCommand(WireMessage):
    """Write ``data`` (at most 65535 bytes) to a device channel."""

    COMMAND_ID: ClassVar[int] = CommandCode.SEND_DATA

    channel: U8
    priority: U8 = 0
    data: bytes = b""

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u8(self.channel)
        writer.write_u8(self.priority)
        writer.write_length_prefixed(self.data, 2)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SendDataCommand:
        channel = reader.read_u8()
        priority = reader.read_u8()
        data = reader.read_length_prefixed(2)
        return cls(channel=channel, priority=priority, data=data)


class SendDataResponse(WireMessage):
    COMMAND_ID: ClassVar[int] = CommandCode.SEND_DATA_RESPONSE
    FIXED_SIZE: ClassVar[int | None] = 6

    success: bool
    error_code: ErrorCode = ErrorCode.NONE
    bytes_written: U32 = 0

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_bool(self.success)
        writer.write_enum(self.error_code)
        writer.write_u32(self.bytes_written)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SendDataResponse:
        success = reader.read_bool()
        error_code = reader.read_enum(ErrorCode)
        bytes_written = reader.read_u32()
        return cls(success=success, error_code=error_code, bytes_written=bytes_written)


class SetConfigCommand(WireMessage):
    """
    Set one configuration value.

    ``value`` uses a 1-byte length prefix, so it is capped at 255 bytes;
    longer values fail to encode with ValueTooLargeError.
    """

    COMMAND_ID: ClassVar[int] = CommandCode.SET_CONFIG

    config_id: U8
    value_type: U8 = 0
    value: bytes = b""

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u8(self.config_id)
        writer.write_u8(self.value_type)
        writer.write_length_prefixed(self.value, 1)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SetConfigCommand:
        config_id = reader.read_u8()
        value_type = reader.read_u8()
        value = reader.read_length_prefixed(1)
        return cls(config_id=config_id, value_type=value_type, value=value)


class SetConfigResponse(WireMessage):
    COMMAND_ID: ClassVar[int] = CommandCode.SET_CONFIG_RESPONSE
    FIXED_SIZE: ClassVar[int | None] = 2

    success: bool
    error_code: ErrorCode = ErrorCode.NONE

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_bool(self.success)
        writer.write_enum(self.error_code)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SetConfigResponse:
        success = reader.read_bool()
        error_code = reader.read_enum(ErrorCode)
        return cls(success=success, error_code=error_code)


class BatchCommand(WireMessage):
    """
    Several sub-commands executed as one.

    Wire layout: command_count u8, then the BatchItem records in a
    u16-length-prefixed region. ``command_count`` is always
    ``len(commands)``.
    """

    COMMAND_ID: ClassVar[int] = CommandCode.BATCH

    commands: tuple[BatchItem, ...] = ()

    @property
    def command_count(self) -> int:
        """Number of sub-commands."""
        return len(self.commands)

    def write_to(self, writer: ByteWriter) -> None:
        write_record_count(writer, self.command_count)
        write_record_sequence(writer, self.commands)

    @classmethod
    def read_from(cls, reader: ByteReader) -> BatchCommand:
        command_count = reader.read_u8()
        commands = read_record_sequence(reader, BatchItem, command_count)
        return cls(commands=commands)


class BatchResponse(WireMessage):
    """
    Per-item results of a BatchCommand.

    Wire layout: success_count u8, failure_count u8, then the BatchResult
    records in a u16-length-prefixed region. The two counts are derived
    from each result's ``success`` flag; on decode their sum must equal the
    number of records and each must match the flags.
    """

    COMMAND_ID: ClassVar[int] = CommandCode.BATCH_RESPONSE

    results: tuple[BatchResult, ...] = ()

    @property
    def success_count(self) -> int:
        """Number of results with ``success`` set."""
        return sum(1 for result in self.results if result.success)

    @property
    def failure_count(self) -> int:
        """Number of results with ``success`` cleared."""
        return len(self.results) - self.success_count

    def write_to(self, writer: ByteWriter) -> None:
        write_record_count(writer, self.success_count)
        write_record_count(writer, self.failure_count)
        write_record_sequence(writer, self.results)

    @classmethod
    def read_from(cls, reader: ByteReader) -> BatchResponse:
        success_count = reader.read_u8()
        failure_count = reader.read_u8()
        results = read_record_sequence(reader, BatchResult, success_count + failure_count)

        actual_successes = sum(1 for result in results if result.success)
        if actual_successes != success_count:
            raise LengthMismatchError(
                "Declared success count disagrees with result flags",
                expected=success_count,
                actual=actual_successes,
            )
        return cls(results=results)


class SensorDataResponse(WireMessage):
    """
    Sensor samples pushed by the device.

    Has no paired command. Wire layout: sensor_count u8, then the
    SensorData records (29 bytes each) in a u16-length-prefixed region.
    """

    COMMAND_ID: ClassVar[int] = CommandCode.SENSOR_DATA_RESPONSE

    sensors: tuple[SensorData, ...] = ()

    @property
    def sensor_count(self) -> int:
        """Number of samples."""
        return len(self.sensors)

    def write_to(self, writer: ByteWriter) -> None:
        write_record_count(writer, self.sensor_count)
        write_record_sequence(writer, self.sensors)

    @classmethod
    def read_from(cls, reader: ByteReader) -> SensorDataResponse:
        sensor_count = reader.read_u8()
        sensors = read_record_sequence(reader, SensorData, sensor_count)
        return cls(sensors=sensors)


ALL_MESSAGE_TYPES: tuple[type[WireMessage], ...] = (
    PingCommand,
    PingResponse,
    GetDeviceInfoCommand,
    DeviceInfoResponse,
    SendDataCommand,
    SendDataResponse,
    SetConfigCommand,
    SetConfigResponse,
    BatchCommand,
    BatchResponse,
    SensorDataResponse,
)
"""The fixed message catalog, in command identifier table order."""
