"""
Protocol header prefixed to every message on the wire.

Header structure (14 bytes, little-endian, no padding):
    - magic: u16 (protocol identifier, not validated here)
    - version: u8
    - command_id: u8 (selects the payload type through the registry)
    - payload_length: u32 (byte count of the payload that follows)
    - sequence_id: u32 (request/response correlation, not enforced)
    - checksum: u16 (carried as-is; never computed or verified)

Example:
    >>> header = ProtocolHeader(magic=0xBEEF, command_id=0x01, payload_length=8, sequence_id=42)
    >>> header.encode().hex(" ")
    'ef be 01 01 08 00 00 00 2a 00 00 00 00 00'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from devlink.codec.message import U8, U16, U32, WireRecord
from devlink.protocol.constants import ProtocolConstants, is_response_code

if TYPE_CHECKING:
    from devlink.codec.reader import ByteReader
    from devlink.codec.writer import ByteWriter


class ProtocolHeader(WireRecord):
    """
    Fixed 14-byte frame header.

    Attributes:
        magic: Protocol identifier.
        version: Protocol version.
        command_id: Payload message type identifier.
        payload_length: Number of payload bytes after the header.
        sequence_id: Caller-chosen correlation value.
        checksum: Opaque check value, carried but not interpreted.
    """

    FIXED_SIZE: ClassVar[int | None] = ProtocolConstants.HEADER_SIZE

    magic: U16 = ProtocolConstants.DEFAULT_MAGIC
    version: U8 = ProtocolConstants.PROTOCOL_VERSION
    command_id: U8
    payload_length: U32 = 0
    sequence_id: U32 = 0
    checksum: U16 = 0

    @property
    def is_response(self) -> bool:
        """Check if command_id follows the response convention (high bit)."""
        return is_response_code(self.command_id)

    def write_to(self, writer: ByteWriter) -> None:
        writer.write_u16(self.magic)
        writer.write_u8(self.version)
        writer.write_u8(self.command_id)
        writer.write_u32(self.payload_length)
        writer.write_u32(self.sequence_id)
        writer.write_u16(self.checksum)

    @classmethod
    def read_from(cls, reader: ByteReader) -> ProtocolHeader:
        magic = reader.read_u16()
        version = reader.read_u8()
        command_id = reader.read_u8()
        payload_length = reader.read_u32()
        sequence_id = reader.read_u32()
        checksum = reader.read_u16()
        return cls(
            magic=magic,
            version=version,
            command_id=command_id,
            payload_length=payload_length,
            sequence_id=sequence_id,
            checksum=checksum,
        )

    def __str__(self) -> str:
        return (
            f"Header(cmd=0x{self.command_id:02X}, seq={self.sequence_id}, "
            f"len={self.payload_length}, magic=0x{self.magic:04X})"
        )
