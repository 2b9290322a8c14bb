"""
Frame building and parsing.

A frame is a 14-byte ProtocolHeader followed by exactly ``payload_length``
payload bytes:

    [magic:u16][version:u8][command_id:u8][payload_length:u32]
    [sequence_id:u32][checksum:u16][payload ...]

Two parsing styles are provided:

1. ``parse_frame(data)`` for a buffer holding exactly one frame. Errors
   are raised as exceptions.
2. ``FrameReader.parse(buffer)`` for a stream consumer that accumulates
   bytes. It never raises for short input; it reports INCOMPLETE_FRAME so
   the caller can read more and try again.

The checksum field is carried unchanged in both directions. No algorithm
is applied to produce or verify it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from devlink.codec.reader import ByteReader
from devlink.exceptions import FrameError
from devlink.protocol.constants import ProtocolConstants
from devlink.protocol.header import ProtocolHeader

if TYPE_CHECKING:
    from devlink.codec.message import WireMessage
    from devlink.codec.registry import CommandRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """
    A header together with its payload bytes.

    Attributes:
        header: Decoded protocol header.
        payload: Exactly ``header.payload_length`` bytes.
    """

    header: ProtocolHeader
    payload: bytes

    @property
    def command_id(self) -> int:
        """Command identifier from the header."""
        return self.header.command_id

    @property
    def sequence_id(self) -> int:
        """Sequence identifier from the header."""
        return self.header.sequence_id

    def decode_payload(self, registry: CommandRegistry) -> WireMessage:
        """
        Decode the payload with the type registered for the command.

        Raises:
            UnknownCommandError: If the command is not registered.
            ProtocolError: If the payload does not decode.
        """
        return registry.decode(self.header.command_id, self.payload)

    def encode(self) -> bytes:
        """Serialize header and payload."""
        return self.header.encode() + self.payload

    def __repr__(self) -> str:
        return f"Frame(cmd=0x{self.command_id:02X}, seq={self.sequence_id}, payload={len(self.payload)} bytes)"


def build_frame(
    message: WireMessage,
    *,
    sequence_id: int = 0,
    magic: int = ProtocolConstants.DEFAULT_MAGIC,
    version: int = ProtocolConstants.PROTOCOL_VERSION,
    checksum: int = 0,
) -> bytes:
    """
    Encode a message and prepend its header.

    The header's command_id comes from the message type and its
    payload_length from the encoded payload.

    Args:
        message: Message to send.
        sequence_id: Correlation value for the header.
        magic: Protocol identifier for the header.
        version: Protocol version for the header.
        checksum: Value carried in the checksum field.

    Returns:
        Complete frame bytes.

    Example:
        >>> build_frame(PingCommand(timestamp=1), sequence_id=42).hex(" ")
        'ef be 01 01 08 00 00 00 2a 00 00 00 00 00 01 00 00 00 00 00 00 00'
    """
    payload = message.encode()
    header = ProtocolHeader(
        magic=magic,
        version=version,
        command_id=message.COMMAND_ID,
        payload_length=len(payload),
        sequence_id=sequence_id,
        checksum=checksum,
    )
    logger.debug("Built frame: %s", header)
    return header.encode() + payload


def parse_frame(data: bytes | bytearray | memoryview) -> Frame:
    """
    Parse a buffer holding exactly one frame.

    Args:
        data: Header followed by the payload.

    Returns:
        Parsed Frame.

    Raises:
        ShortReadError: If the header or payload is truncated.
        FrameError: If bytes follow the declared payload.
    """
    reader = ByteReader(data)
    header = ProtocolHeader.read_from(reader)
    payload = reader.read_bytes(header.payload_length)
    if not reader.is_at_end():
        raise FrameError(
            f"{reader.remaining} trailing bytes after {header.payload_length}-byte payload"
        )
    logger.debug("Parsed frame: %s", header)
    return Frame(header=header, payload=payload)


class FrameParseResult(Enum):
    """
    Result codes for incremental frame parsing.
    """

    SUCCESS = auto()
    """Frame was successfully parsed."""

    EMPTY_BUFFER = auto()
    """Buffer is empty, no data to parse."""

    INCOMPLETE_FRAME = auto()
    """Buffer contains partial frame data, more bytes needed."""

    INVALID_FORMAT = auto()
    """Header is unacceptable (unexpected magic or oversize payload)."""


@dataclass(frozen=True)
class ParsedFrame:
    """
    A frame found at the start of a stream buffer.

    Attributes:
        frame: Header and payload.
        raw_frame: Complete frame bytes as received.
        bytes_consumed: Number of bytes to drop from the buffer.
    """

    frame: Frame
    raw_frame: bytes
    bytes_consumed: int

    @property
    def header(self) -> ProtocolHeader:
        return self.frame.header

    @property
    def payload(self) -> bytes:
        return self.frame.payload


@dataclass(frozen=True)
class FrameParseError:
    """
    Details about a frame parsing failure.
    """

    result: FrameParseResult
    message: str
    position: int = 0
    needed: int = 0


class FrameReader:
    """
    Incremental frame parser for byte streams.

    The reader holds only configuration and can be reused across parse
    calls and buffers.

    Example:
        >>> reader = FrameReader(expected_magic=0xBEEF)
        >>> result, parsed = reader.parse(buffer)
        >>> if result == FrameParseResult.SUCCESS:
        ...     del buffer[:parsed.bytes_consumed]
        ...     handle(parsed.frame)
    """

    def __init__(
        self,
        expected_magic: int | None = None,
        max_payload_length: int = ProtocolConstants.MAX_PAYLOAD_LENGTH,
    ) -> None:
        """
        Initialize the reader.

        Args:
            expected_magic: Reject headers whose magic differs. None accepts
                any magic.
            max_payload_length: Reject headers declaring a longer payload.
        """
        self._expected_magic = expected_magic
        self._max_payload_length = max_payload_length

    @property
    def expected_magic(self) -> int | None:
        return self._expected_magic

    @property
    def max_payload_length(self) -> int:
        return self._max_payload_length

    def parse(
        self,
        buffer: bytes | bytearray | memoryview,
    ) -> tuple[FrameParseResult, ParsedFrame | FrameParseError]:
        """
        Parse one frame from the start of the buffer.

        Bytes after the frame are left for the next call.

        Args:
            buffer: Accumulated stream bytes.

        Returns:
            Tuple of (result, frame_or_error):
            - On success: (SUCCESS, ParsedFrame)
            - On failure: (error_code, FrameParseError)
        """
        if not buffer:
            return FrameParseResult.EMPTY_BUFFER, FrameParseError(
                result=FrameParseResult.EMPTY_BUFFER,
                message="Buffer is empty",
            )

        header_size = ProtocolConstants.HEADER_SIZE
        if len(buffer) < header_size:
            return FrameParseResult.INCOMPLETE_FRAME, FrameParseError(
                result=FrameParseResult.INCOMPLETE_FRAME,
                message=f"Buffer too small for header (need {header_size}, have {len(buffer)})",
                needed=header_size - len(buffer),
            )

        header = ProtocolHeader.decode(bytes(buffer[:header_size]))

        if self._expected_magic is not None and header.magic != self._expected_magic:
            return FrameParseResult.INVALID_FORMAT, FrameParseError(
                result=FrameParseResult.INVALID_FORMAT,
                message=f"Unexpected magic 0x{header.magic:04X}, expected 0x{self._expected_magic:04X}",
            )

        if header.payload_length > self._max_payload_length:
            return FrameParseResult.INVALID_FORMAT, FrameParseError(
                result=FrameParseResult.INVALID_FORMAT,
                message=(
                    f"Payload length {header.payload_length} exceeds "
                    f"limit {self._max_payload_length}"
                ),
                position=4,
            )

        frame_size = header_size + header.payload_length
        if len(buffer) < frame_size:
            return FrameParseResult.INCOMPLETE_FRAME, FrameParseError(
                result=FrameParseResult.INCOMPLETE_FRAME,
                message=f"Incomplete frame (need {frame_size}, have {len(buffer)})",
                position=header_size,
                needed=frame_size - len(buffer),
            )

        raw_frame = bytes(buffer[:frame_size])
        frame = Frame(header=header, payload=raw_frame[header_size:])
        logger.debug("Parsed frame: %s", header)
        return FrameParseResult.SUCCESS, ParsedFrame(
            frame=frame,
            raw_frame=raw_frame,
            bytes_consumed=frame_size,
        )

    def __repr__(self) -> str:
        magic = "any" if self._expected_magic is None else f"0x{self._expected_magic:04X}"
        return f"FrameReader(magic={magic}, max_payload={self._max_payload_length})"

