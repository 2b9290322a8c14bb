"""
Uniform encode/decode capability shared by every wire type.

Every record and message is an immutable Pydantic model that knows how to
write its fields to a ByteWriter and read them back from a ByteReader, in
declared order, with no padding. This module supplies the public
``encode``/``decode`` pair on top of those two hooks so that a registry can
dispatch by command identifier without per-type branching.

Decoding is all-or-nothing: the first short read or invalid enum aborts
the whole decode and the exception propagates. No partially populated
value is ever returned.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Annotated, ClassVar, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from devlink.codec.reader import ByteReader
from devlink.codec.writer import ByteWriter
from devlink.exceptions import InvalidDataError
from devlink.protocol.primitives import ScalarKind

TRecord = TypeVar("TRecord", bound="WireRecord")

# Integer field types bounded by their wire width
U8 = Annotated[int, Field(ge=0, le=0xFF)]
U16 = Annotated[int, Field(ge=0, le=0xFFFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
U64 = Annotated[int, Field(ge=0, le=0xFFFFFFFFFFFFFFFF)]
I16 = Annotated[int, Field(ge=-0x8000, le=0x7FFF)]


def _round_to_f32(value: float) -> float:
    try:
        return ScalarKind.F32.codec.unpack(ScalarKind.F32.codec.pack(value))[0]
    except OverflowError as e:
        raise ValueError(f"{value!r} is out of range for F32") from e


# Float carried as IEEE 754 single; rounded at construction so it decodes equal
F32 = Annotated[float, AfterValidator(_round_to_f32)]


class WireRecord(BaseModel):
    """
    Base class for values with a fixed binary layout.

    Subclasses implement ``write_to`` and ``read_from``; the public API is
    ``encode()`` and ``decode()``.

    Attributes:
        FIXED_SIZE: Encoded size in bytes, or None when the layout has
            variable-length fields.
    """

    model_config = ConfigDict(frozen=True)

    FIXED_SIZE: ClassVar[int | None] = None

    @abstractmethod
    def write_to(self, writer: ByteWriter) -> None:
        """
        Append this value's fields to ``writer`` in declared order.

        Args:
            writer: Destination writer.
        """
        ...

    @classmethod
    @abstractmethod
    def read_from(cls: type[TRecord], reader: ByteReader) -> TRecord:
        """
        Read this type's fields from ``reader`` in declared order.

        The reader is left positioned after the last field, so nested
        records can be read inline from a shared reader.

        Args:
            reader: Source reader.

        Returns:
            New instance.
        """
        ...

    def encode(self) -> bytes:
        """
        Serialize to bytes.

        Raises:
            ValueTooLargeError: If a variable-length field or count does not
                fit its wire width.
            InvalidDataError: If a scalar is out of range.
        """
        writer = ByteWriter()
        self.write_to(writer)
        return writer.getvalue()

    def encode_into(self, buffer: bytearray, offset: int = 0) -> int:
        """
        Serialize into a caller-provided buffer.

        Args:
            buffer: Destination buffer; its size bounds the encoding.
            offset: Byte offset to start writing at.

        Returns:
            Number of bytes written.

        Raises:
            BufferTooSmallError: If the encoding does not fit after offset.
        """
        writer = ByteWriter(capacity=max(len(buffer) - offset, 0))
        self.write_to(writer)
        data = writer.getvalue()
        buffer[offset : offset + len(data)] = data
        return len(data)

    @classmethod
    def decode(
        cls: type[TRecord],
        data: bytes | bytearray | memoryview,
        *,
        exact: bool = False,
    ) -> TRecord:
        """
        Deserialize from the start of ``data``.

        Bytes after the last field are ignored unless ``exact`` is set, so a
        peer that pads its payloads still decodes.

        Args:
            data: Encoded value.
            exact: Reject bytes remaining after the last field.

        Returns:
            New instance.

        Raises:
            ShortReadError: If ``data`` ends before the last field.
            InvalidEnumValueError: If an enum field holds an undeclared byte.
            InvalidDataError: If ``exact`` is set and bytes remain after the
                last field.
        """
        reader = ByteReader(data)
        value = cls.read_from(reader)
        if exact and not reader.is_at_end():
            raise InvalidDataError(
                f"{cls.__name__}: {reader.remaining} trailing bytes after last field"
            )
        return value

    def encoded_size(self) -> int:
        """Size of this value's encoding in bytes."""
        if self.FIXED_SIZE is not None:
            return self.FIXED_SIZE
        return len(self.encode())


class WireMessage(WireRecord):
    """
    A record that travels as a frame payload.

    Attributes:
        COMMAND_ID: Header command identifier that selects this type.
    """

    COMMAND_ID: ClassVar[int]

    @property
    def command_id(self) -> int:
        """Command identifier of this message's type."""
        return self.COMMAND_ID
