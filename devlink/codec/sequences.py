"""
Counted sequences of typed records.

Container messages carry a one-byte record count followed by a
length-prefixed region holding the records back to back:

    [count:u8] ... [region_length:u16][record 1][record 2]...[record N]

On decode the region is parsed record by record into a list until either
the count is reached or the region is exhausted. The two must agree: a
region that runs out early, ends in a truncated record, or has bytes left
over after the last counted record raises LengthMismatchError.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from devlink.codec.message import WireRecord
from devlink.codec.reader import ByteReader
from devlink.codec.writer import ByteWriter
from devlink.exceptions import LengthMismatchError, ShortReadError, ValueTooLargeError
from devlink.protocol.constants import ProtocolConstants

TRecord = TypeVar("TRecord", bound=WireRecord)


def write_record_count(writer: ByteWriter, count: int) -> None:
    """
    Append a one-byte record count.

    Raises:
        ValueTooLargeError: If ``count`` exceeds 255.
    """
    if count > ProtocolConstants.MAX_RECORD_COUNT:
        raise ValueTooLargeError(
            "Too many records for a one-byte count",
            value=count,
            maximum=ProtocolConstants.MAX_RECORD_COUNT,
        )
    writer.write_u8(count)


def write_record_sequence(
    writer: ByteWriter,
    records: Sequence[WireRecord],
    prefix_width: int = 2,
) -> None:
    """
    Append records as one length-prefixed region.

    Args:
        writer: Destination writer.
        records: Records to encode, in order.
        prefix_width: Width of the region length prefix.

    Raises:
        ValueTooLargeError: If the encoded region exceeds the prefix range.
    """
    region = ByteWriter()
    for record in records:
        record.write_to(region)
    writer.write_length_prefixed(region.getvalue(), prefix_width)


def read_record_sequence(
    reader: ByteReader,
    record_cls: type[TRecord],
    count: int,
    prefix_width: int = 2,
) -> list[TRecord]:
    """
    Read a length-prefixed region holding exactly ``count`` records.

    Args:
        reader: Source reader positioned at the region length prefix.
        record_cls: Type of every record in the region.
        count: Declared number of records.
        prefix_width: Width of the region length prefix.

    Returns:
        Decoded records in wire order.

    Raises:
        ShortReadError: If the region itself is truncated.
        LengthMismatchError: If the region and the count disagree.
        InvalidEnumValueError: If a record holds an undeclared enum byte.
    """
    region = reader.create_subreader(prefix_width)
    records: list[TRecord] = []

    while len(records) < count and not region.is_at_end():
        try:
            records.append(record_cls.read_from(region))
        except ShortReadError as e:
            raise LengthMismatchError(
                f"{record_cls.__name__} record {len(records) + 1} truncated at end of region",
                expected=count,
                actual=len(records),
            ) from e

    if len(records) < count:
        raise LengthMismatchError(
            f"Region exhausted before all {record_cls.__name__} records were read",
            expected=count,
            actual=len(records),
        )
    if not region.is_at_end():
        raise LengthMismatchError(
            f"{region.remaining} bytes left after {count} {record_cls.__name__} records"
        )
    return records
