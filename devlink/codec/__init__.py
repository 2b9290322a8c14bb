"""
Codec layer: byte cursors and the shared encode/decode capability.

- ByteReader / ByteWriter: bounds-checked little-endian cursors
- WireRecord / WireMessage: base classes every wire type derives from
- Counted record sequences for container messages

The command registry lives in ``devlink.codec.registry``; it depends on
the message catalog in ``devlink.models`` and is re-exported from
``devlink``.
"""

from devlink.codec.message import F32, I16, U8, U16, U32, U64, WireMessage, WireRecord
from devlink.codec.reader import ByteReader
from devlink.codec.sequences import read_record_sequence, write_record_count, write_record_sequence
from devlink.codec.writer import ByteWriter

__all__ = [
    "ByteReader",
    "ByteWriter",
    "WireRecord",
    "WireMessage",
    "U8",
    "U16",
    "U32",
    "U64",
    "I16",
    "F32",
    "read_record_sequence",
    "write_record_count",
    "write_record_sequence",
]
