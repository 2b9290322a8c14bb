"""
Exception hierarchy for devlink.

All exceptions inherit from DevlinkError, so callers can catch every
library failure with a single except clause. The hierarchy follows the
error kinds of the wire codec:

1. Short reads (not enough bytes for a field) are distinct from semantic
   validation failures
2. Enum failures carry the exact offending byte
3. Length and count problems carry the expected and actual values
"""

from __future__ import annotations


class DevlinkError(Exception):
    """
    Base exception for all devlink errors.

    All library-specific exceptions inherit from this class.
    """

    pass


class ProtocolError(DevlinkError):
    """
    Protocol-level error.

    Raised when bytes on the wire do not follow the message layout, or when
    a value cannot be represented in its wire form.
    """

    pass


class ShortReadError(ProtocolError):
    """
    Not enough bytes remain to satisfy a read.

    Decoding is all-or-nothing: this error aborts the whole decode and no
    partially populated value is returned.
    """

    def __init__(
        self,
        message: str = "Insufficient data",
        *,
        needed: int | None = None,
        available: int | None = None,
        offset: int | None = None,
    ) -> None:
        super().__init__(message)
        self.needed = needed
        self.available = available
        self.offset = offset

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.needed is not None and self.available is not None:
            parts.append(f"(need {self.needed} bytes, have {self.available})")
        if self.offset is not None:
            parts.append(f"at offset {self.offset}")
        return " ".join(parts)


class InvalidDataError(ProtocolError):
    """
    Structured data failed semantic validation.

    Used for values that are well-formed bytes but violate the message
    contract, such as trailing bytes after a payload decoded exactly.
    """

    pass


class ValueTooLargeError(InvalidDataError):
    """
    A value does not fit the wire width reserved for it.

    Raised instead of silently truncating, e.g. a 300-byte buffer written
    with a 1-byte length prefix.
    """

    def __init__(
        self,
        message: str = "Value too large for wire field",
        *,
        value: int | None = None,
        maximum: int | None = None,
    ) -> None:
        super().__init__(message)
        self.value = value
        self.maximum = maximum

    def __str__(self) -> str:
        base = super().__str__()
        if self.value is not None and self.maximum is not None:
            return f"{base} ({self.value} > {self.maximum})"
        return base


class LengthMismatchError(InvalidDataError):
    """
    A declared count disagrees with the records actually present.
    """

    def __init__(
        self,
        message: str = "Record count mismatch",
        *,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual

    def __str__(self) -> str:
        base = super().__str__()
        if self.expected is not None and self.actual is not None:
            return f"{base} (expected {self.expected}, got {self.actual})"
        return base


class BufferTooSmallError(ProtocolError):
    """
    Destination buffer capacity exceeded.

    Raised by a capacity-bounded ByteWriter when a write would not fit.
    """

    def __init__(
        self,
        message: str = "Buffer too small",
        *,
        capacity: int | None = None,
        required: int | None = None,
    ) -> None:
        super().__init__(message)
        self.capacity = capacity
        self.required = required

    def __str__(self) -> str:
        base = super().__str__()
        if self.capacity is not None and self.required is not None:
            return f"{base} (capacity {self.capacity}, required {self.required})"
        return base


class InvalidEnumValueError(ProtocolError):
    """
    A byte is not a declared value of its enumeration.

    The exact offending byte is kept in ``value``.
    """

    def __init__(self, value: int, enum_name: str | None = None) -> None:
        self.value = value
        self.enum_name = enum_name
        target = f" for {enum_name}" if enum_name else ""
        super().__init__(f"Invalid enum value 0x{value:02X}{target}")


class FrameError(ProtocolError):
    """
    Frame parsing error.

    Raised when a frame cannot be split into header and payload, such as
    trailing bytes after the declared payload.
    """

    pass


class UnknownCommandError(ProtocolError):
    """
    No message type is registered for a command identifier.
    """

    def __init__(self, command_id: int) -> None:
        self.command_id = command_id
        super().__init__(f"No message type registered for command 0x{command_id:02X}")
