"""Tests for composite records and counted sequences."""

import struct

import pytest
from pydantic import ValidationError

from devlink.codec.reader import ByteReader
from devlink.codec.registry import create_default_registry
from devlink.codec.sequences import read_record_sequence, write_record_count, write_record_sequence
from devlink.codec.writer import ByteWriter
from devlink.exceptions import LengthMismatchError, UnknownCommandError, ValueTooLargeError
from devlink.models.messages import PingCommand, SetConfigResponse
from devlink.models.records import (
    BatchItem,
    BatchResult,
    SensorData,
    Vector3D,
    fixed_bytes_from_text,
    text_from_fixed_bytes,
)
from devlink.protocol.enums import ErrorCode


class TestVector3D:
    """Tests for Vector3D record."""

    def test_layout(self):
        """Test three little-endian f32 components."""
        vector = Vector3D(x=1.5, y=0.0, z=-2.0)
        assert vector.encode() == bytes.fromhex("0000c03f" "00000000" "000000c0")

    def test_defaults(self):
        """Test the zero vector."""
        assert Vector3D().encode() == bytes(12)

    def test_round_trip(self):
        """Test f32-representable values round-trip exactly."""
        vector = Vector3D(x=0.25, y=-1024.5, z=3.0)
        assert Vector3D.decode(vector.encode()) == vector

    def test_round_trip_inexact_values(self):
        """Test that values without an exact f32 form still decode equal."""
        vector = Vector3D(x=0.1, y=0.2, z=0.3)
        assert vector.x == struct.unpack("<f", struct.pack("<f", 0.1))[0]
        assert Vector3D.decode(vector.encode()) == vector

    def test_out_of_f32_range(self):
        """Test that values beyond f32 range are rejected at construction."""
        with pytest.raises(ValidationError):
            Vector3D(x=1e39)

    def test_infinity_allowed(self):
        """Test that infinities pass through unchanged."""
        vector = Vector3D(z=float("-inf"))
        assert Vector3D.decode(vector.encode()).z == float("-inf")


class TestSensorData:
    """Tests for SensorData record."""

    def test_nested_vector_inline(self):
        """Test that the position is encoded inline with no prefix."""
        sample = SensorData(timestamp=1, sensor_id=9, position=Vector3D(x=1.5))
        data = sample.encode()
        assert len(data) == 29
        assert data[:8] == (1).to_bytes(8, "little")
        assert data[8] == 9
        assert data[9:13] == bytes.fromhex("0000c03f")

    def test_round_trip(self):
        """Test SensorData round-trip."""
        sample = SensorData(
            timestamp=2**40,
            sensor_id=255,
            position=Vector3D(x=-0.5, y=8.0, z=100.25),
            temperature=-12.75,
            humidity=99.5,
        )
        assert SensorData.decode(sample.encode()) == sample

    def test_round_trip_inexact_readings(self):
        """Test readings such as 21.3 survive a round-trip."""
        sample = SensorData(timestamp=5, sensor_id=1, temperature=21.3, humidity=0.7)
        decoded = SensorData.decode(sample.encode())
        assert decoded == sample
        assert decoded.temperature == sample.temperature


class TestBatchItem:
    """Tests for BatchItem and BatchResult records."""

    @pytest.fixture
    def registry(self):
        """Create a registry with the built-in messages."""
        return create_default_registry()

    def test_from_message(self):
        """Test wrapping a message as a batch item."""
        item = BatchItem.from_message(PingCommand(timestamp=3))
        assert item.command_id == 0x01
        assert item.payload == PingCommand(timestamp=3).encode()

    def test_decode_message(self, registry):
        """Test turning a batch item back into a typed message."""
        item = BatchItem.from_message(PingCommand(timestamp=3))
        assert item.decode_message(registry) == PingCommand(timestamp=3)

    def test_decode_unknown(self, registry):
        """Test that unregistered sub-commands raise UnknownCommandError."""
        item = BatchItem(command_id=0x7E, payload=b"")
        with pytest.raises(UnknownCommandError):
            item.decode_message(registry)

    def test_item_layout(self):
        """Test BatchItem wire layout."""
        item = BatchItem(command_id=0x03, payload=b"\x01\x02")
        assert item.encode() == bytes.fromhex("03" "0200" "0102")

    def test_result_layout(self):
        """Test BatchResult wire layout."""
        result = BatchResult(command_id=0x84, success=False, error_code=ErrorCode.DEVICE_ERROR)
        assert result.encode() == bytes.fromhex("84" "00" "04" "0000")

    def test_result_from_message(self, registry):
        """Test wrapping and unwrapping a response."""
        response = SetConfigResponse(success=True)
        result = BatchResult.from_message(response)
        assert result.success
        assert result.error_code is ErrorCode.NONE
        assert result.decode_message(registry) == response


class TestRecordSequences:
    """Tests for counted record sequence helpers."""

    def test_write_and_read(self):
        """Test writing and reading a sequence."""
        vectors = [Vector3D(x=1.0), Vector3D(y=2.0)]
        writer = ByteWriter()
        write_record_count(writer, len(vectors))
        write_record_sequence(writer, vectors)
        reader = ByteReader(writer.getvalue())
        count = reader.read_u8()
        assert read_record_sequence(reader, Vector3D, count) == vectors
        assert reader.is_at_end()

    def test_zero_records(self):
        """Test that a zero count with an empty region succeeds."""
        reader = ByteReader(b"\x00\x00")
        assert read_record_sequence(reader, Vector3D, 0) == []

    def test_zero_count_with_data(self):
        """Test that a zero count with a non-empty region is a mismatch."""
        reader = ByteReader(b"\x0c\x00" + bytes(12))
        with pytest.raises(LengthMismatchError):
            read_record_sequence(reader, Vector3D, 0)

    def test_count_limit(self):
        """Test that counts above 255 are rejected."""
        writer = ByteWriter()
        write_record_count(writer, 255)
        with pytest.raises(ValueTooLargeError):
            write_record_count(writer, 256)

    def test_u8_region_prefix(self):
        """Test a sequence region with a 1-byte prefix."""
        writer = ByteWriter()
        write_record_sequence(writer, [Vector3D()], prefix_width=1)
        assert writer.getvalue()[0] == 12
        reader = ByteReader(writer.getvalue())
        assert read_record_sequence(reader, Vector3D, 1, prefix_width=1) == [Vector3D()]


class TestFixedText:
    """Tests for NUL-padded text helpers."""

    def test_pad(self):
        """Test that text is NUL-padded to the field size."""
        assert fixed_bytes_from_text("v1.2", 8) == b"v1.2\x00\x00\x00\x00"

    def test_exact_fit(self):
        """Test text filling the whole field."""
        assert fixed_bytes_from_text("abcd", 4) == b"abcd"

    def test_too_long(self):
        """Test that text longer than the field is rejected."""
        with pytest.raises(ValueTooLargeError):
            fixed_bytes_from_text("x" * 33, 32)

    def test_decode_stops_at_nul(self):
        """Test that decoding stops at the first NUL."""
        assert text_from_fixed_bytes(b"dev-01\x00junk") == "dev-01"

    def test_decode_without_nul(self):
        """Test that an unterminated array is used whole."""
        assert text_from_fixed_bytes(b"abcd") == "abcd"
