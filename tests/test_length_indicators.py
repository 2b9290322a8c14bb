"""Tests for length prefix encoding and decoding."""

import pytest

from devlink.exceptions import ShortReadError, ValueTooLargeError
from devlink.protocol.length_indicators import (
    decode_length_prefix,
    encode_length_prefix,
    encode_length_prefixed,
    max_length_for,
)


class TestMaxLength:
    """Tests for prefix width limits."""

    def test_limits(self):
        """Test maximum lengths per prefix width."""
        assert max_length_for(1) == 255
        assert max_length_for(2) == 65535
        assert max_length_for(4) == 0xFFFFFFFF

    def test_unsupported_width(self):
        """Test that unsupported widths are rejected."""
        with pytest.raises(ValueError):
            max_length_for(3)


class TestEncodeLengthPrefix:
    """Tests for encode_length_prefix."""

    def test_one_byte(self):
        """Test encoding a 1-byte prefix."""
        assert encode_length_prefix(0x2A, 1) == b"\x2a"

    def test_two_byte_little_endian(self):
        """Test encoding a 2-byte prefix little-endian."""
        assert encode_length_prefix(300, 2) == b"\x2c\x01"

    def test_four_byte(self):
        """Test encoding a 4-byte prefix."""
        assert encode_length_prefix(1, 4) == b"\x01\x00\x00\x00"

    def test_boundary_values(self):
        """Test encoding the maximum length of each width."""
        assert encode_length_prefix(255, 1) == b"\xff"
        assert encode_length_prefix(65535, 2) == b"\xff\xff"

    def test_overflow_not_truncated(self):
        """Test that 300 with a 1-byte prefix raises instead of wrapping to 44."""
        with pytest.raises(ValueTooLargeError) as exc_info:
            encode_length_prefix(300, 1)
        assert exc_info.value.value == 300
        assert exc_info.value.maximum == 255
        assert "(300 > 255)" in str(exc_info.value)

    def test_overflow_two_byte(self):
        """Test that 65536 with a 2-byte prefix raises."""
        with pytest.raises(ValueTooLargeError):
            encode_length_prefix(65536, 2)

    def test_negative_length(self):
        """Test that negative lengths are rejected."""
        with pytest.raises(ValueError):
            encode_length_prefix(-1, 2)


class TestDecodeLengthPrefix:
    """Tests for decode_length_prefix."""

    def test_decode(self):
        """Test decoding prefixes."""
        assert decode_length_prefix(b"\xff", 1) == 255
        assert decode_length_prefix(b"\x2c\x01", 2) == 300

    def test_decode_at_offset(self):
        """Test decoding a prefix at an offset."""
        assert decode_length_prefix(b"\x00\x00\x02\x00", 2, offset=2) == 2

    def test_truncated(self):
        """Test that a truncated prefix raises ShortReadError."""
        with pytest.raises(ShortReadError) as exc_info:
            decode_length_prefix(b"\x01", 2)
        assert exc_info.value.needed == 2
        assert exc_info.value.available == 1


class TestEncodeLengthPrefixed:
    """Tests for encode_length_prefixed."""

    def test_empty_payload(self):
        """Test that an empty payload is just a zero prefix."""
        assert encode_length_prefixed(b"", 2) == b"\x00\x00"

    def test_payload(self):
        """Test prefix followed by payload."""
        assert encode_length_prefixed(b"\xaa\xbb", 2) == b"\x02\x00\xaa\xbb"

    def test_too_long(self):
        """Test that a 300-byte payload does not fit a 1-byte prefix."""
        with pytest.raises(ValueTooLargeError):
            encode_length_prefixed(bytes(300), 1)
