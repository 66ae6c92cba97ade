"""Unit tests for fixed-width number encoding."""

from __future__ import annotations

import pytest

from pducodec import ConfigError, Endian, OutOfDataError, RangeError
from pducodec.codec.numeric import decode_number, encode_number, max_value


class TestEncodeNumber:
    """Test encode_number functionality."""

    def test_big_endian(self) -> None:
        """Most significant byte first."""
        assert encode_number(0x00CA, 16, Endian.BIG) == b"\x00\xca"
        assert encode_number(0x01020304, 32, Endian.BIG) == b"\x01\x02\x03\x04"

    def test_little_endian(self) -> None:
        """Least significant byte first."""
        assert encode_number(0x00CA, 16, Endian.LITTLE) == b"\xca\x00"
        assert encode_number(0x01020304, 32, Endian.LITTLE) == b"\x04\x03\x02\x01"

    def test_uint8_ignores_endian(self) -> None:
        assert encode_number(0x41, 8, Endian.LITTLE) == encode_number(0x41, 8, Endian.BIG)

    def test_bounds(self) -> None:
        """Values must fit in the bit width."""
        assert encode_number(0, 8) == b"\x00"
        assert encode_number(max_value(8), 8) == b"\xff"
        assert encode_number(max_value(32), 32) == b"\xff\xff\xff\xff"

        with pytest.raises(RangeError, match="256"):
            encode_number(256, 8)

        with pytest.raises(RangeError, match="-1"):
            encode_number(-1, 8)

        with pytest.raises(RangeError):
            encode_number(0x10000, 16)

    def test_non_integer(self) -> None:
        with pytest.raises(RangeError):
            encode_number(1.5, 8)  # type: ignore[arg-type]

        with pytest.raises(RangeError):
            encode_number(True, 8)

    def test_invalid_bits(self) -> None:
        with pytest.raises(ConfigError, match="bits"):
            encode_number(1, 24)

    def test_offset_in_error(self) -> None:
        with pytest.raises(RangeError) as exc_info:
            encode_number(300, 8, offset=7)

        assert exc_info.value.offset == 7
        assert "offset 7" in str(exc_info.value)


class TestDecodeNumber:
    """Test decode_number functionality."""

    def test_decode(self) -> None:
        data = b"\x41\x00\xca\xca\x00"

        assert decode_number(data, 0, 8) == 0x41
        assert decode_number(data, 1, 16, Endian.BIG) == 0x00CA
        assert decode_number(data, 3, 16, Endian.LITTLE) == 0x00CA

    def test_truncation_error(self) -> None:
        """Error when fewer than bits/8 bytes remain."""
        with pytest.raises(OutOfDataError) as exc_info:
            decode_number(b"\x00\x01\x02", 1, 32)

        assert exc_info.value.offset == 1

    def test_roundtrip(self) -> None:
        for endian in Endian:
            for bits in (8, 16, 32):
                value = max_value(bits) // 3
                assert decode_number(encode_number(value, bits, endian), 0, bits, endian) == value
