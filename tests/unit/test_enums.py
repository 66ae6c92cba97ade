"""Unit tests for BinaryEnum."""

from __future__ import annotations

import pytest

from pducodec import BinaryEnum, EnumValueError, PduBuilder, PduParser, bit


@pytest.fixture
def flags() -> BinaryEnum[str]:
    return BinaryEnum({"FOO": bit(0), "BAR": bit(1), "BAZ": bit(3)}, name="Flags")


class TestBinaryEnum:
    """Test BinaryEnum encode/decode."""

    def test_keys(self, flags: BinaryEnum[str]) -> None:
        assert flags.keys() == ["FOO", "BAR", "BAZ"]

    def test_encode(self, flags: BinaryEnum[str]) -> None:
        assert flags.encode("FOO") == 0x01
        assert flags.encode("BAZ") == 0x08

    def test_encode_unknown(self, flags: BinaryEnum[str]) -> None:
        with pytest.raises(EnumValueError, match=r"Invalid Flags key QUX; expected \[FOO, BAR, BAZ\]"):
            flags.encode("QUX")

    def test_encode_multi(self, flags: BinaryEnum[str]) -> None:
        assert flags.encode_multi(["FOO", "BAZ"]) == 0x09
        assert flags.encode_multi([]) == 0x00

    def test_decode(self, flags: BinaryEnum[str]) -> None:
        assert flags.decode(0x02) == "BAR"

        with pytest.raises(EnumValueError, match="03"):
            flags.decode(0x03)

    def test_decode_multi(self, flags: BinaryEnum[str]) -> None:
        assert flags.decode_multi(0x09) == ["FOO", "BAZ"]
        assert flags.decode_multi(0x00) == []

    def test_decode_multi_remainder(self, flags: BinaryEnum[str]) -> None:
        """Bits that match no key are an error."""
        with pytest.raises(EnumValueError, match="unmatched remaining value 04"):
            flags.decode_multi(0x07)

    def test_with_codec(self, flags: BinaryEnum[str]) -> None:
        pdu = PduBuilder().uint8(flags.encode_multi(["BAR", "BAZ"])).build()
        value = PduParser.parse(pdu).uint8(lambda v, *_: {"flags": flags.decode_multi(v)}).value

        assert pdu == "0a"
        assert value == {"flags": ["BAR", "BAZ"]}
