"""Property-based tests using hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from pducodec import Endian, PduBuilder, PduParser

endians = st.sampled_from(list(Endian))


class TestRoundTripProperties:
    """Builder output is readable by a parser with matching descriptors."""

    @given(bits=st.sampled_from([8, 16, 32]), data=st.data(), endian=endians)
    def test_number_roundtrip(self, bits: int, data: st.DataObject, endian: Endian) -> None:
        values = data.draw(st.lists(st.integers(min_value=0, max_value=(1 << bits) - 1), max_size=8))
        pdu = PduBuilder(endian=endian).number(bits, *values).build()
        decoded = PduParser.parse(pdu, endian=endian).number(bits, len(values), "x").value

        assert decoded == {"x": values}

    @given(
        text=st.text(max_size=60),
        length_bits=st.sampled_from([8, 16, 32]),
        endian=endians,
    )
    def test_prefixed_string_roundtrip(self, text: str, length_bits: int, endian: Endian) -> None:
        pdu = PduBuilder(endian=endian).string(text, length_bits=length_bits).build()
        decoded = PduParser.parse(pdu, endian=endian).string("s", length_bits=length_bits).value

        assert decoded == {"s": text}

    @given(text=st.text(alphabet=st.characters(exclude_characters="\x00"), max_size=60))
    def test_null_terminated_roundtrip(self, text: str) -> None:
        pdu = PduBuilder().string(text, null_terminate=True).build()
        parser = PduParser.parse(pdu).string("s", null_terminate=True)

        assert parser.value == {"s": text}
        assert parser.at_end()

    @given(payload=st.binary(max_size=300), endian=endians)
    def test_hex_roundtrip(self, payload: bytes, endian: Endian) -> None:
        pdu = PduBuilder(endian=endian).hex(payload, length_bits=16).build()
        decoded = PduParser.parse(pdu, endian=endian).hex("h", length_bits=16).value

        assert decoded == {"h": payload.hex()}

    @given(head=st.binary(max_size=20), tail=st.binary(max_size=20), patch=st.integers(0, 0xFFFF))
    def test_backpatch_matches_linear(self, head: bytes, tail: bytes, patch: int) -> None:
        """Patching a placeholder gives the same bytes as writing it in order."""
        patched = (
            PduBuilder()
            .hex(head, length_bits=0)
            .save_mark("m")
            .uint16(0)
            .hex(tail, length_bits=0)
            .load_mark("m")
            .uint16(patch)
            .end()
            .uint8(0xEE)
            .build()
        )
        linear = (
            PduBuilder()
            .hex(head, length_bits=0)
            .uint16(patch)
            .hex(tail, length_bits=0)
            .uint8(0xEE)
            .build()
        )

        assert patched == linear
