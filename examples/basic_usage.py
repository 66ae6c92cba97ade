#!/usr/bin/env python3
"""Basic usage example for pducodec.

This example demonstrates:
1. Building a PDU with numbers, strings and raw bytes
2. Backpatching a length field through a bookmark
3. Parsing the PDU back into a dict
"""

from __future__ import annotations

from pducodec import PduBuilder, PduParser


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("pducodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Building a PDU...")
    builder = PduBuilder().uint8(0x10).save_mark("length").uint16(0)
    start = builder.offset
    builder.string("hello, world").uint32(123456).hex("cafebabe")
    length = builder.offset - start
    pdu = builder.load_mark("length").uint16(length).end().uint8(0xFF).build()

    print(f"   PDU: {pdu}")
    print(f"   Size: {len(pdu) // 2} bytes (body {length} bytes)")
    print()

    print("2. Parsing the PDU...")
    value = (
        PduParser.parse(pdu)
        .uint8("type")
        .uint16("length")
        .string("greeting")
        .uint32("counter")
        .hex("magic")
        .uint8("trailer")
        .value
    )
    for name, field_value in value.items():
        print(f"   {name}: {field_value!r}")
    print()


if __name__ == "__main__":
    main()
