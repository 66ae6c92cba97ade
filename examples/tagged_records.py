#!/usr/bin/env python3
"""Tagged record decoding with pducodec.

A stream of sensor readings, each introduced by a one-byte tag, is decoded
by branching on the tag and repeating until the input runs out.
"""

from __future__ import annotations

from typing import Any, Dict

from pducodec import PduParser, RepeatConditionError

STREAM = "0100e6021b0602bf070e43"


def reading(tag: int, record: Dict[str, Any], parser: PduParser) -> Any:
    """Read the fields that belong to ``tag``."""
    if tag == 0x01:
        return parser.uint16(lambda v, *_: {"temperature": v / 10})
    if tag == 0x02:
        return parser.uint8("humidity")
    if tag == 0x06:
        return parser.uint16("pressure")
    if tag == 0x07:
        return parser.uint16("battery_mv")
    return None


def main() -> None:
    """Run the tagged record example."""
    print("=" * 60)
    print("pducodec Tagged Records Example")
    print("=" * 60)
    print()

    value = PduParser.parse(STREAM).repeat(lambda p: p.uint8(reading), min_times=3).value
    print(f"Decoded {STREAM}:")
    for name, field_value in value.items():
        print(f"   {name}: {field_value}")
    print()

    try:
        PduParser.parse(STREAM).repeat(lambda p: p.uint8(reading), times=5)
    except RepeatConditionError as e:
        print(f"Requiring 5 readings fails: {e}")


if __name__ == "__main__":
    main()
