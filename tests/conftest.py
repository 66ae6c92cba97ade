"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from pducodec import PduParser

# Discriminated sensor readings: 0x01 temperature (uint16 / 10), 0x02 humidity
# (uint8), 0x06 pressure (uint16), 0x07 battery (uint16).
SENSOR_PDU = "0100e6021b0602bf070e43"


def _read_sensor(kind: int, record: Dict[str, Any], parser: PduParser) -> Any:
    if kind == 0x01:
        return parser.uint16(lambda v, *_: {"temperature": v / 10})
    if kind == 0x02:
        return parser.uint8("humidity")
    if kind == 0x06:
        return parser.uint16("pressure")
    if kind == 0x07:
        return parser.uint16("battery")
    return None


@pytest.fixture
def sensor_pdu() -> str:
    """Four tagged sensor readings."""
    return SENSOR_PDU


@pytest.fixture
def sensor_record() -> Callable[[PduParser], PduParser]:
    """Read sequence decoding one tagged sensor reading."""
    return lambda parser: parser.uint8(_read_sensor)
