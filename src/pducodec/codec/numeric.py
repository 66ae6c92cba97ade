"""Fixed-width unsigned integer encoding.

Numbers are 8, 16 or 32 bits wide, written in the byte order of the owning
builder or parser. Both sides share these rules so a buffer produced by one
is readable by the other.
"""

from __future__ import annotations

import struct
from typing import Dict

from ..exceptions import ConfigError, OutOfDataError, RangeError
from ..types import Endian

_FORMATS: Dict[int, str] = {8: "B", 16: "H", 32: "I"}


def check_bits(bits: int, offset: int | None = None) -> None:
    """Reject bit widths other than 8, 16 and 32.

    Raises:
        ConfigError: If bits is not a supported width
    """
    if bits not in _FORMATS:
        raise ConfigError(f"Invalid number of bits {bits!r}; expected 8, 16 or 32", offset)


def _format(bits: int, endian: Endian) -> str:
    check_bits(bits)
    return endian.struct_prefix + _FORMATS[bits]


def max_value(bits: int) -> int:
    """Largest unsigned value representable in ``bits`` bits."""
    return (1 << bits) - 1


def encode_number(value: int, bits: int, endian: Endian = Endian.BIG, offset: int | None = None) -> bytes:
    """Encode an unsigned integer.

    Args:
        value: Value to encode
        bits: Width in bits (8, 16 or 32)
        endian: Byte order
        offset: Buffer offset reported in errors

    Returns:
        ``bits // 8`` bytes

    Raises:
        RangeError: If value is not an integer in [0, 2**bits - 1]
        ConfigError: If bits is not a supported width

    Example:
        >>> encode_number(0x00CA, 16, Endian.LITTLE)
        b'\\xca\\x00'
    """
    fmt = _format(bits, endian)
    if isinstance(value, bool) or not isinstance(value, int):
        raise RangeError(f"Invalid uint{bits} value {value!r}", offset)
    if value < 0 or value > max_value(bits):
        raise RangeError(f"Invalid uint{bits} value {value}", offset)
    return struct.pack(fmt, value)


def decode_number(data: bytes, offset: int, bits: int, endian: Endian = Endian.BIG) -> int:
    """Decode an unsigned integer starting at ``offset``.

    Raises:
        OutOfDataError: If fewer than ``bits // 8`` bytes remain
        ConfigError: If bits is not a supported width
    """
    fmt = _format(bits, endian)
    size = bits // 8
    if offset + size > len(data):
        raise OutOfDataError(
            f"Out of data reading uint{bits}: need {size} bytes, have {len(data) - offset}",
            offset,
        )
    return struct.unpack_from(fmt, data, offset)[0]
