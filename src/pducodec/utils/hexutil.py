"""Hex text helpers.

PDUs travel as ASCII hex strings: case-insensitive on input, lowercase on output.
"""

from __future__ import annotations

import re
from typing import Union

from ..exceptions import InvalidHexError

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")

BytesLike = Union[bytes, bytearray, memoryview]


def parse_hex(text: str) -> bytes:
    """Decode hex text into bytes.

    Args:
        text: Hex digits, two per byte, in either case

    Returns:
        Decoded bytes

    Raises:
        InvalidHexError: If the text contains a non-hex digit or has odd length

    Example:
        >>> parse_hex("CAfe")
        b'\\xca\\xfe'
    """
    if not isinstance(text, str):
        raise InvalidHexError(f"Expected hex text, got {type(text).__name__}")

    match = _HEX_PREFIX.match(text)
    valid = match.end() if match else 0
    if valid != len(text):
        pos = valid // 2
        raise InvalidHexError(
            f"Invalid hex data at byte {pos}: {text[pos * 2:(pos + 1) * 2]!r}"
        )

    if len(text) % 2:
        raise InvalidHexError("Invalid hex data; length must be even")

    return bytes.fromhex(text)


def to_bytes(data: Union[str, BytesLike]) -> bytes:
    """Accept hex text or a bytes-like object and return bytes."""
    if isinstance(data, str):
        return parse_hex(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidHexError(f"Expected hex text or bytes, got {type(data).__name__}")


def to_hex(n: int) -> str:
    """Format a non-negative integer as hex with an even number of digits.

    Example:
        >>> to_hex(0x405)
        '0405'
    """
    s = format(n, "x")
    return f"0{s}" if len(s) % 2 else s


def bit(i: int) -> int:
    """Return the mask with only bit ``i`` set."""
    return 1 << i
