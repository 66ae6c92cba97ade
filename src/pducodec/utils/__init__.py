"""Utility functions for pducodec."""

from __future__ import annotations

from .hexutil import bit, parse_hex, to_bytes, to_hex

__all__ = [
    "parse_hex",
    "to_bytes",
    "to_hex",
    "bit",
]
