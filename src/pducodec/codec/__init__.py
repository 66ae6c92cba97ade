"""Sequential PDU codec.

This module provides the chainable builder and parser that convert between
named field values and flat binary PDUs.
"""

from __future__ import annotations

from .builder import PduBuilder
from .numeric import decode_number, encode_number
from .parser import ALREADY_HANDLED, Handled, Merge, PduParser
from .repeat import RepeatCondition

__all__ = [
    "PduBuilder",
    "PduParser",
    "Merge",
    "Handled",
    "ALREADY_HANDLED",
    "RepeatCondition",
    "encode_number",
    "decode_number",
]
