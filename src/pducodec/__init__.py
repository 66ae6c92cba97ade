"""pducodec: chainable PDU builder and parser

A Python library for converting between named field values and flat binary
PDUs (Protocol Data Units). A builder writes fields sequentially into a byte
buffer, with bookmarks for backpatching; a parser reads them back into a dict,
with branching reads for tagged records and a bounded repeat loop.

Key Features:
- Unsigned 8/16/32-bit numbers in big or little endian
- UTF-8 strings with length prefix or null terminator
- Raw byte spans exchanged as hex
- Bookmarks to patch earlier bytes without truncating later ones
- Discriminated decoding by calling back into the parser

Quick Start:
    >>> from pducodec import PduBuilder, PduParser
    >>>
    >>> pdu = PduBuilder().uint8(65, 66).string("hello").uint16(0xcafe).build()
    >>> pdu
    '41420568656c6c6fcafe'
    >>> PduParser.parse(pdu).uint8(2, "bytes").string("greeting").uint16("cafe").value
    {'bytes': [65, 66], 'greeting': 'hello', 'cafe': 51966}
"""

from __future__ import annotations

import logging

from .codec import (
    ALREADY_HANDLED,
    Handled,
    Merge,
    PduBuilder,
    PduParser,
    RepeatCondition,
    decode_number,
    encode_number,
)
from .enums import BinaryEnum
from .exceptions import (
    ConfigError,
    CursorError,
    DecodeError,
    EncodeError,
    EnumValueError,
    InvalidHexError,
    LengthError,
    MissingMarkError,
    OutOfDataError,
    PduCodecError,
    RangeError,
    RepeatConditionError,
)
from .types import BitLength, BuilderConfig, Endian, HexFormat, StringFormat
from .utils import bit, parse_hex, to_hex

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.3"

__all__ = [
    # Core API
    "PduBuilder",
    "PduParser",
    "Merge",
    "Handled",
    "ALREADY_HANDLED",
    "RepeatCondition",
    "encode_number",
    "decode_number",
    # Configuration
    "Endian",
    "BitLength",
    "BuilderConfig",
    "StringFormat",
    "HexFormat",
    # Helpers
    "BinaryEnum",
    "parse_hex",
    "to_hex",
    "bit",
    # Exceptions
    "PduCodecError",
    "ConfigError",
    "InvalidHexError",
    "EnumValueError",
    "EncodeError",
    "RangeError",
    "LengthError",
    "MissingMarkError",
    "CursorError",
    "DecodeError",
    "OutOfDataError",
    "RepeatConditionError",
    # Version
    "__version__",
]
