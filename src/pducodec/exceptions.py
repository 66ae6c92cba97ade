"""Exception hierarchy for pducodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from PduCodecError for easy catching of any pducodec-specific error.
Every exception can carry the byte offset at which the problem was detected.
"""

from __future__ import annotations

from typing import Optional


class PduCodecError(Exception):
    """Base exception for all pducodec errors.

    Attributes:
        offset: Byte offset in the buffer where the error occurred, if known
    """

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        self.offset = offset
        if offset is not None:
            message = f"{message} at offset {offset}"
        super().__init__(message)


class ConfigError(PduCodecError):
    """Raised when a field descriptor or codec option is invalid.

    Examples:
        - Neither a length prefix nor a null terminator configured for a string
        - Both a length prefix and a null terminator configured
        - Hex read with no length prefix and no fixed length
        - Unsupported bit width
        - Field function returned something that cannot be merged
    """


class InvalidHexError(PduCodecError, ValueError):
    """Raised when hex text is malformed (odd length or non-hex digits)."""


class EnumValueError(PduCodecError, ValueError):
    """Raised when a BinaryEnum key or value cannot be mapped."""


class EncodeError(PduCodecError):
    """Raised when writing to a PduBuilder fails."""


class RangeError(EncodeError):
    """Raised when a number does not fit in its configured bit width."""


class LengthError(EncodeError):
    """Raised when an encoded length is outside its configured bounds.

    Examples:
        - UTF-8 encoded string longer than max_length
        - Byte span shorter than min_length
        - Write would grow the buffer beyond its limit
    """


class MissingMarkError(EncodeError, KeyError):
    """Raised when loading a bookmark that was never saved."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class CursorError(EncodeError):
    """Raised when the write cursor is moved outside [0, length]."""


class DecodeError(PduCodecError):
    """Raised when reading from a PduParser fails.

    Examples:
        - Invalid UTF-8 in a string field
        - Truncated input (see OutOfDataError)
    """


class OutOfDataError(DecodeError):
    """Raised when a read runs past the end of the input."""


class RepeatConditionError(DecodeError):
    """Raised when a repeat loop ends before its exact or minimum count is met."""
