"""Chainable PDU builder.

The builder owns a growable byte buffer, a write cursor and a logical length.
The logical length is the highest offset ever reached by a write, so the cursor
can be moved back to a bookmark to patch earlier bytes and then returned to the
tail with ``end()`` without losing anything written after the bookmark.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple, Union

from ..exceptions import ConfigError, CursorError, InvalidHexError, LengthError, MissingMarkError
from ..types import BuilderConfig, Endian, HexFormat, StringFormat
from ..utils.hexutil import BytesLike, to_bytes
from .numeric import check_bits, encode_number

logger = logging.getLogger(__name__)


class PduBuilder:
    """A PDU builder with chainable write methods.

    Every write method returns the builder itself so calls can be chained.
    Numbers are written in the configured byte order.

    Example:
        >>> pdu = (
        ...     PduBuilder()
        ...     .uint8(0x01)
        ...     .save_mark("len")
        ...     .uint8(0)
        ...     .string("hello", null_terminate=True)
        ...     .load_mark("len")
        ...     .uint8(6)
        ...     .end()
        ...     .build()
        ... )
        >>> pdu
        '010668656c6c6f00'
    """

    def __init__(
        self,
        initial_size: int = 20,
        limit: Optional[int] = None,
        endian: Endian = Endian.BIG,
        *,
        config: Optional[BuilderConfig] = None,
    ) -> None:
        """Initialize an empty builder.

        Args:
            initial_size: Bytes to pre-allocate; the buffer grows as needed
            limit: Maximum number of bytes, or None for no limit
            endian: Byte order for multi-byte numbers
            config: Complete configuration, overriding the other arguments
        """
        if config is None:
            config = BuilderConfig(initial_size=initial_size, limit=limit, endian=endian)
        self.config = config
        self.endian = config.endian
        self.limit = config.limit
        self._buf = bytearray(config.initial_size)
        self._offset = 0
        self._length = 0
        self._marks: Dict[str, int] = {}

    # -- cursor ------------------------------------------------------------

    @property
    def offset(self) -> int:
        """Current write position."""
        return self._offset

    @offset.setter
    def offset(self, pos: int) -> None:
        if pos < 0 or pos > self._length:
            raise CursorError(
                f"Cannot set position {pos} outside current length {self._length}", self._offset
            )
        self._offset = pos

    @property
    def length(self) -> int:
        """Logical length: the highest offset reached by any write."""
        return self._length

    @property
    def marks(self) -> Dict[str, int]:
        """Copy of the saved bookmarks."""
        return dict(self._marks)

    def remaining(self) -> int:
        """Bytes that can still be written.

        If a limit was configured this is the number of bytes left before the
        limit. Otherwise it is the number of bytes that fit before the buffer
        has to grow.
        """
        if self.limit is not None:
            return self.limit - self._length
        return len(self._buf) - self._length

    def save_mark(self, name: str) -> PduBuilder:
        """Bookmark the current position so it can be returned to later."""
        self._marks[name] = self._offset
        logger.debug("Saved mark %r at offset %d", name, self._offset)
        return self

    def load_mark(self, name: str) -> PduBuilder:
        """Move the cursor back to a bookmarked position.

        Writes made from there overwrite existing bytes in place.

        Raises:
            MissingMarkError: If no mark with this name was saved
        """
        try:
            pos = self._marks[name]
        except KeyError:
            raise MissingMarkError(f"No such mark {name!r}", self._offset) from None

        logger.debug("Loading mark %r: offset %d -> %d", name, self._offset, pos)
        self.offset = pos
        return self

    def end(self) -> PduBuilder:
        """Move the cursor to the end of the data, e.g. after patching at a mark."""
        self._offset = self._length
        return self

    # -- writes ------------------------------------------------------------

    def _write(self, data: bytes) -> None:
        end = self._offset + len(data)

        if self.limit is not None and end > self.limit:
            raise LengthError(
                f"Write of {len(data)} bytes exceeds limit of {self.limit} bytes", self._offset
            )

        if end > len(self._buf):
            new_size = max(end, 2 * len(self._buf))
            logger.debug("Growing buffer from %d to %d bytes", len(self._buf), new_size)
            self._buf.extend(bytes(new_size - len(self._buf)))

        self._buf[self._offset:end] = data
        self._offset = end
        self._length = max(self._length, end)

    def _check_length(self, kind: str, size: int, bounds: Tuple[int, Optional[int]]) -> None:
        min_length, max_length = bounds
        if size < min_length or (max_length is not None and size > max_length):
            upper = "" if max_length is None else str(max_length)
            raise LengthError(
                f"Invalid {kind} length {size}; expected [{min_length}..{upper}]", self._offset
            )

    def number(self, bits: int, *values: int) -> PduBuilder:
        """Write one or more unsigned numbers of the given bit width.

        Raises:
            ConfigError: If bits is not 8, 16 or 32
            RangeError: If a value does not fit in ``bits`` bits
        """
        check_bits(bits, self._offset)
        for value in values:
            self._write(encode_number(value, bits, self.endian, self._offset))
        return self

    def uint8(self, *values: int) -> PduBuilder:
        """Write one or more unsigned bytes."""
        return self.number(8, *values)

    def uint16(self, *values: int) -> PduBuilder:
        """Write one or more unsigned 16-bit words."""
        return self.number(16, *values)

    def uint32(self, *values: int) -> PduBuilder:
        """Write one or more unsigned 32-bit words."""
        return self.number(32, *values)

    def string(
        self,
        text: str,
        *,
        length_bits: Optional[int] = None,
        min_length: int = 0,
        max_length: Optional[int] = None,
        null_terminate: bool = False,
    ) -> PduBuilder:
        """Write a string as UTF-8, preceded by its length or followed by a zero byte.

        Args:
            text: String to write
            length_bits: Width of the length prefix; defaults to 8, or 0 when null_terminate
            min_length: Minimum length of the UTF-8 encoded string in bytes
            max_length: Maximum length of the UTF-8 encoded string in bytes
            null_terminate: Write a zero byte after the string instead of a length

        Raises:
            ConfigError: If neither or both length strategies are selected
            LengthError: If the encoded length is out of bounds
        """
        fmt = StringFormat.of(
            offset=self._offset,
            length_bits=length_bits,
            min_length=min_length,
            max_length=max_length,
            null_terminate=null_terminate,
        )
        if not isinstance(text, str):
            raise ConfigError(f"Invalid string {text!r}", self._offset)

        # Byte length differs from character count for non-ASCII text
        encoded = text.encode("utf-8")
        self._check_length("string", len(encoded), fmt.bounds)

        if fmt.prefix_bits:
            chunk = encode_number(len(encoded), fmt.prefix_bits, self.endian, self._offset) + encoded
        else:
            if b"\x00" in encoded:
                raise ConfigError("Null-terminated string cannot contain a zero byte", self._offset)
            chunk = encoded + b"\x00"

        self._write(chunk)
        return self

    utf8 = string

    def hex(
        self,
        data: Union[str, BytesLike],
        *,
        length_bits: int = 8,
        min_length: int = 0,
        max_length: Optional[int] = None,
    ) -> PduBuilder:
        """Write raw bytes, optionally preceded by their length.

        Args:
            data: Hex text or bytes
            length_bits: Width of the length prefix; 0 writes no prefix
            min_length: Minimum number of bytes
            max_length: Maximum number of bytes

        Raises:
            InvalidHexError: If data is malformed hex text
            LengthError: If the byte count is out of bounds
        """
        fmt = HexFormat.of(
            offset=self._offset,
            length_bits=length_bits,
            min_length=min_length,
            max_length=max_length,
        )
        try:
            raw = to_bytes(data)
        except InvalidHexError as e:
            raise InvalidHexError(str(e), self._offset) from e
        self._check_length("data", len(raw), fmt.bounds)

        if fmt.length_bits:
            raw = encode_number(len(raw), fmt.length_bits, self.endian, self._offset) + raw

        self._write(raw)
        return self

    # -- output ------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Return the built bytes, from offset 0 to the logical length."""
        return bytes(self._buf[:self._length])

    def build(self) -> str:
        """Return the built bytes as lowercase hex. The builder is left unchanged."""
        return self.to_bytes().hex()

    def __repr__(self) -> str:
        return (
            f"PduBuilder(length={self._length}, offset={self._offset}, "
            f"limit={self.limit}, endian={self.endian.name})"
        )
