"""Chainable PDU parser.

The parser reads primitives from an immutable byte buffer and merges them into
a record (a plain dict) as it goes. Each read is handed a *field*: either the
name to store the decoded value under, or a field function that decides what
to merge. Field functions may also issue further reads against the parser,
which is how discriminated (branching) records are decoded.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..exceptions import ConfigError, DecodeError, OutOfDataError
from ..types import Endian, HexFormat, StringFormat
from ..utils.hexutil import BytesLike, to_bytes
from .numeric import check_bits, decode_number
from .repeat import RepeatCondition, Sequence, run_repeat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Merge:
    """Field function result: merge these fields into the record."""

    fields: Mapping[str, Any]


class Handled(enum.Enum):
    """Field function result: nested reads already updated the record."""

    ALREADY = "already-handled"


ALREADY_HANDLED = Handled.ALREADY

FieldFunction = Callable[[Any, Dict[str, Any], "PduParser"], Any]
Field = Union[str, FieldFunction]


class PduParser:
    """A PDU parser with chainable read methods.

    The record built so far is available as ``value``. Later reads into an
    existing field name overwrite the earlier value.

    Example:
        >>> def reading(kind, record, parser):
        ...     if kind == 0x01:
        ...         return parser.uint16(lambda v, *_: {"temperature": v / 10})
        ...     return None
        >>> PduParser.parse("0100e6").uint8(reading).value
        {'temperature': 23.0}
    """

    def __init__(
        self,
        data: bytes,
        target: Optional[Mapping[str, Any]] = None,
        endian: Endian = Endian.BIG,
    ) -> None:
        """Initialize a parser over raw bytes.

        Args:
            data: Bytes to parse
            target: Initial record contents
            endian: Byte order for multi-byte numbers
        """
        if not isinstance(endian, Endian):
            raise ConfigError(f"endian must be an Endian, got {endian!r}")
        self._data = bytes(data)
        self._offset = 0
        self.endian = endian
        self.value: Dict[str, Any] = dict(target or {})

    @classmethod
    def parse(
        cls,
        data: Union[str, BytesLike],
        *,
        target: Optional[Mapping[str, Any]] = None,
        endian: Endian = Endian.BIG,
    ) -> PduParser:
        """Create a parser for hex text or bytes.

        Raises:
            InvalidHexError: If data is malformed hex text
        """
        return cls(to_bytes(data), target=target, endian=endian)

    @property
    def offset(self) -> int:
        """Current read position."""
        return self._offset

    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    # -- merging -----------------------------------------------------------

    def _apply(self, field: Field, value: Any) -> PduParser:
        if isinstance(field, str):
            self.value[field] = value
            return self

        if not callable(field):
            raise ConfigError(
                f"Invalid field {field!r}; expected a name or a function", self._offset
            )

        result = field(value, self.value, self)

        if result is None:
            return self
        if result is self or isinstance(result, Handled):
            logger.debug("Branching read handled by field function at offset %d", self._offset)
            return self
        if isinstance(result, Merge):
            self.value.update(result.fields)
        elif isinstance(result, Mapping):
            self.value.update(result)
        else:
            raise ConfigError(
                f"Field function returned {type(result).__name__}; "
                f"expected a mapping, Merge, ALREADY_HANDLED, this parser or None",
                self._offset,
            )
        return self

    # -- primitives --------------------------------------------------------

    def _read_bytes(self, count: int) -> bytes:
        if self._offset + count > len(self._data):
            raise OutOfDataError(
                f"Out of data reading {count} bytes, have {self.remaining()}", self._offset
            )
        start = self._offset
        self._offset += count
        return self._data[start:self._offset]

    def _read_number(self, bits: int) -> int:
        value = decode_number(self._data, self._offset, bits, self.endian)
        self._offset += bits // 8
        return value

    def number(self, bits: int, *args: Any) -> PduParser:
        """Read one unsigned number, or ``count`` of them, of the given bit width.

        Call as ``number(bits, field)`` or ``number(bits, count, field)``. With a
        count the field receives a list of values.

        Raises:
            ConfigError: If bits is not 8, 16 or 32
            OutOfDataError: If the input runs out
        """
        check_bits(bits, self._offset)

        if len(args) == 1:
            return self._apply(args[0], self._read_number(bits))

        if len(args) == 2:
            count, field = args
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ConfigError(f"Invalid count {count!r}", self._offset)
            values: List[int] = [self._read_number(bits) for _ in range(count)]
            return self._apply(field, values)

        raise ConfigError(
            f"Expected (field) or (count, field), got {len(args)} arguments", self._offset
        )

    def uint8(self, *args: Any) -> PduParser:
        """Read an unsigned byte: ``uint8(field)`` or ``uint8(count, field)``."""
        return self.number(8, *args)

    def uint16(self, *args: Any) -> PduParser:
        """Read an unsigned 16-bit word: ``uint16(field)`` or ``uint16(count, field)``."""
        return self.number(16, *args)

    def uint32(self, *args: Any) -> PduParser:
        """Read an unsigned 32-bit word: ``uint32(field)`` or ``uint32(count, field)``."""
        return self.number(32, *args)

    def string(
        self,
        field: Field,
        *,
        length_bits: Optional[int] = None,
        null_terminate: bool = False,
    ) -> PduParser:
        """Read a UTF-8 string preceded by its length or terminated by a zero byte.

        Args:
            field: Field name or field function
            length_bits: Width of the length prefix; defaults to 8, or 0 when null_terminate
            null_terminate: Read up to and including the next zero byte

        Raises:
            ConfigError: If neither or both length strategies are selected
            OutOfDataError: If the input runs out or no terminator is found
            DecodeError: If the bytes are not valid UTF-8
        """
        fmt = StringFormat.of(
            offset=self._offset, length_bits=length_bits, null_terminate=null_terminate
        )
        start = self._offset

        if fmt.prefix_bits:
            raw = self._read_bytes(self._read_number(fmt.prefix_bits))
        else:
            end = self._data.find(b"\x00", self._offset)
            if end < 0:
                raise OutOfDataError("No null terminator found", self._offset)
            raw = self._data[self._offset:end]
            self._offset = end + 1

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 string: {e}", start) from e

        return self._apply(field, text)

    def hex(
        self,
        field: Field,
        *,
        length_bits: int = 8,
        length: Optional[int] = None,
    ) -> PduParser:
        """Read a byte span as lowercase hex.

        Args:
            field: Field name or field function
            length_bits: Width of the length prefix; 0 for no prefix
            length: Number of bytes to read; required when length_bits is 0

        Raises:
            ConfigError: If there is neither a length prefix nor a length
            OutOfDataError: If the input runs out
        """
        fmt = HexFormat.of(offset=self._offset, length_bits=length_bits, length=length)

        if fmt.length_bits:
            count = self._read_number(fmt.length_bits)
        elif fmt.length is not None:
            count = fmt.length
        else:
            raise ConfigError("Must provide length or length_bits", self._offset)

        return self._apply(field, self._read_bytes(count).hex())

    def skip(self, count: int) -> PduParser:
        """Advance past ``count`` bytes without recording them."""
        if count < 0:
            raise ConfigError(f"Invalid skip count {count}", self._offset)
        self._read_bytes(count)
        return self

    # -- repetition --------------------------------------------------------

    def repeat(
        self,
        sequence: Sequence,
        condition: Optional[RepeatCondition] = None,
        *,
        times: Optional[int] = None,
        min_times: Optional[int] = None,
        max_times: Optional[int] = None,
    ) -> PduParser:
        """Run a read sequence repeatedly.

        ``sequence(parser)`` performs one iteration of reads and returns the
        parser to continue or None to stop. A failing read ends the loop
        without error unless fewer than ``times`` or ``min_times`` iterations
        have completed. The loop also ends after ``times`` or ``max_times``
        iterations.

        Args:
            sequence: One iteration of reads
            condition: Repetition bounds, instead of the keyword arguments
            times: Exact number of iterations required
            min_times: Minimum number of iterations required
            max_times: Maximum number of iterations

        Raises:
            RepeatConditionError: If the exact or minimum count is not met
        """
        if condition is None:
            condition = RepeatCondition.of(
                offset=self._offset, times=times, min_times=min_times, max_times=max_times
            )
        elif times is not None or min_times is not None or max_times is not None:
            raise ConfigError(
                "Pass either a RepeatCondition or repeat bounds, not both", self._offset
            )

        run_repeat(self, sequence, condition)
        return self

    def __repr__(self) -> str:
        return (
            f"PduParser(offset={self._offset}, length={len(self._data)}, "
            f"endian={self.endian.name}, fields={sorted(self.value)})"
        )
