"""Shared types, field descriptors and codec configuration.

Field descriptors are frozen Pydantic models so that invalid option
combinations are rejected before any byte is read or written. Builder and
parser must be given matching descriptors for each field.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import ConfigError

BitLength = Literal[8, 16, 32]
LengthBits = Literal[0, 8, 16, 32]

BIT_LENGTHS: Tuple[int, ...] = (8, 16, 32)

F = TypeVar("F", bound="Descriptor")


class Endian(enum.Enum):
    """Byte order used for all multi-byte numbers of a builder or parser."""

    BIG = "big"
    LITTLE = "little"

    @property
    def struct_prefix(self) -> str:
        """Byte order character for the struct module."""
        return ">" if self is Endian.BIG else "<"


class Descriptor(BaseModel):
    """Common base for validated descriptors."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **options: Any) -> None:
        """Validate options, reporting failures as ConfigError.

        Raises:
            ConfigError: If the options are invalid or conflicting
        """
        try:
            super().__init__(**options)
        except ValidationError as e:
            reasons = "; ".join(str(err["msg"]) for err in e.errors())
            raise ConfigError(f"Invalid {type(self).__name__}: {reasons}") from e

    @classmethod
    def of(cls: Type[F], *, offset: Optional[int] = None, **options: Any) -> F:
        """Create a descriptor on behalf of a builder or parser.

        Args:
            offset: Cursor position reported if the options are rejected
            **options: Descriptor fields

        Returns:
            Validated descriptor

        Raises:
            ConfigError: If the options are invalid or conflicting
        """
        try:
            return cls(**options)
        except ConfigError as e:
            if offset is None:
                raise
            raise ConfigError(str(e), offset) from e.__cause__


def _max_for_bits(bits: int) -> int:
    return (1 << bits) - 1


class StringFormat(Descriptor):
    """Descriptor for a UTF-8 string field.

    Exactly one length strategy must be active: a length prefix of
    ``length_bits`` bits, or a terminating zero byte. When ``length_bits`` is
    left unset it resolves to 0 for null-terminated strings and 8 otherwise.

    Attributes:
        length_bits: Width of the length prefix (0 for none)
        min_length: Minimum encoded length in bytes (builder only)
        max_length: Maximum encoded length in bytes (builder only)
        null_terminate: Whether the string ends with a zero byte
    """

    length_bits: Optional[LengthBits] = None
    min_length: int = Field(default=0, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    null_terminate: bool = False

    @property
    def prefix_bits(self) -> int:
        if self.length_bits is None:
            return 0 if self.null_terminate else 8
        return self.length_bits

    @property
    def bounds(self) -> Tuple[int, Optional[int]]:
        """Inclusive (min, max) encoded length; max is None when unbounded."""
        max_length = self.max_length
        if max_length is None and self.prefix_bits:
            max_length = _max_for_bits(self.prefix_bits)
        return self.min_length, max_length

    @model_validator(mode="after")
    def _check_strategy(self) -> StringFormat:
        if self.prefix_bits and self.null_terminate:
            raise ValueError(
                f"length_bits={self.prefix_bits} cannot be combined with null_terminate"
            )
        if not self.prefix_bits and not self.null_terminate:
            raise ValueError("string needs either length_bits or null_terminate")
        _check_bounds(self.prefix_bits, *self.bounds)
        return self


class HexFormat(Descriptor):
    """Descriptor for a raw byte span exchanged as hex text.

    Attributes:
        length_bits: Width of the length prefix (0 for none)
        min_length: Minimum length in bytes (builder only)
        max_length: Maximum length in bytes (builder only)
        length: Fixed number of bytes to read when there is no prefix (parser only)
    """

    length_bits: LengthBits = 8
    min_length: int = Field(default=0, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    length: Optional[int] = Field(default=None, ge=0)

    @property
    def bounds(self) -> Tuple[int, Optional[int]]:
        """Inclusive (min, max) length; max is None when unbounded."""
        max_length = self.max_length
        if max_length is None and self.length_bits:
            max_length = _max_for_bits(self.length_bits)
        return self.min_length, max_length

    @model_validator(mode="after")
    def _check_lengths(self) -> HexFormat:
        _check_bounds(self.length_bits, *self.bounds)
        return self


def _check_bounds(prefix_bits: int, min_length: int, max_length: Optional[int]) -> None:
    if max_length is None:
        return
    if max_length < min_length:
        raise ValueError(f"max_length {max_length} is less than min_length {min_length}")
    if prefix_bits and max_length > _max_for_bits(prefix_bits):
        raise ValueError(
            f"max_length {max_length} does not fit in a {prefix_bits}-bit length prefix"
        )


@dataclass
class BuilderConfig:
    """Configuration for a PduBuilder.

    Attributes:
        initial_size: Bytes to pre-allocate (default 20). The buffer grows as needed.
        limit: Maximum number of bytes the builder may hold, or None for no limit.
        endian: Byte order for multi-byte numbers (default big endian).
    """

    initial_size: int = 20
    limit: Optional[int] = None
    endian: Endian = Endian.BIG

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.initial_size < 0:
            raise ConfigError(f"initial_size must be >= 0, got {self.initial_size}")

        if self.limit is not None and self.limit < 0:
            raise ConfigError(f"limit must be >= 0, got {self.limit}")

        if not isinstance(self.endian, Endian):
            raise ConfigError(f"endian must be an Endian, got {self.endian!r}")
