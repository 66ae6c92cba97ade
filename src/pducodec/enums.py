"""Binary enums: string keys mapped to bit values.

A BinaryEnum is a plain value mapper used alongside the builder and parser,
for example to turn a flags byte into a list of names.
"""

from __future__ import annotations

from functools import reduce
from typing import Generic, Iterable, List, Mapping, Tuple, TypeVar

from .exceptions import EnumValueError
from .utils.hexutil import to_hex

K = TypeVar("K", bound=str)


class BinaryEnum(Generic[K]):
    """An enum of string keys mapped to binary values.

    Example:
        >>> e = BinaryEnum({"FOO": 0x01, "BAR": 0x02, "BAZ": 0x04})
        >>> e.encode("FOO")
        1
        >>> e.decode_multi(0x05)
        ['FOO', 'BAZ']
    """

    def __init__(self, mapping: Mapping[K, int], name: str = "BinaryEnum") -> None:
        """Create a new binary enum.

        Args:
            mapping: Keys mapped to their binary values
            name: Name used in error messages
        """
        self.name = name
        self._entries: List[Tuple[K, int]] = list(mapping.items())

    def keys(self) -> List[K]:
        return [k for k, _ in self._entries]

    def encode(self, key: K) -> int:
        """Return the binary value of ``key``.

        Raises:
            EnumValueError: If the key is not part of this enum
        """
        for k, v in self._entries:
            if k == key:
                return v

        raise EnumValueError(
            f"Invalid {self.name} key {key}; expected [{', '.join(self.keys())}]"
        )

    def encode_multi(self, keys: Iterable[K]) -> int:
        """OR together the binary values of ``keys``."""
        return reduce(lambda value, key: value | self.encode(key), keys, 0x00)

    def decode(self, value: int) -> K:
        """Return the key whose value equals ``value`` exactly.

        Raises:
            EnumValueError: If no key has this value
        """
        for k, v in self._entries:
            if v == value:
                return k

        raise EnumValueError(
            f"Invalid {self.name} value {to_hex(value)}; expected "
            f"[{', '.join(to_hex(v) for _, v in self._entries)}]"
        )

    def decode_multi(self, value: int) -> List[K]:
        """Split an OR-combined value into keys.

        Every set bit must be accounted for. With FOO=0x01, BAR=0x02, BAZ=0x08,
        0x09 decodes to [FOO, BAZ] while 0x07 fails on the unmatched 0x04.

        Raises:
            EnumValueError: If part of the value matches no key
        """
        rest = value
        keys: List[K] = []
        for k, v in self._entries:
            if value & v == v:
                keys.append(k)
                rest &= ~v

        if rest:
            raise EnumValueError(
                f"Invalid {self.name} value {to_hex(value)}; matched [{', '.join(keys)}] "
                f"but unmatched remaining value {to_hex(rest)}"
            )

        return keys

    def __repr__(self) -> str:
        return f"BinaryEnum({self.name!r}, {dict(self._entries)!r})"
