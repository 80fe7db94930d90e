"""Byte counts and offsets with units.

Grammar::

    offset := [sign] (hex | decimal [unit])
    sign   := "+" | "-"
    hex    := "0x" hexdigits              (no unit, no sign after the prefix)
    unit   := kb | mb | gb | tb | kib | mib | gib | tib | block | blocks

Units are case-insensitive and must directly follow the number. A leading
``-`` counts backwards from the end of the input; ``+`` counts forward from
the current position. Values are limited to signed 64 bits.

Example:
    >>> parse_byte_offset("4KiB")
    ByteOffset(value=4096, kind=<ByteOffsetKind.FORWARD_FROM_BEGINNING: 'forward-from-beginning'>)
    >>> parse_byte_offset("-0x10").value
    16

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final

from hexpanel.errors import (
    EmptyAfterSignError,
    EmptyOffsetError,
    EmptyWithUnitError,
    InvalidNumAndUnitError,
    InvalidUnitError,
    NegativeOffsetError,
    ParseNumError,
    SignAfterHexPrefixError,
    UnitOverflowError,
)

HEX_PREFIX: Final = "0x"
DEFAULT_BLOCK_SIZE: Final = 512
MAX_I64: Final = 2**63 - 1

_DIGITS_RE: Final = re.compile(r"[0-9]+")
_HEX_RE: Final = re.compile(r"[0-9a-fA-F]+")
# Split at the first character that is not an ASCII digit
_NUM_UNIT_RE: Final = re.compile(r"([0-9]*)(.*)", re.DOTALL)


class Unit(Enum):
    BYTE = "b"
    KILOBYTE = "kb"
    MEGABYTE = "mb"
    GIGABYTE = "gb"
    TERABYTE = "tb"
    KIBIBYTE = "kib"
    MEBIBYTE = "mib"
    GIBIBYTE = "gib"
    TEBIBYTE = "tib"
    BLOCK = "block"

    def multiplier(self, block_size: int = DEFAULT_BLOCK_SIZE) -> int:
        if self is Unit.BLOCK:
            return block_size
        return _MULTIPLIERS[self]


_MULTIPLIERS: Final = MappingProxyType(
    {
        Unit.BYTE: 1,
        Unit.KILOBYTE: 1000,
        Unit.MEGABYTE: 1000**2,
        Unit.GIGABYTE: 1000**3,
        Unit.TERABYTE: 1000**4,
        Unit.KIBIBYTE: 1 << 10,
        Unit.MEBIBYTE: 1 << 20,
        Unit.GIBIBYTE: 1 << 30,
        Unit.TEBIBYTE: 1 << 40,
    }
)

_UNIT_NAMES: Final = MappingProxyType(
    {
        "": Unit.BYTE,
        "kb": Unit.KILOBYTE,
        "mb": Unit.MEGABYTE,
        "gb": Unit.GIGABYTE,
        "tb": Unit.TERABYTE,
        "kib": Unit.KIBIBYTE,
        "mib": Unit.MEBIBYTE,
        "gib": Unit.GIBIBYTE,
        "tib": Unit.TEBIBYTE,
        "block": Unit.BLOCK,
        "blocks": Unit.BLOCK,
    }
)


class ByteOffsetKind(Enum):
    FORWARD_FROM_BEGINNING = "forward-from-beginning"
    FORWARD_FROM_LAST_OFFSET = "forward-from-last-offset"
    BACKWARD_FROM_END = "backward-from-end"


@dataclass(frozen=True, slots=True)
class ByteOffset:
    """A non-negative byte count and the direction it applies in."""

    value: int
    kind: ByteOffsetKind

    def assume_forward_offset_from_start(self) -> int:
        """The value as a plain count.

        Raises:
            NegativeOffsetError: If the offset counts back from the end
        """
        if self.kind is ByteOffsetKind.BACKWARD_FROM_END:
            raise NegativeOffsetError()
        return self.value


def process_sign_of(text: str) -> tuple[str, ByteOffsetKind]:
    """Strip a leading sign and return the remainder with its offset kind."""
    if not text:
        raise EmptyOffsetError()
    sign = text[0]
    if sign in "+-":
        rest = text[1:]
        if not rest:
            raise EmptyAfterSignError()
        if sign == "+":
            return rest, ByteOffsetKind.FORWARD_FROM_LAST_OFFSET
        return rest, ByteOffsetKind.BACKWARD_FROM_END
    return text, ByteOffsetKind.FORWARD_FROM_BEGINNING


def try_parse_as_hex_number(text: str) -> int | None:
    """Parse ``0x``-prefixed text; None if there is no prefix.

    Raises:
        ByteOffsetParseError: If the prefix is followed by something other
            than hex digits
    """
    if not text.startswith(HEX_PREFIX):
        return None
    digits = text[len(HEX_PREFIX) :]
    if digits[:1] in ("+", "-"):
        if len(digits) == 1:
            raise EmptyAfterSignError()
        raise SignAfterHexPrefixError(digits[0])
    if not _HEX_RE.fullmatch(digits):
        raise ParseNumError(digits)
    value = int(digits, 16)
    if value > MAX_I64:
        raise ParseNumError(digits)
    return value


def extract_num_and_unit_from(text: str) -> tuple[int, Unit]:
    """Split decimal text into its number and unit (no normalization).

    ``"1024kb"`` gives ``(1024, Unit.KILOBYTE)``; a missing unit means bytes.
    """
    if not text:
        raise EmptyOffsetError()
    match = _NUM_UNIT_RE.fullmatch(text)
    assert match is not None
    number, raw_unit = match.groups()
    unit = _UNIT_NAMES.get(raw_unit.lower())
    if unit is None:
        if not number:
            raise InvalidNumAndUnitError(raw_unit)
        raise InvalidUnitError(raw_unit)
    if not number:
        raise EmptyWithUnitError(raw_unit)
    value = int(number)
    if value > MAX_I64:
        raise ParseNumError(number)
    return value, unit


def parse_byte_offset(text: str, block_size: int = DEFAULT_BLOCK_SIZE) -> ByteOffset:
    """Parse a signed byte offset such as ``+4KiB``, ``-2block`` or ``0xff``.

    Raises:
        ByteOffsetParseError: On malformed input or 64-bit overflow
    """
    rest, kind = process_sign_of(text)
    hex_value = try_parse_as_hex_number(rest)
    if hex_value is not None:
        return ByteOffset(hex_value, kind)
    number, unit = extract_num_and_unit_from(rest)
    value = number * unit.multiplier(block_size)
    if value > MAX_I64:
        raise UnitOverflowError()
    return ByteOffset(value, kind)


def parse_byte_count(text: str, block_size: int = DEFAULT_BLOCK_SIZE) -> int:
    """Parse a non-negative count (``--length``, ``--display-offset``)."""
    return parse_byte_offset(text, block_size).assume_forward_offset_from_start()


def parse_block_size(text: str) -> int:
    """Parse the ``--block-size`` argument.

    Hex and unit suffixes are allowed; ``block`` itself is not.

    Raises:
        ByteOffsetParseError: On malformed input
        ValueError: If the size is not positive or uses the block unit
    """
    hex_value = try_parse_as_hex_number(text)
    if hex_value is not None:
        value = hex_value
    else:
        number, unit = extract_num_and_unit_from(text)
        if unit is Unit.BLOCK:
            raise ValueError("can not use 'block(s)' as a unit to specify block size")
        value = number * unit.multiplier()
        if value > MAX_I64:
            raise UnitOverflowError()
    if value <= 0:
        raise ValueError("block size argument must be positive")
    return value
