"""Byte value formatting per numeric base.

Each base has a fixed digit width and a 256-entry table of pre-formatted
digit strings, built once at import time.

Example:
    >>> Base.HEXADECIMAL.digits
    2
    >>> LOOKUP_OCTAL[8]
    '010'

"""

from __future__ import annotations

from enum import Enum
from typing import Final

LookUpTable = tuple[str, ...]

LOOKUP_HEX_LOWER: Final[LookUpTable] = tuple(f"{byte:02x}" for byte in range(256))
LOOKUP_OCTAL: Final[LookUpTable] = tuple(f"{byte:03o}" for byte in range(256))
LOOKUP_DECIMAL: Final[LookUpTable] = tuple(f"{byte:03d}" for byte in range(256))
LOOKUP_BINARY: Final[LookUpTable] = tuple(f"{byte:08b}" for byte in range(256))


class Base(Enum):
    """Numeric base used for the byte panels."""

    BINARY = "binary"
    OCTAL = "octal"
    DECIMAL = "decimal"
    HEXADECIMAL = "hexadecimal"

    @property
    def digits(self) -> int:
        """Characters per formatted byte."""
        return _DIGITS[self]

    @property
    def table(self) -> LookUpTable:
        return _TABLES[self]

    def format(self, byte: int) -> str:
        return _TABLES[self][byte & 0xFF]

    @classmethod
    def parse(cls, value: str | int | Base) -> Base:
        """Parse a base from its radix or one of its names.

        Accepts ``2``/``8``/``10``/``16`` (as int or string) and
        ``b``/``bin``/``binary``, ``o``/``oct``/``octal``,
        ``d``/``dec``/``decimal``, ``x``/``hex``/``hexadecimal``.

        Raises:
            ValueError: If the value names no supported base
        """
        if isinstance(value, Base):
            return value
        if isinstance(value, int):
            try:
                return _RADIXES[value]
            except KeyError:
                raise ValueError(
                    "The number provided is not a valid base. Valid bases are 2, 8, 10, and 16."
                ) from None
        text = value.strip().lower()
        if text.isdigit():
            return cls.parse(int(text))
        try:
            return _NAMES[text]
        except KeyError:
            raise ValueError(
                'The base provided is not valid. Valid bases are "b", "o", "d", and "x".'
            ) from None


_DIGITS: Final = {
    Base.BINARY: 8,
    Base.OCTAL: 3,
    Base.DECIMAL: 3,
    Base.HEXADECIMAL: 2,
}

_TABLES: Final = {
    Base.BINARY: LOOKUP_BINARY,
    Base.OCTAL: LOOKUP_OCTAL,
    Base.DECIMAL: LOOKUP_DECIMAL,
    Base.HEXADECIMAL: LOOKUP_HEX_LOWER,
}

_RADIXES: Final = {2: Base.BINARY, 8: Base.OCTAL, 10: Base.DECIMAL, 16: Base.HEXADECIMAL}

_NAMES: Final = {
    "b": Base.BINARY,
    "bin": Base.BINARY,
    "binary": Base.BINARY,
    "o": Base.OCTAL,
    "oct": Base.OCTAL,
    "octal": Base.OCTAL,
    "d": Base.DECIMAL,
    "dec": Base.DECIMAL,
    "decimal": Base.DECIMAL,
    "x": Base.HEXADECIMAL,
    "hex": Base.HEXADECIMAL,
    "hexadecimal": Base.HEXADECIMAL,
}
