"""Byte categories and the sentinel glyphs shared by all encodings.

A category is purely a rendering hint: it selects the color of a byte's
hex cell and character cell. It never changes the byte value.

Thread Safety:
Category is an enum and the glyph constants are strings (immutable).

"""

from enum import IntEnum
from typing import Final


class Category(IntEnum):
    """Display category of a byte.

    The integer value indexes per-category style tables, so members are
    numbered densely from zero.

    """

    NULL = 0  # \0
    PRINTABLE = 1  # e.g. "A"
    WHITESPACE = 2  # e.g. \t
    CONTROL = 3  # e.g. \a
    INVALID = 4  # not part of the encoding, or non-ASCII

    # Reserved for structured-format annotation
    MAGIC_NUMBER = 5  # e.g. ELF: 7f 45 4c 46
    PADDING = 6
    INTEGER = 7
    FLOAT = 8
    POINTER = 9
    LENGTH = 10


NULL_GLYPH: Final[str] = "⋄"
WHITESPACE_GLYPH: Final[str] = "_"
CONTROL_GLYPH: Final[str] = "•"
INVALID_GLYPH: Final[str] = "×"

#: One ``(Category, glyph)`` entry per byte value.
ClassifierTable = tuple[tuple[Category, str], ...]

__all__ = [
    "Category",
    "ClassifierTable",
    "CONTROL_GLYPH",
    "INVALID_GLYPH",
    "NULL_GLYPH",
    "WHITESPACE_GLYPH",
]
