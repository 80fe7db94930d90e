"""Code page 437 encoding.

Uses ASCII categories with the graphic glyphs of IBM code page 437, so
control bytes and the upper half render as their DOS symbols. NUL keeps
the ``⋄`` sentinel.
"""

from typing import Final

from hexpanel.formats.category import NULL_GLYPH, Category, ClassifierTable
from hexpanel.formats.table import TableEncoding, build_ascii_table

# Graphic forms of 0x01..0x1F; the cp437 codec decodes these as controls
_CP437_LOW: Final[str] = "☺☻♥♦♣♠•◘○◙♂♀♪♫☼►◄↕‼¶§▬↨↑↓→←∟↔▲▼"
_CP437_DEL: Final[str] = "⌂"
_CP437_HIGH: Final[str] = bytes(range(0x80, 0x100)).decode("cp437")


def _cp437_glyph(byte: int, category: Category) -> str:
    if byte == 0x00:
        return NULL_GLYPH
    if byte < 0x20:
        return _CP437_LOW[byte - 1]
    if byte < 0x7F:
        return chr(byte)
    if byte == 0x7F:
        return _CP437_DEL
    return _CP437_HIGH[byte - 0x80]


LOOKUP_CP437: Final[ClassifierTable] = build_ascii_table(_cp437_glyph)

CP437: Final[TableEncoding] = TableEncoding("codepage-437", LOOKUP_CP437)
