"""Dotted encoding (xxd style).

Same categories as ASCII, so colors are unchanged; the character panel
shows printable ASCII and space as-is and ``.`` for everything else.
"""

from typing import Final

from hexpanel.formats.category import Category, ClassifierTable
from hexpanel.formats.table import TableEncoding, build_ascii_table


def _dotted_glyph(byte: int, category: Category) -> str:
    if category is Category.PRINTABLE or byte == 0x20:
        return chr(byte)
    return "."


LOOKUP_DOTTED: Final[ClassifierTable] = build_ascii_table(_dotted_glyph)

DOTTED: Final[TableEncoding] = TableEncoding("dotted", LOOKUP_DOTTED)
