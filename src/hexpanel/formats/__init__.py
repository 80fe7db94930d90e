"""Byte classification for the character panel and colors.

Encodings:
- ascii: printable ASCII as-is, sentinels for everything else (default)
- dotted: printable ASCII as-is, ``.`` for everything else
- codepage-437: DOS graphic glyphs
- ebcdic: IBM code page 037 subset

Usage:
    >>> from hexpanel.formats import Category, get_encoding
    >>> get_encoding("ascii").classify(0x00)
    (<Category.NULL: 0>, '⋄')

"""

from hexpanel.formats.ascii import ASCII
from hexpanel.formats.category import (
    CONTROL_GLYPH,
    INVALID_GLYPH,
    NULL_GLYPH,
    WHITESPACE_GLYPH,
    Category,
)
from hexpanel.formats.cp437 import CP437
from hexpanel.formats.dotted import DOTTED
from hexpanel.formats.ebcdic import EBCDIC
from hexpanel.formats.protocol import ByteClassifier
from hexpanel.formats.registry import BUILTIN_ENCODINGS, encoding_names, get_encoding
from hexpanel.formats.table import TableEncoding

__all__ = [
    "ASCII",
    "BUILTIN_ENCODINGS",
    "ByteClassifier",
    "CONTROL_GLYPH",
    "CP437",
    "Category",
    "DOTTED",
    "EBCDIC",
    "INVALID_GLYPH",
    "NULL_GLYPH",
    "TableEncoding",
    "WHITESPACE_GLYPH",
    "encoding_names",
    "get_encoding",
]
