"""EBCDIC encoding (code page 037 subset).

Letters, digits and the common punctuation of code page 037 are printable.
Code points outside that subset, including the national characters, are
classified as invalid rather than guessed.
"""

from typing import Final

from hexpanel.formats.category import (
    CONTROL_GLYPH,
    INVALID_GLYPH,
    NULL_GLYPH,
    WHITESPACE_GLYPH,
    Category,
    ClassifierTable,
)
from hexpanel.formats.table import TableEncoding, build_table

# HT, FF, CR, LF
_WHITESPACE: Final[frozenset[int]] = frozenset({0x05, 0x0C, 0x0D, 0x25})
_SPACE: Final[int] = 0x40

# Unassigned code points inside the control block
_INVALID_CONTROLS: Final[frozenset[int]] = frozenset({0x30, 0x31, 0x3E})

_EO: Final[int] = 0xFF


def _printable() -> dict[int, str]:
    glyphs: dict[int, str] = {}

    def span(start: int, chars: str) -> None:
        for offset, char in enumerate(chars):
            glyphs[start + offset] = char

    span(0x4A, "¢.<(+|")
    span(0x50, "&")
    span(0x5A, "!$*);¬")
    span(0x60, "-/")
    span(0x6A, "¦,%_>?")
    span(0x79, "`:#@'=\"")
    span(0x81, "abcdefghi")
    span(0x8F, "±")
    span(0x91, "jklmnopqr")
    span(0xA1, "~stuvwxyz")
    span(0xB0, "^")
    span(0xBA, "[]")
    span(0xC0, "{ABCDEFGHI")
    span(0xD0, "}JKLMNOPQR")
    span(0xE0, "\\")
    span(0xE2, "STUVWXYZ")
    span(0xF0, "0123456789")
    return glyphs


_PRINTABLE: Final[dict[int, str]] = _printable()


def _ebcdic_entry(byte: int) -> tuple[Category, str]:
    if byte == 0x00:
        return Category.NULL, NULL_GLYPH
    if byte == _SPACE:
        return Category.WHITESPACE, " "
    if byte in _WHITESPACE:
        return Category.WHITESPACE, WHITESPACE_GLYPH
    if byte in _PRINTABLE:
        return Category.PRINTABLE, _PRINTABLE[byte]
    if (byte < _SPACE and byte not in _INVALID_CONTROLS) or byte == _EO:
        return Category.CONTROL, CONTROL_GLYPH
    return Category.INVALID, INVALID_GLYPH


LOOKUP_EBCDIC: Final[ClassifierTable] = build_table(_ebcdic_entry)

EBCDIC: Final[TableEncoding] = TableEncoding("ebcdic", LOOKUP_EBCDIC)
