"""Lookup-table encodings.

Every built-in encoding is a 256-entry tuple of ``(Category, glyph)``
pairs built once at import time. Classification is a single index
operation.
"""

from __future__ import annotations

from collections.abc import Callable

from hexpanel.formats.category import (
    CONTROL_GLYPH,
    INVALID_GLYPH,
    NULL_GLYPH,
    WHITESPACE_GLYPH,
    Category,
    ClassifierTable,
)

# ASCII whitespace other than space (is_ascii_whitespace semantics)
ASCII_WHITESPACE: frozenset[int] = frozenset({0x09, 0x0A, 0x0C, 0x0D})


def ascii_category(byte: int) -> Category:
    """Category of ``byte`` under the ASCII policy."""
    if byte == 0x00:
        return Category.NULL
    if byte == 0x20 or byte in ASCII_WHITESPACE:
        return Category.WHITESPACE
    if 0x21 <= byte <= 0x7E:
        return Category.PRINTABLE
    if byte < 0x80:
        return Category.CONTROL
    return Category.INVALID


def build_table(entry: Callable[[int], tuple[Category, str]]) -> ClassifierTable:
    """Build a complete table by evaluating ``entry`` for all byte values."""
    table = tuple(entry(byte) for byte in range(256))
    for byte, (category, glyph) in enumerate(table):
        if not glyph:
            raise ValueError(f"empty glyph for byte 0x{byte:02x} ({category.name})")
    return table


def build_ascii_table(glyph_for: Callable[[int, Category], str | None]) -> ClassifierTable:
    """Build a table with ASCII categories and custom glyphs.

    ``glyph_for`` may return ``None`` to use the default sentinel glyph of
    the byte's category.
    """

    def entry(byte: int) -> tuple[Category, str]:
        category = ascii_category(byte)
        glyph = glyph_for(byte, category)
        if glyph is None:
            glyph = default_glyph(byte, category)
        return category, glyph

    return build_table(entry)


def default_glyph(byte: int, category: Category) -> str:
    """Sentinel glyph of ``category``; printable bytes map to themselves."""
    if category is Category.NULL:
        return NULL_GLYPH
    if category is Category.WHITESPACE:
        return " " if byte == 0x20 else WHITESPACE_GLYPH
    if category is Category.PRINTABLE:
        return chr(byte)
    if category is Category.CONTROL:
        return CONTROL_GLYPH
    return INVALID_GLYPH


class TableEncoding:
    """Stateless encoding backed by a 256-entry lookup table.

    Usage:
        >>> from hexpanel.formats import ASCII
        >>> ASCII.classify(0x41)
        (<Category.PRINTABLE: 1>, 'A')

    Thread Safety:
        Immutable after creation. Safe to share across threads.

    """

    __slots__ = ("_name", "_table")

    def __init__(self, name: str, table: ClassifierTable) -> None:
        if len(table) != 256:
            raise ValueError(f"encoding {name!r} maps {len(table)} byte values, expected 256")
        self._name = name
        self._table = table

    @property
    def name(self) -> str:
        return self._name

    @property
    def table(self) -> ClassifierTable:
        return self._table

    def classify(self, byte: int) -> tuple[Category, str]:
        return self._table[byte & 0xFF]

    def glyphs(self, data: bytes) -> str:
        """Character-panel text of ``data`` (no padding, no color)."""
        table = self._table
        return "".join(table[byte][1] for byte in data)

    def __repr__(self) -> str:
        return f"TableEncoding({self._name!r})"
