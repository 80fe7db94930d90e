"""Border glyphs for header, footer and column separators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class BorderElements:
    """Characters of one horizontal border row."""

    left_corner: str
    horizontal_line: str
    column_separator: str
    right_corner: str


class BorderStyle(Enum):
    """Style of the border around bytes and characters.

    UNICODE uses box-drawing characters, ASCII uses ``+``, ``-`` and ``|``,
    NONE draws no header or footer and separates columns with spaces.
    """

    UNICODE = "unicode"
    ASCII = "ascii"
    NONE = "none"

    @classmethod
    def parse(cls, value: str | BorderStyle) -> BorderStyle:
        if isinstance(value, BorderStyle):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown border style {value!r} (choose from unicode, ascii, none)"
            ) from None

    def header_elements(self) -> BorderElements | None:
        return _HEADER.get(self)

    def footer_elements(self) -> BorderElements | None:
        return _FOOTER.get(self)

    @property
    def outer_separator(self) -> str:
        """Separator at panel-group edges (offset, last hex panel, last char panel)."""
        return _OUTER[self]

    @property
    def inner_separator(self) -> str:
        """Separator between neighbouring panels of the same group."""
        return _INNER[self]


_ASCII_ROW = BorderElements("+", "-", "+", "+")

_HEADER = {
    BorderStyle.UNICODE: BorderElements("┌", "─", "┬", "┐"),
    BorderStyle.ASCII: _ASCII_ROW,
}

_FOOTER = {
    BorderStyle.UNICODE: BorderElements("└", "─", "┴", "┘"),
    BorderStyle.ASCII: _ASCII_ROW,
}

_OUTER = {BorderStyle.UNICODE: "│", BorderStyle.ASCII: "|", BorderStyle.NONE: " "}
_INNER = {BorderStyle.UNICODE: "┊", BorderStyle.ASCII: "|", BorderStyle.NONE: " "}
