"""Column geometry shared by header, body rows and footer.

All widths are counted in terminal cells of unpainted text. Color escape
sequences are added afterwards and never enter these computations, so a
header drawn from ``Layout`` lines up with every body row.

A row consists of these columns, separated by single border characters:

    [position (8)] hex panel (panel_width) x panels [char panel (8) x panels]

With the default configuration (2 panels, hexadecimal, group size 1) that is
``│00000000│ 25 cells ┊ 25 cells │8 cells ┊8 cells │`` = 80 cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexpanel.border import BorderElements, BorderStyle

if TYPE_CHECKING:
    from hexpanel.config import PrinterConfig

POSITION_WIDTH = 8
CHAR_PANEL_WIDTH = 8
BYTES_PER_PANEL = 8


@dataclass(frozen=True, slots=True)
class Layout:
    """Immutable geometry of one render session.

    Attributes:
        panels: Number of hex (and character) panels per row
        digits: Characters per formatted byte
        group_size: Bytes printed without a space between them
        show_position: Whether the offset column is drawn
        show_chars: Whether the character panels are drawn
        border: Border style
    """

    panels: int = 2
    digits: int = 2
    group_size: int = 1
    show_position: bool = True
    show_chars: bool = True
    border: BorderStyle = BorderStyle.UNICODE

    @classmethod
    def from_config(cls, config: PrinterConfig) -> Layout:
        return cls(
            panels=config.panels,
            digits=config.base.digits,
            group_size=config.group_size,
            show_position=config.show_position_panel,
            show_chars=config.show_char_panel,
            border=config.border_style,
        )

    @property
    def bytes_per_line(self) -> int:
        """Bytes per display line; also the squeeze window."""
        return self.panels * BYTES_PER_PANEL

    @property
    def groups_per_panel(self) -> int:
        return BYTES_PER_PANEL // self.group_size

    @property
    def group_width(self) -> int:
        return self.digits * self.group_size

    @property
    def panel_width(self) -> int:
        """Width of one hex panel: a leading space, then each group plus one space."""
        return 1 + self.groups_per_panel * (self.group_width + 1)

    def column_widths(self) -> list[int]:
        widths = [POSITION_WIDTH] if self.show_position else []
        widths.extend([self.panel_width] * self.panels)
        if self.show_chars:
            widths.extend([CHAR_PANEL_WIDTH] * self.panels)
        return widths

    @property
    def line_width(self) -> int:
        """Cells per row including the border on both sides."""
        widths = self.column_widths()
        return sum(widths) + len(widths) + 1

    def separator(self, panel: int) -> str:
        """Separator after panel ``panel`` (0-based) of a panel group."""
        if panel == self.panels - 1:
            return self.border.outer_separator
        return self.border.inner_separator

    def border_row(self, elements: BorderElements) -> str:
        """Horizontal border row (no newline) over all columns."""
        segments = (elements.horizontal_line * width for width in self.column_widths())
        return (
            elements.left_corner
            + elements.column_separator.join(segments)
            + elements.right_corner
        )

    def header(self) -> str | None:
        elements = self.border.header_elements()
        return None if elements is None else self.border_row(elements)

    def footer(self) -> str | None:
        elements = self.border.footer_elements()
        return None if elements is None else self.border_row(elements)


def max_panels(
    terminal_width: int,
    *,
    digits: int = 2,
    group_size: int = 1,
    show_position: bool = True,
    show_chars: bool = True,
) -> int:
    """Number of panels that fit into ``terminal_width`` cells (at least 1)."""
    offset = POSITION_WIDTH + 2 if show_position else 1
    column = (BYTES_PER_PANEL // group_size) * (digits * group_size + 1) + 2
    if show_chars:
        column += CHAR_PANEL_WIDTH
    return max(1, (terminal_width - offset) // column)
