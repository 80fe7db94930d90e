"""Color themes.

A theme holds one ``rich`` style per byte category plus styles for the
offset column and the border. Painting wraps a cell in the style's ANSI
sequence and a reset; it never changes the cell's layout width.

Environment overrides (any ``rich`` style definition, e.g. ``"bright_red"``
or ``"bold #ff8800"``)::

    HEXPANEL_COLOR_OFFSET
    HEXPANEL_COLOR_BORDER
    HEXPANEL_COLOR_<CATEGORY>    e.g. HEXPANEL_COLOR_NULL, HEXPANEL_COLOR_INVALID

Invalid values are logged and ignored.

"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Final

from rich.color import ColorParseError, ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from hexpanel.formats.category import Category
from hexpanel.utils.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX: Final = "HEXPANEL_COLOR_"

EMPTY_STYLE: Final = Style.null()


@dataclass(frozen=True, slots=True)
class Theme:
    """Styles for offset, border and every byte category.

    ``categories`` is indexed by ``Category`` value and covers every member.
    """

    offset: Style
    border: Style
    categories: tuple[Style, ...]
    color_system: ColorSystem = ColorSystem.TRUECOLOR

    def __post_init__(self) -> None:
        if len(self.categories) != len(Category):
            raise ValueError(
                f"theme defines {len(self.categories)} category styles, expected {len(Category)}"
            )

    def style_for(self, category: Category) -> Style:
        return self.categories[category]

    def paint(self, text: str, style: Style) -> str:
        """Wrap ``text`` in the ANSI codes of ``style`` followed by a reset."""
        return style.render(text, color_system=self.color_system)

    def paint_category(self, text: str, category: Category) -> str:
        return self.paint(text, self.style_for(category))

    def with_category(self, category: Category, style: Style) -> Theme:
        styles = list(self.categories)
        styles[category] = style
        return replace(self, categories=tuple(styles))

    def from_env(self, environ: Mapping[str, str] | None = None) -> Theme:
        """Copy of this theme with ``HEXPANEL_COLOR_*`` overrides applied."""
        env = os.environ if environ is None else environ
        theme = self
        offset = _env_style(env, "OFFSET")
        if offset is not None:
            theme = replace(theme, offset=offset)
        border = _env_style(env, "BORDER")
        if border is not None:
            theme = replace(theme, border=border)
        for category in Category:
            style = _env_style(env, category.name)
            if style is not None:
                theme = theme.with_category(category, style)
        return theme


def _env_style(environ: Mapping[str, str], name: str) -> Style | None:
    key = ENV_PREFIX + name
    value = environ.get(key)
    if not value:
        return None
    try:
        return Style.parse(value)
    except (StyleSyntaxError, ColorParseError) as e:
        logger.warning("Ignoring %s=%r: %s", key, value, e)
        return None


_RESERVED: Final = Style(color="blue")

# Default color scheme
DEFAULT_THEME: Final = Theme(
    offset=Style(color="color(242)"),
    border=EMPTY_STYLE,
    categories=(
        Style(color="color(242)"),  # null
        Style(color="cyan"),  # printable
        Style(color="green"),  # whitespace
        Style(color="magenta"),  # control
        Style(color="yellow"),  # invalid
        _RESERVED,  # magic number
        _RESERVED,  # padding
        _RESERVED,  # integer
        _RESERVED,  # float
        _RESERVED,  # pointer
        _RESERVED,  # length
    ),
)

# Same layout, no escape sequences
PLAIN_THEME: Final = Theme(
    offset=EMPTY_STYLE,
    border=EMPTY_STYLE,
    categories=(EMPTY_STYLE,) * len(Category),
)
