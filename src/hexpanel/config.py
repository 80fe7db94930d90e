"""Printer configuration.

``PrinterConfig`` is immutable for the lifetime of a render session. It is
validated once at construction so the printer never discovers an invalid
setting mid-stream.

Usage:
    config = PrinterConfig(panels=1, border_style=BorderStyle.ASCII)
    printer = Printer(sys.stdout, config)

    # From plain values (CLI, config files)
    config = PrinterConfig.from_dict({"panels": "4", "base": "oct"})

    # Fluent construction
    config = PrinterBuilder().num_panels(4).with_base("x").build()

Thread Safety:
    Frozen dataclass. Safe to share across threads and printers.

"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from hexpanel.border import BorderStyle
from hexpanel.errors import ConfigError
from hexpanel.formats import get_encoding
from hexpanel.formats.protocol import ByteClassifier
from hexpanel.lookup import Base

VALID_GROUP_SIZES = frozenset({1, 2, 4, 8})


class Endianness(Enum):
    """Byte order inside a group of ``group_size`` bytes."""

    BIG = "big"
    LITTLE = "little"

    @classmethod
    def parse(cls, value: str | Endianness) -> Endianness:
        if isinstance(value, Endianness):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"unknown endianness {value!r} (choose from big, little)") from None


_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _as_bool(field: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ConfigError(field, f"expected a boolean, got {value!r}")


def _as_int(field: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(field, f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            pass
    raise ConfigError(field, f"expected an integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class PrinterConfig:
    """Immutable render configuration.

    Attributes:
        panels: Number of 8-byte panels per line (>= 1)
        show_color: Paint cells with the theme's ANSI styles
        show_char_panel: Draw the character column
        show_position_panel: Draw the offset column
        border_style: unicode, ascii or none
        squeeze_enabled: Elide runs of identical lines
        display_offset: Added to every printed offset (>= 0)
        base: Numeric base of the byte panels
        group_size: Bytes per group, one of 1, 2, 4, 8
        endianness: Byte order within a group
        encoding: Name of the character-panel encoding

    """

    panels: int = 2
    show_color: bool = False
    show_char_panel: bool = True
    show_position_panel: bool = True
    border_style: BorderStyle = BorderStyle.UNICODE
    squeeze_enabled: bool = True
    display_offset: int = 0
    base: Base = Base.HEXADECIMAL
    group_size: int = 1
    endianness: Endianness = Endianness.BIG
    encoding: str = "ascii"

    def __post_init__(self) -> None:
        if isinstance(self.panels, bool) or not isinstance(self.panels, int) or self.panels < 1:
            raise ConfigError("panels", f"must be a positive integer, got {self.panels!r}")
        if self.group_size not in VALID_GROUP_SIZES:
            raise ConfigError(
                "group_size",
                f"possible sizes are 1, 2, 4 or 8, got {self.group_size!r}",
            )
        if (
            isinstance(self.display_offset, bool)
            or not isinstance(self.display_offset, int)
            or self.display_offset < 0
        ):
            raise ConfigError(
                "display_offset", f"must be a non-negative integer, got {self.display_offset!r}"
            )
        if not isinstance(self.border_style, BorderStyle):
            raise ConfigError("border_style", f"expected BorderStyle, got {self.border_style!r}")
        if not isinstance(self.base, Base):
            raise ConfigError("base", f"expected Base, got {self.base!r}")
        if not isinstance(self.endianness, Endianness):
            raise ConfigError("endianness", f"expected Endianness, got {self.endianness!r}")
        # Raises ConfigError for unknown names
        get_encoding(self.encoding)

    @property
    def bytes_per_line(self) -> int:
        """Line-wrap boundary and squeeze window."""
        return self.panels * 8

    @property
    def classifier(self) -> ByteClassifier:
        return get_encoding(self.encoding)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> PrinterConfig:
        """Create PrinterConfig from a dictionary of plain values.

        Strings are accepted for every field (``"4"``, ``"ascii"``, ``"oct"``,
        ``"yes"``); unknown keys are silently ignored.

        Example:
            >>> config = PrinterConfig.from_dict({"panels": "1", "base": 8, "x": 0})
            >>> (config.panels, config.base)
            (1, <Base.OCTAL: 'octal'>)

        Raises:
            ConfigError: If a value cannot be converted or is out of range
        """
        valid_fields = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in config_dict.items():
            if key not in valid_fields:
                continue
            values[key] = _coerce(key, value)
        return cls(**values)

    def with_changes(self, **changes: Any) -> PrinterConfig:
        """Copy with ``changes`` applied (validated again)."""
        return replace(self, **changes)


def _coerce(key: str, value: Any) -> Any:
    try:
        if key in ("panels", "group_size", "display_offset"):
            return _as_int(key, value)
        if key in ("show_color", "show_char_panel", "show_position_panel", "squeeze_enabled"):
            return _as_bool(key, value)
        if key == "border_style":
            return BorderStyle.parse(value)
        if key == "base":
            return Base.parse(value)
        if key == "endianness":
            return Endianness.parse(value)
        if key == "encoding":
            return str(value)
    except (ValueError, AttributeError) as e:
        raise ConfigError(key, str(e)) from e
    return value


class PrinterBuilder:
    """Fluent construction of a PrinterConfig.

    Usage:
        >>> config = PrinterBuilder().num_panels(1).show_color(False).build()
        >>> config.panels
        1

    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def show_color(self, show_color: bool) -> PrinterBuilder:
        self._values["show_color"] = show_color
        return self

    def show_char_panel(self, show_char_panel: bool) -> PrinterBuilder:
        self._values["show_char_panel"] = show_char_panel
        return self

    def show_position_panel(self, show_position_panel: bool) -> PrinterBuilder:
        self._values["show_position_panel"] = show_position_panel
        return self

    def with_border_style(self, border_style: BorderStyle | str) -> PrinterBuilder:
        self._values["border_style"] = border_style
        return self

    def enable_squeezing(self, enable: bool) -> PrinterBuilder:
        self._values["squeeze_enabled"] = enable
        return self

    def num_panels(self, num: int) -> PrinterBuilder:
        self._values["panels"] = num
        return self

    def group_size(self, num: int) -> PrinterBuilder:
        self._values["group_size"] = num
        return self

    def with_base(self, base: Base | str | int) -> PrinterBuilder:
        self._values["base"] = base
        return self

    def endianness(self, endianness: Endianness | str) -> PrinterBuilder:
        self._values["endianness"] = endianness
        return self

    def display_offset(self, offset: int) -> PrinterBuilder:
        self._values["display_offset"] = offset
        return self

    def character_table(self, encoding: str) -> PrinterBuilder:
        self._values["encoding"] = encoding
        return self

    def build(self) -> PrinterConfig:
        """Validate and freeze the collected settings.

        Raises:
            ConfigError: If any setting is invalid
        """
        return PrinterConfig.from_dict(self._values)
