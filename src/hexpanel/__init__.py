"""
hexpanel: hex dumps with byte-category colors, panels and run squeezing.

Quick Start:
    >>> from hexpanel import render, PrinterConfig
    >>> print(render(b"spam"), end="")
    ┌────────┬─────────────────────────┬─────────────────────────┬────────┬────────┐
    │00000000│ 73 70 61 6d             ┊                         │spam    ┊        │
    └────────┴─────────────────────────┴─────────────────────────┴────────┴────────┘

    >>> # Streaming to a text sink
    >>> import sys
    >>> printer = Printer(sys.stdout, PrinterConfig(panels=1, show_color=True))
    >>> with open("image.bin", "rb") as f:  # doctest: +SKIP
    ...     printer.print_all(f)

Command line:
    hexpanel --panels=auto --skip=-1KiB firmware.bin
"""

from hexpanel.border import BorderElements, BorderStyle
from hexpanel.config import Endianness, PrinterBuilder, PrinterConfig
from hexpanel.errors import (
    ByteOffsetParseError,
    ConfigError,
    HexpanelError,
    InputError,
    NegativeOffsetError,
)
from hexpanel.formats import (
    BUILTIN_ENCODINGS,
    ByteClassifier,
    Category,
    TableEncoding,
    encoding_names,
    get_encoding,
)
from hexpanel.layout import Layout
from hexpanel.lookup import Base
from hexpanel.printer import CancellationFlag, DisplayLine, Printer, render
from hexpanel.squeezer import SqueezeAction, Squeezer, SqueezeState, next_state
from hexpanel.themes import DEFAULT_THEME, PLAIN_THEME, Theme

__version__ = "0.1.0"

__all__ = [
    # Rendering
    "Printer",
    "render",
    "DisplayLine",
    "CancellationFlag",
    "Layout",
    # Configuration
    "PrinterConfig",
    "PrinterBuilder",
    "Endianness",
    "Base",
    "BorderStyle",
    "BorderElements",
    # Classification
    "ByteClassifier",
    "Category",
    "TableEncoding",
    "BUILTIN_ENCODINGS",
    "encoding_names",
    "get_encoding",
    # Squeezing
    "Squeezer",
    "SqueezeState",
    "SqueezeAction",
    "next_state",
    # Themes
    "Theme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    # Errors
    "HexpanelError",
    "ConfigError",
    "InputError",
    "ByteOffsetParseError",
    "NegativeOffsetError",
    # Version
    "__version__",
]
