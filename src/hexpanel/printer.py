"""Hex-dump layout engine.

Turns a byte stream into rows of the form::

    ┌────────┬─────────────────────────┬─────────────────────────┬────────┬────────┐
    │00000000│ 73 70 61 6d             ┊                         │spam    ┊        │
    └────────┴─────────────────────────┴─────────────────────────┴────────┴────────┘

Bytes are collected into a DisplayLine of ``panels * 8`` bytes. When a line
is complete (or the stream ends with a partial one) the Squeezer decides
whether it is printed, replaced by a ``*`` marker row or dropped.

Usage:
    >>> from hexpanel import render
    >>> print(render(b"spam"), end="")  # doctest: +SKIP

    # Streaming
    printer = Printer(sys.stdout, PrinterConfig(panels=1))
    with open("firmware.bin", "rb") as f:
        printer.print_all(f, cancel=stop_event)

    # Incremental
    printer.feed(b"...")
    printer.feed(b"...")
    printer.finish()

Thread Safety:
    A Printer owns mutable session state and must be used from one thread.
    The only cross-thread interaction is the cancellation flag, which is
    polled after every completed line and every chunk.

"""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import BinaryIO, Protocol, TextIO, runtime_checkable

from rich.style import Style

from hexpanel.config import Endianness, PrinterConfig
from hexpanel.formats.category import Category
from hexpanel.layout import BYTES_PER_PANEL, CHAR_PANEL_WIDTH, POSITION_WIDTH, Layout
from hexpanel.squeezer import SqueezeAction, Squeezer
from hexpanel.stringbuilder import StringBuilder
from hexpanel.themes import DEFAULT_THEME, Theme
from hexpanel.utils.logger import get_logger

logger = get_logger(__name__)

BUFFER_SIZE = 4096

NO_CONTENT = "No content to print"
NO_CONTENT_SHORT = "No content"

ByteSource = BinaryIO | bytes | bytearray | memoryview | Iterable[bytes]


@runtime_checkable
class CancellationFlag(Protocol):
    """Externally owned stop signal, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


@dataclass(slots=True)
class DisplayLine:
    """Bytes of the line being accumulated.

    Attributes:
        start_index: Absolute 1-based stream index of the first byte
        data: Raw bytes since the last line boundary
    """

    start_index: int = 1
    data: bytearray = field(default_factory=bytearray)

    def __len__(self) -> int:
        return len(self.data)

    def clear(self) -> None:
        self.data.clear()


class Printer:
    """Renders bytes into a bordered hex-dump table on a text sink.

    Args:
        writer: Text sink. Write errors (``BrokenPipeError`` and other
            ``OSError``) propagate to the caller unchanged.
        config: Render configuration (defaults to ``PrinterConfig()``)
        theme: Color theme used when ``config.show_color`` is set
    """

    def __init__(
        self,
        writer: TextIO,
        config: PrinterConfig | None = None,
        theme: Theme | None = None,
    ) -> None:
        self._writer = writer
        self._config = config if config is not None else PrinterConfig()
        self._theme = (theme or DEFAULT_THEME) if self._config.show_color else None
        self._layout = Layout.from_config(self._config)
        self._classifier = self._config.classifier
        self._digits = self._config.base.table
        self._little_endian = self._config.endianness is Endianness.LITTLE
        self._cancel: CancellationFlag | None = None
        self._cancelled = False
        self._reset()

    def _reset(self) -> None:
        self._index = 1
        self._line = DisplayLine()
        self._squeezer = Squeezer(self._config.squeeze_enabled, self._layout.bytes_per_line)
        self._header_was_printed = False
        self._elided = False

    @property
    def config(self) -> PrinterConfig:
        return self._config

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def header_was_printed(self) -> bool:
        return self._header_was_printed

    @property
    def cancelled(self) -> bool:
        """Whether the last ``print_all`` stopped on the cancellation flag."""
        return self._cancelled

    @property
    def bytes_processed(self) -> int:
        """Bytes consumed in the current session."""
        return self._index - 1

    # =========================================================================
    # Session API
    # =========================================================================

    def print_all(self, source: ByteSource, cancel: CancellationFlag | None = None) -> None:
        """Render a whole byte source as one session.

        Args:
            source: Binary file object (read in ``BUFFER_SIZE`` chunks),
                bytes-like object, or iterable of byte chunks
            cancel: Polled after every line and chunk; when set, rendering
                stops without writing the footer and ``cancelled`` is True
        """
        self._reset()
        self._cancel = cancel
        self._cancelled = False
        logger.debug(
            "Rendering session started (panels=%d, base=%s, encoding=%s)",
            self._config.panels,
            self._config.base.value,
            self._classifier.name,
        )
        try:
            for chunk in _iter_chunks(source):
                self.feed(chunk)
                if self._cancelled or self._cancel_requested():
                    logger.info("Rendering cancelled after %d bytes", self.bytes_processed)
                    self._reset()
                    return
            self.finish()
        finally:
            self._cancel = None

    def feed(self, data: bytes | bytearray | memoryview) -> None:
        """Render ``data`` as the next part of the stream.

        Complete lines are written immediately; a trailing partial line is
        kept until more data arrives or ``finish`` is called.
        """
        line = self._line
        squeezer = self._squeezer
        line_size = self._layout.bytes_per_line
        for byte in data:
            if not line.data:
                if not self._header_was_printed:
                    self._write_header()
                line.start_index = self._index
            line.data.append(byte)
            squeezer.process(byte, self._index)
            self._index += 1
            if len(line.data) == line_size:
                self._flush_line()
                if self._cancel_requested():
                    return

    def finish(self) -> None:
        """Flush the last line, write the footer and end the session."""
        if self._line.data:
            self._flush_line()
        elif self._squeezer.active() and self._elided and self._layout.show_position:
            self._write(self._end_offset_row())

        if not self._header_was_printed:
            self._write_header()
            self._write(self._no_content_row())
        footer = self._layout.footer()
        if footer is not None:
            self._write(self._paint_border(footer) + "\n")
        logger.debug("Rendering session finished (%d bytes)", self.bytes_processed)
        self._reset()

    # =========================================================================
    # Line handling
    # =========================================================================

    def _cancel_requested(self) -> bool:
        # Only the flag of a running print_all counts; plain feed() never stops
        if self._cancel is not None and self._cancel.is_set():
            self._cancelled = True
            return True
        return False

    def _flush_line(self) -> None:
        action = self._squeezer.action()
        if action is SqueezeAction.IGNORE:
            self._write(self._body_row(self._line))
            self._elided = False
        elif action is SqueezeAction.PRINT:
            self._write(self._marker_row())
            self._elided = True
        self._squeezer.advance()
        self._line.clear()

    def _write(self, text: str) -> None:
        self._writer.write(text)

    def _write_header(self) -> None:
        self._header_was_printed = True
        header = self._layout.header()
        if header is not None:
            self._write(self._paint_border(header) + "\n")

    # =========================================================================
    # Row formatting
    # =========================================================================

    def _body_row(self, line: DisplayLine) -> str:
        layout = self._layout
        sb = StringBuilder()
        self._append_position(sb, f"{line.start_index - 1 + self._config.display_offset:08x}")

        data = line.data
        for panel in range(layout.panels):
            sb.append(" ")
            base = panel * BYTES_PER_PANEL
            for group in range(layout.groups_per_panel):
                self._append_group(sb, data, base + group * layout.group_size)
                sb.append(" ")
            sb.append(self._paint_border(layout.separator(panel)))

        if layout.show_chars:
            for panel in range(layout.panels):
                chunk = data[panel * BYTES_PER_PANEL : (panel + 1) * BYTES_PER_PANEL]
                for byte in chunk:
                    category, glyph = self._classifier.classify(byte)
                    sb.append(self._paint_category(glyph, category))
                sb.pad(CHAR_PANEL_WIDTH - len(chunk))
                sb.append(self._paint_border(layout.separator(panel)))
        return sb.append("\n").build()

    def _append_group(self, sb: StringBuilder, data: bytearray, start: int) -> None:
        size = self._layout.group_size
        digits = self._layout.digits
        for cell in range(size):
            index = start + (size - 1 - cell if self._little_endian else cell)
            if index < len(data):
                byte = data[index]
                category, _ = self._classifier.classify(byte)
                sb.append(self._paint_category(self._digits[byte], category))
            else:
                sb.pad(digits)

    def _append_position(self, sb: StringBuilder, text: str) -> None:
        outer = self._paint_border(self._layout.border.outer_separator)
        sb.append(outer)
        if self._layout.show_position:
            sb.append(self._paint(text, "offset")).append(outer)

    def _append_blank_panels(self, sb: StringBuilder, marker: bool = False) -> None:
        """Blank hex and char panels, optionally with ``*`` in the first digit cell."""
        layout = self._layout
        for panel in range(layout.panels):
            if marker and panel == 0:
                sb.append(" ").append(self._paint("*", "offset")).pad(layout.panel_width - 2)
            else:
                sb.pad(layout.panel_width)
            sb.append(self._paint_border(layout.separator(panel)))
        if layout.show_chars:
            for panel in range(layout.panels):
                sb.pad(CHAR_PANEL_WIDTH)
                sb.append(self._paint_border(layout.separator(panel)))

    def _marker_row(self) -> str:
        """Row replacing the first repeated line of a squeezed run."""
        sb = StringBuilder()
        outer = self._paint_border(self._layout.border.outer_separator)
        sb.append(outer)
        if self._layout.show_position:
            sb.append(self._paint("*", "offset")).pad(7).append(outer)
            self._append_blank_panels(sb)
        else:
            self._append_blank_panels(sb, marker=True)
        return sb.append("\n").build()

    def _end_offset_row(self) -> str:
        sb = StringBuilder()
        self._append_position(sb, f"{self._index - 1 + self._config.display_offset:08x}")
        self._append_blank_panels(sb)
        return sb.append("\n").build()

    def _no_content_row(self) -> str:
        """The row written for empty input. Every separator is the outer one."""
        layout = self._layout
        outer = self._paint_border(layout.border.outer_separator)
        text = NO_CONTENT if layout.panel_width > len(NO_CONTENT) else NO_CONTENT_SHORT
        sb = StringBuilder().append(outer)
        if layout.show_position:
            sb.pad(POSITION_WIDTH).append(outer)
        for panel in range(layout.panels):
            cell = " " + text if panel == 0 else ""
            sb.append(cell).pad(layout.panel_width - len(cell)).append(outer)
        if layout.show_chars:
            for _ in range(layout.panels):
                sb.pad(CHAR_PANEL_WIDTH).append(outer)
        return sb.append("\n").build()

    # =========================================================================
    # Painting
    # =========================================================================

    def _paint(self, text: str, role: str) -> str:
        if self._theme is None:
            return text
        style: Style = getattr(self._theme, role)
        return self._theme.paint(text, style)

    def _paint_border(self, text: str) -> str:
        if self._theme is None:
            return text
        return self._theme.paint(text, self._theme.border)

    def _paint_category(self, text: str, category: Category) -> str:
        if self._theme is None:
            return text
        return self._theme.paint_category(text, category)


def _iter_chunks(source: ByteSource) -> Iterator[bytes | memoryview]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        view = memoryview(source).cast("B")
        for start in range(0, len(view), BUFFER_SIZE):
            yield view[start : start + BUFFER_SIZE]
        return
    read = getattr(source, "read", None)
    if read is not None:
        while True:
            chunk = read(BUFFER_SIZE)
            if not chunk:
                return
            yield chunk
        return
    for chunk in source:
        if chunk:
            yield chunk


def render(
    data: ByteSource,
    config: PrinterConfig | None = None,
    theme: Theme | None = None,
) -> str:
    """Render ``data`` into a string in one session.

    Example:
        >>> text = render(b"", PrinterConfig(panels=1))
        >>> "No content to print" in text
        True
    """
    out = io.StringIO()
    Printer(out, config, theme).print_all(data)
    return out.getvalue()
