"""Tests for the hex-dump layout engine."""

import io
import re
import threading

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hexpanel import (
    Base,
    BorderStyle,
    Endianness,
    Printer,
    PrinterConfig,
    render,
)
from hexpanel.printer import BUFFER_SIZE, DisplayLine
from hexpanel.themes import PLAIN_THEME

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

HEADER_2 = "┌────────┬─────────────────────────┬─────────────────────────┬────────┬────────┐\n"
FOOTER_2 = "└────────┴─────────────────────────┴─────────────────────────┴────────┴────────┘\n"
HEADER_1 = "┌────────┬─────────────────────────┬────────┐\n"
FOOTER_1 = "└────────┴─────────────────────────┴────────┘\n"


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


class TestExactOutput:
    """Byte-for-byte rendering of reference inputs."""

    def test_empty_input(self) -> None:
        assert render(b"") == (
            HEADER_2
            + "│        │ No content to print     │                         │        │        │\n"
            + FOOTER_2
        )

    def test_short_input(self) -> None:
        assert render(b"spam") == (
            HEADER_2
            + "│00000000│ 73 70 61 6d             ┊                         │spam    ┊        │\n"
            + FOOTER_2
        )

    def test_display_offset(self) -> None:
        config = PrinterConfig(display_offset=0xDEADBEEF)
        assert render(b"spam", config) == (
            HEADER_2
            + "│deadbeef│ 73 70 61 6d             ┊                         │spam    ┊        │\n"
            + FOOTER_2
        )

    def test_two_lines(self) -> None:
        data = bytes(range(0x41, 0x41 + 20))
        assert render(data) == (
            HEADER_2
            + "│00000000│ 41 42 43 44 45 46 47 48 ┊ 49 4a 4b 4c 4d 4e 4f 50 │ABCDEFGH┊IJKLMNOP│\n"
            + "│00000010│ 51 52 53 54"
            + " " * 13
            + "┊"
            + " " * 25
            + "│QRST    ┊        │\n"
            + FOOTER_2
        )

    def test_ascii_border(self) -> None:
        border = "+--------+-------------------------+-------------------------+--------+--------+\n"
        assert render(b"Hello, World!\n", PrinterConfig(border_style=BorderStyle.ASCII)) == (
            border
            + "|00000000| 48 65 6c 6c 6f 2c 20 57 | 6f 72 6c 64 21 0a       |Hello, W|orld!_  |\n"
            + border
        )

    def test_no_border(self) -> None:
        config = PrinterConfig(panels=1, border_style=BorderStyle.NONE)
        assert render(b"ab", config) == " 00000000  61 62" + " " * 19 + " ab       \n"

    def test_empty_input_single_panel(self) -> None:
        assert render(b"", PrinterConfig(panels=1)) == (
            HEADER_1 + "│        │ No content to print     │        │\n" + FOOTER_1
        )

    def test_empty_input_narrow_panel(self) -> None:
        config = PrinterConfig(panels=1, group_size=8, show_char_panel=False)
        # panel width 18 cannot hold the full message
        assert render(b"", config) == (
            "┌────────┬──────────────────┐\n"
            "│        │ No content       │\n"
            "└────────┴──────────────────┘\n"
        )

    def test_all_categories_in_char_panel(self) -> None:
        config = PrinterConfig(panels=1)
        assert render(b"\x00\t \x07A\xff", config) == (
            HEADER_1 + "│00000000│ 00 09 20 07 41 ff       │⋄_ •A×  │\n" + FOOTER_1
        )


class TestSqueezing:
    """Elision of repeated lines."""

    def test_zero_run_single_panel(self) -> None:
        config = PrinterConfig(panels=1)
        assert render(bytes(48), config) == (
            HEADER_1
            + "│00000000│ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄│\n"
            + "│*       │                         │        │\n"
            + "│00000030│                         │        │\n"
            + FOOTER_1
        )

    def test_zero_run_two_panels(self) -> None:
        assert render(bytes(64)) == (
            HEADER_2
            + "│00000000│ 00 00 00 00 00 00 00 00 ┊ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄┊⋄⋄⋄⋄⋄⋄⋄⋄│\n"
            + "│*       │                         ┊                         │        ┊        │\n"
            + "│00000040│                         ┊                         │        ┊        │\n"
            + FOOTER_2
        )

    def test_single_uniform_line_has_no_end_row(self) -> None:
        config = PrinterConfig(panels=1)
        assert render(bytes(8), config) == (
            HEADER_1 + "│00000000│ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄│\n" + FOOTER_1
        )

    def test_partial_line_after_run_is_printed(self) -> None:
        config = PrinterConfig(panels=1)
        assert render(bytes(27), config) == (
            HEADER_1
            + "│00000000│ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄│\n"
            + "│*       │                         │        │\n"
            + "│00000018│ 00 00 00                │⋄⋄⋄     │\n"
            + FOOTER_1
        )

    def test_run_followed_by_data(self) -> None:
        config = PrinterConfig(panels=1)
        output = render(bytes(32) + b"ABCDEFGH", config)
        assert output == (
            HEADER_1
            + "│00000000│ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄│\n"
            + "│*       │                         │        │\n"
            + "│00000020│ 41 42 43 44 45 46 47 48 │ABCDEFGH│\n"
            + FOOTER_1
        )

    def test_squeezing_disabled(self) -> None:
        config = PrinterConfig(panels=1, squeeze_enabled=False)
        lines = render(bytes(48), config).splitlines()
        assert len(lines) == 8
        assert "*" not in "".join(lines)

    def test_window_follows_panel_count(self) -> None:
        """Two identical 8-byte lines are squeezed with 1 panel but form one line with 2."""
        assert "*" in render(bytes(16), PrinterConfig(panels=1))
        assert "*" not in render(bytes(16), PrinterConfig(panels=2))

    def test_marker_without_position_panel(self) -> None:
        config = PrinterConfig(panels=1, show_position_panel=False)
        assert render(bytes(24), config) == (
            "┌─────────────────────────┬────────┐\n"
            "│ 00 00 00 00 00 00 00 00 │⋄⋄⋄⋄⋄⋄⋄⋄│\n"
            "│ *                       │        │\n"
            "└─────────────────────────┴────────┘\n"
        )


class TestPanelOptions:
    """Base, grouping, endianness and panel toggles."""

    def test_no_char_panel(self) -> None:
        config = PrinterConfig(panels=1, show_char_panel=False)
        assert render(b"spam", config) == (
            "┌────────┬─────────────────────────┐\n"
            "│00000000│ 73 70 61 6d             │\n"
            "└────────┴─────────────────────────┘\n"
        )

    def test_no_position_panel(self) -> None:
        config = PrinterConfig(panels=1, show_position_panel=False)
        assert render(b"spam", config) == (
            "┌─────────────────────────┬────────┐\n"
            "│ 73 70 61 6d             │spam    │\n"
            "└─────────────────────────┴────────┘\n"
        )

    def test_group_size_big_endian(self) -> None:
        config = PrinterConfig(panels=1, group_size=2, show_char_panel=False)
        body = " 0102 0304" + " " * 11
        assert render(b"\x01\x02\x03\x04", config) == (
            "┌────────┬─────────────────────┐\n"
            f"│00000000│{body}│\n"
            "└────────┴─────────────────────┘\n"
        )

    def test_group_size_little_endian(self) -> None:
        config = PrinterConfig(
            panels=1, group_size=2, show_char_panel=False, endianness=Endianness.LITTLE
        )
        output = render(b"\x01\x02\x03\x04", config)
        assert output.splitlines()[1] == "│00000000│ 0201 0403" + " " * 11 + "│"

    def test_little_endian_partial_group(self) -> None:
        config = PrinterConfig(
            panels=1, group_size=2, show_char_panel=False, endianness=Endianness.LITTLE
        )
        output = render(b"\x01\x02\x03", config)
        assert output.splitlines()[1] == "│00000000│ 0201   03" + " " * 11 + "│"

    def test_endianness_does_not_reorder_characters(self) -> None:
        config = PrinterConfig(panels=1, group_size=4, endianness=Endianness.LITTLE)
        row = render(b"abcd", config).splitlines()[1]
        assert "64636261" in row
        assert row.endswith("│abcd    │")

    def test_octal(self) -> None:
        config = PrinterConfig(panels=1, base=Base.OCTAL)
        row = render(b"\x08", config).splitlines()[1]
        assert row == "│00000000│ 010" + " " * 29 + "│•       │"

    def test_decimal(self) -> None:
        config = PrinterConfig(panels=1, base=Base.DECIMAL, show_char_panel=False)
        row = render(b"\xff\x01", config).splitlines()[1]
        assert row == "│00000000│ 255 001" + " " * 25 + "│"

    def test_binary(self) -> None:
        config = PrinterConfig(panels=1, base=Base.BINARY, show_char_panel=False)
        row = render(b"\x05", config).splitlines()[1]
        assert row == "│00000000│ 00000101" + " " * 64 + "│"

    def test_offset_stays_hexadecimal(self) -> None:
        config = PrinterConfig(panels=1, base=Base.DECIMAL, squeeze_enabled=False)
        rows = render(bytes(range(32)), config).splitlines()
        assert rows[3].startswith("│00000010│")

    def test_wide_offset(self) -> None:
        config = PrinterConfig(panels=1, display_offset=0x1_0000_0000)
        assert render(b"x", config).splitlines()[1].startswith("│100000000│")

    def test_encoding_selection(self) -> None:
        config = PrinterConfig(panels=1, encoding="ebcdic")
        assert render(b"\xc8\x85\x93\x93\x96", config).splitlines()[1].endswith("│Hello   │")


class TestColor:
    """ANSI styling never changes the layout."""

    def test_cells_are_painted(self) -> None:
        config = PrinterConfig(panels=1, show_color=True)
        row = render(b"A\x00", config).splitlines()[1]
        assert row == (
            "│\x1b[38;5;242m00000000\x1b[0m│"
            " \x1b[36m41\x1b[0m \x1b[38;5;242m00\x1b[0m " + " " * 18 + "│"
            "\x1b[36mA\x1b[0m\x1b[38;5;242m⋄\x1b[0m" + " " * 6 + "│"
        )

    def test_color_disabled_has_no_escapes(self) -> None:
        assert "\x1b" not in render(bytes(range(256)))

    def test_stripped_color_output_matches_plain(self) -> None:
        data = bytes(range(256)) + bytes(64) + b"tail"
        plain = render(data, PrinterConfig(panels=2))
        colored = render(data, PrinterConfig(panels=2, show_color=True))
        assert strip_ansi(colored) == plain

    def test_plain_theme(self) -> None:
        config = PrinterConfig(show_color=True)
        assert render(b"spam", config, PLAIN_THEME) == render(b"spam")


def _column_positions(row: str, chars: str) -> list[int]:
    return [i for i, c in enumerate(row) if c in chars]


class TestAlignment:
    """Header, body and footer agree on every column boundary."""

    @pytest.mark.parametrize("panels", [1, 2, 4])
    @pytest.mark.parametrize("border", list(BorderStyle))
    @pytest.mark.parametrize("kind", ["zeros", "ramp"])
    def test_rows_have_equal_width(self, panels: int, border: BorderStyle, kind: str) -> None:
        p8 = panels * 8
        for length in (0, 1, p8 - 1, p8, p8 + 1, 10 * p8):
            data = bytes(length) if kind == "zeros" else bytes(i % 256 for i in range(length))
            config = PrinterConfig(panels=panels, border_style=border, show_color=True)
            printer_width = Printer(io.StringIO(), config).layout.line_width
            rows = strip_ansi(render(data, config)).splitlines()
            assert rows
            for row in rows:
                assert len(row) == printer_width, (length, row)

    @pytest.mark.parametrize("panels", [1, 2, 4])
    @pytest.mark.parametrize("length", [0, 1, 7, 8, 9, 80])
    def test_unicode_separators_line_up(self, panels: int, length: int) -> None:
        rows = render(bytes(i % 256 for i in range(length * panels)), PrinterConfig(panels=panels))
        lines = rows.splitlines()
        header = _column_positions(lines[0], "┌┬┐")
        footer = _column_positions(lines[-1], "└┴┘")
        assert header == footer
        for row in lines[1:-1]:
            assert _column_positions(row, "│┊") == header

    @given(
        st.binary(max_size=300),
        st.sampled_from([1, 2, 3, 4]),
        st.sampled_from([1, 2, 4, 8]),
        st.sampled_from(list(Base)),
        st.booleans(),
        st.booleans(),
    )
    @settings(max_examples=150, deadline=None)
    def test_width_is_constant(
        self,
        data: bytes,
        panels: int,
        group_size: int,
        base: Base,
        show_position: bool,
        show_chars: bool,
    ) -> None:
        config = PrinterConfig(
            panels=panels,
            group_size=group_size,
            base=base,
            show_position_panel=show_position,
            show_char_panel=show_chars,
            show_color=True,
        )
        width = Printer(io.StringIO(), config).layout.line_width
        for row in strip_ansi(render(data, config)).splitlines():
            assert len(row) == width


class CountdownFlag:
    """Cancellation flag that trips after a number of polls."""

    def __init__(self, polls: int) -> None:
        self.polls = polls

    def is_set(self) -> bool:
        self.polls -= 1
        return self.polls < 0


class FailingWriter(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError("closed")


class TestSession:
    """Session lifecycle, sources and cancellation."""

    def test_print_all_is_idempotent(self) -> None:
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        data = bytes(40) + b"abc"
        printer.print_all(data)
        first = out.getvalue()
        printer.print_all(data)
        assert out.getvalue() == first * 2

    @pytest.mark.parametrize(
        "source",
        [
            io.BytesIO(b"hello world, this is a test"),
            bytearray(b"hello world, this is a test"),
            memoryview(b"hello world, this is a test"),
            [b"hello ", b"", b"world, this", b" is a test"],
        ],
        ids=["file", "bytearray", "memoryview", "chunks"],
    )
    def test_sources(self, source: object) -> None:
        out = io.StringIO()
        Printer(out).print_all(source)  # type: ignore[arg-type]
        assert out.getvalue() == render(b"hello world, this is a test")

    def test_large_file_is_read_in_chunks(self) -> None:
        data = bytes(i % 251 for i in range(3 * BUFFER_SIZE + 5))
        out = io.StringIO()
        Printer(out).print_all(io.BytesIO(data))
        assert out.getvalue() == render(data)

    def test_incremental_feed(self) -> None:
        data = bytes(range(100)) + bytes(50)
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        for start in range(0, len(data), 7):
            printer.feed(data[start : start + 7])
        printer.finish()
        assert out.getvalue() == render(data, PrinterConfig(panels=1))

    def test_header_written_on_first_byte(self) -> None:
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        printer.feed(b"a")
        assert printer.header_was_printed
        assert out.getvalue() == HEADER_1
        assert printer.bytes_processed == 1

    def test_cancel_before_start(self) -> None:
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        stop = threading.Event()
        stop.set()
        printer.print_all(bytes(range(64)), cancel=stop)
        assert printer.cancelled
        lines = out.getvalue().splitlines()
        # Header and the first completed line, no footer
        assert len(lines) == 2
        assert lines[1].startswith("│00000000│")

    def test_cancel_mid_stream(self) -> None:
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        printer.print_all(bytes(range(200)), cancel=CountdownFlag(3))
        assert printer.cancelled
        lines = out.getvalue().splitlines()
        assert len(lines) == 1 + 4
        assert not lines[-1].startswith("└")

    def test_not_cancelled(self) -> None:
        printer = Printer(io.StringIO())
        printer.print_all(b"abc", cancel=threading.Event())
        assert not printer.cancelled

    def test_sink_failure_propagates(self) -> None:
        printer = Printer(FailingWriter())
        with pytest.raises(BrokenPipeError):
            printer.print_all(b"data")

    def test_feed_after_cancelled_session(self) -> None:
        """A cancelled print_all leaves no state behind for the next session."""
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        stop = threading.Event()
        stop.set()
        printer.print_all(bytes(range(64)), cancel=stop)
        assert printer.bytes_processed == 0

        out.seek(0)
        out.truncate()
        data = bytes(range(100, 124))
        printer.feed(data)
        printer.finish()
        assert out.getvalue() == render(data, PrinterConfig(panels=1))

    def test_print_all_after_cancelled_session(self) -> None:
        out = io.StringIO()
        printer = Printer(out, PrinterConfig(panels=1))
        printer.print_all(bytes(range(64)), cancel=CountdownFlag(1))
        assert printer.cancelled

        out.seek(0)
        out.truncate()
        printer.print_all(bytes(range(64)))
        assert not printer.cancelled
        assert out.getvalue() == render(bytes(range(64)), PrinterConfig(panels=1))

    def test_display_line(self) -> None:
        line = DisplayLine(start_index=17)
        line.data.extend(b"abc")
        assert len(line) == 3
        line.clear()
        assert len(line) == 0
        assert line.start_index == 17
