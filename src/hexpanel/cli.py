"""Command-line hex viewer.

Reads FILE (or stdin) and writes a colored, bordered hex dump to stdout.
Exit status is 0 on success and on a closed output pipe, 1 on errors and
130 when interrupted.
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import shutil
import signal
import sys
import threading
from collections.abc import Callable, Mapping
from typing import Sequence, TextIO, TypeVar

from rich.console import Console

from hexpanel import __version__
from hexpanel.border import BorderStyle
from hexpanel.config import VALID_GROUP_SIZES, Endianness, PrinterConfig
from hexpanel.errors import ConfigError, HexpanelError
from hexpanel.formats import encoding_names
from hexpanel.input import LimitedReader, open_input, skip
from hexpanel.layout import max_panels
from hexpanel.lookup import Base
from hexpanel.printer import CancellationFlag, Printer
from hexpanel.themes import DEFAULT_THEME
from hexpanel.units import (
    DEFAULT_BLOCK_SIZE,
    parse_block_size,
    parse_byte_count,
    parse_byte_offset,
)
from hexpanel.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

DEFAULT_TERMINAL_WIDTH = 80

T = TypeVar("T")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{value!r} is not an unsigned nonzero integer") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} is not an unsigned nonzero integer")
    return number


def _panels(value: str) -> int | str:
    if value == "auto":
        return value
    return _positive_int(value)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the ``hexpanel`` command."""

    parser = argparse.ArgumentParser(
        prog="hexpanel",
        description="A command-line hex viewer with colored byte categories.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="The file to display. If no FILE argument is given, read from STDIN.",
    )
    length_group = parser.add_mutually_exclusive_group()
    length_group.add_argument(
        "-n",
        "--length",
        metavar="N",
        help=(
            "Only read N bytes from the input. N can include a unit with a decimal "
            "prefix (kB, MB, ..) or binary prefix (kiB, MiB, ..), or be a hex number. "
            "Examples: --length=64, --length=4KiB, --length=0xff"
        ),
    )
    length_group.add_argument("-c", "--bytes", metavar="N", help="An alias for -n/--length")
    length_group.add_argument("-l", dest="count", metavar="N", help=argparse.SUPPRESS)
    parser.add_argument(
        "-s",
        "--skip",
        metavar="N",
        help=(
            "Skip the first N bytes of the input (units as for --length). "
            "A negative value seeks from the end of the file."
        ),
    )
    parser.add_argument(
        "--block-size",
        metavar="SIZE",
        help=(
            f"Sets the size of the 'block' unit to SIZE (default is {DEFAULT_BLOCK_SIZE}). "
            "Examples: --block-size=1024, --block-size=4kB"
        ),
    )
    parser.add_argument(
        "-v",
        "--no-squeezing",
        dest="squeeze",
        action="store_false",
        help=(
            "Displays all input data. Otherwise runs of identical lines are replaced "
            "with a line comprised of a single asterisk."
        ),
    )
    parser.add_argument(
        "--color",
        choices=("always", "auto", "never", "force"),
        default=None,
        metavar="WHEN",
        help=(
            "When to use colors: always (default), auto, never or force. 'auto' only "
            "uses colors on an interactive terminal; 'force' overrides NO_COLOR."
        ),
    )
    parser.add_argument(
        "--border",
        choices=[style.value for style in BorderStyle],
        default=None,
        metavar="STYLE",
        help="Draw the border with unicode (default) or ascii characters, or none at all",
    )
    parser.add_argument(
        "-p",
        "--plain",
        action="store_true",
        help="Display output with --no-characters, --no-position, --border=none and --color=never.",
    )
    parser.add_argument(
        "--no-characters",
        dest="show_chars",
        action="store_false",
        help="Do not show the character panel on the right.",
    )
    parser.add_argument(
        "-C",
        "--characters",
        dest="show_chars",
        action="store_true",
        help="Show the character panel on the right (the default).",
    )
    parser.add_argument(
        "--character-table",
        choices=("default", *encoding_names()),
        default="ascii",
        metavar="FORMAT",
        help=(
            "How bytes map to characters: ascii (default) shows printable ASCII as-is, "
            "'⋄' for NULL, '_' for whitespace, '•' for control and '×' for non-ASCII "
            "bytes; dotted uses '.' for everything non-printable; codepage-437 and "
            "ebcdic decode with those code pages."
        ),
    )
    parser.add_argument(
        "-P",
        "--no-position",
        dest="show_position",
        action="store_false",
        help="Do not display the position panel on the left.",
    )
    parser.add_argument(
        "-o",
        "--display-offset",
        metavar="N",
        help="Add N bytes to the displayed file position (units as for --length).",
    )
    width_group = parser.add_mutually_exclusive_group()
    width_group.add_argument(
        "--panels",
        type=_panels,
        metavar="N",
        help=(
            "Number of hex data panels. 'auto' fills the terminal width. By default "
            "two panels are shown, unless the terminal is not wide enough."
        ),
    )
    width_group.add_argument(
        "--terminal-width",
        type=_positive_int,
        metavar="N",
        help="Use as many panels as fit into N terminal columns.",
    )
    parser.add_argument(
        "-g",
        "--group-size",
        "--groupsize",
        dest="group_size",
        type=int,
        default=1,
        metavar="N",
        help="Number of bytes grouped together: 1 (default), 2, 4 or 8.",
    )
    parser.add_argument(
        "--endianness",
        choices=[order.value for order in Endianness],
        default=Endianness.BIG.value,
        metavar="FORMAT",
        help="Byte order within a group: big (default) or little.",
    )
    parser.add_argument(
        "-e",
        dest="little_endian",
        action="store_true",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-b",
        "--base",
        default="hexadecimal",
        metavar="B",
        help="Base of the byte values: binary, octal, decimal or hexadecimal (default).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(show_chars=True, show_position=True)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed arguments for the hex viewer."""

    return build_parser().parse_args(argv)


def resolve_show_color(
    choice: str | None,
    *,
    plain: bool = False,
    environ: Mapping[str, str] | None = None,
    is_terminal: Callable[[], bool] | None = None,
) -> bool:
    """Decide whether to paint output for a ``--color`` choice."""
    env = os.environ if environ is None else environ
    if choice is None:
        choice = "never" if plain else "always"
    no_color = "NO_COLOR" in env
    if choice == "never":
        return False
    if choice == "force":
        return True
    if choice == "always":
        return not no_color
    if no_color:
        return False
    if is_terminal is None:
        return Console().is_terminal
    return is_terminal()


def resolve_panels(
    requested: int | str | None,
    *,
    terminal_width: int | None,
    digits: int,
    group_size: int,
    show_position: bool,
    show_chars: bool,
    detected_width: Callable[[], int] | None = None,
) -> int:
    """Panels to display for the ``--panels`` / ``--terminal-width`` options."""
    if isinstance(requested, int):
        return requested

    def fit(width: int) -> int:
        return max_panels(
            width,
            digits=digits,
            group_size=group_size,
            show_position=show_position,
            show_chars=show_chars,
        )

    if terminal_width is not None:
        return fit(terminal_width)
    width = detected_width() if detected_width is not None else _terminal_width()
    if requested == "auto":
        return fit(width)
    return min(2, fit(width))


def _terminal_width() -> int:
    return shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns


def _option(name: str, text: str, parse: Callable[[str], T]) -> T:
    try:
        return parse(text)
    except ValueError as e:
        raise HexpanelError(f"failed to parse `{name}` arg {text!r} as byte count: {e}") from e


def configure_logging(environ: Mapping[str, str] | None = None) -> None:
    """Log warnings (or ``HEXPANEL_LOG_LEVEL``) to stderr."""
    env = os.environ if environ is None else environ
    level = env.get("HEXPANEL_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def run(
    argv: Sequence[str] | None = None,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
    environ: Mapping[str, str] | None = None,
    cancel: CancellationFlag | None = None,
) -> int:
    """Run the hex viewer and return the process exit status."""

    args = parse_args(argv)
    out = sys.stdout if stdout is None else stdout
    err = sys.stderr if stderr is None else stderr
    env = os.environ if environ is None else environ

    try:
        block_size = (
            _option("--block-size", args.block_size, parse_block_size)
            if args.block_size is not None
            else DEFAULT_BLOCK_SIZE
        )
        skip_arg = (
            _option("--skip", args.skip, lambda s: parse_byte_offset(s, block_size))
            if args.skip is not None
            else None
        )
        length_text = args.length or args.bytes or args.count
        length = (
            _option("--length", length_text, lambda s: parse_byte_count(s, block_size))
            if length_text is not None
            else None
        )
        display_offset = (
            _option("--display-offset", args.display_offset, lambda s: parse_byte_count(s, block_size))
            if args.display_offset is not None
            else 0
        )
        try:
            base = Base.parse(args.base)
        except ValueError as e:
            raise HexpanelError(str(e)) from e

        if args.group_size not in VALID_GROUP_SIZES:
            raise ConfigError(
                "group_size", f"possible sizes are 1, 2, 4 or 8, got {args.group_size!r}"
            )

        show_chars = args.show_chars and not args.plain
        show_position = args.show_position and not args.plain
        border = args.border or ("none" if args.plain else "unicode")
        panels = resolve_panels(
            args.panels,
            terminal_width=args.terminal_width,
            digits=base.digits,
            group_size=args.group_size,
            show_position=show_position,
            show_chars=show_chars,
        )
        endianness = Endianness.LITTLE if args.little_endian else Endianness(args.endianness)
        show_color = resolve_show_color(
            args.color,
            plain=args.plain,
            environ=env,
            is_terminal=None if stdout is None else out.isatty,
        )

        reader = open_input(args.file)
        try:
            skip_offset = skip(reader, skip_arg) if skip_arg is not None else 0
            config = PrinterConfig(
                panels=panels,
                show_color=show_color,
                show_char_panel=show_chars,
                show_position_panel=show_position,
                border_style=BorderStyle(border),
                squeeze_enabled=args.squeeze,
                display_offset=skip_offset + display_offset,
                base=base,
                group_size=args.group_size,
                endianness=endianness,
                encoding=args.character_table,
            )
            source = reader if length is None else LimitedReader(reader, length)
            printer = Printer(out, config, DEFAULT_THEME.from_env(env))
            printer.print_all(source, cancel)
            out.flush()
        finally:
            if args.file not in (None, "-"):
                reader.close()
    except BrokenPipeError:
        logger.debug("Output pipe closed")
        return EXIT_OK
    except (HexpanelError, OSError) as e:
        err.write(f"Error: {e}\n")
        return EXIT_ERROR

    if printer.cancelled:
        return EXIT_INTERRUPTED
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``hexpanel`` command."""

    configure_logging()
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="replace")

    interrupted = threading.Event()

    def _handle_sigint(signum: int, frame: object) -> None:
        interrupted.set()

    previous = signal.signal(signal.SIGINT, _handle_sigint)
    try:
        status = run(argv, cancel=interrupted)
    finally:
        signal.signal(signal.SIGINT, previous)

    if status == EXIT_OK and interrupted.is_set():
        status = EXIT_INTERRUPTED
    try:
        sys.stdout.flush()
    except BrokenPipeError:
        # Python flushes stdout again at exit; point it at devnull first
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    return status


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())


__all__ = [
    "build_parser",
    "configure_logging",
    "main",
    "parse_args",
    "resolve_panels",
    "resolve_show_color",
    "run",
]
