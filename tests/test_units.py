"""Tests for byte offset and byte count parsing."""

import pytest

from hexpanel.errors import (
    ByteOffsetParseError,
    EmptyAfterSignError,
    EmptyOffsetError,
    EmptyWithUnitError,
    InvalidNumAndUnitError,
    InvalidUnitError,
    NegativeOffsetError,
    ParseNumError,
    SignAfterHexPrefixError,
    UnitOverflowError,
)
from hexpanel.units import (
    ByteOffset,
    ByteOffsetKind,
    Unit,
    extract_num_and_unit_from,
    parse_block_size,
    parse_byte_count,
    parse_byte_offset,
    process_sign_of,
    try_parse_as_hex_number,
)

BEGIN = ByteOffsetKind.FORWARD_FROM_BEGINNING
RELATIVE = ByteOffsetKind.FORWARD_FROM_LAST_OFFSET
FROM_END = ByteOffsetKind.BACKWARD_FROM_END


class TestUnits:
    def test_decimal_multipliers(self) -> None:
        assert Unit.KILOBYTE.multiplier() == 1000 * Unit.BYTE.multiplier()
        assert Unit.MEGABYTE.multiplier() == 1000 * Unit.KILOBYTE.multiplier()
        assert Unit.GIGABYTE.multiplier() == 1000 * Unit.MEGABYTE.multiplier()
        assert Unit.TERABYTE.multiplier() == 1000 * Unit.GIGABYTE.multiplier()

    def test_binary_multipliers(self) -> None:
        assert Unit.KIBIBYTE.multiplier() == 1024 * Unit.BYTE.multiplier()
        assert Unit.MEBIBYTE.multiplier() == 1024 * Unit.KIBIBYTE.multiplier()
        assert Unit.GIBIBYTE.multiplier() == 1024 * Unit.MEBIBYTE.multiplier()
        assert Unit.TEBIBYTE.multiplier() == 1024 * Unit.GIBIBYTE.multiplier()

    def test_block_uses_block_size(self) -> None:
        assert Unit.BLOCK.multiplier() == 512
        assert Unit.BLOCK.multiplier(4096) == 4096


class TestHelpers:
    """The individual parsing steps."""

    def test_process_sign(self) -> None:
        assert process_sign_of("123") == ("123", BEGIN)
        assert process_sign_of("+123") == ("123", RELATIVE)
        assert process_sign_of("-123") == ("123", FROM_END)

    @pytest.mark.parametrize("text", ["+", "-"])
    def test_sign_without_digits(self, text: str) -> None:
        with pytest.raises(EmptyAfterSignError):
            process_sign_of(text)

    def test_empty(self) -> None:
        with pytest.raises(EmptyOffsetError):
            process_sign_of("")

    def test_hex_number(self) -> None:
        assert try_parse_as_hex_number("73") is None
        assert try_parse_as_hex_number("0x1337") == 0x1337

    @pytest.mark.parametrize("text", ["0xnope", "0x-1", "0x"])
    def test_bad_hex_number(self, text: str) -> None:
        with pytest.raises(ByteOffsetParseError):
            try_parse_as_hex_number(text)

    def test_extract_num_and_unit(self) -> None:
        # byte is the default unit
        assert extract_num_and_unit_from("4") == (4, Unit.BYTE)
        assert extract_num_and_unit_from("2blocks") == (2, Unit.BLOCK)
        # no normalization is performed
        assert extract_num_and_unit_from("1024kb") == (1024, Unit.KILOBYTE)

    def test_unit_without_number(self) -> None:
        with pytest.raises(EmptyWithUnitError) as exc_info:
            extract_num_and_unit_from("gib")
        assert exc_info.value.text == "gib"

    def test_invalid_unit(self) -> None:
        with pytest.raises(InvalidUnitError) as exc_info:
            extract_num_and_unit_from("25litres")
        assert exc_info.value.text == "litres"


class TestParseByteOffset:
    @pytest.mark.parametrize(
        ("text", "value", "kind"),
        [
            ("0", 0, BEGIN),
            ("1", 1, BEGIN),
            ("100", 100, BEGIN),
            ("+100", 100, RELATIVE),
            ("-100", 100, FROM_END),
            ("0x0", 0, BEGIN),
            ("0xf", 15, BEGIN),
            ("0xdeadbeef", 3_735_928_559, BEGIN),
            ("1KB", 1000, BEGIN),
            ("2MB", 2_000_000, BEGIN),
            ("3GB", 3_000_000_000, BEGIN),
            ("4TB", 4_000_000_000_000, BEGIN),
            ("+4TB", 4_000_000_000_000, RELATIVE),
            ("1GiB", 1_073_741_824, BEGIN),
            ("2TiB", 2_199_023_255_552, BEGIN),
            ("+2TiB", 2_199_023_255_552, RELATIVE),
            ("0xff", 255, BEGIN),
            ("0xEE", 238, BEGIN),
            ("+0xFF", 255, RELATIVE),
            ("-0x10", 16, FROM_END),
            ("4kib", 4096, BEGIN),
        ],
    )
    def test_success(self, text: str, value: int, kind: ByteOffsetKind) -> None:
        assert parse_byte_offset(text) == ByteOffset(value, kind)

    @pytest.mark.parametrize(
        ("text", "block_size", "value"),
        [("1block", 512, 512), ("2block", 512, 1024), ("1block", 4, 4), ("2blocks", 4, 8)],
    )
    def test_blocks(self, text: str, block_size: int, value: int) -> None:
        assert parse_byte_offset(text, block_size) == ByteOffset(value, BEGIN)

    @pytest.mark.parametrize(
        ("text", "error", "detail"),
        [
            ("", EmptyOffsetError, None),
            ("+", EmptyAfterSignError, None),
            ("-", EmptyAfterSignError, None),
            ("K", InvalidNumAndUnitError, "K"),
            ("k", InvalidNumAndUnitError, "k"),
            ("m", InvalidNumAndUnitError, "m"),
            ("block", EmptyWithUnitError, "block"),
            # leading/trailing space is invalid
            (" 0", InvalidNumAndUnitError, " 0"),
            ("0 ", InvalidUnitError, " "),
            ("0x-12", SignAfterHexPrefixError, "-"),
            ("0x+12", SignAfterHexPrefixError, "+"),
            ("1234asdf", InvalidUnitError, "asdf"),
            ("asdf1234", InvalidNumAndUnitError, "asdf1234"),
            ("a1s2d3f4", InvalidNumAndUnitError, "a1s2d3f4"),
            ("20000000TiB", UnitOverflowError, None),
            ("99999999999999999999", ParseNumError, "99999999999999999999"),
        ],
    )
    def test_errors(self, text: str, error: type, detail: str | None) -> None:
        with pytest.raises(error) as exc_info:
            parse_byte_offset(text)
        assert exc_info.value.text == detail

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_byte_offset("nope")


class TestParseByteCount:
    def test_forward(self) -> None:
        assert parse_byte_count("0x20") == 32
        assert parse_byte_count("+2kb") == 2000

    def test_backward_rejected(self) -> None:
        with pytest.raises(NegativeOffsetError):
            parse_byte_count("-1")

    def test_assume_forward(self) -> None:
        assert ByteOffset(5, RELATIVE).assume_forward_offset_from_start() == 5
        with pytest.raises(NegativeOffsetError):
            ByteOffset(5, FROM_END).assume_forward_offset_from_start()


class TestParseBlockSize:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("512", 512), ("0x200", 512), ("4KiB", 4096), ("1kb", 1000)],
    )
    def test_valid(self, text: str, expected: int) -> None:
        assert parse_block_size(text) == expected

    @pytest.mark.parametrize("text", ["0", "0x0"])
    def test_must_be_positive(self, text: str) -> None:
        with pytest.raises(ValueError, match="positive"):
            parse_block_size(text)

    def test_block_unit_rejected(self) -> None:
        with pytest.raises(ValueError, match="block"):
            parse_block_size("2blocks")

    def test_malformed(self) -> None:
        with pytest.raises(ByteOffsetParseError):
            parse_block_size("lots")
