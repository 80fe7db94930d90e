"""Tests for hexpanel utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefixes_plain_names(self) -> None:
        from hexpanel.utils.logger import get_logger

        assert get_logger("mymodule").name == "hexpanel.mymodule"

    def test_keeps_package_names(self) -> None:
        from hexpanel.utils.logger import get_logger

        assert get_logger("hexpanel.printer").name == "hexpanel.printer"
        assert get_logger("hexpanel").name == "hexpanel"

    def test_does_not_match_similar_prefix(self) -> None:
        from hexpanel.utils.logger import get_logger

        assert get_logger("hexpanelx").name == "hexpanel.hexpanelx"

    def test_returns_stdlib_logger(self) -> None:
        from hexpanel.utils import get_logger

        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)
        assert logger is logging.getLogger("hexpanel.test")

    def test_session_logs_at_debug(self, caplog) -> None:
        from hexpanel import render

        with caplog.at_level(logging.DEBUG, logger="hexpanel"):
            render(b"abc")
        messages = [r.getMessage() for r in caplog.records]
        assert any("session started" in m for m in messages)
        assert any("session finished (3 bytes)" in m for m in messages)


class TestStringBuilder:
    """Tests for StringBuilder."""

    def test_append_chain(self) -> None:
        from hexpanel.stringbuilder import StringBuilder

        sb = StringBuilder()
        sb.append("│").append("00000000").append("│")
        assert sb.build() == "│00000000│"

    def test_pad(self) -> None:
        from hexpanel.stringbuilder import StringBuilder

        assert StringBuilder().append("ab").pad(3).append("c").build() == "ab   c"

    def test_pad_non_positive(self) -> None:
        """Edge case: zero or negative widths append nothing."""
        from hexpanel.stringbuilder import StringBuilder

        sb = StringBuilder().pad(0).pad(-4)
        assert sb.build() == ""
        assert not sb

    def test_empty_strings_are_skipped(self) -> None:
        from hexpanel.stringbuilder import StringBuilder

        sb = StringBuilder().append("")
        assert not sb
        sb.append("x")
        assert sb
