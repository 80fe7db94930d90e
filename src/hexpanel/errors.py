"""Exception classes for hexpanel.

Provides standardized exceptions for error handling throughout hexpanel.
Sink failures are not wrapped: a write that fails raises the ``OSError``
of the underlying stream (``BrokenPipeError`` for a closed pipe).
"""

from __future__ import annotations


class HexpanelError(Exception):
    """Base exception for all hexpanel errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(HexpanelError):
    """Invalid printer configuration.

    Raised when a PrinterConfig is constructed, before any output is written.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            field: Name of the offending configuration field
            message: Description of the violation
        """
        self.field = field
        self.message = message
        super().__init__(f"Invalid '{field}': {message}")


class InputError(HexpanelError):
    """Error while opening or positioning the input stream."""

    pass


class ByteOffsetParseError(HexpanelError, ValueError):
    """Error while parsing a byte count such as ``4KiB`` or ``0xff``.

    Attributes:
        text: The offending (sub)string, if any
    """

    def __init__(self, message: str, text: str | None = None) -> None:
        self.text = text
        super().__init__(message)


class EmptyOffsetError(ByteOffsetParseError):
    """No character data was given."""

    def __init__(self) -> None:
        super().__init__("no character data found, did you forget to write it?")


class EmptyAfterSignError(ByteOffsetParseError):
    """A sign was given without digits after it."""

    def __init__(self) -> None:
        super().__init__("no digits found after sign, did you forget to write them?")


class SignAfterHexPrefixError(ByteOffsetParseError):
    """A sign was placed after the ``0x`` prefix."""

    def __init__(self, sign: str) -> None:
        self.sign = sign
        super().__init__(
            f"found {sign!r} sign after hex prefix ('0x'); signs should go before it", sign
        )


class InvalidNumAndUnitError(ByteOffsetParseError):
    """Text does not have the form ``<pos-integer>[<unit>]``."""

    def __init__(self, text: str) -> None:
        super().__init__(f"{text!r} is not of the expected form <pos-integer>[<unit>]", text)


class EmptyWithUnitError(ByteOffsetParseError):
    """A valid unit was given without a count before it."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"{unit!r} is a valid unit, but an integer should come before it", unit)


class InvalidUnitError(ByteOffsetParseError):
    """The unit suffix is unknown."""

    def __init__(self, unit: str) -> None:
        super().__init__(f"invalid unit {unit!r}", unit)


class ParseNumError(ByteOffsetParseError):
    """The integer part could not be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"failed to parse integer part {text!r}", text)


class UnitOverflowError(ByteOffsetParseError):
    """Count times unit does not fit a signed 64-bit integer."""

    def __init__(self) -> None:
        super().__init__(
            "count multiplied by the unit overflowed a signed 64-bit integer; "
            "are you sure it should be that big?"
        )


class NegativeOffsetError(HexpanelError, ValueError):
    """A negative offset was given where only counts are accepted."""

    def __init__(self) -> None:
        super().__init__(
            "negative offset specified, but only positive offsets (counts) "
            "are accepted in this context"
        )
