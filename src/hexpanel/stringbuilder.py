"""StringBuilder for O(n) line assembly.

Each display row is built from many small cells (digits, glyphs, separators,
escape sequences). Appending to a list and joining once per row keeps the
per-row cost linear in its length.

Thread Safety:
StringBuilder instances are local to a single row.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Appends to a list, joins once at the end.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("│").append("00000000").pad(2)
            >>> sb.build()
            '│00000000  '

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        """Initialize empty StringBuilder."""
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def pad(self, width: int) -> StringBuilder:
        """Append ``width`` spaces (nothing for ``width <= 0``).

        Returns:
            self for method chaining
        """
        if width > 0:
            self._parts.append(" " * width)
        return self

    def build(self) -> str:
        """Join all parts into final string.

        Returns:
            Concatenated string of all appended parts
        """
        return "".join(self._parts)

    def __bool__(self) -> bool:
        """Return True if any parts have been appended."""
        return bool(self._parts)
