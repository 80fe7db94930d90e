"""ByteClassifier protocol for pluggable input encodings.

An encoding maps every byte value to a display category and a glyph for the
character panel. Implement this protocol to add an encoding; the built-in
ones are lookup tables (see ``hexpanel.formats.table``).

Thread Safety:
Classifiers must be stateless. Multiple printers may share one instance.

Example:
    >>> class Uppercase:
    ...     name = "upper"
    ...
    ...     def classify(self, byte):
    ...         return ASCII.classify(byte & 0x5F)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hexpanel.formats.category import Category


@runtime_checkable
class ByteClassifier(Protocol):
    """Protocol for byte classification.

    Implementations must be total: every value in ``0..255`` classifies to
    exactly one category and a non-empty glyph. ``classify`` must never
    raise for an in-range byte.

    """

    @property
    def name(self) -> str:
        """Encoding name, used for lookup and diagnostics."""
        ...

    def classify(self, byte: int) -> tuple[Category, str]:
        """Return ``(category, glyph)`` for ``byte``."""
        ...
