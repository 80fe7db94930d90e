"""Input opening, skipping and length limiting.

Regular files are positioned with ``seek``. Pipes and terminals cannot
seek, so forward skips on them read and discard the bytes instead; a skip
backwards from the end is only possible on seekable input.
"""

from __future__ import annotations

import io
import os
import sys
from typing import BinaryIO

from hexpanel.errors import InputError
from hexpanel.units import ByteOffset, ByteOffsetKind
from hexpanel.utils.logger import get_logger

logger = get_logger(__name__)

DISCARD_CHUNK = 64 * 1024


def open_input(path: str | os.PathLike[str] | None) -> BinaryIO:
    """Open ``path`` for binary reading; ``None`` or ``"-"`` is stdin.

    Raises:
        InputError: If the file cannot be opened
    """
    if path is None or os.fspath(path) == "-":
        return sys.stdin.buffer
    try:
        return open(path, "rb")
    except OSError as e:
        raise InputError(f"{os.fspath(path)}: {e.strerror or e}") from e


def skip(reader: BinaryIO, offset: ByteOffset) -> int:
    """Position ``reader`` according to ``offset``.

    Returns:
        The absolute input position the dump starts at

    Raises:
        InputError: If the position cannot be reached
    """
    if _seekable(reader):
        try:
            if offset.kind is ByteOffsetKind.BACKWARD_FROM_END:
                return reader.seek(-offset.value, io.SEEK_END)
            return reader.seek(offset.value, io.SEEK_CUR)
        except OSError as e:
            raise InputError(
                "Failed to jump to the desired input position. This could be caused "
                "by a negative offset that is too large."
            ) from e

    if offset.kind is ByteOffsetKind.BACKWARD_FROM_END:
        raise InputError("Pipes only support seeking forward with a relative offset")
    logger.debug("Input is not seekable, discarding %d bytes", offset.value)
    return _discard(reader, offset.value)


def _seekable(reader: BinaryIO) -> bool:
    try:
        return reader.seekable()
    except (AttributeError, ValueError):
        return False


def _discard(reader: BinaryIO, count: int) -> int:
    remaining = count
    while remaining > 0:
        chunk = reader.read(min(remaining, DISCARD_CHUNK))
        if not chunk:
            break
        remaining -= len(chunk)
    return count - remaining


class LimitedReader:
    """Reads at most ``limit`` bytes from ``reader``.

    Usage:
        >>> import io
        >>> LimitedReader(io.BytesIO(b"abcdef"), 4).read()
        b'abcd'

    """

    __slots__ = ("_reader", "_remaining")

    def __init__(self, reader: BinaryIO, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._reader = reader
        self._remaining = limit

    @property
    def remaining(self) -> int:
        return self._remaining

    def read(self, size: int = -1) -> bytes:
        if self._remaining <= 0:
            return b""
        if size < 0 or size > self._remaining:
            size = self._remaining
        data = self._reader.read(size)
        self._remaining -= len(data)
        return data
