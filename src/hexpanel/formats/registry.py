"""Encoding registry for lookup by name.

The set of built-in encodings is closed and known at import time. Names
are matched case-insensitively; a few aliases are accepted for
compatibility with other hex-dump tools.

Example:
    >>> get_encoding("ebcdic").name
    'ebcdic'
    >>> get_encoding("cp437").name
    'codepage-437'

"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

from hexpanel.errors import ConfigError
from hexpanel.formats.ascii import ASCII
from hexpanel.formats.cp437 import CP437
from hexpanel.formats.dotted import DOTTED
from hexpanel.formats.ebcdic import EBCDIC
from hexpanel.formats.protocol import ByteClassifier

BUILTIN_ENCODINGS: Final[MappingProxyType[str, ByteClassifier]] = MappingProxyType(
    {encoding.name: encoding for encoding in (ASCII, DOTTED, CP437, EBCDIC)}
)

_ALIASES: Final[MappingProxyType[str, str]] = MappingProxyType(
    {
        "default": "ascii",
        "cp437": "codepage-437",
        "cp-437": "codepage-437",
        "xxd": "dotted",
    }
)


def encoding_names() -> tuple[str, ...]:
    """Names of all built-in encodings, in registration order."""
    return tuple(BUILTIN_ENCODINGS)


def get_encoding(name: str) -> ByteClassifier:
    """Get the encoding registered under ``name``.

    Args:
        name: Encoding name or alias (case-insensitive)

    Returns:
        The stateless classifier for that encoding

    Raises:
        ConfigError: If no encoding has that name
    """
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return BUILTIN_ENCODINGS[key]
    except KeyError:
        choices = ", ".join(encoding_names())
        raise ConfigError("encoding", f"unknown encoding {name!r} (choose from {choices})") from None
