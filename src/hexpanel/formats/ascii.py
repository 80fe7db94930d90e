"""ASCII encoding, the default character table.

Printable ASCII is shown as-is, space as space, other ASCII whitespace as
``_``, NUL as ``⋄``, remaining control bytes as ``•`` and every byte above
``0x7F`` as ``×``.
"""

from typing import Final

from hexpanel.formats.category import ClassifierTable
from hexpanel.formats.table import TableEncoding, build_ascii_table

LOOKUP_ASCII: Final[ClassifierTable] = build_ascii_table(lambda byte, category: None)

ASCII: Final[TableEncoding] = TableEncoding("ascii", LOOKUP_ASCII)
