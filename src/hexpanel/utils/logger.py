"""Namespaced loggers for hexpanel modules.

Every module logs through ``hexpanel.<module>`` so callers can tune the
whole package with ``logging.getLogger("hexpanel")``. Rendering emits DEBUG
records for session start and end, INFO on cancellation and WARNING for
ignored color overrides.

Handlers are left to the embedding application. The ``hexpanel`` command
installs a stderr handler in ``hexpanel.cli.configure_logging``; importing
the library never does.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` under the ``hexpanel`` namespace.

    Names already inside the namespace are used as is.

    Example:
        >>> get_logger("mymodule").name
        'hexpanel.mymodule'
        >>> get_logger("hexpanel.printer").name
        'hexpanel.printer'
    """
    if not (name == "hexpanel" or name.startswith("hexpanel.")):
        name = f"hexpanel.{name}"
    return logging.getLogger(name)
