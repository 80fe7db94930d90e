"""Allow ``python -m hexpanel``."""

from hexpanel.cli import main

raise SystemExit(main())
