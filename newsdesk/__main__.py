"""Package command-line entrypoint.

Enables running the tool with:

    python -m newsdesk headlines --category technology

or, once installed (via the console script declared in *pyproject.toml*):

    newsdesk search "climate"
"""

from __future__ import annotations

import sys

from .main import main


def _run() -> None:  # pragma: no cover - thin wrapper
    """Invoke :pyfunc:`newsdesk.main.main`."""

    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    _run()
