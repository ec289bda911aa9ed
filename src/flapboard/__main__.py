"""CLI entry point for flapboard."""

from __future__ import annotations

import sys

if sys.version_info < (3, 11):  # noqa: UP036
    print("Error: flapboard requires Python 3.11 or higher.")
    print(f"You are running Python {sys.version_info.major}.{sys.version_info.minor}")
    sys.exit(1)

from flapboard.cli import cli  # noqa: E402

if __name__ == "__main__":
    cli()
