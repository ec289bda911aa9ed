"""TUI command."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from flapboard.cli.commands._config import config_option, load_config

if TYPE_CHECKING:
    from pathlib import Path


@click.command()
@click.option(
    "--message",
    "-m",
    default=None,
    help="Pre-fill the message box and run it immediately",
)
@config_option
def tui(message: str | None, config_path: Path | None) -> None:
    """Run the split-flap board TUI (default command)."""
    from flapboard.tui.app import run

    config = load_config(config_path)
    run(config, message=message)
