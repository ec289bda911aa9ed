"""Root CLI command registration."""

from __future__ import annotations

import click

from flapboard import __version__

from .config import config
from .render import render
from .tui import tui


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Split-flap departure board simulator."""
    if version:
        click.echo(f"flapboard {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        ctx.invoke(tui)


cli.add_command(tui)
cli.add_command(render)
cli.add_command(config)
