"""Headless render command."""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING

import click

from flapboard.cli.commands._config import config_option, load_config
from flapboard.core.animator import Timing
from flapboard.core.cell import build_memory_cells
from flapboard.core.enums import RunState, SearchMode
from flapboard.core.errors import ConfigurationError
from flapboard.core.message import prepare_message
from flapboard.core.scheduler import CascadeScheduler

if TYPE_CHECKING:
    from pathlib import Path

    from flapboard.core.scheduler import RunResult


def frame_board(rows: list[str]) -> str:
    """Draw rows inside a box, as the board would show them."""
    width = max((len(row) for row in rows), default=0)
    top = "┌" + "─" * width + "┐"
    bottom = "└" + "─" * width + "┘"
    body = [f"│{row}│" for row in rows]
    return "\n".join([top, *body, bottom])


async def _render(
    text: str,
    config_path: Path | None,
    *,
    animate: bool,
    mode: str | None,
) -> tuple[list[str], RunResult]:
    config = load_config(config_path)
    alphabet = config.display.alphabet()
    prepared = prepare_message(text, alphabet, max_length=config.display.max_message_length)
    cells = build_memory_cells(len(prepared), blank=alphabet.blank)
    scheduler = CascadeScheduler(
        config.timing.to_timing() if animate else Timing.instant(),
        search_mode=SearchMode(mode) if mode else config.display.mode,
    )
    result = await scheduler.run_all(prepared.text, cells, alphabet)
    glyphs = "".join(cell.top for cell in cells)
    rows = [glyphs[i : i + prepared.width] for i in range(0, len(glyphs), prepared.width or 1)]
    return rows, result


@click.command()
@click.argument("text")
@click.option(
    "--instant/--animate",
    default=True,
    help="Skip the configured delays (default) or run at display speed",
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in SearchMode]),
    default=None,
    help="Override the configured alphabet search mode",
)
@config_option
def render(text: str, instant: bool, mode: str | None, config_path: Path | None) -> None:
    """Run the cascade for TEXT without a UI and print the final board.

    Use "\\n" in TEXT for additional rows.
    """
    text = text.replace("\\n", "\n")
    try:
        rows, result = asyncio.run(_render(text, config_path, animate=not instant, mode=mode))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    click.echo(frame_board(rows))
    total = sum(len(row) for row in rows)
    summary = f"{len(result.completed)}/{total} cells settled in {result.elapsed:.2f}s"
    if result.state == RunState.FAILED:
        click.secho(f"Run failed: {result.reason}", fg="red", err=True)
        sys.exit(1)
    if result.exhausted:
        click.secho(
            f"{summary}; {len(result.exhausted)} could not reach their glyph", fg="yellow"
        )
    else:
        click.secho(summary, fg="green")
