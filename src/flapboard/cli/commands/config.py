"""Config file management commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import click

from flapboard.cli.commands._config import config_option, load_config
from flapboard.config import FlapboardConfig
from flapboard.core.enums import SearchMode
from flapboard.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path


@click.group()
def config() -> None:
    """Inspect or create the configuration file."""


@config.command("path")
def config_path_cmd() -> None:
    """Print the default config file location."""
    click.echo(str(get_config_path()))


@config.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@config_option
def config_init(force: bool, config_path: Path | None) -> None:
    """Write a config file populated with the defaults."""
    path = config_path or get_config_path()
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    asyncio.run(FlapboardConfig().save(path))
    click.secho(f"Wrote {path}", fg="green")


@config.command("show")
@config_option
def config_show(config_path: Path | None) -> None:
    """Print the effective configuration as TOML."""
    click.echo(load_config(config_path).to_toml(), nl=False)


@config.command("mode")
@click.argument("mode", type=click.Choice([m.value for m in SearchMode]))
@config_option
def config_mode(mode: str, config_path: Path | None) -> None:
    """Set the alphabet search mode, keeping the rest of the file intact."""
    path = config_path or get_config_path()
    current = load_config(path)
    asyncio.run(current.update_display_preferences(path, search_mode=SearchMode(mode)))
    click.secho(f"search_mode = {mode!r} written to {path}", fg="green")
