"""Config loading shared by CLI commands."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from flapboard.config import FlapboardConfig

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    envvar="FLAPBOARD_CONFIG",
    help="Path to config.toml (defaults to the user config directory)",
)


def load_config(config_path: Path | None) -> FlapboardConfig:
    """Load config, turning validation errors into a clean CLI failure."""
    try:
        return FlapboardConfig.load(config_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration:\n{e}") from e
    except OSError as e:
        raise click.ClickException(f"Could not read configuration: {e}") from e
