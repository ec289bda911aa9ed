"""XDG-compliant path helpers for flapboard."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir


def get_data_dir() -> Path:
    """Directory for exported logs and other generated files."""
    override = os.environ.get("FLAPBOARD_DATA_DIR")
    if override:
        return Path(override)
    return Path(user_data_dir("flapboard"))


def get_config_dir() -> Path:
    override = os.environ.get("FLAPBOARD_CONFIG_DIR")
    if override:
        return Path(override)
    return Path(user_config_dir("flapboard"))


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def get_debug_log_path() -> Path:
    return get_data_dir() / "debug.log"


def ensure_directories() -> None:
    """Create all necessary directories if they don't exist."""
    get_data_dir().mkdir(parents=True, exist_ok=True)
    get_config_dir().mkdir(parents=True, exist_ok=True)
