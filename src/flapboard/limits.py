"""Numeric limits - no circular dependencies."""

from __future__ import annotations

import os


def _is_debug_build() -> bool:
    """Check if this is a debug/pre-release build.

    FLAPBOARD_DEBUG ("1"/"true" or "0"/"false") overrides; otherwise any
    pre-release marker in the installed version enables debug mode.
    """
    env_debug = os.environ.get("FLAPBOARD_DEBUG", "").lower()
    if env_debug in ("1", "true"):
        return True
    if env_debug in ("0", "false"):
        return False

    try:
        from importlib.metadata import version

        pkg_version = version("flapboard")
    except Exception:
        pkg_version = "dev"

    version_lower = pkg_version.lower()
    return any(indicator in version_lower for indicator in ("dev", "a", "b", "rc"))


DEBUG_BUILD: bool = _is_debug_build()
"""True for pre-release/dev builds, False for production releases."""


MAX_MESSAGE_LENGTH = 500
MAX_LOG_MESSAGE_LENGTH = 4096
MAX_LOG_LINES = 2000
