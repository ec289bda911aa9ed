"""Pytest fixtures for flapboard tests."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="flapboard-tests-"))
os.environ["FLAPBOARD_DATA_DIR"] = str(_TEST_BASE_DIR / "data")
os.environ["FLAPBOARD_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ.setdefault("FLAPBOARD_DEBUG", "1")

from flapboard.config import FlapboardConfig, TimingConfig  # noqa: E402
from flapboard.core.alphabet import Alphabet  # noqa: E402
from flapboard.debug_log import log_buffer  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Generator


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=30,
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def _clean_test_dirs() -> Generator[None, None, None]:
    """Ensure config/data written by one test does not leak into the next."""
    yield
    shutil.rmtree(_TEST_BASE_DIR / "config", ignore_errors=True)
    shutil.rmtree(_TEST_BASE_DIR / "data", ignore_errors=True)


@pytest.fixture(autouse=True)
def _fresh_log_buffer() -> None:
    log_buffer.clear()


@pytest.fixture
def alphabet() -> Alphabet:
    """Small alphabet from the reference scenario: blank, A, B, placeholder."""
    return Alphabet.from_string(" AB☒")


@pytest.fixture
def fast_config() -> FlapboardConfig:
    """Default character set with every delay set to zero."""
    return FlapboardConfig(timing=TimingConfig(flap_pause_ms=0, glyph_pause_ms=0, cascade_ms=0))
