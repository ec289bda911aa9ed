"""Configuration loader for flapboard."""

from __future__ import annotations

import asyncio
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Literal

import tomlkit
from pydantic import BaseModel, Field, field_validator, model_validator

from flapboard.constants import (
    DEFAULT_CASCADE_MS,
    DEFAULT_CHARACTERS,
    DEFAULT_FLAP_PAUSE_MS,
    DEFAULT_GLYPH_PAUSE_MS,
    DEFAULT_MESSAGE,
    REPLACEMENT_CHAR,
)
from flapboard.core.alphabet import Alphabet
from flapboard.core.animator import Timing
from flapboard.core.enums import SearchMode
from flapboard.limits import MAX_MESSAGE_LENGTH
from flapboard.paths import ensure_directories, get_config_path

SearchModeLiteral = Literal["wrap", "forward"]
SEARCH_MODE_VALUES = frozenset(mode.value for mode in SearchMode)


class TimingConfig(BaseModel):
    """Animation speeds, in milliseconds."""

    flap_pause_ms: int = Field(
        default=DEFAULT_FLAP_PAUSE_MS, ge=0, description="Top half to bottom half delay"
    )
    glyph_pause_ms: int = Field(
        default=DEFAULT_GLYPH_PAUSE_MS, ge=0, description="Pause between glyphs"
    )
    cascade_ms: int = Field(
        default=DEFAULT_CASCADE_MS, ge=0, description="Start offset from one cell to the next"
    )

    def to_timing(self) -> Timing:
        return Timing(
            cascade_ms=self.cascade_ms,
            flap_pause_ms=self.flap_pause_ms,
            glyph_pause_ms=self.glyph_pause_ms,
        )


class DisplayConfig(BaseModel):
    """Character set and message handling."""

    characters: str = Field(
        default=DEFAULT_CHARACTERS,
        description="Ordered glyphs each cell cycles through (blank first)",
    )
    replacement_char: str = Field(
        default=REPLACEMENT_CHAR,
        min_length=1,
        max_length=1,
        description="Shown for unsupported characters; must be last in characters",
    )
    max_message_length: int = Field(default=MAX_MESSAGE_LENGTH, ge=1)
    search_mode: SearchModeLiteral = Field(
        default="wrap",
        description="'wrap' cycles round the drum, 'forward' never passes the last glyph",
    )

    @field_validator("search_mode", mode="before")
    @classmethod
    def validate_search_mode(cls, value: object) -> str:
        """Gracefully coerce unknown values to the default."""
        if isinstance(value, str) and value.lower() in SEARCH_MODE_VALUES:
            return value.lower()
        return SearchMode.WRAP.value

    @model_validator(mode="after")
    def check_characters(self) -> DisplayConfig:
        if len(set(self.characters)) != len(self.characters):
            raise ValueError("characters must not contain duplicates")
        if len(self.characters) < 2:
            raise ValueError("characters needs at least a blank and the replacement char")
        if not self.characters.endswith(self.replacement_char):
            raise ValueError("replacement_char must be the last entry in characters")
        return self

    def alphabet(self) -> Alphabet:
        return Alphabet.from_string(self.characters)

    @property
    def mode(self) -> SearchMode:
        return SearchMode(self.search_mode)


class UIConfig(BaseModel):
    """TUI preferences."""

    split_gap: bool = Field(
        default=True, description="Draw a gap between top and bottom glyph halves"
    )
    default_message: str = Field(
        default=DEFAULT_MESSAGE, description="Text pre-filled in the message box"
    )


class FlapboardConfig(BaseModel):
    """Root configuration model."""

    timing: TimingConfig = Field(default_factory=TimingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> FlapboardConfig:
        """Load configuration from TOML file or use defaults."""
        ensure_directories()
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    def to_toml(self) -> str:
        doc = tomlkit.document()
        doc.add(tomlkit.comment("flapboard configuration"))
        for section, model in (
            ("timing", self.timing),
            ("display", self.display),
            ("ui", self.ui),
        ):
            table = tomlkit.table()
            for key, value in model.model_dump().items():
                if value is not None:
                    table[key] = value
            doc[section] = table
        return tomlkit.dumps(doc)

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file (created if missing)."""
        await asyncio.to_thread(_write_atomic, path, self.to_toml())

    async def update_display_preferences(
        self,
        path: Path,
        *,
        search_mode: SearchMode | None = None,
    ) -> None:
        """Update display preferences in existing TOML file (preserves comments).

        Args:
            path: Path to config file (created if missing)
            search_mode: Value for search_mode (None = no change)
        """
        import aiofiles

        if path.exists():
            async with aiofiles.open(path, encoding="utf-8") as f:
                content = await f.read()
            doc = tomlkit.parse(content)
        else:
            doc = tomlkit.document()

        if "display" not in doc:
            doc["display"] = tomlkit.table()

        if search_mode is not None:
            doc["display"]["search_mode"] = search_mode.value  # type: ignore[index]
            self.display.search_mode = search_mode.value

        await asyncio.to_thread(_write_atomic, path, tomlkit.dumps(doc))


def _write_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=path.parent, prefix=".tmp_", delete=False
    ) as handle:
        handle.write(content)
    try:
        os.replace(handle.name, path)
    except OSError:
        Path(handle.name).unlink(missing_ok=True)
        raise
