"""Display defaults."""

from __future__ import annotations

BLANK_CHAR = " "

# Substituted for any input character the board cannot show.
REPLACEMENT_CHAR = "☒"

DEFAULT_CHARACTERS = (
    BLANK_CHAR
    + "1234567890"
    + "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    + ",.?;:/'\"!&()-’"
    + REPLACEMENT_CHAR
)
"""Blank first, replacement last: a cell can always reach either."""

DEFAULT_FLAP_PAUSE_MS = 60
DEFAULT_GLYPH_PAUSE_MS = 180
DEFAULT_CASCADE_MS = 90

DEFAULT_MESSAGE = "DEPARTURES\nGATE 12  ON TIME"
