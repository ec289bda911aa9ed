"""Core domain enums."""

from __future__ import annotations

from enum import StrEnum


class CellState(StrEnum):
    """Lifecycle of a single cell animation."""

    PENDING = "PENDING"
    WAITING = "WAITING"
    SEARCHING = "SEARCHING"
    CONVERGED = "CONVERGED"
    EXHAUSTED = "EXHAUSTED"
    FAILED = "FAILED"


class RunState(StrEnum):
    """Lifecycle of a cascade run."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class SearchMode(StrEnum):
    """How a cell walks the alphabet towards its target.

    WRAP rotates the alphabet so the walk starts right after the current glyph
    and comes back around, which always reaches the target. FORWARD only visits
    symbols after the current glyph and may run out first.
    """

    WRAP = "wrap"
    FORWARD = "forward"
