"""Split-flap animation core: alphabet, cells, animator and cascade scheduler."""

from flapboard.core.alphabet import Alphabet
from flapboard.core.animator import CellAnimator, Timing, animate
from flapboard.core.cell import GlyphCell, MemoryCell, build_memory_cells
from flapboard.core.enums import CellState, RunState, SearchMode
from flapboard.core.errors import (
    ConfigurationError,
    FlapboardError,
    MessageTooLongError,
    RunInProgressError,
)
from flapboard.core.message import PreparedMessage, prepare_message
from flapboard.core.scheduler import AnimationTask, CascadeScheduler, Run, RunResult

__all__ = [
    "Alphabet",
    "AnimationTask",
    "CascadeScheduler",
    "CellAnimator",
    "CellState",
    "ConfigurationError",
    "FlapboardError",
    "GlyphCell",
    "MemoryCell",
    "MessageTooLongError",
    "PreparedMessage",
    "Run",
    "RunInProgressError",
    "RunResult",
    "RunState",
    "SearchMode",
    "Timing",
    "animate",
    "build_memory_cells",
    "prepare_message",
]
