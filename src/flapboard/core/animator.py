"""Per-cell split-flap animation.

A cell walks the alphabet one symbol at a time. Each step writes the top half,
pauses for the flap delay, writes the bottom half, then pauses for the glyph
delay before checking the target again.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flapboard.constants import DEFAULT_CASCADE_MS, DEFAULT_FLAP_PAUSE_MS, DEFAULT_GLYPH_PAUSE_MS
from flapboard.core.enums import CellState, SearchMode
from flapboard.core.errors import ConfigurationError
from flapboard.debug_log import log

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from flapboard.core.alphabet import Alphabet
    from flapboard.core.cell import GlyphCell

    Sleep = Callable[[float], Awaitable[object]]


@dataclass(frozen=True, slots=True)
class Timing:
    """Animation delays in milliseconds."""

    cascade_ms: int = DEFAULT_CASCADE_MS
    flap_pause_ms: int = DEFAULT_FLAP_PAUSE_MS
    glyph_pause_ms: int = DEFAULT_GLYPH_PAUSE_MS

    def __post_init__(self) -> None:
        for name in ("cascade_ms", "flap_pause_ms", "glyph_pause_ms"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0")

    @classmethod
    def instant(cls) -> Timing:
        return cls(cascade_ms=0, flap_pause_ms=0, glyph_pause_ms=0)

    def start_delay_ms(self, index: int) -> int:
        return index * self.cascade_ms


class CellAnimator:
    """Drives one cell from its current glyph to a target glyph."""

    def __init__(
        self,
        cell: GlyphCell,
        target: str,
        alphabet: Alphabet,
        *,
        start_delay_ms: int = 0,
        timing: Timing | None = None,
        search_mode: SearchMode = SearchMode.WRAP,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if target not in alphabet:
            raise ConfigurationError(
                f"Target {target!r} for cell {cell.index} is not in the alphabet"
            )
        if start_delay_ms < 0:
            raise ConfigurationError("start_delay_ms must be >= 0")
        self.cell = cell
        self.target = target
        self.alphabet = alphabet
        self.start_delay_ms = start_delay_ms
        self.timing = timing or Timing()
        self.search_mode = search_mode
        self._sleep = sleep
        self.state = CellState.PENDING
        self.advances = 0

    @property
    def index(self) -> int:
        return self.cell.index

    async def run(self) -> int:
        """Animate the cell and return its index.

        Ends CONVERGED when the target is shown, or EXHAUSTED when the search
        path ran out first (FORWARD mode only). Errors from sleeping or writing
        a slot mark the animator FAILED and propagate. Cancellation propagates
        without changing the state; the cell keeps whatever glyph it reached.
        """
        try:
            self.state = CellState.WAITING
            await self._pause(self.start_delay_ms)

            self.state = CellState.SEARCHING
            current = self.cell.top
            path = iter(self.alphabet.search_path(current, self.search_mode))
            while current != self.target:
                symbol = next(path, None)
                if symbol is None:
                    break
                await self._flip(symbol)
                current = symbol
                await self._pause(self.timing.glyph_pause_ms)
        except Exception:
            self.state = CellState.FAILED
            raise

        if current == self.target:
            self.state = CellState.CONVERGED
        else:
            self.state = CellState.EXHAUSTED
            log.warning(
                "Cell search exhausted before reaching target",
                index=self.index,
                target=self.target,
                shown=current,
            )
        return self.index

    async def _flip(self, symbol: str) -> None:
        self.cell.top = symbol
        await self._pause(self.timing.flap_pause_ms)
        self.cell.bottom = symbol
        self.advances += 1

    async def _pause(self, milliseconds: int) -> None:
        await self._sleep(milliseconds / 1000)


async def animate(
    cell: GlyphCell,
    target: str,
    alphabet: Alphabet,
    start_delay_ms: int = 0,
    *,
    timing: Timing | None = None,
    search_mode: SearchMode = SearchMode.WRAP,
    sleep: Sleep = asyncio.sleep,
) -> int:
    """Animate a single cell to ``target``; returns the cell index."""
    animator = CellAnimator(
        cell,
        target,
        alphabet,
        start_delay_ms=start_delay_ms,
        timing=timing,
        search_mode=search_mode,
        sleep=sleep,
    )
    return await animator.run()
