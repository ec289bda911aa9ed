"""Addressable display cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class GlyphCell(Protocol):
    """One character position of the board.

    The two slots are written independently; the top half flips first and the
    bottom half catches up.
    """

    @property
    def index(self) -> int: ...

    top: str
    bottom: str


@dataclass(slots=True)
class MemoryCell:
    """Cell held in memory, used for headless rendering and tests."""

    index: int
    top: str = " "
    bottom: str = " "


def build_memory_cells(count: int, blank: str = " ") -> list[MemoryCell]:
    return [MemoryCell(index=i, top=blank, bottom=blank) for i in range(count)]
