"""FlapBoard container: the rectangular grid of cells."""

from __future__ import annotations

from textual.containers import Horizontal, VerticalScroll

from flapboard.constants import BLANK_CHAR
from flapboard.tui.widgets.flap_cell import FlapCell


class FlapBoard(VerticalScroll):
    """Grid of FlapCells, rebuilt for every message."""

    DEFAULT_CSS = """
    FlapBoard {
        height: 1fr;
        padding: 1 2;
        background: $background;
    }

    FlapBoard .board-row {
        width: auto;
        height: auto;
    }
    """

    def __init__(
        self,
        *,
        blank: str = BLANK_CHAR,
        split_gap: bool = True,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._blank = blank
        self._split_gap = split_gap
        self._cells: list[FlapCell] = []
        self._width = 0

    @property
    def cells(self) -> list[FlapCell]:
        """Cells in row-major order; position equals cell index."""
        return list(self._cells)

    async def build(self, width: int, height: int) -> list[FlapCell]:
        """Replace the grid with ``height`` rows of ``width`` blank cells."""
        await self.remove_children()
        rows: list[Horizontal] = []
        cells: list[FlapCell] = []
        for row in range(height):
            row_cells = [
                FlapCell(row * width + col, blank=self._blank, split_gap=self._split_gap)
                for col in range(width)
            ]
            cells.extend(row_cells)
            rows.append(Horizontal(*row_cells, classes="board-row"))
        if rows:
            await self.mount_all(rows)
        self._cells = cells
        self._width = width
        return self.cells

    def snapshot(self) -> list[str]:
        """Visible top-half glyphs, one string per row."""
        if not self._width:
            return []
        glyphs = "".join(cell.top for cell in self._cells)
        return [glyphs[i : i + self._width] for i in range(0, len(glyphs), self._width)]
