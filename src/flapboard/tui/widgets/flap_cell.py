"""FlapCell widget: one split-flap character position."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.containers import Vertical
from textual.widgets import Static

from flapboard.constants import BLANK_CHAR

if TYPE_CHECKING:
    from textual.app import ComposeResult


class FlapCell(Vertical):
    """A display cell made of two independently updated glyph halves.

    Writing ``top`` flips the upper flap; ``bottom`` catches up afterwards.
    While the halves disagree the cell carries the ``flipping`` class.
    """

    DEFAULT_CSS = """
    FlapCell {
        width: 3;
        height: 2;
        margin: 0 1 1 0;
        background: $surface;
    }

    FlapCell .glyph-half {
        width: 3;
        height: 1;
        content-align: center middle;
        color: $secondary;
        text-style: bold;
    }

    FlapCell .glyph-top {
        background: $panel;
    }

    FlapCell.split-gap .glyph-top {
        text-style: bold underline;
    }

    FlapCell.flipping .glyph-top {
        color: $primary;
    }
    """

    def __init__(self, index: int, *, blank: str = BLANK_CHAR, split_gap: bool = True) -> None:
        super().__init__(id=f"cell-{index}", classes="split-gap" if split_gap else "")
        self.index = index
        self._top = blank
        self._bottom = blank
        self._top_half = Static(blank, classes="glyph-half glyph-top", markup=False)
        self._bottom_half = Static(blank, classes="glyph-half glyph-bottom", markup=False)

    def compose(self) -> ComposeResult:
        yield self._top_half
        yield self._bottom_half

    @property
    def top(self) -> str:
        return self._top

    @top.setter
    def top(self, glyph: str) -> None:
        self._top = glyph
        self._top_half.update(glyph)
        self._sync_flipping()

    @property
    def bottom(self) -> str:
        return self._bottom

    @bottom.setter
    def bottom(self, glyph: str) -> None:
        self._bottom = glyph
        self._bottom_half.update(glyph)
        self._sync_flipping()

    def _sync_flipping(self) -> None:
        self.set_class(self._top != self._bottom, "flipping")
