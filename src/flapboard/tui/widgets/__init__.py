"""Widget components for the flapboard TUI."""

from flapboard.tui.widgets.board import FlapBoard
from flapboard.tui.widgets.flap_cell import FlapCell

__all__ = ["FlapBoard", "FlapCell"]
