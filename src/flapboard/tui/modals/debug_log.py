"""F12 viewer for the in-memory debug log."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from rich.markup import escape
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Label, RichLog

from flapboard.debug_log import export_logs, log_buffer
from flapboard.keybindings import DEBUG_LOG_BINDINGS
from flapboard.paths import get_debug_log_path

if TYPE_CHECKING:
    from textual.app import ComposeResult

    from flapboard.debug_log import LogEntry

_LEVEL_STYLES = {
    "DEBUG": "dim",
    "INFO": "cyan",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold red",
}

REFRESH_INTERVAL = 0.5


class DebugLogModal(ModalScreen[None]):
    """Tails ``log_buffer`` while open."""

    BINDINGS = DEBUG_LOG_BINDINGS

    DEFAULT_CSS = """
    DebugLogModal {
        align: center middle;
    }

    #debug-log-panel {
        width: 90%;
        height: 80%;
        background: $surface;
        border: heavy $primary;
        padding: 0 1;
    }

    #debug-log-title {
        text-style: bold;
        color: $primary;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.min_level = "DEBUG"
        self._generation = -1
        self._seen = 0

    def compose(self) -> ComposeResult:
        with Vertical(id="debug-log-panel"):
            yield Label("", id="debug-log-title")
            yield RichLog(id="debug-log", markup=True, wrap=True, auto_scroll=True)
        yield Footer()

    def on_mount(self) -> None:
        self._reload()
        self.set_interval(REFRESH_INTERVAL, self._tail)

    def _reload(self) -> None:
        self.query_one("#debug-log-title", Label).update(
            f"Debug log (level >= {self.min_level})"
        )
        self.query_one("#debug-log", RichLog).clear()
        self._generation = log_buffer.generation
        self._seen = 0
        self._tail()

    def _tail(self) -> None:
        if log_buffer.generation != self._generation:
            self._reload()
            return
        rich_log = self.query_one("#debug-log", RichLog)
        for entry in log_buffer.since(self._seen):
            if entry.at_least(self.min_level):
                rich_log.write(_markup(entry))
        self._seen = log_buffer.total

    def action_close(self) -> None:
        self.dismiss(None)

    def action_clear_logs(self) -> None:
        log_buffer.clear()
        self._reload()

    def action_toggle_level(self) -> None:
        self.min_level = "WARNING" if self.min_level == "DEBUG" else "DEBUG"
        self._reload()

    def action_save_logs(self) -> None:
        path = get_debug_log_path()
        rich_log = self.query_one("#debug-log", RichLog)
        try:
            count = export_logs(path, min_level=self.min_level)
        except OSError as e:
            rich_log.write(f"[red]Export failed: {escape(str(e))}[/red]")
            return
        self.notify(f"Saved {count} entries to {path}")


def _markup(entry: LogEntry) -> str:
    style = _LEVEL_STYLES.get(entry.level, "white")
    ts = datetime.fromtimestamp(entry.timestamp).strftime("%H:%M:%S")
    tag = escape(f"{ts} [{entry.source}] [{entry.level}]")
    return f"[{style}]{tag}[/{style}] {escape(entry.message)}"
