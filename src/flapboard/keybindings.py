"""Keybindings for the flapboard TUI, using Textual's Binding class directly."""

from __future__ import annotations

from textual.binding import Binding, BindingType

APP_BINDINGS: list[BindingType] = [
    Binding("ctrl+q", "quit", "Quit", priority=True),
    Binding("ctrl+r", "run_message", "Run", priority=True),
    Binding("escape", "cancel_run", "Stop", show=False),
    Binding("f12", "toggle_debug_log", "Debug", show=False),
]

DEBUG_LOG_BINDINGS: list[BindingType] = [
    Binding("escape", "close", "Close"),
    Binding("c", "clear_logs", "Clear"),
    Binding("s", "save_logs", "Save"),
    Binding("w", "toggle_level", "Warnings only"),
]
