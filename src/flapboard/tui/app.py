"""Main flapboard TUI application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import App, SystemCommand
from textual.containers import Horizontal
from textual.signal import Signal
from textual.widgets import Button, Footer, Header, TextArea

from flapboard.config import FlapboardConfig
from flapboard.core.enums import RunState
from flapboard.core.errors import ConfigurationError
from flapboard.core.message import prepare_message
from flapboard.core.scheduler import CascadeScheduler, RunResult
from flapboard.debug_log import log, setup_debug_logging
from flapboard.keybindings import APP_BINDINGS
from flapboard.theme import FLAPBOARD_THEME
from flapboard.tui.widgets import FlapBoard

if TYPE_CHECKING:
    from collections.abc import Iterable

    from textual.app import ComposeResult
    from textual.screen import Screen


class FlapboardApp(App):
    """Split-flap message board."""

    TITLE = "FLAPBOARD"
    CSS_PATH = "styles/flapboard.tcss"

    BINDINGS = APP_BINDINGS

    def __init__(
        self,
        config: FlapboardConfig | None = None,
        *,
        message: str | None = None,
        autorun: bool = False,
    ) -> None:
        super().__init__()
        self.register_theme(FLAPBOARD_THEME)
        self.theme = "flapboard"

        self.config = config or FlapboardConfig()
        self.alphabet = self.config.display.alphabet()
        self.scheduler = CascadeScheduler(
            self.config.timing.to_timing(),
            search_mode=self.config.display.mode,
            on_complete=self._on_run_complete,
        )
        self.run_finished_signal: Signal[RunResult] = Signal(self, "run_finished")
        self.last_result: RunResult | None = None
        self._initial_message = message if message is not None else self.config.ui.default_message
        self._autorun = autorun

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="controls"):
            yield TextArea(self._initial_message, id="message", soft_wrap=False)
            yield Button("Run", id="run", variant="primary")
        yield FlapBoard(
            id="display",
            blank=self.alphabet.blank,
            split_gap=self.config.ui.split_gap,
        )
        yield Footer()

    def on_mount(self) -> None:
        setup_debug_logging()
        log.info(
            "Flapboard started",
            mode=self.config.display.search_mode,
            symbols=len(self.alphabet),
        )
        if self._autorun:
            self.action_run_message()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "run":
            self.action_run_message()

    def action_run_message(self) -> None:
        """Start a cascade for the text in the message box."""
        button = self.query_one("#run", Button)
        if button.disabled or self.scheduler.is_running:
            return
        button.disabled = True
        self.run_worker(self._start_run(), group="cascade", exit_on_error=False)

    async def _start_run(self) -> None:
        text = self.query_one("#message", TextArea).text
        try:
            prepared = prepare_message(
                text, self.alphabet, max_length=self.config.display.max_message_length
            )
            board = self.query_one("#display", FlapBoard)
            cells = await board.build(prepared.width, prepared.height)
            log.info("Grid built", width=prepared.width, height=prepared.height)
            await self.scheduler.run_all(prepared.text, cells, self.alphabet)
        except ConfigurationError as e:
            log.warning("Run rejected", error=str(e))
            self.notify(str(e), title="Message", severity="error")
        finally:
            self._enable_run_button()

    def _enable_run_button(self) -> None:
        if not self.is_running:
            return
        for button in self.query("#run").results(Button):
            button.disabled = False

    def _on_run_complete(self, result: RunResult) -> None:
        self.last_result = result
        if not self.is_running:
            # Exiting mid-run: the widgets are being torn down
            return
        if result.state == RunState.FAILED:
            self.notify(result.reason or "Run failed", title="Run failed", severity="error")
        elif result.state == RunState.CANCELLED:
            self.notify("Run stopped", severity="warning")
        elif result.exhausted:
            self.notify(
                f"{len(result.exhausted)} cell(s) could not reach their glyph",
                severity="warning",
            )
        self.run_finished_signal.publish(result)

    def action_cancel_run(self) -> None:
        if not self.scheduler.cancel():
            return
        log.info("Run cancelled by user")

    def get_system_commands(self, screen: Screen) -> Iterable[SystemCommand]:
        yield from super().get_system_commands(screen)
        yield SystemCommand("Run", "Display the message", self.action_run_message)
        yield SystemCommand("Stop", "Stop the running cascade", self.action_cancel_run)
        yield SystemCommand("Debug Log", "Open debug log viewer", self.action_toggle_debug_log)

    def action_toggle_debug_log(self) -> None:
        """Open the debug log viewer (F12). Disabled in production builds."""
        from flapboard.limits import DEBUG_BUILD

        if not DEBUG_BUILD:
            self.notify("Debug log disabled in production builds", severity="warning")
            return

        from flapboard.tui.modals import DebugLogModal

        self.push_screen(DebugLogModal())


def run(config: FlapboardConfig | None = None, *, message: str | None = None) -> None:
    """Run the flapboard application."""
    app = FlapboardApp(config, message=message, autorun=message is not None)
    app.run()
