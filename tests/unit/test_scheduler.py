"""Unit tests for the cascade scheduler."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from flapboard.core.alphabet import Alphabet
from flapboard.core.animator import Timing
from flapboard.core.cell import build_memory_cells
from flapboard.core.enums import CellState, RunState, SearchMode
from flapboard.core.errors import ConfigurationError, RunInProgressError
from flapboard.core.scheduler import CascadeScheduler, RunResult
from flapboard.debug_log import log_buffer
from tests.helpers.cells import FailingSleep, RecordingCell

pytestmark = pytest.mark.unit


@pytest.fixture
def on_complete() -> MagicMock:
    return MagicMock()


@pytest.fixture
def scheduler(on_complete: MagicMock) -> CascadeScheduler:
    return CascadeScheduler(Timing.instant(), on_complete=on_complete)


class TestRunAll:
    async def test_reference_scenario(self, scheduler: CascadeScheduler, alphabet: Alphabet):
        cells = build_memory_cells(2)

        result = await scheduler.run_all("AB", cells, alphabet)

        assert result.state == RunState.COMPLETED
        assert result.ok
        assert sorted(result.completed) == [0, 1]
        assert [(c.top, c.bottom) for c in cells] == [("A", "A"), ("B", "B")]
        assert result.reason is None

    async def test_completion_callback_invoked_once(
        self, scheduler: CascadeScheduler, on_complete: MagicMock, alphabet: Alphabet
    ):
        result = await scheduler.run_all("A B", build_memory_cells(3), alphabet)

        on_complete.assert_called_once_with(result)
        assert scheduler.state == RunState.IDLE
        assert scheduler.active_run is None

    async def test_completion_order_follows_search_length(
        self, alphabet: Alphabet, on_complete: MagicMock
    ):
        scheduler = CascadeScheduler(
            Timing(cascade_ms=0, flap_pause_ms=1, glyph_pause_ms=5), on_complete=on_complete
        )

        result = await scheduler.run_all("☒A", build_memory_cells(2), alphabet)

        # Cell 1 needs one flip, cell 0 three: cell 1 settles first
        assert result.completed == [1, 0]

    async def test_all_blank_target_converges_without_writes(
        self, scheduler: CascadeScheduler, alphabet: Alphabet
    ):
        cells = [RecordingCell(index=i) for i in range(4)]

        result = await scheduler.run_all("    ", cells, alphabet)

        assert result.ok
        assert all(cell.writes == [] for cell in cells)

    async def test_empty_board_completes(
        self, scheduler: CascadeScheduler, on_complete: MagicMock, alphabet: Alphabet
    ):
        result = await scheduler.run_all("", [], alphabet)

        assert result.state == RunState.COMPLETED
        assert result.completed == []
        on_complete.assert_called_once()

    async def test_rerun_produces_same_board(
        self, scheduler: CascadeScheduler, alphabet: Alphabet
    ):
        first = build_memory_cells(4)
        await scheduler.run_all("BA☒ ", first, alphabet)
        second = build_memory_cells(4)
        await scheduler.run_all("BA☒ ", second, alphabet)

        assert [c.top for c in first] == [c.top for c in second] == list("BA☒ ")
        assert [c.bottom for c in first] == [c.bottom for c in second]


class TestCascade:
    async def test_start_offsets_follow_index(self, alphabet: Alphabet):
        cascade_ms = 15
        scheduler = CascadeScheduler(
            Timing(cascade_ms=cascade_ms, flap_pause_ms=0, glyph_pause_ms=0)
        )
        cells = [RecordingCell(index=i) for i in range(4)]
        started = asyncio.get_running_loop().time()

        await scheduler.run_all("AAAA", cells, alphabet)

        firsts = [cell.first_write_at for cell in cells]
        assert all(at is not None for at in firsts)
        tolerance = 0.002
        for i, at in enumerate(firsts):
            assert at - started >= i * cascade_ms / 1000 - tolerance
        assert firsts == sorted(firsts)

    async def test_delays_assigned_per_index(self, scheduler: CascadeScheduler, alphabet: Alphabet):
        scheduler.timing = Timing(cascade_ms=90, flap_pause_ms=0, glyph_pause_ms=0)
        run = scheduler.prepare("AB ", build_memory_cells(3), alphabet)

        assert [task.start_delay_ms for task in run.tasks] == [0, 90, 180]
        assert all(task.state == CellState.PENDING for task in run.tasks)


class TestValidation:
    async def test_length_mismatch_rejected_before_launch(
        self, scheduler: CascadeScheduler, on_complete: MagicMock, alphabet: Alphabet
    ):
        cells = build_memory_cells(3)
        with pytest.raises(ConfigurationError, match="does not match"):
            await scheduler.run_all("AB", cells, alphabet)

        on_complete.assert_not_called()
        assert all(c.top == " " for c in cells)

    async def test_out_of_alphabet_target_rejected(
        self, scheduler: CascadeScheduler, on_complete: MagicMock, alphabet: Alphabet
    ):
        cells = build_memory_cells(2)
        with pytest.raises(ConfigurationError, match="not in the alphabet"):
            await scheduler.run_all("Aa", cells, alphabet)

        on_complete.assert_not_called()
        assert cells[0].top == " "

    async def test_reentrant_trigger_rejected(self, alphabet: Alphabet):
        scheduler = CascadeScheduler(Timing(cascade_ms=0, flap_pause_ms=5, glyph_pause_ms=5))
        first = asyncio.create_task(scheduler.run_all("B", build_memory_cells(1), alphabet))
        await asyncio.sleep(0)

        assert scheduler.is_running
        with pytest.raises(RunInProgressError):
            await scheduler.run_all("A", build_memory_cells(1), alphabet)

        result = await first
        assert result.ok
        assert not scheduler.is_running


class TestFailures:
    async def test_timer_failure_reported_after_all_tasks_settle(
        self, on_complete: MagicMock, alphabet: Alphabet
    ):
        # Cell 1 is the only one whose start delay is 10ms
        sleep = FailingSleep(fail_at=0.010)
        scheduler = CascadeScheduler(
            Timing(cascade_ms=10, flap_pause_ms=1, glyph_pause_ms=1),
            on_complete=on_complete,
            sleep=sleep,
        )
        cells = build_memory_cells(3)

        result = await scheduler.run_all("☒☒☒", cells, alphabet)

        assert result.state == RunState.FAILED
        assert not result.ok
        assert list(result.failures) == [1]
        assert isinstance(result.failures[1], OSError)
        assert sorted(result.completed) == [0, 2]
        assert (cells[0].top, cells[2].top) == ("☒", "☒")
        assert cells[1].top == " "
        assert "Cell 1 failed" in (result.reason or "")
        on_complete.assert_called_once_with(result)
        assert not scheduler.is_running

    async def test_slot_failure_does_not_touch_other_cells(
        self, scheduler: CascadeScheduler, alphabet: Alphabet
    ):
        cells = [RecordingCell(index=0), RecordingCell(index=1, fail_on_bottom="A")]

        result = await scheduler.run_all("BB", cells, alphabet)

        assert result.state == RunState.FAILED
        assert cells[0].top == cells[0].bottom == "B"
        assert (cells[1].top, cells[1].bottom) == ("A", " ")
        assert scheduler.active_run is None


class TestForwardMode:
    async def test_exhausted_cells_reported_but_run_completes(self, alphabet: Alphabet):
        scheduler = CascadeScheduler(Timing.instant(), search_mode=SearchMode.FORWARD)
        cells = build_memory_cells(2)
        cells[1].top = cells[1].bottom = "B"

        result = await scheduler.run_all("AA", cells, alphabet)

        assert result.state == RunState.COMPLETED
        assert result.exhausted == [1]
        assert cells[0].top == "A"
        assert cells[1].top == "☒"


class TestCancellation:
    async def test_cancel_stops_run_and_reports_cancelled(
        self, on_complete: MagicMock, alphabet: Alphabet
    ):
        scheduler = CascadeScheduler(
            Timing(cascade_ms=50, flap_pause_ms=50, glyph_pause_ms=50), on_complete=on_complete
        )
        cells = build_memory_cells(3)
        run_task = asyncio.create_task(scheduler.run_all("☒☒☒", cells, alphabet))
        await asyncio.sleep(0.01)

        assert scheduler.cancel() is True
        result = await run_task

        assert result.state == RunState.CANCELLED
        assert result.reason == "Run cancelled"
        assert cells[2].top == " "
        on_complete.assert_called_once_with(result)
        assert scheduler.cancel() is False

    async def test_cancelling_awaiting_task_still_publishes_result(
        self, on_complete: MagicMock, alphabet: Alphabet
    ):
        scheduler = CascadeScheduler(
            Timing(cascade_ms=50, flap_pause_ms=50, glyph_pause_ms=50), on_complete=on_complete
        )
        run_task = asyncio.create_task(scheduler.run_all("☒☒", build_memory_cells(2), alphabet))
        await asyncio.sleep(0.01)

        run_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await run_task

        on_complete.assert_called_once()
        published: RunResult = on_complete.call_args.args[0]
        assert published.state == RunState.CANCELLED
        assert not scheduler.is_running

    async def test_failing_callback_does_not_mask_cancellation(self, alphabet: Alphabet):
        on_complete = MagicMock(side_effect=LookupError("screen gone"))
        scheduler = CascadeScheduler(
            Timing(cascade_ms=50, flap_pause_ms=50, glyph_pause_ms=50), on_complete=on_complete
        )
        run_task = asyncio.create_task(scheduler.run_all("☒☒", build_memory_cells(2), alphabet))
        await asyncio.sleep(0.01)

        run_task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await run_task

        on_complete.assert_called_once()
        assert not scheduler.is_running
        assert any("completion callback failed" in e.message for e in log_buffer)


class TestCompletionCallback:
    async def test_failing_callback_does_not_mask_result(self, alphabet: Alphabet):
        on_complete = MagicMock(side_effect=RuntimeError("boom"))
        scheduler = CascadeScheduler(Timing.instant(), on_complete=on_complete)
        cells = build_memory_cells(2)

        result = await scheduler.run_all("AB", cells, alphabet)

        assert result.ok
        assert [cell.top for cell in cells] == ["A", "B"]
        on_complete.assert_called_once_with(result)
        errors = [e for e in log_buffer if e.level == "ERROR"]
        assert any("RuntimeError('boom')" in e.message for e in errors)
