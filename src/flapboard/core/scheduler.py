"""Cascade scheduler: fans out one animator per cell and joins them.

Cell ``i`` starts ``i * cascade_ms`` after the run begins, producing the
left-to-right wave of a departure board. All outcomes are collected before the
run reports, so no cell is left mid-flip without a task owning it.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flapboard.core.animator import CellAnimator, Timing
from flapboard.core.enums import CellState, RunState, SearchMode
from flapboard.core.errors import ConfigurationError, RunInProgressError
from flapboard.debug_log import log

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from flapboard.core.alphabet import Alphabet
    from flapboard.core.animator import Sleep
    from flapboard.core.cell import GlyphCell


@dataclass(slots=True)
class AnimationTask:
    """One cell's unit of work within a run."""

    index: int
    cell: GlyphCell
    target: str
    start_delay_ms: int
    animator: CellAnimator
    task: asyncio.Task[int] | None = None

    @property
    def state(self) -> CellState:
        return self.animator.state


@dataclass(slots=True)
class RunResult:
    """Outcome of a run, published once every task has settled."""

    state: RunState
    completed: list[int] = field(default_factory=list)
    exhausted: list[int] = field(default_factory=list)
    failures: dict[int, BaseException] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.state == RunState.COMPLETED

    @property
    def reason(self) -> str | None:
        """Human-readable failure reason, None for successful runs."""
        if self.state == RunState.CANCELLED:
            return "Run cancelled"
        if not self.failures:
            return None
        index, error = min(self.failures.items())
        extra = len(self.failures) - 1
        suffix = f" (+{extra} more)" if extra else ""
        return f"Cell {index} failed: {error!r}{suffix}"


class Run:
    """All animation tasks of one invocation of the cascade."""

    def __init__(self, tasks: list[AnimationTask]) -> None:
        self.tasks = tasks
        self.state = RunState.IDLE
        self._completed: list[int] = []
        self._cancel_requested = False

    def __len__(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> list[int]:
        """Indices of settled cells, in completion order."""
        return list(self._completed)

    async def execute(self) -> RunResult:
        """Launch every task concurrently and wait for all of them."""
        loop = asyncio.get_running_loop()
        started = loop.time()
        self.state = RunState.RUNNING
        for record in self.tasks:
            record.task = asyncio.create_task(
                self._run_one(record), name=f"flapboard-cell-{record.index}"
            )

        try:
            outcomes = await asyncio.gather(
                *(record.task for record in self.tasks if record.task is not None),
                return_exceptions=True,
            )
        except asyncio.CancelledError:
            # The awaiting coroutine itself was cancelled: gather has already
            # cancelled the children, wait for them to settle before reporting.
            pending = [r.task for r in self.tasks if r.task is not None]
            if pending:
                await asyncio.wait(pending)
            self.state = RunState.CANCELLED
            raise

        failures: dict[int, BaseException] = {}
        cancelled = False
        for record, outcome in zip(self.tasks, outcomes, strict=True):
            if isinstance(outcome, asyncio.CancelledError):
                cancelled = True
            elif isinstance(outcome, BaseException):
                failures[record.index] = outcome

        if failures:
            self.state = RunState.FAILED
        elif cancelled or self._cancel_requested:
            self.state = RunState.CANCELLED
        else:
            self.state = RunState.COMPLETED

        return RunResult(
            state=self.state,
            completed=self.completed,
            exhausted=[r.index for r in self.tasks if r.state == CellState.EXHAUSTED],
            failures=failures,
            elapsed=loop.time() - started,
        )

    async def _run_one(self, record: AnimationTask) -> int:
        index = await record.animator.run()
        self._completed.append(index)
        return index

    def cancel(self) -> None:
        """Cancel every unfinished task at its next suspension point."""
        self._cancel_requested = True
        for record in self.tasks:
            if record.task is not None and not record.task.done():
                record.task.cancel()


class CascadeScheduler:
    """Launches and joins cascade runs.

    Only one run may be active per scheduler. ``on_complete`` is invoked
    exactly once per run, after all of its tasks settled, with the result.
    """

    def __init__(
        self,
        timing: Timing | None = None,
        *,
        search_mode: SearchMode = SearchMode.WRAP,
        on_complete: Callable[[RunResult], None] | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.timing = timing or Timing()
        self.search_mode = search_mode
        self._on_complete = on_complete
        self._sleep = sleep
        self._active: Run | None = None

    @property
    def state(self) -> RunState:
        if self._active is None:
            return RunState.IDLE
        return self._active.state

    @property
    def is_running(self) -> bool:
        return self._active is not None

    @property
    def active_run(self) -> Run | None:
        return self._active

    def prepare(
        self,
        targets: Sequence[str],
        cells: Sequence[GlyphCell],
        alphabet: Alphabet,
    ) -> Run:
        """Validate inputs and build the run without starting it."""
        if self._active is not None:
            raise RunInProgressError("A run is already in progress")
        if len(targets) != len(cells):
            raise ConfigurationError(
                f"Target length {len(targets)} does not match cell count {len(cells)}"
            )
        for i, target in enumerate(targets):
            if target not in alphabet:
                raise ConfigurationError(
                    f"Target {target!r} at position {i} is not in the alphabet"
                )

        tasks: list[AnimationTask] = []
        for i, (cell, target) in enumerate(zip(cells, targets, strict=True)):
            delay = self.timing.start_delay_ms(i)
            animator = CellAnimator(
                cell,
                target,
                alphabet,
                start_delay_ms=delay,
                timing=self.timing,
                search_mode=self.search_mode,
                sleep=self._sleep,
            )
            tasks.append(
                AnimationTask(
                    index=i, cell=cell, target=target, start_delay_ms=delay, animator=animator
                )
            )
        return Run(tasks)

    async def run_all(
        self,
        targets: Sequence[str],
        cells: Sequence[GlyphCell],
        alphabet: Alphabet,
    ) -> RunResult:
        """Animate every cell to its target.

        Raises:
            ConfigurationError: Inputs are invalid; nothing was launched.
        """
        run = self.prepare(targets, cells, alphabet)
        self._active = run
        log.info("Cascade run started", cells=len(run), mode=self.search_mode.value)

        result: RunResult | None = None
        try:
            result = await run.execute()
        finally:
            self._active = None
            if result is None:
                result = RunResult(state=RunState.CANCELLED, completed=run.completed)
            self._report(result)
        return result

    def cancel(self) -> bool:
        """Cancel the active run. Returns False when nothing is running."""
        if self._active is None:
            return False
        log.info("Cancelling cascade run", cells=len(self._active))
        self._active.cancel()
        return True

    def _report(self, result: RunResult) -> None:
        if result.state == RunState.FAILED:
            log.error(
                "Cascade run failed",
                reason=result.reason,
                failed=len(result.failures),
                completed=len(result.completed),
            )
        else:
            log.info(
                "Cascade run finished",
                state=result.state.value,
                completed=len(result.completed),
                exhausted=len(result.exhausted),
                elapsed=round(result.elapsed, 3),
            )
        if self._on_complete is None:
            return
        try:
            self._on_complete(result)
        except Exception as e:
            # The run's own result or CancelledError still propagates
            log.error("Run completion callback failed", error=repr(e), state=result.state.value)
