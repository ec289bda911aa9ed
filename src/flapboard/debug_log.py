"""Debug logging with in-app viewer support.

Every ``log`` call and every stdlib ``logging`` record ends up in
``log_buffer``, a bounded store the F12 viewer polls and ``export_logs``
dumps to disk.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from flapboard.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def level_rank(level: str) -> int:
    """Position of ``level`` in LEVELS; unknown names sort with INFO."""
    try:
        return LEVELS.index(level)
    except ValueError:
        return 1


class LogSource(StrEnum):
    """Where an entry came from, shown as a short tag."""

    APP = "FB"
    STDLIB = "PY"


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: str
    message: str
    timestamp: float
    source: LogSource

    def at_least(self, level: str) -> bool:
        return level_rank(self.level) >= level_rank(level)


class LogBuffer:
    """Ring of recent entries.

    ``generation`` changes whenever the buffer is cleared. ``total`` counts
    entries appended since the last clear, including ones the ring already
    dropped, so a viewer can ask for what it has not seen with ``since``.
    """

    def __init__(self, maxlen: int = MAX_LOG_LINES) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=maxlen)
        self.generation = 0
        self.total = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))

    def __getitem__(self, position: int) -> LogEntry:
        return self._entries[position]

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        self.total += 1

    def clear(self) -> None:
        self._entries.clear()
        self.total = 0
        self.generation += 1

    def since(self, seen: int) -> list[LogEntry]:
        """Entries appended after the first ``seen`` that are still held."""
        missing = self.total - seen
        if missing <= 0:
            return []
        entries = list(self._entries)
        return entries[-min(missing, len(entries)) :]


log_buffer = LogBuffer()


def _render(args: tuple[object, ...], context: dict[str, Any]) -> str:
    output = " ".join(str(arg) for arg in args)
    if context:
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        output = f"{output} {pairs}" if output else pairs
    if len(output) > MAX_LOG_MESSAGE_LENGTH:
        output = output[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return output


class FlapLogger:
    """``log.info("Grid built", width=12)`` style logger.

    Keyword arguments are appended as ``key=value`` pairs. Entries also go to
    Textual's devtools console when one is attached.
    """

    def __call__(self, *args: object, **context: Any) -> None:
        self.info(*args, **context)

    def _log(self, level: str, args: tuple[object, ...], context: dict[str, Any]) -> None:
        message = _render(args, context)
        log_buffer.append(LogEntry(level, message, time.time(), LogSource.APP))

        try:
            from textual import log as textual_log

            textual_log(message)
        except Exception:
            pass

    def debug(self, *args: object, **context: Any) -> None:
        self._log("DEBUG", args, context)

    def info(self, *args: object, **context: Any) -> None:
        self._log("INFO", args, context)

    def warning(self, *args: object, **context: Any) -> None:
        self._log("WARNING", args, context)

    def error(self, *args: object, **context: Any) -> None:
        self._log("ERROR", args, context)


class DebugLogHandler(logging.Handler):
    """Copies stdlib logging records into ``log_buffer``."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                record.levelname, self.format(record), record.created, LogSource.STDLIB
            )
        except Exception:
            self.handleError(record)
            return
        log_buffer.append(entry)


_handler: DebugLogHandler | None = None


def setup_debug_logging() -> None:
    """Attach the buffer handler to the root logger once per process."""
    global _handler

    if _handler is not None:
        return

    _handler = DebugLogHandler()
    _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logging.getLogger().addHandler(_handler)
    log.info("Debug logging initialized - press F12 to view logs")


def format_entry(entry: LogEntry) -> str:
    ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    return f"{ts} [{entry.source}] [{entry.level}] {entry.message}"


def export_logs(path: Path, *, min_level: str = "DEBUG") -> int:
    """Write buffered entries at or above ``min_level`` to ``path``.

    Returns:
        Number of entries written
    """
    entries = [entry for entry in log_buffer if entry.at_least(min_level)]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(f"# flapboard debug log: {len(entries)} entries, level >= {min_level}\n\n")
        for entry in entries:
            f.write(format_entry(entry) + "\n")
    return len(entries)


log = FlapLogger()
