"""Test helpers package."""

from tests.helpers.cells import FailingSleep, RecordingCell, SlotWrite
from tests.helpers.config import write_test_config
from tests.helpers.wait import wait_for_run, wait_until

__all__ = [
    "FailingSleep",
    "RecordingCell",
    "SlotWrite",
    "wait_for_run",
    "wait_until",
    "write_test_config",
]
