"""Exception types raised by the flapboard core."""

from __future__ import annotations


class FlapboardError(Exception):
    """Base class for flapboard errors."""


class ConfigurationError(FlapboardError, ValueError):
    """A run was requested with inputs that violate its preconditions.

    Raised before any animation task is launched.
    """


class RunInProgressError(ConfigurationError):
    """A new run was triggered while a previous one still owns its cells."""


class MessageTooLongError(ConfigurationError):
    """Input text exceeds the configured maximum message length."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"Message is {length} characters long (maximum is {max_length})")
        self.length = length
        self.max_length = max_length
