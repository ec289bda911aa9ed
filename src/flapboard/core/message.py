"""Fit free-form text onto a rectangular board."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flapboard.core.errors import MessageTooLongError
from flapboard.limits import MAX_MESSAGE_LENGTH

if TYPE_CHECKING:
    from flapboard.core.alphabet import Alphabet

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True, slots=True)
class PreparedMessage:
    """Message shaped to the board: one padded line per row."""

    lines: tuple[str, ...]
    width: int

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        """Row-major target string, one symbol per cell."""
        return "".join(self.lines)

    def __len__(self) -> int:
        return self.width * self.height


def prepare_message(
    text: str,
    alphabet: Alphabet,
    *,
    max_length: int = MAX_MESSAGE_LENGTH,
) -> PreparedMessage:
    """Upper-case, pad and sanitize ``text`` for display.

    The board is as wide as the longest line. Characters the alphabet cannot
    show become its placeholder symbol, so every cell has a reachable target.

    Raises:
        MessageTooLongError: ``text`` is longer than ``max_length``.
    """
    if len(text) > max_length:
        raise MessageTooLongError(len(text), max_length)

    raw_lines = _LINE_BREAK.split(text)
    width = max(len(line) for line in raw_lines)
    lines = tuple(
        alphabet.sanitize(_upper(line).ljust(width, alphabet.blank)) for line in raw_lines
    )
    return PreparedMessage(lines=lines, width=width)


def _upper(line: str) -> str:
    # str.upper() can expand a character ("ß" -> "SS"); keep one symbol per cell.
    return "".join(up if len(up := ch.upper()) == 1 else ch for ch in line)
