"""Ordered glyph alphabet shared by every cell of the board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from flapboard.core.enums import SearchMode
from flapboard.core.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class Alphabet:
    """Immutable ordered set of displayable symbols.

    The first symbol is the blank glyph every cell starts on; the last symbol is
    the placeholder substituted for unsupported input characters.
    """

    symbols: tuple[str, ...]
    _positions: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) < 2:
            raise ConfigurationError("Alphabet needs at least a blank and a placeholder symbol")
        for symbol in self.symbols:
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise ConfigurationError(f"Alphabet symbols must be single characters: {symbol!r}")
        positions: dict[str, int] = {}
        for i, symbol in enumerate(self.symbols):
            if symbol in positions:
                raise ConfigurationError(f"Duplicate symbol in alphabet: {symbol!r}")
            positions[symbol] = i
        object.__setattr__(self, "_positions", positions)

    @classmethod
    def from_string(cls, characters: str) -> Alphabet:
        return cls(tuple(characters))

    @property
    def blank(self) -> str:
        return self.symbols[0]

    @property
    def placeholder(self) -> str:
        return self.symbols[-1]

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._positions

    def sanitize(self, text: Iterable[str]) -> str:
        """Replace every character outside the alphabet with the placeholder."""
        return "".join(ch if ch in self._positions else self.placeholder for ch in text)

    def search_path(self, current: str, mode: SearchMode = SearchMode.WRAP) -> tuple[str, ...]:
        """Symbols a cell showing ``current`` visits, in order.

        An unknown ``current`` (e.g. a glyph set outside the alphabet) walks the
        whole alphabet from the blank in either mode.
        """
        position = self._positions.get(current)
        if position is None:
            return self.symbols
        after = self.symbols[position + 1 :]
        if mode is SearchMode.FORWARD:
            return after
        return after + self.symbols[: position + 1]
