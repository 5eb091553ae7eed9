"""Board coordinates.

Layout (row, col), matching the on-screen grid:
    row 0 = rank 8 (Black's back rank) ... row 7 = rank 1 (White's back rank)
    col 0 = file a ... col 7 = file h
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from chessgame.core.errors import InvalidPositionError

_FILES = "abcdefgh"
_RANKS = "12345678"


def is_on_board(row: int, col: int) -> bool:
    """Check whether (row, col) lies on the 8x8 board."""
    return 0 <= row < 8 and 0 <= col < 8


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Immutable board coordinate."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (isinstance(self.row, int) and isinstance(self.col, int)):
            raise InvalidPositionError(f"Non-integer coordinate: ({self.row!r}, {self.col!r})")
        if not is_on_board(self.row, self.col):
            raise InvalidPositionError(f"Coordinate off the board: ({self.row}, {self.col})")

    @classmethod
    def parse(cls, name: str) -> Position:
        """Parse square name, e.g. 'e4' -> Position(4, 4)."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise InvalidPositionError(f"Invalid square name: {name!r}")
        return cls(8 - int(name[1]), _FILES.index(name[0]))

    @property
    def name(self) -> str:
        """Human-readable name, e.g. Position(7, 0) -> 'a1'."""
        return f"{_FILES[self.col]}{8 - self.row}"

    def offset(self, d_row: int, d_col: int) -> Position | None:
        """Neighbouring coordinate, or None when it falls off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if not is_on_board(row, col):
            return None
        return Position(row, col)

    def __str__(self) -> str:
        return self.name


PositionLike: TypeAlias = Position | str


def as_position(value: PositionLike) -> Position:
    """Accept a :class:`Position` or an algebraic square name."""
    if isinstance(value, Position):
        return value
    if isinstance(value, str):
        return Position.parse(value)
    raise InvalidPositionError(f"Not a board position: {value!r}")


def all_positions() -> Iterator[Position]:
    """All 64 squares, row by row from the top-left corner."""
    for row in range(8):
        for col in range(8):
            yield Position(row, col)
