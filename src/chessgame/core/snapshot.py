"""GameSnapshot - detached, read-only copy of a game's position."""

from __future__ import annotations

from chessgame.core.board import BoardView
from chessgame.core.board_state import BoardState
from chessgame.core.enums import CastlingRights, Color, GameStatus
from chessgame.core.move import Move
from chessgame.core.move_generator import MoveGenerator
from chessgame.core.rules import Rules
from chessgame.core.types import Position


class GameSnapshot:
    """Immutable view of the position at the moment it was taken.

    Holds its own copy of the board state, so it is safe to hand to a
    worker thread while the live game keeps moving.
    """

    __slots__ = ("_state", "_ply")

    def __init__(self, state: BoardState, ply: int = 0) -> None:
        self._state = state.copy()
        self._ply = ply

    @property
    def board(self) -> BoardView:
        return BoardView(self._state.board)

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    def white_to_move(self) -> bool:
        return self._state.side_to_move == Color.WHITE

    @property
    def castling(self) -> CastlingRights:
        return self._state.castling

    @property
    def en_passant(self) -> Position | None:
        return self._state.en_passant

    @property
    def ply(self) -> int:
        """Number of half-moves played before this snapshot."""
        return self._ply

    def legal_moves(self) -> list[Move]:
        return MoveGenerator(self._state).legal_moves()

    def legal_moves_from(self, origin: Position) -> list[Move]:
        return MoveGenerator(self._state).legal_moves_from(origin)

    def status(self) -> GameStatus:
        return Rules.status(self._state)

    def is_game_over(self) -> bool:
        return self.status().is_terminal

    def state_copy(self) -> BoardState:
        """Fresh mutable copy, e.g. for look-ahead experiments."""
        return self._state.copy()

    def __repr__(self) -> str:
        return f"GameSnapshot(ply={self._ply}, side_to_move={self.side_to_move})"
