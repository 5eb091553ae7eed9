"""Game - the sole mutator of a match's rules state."""

from __future__ import annotations

import logging
from typing import TypeAlias

from chessgame.core.board import BoardView
from chessgame.core.board_state import BoardState
from chessgame.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameStatus,
    PieceType,
)
from chessgame.core.errors import ChessError, IllegalMoveError, PromotionRequiredError
from chessgame.core.move import Move
from chessgame.core.move_generator import MoveGenerator
from chessgame.core.notation import (
    STARTING_FEN,
    format_history,
    move_to_text,
    position_from_fen,
)
from chessgame.core.piece import piece_type_from_letter
from chessgame.core.rules import Rules
from chessgame.core.snapshot import GameSnapshot
from chessgame.core.types import Position, PositionLike, as_position

_LOGGER = logging.getLogger(__name__)

# A piece type or its letter in either case, e.g. PieceType.QUEEN, "Q" or "n".
PromotionChoice: TypeAlias = PieceType | str


def _promotion_type(choice: PromotionChoice) -> PieceType:
    if isinstance(choice, str):
        try:
            choice = piece_type_from_letter(choice)
        except ValueError:
            raise IllegalMoveError(f"Unknown promotion piece: {choice!r}") from None
    if not isinstance(choice, PieceType) or choice not in PROMOTION_TYPES:
        raise IllegalMoveError(f"Cannot promote to {choice!r}")
    return choice


class Game:
    """Turn state for one match: board, side to move, castling rights,
    en-passant target and the ordered move history.

    External callers only ever see a :class:`BoardView` or a
    :class:`GameSnapshot`; the live board is never handed out.
    """

    __slots__ = ("_state", "_history", "_notation", "_status", "_start_fen")

    def __init__(self, fen: str | None = None) -> None:
        self._state = BoardState()
        self._history: list[Move] = []
        self._notation: list[str] = []
        self._status = GameStatus.IN_PROGRESS
        self._start_fen = STARTING_FEN
        self.new_game(fen)

    # -- Commands ---------------------------------------------------------------

    def new_game(self, fen: str | None = None) -> None:
        """Discard everything and set up the starting (or given) position."""
        self._start_fen = fen or STARTING_FEN
        self._state = position_from_fen(self._start_fen)
        self._history = []
        self._notation = []
        self._status = Rules.status(self._state)

    def move(
        self,
        from_pos: PositionLike,
        to_pos: PositionLike,
        promotion: PromotionChoice | None = None,
    ) -> bool:
        """Play a move if it is legal. Returns False (no state change) otherwise."""
        try:
            self.apply_move(from_pos, to_pos, promotion)
        except ChessError as exc:
            _LOGGER.debug("Rejected move %s-%s: %s", from_pos, to_pos, exc)
            return False
        return True

    def apply_move(
        self,
        from_pos: PositionLike,
        to_pos: PositionLike,
        promotion: PromotionChoice | None = None,
    ) -> Move:
        """Play a move or raise; nothing is mutated when it raises.

        Raises:
            InvalidPositionError: a square is off the board or malformed.
            PromotionRequiredError: a promoting move without a piece.
            IllegalMoveError: the move is not in the legal set, or the
                promotion piece is not a knight, bishop, rook or queen.
        """
        origin = as_position(from_pos)
        target = as_position(to_pos)

        template = MoveGenerator(self._state).find_move(origin, target)
        if template is None:
            raise IllegalMoveError(f"{origin}-{target} is not legal")

        move = template
        if template.requires_promotion:
            if promotion is None:
                raise PromotionRequiredError(f"{origin}-{target} needs a promotion piece")
            move = template.with_promotion(_promotion_type(promotion))

        self._state.apply(move)
        self._history.append(move)
        self._status = Rules.status(self._state)

        gives_check = MoveGenerator(self._state).is_in_check(self._state.side_to_move)
        self._notation.append(
            move_to_text(
                move,
                check=gives_check,
                mate=self._status == GameStatus.CHECKMATE,
            )
        )
        _LOGGER.debug("Played %s (%s)", self._notation[-1], self._status.name)
        return move

    # -- Queries ----------------------------------------------------------------

    def legal_moves_from(self, pos: PositionLike) -> frozenset[Position]:
        """Destinations the piece on *pos* may legally reach (recomputed each call)."""
        return MoveGenerator(self._state).legal_destinations_from(as_position(pos))

    def legal_moves(self) -> list[Move]:
        return MoveGenerator(self._state).legal_moves()

    def requires_promotion(self, from_pos: PositionLike, to_pos: PositionLike) -> bool:
        """Whether moving *from_pos* -> *to_pos* is a legal promoting pawn move."""
        move = MoveGenerator(self._state).find_move(as_position(from_pos), as_position(to_pos))
        return move is not None and move.requires_promotion

    def board(self) -> BoardView:
        return BoardView(self._state.board)

    def white_to_move(self) -> bool:
        return self._state.side_to_move == Color.WHITE

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    @property
    def castling_rights(self) -> CastlingRights:
        return self._state.castling

    @property
    def en_passant_target(self) -> Position | None:
        return self._state.en_passant

    @property
    def start_fen(self) -> str:
        return self._start_fen

    def in_check(self, color: Color) -> bool:
        board = self._state.board
        return board.is_square_attacked(board.king_position(color), color.opposite)

    def status(self) -> GameStatus:
        return self._status

    def is_game_over(self) -> bool:
        return self._status.is_terminal

    def winner(self) -> Color | None:
        """Side that delivered checkmate, or None."""
        if self._status == GameStatus.CHECKMATE:
            return self._state.side_to_move.opposite
        return None

    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    def history_text(self) -> tuple[str, ...]:
        """History entries in long algebraic text, e.g. ``('e2-e4', 'e7-e5')``."""
        return tuple(self._notation)

    def formatted_history(self) -> str:
        return format_history(self._notation)

    @property
    def ply_count(self) -> int:
        return len(self._history)

    def snapshot(self) -> GameSnapshot:
        """Detached copy of the current position for background work."""
        return GameSnapshot(self._state, ply=len(self._history))
