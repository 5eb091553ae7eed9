"""BoardState - board plus the auxiliary state needed to generate moves."""

from __future__ import annotations

from chessgame.core.board import Board
from chessgame.core.enums import CastlingRights, Color, MoveKind, PieceType
from chessgame.core.move import Move
from chessgame.core.piece import Piece
from chessgame.core.types import Position

ROOK_CORNERS: dict[Position, CastlingRights] = {
    Position(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(7, 7): CastlingRights.WHITE_KINGSIDE,
    Position(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Position(0, 7): CastlingRights.BLACK_KINGSIDE,
}

KING_HOME_COL = 4


def castling_rook_squares(color: Color, kind: MoveKind) -> tuple[Position, Position]:
    """(rook_from, rook_to) for a castling move of *color*."""
    row = color.back_row
    if kind == MoveKind.CASTLE_KINGSIDE:
        return Position(row, 7), Position(row, 5)
    return Position(row, 0), Position(row, 3)


def en_passant_victim(move: Move) -> Position:
    """Square of the pawn removed by an en-passant capture."""
    return Position(move.from_pos.row, move.to_pos.col)


class BoardState:
    """Board + side to move + castling rights + en-passant target.

    The move generator simulates candidate moves on disposable copies of
    this object; :class:`~chessgame.game.game.Game` owns the live instance.
    """

    __slots__ = ("board", "side_to_move", "castling", "en_passant")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Position | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant

    # -- Core move operation --------------------------------------------------

    def apply(self, move: Move) -> None:
        """Apply *move* unconditionally; the caller has checked legality."""
        board = self.board
        piece = board.remove(move.from_pos)
        if piece is None:
            raise ValueError(f"No piece on {move.from_pos}")

        if move.kind == MoveKind.EN_PASSANT:
            board.remove(en_passant_victim(move))

        placed = piece
        if move.kind == MoveKind.PROMOTION:
            placed = Piece(piece.color, move.promotion or PieceType.QUEEN)
        board.remove(move.to_pos)
        board.place(move.to_pos, placed)

        if move.is_castle:
            rook_from, rook_to = castling_rook_squares(piece.color, move.kind)
            board.relocate(rook_from, rook_to)

        # The target lives for exactly one reply.
        self.en_passant = None
        if move.is_double_pawn_push:
            self.en_passant = Position(
                (move.from_pos.row + move.to_pos.row) // 2, move.from_pos.col
            )

        self._update_castling(move, piece)
        self.side_to_move = self.side_to_move.opposite

    def _update_castling(self, move: Move, piece: Piece) -> None:
        rights = self.castling
        if piece.piece_type == PieceType.KING:
            rights &= ~CastlingRights.both(piece.color)

        # A rook leaving its corner, or anything landing on it, ends that side.
        for pos in (move.from_pos, move.to_pos):
            corner = ROOK_CORNERS.get(pos)
            if corner is not None:
                rights &= ~corner
        self.castling = rights

    # -- Utilities ------------------------------------------------------------

    def copy(self) -> BoardState:
        return BoardState(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(side_to_move={self.side_to_move}, "
            f"castling={self.castling!r}, en_passant={self.en_passant})\n"
            f"{self.board!r}"
        )
