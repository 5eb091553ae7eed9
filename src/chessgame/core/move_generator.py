"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from chessgame.core.board_state import KING_HOME_COL, BoardState, castling_rook_squares
from chessgame.core.enums import CastlingRights, Color, MoveKind, PieceType
from chessgame.core.move import Move
from chessgame.core.movement import promotion_row, pseudo_legal_destinations
from chessgame.core.piece import Piece
from chessgame.core.types import Position


class MoveGenerator:
    """Generates legal moves for a given :class:`BoardState`.

    Legality is decided by simulation: every pseudo-legal move is applied to
    a disposable copy of the state and rejected if it leaves the mover's
    king attacked. Pins, discovered checks and walking into check all fall
    out of that single test.
    """

    __slots__ = ("_state", "_board")

    def __init__(self, state: BoardState) -> None:
        self._state = state
        self._board = state.board

    # -- Public API -----------------------------------------------------------

    def legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return [m for m in self.pseudo_legal_moves() if self._is_legal(m)]

    def legal_moves_from(self, origin: Position) -> list[Move]:
        """Legal moves of the side-to-move piece on *origin* (empty otherwise)."""
        piece = self._board.get(origin)
        if piece is None or piece.color != self._state.side_to_move:
            return []
        return [m for m in self._piece_moves(origin, piece) if self._is_legal(m)]

    def legal_destinations_from(self, origin: Position) -> frozenset[Position]:
        return frozenset(m.to_pos for m in self.legal_moves_from(origin))

    def pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._state.side_to_move
        for origin in self._board.pieces(color):
            piece = self._board.get(origin)
            assert piece is not None
            moves.extend(self._piece_moves(origin, piece))
        return moves

    def find_move(self, from_pos: Position, to_pos: Position) -> Move | None:
        """The legal move template from *from_pos* to *to_pos*, if any."""
        for move in self.legal_moves_from(from_pos):
            if move.to_pos == to_pos:
                return move
        return None

    # -- Attack detection -----------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_pos = self._board.king_position(color)
        return self._board.is_square_attacked(king_pos, color.opposite)

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        return self._board.is_square_attacked(pos, by_color)

    # -- Internals ------------------------------------------------------------

    def _is_legal(self, move: Move) -> bool:
        trial = self._state.copy()
        trial.apply(move)
        return not trial.board.is_square_attacked(
            trial.board.king_position(move.piece.color), move.piece.color.opposite
        )

    def _piece_moves(self, origin: Position, piece: Piece) -> list[Move]:
        board = self._board
        ep = self._state.en_passant
        moves: list[Move] = []
        is_pawn = piece.piece_type == PieceType.PAWN

        for to_pos in pseudo_legal_destinations(board, origin, ep):
            captured = board.get(to_pos)
            kind = MoveKind.NORMAL
            if is_pawn:
                if to_pos.row == promotion_row(piece.color):
                    kind = MoveKind.PROMOTION
                elif captured is None and to_pos.col != origin.col:
                    kind = MoveKind.EN_PASSANT
                    captured = board.get(Position(origin.row, to_pos.col))
                    if captured != Piece(piece.color.opposite, PieceType.PAWN):
                        continue
            moves.append(Move(origin, to_pos, piece, captured, None, kind))

        if piece.piece_type == PieceType.KING:
            moves.extend(self._castling_moves(origin, piece))
        return moves

    def _castling_moves(self, king_pos: Position, king: Piece) -> list[Move]:
        color = king.color
        row = color.back_row
        if king_pos != Position(row, KING_HOME_COL):
            return []

        rights = self._state.castling
        opponent = color.opposite
        board = self._board
        moves: list[Move] = []

        for kind, flag, step in (
            (MoveKind.CASTLE_KINGSIDE, CastlingRights.kingside(color), 1),
            (MoveKind.CASTLE_QUEENSIDE, CastlingRights.queenside(color), -1),
        ):
            if not rights & flag:
                continue
            rook_from, _ = castling_rook_squares(color, kind)
            if board.get(rook_from) != Piece(color, PieceType.ROOK):
                continue
            between = range(min(rook_from.col, KING_HOME_COL) + 1, max(rook_from.col, KING_HOME_COL))
            if any(not board.is_empty(Position(row, col)) for col in between):
                continue
            # King's start, transit and destination squares must be safe.
            path = [Position(row, KING_HOME_COL + step * i) for i in range(3)]
            if any(board.is_square_attacked(pos, opponent) for pos in path):
                continue
            moves.append(Move(king_pos, path[2], king, None, None, kind))
        return moves
