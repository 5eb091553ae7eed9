"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from chessgame.core.enums import Color, PieceType
from chessgame.core.errors import InvariantViolationError
from chessgame.core.movement import attack_squares
from chessgame.core.piece import Piece
from chessgame.core.types import Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(pos: Position) -> int:
    return pos.row * 8 + pos.col


class Board:
    """Mutable 64-square board with a king-position cache."""

    __slots__ = ("_squares", "_king_positions")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color] -> king position cache (None if king missing).
        self._king_positions: list[Position | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def get(self, pos: Position) -> Piece | None:
        return self._squares[_index(pos)]

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._squares[_index(pos)]

    def place(self, pos: Position, piece: Piece) -> None:
        """Put *piece* on *pos*, replacing whatever stood there.

        Raises:
            InvariantViolationError: *piece* is a king and its side already
                has one elsewhere.
        """
        if piece.piece_type == PieceType.KING:
            current = self._king_positions[int(piece.color)]
            if current is not None and current != pos:
                raise InvariantViolationError(f"{piece.color.name} already has a king on {current}")
        self.remove(pos)
        self._squares[_index(pos)] = piece
        if piece.piece_type == PieceType.KING:
            self._king_positions[int(piece.color)] = pos

    def remove(self, pos: Position) -> Piece | None:
        """Empty *pos* and return the piece that was there."""
        idx = _index(pos)
        old_piece = self._squares[idx]
        if old_piece is None:
            return None
        self._squares[idx] = None
        color_idx = int(old_piece.color)
        if (
            old_piece.piece_type == PieceType.KING
            and self._king_positions[color_idx] == pos
        ):
            self._king_positions[color_idx] = None
        return old_piece

    def relocate(self, from_pos: Position, to_pos: Position) -> Piece | None:
        """Move the piece on *from_pos* to *to_pos*; returns the displaced piece."""
        piece = self.remove(from_pos)
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")
        captured = self.remove(to_pos)
        self.place(to_pos, piece)
        return captured

    def is_empty(self, pos: Position) -> bool:
        return self._squares[_index(pos)] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """(position, piece) for every occupied square, top row first."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield Position(idx >> 3, idx & 7), piece

    def pieces(self, color: Color) -> list[Position]:
        """All squares occupied by *color*."""
        return [pos for pos, piece in self.occupied() if piece.color == color]

    def has_king(self, color: Color) -> bool:
        return self._king_positions[int(color)] is not None

    def king_position(self, color: Color) -> Position:
        """Return the single king square for *color*."""
        pos = self._king_positions[int(color)]
        if pos is None:
            raise InvariantViolationError(f"No {color.name} king on board")
        return pos

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        """Is *pos* attacked by any piece of *by_color*?"""
        for origin, piece in self.occupied():
            if piece.color == by_color and pos in attack_squares(self, origin):
                return True
        return False

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._king_positions = self._king_positions.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b.place(Position(6, col), Piece(Color.WHITE, PieceType.PAWN))
            b.place(Position(1, col), Piece(Color.BLACK, PieceType.PAWN))

        for col, pt in enumerate(_BACK_RANK):
            b.place(Position(7, col), Piece(Color.WHITE, pt))
            b.place(Position(0, col), Piece(Color.BLACK, pt))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoardView):
            other = other._board
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[row * 8 + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)


class BoardView:
    """Read-only view over a :class:`Board`.

    Handed to callers outside the rules engine so they can render and query
    the board without holding a mutable alias.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    def get(self, pos: Position) -> Piece | None:
        return self._board.get(pos)

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._board.get(pos)

    def __iter__(self) -> Iterator[tuple[Position, Piece]]:
        return self._board.occupied()

    def is_empty(self, pos: Position) -> bool:
        return self._board.is_empty(pos)

    def pieces(self, color: Color) -> list[Position]:
        return self._board.pieces(color)

    def king_position(self, color: Color) -> Position:
        return self._board.king_position(color)

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        return self._board.is_square_attacked(pos, by_color)

    def copy(self) -> Board:
        """Detached mutable copy; changes to it never reach the game."""
        return self._board.copy()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoardView):
            return self._board == other._board
        if isinstance(other, Board):
            return self._board == other
        return NotImplemented

    def __repr__(self) -> str:
        return repr(self._board)
