"""Per-piece movement rules.

Each rule is a pure function ``(board, origin, en_passant) -> set[Position]``
returning pseudo-legal destinations for the piece standing on *origin*.
Castling is not part of the king rule: it depends on game-wide state and is
added by :class:`~chessgame.core.move_generator.MoveGenerator`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from chessgame.core.enums import Color, PieceType
from chessgame.core.types import Position, all_positions

if TYPE_CHECKING:
    from chessgame.core.piece import Piece


class BoardLike(Protocol):
    """Read access the rules need from a board."""

    def get(self, pos: Position) -> Piece | None: ...


MovementRule = Callable[[BoardLike, Position, Position | None], set[Position]]

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ----------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in all_positions():
        moves = (pos.offset(dr, dc) for dr, dc in offsets)
        targets[pos] = tuple(m for m in moves if m is not None)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in all_positions():
        square_rays: list[tuple[Position, ...]] = []
        for dr, dc in directions:
            ray: list[Position] = []
            step = pos.offset(dr, dc)
            while step is not None:
                ray.append(step)
                step = step.offset(dr, dc)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDING_RAYS: dict[PieceType, dict[Position, tuple[tuple[Position, ...], ...]]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


def _mover(board: BoardLike, origin: Position) -> Piece:
    piece = board.get(origin)
    if piece is None:
        raise ValueError(f"No piece on {origin}")
    return piece


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def pawn_attack_squares(origin: Position, color: Color) -> tuple[Position, ...]:
    """Diagonal squares a pawn of *color* on *origin* attacks."""
    step = color.pawn_direction
    squares = (origin.offset(step, -1), origin.offset(step, 1))
    return tuple(sq for sq in squares if sq is not None)


# -- Movement rules -----------------------------------------------------------


def pawn_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    piece = _mover(board, origin)
    step = piece.color.pawn_direction
    targets: set[Position] = set()

    one = origin.offset(step, 0)
    if one is not None and board.get(one) is None:
        targets.add(one)
        if origin.row == pawn_start_row(piece.color):
            two = origin.offset(2 * step, 0)
            if two is not None and board.get(two) is None:
                targets.add(two)

    for diag in pawn_attack_squares(origin, piece.color):
        victim = board.get(diag)
        if victim is not None and victim.color != piece.color:
            targets.add(diag)
        elif victim is None and diag == en_passant:
            targets.add(diag)
    return targets


def _step_moves(
    board: BoardLike, origin: Position, table: dict[Position, tuple[Position, ...]]
) -> set[Position]:
    piece = _mover(board, origin)
    targets: set[Position] = set()
    for to_pos in table[origin]:
        occupant = board.get(to_pos)
        if occupant is None or occupant.color != piece.color:
            targets.add(to_pos)
    return targets


def knight_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    return _step_moves(board, origin, _KNIGHT_TARGETS)


def king_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    return _step_moves(board, origin, _KING_TARGETS)


def _slide(
    board: BoardLike,
    origin: Position,
    rays: tuple[tuple[Position, ...], ...],
    *,
    include_friendly_blocker: bool,
) -> set[Position]:
    piece = _mover(board, origin)
    targets: set[Position] = set()
    for ray in rays:
        for to_pos in ray:
            occupant = board.get(to_pos)
            if occupant is None:
                targets.add(to_pos)
                continue
            if include_friendly_blocker or occupant.color != piece.color:
                targets.add(to_pos)
            break
    return targets


def bishop_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    return _slide(board, origin, _BISHOP_RAYS[origin], include_friendly_blocker=False)


def rook_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    return _slide(board, origin, _ROOK_RAYS[origin], include_friendly_blocker=False)


def queen_moves(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    return _slide(board, origin, _QUEEN_RAYS[origin], include_friendly_blocker=False)


MOVEMENT_RULES: dict[PieceType, MovementRule] = {
    PieceType.PAWN: pawn_moves,
    PieceType.KNIGHT: knight_moves,
    PieceType.BISHOP: bishop_moves,
    PieceType.ROOK: rook_moves,
    PieceType.QUEEN: queen_moves,
    PieceType.KING: king_moves,
}


def pseudo_legal_destinations(
    board: BoardLike, origin: Position, en_passant: Position | None = None
) -> set[Position]:
    """Dispatch to the movement rule of the piece on *origin*."""
    piece = _mover(board, origin)
    return MOVEMENT_RULES[piece.piece_type](board, origin, en_passant)


def attack_squares(board: BoardLike, origin: Position) -> set[Position]:
    """Squares the piece on *origin* attacks.

    Unlike the movement rules this includes squares held by friendly pieces
    (they are defended), and pawns only attack diagonally.
    """
    piece = _mover(board, origin)
    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return set(pawn_attack_squares(origin, piece.color))
    if ptype == PieceType.KNIGHT:
        return set(_KNIGHT_TARGETS[origin])
    if ptype == PieceType.KING:
        return set(_KING_TARGETS[origin])
    return _slide(board, origin, _SLIDING_RAYS[ptype][origin], include_friendly_blocker=True)
