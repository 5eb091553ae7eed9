"""Notation helpers: move text, history listing, FEN import/export."""

from __future__ import annotations

from collections.abc import Sequence

from chessgame.core.board import Board
from chessgame.core.board_state import BoardState
from chessgame.core.enums import CastlingRights, Color, MoveKind, PieceType
from chessgame.core.move import Move
from chessgame.core.movement import pawn_start_row
from chessgame.core.piece import Piece
from chessgame.core.types import Position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


# -- Move text ----------------------------------------------------------------


def move_to_text(move: Move, *, check: bool = False, mate: bool = False) -> str:
    """Long algebraic text for a history entry, e.g. ``Ng1-f3`` or ``e4xd5``."""
    if move.kind == MoveKind.CASTLE_KINGSIDE:
        text = "O-O"
    elif move.kind == MoveKind.CASTLE_QUEENSIDE:
        text = "O-O-O"
    else:
        prefix = "" if move.piece.piece_type == PieceType.PAWN else move.piece.letter
        sep = "x" if move.is_capture else "-"
        text = f"{prefix}{move.from_pos.name}{sep}{move.to_pos.name}"
        if move.kind == MoveKind.EN_PASSANT:
            text += " e.p."
        elif move.promotion is not None:
            text += "=" + Piece(Color.WHITE, move.promotion).letter

    if mate:
        return text + "#"
    if check:
        return text + "+"
    return text


def format_history(entries: Sequence[str]) -> str:
    """Numbered move list, one full move per line: ``1. e2-e4 e7-e5``."""
    lines: list[str] = []
    for i in range(0, len(entries), 2):
        pair = " ".join(entries[i : i + 2])
        lines.append(f"{i // 2 + 1}. {pair}")
    return "\n".join(lines)


# -- FEN ------------------------------------------------------------------------


def position_from_fen(fen: str) -> BoardState:
    """Parse the placement, side, castling and en-passant fields of *fen*."""
    parts = fen.split()
    if len(parts) < 4:
        raise ValueError(f"FEN needs at least 4 fields: {fen!r}")
    placement, side, castling, ep = parts[:4]

    board = _parse_placement(placement)

    if side not in ("w", "b"):
        raise ValueError(f"Invalid side to move: {side!r}")
    side_to_move = Color.WHITE if side == "w" else Color.BLACK

    rights = CastlingRights.NONE
    if castling != "-":
        lookup = dict(_CASTLING_CHARS)
        for char in castling:
            if char not in lookup:
                raise ValueError(f"Invalid castling field: {castling!r}")
            rights |= lookup[char]

    en_passant = None
    if ep != "-":
        en_passant = Position.parse(ep)
        _check_en_passant(board, side_to_move, en_passant)

    return BoardState(
        board=board,
        side_to_move=side_to_move,
        castling=rights,
        en_passant=en_passant,
    )


def _parse_placement(placement: str) -> Board:
    board = Board()
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"FEN placement needs 8 ranks: {placement!r}")
    kings = {Color.WHITE: 0, Color.BLACK: 0}
    for row, text in enumerate(rows):
        col = 0
        for char in text:
            if char.isdigit():
                col += int(char)
                continue
            if col > 7:
                raise ValueError(f"FEN rank overflows: {text!r}")
            piece = Piece.from_char(char)
            if piece.piece_type == PieceType.KING:
                kings[piece.color] += 1
                if kings[piece.color] > 1:
                    raise ValueError(f"FEN has more than one {piece.color.name.lower()} king")
            board.place(Position(row, col), piece)
            col += 1
        if col != 8:
            raise ValueError(f"FEN rank has {col} files: {text!r}")

    for color, count in kings.items():
        if count != 1:
            raise ValueError(f"FEN needs one {color.name.lower()} king, found {count}")
    return board


def _check_en_passant(board: Board, side_to_move: Color, target: Position) -> None:
    """The target must sit behind an enemy pawn that could just have double-stepped."""
    pusher = side_to_move.opposite
    # Row the target lies on, counted from the pusher's side.
    expected_row = pawn_start_row(pusher) + pusher.pawn_direction
    if target.row != expected_row:
        raise ValueError(f"En-passant square {target} is on the wrong rank")
    pawn_at = Position(target.row + pusher.pawn_direction, target.col)
    start = Position(target.row - pusher.pawn_direction, target.col)
    if (
        board.get(pawn_at) != Piece(pusher, PieceType.PAWN)
        or not board.is_empty(target)
        or not board.is_empty(start)
    ):
        raise ValueError(f"No {pusher.name.lower()} pawn has just passed {target}")


def position_to_fen(state: BoardState, halfmove: int = 0, fullmove: int = 1) -> str:
    """Serialise *state*; the move counters are caller-supplied."""
    rows: list[str] = []
    for row in range(8):
        text = ""
        empty = 0
        for col in range(8):
            piece = state.board.get(Position(row, col))
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    castling = "".join(c for c, flag in _CASTLING_CHARS if state.castling & flag) or "-"
    ep = state.en_passant.name if state.en_passant is not None else "-"
    side = "w" if state.side_to_move == Color.WHITE else "b"
    return f"{'/'.join(rows)} {side} {castling} {ep} {halfmove} {fullmove}"
