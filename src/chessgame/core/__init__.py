"""Core domain layer - pure chess logic with zero external dependencies.

Quick start::

    from chessgame.core import BoardState, MoveGenerator, position_from_fen, STARTING_FEN

    state = position_from_fen(STARTING_FEN)
    gen = MoveGenerator(state)
    for move in gen.legal_moves():
        print(move)
"""

from chessgame.core.board import Board, BoardView
from chessgame.core.board_state import BoardState
from chessgame.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameStatus,
    MoveKind,
    PieceType,
)
from chessgame.core.errors import (
    ChessError,
    IllegalMoveError,
    InvalidPositionError,
    InvariantViolationError,
    PromotionRequiredError,
)
from chessgame.core.move import Move
from chessgame.core.move_generator import MoveGenerator
from chessgame.core.movement import MOVEMENT_RULES, attack_squares
from chessgame.core.notation import (
    STARTING_FEN,
    format_history,
    move_to_text,
    position_from_fen,
    position_to_fen,
)
from chessgame.core.piece import Piece
from chessgame.core.rules import Rules
from chessgame.core.snapshot import GameSnapshot
from chessgame.core.types import Position, PositionLike, as_position

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "MoveKind",
    "PieceType",
    "PROMOTION_TYPES",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvalidPositionError",
    "InvariantViolationError",
    "PromotionRequiredError",
    # Types / helpers
    "Position",
    "PositionLike",
    "as_position",
    # Domain objects
    "Board",
    "BoardState",
    "BoardView",
    "GameSnapshot",
    "MOVEMENT_RULES",
    "Move",
    "MoveGenerator",
    "Piece",
    "Rules",
    "attack_squares",
    # Notation
    "STARTING_FEN",
    "format_history",
    "move_to_text",
    "position_from_fen",
    "position_to_fen",
]
