"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgame.core.enums import GameStatus
from chessgame.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessgame.core.board_state import BoardState


class Rules:
    """Static rule-checker that operates on a :class:`BoardState`.

    Draws other than stalemate (fifty-move rule, repetition, insufficient
    material) are not adjudicated.
    """

    @staticmethod
    def is_in_check(state: BoardState) -> bool:
        gen = MoveGenerator(state)
        return gen.is_in_check(state.side_to_move)

    @staticmethod
    def is_checkmate(state: BoardState) -> bool:
        return Rules.status(state) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(state: BoardState) -> bool:
        return Rules.status(state) == GameStatus.STALEMATE

    @staticmethod
    def status(state: BoardState) -> GameStatus:
        """Classify the position for the side to move."""
        gen = MoveGenerator(state)
        if gen.legal_moves():
            return GameStatus.IN_PROGRESS
        if gen.is_in_check(state.side_to_move):
            return GameStatus.CHECKMATE
        return GameStatus.STALEMATE
