"""Single-ply heuristic move picker.

This is not a tree search. Each legal move is scored once::

    score = captured_piece_value + center_bonus(destination) + bias + randint(0, jitter)

and the best-scoring move wins, ties broken uniformly at random. The
difficulty level only changes ``bias`` and ``jitter`` (see
:data:`~chessgame.engine.search.DIFFICULTY_PROFILES`); the horizon is always
one ply.
"""

from __future__ import annotations

import random

from chessgame.core.enums import PieceType
from chessgame.core.move import Move
from chessgame.core.snapshot import GameSnapshot
from chessgame.core.types import Position, all_positions
from chessgame.engine.search import Difficulty, IEngine, SearchResult

KING_VALUE = 20_000

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 300,
    PieceType.BISHOP: 300,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: KING_VALUE,
}

CENTER_BONUS = 10
RING_BONUS = 4


def center_bonus(pos: Position) -> int:
    """10 for d4/e4/d5/e5, 4 for the ring around them, 0 elsewhere."""
    if pos.row in (3, 4) and pos.col in (3, 4):
        return CENTER_BONUS
    if 2 <= pos.row <= 5 and 2 <= pos.col <= 5:
        return RING_BONUS
    return 0


def captured_value(move: Move) -> int:
    if move.captured is None:
        return 0
    return PIECE_VALUES[move.captured.piece_type]


class AIPlayer(IEngine):
    """Stateless move selection over a :class:`GameSnapshot`.

    Args:
        rng: Random source for jitter and tie-breaks. Pass a seeded
            ``random.Random`` for reproducible choices.
    """

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def find_best_move(self, snapshot: GameSnapshot, difficulty: Difficulty) -> Move | None:
        """Pick a move for the side to move, or None when it has no legal move."""
        return self.search(snapshot, difficulty).best_move

    def search(self, snapshot: GameSnapshot, difficulty: Difficulty) -> SearchResult:
        candidates = self.candidate_moves(snapshot)
        if not candidates:
            return SearchResult(None, 0, 0)

        profile = difficulty.profile
        best_score: int | None = None
        best: list[Move] = []
        for move in candidates:
            score = (
                captured_value(move)
                + center_bonus(move.to_pos)
                + profile.bias
                + self._rng.randint(0, profile.jitter)
            )
            if best_score is None or score > best_score:
                best_score = score
                best = [move]
            elif score == best_score:
                best.append(move)

        chosen = self._rng.choice(best)
        if chosen.requires_promotion:
            chosen = chosen.with_promotion(PieceType.QUEEN)
        assert best_score is not None
        return SearchResult(chosen, best_score, len(candidates))

    @staticmethod
    def candidate_moves(snapshot: GameSnapshot) -> list[Move]:
        """Every legal move of every piece belonging to the side to move."""
        board = snapshot.board
        side = snapshot.side_to_move
        moves: list[Move] = []
        for pos in all_positions():
            piece = board.get(pos)
            if piece is None or piece.color != side:
                continue
            moves.extend(snapshot.legal_moves_from(pos))
        return moves
