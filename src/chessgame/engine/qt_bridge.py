"""Qt bridge to run the move picker in a worker thread."""

from __future__ import annotations

import logging
import random

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessgame.core.snapshot import GameSnapshot
from chessgame.engine.ai_player import AIPlayer
from chessgame.engine.search import Difficulty, IEngine

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes computer moves on demand.

    Every signal carries the generation the request was made for, so the
    receiver can drop results that arrive after the game moved on.
    """

    best_move_ready = pyqtSignal(int, object)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(self, *, seed: int | None = None) -> None:
        super().__init__()
        self._engine: IEngine = AIPlayer(random.Random(seed))

    @pyqtSlot(object, int, int)
    def request_move(self, snapshot_obj: object, generation: int, difficulty: int) -> None:
        """Pick a move for *snapshot_obj* and emit the result."""
        if not isinstance(snapshot_obj, GameSnapshot):
            self.search_error.emit(generation, "Engine received invalid snapshot")
            return

        try:
            result = self._engine.search(snapshot_obj, Difficulty(difficulty))
        except Exception as exc:
            _LOGGER.exception("Search failed for generation %d", generation)
            self.search_error.emit(generation, str(exc))
            return

        if result.best_move is None:
            self.search_no_move.emit(generation)
            return

        _LOGGER.debug(
            "Generation %d: picked %s (score %d of %d candidates)",
            generation,
            result.best_move,
            result.score,
            result.candidates,
        )
        self.best_move_ready.emit(generation, result.best_move)
