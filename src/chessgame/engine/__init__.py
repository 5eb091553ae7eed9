"""Computer opponent: heuristic move picker and Qt worker bridge.

Importing this package does not pull in Qt; use
``chessgame.engine.qt_bridge`` / ``chessgame.engine.session`` for the
threaded parts.
"""

from chessgame.engine.ai_player import PIECE_VALUES, AIPlayer, center_bonus
from chessgame.engine.search import (
    DIFFICULTY_PROFILES,
    Difficulty,
    DifficultyProfile,
    IEngine,
    SearchResult,
)

__all__ = [
    "AIPlayer",
    "DIFFICULTY_PROFILES",
    "Difficulty",
    "DifficultyProfile",
    "IEngine",
    "PIECE_VALUES",
    "SearchResult",
    "center_bonus",
]
