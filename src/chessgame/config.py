"""Runtime settings for a match."""

from __future__ import annotations

from dataclasses import dataclass

from chessgame.core.enums import Color
from chessgame.engine.search import Difficulty


@dataclass
class GameSettings:
    """All user-configurable settings."""

    # Opponent
    difficulty: Difficulty = Difficulty.MEDIUM
    computer_plays_black: bool = False
    computer_vs_computer: bool = False

    # Engine pacing
    request_delay_ms: int = 50
    computer_vs_computer_pause_ms: int = 500  # lets a viewer follow the moves

    # Reproducible computer choices when set
    seed: int | None = None

    def is_computer(self, color: Color) -> bool:
        """Whether *color* is played by the computer under these settings."""
        if self.computer_vs_computer:
            return True
        return self.computer_plays_black and color == Color.BLACK
