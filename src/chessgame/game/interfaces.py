"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessgame.core.enums import Color

if TYPE_CHECKING:
    from chessgame.core.snapshot import GameSnapshot


# -- Game phase FSM states --------------------------------------------------------


class GamePhase(IntEnum):
    """Finite-state-machine states for the turn driver."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # computer is computing
    GAME_OVER = auto()


# -- Abstract interfaces ------------------------------------------------------------


class IPlayer(ABC):
    """Interface for a game participant (human or computer)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, snapshot: GameSnapshot, generation: int) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via the UI).
        For the computer this kicks off a background search whose result
        must come back tagged with *generation*.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (computer only, no-op for human)."""
