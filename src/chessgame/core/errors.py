"""Exception hierarchy for the rules engine.

User-input failures derive from :class:`ChessError` and never mutate state.
:class:`InvariantViolationError` marks a bug in the engine itself and is
never caught by the command API.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for recoverable rule/input errors."""


class InvalidPositionError(ChessError, ValueError):
    """A coordinate outside the 8x8 board or a malformed square name."""


class IllegalMoveError(ChessError):
    """The requested move is not in the legal set for the side to move."""


class PromotionRequiredError(IllegalMoveError):
    """A pawn reaching the last rank needs a promotion piece."""


class InvariantViolationError(AssertionError):
    """Internal consistency check failed (e.g. a side without a king)."""
