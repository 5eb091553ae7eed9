"""Shared engine models: difficulty profiles, results and the engine protocol."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessgame.core.move import Move
    from chessgame.core.snapshot import GameSnapshot


class Difficulty(IntEnum):
    """Closed set of computer strengths."""

    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def profile(self) -> DifficultyProfile:
        return DIFFICULTY_PROFILES[self]

    @classmethod
    def from_name(cls, name: str) -> Difficulty:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {name!r}") from None


@dataclass(slots=True, frozen=True)
class DifficultyProfile:
    """Scoring constants for one difficulty level.

    ``bias`` is added to every candidate and ``jitter`` bounds the random
    perturbation ``randint(0, jitter)``. Neither changes how far the scorer
    looks: every level scores a single ply.
    """

    bias: int
    jitter: int


DIFFICULTY_PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: DifficultyProfile(bias=0, jitter=8),
    Difficulty.MEDIUM: DifficultyProfile(bias=2, jitter=4),
    Difficulty.HARD: DifficultyProfile(bias=4, jitter=1),
}


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    candidates: int


class IEngine(Protocol):
    """Protocol for move pickers used by the game layer."""

    def search(self, snapshot: GameSnapshot, difficulty: Difficulty) -> SearchResult: ...
