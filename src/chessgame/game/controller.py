"""GameController - the turn driver of a chess match.

Coordinates: Players, Game, background search requests.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessgame.core.enums import Color, GameStatus
from chessgame.core.errors import InvariantViolationError
from chessgame.core.move import Move
from chessgame.core.types import PositionLike
from chessgame.game.game import Game, PromotionChoice
from chessgame.game.interfaces import GamePhase, IPlayer

_LOGGER = logging.getLogger(__name__)

# -- Event definitions ----------------------------------------------------------

MoveCallback = Callable[[Move, str, Game], None]  # move, notation, game
GameOverCallback = Callable[[GameStatus, "Color | None"], None]  # status, winner
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# -- Controller -----------------------------------------------------------------


class GameController:
    """Orchestrates a full chess game: validates moves, switches turns,
    dispatches computer searches and notifies listeners.

    Thread-safety: every method must be called from one thread (the
    main/UI thread). Computer moves come back through
    :meth:`submit_ai_move` tagged with the generation they were requested
    for; a new game or any accepted move bumps the generation, so results
    of searches that were overtaken are discarded.
    """

    __slots__ = ("_game", "_players", "_phase", "_generation", "events")

    def __init__(self) -> None:
        self._game = Game()
        self._players: dict[Color, IPlayer] = {}
        self._phase = GamePhase.NOT_STARTED
        self._generation = 0
        self.events = GameEvents()

    # -- Properties -------------------------------------------------------------

    @property
    def game(self) -> Game:
        return self._game

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._game.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # -- Commands ---------------------------------------------------------------

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        for old in self._players.values():
            old.cancel()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._game.new_game(fen)
        self._generation += 1
        _LOGGER.info("New game: %s vs %s", white.name, black.name)

        if self._game.is_game_over():
            self._finish()
            return
        self._prompt_current_player()

    def submit_move(
        self,
        from_pos: PositionLike,
        to_pos: PositionLike,
        promotion: PromotionChoice | None = None,
    ) -> bool:
        """Human move. Returns True if legal and applied."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return False
        cp = self.current_player
        if cp is not None and not cp.is_human:
            return False
        return self._play(from_pos, to_pos, promotion)

    def submit_ai_move(self, generation: int, move: Move | None) -> bool:
        """Result of a computer search requested for *generation*."""
        if generation != self._generation:
            _LOGGER.debug(
                "Discarding stale search result (generation %d, current %d)",
                generation,
                self._generation,
            )
            return False
        if self._phase != GamePhase.THINKING:
            return False

        if move is None:
            if not self._game.is_game_over():
                raise InvariantViolationError(
                    "Search found no legal move in a position that is still in progress"
                )
            return False

        return self._play(move.from_pos, move.to_pos, move.promotion)

    def cancel_search(self) -> None:
        """Invalidate any in-flight computer search."""
        self._generation += 1
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()
        if self._phase == GamePhase.THINKING:
            self._set_phase(GamePhase.AWAITING_MOVE)

    # -- Internal helpers -------------------------------------------------------

    def _play(
        self,
        from_pos: PositionLike,
        to_pos: PositionLike,
        promotion: PromotionChoice | None,
    ) -> bool:
        if not self._game.move(from_pos, to_pos, promotion):
            return False

        self._generation += 1
        generation = self._generation
        move = self._game.history()[-1]
        notation = self._game.history_text()[-1]
        _LOGGER.info("%d. %s", self._game.ply_count, notation)
        for cb in self.events.on_move:
            cb(move, notation, self._game)

        if self._game.is_game_over():
            self._finish()
            return True

        # A listener that cancelled the search or restarted the game has
        # already decided what happens next.
        if self._generation != generation:
            return True
        self._prompt_current_player()
        return True

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
            return

        self._set_phase(GamePhase.THINKING)
        cp.request_move(self._game.snapshot(), self._generation)

    def _finish(self) -> None:
        status = self._game.status()
        winner = self._game.winner()
        _LOGGER.info(
            "Game over: %s%s",
            status.name.lower(),
            f", {winner} wins" if winner is not None else "",
        )
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(status, winner)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
