"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessgame.core.enums import Color
from chessgame.engine.search import Difficulty
from chessgame.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessgame.core.snapshot import GameSnapshot

SearchRequest = Callable[["GameSnapshot", int, Difficulty], None]


class HumanPlayer(IPlayer):
    """A human participant - moves come from the UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, snapshot: GameSnapshot, generation: int) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class ComputerPlayer(IPlayer):
    """A computer participant that delegates the search to a callback.

    ``ComputerPlayer`` only stores the *bridge* callable invoked on
    ``request_move``. In the application that callable dispatches work to an
    :class:`~chessgame.engine.qt_bridge.EngineWorker` on a ``QThread``.

    Args:
        color: Side the computer plays.
        difficulty: Strength passed along with every request.
        name: Display name.
        on_request_move: ``(snapshot, generation, difficulty) -> None``.
        on_cancel: ``() -> None`` - called to abort a running search.
    """

    __slots__ = ("_color", "_name", "difficulty", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        difficulty: Difficulty = Difficulty.MEDIUM,
        name: str = "Computer",
        on_request_move: SearchRequest | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self.difficulty = difficulty
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, snapshot: GameSnapshot, generation: int) -> None:
        if self._on_request_move is not None:
            self._on_request_move(snapshot, generation, self.difficulty)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
