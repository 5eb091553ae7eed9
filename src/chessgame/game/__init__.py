"""Game management layer - rules orchestrator, players, turn driver.

Quick start::

    from chessgame.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
    ctrl.submit_move("e2", "e4")
"""

from chessgame.game.controller import GameController, GameEvents
from chessgame.game.game import Game
from chessgame.game.interfaces import GamePhase, IPlayer
from chessgame.game.player import ComputerPlayer, HumanPlayer

__all__ = [
    # Interfaces
    "GamePhase",
    "IPlayer",
    # Concrete
    "ComputerPlayer",
    "Game",
    "GameController",
    "GameEvents",
    "HumanPlayer",
]
