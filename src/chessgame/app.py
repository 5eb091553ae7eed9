"""Application entry point: headless computer-vs-computer match."""

from __future__ import annotations

import argparse
import logging
import sys

from chessgame.config import GameSettings
from chessgame.core.enums import Color, GameStatus
from chessgame.engine.search import Difficulty
from chessgame.game.controller import GameController
from chessgame.game.game import Game
from chessgame.game.interfaces import IPlayer
from chessgame.game.player import HumanPlayer

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessgame",
        description="Play a computer-vs-computer chess match in the console.",
    )
    parser.add_argument(
        "--difficulty",
        type=Difficulty.from_name,
        default=Difficulty.MEDIUM,
        help="easy, medium or hard (default: medium)",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--max-plies",
        type=int,
        default=300,
        help="stop after this many half-moves (default: 300)",
    )
    parser.add_argument(
        "--pause-ms",
        type=int,
        default=0,
        help="extra pause before each computer move (default: 0)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> GameSettings:
    return GameSettings(
        difficulty=args.difficulty,
        computer_vs_computer=True,
        computer_vs_computer_pause_ms=args.pause_ms,
        seed=args.seed,
    )


def result_text(game: Game) -> str:
    """One-line summary of how the game stands."""
    status = game.status()
    if status == GameStatus.CHECKMATE:
        winner = game.winner()
        assert winner is not None
        return f"Checkmate! {str(winner).capitalize()} wins."
    if status == GameStatus.STALEMATE:
        return "Draw by stalemate."
    side = "White" if game.white_to_move() else "Black"
    check = " (in check)" if game.in_check(game.side_to_move) else ""
    return f"Unfinished after {game.ply_count} plies; {side} to move{check}."


def run_match(settings: GameSettings, max_plies: int) -> Game:
    """Drive one match on a Qt event loop until it ends or hits *max_plies*."""
    from PyQt6.QtCore import QCoreApplication

    from chessgame.engine.session import EngineSession

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    controller = GameController()
    session = EngineSession(
        controller=controller,
        request_delay_ms=settings.request_delay_ms,
        computer_vs_computer_pause_ms=settings.computer_vs_computer_pause_ms,
        seed=settings.seed,
    )

    def _player(color: Color) -> IPlayer:
        if settings.is_computer(color):
            return session.create_computer_player(color, settings.difficulty)
        return HumanPlayer(color)

    def _on_move(_move: object, _notation: str, game: Game) -> None:
        if game.ply_count >= max_plies:
            _LOGGER.info("Ply limit %d reached", max_plies)
            controller.cancel_search()
            app.quit()

    controller.events.on_move.append(_on_move)
    controller.events.on_game_over.append(lambda _status, _winner: app.quit())

    session.setup()
    try:
        controller.new_game(_player(Color.WHITE), _player(Color.BLACK))
        if not controller.game.is_game_over() and controller.game.ply_count < max_plies:
            app.exec()
    finally:
        session.shutdown()
    return controller.game


def main(argv: list[str] | None = None) -> None:
    """Launch the console match."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = run_match(settings_from_args(args), args.max_plies)
    print(game.formatted_history())
    print(result_text(game))


if __name__ == "__main__":
    main()
