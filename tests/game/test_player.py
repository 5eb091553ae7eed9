"""Tests for Player implementations."""

from chessgame.core.enums import Color
from chessgame.core.notation import STARTING_FEN, position_from_fen
from chessgame.core.snapshot import GameSnapshot
from chessgame.engine.search import Difficulty
from chessgame.game.player import ComputerPlayer, HumanPlayer


def _snapshot() -> GameSnapshot:
    return GameSnapshot(position_from_fen(STARTING_FEN))


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()

    def test_request_move_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.request_move(_snapshot(), 1)  # should not raise

    def test_cancel_noop(self) -> None:
        p = HumanPlayer(Color.WHITE)
        p.cancel()  # should not raise


class TestComputerPlayer:
    def test_properties(self) -> None:
        p = ComputerPlayer(Color.BLACK, Difficulty.EASY, "Deep Thought")
        assert p.color == Color.BLACK
        assert p.name == "Deep Thought"
        assert p.difficulty == Difficulty.EASY
        assert p.is_human is False

    def test_request_move_calls_callback(self) -> None:
        called_with = []
        p = ComputerPlayer(
            Color.BLACK,
            Difficulty.HARD,
            on_request_move=lambda snap, gen, diff: called_with.append((snap, gen, diff)),
        )
        snapshot = _snapshot()
        p.request_move(snapshot, 5)
        assert called_with == [(snapshot, 5, Difficulty.HARD)]

    def test_difficulty_change_applies_to_next_request(self) -> None:
        seen = []
        p = ComputerPlayer(
            Color.WHITE, on_request_move=lambda snap, gen, diff: seen.append(diff)
        )
        p.difficulty = Difficulty.EASY
        p.request_move(_snapshot(), 1)
        assert seen == [Difficulty.EASY]

    def test_cancel_calls_callback(self) -> None:
        cancelled = []
        p = ComputerPlayer(
            Color.BLACK,
            on_cancel=lambda: cancelled.append(True),
        )
        p.cancel()
        assert cancelled == [True]

    def test_no_callback_no_error(self) -> None:
        p = ComputerPlayer(Color.BLACK)
        p.request_move(_snapshot(), 1)
        p.cancel()
