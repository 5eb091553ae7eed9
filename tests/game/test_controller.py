"""Tests for GameController - the turn driver."""

import random

import pytest

from chessgame.core.enums import Color, GameStatus
from chessgame.core.errors import InvariantViolationError
from chessgame.core.snapshot import GameSnapshot
from chessgame.engine.ai_player import AIPlayer
from chessgame.engine.search import Difficulty
from chessgame.game.controller import GameController
from chessgame.game.interfaces import GamePhase
from chessgame.game.player import ComputerPlayer, HumanPlayer

STALEMATE_NEXT = "7k/8/5K2/8/8/8/8/6Q1 w - - 0 1"


class _RecordingComputer(ComputerPlayer):
    """Computer player that only records what it was asked to do."""

    def __init__(self, color: Color, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        self.requests: list[tuple[GameSnapshot, int, Difficulty]] = []
        self.cancelled = 0
        super().__init__(
            color,
            difficulty,
            on_request_move=lambda snap, gen, diff: self.requests.append((snap, gen, diff)),
            on_cancel=self._on_cancel,
        )

    def _on_cancel(self) -> None:
        self.cancelled += 1


def _make_hh_controller(fen: str | None = None) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(HumanPlayer(Color.WHITE, "W"), HumanPlayer(Color.BLACK, "B"), fen)
    return ctrl


def _make_hc_controller() -> tuple[GameController, _RecordingComputer]:
    """Helper: human (white) vs computer (black)."""
    ctrl = GameController()
    computer = _RecordingComputer(Color.BLACK)
    ctrl.new_game(HumanPlayer(Color.WHITE), computer)
    return ctrl, computer


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_not_started_before_new_game(self) -> None:
        assert GameController().phase == GamePhase.NOT_STARTED

    def test_players_assigned(self) -> None:
        ctrl = _make_hh_controller()
        white = ctrl.player(Color.WHITE)
        assert white is not None and white.name == "W"
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.WHITE

    def test_generation_bumped(self) -> None:
        ctrl = GameController()
        before = ctrl.generation
        ctrl.new_game(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK))
        assert ctrl.generation == before + 1

    def test_new_game_cancels_previous_players(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.new_game(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK))
        assert computer.cancelled == 1
        assert ctrl.game.ply_count == 0

    def test_already_finished_position(self) -> None:
        ctrl = _make_hh_controller("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert ctrl.phase == GamePhase.GAME_OVER


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_hh_controller()
        generation = ctrl.generation
        assert ctrl.submit_move("e2", "e4")
        assert ctrl.game.side_to_move == Color.BLACK
        assert ctrl.generation == generation + 1

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_hh_controller()
        generation = ctrl.generation
        assert not ctrl.submit_move("e2", "e5")
        assert ctrl.game.side_to_move == Color.WHITE
        assert ctrl.generation == generation

    def test_move_event_fires(self) -> None:
        ctrl = _make_hh_controller()
        events: list[str] = []
        ctrl.events.on_move.append(lambda m, text, game: events.append(text))
        ctrl.submit_move("e2", "e4")
        ctrl.submit_move("g8", "f6")
        assert events == ["e2-e4", "Ng8-f6"]

    def test_game_over_event_on_checkmate(self) -> None:
        ctrl = _make_hh_controller()
        results: list[tuple[GameStatus, Color | None]] = []
        ctrl.events.on_game_over.append(lambda status, winner: results.append((status, winner)))
        for origin, target in (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")):
            assert ctrl.submit_move(origin, target)
        assert results == [(GameStatus.CHECKMATE, Color.BLACK)]
        assert ctrl.phase == GamePhase.GAME_OVER
        assert not ctrl.submit_move("a2", "a3")

    def test_stalemate_ends_game(self) -> None:
        ctrl = _make_hh_controller(STALEMATE_NEXT)
        results: list[tuple[GameStatus, Color | None]] = []
        ctrl.events.on_game_over.append(lambda status, winner: results.append((status, winner)))
        assert ctrl.submit_move("g1", "g6")
        assert results == [(GameStatus.STALEMATE, None)]

    def test_phase_events(self) -> None:
        ctrl, _ = _make_hc_controller()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.submit_move("e2", "e4")
        assert phases == [GamePhase.THINKING]


class TestComputerTurn:
    def test_listener_cancel_stops_next_request(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.events.on_move.append(lambda _m, _text, _game: ctrl.cancel_search())

        assert ctrl.submit_move("e2", "e4")

        assert computer.requests == []
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.game.ply_count == 1

    def test_listener_cancel_after_ai_move(self) -> None:
        ctrl = GameController()
        white = _RecordingComputer(Color.WHITE)
        black = _RecordingComputer(Color.BLACK)
        ctrl.new_game(white, black)
        ctrl.events.on_move.append(lambda _m, _text, _game: ctrl.cancel_search())
        snapshot, generation, difficulty = white.requests[0]
        move = AIPlayer(random.Random(2)).find_best_move(snapshot, difficulty)

        assert ctrl.submit_ai_move(generation, move)

        assert black.requests == []
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_request_after_human_move(self) -> None:
        ctrl, computer = _make_hc_controller()
        assert computer.requests == []
        ctrl.submit_move("e2", "e4")

        assert ctrl.phase == GamePhase.THINKING
        assert len(computer.requests) == 1
        snapshot, generation, difficulty = computer.requests[0]
        assert snapshot.ply == 1
        assert not snapshot.white_to_move()
        assert generation == ctrl.generation
        assert difficulty == Difficulty.MEDIUM

    def test_human_cannot_move_while_thinking(self) -> None:
        ctrl, _ = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        assert not ctrl.submit_move("e7", "e5")
        assert ctrl.game.ply_count == 1

    def test_ai_move_applied(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        snapshot, generation, difficulty = computer.requests[0]
        move = AIPlayer(random.Random(3)).find_best_move(snapshot, difficulty)
        assert move is not None

        assert ctrl.submit_ai_move(generation, move)
        assert ctrl.game.ply_count == 2
        assert ctrl.game.history()[-1].from_pos == move.from_pos
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_stale_generation_discarded(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        snapshot, generation, difficulty = computer.requests[0]
        move = AIPlayer(random.Random(3)).find_best_move(snapshot, difficulty)

        assert not ctrl.submit_ai_move(generation - 1, move)
        assert not ctrl.submit_ai_move(generation + 1, move)
        assert ctrl.game.ply_count == 1
        assert ctrl.phase == GamePhase.THINKING

    def test_result_after_new_game_discarded(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        snapshot, generation, difficulty = computer.requests[0]
        move = AIPlayer(random.Random(3)).find_best_move(snapshot, difficulty)

        ctrl.new_game(HumanPlayer(Color.WHITE), _RecordingComputer(Color.BLACK))
        assert not ctrl.submit_ai_move(generation, move)
        assert ctrl.game.ply_count == 0

    def test_cancel_search(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        _, generation, _ = computer.requests[0]

        ctrl.cancel_search()
        assert ctrl.generation == generation + 1
        assert computer.cancelled == 1
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_no_move_while_in_progress_is_a_bug(self) -> None:
        ctrl, computer = _make_hc_controller()
        ctrl.submit_move("e2", "e4")
        _, generation, _ = computer.requests[0]
        with pytest.raises(InvariantViolationError):
            ctrl.submit_ai_move(generation, None)

    def test_computer_plays_white(self) -> None:
        ctrl = GameController()
        computer = _RecordingComputer(Color.WHITE, Difficulty.HARD)
        ctrl.new_game(computer, HumanPlayer(Color.BLACK))

        assert ctrl.phase == GamePhase.THINKING
        snapshot, generation, difficulty = computer.requests[0]
        assert snapshot.ply == 0
        assert snapshot.white_to_move()
        assert generation == ctrl.generation
        assert difficulty == Difficulty.HARD


class TestComputerVsComputer:
    def test_match_stays_legal(self) -> None:
        ctrl = GameController()
        white = _RecordingComputer(Color.WHITE, Difficulty.EASY)
        black = _RecordingComputer(Color.BLACK, Difficulty.HARD)
        engine = AIPlayer(random.Random(7))
        ctrl.new_game(white, black)

        while not ctrl.game.is_game_over() and ctrl.game.ply_count < 60:
            player = white if ctrl.game.white_to_move() else black
            snapshot, generation, difficulty = player.requests[-1]
            assert snapshot.ply == ctrl.game.ply_count
            move = engine.find_best_move(snapshot, difficulty)
            assert move is not None
            assert ctrl.submit_ai_move(generation, move)

        assert ctrl.game.ply_count == 60 or ctrl.phase == GamePhase.GAME_OVER
