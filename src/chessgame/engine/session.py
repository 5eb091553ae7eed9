"""Engine search session orchestration for the main thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal, pyqtSlot

from chessgame.core.enums import Color
from chessgame.core.snapshot import GameSnapshot
from chessgame.engine.qt_bridge import EngineWorker
from chessgame.engine.search import Difficulty
from chessgame.game.controller import GameController
from chessgame.game.interfaces import GamePhase
from chessgame.game.player import ComputerPlayer

_LOGGER = logging.getLogger(__name__)


class _EngineCommandBus(QObject):
    """Main-thread signal bridge: queued requests out, queued results back."""

    search_requested = pyqtSignal(object, int, int)

    def __init__(
        self,
        on_best_move: Callable[[int, object], None],
        on_no_move: Callable[[int], None],
        on_error: Callable[[int, str], None],
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_best_move = on_best_move
        self._on_no_move = on_no_move
        self._on_error = on_error

    @pyqtSlot(int, object)
    def best_move_ready(self, generation: int, move_obj: object) -> None:
        self._on_best_move(generation, move_obj)

    @pyqtSlot(int)
    def search_no_move(self, generation: int) -> None:
        self._on_no_move(generation)

    @pyqtSlot(int, str)
    def search_error(self, generation: int, message: str) -> None:
        self._on_error(generation, message)


class EngineSession:
    """Owns the worker-thread search lifecycle and move handoff to the controller.

    Requests are tagged with the controller's generation; a result is only
    handed over when it matches the request still pending here, and the
    controller checks the generation again before applying it.
    """

    _MAX_FAILURE_RETRIES = 1

    __slots__ = (
        "__weakref__",
        "_controller",
        "_command_bus",
        "_dispatch_timer",
        "_engine_thread",
        "_engine_worker",
        "_request_delay_ms",
        "_computer_vs_computer_pause_ms",
        "_pending_generation",
        "_pending_snapshot",
        "_pending_difficulty",
        "_remaining_failure_retries",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        parent: QObject | None = None,
        request_delay_ms: int = 50,
        computer_vs_computer_pause_ms: int = 500,
        seed: int | None = None,
    ) -> None:
        self._controller = controller
        self._request_delay_ms = request_delay_ms
        self._computer_vs_computer_pause_ms = computer_vs_computer_pause_ms

        self._command_bus = _EngineCommandBus(
            self._on_engine_best_move,
            self._on_engine_no_move,
            self._on_engine_error,
            parent,
        )
        self._dispatch_timer = QTimer(parent)
        self._dispatch_timer.setSingleShot(True)
        self._dispatch_timer.timeout.connect(self._emit_pending_request)

        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(seed=seed)
        self._pending_generation: int | None = None
        self._pending_snapshot: GameSnapshot | None = None
        self._pending_difficulty = Difficulty.MEDIUM
        self._remaining_failure_retries = 0
        self._is_shutting_down = False
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    @property
    def pending_generation(self) -> int | None:
        return self._pending_generation

    def setup(self) -> None:
        """Start the engine worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._engine_worker.moveToThread(self._engine_thread)
        self._command_bus.search_requested.connect(self._engine_worker.request_move)
        self._engine_worker.best_move_ready.connect(self._command_bus.best_move_ready)
        self._engine_worker.search_no_move.connect(self._command_bus.search_no_move)
        self._engine_worker.search_error.connect(self._command_bus.search_error)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Drop pending work and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_ai_search()
        self._engine_thread.quit()
        self._engine_thread.wait(2000)
        self._is_started = False

    def create_computer_player(
        self, color: Color, difficulty: Difficulty = Difficulty.MEDIUM
    ) -> ComputerPlayer:
        """Create a computer player wired to this session."""
        return ComputerPlayer(
            color,
            difficulty,
            "Computer",
            on_request_move=self.request_ai_move,
            on_cancel=self.cancel_ai_search,
        )

    def request_ai_move(
        self, snapshot: GameSnapshot, generation: int, difficulty: Difficulty
    ) -> None:
        """Queue a move search for *snapshot*."""
        if not self._is_started or self._is_shutting_down:
            return
        self._remaining_failure_retries = self._MAX_FAILURE_RETRIES
        self._queue_request(snapshot, generation, difficulty)

    def cancel_ai_search(self) -> None:
        """Forget any pending/active request; its result will be ignored."""
        self._dispatch_timer.stop()
        self._clear_pending_request()

    # -- Worker callbacks -------------------------------------------------------

    def _on_engine_best_move(self, generation: int, move_obj: object) -> None:
        if self._is_shutting_down or generation != self._pending_generation:
            _LOGGER.debug("Ignoring result for generation %d", generation)
            return
        self._clear_pending_request()
        self._controller.submit_ai_move(generation, move_obj)  # type: ignore[arg-type]

    def _on_engine_no_move(self, generation: int) -> None:
        if self._is_shutting_down or generation != self._pending_generation:
            return
        self._clear_pending_request()
        self._controller.submit_ai_move(generation, None)

    def _on_engine_error(self, generation: int, message: str) -> None:
        if self._is_shutting_down or generation != self._pending_generation:
            return

        if self._remaining_failure_retries > 0 and self._pending_snapshot is not None:
            self._remaining_failure_retries -= 1
            _LOGGER.warning("Engine error (%s); retrying generation %d", message, generation)
            self._queue_request(self._pending_snapshot, generation, self._pending_difficulty)
            return

        _LOGGER.warning("Engine error (%s); giving up on generation %d", message, generation)
        self._clear_pending_request()
        if self._controller.phase == GamePhase.THINKING:
            self._controller.cancel_search()

    # -- Internals --------------------------------------------------------------

    def _queue_request(
        self, snapshot: GameSnapshot, generation: int, difficulty: Difficulty
    ) -> None:
        self._dispatch_timer.stop()
        self._pending_generation = generation
        self._pending_snapshot = snapshot
        self._pending_difficulty = difficulty
        self._dispatch_timer.start(self._dispatch_delay_ms())

    def _dispatch_delay_ms(self) -> int:
        delay = self._request_delay_ms
        if self._is_computer_vs_computer():
            delay += self._computer_vs_computer_pause_ms
        return delay

    def _is_computer_vs_computer(self) -> bool:
        players = [self._controller.player(c) for c in (Color.WHITE, Color.BLACK)]
        return all(p is not None and not p.is_human for p in players)

    def _emit_pending_request(self) -> None:
        if self._is_shutting_down:
            return
        generation = self._pending_generation
        snapshot = self._pending_snapshot
        if generation is None or snapshot is None:
            return
        self._command_bus.search_requested.emit(
            snapshot, generation, int(self._pending_difficulty)
        )

    def _clear_pending_request(self) -> None:
        self._pending_generation = None
        self._pending_snapshot = None
