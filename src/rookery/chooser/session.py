"""Move-chooser session orchestration for the main thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from rookery.chooser.base import ChoiceRequest, IMoveChooser
from rookery.chooser.qt_bridge import ChooserWorker
from rookery.core.enums import Color
from rookery.core.move import Move
from rookery.game.controller import GameController
from rookery.game.interfaces import GamePhase
from rookery.game.player import ChooserPlayer, HumanPlayer
from rookery.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


class _ChooserCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    move_requested = pyqtSignal(object, int)
    cancel_requested = pyqtSignal()


class ChooserSession:
    """Owns the worker-thread lifecycle and hands chosen moves to the controller.

    A result is applied only if it answers the latest request and the game
    is still at the ply the request was made for.
    """

    _REQUEST_DELAY_MS = 1000

    __slots__ = (
        "__weakref__",
        "_controller",
        "_set_status",
        "_command_bus",
        "_dispatch_timer",
        "_thread",
        "_worker",
        "_request_id",
        "_pending_request",
        "_pending_choice",
        "_pending_ply",
        "_is_started",
        "_is_shutting_down",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        chooser: IMoveChooser | None = None,
        set_status: Callable[[str], None] | None = None,
        parent: QObject | None = None,
        request_delay_ms: int | None = None,
    ) -> None:
        self._controller = controller
        self._set_status = set_status

        self._command_bus = _ChooserCommandBus(parent)
        self._dispatch_timer = QTimer(parent)
        self._dispatch_timer.setSingleShot(True)
        self._dispatch_timer.setInterval(
            self._REQUEST_DELAY_MS if request_delay_ms is None else request_delay_ms
        )
        self._dispatch_timer.timeout.connect(self._emit_pending_request)

        self._thread = QThread(parent)
        self._worker = ChooserWorker(chooser)
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_choice: ChoiceRequest | None = None
        self._pending_ply = 0
        self._is_started = False
        self._is_shutting_down = False

    @property
    def worker(self) -> ChooserWorker:
        return self._worker

    @property
    def pending_request(self) -> int | None:
        return self._pending_request

    def setup(self) -> None:
        """Start the worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._command_bus.move_requested.connect(self._worker.request_move)
        self._command_bus.cancel_requested.connect(self._worker.cancel)
        self._worker.move_ready.connect(self._on_move_ready)
        self._worker.no_move.connect(self._on_no_move)
        self._worker.choice_error.connect(self._on_choice_error)
        self._worker.choice_cancelled.connect(self._on_choice_cancelled)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop any pending request and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._thread.quit()
        self._thread.wait(2000)
        self._is_started = False

    def create_player(self, color: Color, name: str = "AI") -> ChooserPlayer:
        """Create a player wired to this session."""
        return ChooserPlayer(
            color, dispatch=self.request_move, on_cancel=self.cancel, name=name
        )

    def start_game(self, settings: AppSettings, human_name: str = "") -> None:
        """Seat a human and this session's chooser as *settings* assign them."""
        seats = {
            settings.human_color: HumanPlayer(settings.human_color, human_name),
            settings.ai_color: self.create_player(settings.ai_color),
        }
        self._controller.new_game(
            seats[Color.WHITE], seats[Color.BLACK], settings.difficulty
        )

    def request_move(self, request: ChoiceRequest) -> None:
        """Queue *request*; it is sent to the worker after the request delay."""
        if self._is_shutting_down:
            return
        self.cancel()
        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_choice = request
        self._pending_ply = request.ply
        self._dispatch_timer.start()

    def cancel(self) -> None:
        """Drop the pending request and tell the worker to discard its result."""
        self._dispatch_timer.stop()
        self._pending_request = None
        self._pending_choice = None
        if self._is_started:
            self._command_bus.cancel_requested.emit()

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _emit_pending_request(self) -> None:
        if self._is_shutting_down:
            return
        if self._pending_request is None or self._pending_choice is None:
            return
        self._command_bus.move_requested.emit(
            self._pending_choice, self._pending_request
        )

    def _is_current(self, request_id: int) -> bool:
        if self._is_shutting_down or request_id != self._pending_request:
            return False
        state = self._controller.state
        return (
            state.phase == GamePhase.THINKING
            and state.ply_count == self._pending_ply
        )

    def _on_move_ready(self, request_id: int, move_obj: object) -> None:
        if not self._is_current(request_id) or not isinstance(move_obj, Move):
            return
        self._pending_request = None
        self._pending_choice = None
        if not self._controller.submit_move(move_obj):
            _LOGGER.error("Controller rejected chosen move %s", move_obj)
            self._report("AI could not make a move.")

    def _on_no_move(self, request_id: int) -> None:
        if not self._is_current(request_id):
            return
        self._pending_request = None
        self._pending_choice = None
        self._report("AI could not make a move. Check for checkmate or stalemate.")

    def _on_choice_error(self, request_id: int, message: str) -> None:
        if not self._is_current(request_id):
            return
        self._pending_request = None
        self._pending_choice = None
        _LOGGER.error("Move chooser error: %s", message)
        self._report(f"AI error: {message}")

    def _on_choice_cancelled(self, request_id: int) -> None:
        if request_id == self._pending_request:
            self._pending_request = None

    def _report(self, text: str) -> None:
        if self._set_status is not None:
            self._set_status(text)
