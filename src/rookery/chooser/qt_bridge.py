"""Qt bridge to run a move chooser in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.chooser.base import ChoiceRequest, IMoveChooser
from rookery.chooser.random_chooser import RandomMoveChooser

_LOGGER = logging.getLogger(__name__)


class ChooserWorker(QObject):
    """Thread-affine worker that asks a move chooser for moves on demand."""

    move_ready = pyqtSignal(int, object)
    choice_cancelled = pyqtSignal(int)
    no_move = pyqtSignal(int)
    choice_error = pyqtSignal(int, str)

    def __init__(self, chooser: IMoveChooser | None = None) -> None:
        super().__init__()
        self._chooser: IMoveChooser = chooser or RandomMoveChooser()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        """Ask the chooser for a move in *request_obj* and emit the result."""
        if not isinstance(request_obj, ChoiceRequest):
            self.choice_error.emit(request_id, "Chooser received invalid request")
            return

        self._cancel_event.clear()
        try:
            move = self._chooser.choose(
                request_obj.board,
                request_obj.color,
                list(request_obj.history),
                request_obj.castling,
                request_obj.last_move,
                request_obj.difficulty,
            )
        except Exception as exc:
            _LOGGER.exception("Move chooser failed for request %d", request_id)
            self.choice_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.choice_cancelled.emit(request_id)
            return

        if move is None:
            self.no_move.emit(request_id)
            return

        self.move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current choice."""
        self._cancel_event.set()

    def set_chooser(self, chooser: IMoveChooser) -> None:
        """Swap the chooser (takes effect on the next request)."""
        self._chooser = chooser
