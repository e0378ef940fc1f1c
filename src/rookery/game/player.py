"""Game participants.

A human's moves arrive through ``GameController.submit_move``.  A computer
player turns each of its turns into a :class:`ChoiceRequest` and hands it to a
dispatcher; the chosen move comes back through the controller the same way a
human's does.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color
from rookery.core.move import Move
from rookery.core.move_generator import all_legal_moves
from rookery.game.interfaces import IPlayer
from rookery.settings import Difficulty

if TYPE_CHECKING:
    from rookery.game.state import GameState

Dispatch = Callable[["ChoiceRequest"], None]


@dataclass(slots=True, frozen=True)
class ChoiceRequest:
    """Snapshot of one computer turn, safe to hand to another thread.

    ``ply`` is the number of half-moves played when the snapshot was taken,
    so a late answer can be recognised as belonging to an older position.
    """

    board: Board
    color: Color
    history: tuple[str, ...]
    castling: CastlingRights
    last_move: Move | None
    difficulty: Difficulty = Difficulty.MEDIUM
    ply: int = 0

    @classmethod
    def from_state(cls, state: GameState) -> ChoiceRequest:
        return cls(
            board=state.board.copy(),
            color=state.side_to_move,
            history=tuple(state.history_text()),
            castling=state.castling,
            last_move=state.last_move,
            difficulty=state.difficulty,
            ply=state.ply_count,
        )

    def legal_moves(self) -> list[Move]:
        return all_legal_moves(self.board, self.color, self.last_move, self.castling)


class _Seat(IPlayer):
    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name


class HumanPlayer(_Seat):
    """Moves are submitted interactively; nothing to do on request or cancel."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> None:
        del state

    def cancel(self) -> None:
        return None


class ChooserPlayer(_Seat):
    """Computer opponent driven by a move chooser.

    Args:
        color: Side the chooser plays.
        dispatch: Receives a :class:`ChoiceRequest` for every turn, e.g.
            ``ChooserSession.request_move``.  ``None`` only records the request.
        on_cancel: Called when the controller abandons the pending turn.
        name: Display name.
    """

    __slots__ = ("_dispatch", "_on_cancel", "_pending")

    def __init__(
        self,
        color: Color,
        dispatch: Dispatch | None = None,
        on_cancel: Callable[[], None] | None = None,
        name: str = "AI",
    ) -> None:
        super().__init__(color, name)
        self._dispatch = dispatch
        self._on_cancel = on_cancel
        self._pending: ChoiceRequest | None = None

    @property
    def is_human(self) -> bool:
        return False

    @property
    def pending(self) -> ChoiceRequest | None:
        """The most recent turn handed out and not cancelled."""
        return self._pending

    def request_move(self, state: GameState) -> None:
        if state.is_game_over or state.side_to_move != self._color:
            return
        request = ChoiceRequest.from_state(state)
        self._pending = request
        if self._dispatch is not None:
            self._dispatch(request)

    def cancel(self) -> None:
        self._pending = None
        if self._on_cancel is not None:
            self._on_cancel()
