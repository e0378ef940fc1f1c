"""Abstract interfaces for the game layer.

Follows Dependency Inversion: high-level GameController depends on
these ABCs, not on concrete Player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from rookery.core.enums import Color
from rookery.settings import Difficulty

if TYPE_CHECKING:
    from rookery.core.move import Move
    from rookery.core.types import Position
    from rookery.game.state import GameState


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # move chooser is working
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or move chooser)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, state: GameState) -> None:
        """Begin the move-selection process.

        For humans this is a no-op (they interact via UI).
        For choosers this kicks off the request.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (no-op for human)."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def select(self, pos: Position) -> list[Move]:
        """Legal moves of the side to move from *pos*."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""
