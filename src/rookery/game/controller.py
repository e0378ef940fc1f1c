"""GameController — the central orchestrator of a chess game.

Coordinates: Players, GameState, MoveGenerator.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from rookery.core.enums import Color, GameStatus, PieceKind
from rookery.core.move import Move
from rookery.core.move_generator import promotion_row
from rookery.core.notation import same_action
from rookery.core.types import Position
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.state import GameState, MoveRecord
from rookery.settings import Difficulty

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameState"], None]
GameOverCallback = Callable[[GameStatus, "Color | None"], None]  # status, winner
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  Chooser results arrive via ``submit_move``, which
    the ``ChooserWorker`` signals are expected to reach on the main thread.
    """

    __slots__ = ("_state", "_players", "_difficulty", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self._difficulty = Difficulty.MEDIUM
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> None:
        for p in self._players.values():
            if not p.is_human:
                p.cancel()

        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._difficulty = difficulty
        self._state = GameState()
        self._state.setup()
        self._state.difficulty = difficulty

        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def set_difficulty(self, difficulty: Difficulty) -> bool:
        """Switch difficulty; a change restarts the game with the same players."""
        if difficulty == self._difficulty:
            return False
        white = self._players.get(Color.WHITE)
        black = self._players.get(Color.BLACK)
        if white is None or black is None:
            self._difficulty = difficulty
            self._state.difficulty = difficulty
            return True
        self.new_game(white, black, difficulty)
        return True

    def select(self, pos: Position) -> list[Move]:
        if self._state.phase != GamePhase.AWAITING_MOVE:
            return []
        return self._state.legal_moves_from(pos)

    def submit_move(self, move: Move) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        # Validate legality against the generated list
        move = self._complete_promotion(move)
        chosen = next(
            (m for m in self._state.legal_moves() if same_action(m, move)), None
        )
        if chosen is None:
            _LOGGER.debug("Rejected illegal move %s", move)
            return False

        record = self._state.apply_move(chosen)
        self._emit_move(record)

        if self._state.is_game_over:
            self._emit_game_over(self._state.status, self._state.winner)
            return True

        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _complete_promotion(self, move: Move) -> Move:
        """Bare pawn moves onto the last rank promote to a queen."""
        if move.promotion is not None:
            return move
        piece = self._state.board[move.from_pos]
        if (
            piece is not None
            and piece.kind == PieceKind.PAWN
            and move.to_pos.row == promotion_row(piece.color)
        ):
            return replace(move, promotion=PieceKind.QUEEN)
        return move

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, status: GameStatus, winner: Color | None) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(status, winner)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
