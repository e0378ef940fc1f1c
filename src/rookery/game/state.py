"""Game state — board, rights and history threaded from move to move."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, GameStatus
from rookery.core.execution import apply_move, revert_move
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import move_to_algebraic
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.types import Position
from rookery.game.interfaces import GamePhase
from rookery.settings import Difficulty

_LOGGER = logging.getLogger(__name__)


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move  # executed form, carries captured_piece
    color: Color
    notation: str
    status_after: GameStatus = GameStatus.IN_PROGRESS

    @property
    def was_capture(self) -> bool:
        return self.move.captured_piece is not None

    @property
    def was_check(self) -> bool:
        return self.status_after in (GameStatus.CHECK, GameStatus.CHECKMATE)


def _empty_trays() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class GameState:
    """Everything the engine needs between calls, plus presentation history.

    The engine itself is stateless; this record carries the board, the
    castling rights and the last executed move forward explicitly.
    This is a pure data/logic class — no threading, no UI.
    """

    board: Board = field(default_factory=Board.initial, init=False)
    castling: CastlingRights = field(default=CastlingRights.ALL, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    last_move: Move | None = field(default=None, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    status: GameStatus = field(default=GameStatus.IN_PROGRESS, init=False)
    difficulty: Difficulty = field(default=Difficulty.MEDIUM, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    # capturing colour -> pieces it has taken
    captured_by: dict[Color, list[Piece]] = field(
        default_factory=_empty_trays, init=False
    )

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self) -> None:
        """Initialise (or reset) the game."""
        self.board = Board.initial()
        self.castling = CastlingRights.ALL
        self.side_to_move = Color.WHITE
        self.last_move = None
        self.phase = GamePhase.AWAITING_MOVE
        self.status = GameStatus.IN_PROGRESS
        self.move_history.clear()
        self.captured_by = _empty_trays()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply a validated move and return the history record.

        Caller is responsible for legality check.
        """
        mover = self.side_to_move
        outcome = apply_move(self.board, move, mover, self.castling)
        executed = outcome.move

        self.board = outcome.board
        self.castling = outcome.castling
        self.last_move = executed
        if executed.captured_piece is not None:
            self.captured_by[mover].append(executed.captured_piece)

        self.side_to_move = mover.opposite
        self.status = Rules.status(
            self.board, self.side_to_move, self.last_move, self.castling
        )

        record = MoveRecord(
            move=executed,
            color=mover,
            notation=move_to_algebraic(executed),
            status_after=self.status,
        )
        self.move_history.append(record)
        _LOGGER.debug("%s played %s -> %s", mover, record.notation, self.status.name)

        if self.status.is_terminal:
            self.phase = GamePhase.GAME_OVER
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def is_check(self) -> bool:
        return self.status in (GameStatus.CHECK, GameStatus.CHECKMATE)

    @property
    def winner(self) -> Color | None:
        """The mating side, or None when the game is not won."""
        if self.status == GameStatus.CHECKMATE:
            return self.side_to_move.opposite
        return None

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        gen = MoveGenerator(self.board, self.last_move, self.castling)
        return gen.all_legal_moves(self.side_to_move)

    def legal_moves_from(self, pos: Position) -> list[Move]:
        """Legal moves for the side to move from a selected square."""
        gen = MoveGenerator(self.board, self.last_move, self.castling)
        return gen.legal_moves(pos, self.side_to_move)

    def king_in_check_position(self) -> Position | None:
        """Square of the checked king, for highlighting."""
        if not self.is_check:
            return None
        return self.board.find_king(self.side_to_move)

    def last_move_by(self, color: Color) -> Move | None:
        for record in reversed(self.move_history):
            if record.color == color:
                return record.move
        return None

    def preview_before_last_move(self) -> Board | None:
        """Board as it stood before the most recent move, for display only."""
        if self.last_move is None:
            return None
        return revert_move(self.board, self.last_move)

    def history_text(self) -> list[str]:
        return [record.notation for record in self.move_history]

    def history_pairs(self) -> list[tuple[int, str, str]]:
        """(move number, white move, black move or '') rows."""
        texts = self.history_text()
        return [
            (i // 2 + 1, texts[i], texts[i + 1] if i + 1 < len(texts) else "")
            for i in range(0, len(texts), 2)
        ]
