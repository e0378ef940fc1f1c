"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import CastlingRights, Color, GameStatus
from rookery.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move


class Rules:
    """Static rule-checker over an explicit board context.

    Checkmate and stalemate both require an empty legal-move list and differ
    only in whether the king is attacked, so they are mutually exclusive.
    """

    @staticmethod
    def is_in_check(
        board: Board,
        color: Color,
        last_move: Move | None,
        castling: CastlingRights,
    ) -> bool:
        return MoveGenerator(board, last_move, castling).is_in_check(color)

    @staticmethod
    def is_checkmate(
        board: Board,
        color: Color,
        last_move: Move | None,
        castling: CastlingRights,
    ) -> bool:
        gen = MoveGenerator(board, last_move, castling)
        if not gen.is_in_check(color):
            return False
        return len(gen.all_legal_moves(color)) == 0

    @staticmethod
    def is_stalemate(
        board: Board,
        color: Color,
        last_move: Move | None,
        castling: CastlingRights,
    ) -> bool:
        gen = MoveGenerator(board, last_move, castling)
        if gen.is_in_check(color):
            return False
        return len(gen.all_legal_moves(color)) == 0

    @staticmethod
    def status(
        board: Board,
        color: Color,
        last_move: Move | None,
        castling: CastlingRights,
    ) -> GameStatus:
        """Classify the position for *color*, the side to move."""
        gen = MoveGenerator(board, last_move, castling)
        in_check = gen.is_in_check(color)
        if gen.all_legal_moves(color):
            return GameStatus.CHECK if in_check else GameStatus.IN_PROGRESS
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE


is_checkmate = Rules.is_checkmate
is_stalemate = Rules.is_stalemate
game_status = Rules.status
