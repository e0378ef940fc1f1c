"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import Board, CastlingRights, Color, all_legal_moves, apply_move

    board = Board.initial()
    moves = all_legal_moves(board, Color.WHITE, None, CastlingRights.ALL)
    outcome = apply_move(board, moves[0], Color.WHITE, CastlingRights.ALL)
"""

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, GameStatus, PieceKind
from rookery.core.errors import InvalidMoveError
from rookery.core.execution import MoveOutcome, apply_move, revert_move
from rookery.core.move import Move
from rookery.core.move_generator import (
    MoveGenerator,
    all_legal_moves,
    is_king_in_check,
    is_square_attacked,
    legal_moves,
    pseudo_legal_moves,
)
from rookery.core.notation import (
    board_to_text,
    move_to_algebraic,
    parse_algebraic_move,
    same_action,
)
from rookery.core.piece import Piece
from rookery.core.rules import Rules, game_status, is_checkmate, is_stalemate
from rookery.core.types import Position, is_on_board, parse_square, square_name

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameStatus",
    "PieceKind",
    # Types / helpers
    "Position",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "InvalidMoveError",
    "Move",
    "MoveGenerator",
    "MoveOutcome",
    "Piece",
    "Rules",
    # Engine operations
    "all_legal_moves",
    "apply_move",
    "game_status",
    "is_checkmate",
    "is_king_in_check",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves",
    "pseudo_legal_moves",
    "revert_move",
    # Notation
    "board_to_text",
    "move_to_algebraic",
    "parse_algebraic_move",
    "same_action",
]
