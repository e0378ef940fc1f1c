"""Move application and reversal — pure board transformers."""

from __future__ import annotations

from dataclasses import dataclass, replace

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceKind
from rookery.core.errors import InvalidMoveError
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Position

# Rook home corners and the right each one guards.
_ROOK_HOMES: dict[Position, CastlingRights] = {
    Position(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Position(7, 7): CastlingRights.WHITE_KINGSIDE,
    Position(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Position(0, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :func:`apply_move`."""

    board: Board
    castling: CastlingRights
    move: Move


def castle_rook_squares(row: int, kingside: bool) -> tuple[Position, Position]:
    """(rook origin, rook destination) for a castle on *row*."""
    if kingside:
        return Position(row, 7), Position(row, 5)
    return Position(row, 0), Position(row, 3)


def en_passant_victim_square(move: Move) -> Position:
    """Square the captured pawn actually stands on."""
    return Position(move.from_pos.row, move.to_pos.col)


def apply_move(
    board: Board,
    move: Move,
    color: Color,
    castling: CastlingRights,
) -> MoveOutcome:
    """Execute *move* for *color* on a copy of *board*.

    *castling* is the rights record in force before the move; the returned
    record is derived from it and never gains a flag.

    Raises:
        InvalidMoveError: the source square is empty or holds the other
            colour's piece.
    """
    piece = board[move.from_pos]
    if piece is None:
        raise InvalidMoveError(f"No piece on {move.from_pos}")
    if piece.color != color:
        raise InvalidMoveError(
            f"Piece on {move.from_pos} belongs to {piece.color.name}, not {color.name}"
        )

    new_board = board.copy()
    target = board[move.to_pos]
    captured: Piece | None = None
    if target is not None and target.color != piece.color:
        captured = target

    # Lift the mover and place it (handle promotion)
    new_board[move.from_pos] = None
    placed = piece.moved()
    if move.promotion is not None and piece.kind == PieceKind.PAWN:
        placed = Piece(move.promotion, piece.color, has_moved=True)
    new_board[move.to_pos] = placed

    # Slide the rook for castling
    if move.is_castling:
        rook_from, rook_to = castle_rook_squares(
            move.from_pos.row, move.is_kingside_castle
        )
        rook = new_board[rook_from]
        if rook is None or rook.kind != PieceKind.ROOK or rook.color != piece.color:
            raise InvalidMoveError(f"Castling {move} without a rook on {rook_from}")
        new_board[rook_to] = rook.moved()
        new_board[rook_from] = None

    # En passant: the captured pawn sits beside the origin, not on the target
    if move.is_en_passant:
        victim_sq = en_passant_victim_square(move)
        victim = board[victim_sq]
        if victim is not None and victim.color != piece.color:
            captured = victim
        new_board[victim_sq] = None

    executed = replace(move, captured_piece=captured, moved_piece=piece)
    next_castling = _update_castling(castling, move, piece, target)
    return MoveOutcome(new_board, next_castling, executed)


def revert_move(board_after: Board, move: Move) -> Board:
    """Board as it stood before the executed *move*.

    Intended for previews: the result is a fresh board and nothing else is
    touched.  *move* should be the executed form returned by
    :func:`apply_move` so captured and pre-move pieces can be restored.
    """
    reverted = board_after.copy()
    mover = board_after[move.to_pos]

    if move.moved_piece is not None:
        reverted[move.from_pos] = move.moved_piece
        reverted[move.to_pos] = None
    elif mover is not None:
        if move.promotion is not None:
            mover = Piece(PieceKind.PAWN, mover.color, mover.has_moved)
        reverted[move.from_pos] = mover
        reverted[move.to_pos] = None

    if move.captured_piece is not None:
        if move.is_en_passant:
            reverted[en_passant_victim_square(move)] = move.captured_piece
        else:
            reverted[move.to_pos] = move.captured_piece

    if move.is_castling:
        king = reverted[move.from_pos]
        if king is not None and king.kind == PieceKind.KING:
            reverted[move.from_pos] = king.with_moved(False)
        rook_from, rook_to = castle_rook_squares(
            move.from_pos.row, move.is_kingside_castle
        )
        rook = board_after[rook_to]
        if rook is not None and rook.kind == PieceKind.ROOK:
            reverted[rook_from] = rook.with_moved(False)
            reverted[rook_to] = None

    return reverted


# ── Castling bookkeeping ─────────────────────────────────────────────────────


def _update_castling(
    castling: CastlingRights,
    move: Move,
    piece: Piece,
    target: Piece | None,
) -> CastlingRights:
    next_castling = castling
    if piece.kind == PieceKind.KING:
        next_castling &= ~CastlingRights.both(piece.color)
    elif piece.kind == PieceKind.ROOK:
        flag = _ROOK_HOMES.get(move.from_pos)
        if flag is not None and flag & CastlingRights.both(piece.color):
            next_castling &= ~flag

    if target is not None and target.kind == PieceKind.ROOK:
        flag = _ROOK_HOMES.get(move.to_pos)
        if flag is not None and flag & CastlingRights.both(target.color):
            next_castling &= ~flag

    return next_castling
