"""Long-algebraic move strings and text diagrams for collaborators."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import Color, PieceKind
from rookery.core.move import PROMOTION_CHARS, Move
from rookery.core.types import BOARD_SIZE, Position, parse_square

_PROMOTION_REV: dict[str, PieceKind] = {v: k for k, v in PROMOTION_CHARS.items()}
_FILES = "abcdefgh"
_RANKS = "12345678"


def move_to_algebraic(move: Move) -> str:
    """``e2e4``; promotions append a lowercase piece letter, e.g. ``a7a8q``."""
    return move.uci


def parse_algebraic_move(text: str) -> Move | None:
    """Decode a 4-5 character move string.

    Returns ``None`` for any malformed input: wrong length, a file or rank
    out of range, or a promotion letter outside ``q r b n``.  The decoded
    move is a bare from/to/promotion candidate; special-move flags come from
    matching it against the generated legal moves.
    """
    if not text or len(text) not in (4, 5):
        return None
    if text[0] not in _FILES or text[2] not in _FILES:
        return None
    if text[1] not in _RANKS or text[3] not in _RANKS:
        return None

    promotion: PieceKind | None = None
    if len(text) == 5:
        promotion = _PROMOTION_REV.get(text[4])
        if promotion is None:
            return None

    return Move(parse_square(text[:2]), parse_square(text[2:4]), promotion=promotion)


def same_action(a: Move, b: Move) -> bool:
    """Do *a* and *b* name the same from/to/promotion?"""
    return (
        a.from_pos == b.from_pos
        and a.to_pos == b.to_pos
        and a.promotion == b.promotion
    )


def board_to_text(board: Board, perspective: Color = Color.WHITE) -> str:
    """Diagram with uppercase white, lowercase black and ``.`` for empty.

    Drawn from *perspective*: white sees rank 8 at the top, black sees
    rank 1 at the top with the files mirrored.
    """
    order = list(range(BOARD_SIZE))
    if perspective == Color.BLACK:
        order.reverse()
    rows = cols = order
    header = "  " + " ".join(_FILES[c] for c in cols)

    lines = [header]
    for r in rows:
        cells = []
        for c in cols:
            piece = board[Position(r, c)]
            cells.append(str(piece) if piece is not None else ".")
        lines.append(f"{BOARD_SIZE - r} {' '.join(cells)}")
    return "\n".join(lines)
