"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookery.core.enums import PieceKind
from rookery.core.piece import Piece
from rookery.core.types import Position, square_name

PROMOTION_CHARS: dict[PieceKind, str] = {
    PieceKind.QUEEN: "q",
    PieceKind.ROOK: "r",
    PieceKind.BISHOP: "b",
    PieceKind.KNIGHT: "n",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A generated move is a *candidate*.  :func:`rookery.core.execution.apply_move`
    returns the *executed* form, which additionally carries ``captured_piece``
    and ``moved_piece`` (the mover as it stood before the move).  Those two
    fields are excluded from equality so an executed move still matches the
    candidate it came from.
    """

    from_pos: Position
    to_pos: Position
    promotion: PieceKind | None = None
    is_castling: bool = False
    is_en_passant: bool = False
    captured_piece: Piece | None = field(default=None, compare=False)
    moved_piece: Piece | None = field(default=None, compare=False)

    @property
    def is_kingside_castle(self) -> bool:
        return self.is_castling and self.to_pos.col == 6

    @property
    def is_queenside_castle(self) -> bool:
        return self.is_castling and self.to_pos.col == 2

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        # Raises KeyError for a promotion kind other than Q R B N.
        base = f"{square_name(self.from_pos)}{square_name(self.to_pos)}"
        if self.promotion is not None:
            base += PROMOTION_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """Long-algebraic from-to-promotion notation."""
        return str(self)
