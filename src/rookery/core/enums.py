"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Chess piece kinds ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastlingRights(IntFlag):
    """Bitmask for castling availability.

    Rights are carried forward move by move and only ever lose bits.
    """

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def side(color: Color, kingside: bool) -> CastlingRights:
        """The single flag for *color* on the given wing."""
        if color == Color.WHITE:
            if kingside:
                return CastlingRights.WHITE_KINGSIDE
            return CastlingRights.WHITE_QUEENSIDE
        if kingside:
            return CastlingRights.BLACK_KINGSIDE
        return CastlingRights.BLACK_QUEENSIDE

    @staticmethod
    def both(color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return CastlingRights.WHITE_BOTH
        return CastlingRights.BLACK_BOTH

    def allows(self, color: Color, kingside: bool) -> bool:
        return bool(self & CastlingRights.side(color, kingside))


class GameStatus(IntEnum):
    """Classification of a position for the side to move."""

    IN_PROGRESS = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)
