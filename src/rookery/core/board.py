"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from rookery.core.enums import Color, PieceKind
from rookery.core.piece import Piece
from rookery.core.types import BOARD_SIZE, Position, is_on_board

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def home_row(color: Color) -> int:
    """Row holding *color*'s back rank."""
    return BOARD_SIZE - 1 if color == Color.WHITE else 0


class Board:
    """8x8 grid of optional pieces.

    Cells hold immutable :class:`Piece` values, so :meth:`copy` never shares
    mutable state with its source.  Engine operations copy before writing.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> Piece | None:
        if not is_on_board(pos):
            return None
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        if not is_on_board(pos):
            raise IndexError(f"Position off board: ({pos.row}, {pos.col})")
        self._grid[pos.row][pos.col] = piece

    def is_empty(self, pos: Position) -> bool:
        return self[pos] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Occupied squares in row-major order."""
        for r, row in enumerate(self._grid):
            for c, piece in enumerate(row):
                if piece is not None:
                    yield Position(r, c), piece

    def pieces(self, color: Color) -> list[Position]:
        """Squares occupied by *color*, row-major."""
        return [pos for pos, piece in self.occupied() if piece.color == color]

    def find_king(self, color: Color) -> Position | None:
        for pos, piece in self.occupied():
            if piece.kind == PieceKind.KING and piece.color == color:
                return pos
        return None

    def rows(self) -> list[list[Piece | None]]:
        """Grid snapshot (new lists, shared immutable pieces)."""
        return [row.copy() for row in self._grid]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position, nothing has moved."""
        b = cls()
        for color in (Color.WHITE, Color.BLACK):
            back = home_row(color)
            pawn_row = back - 1 if color == Color.WHITE else back + 1
            for col, kind in enumerate(_BACK_RANK):
                b[Position(back, col)] = Piece(kind, color)
                b[Position(pawn_row, col)] = Piece(PieceKind.PAWN, color)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        lines: list[str] = []
        for r, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            lines.append(f"{BOARD_SIZE - r} {' '.join(cells)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
