"""Board coordinates.

Board layout (row-major, black at the top):
    row 0 = rank 8 (black's home rank), row 7 = rank 1 (white's home rank)
    col 0 = a-file, col 7 = h-file
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


@dataclass(frozen=True, slots=True)
class Position:
    """A (row, col) coordinate. May lie off the board after offset arithmetic."""

    row: int
    col: int

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        if not is_on_board(self):
            return f"({self.row}, {self.col})"
        return square_name(self)


def is_on_board(pos: Position) -> bool:
    """Single gate for every board lookup."""
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def square_name(pos: Position) -> str:
    """Algebraic name, e.g. Position(7, 4) → 'e1'."""
    if not is_on_board(pos):
        raise ValueError(f"Position off board: ({pos.row}, {pos.col})")
    return chr(ord("a") + pos.col) + str(BOARD_SIZE - pos.row)


def parse_square(name: str) -> Position:
    """Parse square name, e.g. 'e4' → Position(4, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


def all_positions() -> list[Position]:
    """Every square in row-major order."""
    return [Position(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
