"""Uniform random choice among legal moves."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rookery.core.move_generator import all_legal_moves

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import CastlingRights, Color
    from rookery.core.move import Move
    from rookery.settings import Difficulty


class RandomMoveChooser:
    """Picks any legal move; also the fallback of the prompted chooser."""

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def pick(self, moves: Sequence[Move]) -> Move | None:
        if not moves:
            return None
        return self._rng.choice(moves)

    def choose(
        self,
        board: Board,
        color: Color,
        history: list[str],
        castling: CastlingRights,
        last_move: Move | None,
        difficulty: Difficulty | None = None,
    ) -> Move | None:
        del history, difficulty
        return self.pick(all_legal_moves(board, color, last_move, castling))
