"""Shared move-chooser models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from rookery.game.player import ChoiceRequest

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import CastlingRights, Color
    from rookery.core.move import Move
    from rookery.settings import ChooserSettings, Difficulty

# (prompt, settings) -> raw reply text
Transport = Callable[[str, "ChooserSettings"], str]

__all__ = ["ChoiceRequest", "IMoveChooser", "Transport"]


class IMoveChooser(Protocol):
    """Protocol for collaborators that pick one move from the legal list.

    Implementations must return a member of ``all_legal_moves`` for the
    given context, or ``None`` when that list is empty.  *difficulty* is the
    level of the game the request comes from; ``None`` means the chooser's
    own default.
    """

    def choose(
        self,
        board: Board,
        color: Color,
        history: list[str],
        castling: CastlingRights,
        last_move: Move | None,
        difficulty: Difficulty | None = None,
    ) -> Move | None: ...
