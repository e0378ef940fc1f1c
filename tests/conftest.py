"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color
from rookery.core.execution import MoveOutcome, apply_move
from rookery.core.move_generator import all_legal_moves
from rookery.core.notation import parse_algebraic_move, same_action

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for worker/session tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def _play(*moves: str) -> MoveOutcome:
    """Play long-algebraic *moves* from the initial position.

    Each string is matched against the legal list so special-move flags
    are filled in the way a real caller would get them.
    """
    board = Board.initial()
    castling = CastlingRights.ALL
    last = None
    color = Color.WHITE
    outcome: MoveOutcome | None = None
    for text in moves:
        wanted = parse_algebraic_move(text)
        assert wanted is not None, text
        legal = all_legal_moves(board, color, last, castling)
        move = next((m for m in legal if same_action(m, wanted)), None)
        assert move is not None, f"{text} is not legal here"
        outcome = apply_move(board, move, color, castling)
        board, castling, last = outcome.board, outcome.castling, outcome.move
        color = color.opposite
    assert outcome is not None
    return outcome


@pytest.fixture
def play() -> Callable[..., MoveOutcome]:
    """Replay a move list from the initial position."""
    return _play
