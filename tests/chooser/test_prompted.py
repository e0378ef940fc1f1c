"""Tests for PromptedMoveChooser and its prompt."""

from __future__ import annotations

import logging
import random
import threading

import pytest

from rookery.chooser.prompted import PromptedMoveChooser, build_prompt
from rookery.chooser.random_chooser import RandomMoveChooser
from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceKind
from rookery.core.move import Move
from rookery.core.move_generator import all_legal_moves
from rookery.core.piece import Piece
from rookery.core.types import parse_square as sq
from rookery.settings import (
    DIFFICULTY_PRESETS,
    AppSettings,
    ChooserSettings,
    Difficulty,
)

W, B = Color.WHITE, Color.BLACK


def _initial_legal() -> list[Move]:
    return all_legal_moves(Board.initial(), W, None, CastlingRights.ALL)


def _choose(chooser: PromptedMoveChooser) -> Move | None:
    return chooser.choose(Board.initial(), W, [], CastlingRights.ALL, None)


def _reply(text: str):
    def transport(_prompt: str, _settings: ChooserSettings) -> str:
        return text

    return transport


class TestBuildPrompt:
    def test_names_side_level_and_moves(self) -> None:
        legal = _initial_legal()
        prompt = build_prompt(Board.initial(), W, [], legal, Difficulty.HARD)
        assert "playing as white at hard difficulty" in prompt
        assert "Your pieces are uppercase" in prompt
        assert "e2e4" in prompt and "g1f3" in prompt
        assert "Recent moves: None" in prompt

    def test_black_view(self) -> None:
        board = Board.initial()
        legal = all_legal_moves(board, B, None, CastlingRights.ALL)
        prompt = build_prompt(board, B, ["e2e4"], legal, Difficulty.EASY)
        assert "playing as black at easy difficulty" in prompt
        assert "lowercase" in prompt
        assert "  h g f e d c b a" in prompt

    def test_history_window(self) -> None:
        history = [f"m{i}" for i in range(10)]
        prompt = build_prompt(
            Board.initial(), W, history, _initial_legal(), Difficulty.MEDIUM, 3
        )
        assert "Recent moves: m7, m8, m9" in prompt
        assert "m6" not in prompt


class TestPromptedMoveChooser:
    def test_accepts_legal_reply(self) -> None:
        chooser = PromptedMoveChooser(_reply("e2e4"))
        assert _choose(chooser) == Move(sq("e2"), sq("e4"))

    def test_reply_is_stripped(self) -> None:
        chooser = PromptedMoveChooser(_reply("  g1f3\n"))
        assert _choose(chooser) == Move(sq("g1"), sq("f3"))

    def test_transport_receives_settings(self) -> None:
        seen: list[tuple[str, ChooserSettings]] = []

        def transport(prompt: str, settings: ChooserSettings) -> str:
            seen.append((prompt, settings))
            return "d2d4"

        chooser = PromptedMoveChooser(transport, Difficulty.HARD)
        _choose(chooser)
        assert seen[0][1] == DIFFICULTY_PRESETS[Difficulty.HARD]
        assert chooser.settings == DIFFICULTY_PRESETS[Difficulty.HARD]

    def test_garbage_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        chooser = PromptedMoveChooser(
            _reply("I like the Sicilian"), fallback=RandomMoveChooser(random.Random(1))
        )
        with caplog.at_level(logging.WARNING, logger="rookery.chooser.prompted"):
            move = _choose(chooser)
        assert move in _initial_legal()
        assert "could not be parsed" in caplog.text

    def test_illegal_move_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        chooser = PromptedMoveChooser(_reply("e2e5"))
        with caplog.at_level(logging.WARNING, logger="rookery.chooser.prompted"):
            move = _choose(chooser)
        assert move in _initial_legal()
        assert "invalid move" in caplog.text

    def test_transport_error_falls_back(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        def transport(_prompt: str, _settings: ChooserSettings) -> str:
            raise ConnectionError("offline")

        chooser = PromptedMoveChooser(transport)
        with caplog.at_level(logging.ERROR, logger="rookery.chooser.prompted"):
            move = _choose(chooser)
        assert move in _initial_legal()
        assert "offline" in caplog.text

    def test_timeout_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        release = threading.Event()

        def transport(_prompt: str, _settings: ChooserSettings) -> str:
            release.wait(5)
            return "e2e4"

        settings = ChooserSettings(temperature=0.4, timeout_ms=50)
        chooser = PromptedMoveChooser(transport, settings=settings)
        try:
            with caplog.at_level(logging.WARNING, logger="rookery.chooser.prompted"):
                move = _choose(chooser)
        finally:
            release.set()
        assert move in _initial_legal()
        assert "timed out" in caplog.text

    def test_no_transport_uses_fallback(self) -> None:
        chooser = PromptedMoveChooser(None)
        assert _choose(chooser) in _initial_legal()

    def test_no_legal_moves_skips_transport(self) -> None:
        calls: list[str] = []

        def transport(prompt: str, _settings: ChooserSettings) -> str:
            calls.append(prompt)
            return "h8g8"

        board = Board.empty()
        board[sq("h8")] = Piece(PieceKind.KING, B, True)
        board[sq("g6")] = Piece(PieceKind.QUEEN, W, True)
        board[sq("f7")] = Piece(PieceKind.KING, W, True)
        chooser = PromptedMoveChooser(transport)
        assert chooser.choose(board, B, [], CastlingRights.NONE, None) is None
        assert calls == []

    def test_promotion_reply(self) -> None:
        board = Board.empty()
        board[sq("a7")] = Piece(PieceKind.PAWN, W, True)
        board[sq("h1")] = Piece(PieceKind.KING, W)
        board[sq("h8")] = Piece(PieceKind.KING, B)
        chooser = PromptedMoveChooser(_reply("a7a8n"))
        move = chooser.choose(board, W, [], CastlingRights.NONE, None)
        assert move == Move(sq("a7"), sq("a8"), promotion=PieceKind.KNIGHT)

    def test_castling_reply_keeps_flag(self, play) -> None:
        outcome = play("e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6")
        chooser = PromptedMoveChooser(_reply("e1g1"))
        move = chooser.choose(
            outcome.board, W, [], outcome.castling, outcome.move
        )
        assert move is not None and move.is_castling


class TestPerRequestDifficulty:
    @staticmethod
    def _recording() -> tuple[list[tuple[str, ChooserSettings]], object]:
        seen: list[tuple[str, ChooserSettings]] = []

        def transport(prompt: str, settings: ChooserSettings) -> str:
            seen.append((prompt, settings))
            return "e2e4"

        return seen, transport

    def test_request_level_overrides_default(self) -> None:
        seen, transport = self._recording()
        chooser = PromptedMoveChooser(transport, Difficulty.MEDIUM)
        chooser.choose(
            Board.initial(), W, [], CastlingRights.ALL, None, Difficulty.HARD
        )
        prompt, settings = seen[0]
        assert settings == DIFFICULTY_PRESETS[Difficulty.HARD]
        assert settings.temperature == 0.2
        assert "at hard difficulty" in prompt
        assert chooser.settings == DIFFICULTY_PRESETS[Difficulty.MEDIUM]

    def test_missing_level_uses_default(self) -> None:
        seen, transport = self._recording()
        _choose(PromptedMoveChooser(transport, Difficulty.EASY))
        assert seen[0][1] == DIFFICULTY_PRESETS[Difficulty.EASY]

    def test_fixed_settings_ignore_level(self) -> None:
        seen, transport = self._recording()
        fixed = ChooserSettings(temperature=0.0, timeout_ms=1000)
        chooser = PromptedMoveChooser(transport, settings=fixed)
        chooser.choose(
            Board.initial(), W, [], CastlingRights.ALL, None, Difficulty.EASY
        )
        assert seen[0][1] is fixed

    def test_from_app_settings(self) -> None:
        seen, transport = self._recording()
        app = AppSettings(
            difficulty=Difficulty.EASY, model_name="local-model", history_window=1
        )
        chooser = PromptedMoveChooser.from_settings(transport, app)
        chooser.choose(Board.initial(), W, ["e2e4", "e7e5"], CastlingRights.ALL, None)

        prompt, settings = seen[0]
        assert settings.model_name == "local-model"
        assert settings.temperature == DIFFICULTY_PRESETS[Difficulty.EASY].temperature
        assert settings == app.chooser_settings()
        assert "Recent moves: e7e5" in prompt
