"""Language-model move chooser with timeout and random fallback."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import TYPE_CHECKING

from rookery.chooser.base import Transport
from rookery.chooser.random_chooser import RandomMoveChooser
from rookery.core.enums import Color
from rookery.core.move_generator import all_legal_moves
from rookery.core.notation import (
    board_to_text,
    move_to_algebraic,
    parse_algebraic_move,
    same_action,
)
from rookery.settings import (
    DEFAULT_MODEL,
    AppSettings,
    ChooserSettings,
    Difficulty,
    chooser_settings_for,
)

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import CastlingRights
    from rookery.core.move import Move

_LOGGER = logging.getLogger(__name__)


def build_prompt(
    board: Board,
    color: Color,
    history: list[str],
    legal: list[Move],
    difficulty: Difficulty,
    history_window: int = 6,
) -> str:
    """Prompt listing the position, recent moves and every legal choice."""
    side = str(color)
    level = difficulty.value
    case = "uppercase" if color == Color.WHITE else "lowercase"
    recent = ", ".join(history[-history_window:]) if history_window else ""
    choices = ", ".join(move_to_algebraic(m) for m in legal)
    return (
        f"You are a chess AI playing as {side} at {level} difficulty.\n"
        f"Current board state (uppercase for white, lowercase for black, "
        f"'.' for empty. Your pieces are {case}. Perspective: {side}):\n"
        f"{board_to_text(board, color)}\n\n"
        f"Recent moves: {recent or 'None'}\n"
        f"It's {side}'s turn.\n\n"
        f"Your available valid moves are: {choices}.\n"
        f"You MUST choose one move from this list.\n"
        f"Respond with ONLY the chosen move in algebraic notation "
        f"(e.g., e2e4, g1f3, a7a8q for pawn promotion to Queen).\n\n"
        f"Your chosen move for {side}:"
    )


class PromptedMoveChooser:
    """Asks a text-completion transport for a move.

    The transport is any ``(prompt, settings) -> str`` callable; network
    clients live outside this package.  Settings are resolved per request
    from the difficulty the request carries, so a game restarted at another
    level is answered with that level's temperature and timeout.  The call
    runs on a worker thread bounded by ``settings.timeout_ms``.  A timeout,
    a transport error, an unparsable reply or a move outside the legal list
    all fall back to a random legal move.  A transport that never returns
    keeps its thread alive until it does; the chooser stops waiting for it
    regardless.

    Args:
        transport: Reply source; ``None`` means always use the fallback.
        difficulty: Level used when a request does not name one.
        settings: Fixed settings overriding every difficulty preset.
        fallback: Chooser used whenever the reply is unusable.
        history_window: Number of recent plies quoted in the prompt.
        model_name: Model the preset settings are addressed to.
    """

    __slots__ = (
        "_transport",
        "_difficulty",
        "_settings",
        "_fallback",
        "_window",
        "_model_name",
    )

    def __init__(
        self,
        transport: Transport | None,
        difficulty: Difficulty = Difficulty.MEDIUM,
        settings: ChooserSettings | None = None,
        fallback: RandomMoveChooser | None = None,
        history_window: int = 6,
        model_name: str = DEFAULT_MODEL,
    ) -> None:
        self._transport = transport
        self._difficulty = difficulty
        self._settings = settings
        self._fallback = fallback or RandomMoveChooser()
        self._window = history_window
        self._model_name = model_name

    @classmethod
    def from_settings(
        cls,
        transport: Transport | None,
        app_settings: AppSettings,
        fallback: RandomMoveChooser | None = None,
    ) -> PromptedMoveChooser:
        """Chooser configured from the user's settings."""
        return cls(
            transport,
            difficulty=app_settings.difficulty,
            fallback=fallback,
            history_window=app_settings.history_window,
            model_name=app_settings.model_name,
        )

    @property
    def settings(self) -> ChooserSettings:
        return self.settings_for(self._difficulty)

    def settings_for(self, difficulty: Difficulty) -> ChooserSettings:
        if self._settings is not None:
            return self._settings
        return chooser_settings_for(difficulty, self._model_name)

    def choose(
        self,
        board: Board,
        color: Color,
        history: list[str],
        castling: CastlingRights,
        last_move: Move | None,
        difficulty: Difficulty | None = None,
    ) -> Move | None:
        level = difficulty or self._difficulty
        legal = all_legal_moves(board, color, last_move, castling)
        if not legal:
            return None

        if self._transport is None:
            _LOGGER.warning("No move transport configured; choosing a random move")
            return self._fallback.pick(legal)

        prompt = build_prompt(
            board, color, history, legal, level, self._window
        )
        settings = self.settings_for(level)
        try:
            reply = self._call_transport(prompt, settings)
        except FutureTimeoutError:
            _LOGGER.warning(
                "Move request timed out after %d ms (difficulty: %s); "
                "falling back to a random valid move",
                settings.timeout_ms,
                level,
            )
            return self._fallback.pick(legal)
        except Exception:
            _LOGGER.exception(
                "Error getting move from transport (difficulty: %s)", level
            )
            return self._fallback.pick(legal)

        text = reply.strip()
        parsed = parse_algebraic_move(text)
        if parsed is None:
            _LOGGER.warning(
                "Reply could not be parsed: %r for difficulty %s. "
                "Falling back to a random valid move.",
                text,
                level,
            )
            return self._fallback.pick(legal)

        chosen = next((m for m in legal if same_action(m, parsed)), None)
        if chosen is None:
            _LOGGER.warning(
                "Proposed an invalid move: %s for difficulty %s. "
                "Falling back to a random valid move.",
                text,
                level,
            )
            return self._fallback.pick(legal)
        return chosen

    def _call_transport(self, prompt: str, settings: ChooserSettings) -> str:
        assert self._transport is not None
        executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="move-chooser"
        )
        try:
            future = executor.submit(self._transport, prompt, settings)
            return future.result(timeout=settings.timeout_seconds)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
