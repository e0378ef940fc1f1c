"""Application settings and difficulty presets."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from rookery.core.enums import Color

DEFAULT_MODEL = "gemini-2.5-flash"


class Difficulty(str, Enum):
    """Opponent difficulty, mapped onto move-chooser settings."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ChooserSettings:
    """Constraints for a single move-chooser request."""

    temperature: float
    timeout_ms: int
    max_output_tokens: int = 10
    model_name: str = DEFAULT_MODEL

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


# Lower temperature is more deterministic; harder levels get longer to answer.
DIFFICULTY_PRESETS: dict[Difficulty, ChooserSettings] = {
    Difficulty.EASY: ChooserSettings(temperature=0.8, timeout_ms=10_000),
    Difficulty.MEDIUM: ChooserSettings(temperature=0.4, timeout_ms=15_000),
    Difficulty.HARD: ChooserSettings(temperature=0.2, timeout_ms=20_000),
}


def chooser_settings_for(
    difficulty: Difficulty, model_name: str = DEFAULT_MODEL
) -> ChooserSettings:
    """Preset for *difficulty*, addressed to *model_name*."""
    preset = DIFFICULTY_PRESETS[difficulty]
    if preset.model_name == model_name:
        return preset
    return replace(preset, model_name=model_name)


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Players
    human_color: Color = Color.WHITE
    ai_color: Color = Color.BLACK

    # Opponent
    difficulty: Difficulty = Difficulty.MEDIUM
    model_name: str = DEFAULT_MODEL
    history_window: int = 6  # plies quoted back to the chooser

    def __post_init__(self) -> None:
        if self.human_color == self.ai_color:
            raise ValueError("Human and AI must play different colours")
        if self.history_window < 0:
            raise ValueError(f"Invalid history window: {self.history_window}")

    def chooser_settings(self, difficulty: Difficulty | None = None) -> ChooserSettings:
        """Preset for *difficulty* (default: the configured one)."""
        return chooser_settings_for(difficulty or self.difficulty, self.model_name)
