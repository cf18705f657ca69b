from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from monkminal.core.errors import ConfigError

DEFAULT_WORD_COUNT = 30

TIME_CHOICES = (15, 30, 60, 120)
DEFAULT_TIME = 30
WORD_COUNT_CHOICES = (10, 20, 30, 40, 50)
DEFAULT_MENU_WORD_COUNT = 20


class GameMode(Enum):
    TIMED = "time"
    WORD_COUNT = "words"
    QUOTE = "quote"

    @property
    def label(self) -> str:
        return {
            GameMode.TIMED: "Time",
            GameMode.WORD_COUNT: "Words",
            GameMode.QUOTE: "Quote",
        }[self]


class Difficulty(Enum):
    """Length-based restriction on the word pool."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def max_length(self) -> Optional[int]:
        """Longest token allowed, or None when every token is allowed."""
        if self is Difficulty.EASY:
            return 5
        if self is Difficulty.MEDIUM:
            return 8
        return None

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class SessionConfig:
    """Static configuration for a single session.

    ``duration_seconds`` is set only for timed sessions and
    ``target_word_count`` only for word-count sessions.
    """

    mode: GameMode
    duration_seconds: Optional[int] = None
    target_word_count: Optional[int] = None
    difficulty: Difficulty = Difficulty.MEDIUM

    def __post_init__(self) -> None:
        if not isinstance(self.mode, GameMode):
            raise ConfigError(f"unknown game mode: {self.mode!r}")
        if not isinstance(self.difficulty, Difficulty):
            raise ConfigError(f"unknown difficulty: {self.difficulty!r}")

        if self.mode is GameMode.TIMED:
            if self.duration_seconds is None:
                raise ConfigError("timed sessions need duration_seconds")
            if self.target_word_count is not None:
                raise ConfigError("timed sessions take no target_word_count")
            _require_positive("duration_seconds", self.duration_seconds)
        elif self.mode is GameMode.WORD_COUNT:
            if self.duration_seconds is not None:
                raise ConfigError("word-count sessions take no duration_seconds")
            if self.target_word_count is None:
                object.__setattr__(self, "target_word_count", DEFAULT_WORD_COUNT)
            _require_positive("target_word_count", self.target_word_count)
        elif self.mode is GameMode.QUOTE:
            if self.duration_seconds is not None or self.target_word_count is not None:
                raise ConfigError("quote sessions take neither a duration nor a word count")

    @classmethod
    def timed(cls, seconds: int = DEFAULT_TIME, difficulty: Difficulty = Difficulty.MEDIUM) -> "SessionConfig":
        return cls(GameMode.TIMED, duration_seconds=seconds, difficulty=difficulty)

    @classmethod
    def word_count(cls, count: int = DEFAULT_WORD_COUNT, difficulty: Difficulty = Difficulty.MEDIUM) -> "SessionConfig":
        return cls(GameMode.WORD_COUNT, target_word_count=count, difficulty=difficulty)

    @classmethod
    def quote(cls, difficulty: Difficulty = Difficulty.MEDIUM) -> "SessionConfig":
        return cls(GameMode.QUOTE, difficulty=difficulty)

    def describe(self) -> str:
        """One-line summary such as ``Time 30s | Medium``."""
        if self.mode is GameMode.TIMED:
            head = f"{self.mode.label} {self.duration_seconds}s"
        elif self.mode is GameMode.WORD_COUNT:
            head = f"{self.mode.label} {self.target_word_count}"
        else:
            head = self.mode.label
        return f"{head} | {self.difficulty.label}"


def _require_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
