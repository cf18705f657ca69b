"""Tests for monkminal.core.config – session configuration invariants."""

from __future__ import annotations

import pytest

from monkminal.core.config import DEFAULT_WORD_COUNT, Difficulty, GameMode, SessionConfig
from monkminal.core.errors import ConfigError


class TestDifficulty:
    def test_max_lengths(self):
        assert Difficulty.EASY.max_length == 5
        assert Difficulty.MEDIUM.max_length == 8
        assert Difficulty.HARD.max_length is None

    def test_labels(self):
        assert [d.label for d in Difficulty] == ["Easy", "Medium", "Hard"]


class TestSessionConfigValid:
    def test_timed(self):
        cfg = SessionConfig.timed(15, Difficulty.HARD)
        assert cfg.mode is GameMode.TIMED
        assert cfg.duration_seconds == 15
        assert cfg.target_word_count is None
        assert cfg.difficulty is Difficulty.HARD

    def test_word_count(self):
        cfg = SessionConfig.word_count(10)
        assert cfg.target_word_count == 10
        assert cfg.duration_seconds is None

    def test_word_count_defaults_when_unset(self):
        cfg = SessionConfig(GameMode.WORD_COUNT)
        assert cfg.target_word_count == DEFAULT_WORD_COUNT

    def test_quote(self):
        cfg = SessionConfig.quote()
        assert cfg.duration_seconds is None
        assert cfg.target_word_count is None
        assert cfg.difficulty is Difficulty.MEDIUM

    def test_frozen(self):
        cfg = SessionConfig.quote()
        with pytest.raises(AttributeError):
            cfg.mode = GameMode.TIMED  # type: ignore[misc]


class TestSessionConfigInvalid:
    def test_timed_without_duration(self):
        with pytest.raises(ConfigError):
            SessionConfig(GameMode.TIMED)

    def test_timed_with_word_count(self):
        with pytest.raises(ConfigError):
            SessionConfig(GameMode.TIMED, duration_seconds=30, target_word_count=10)

    def test_word_count_with_duration(self):
        with pytest.raises(ConfigError):
            SessionConfig(GameMode.WORD_COUNT, duration_seconds=30)

    def test_quote_with_duration(self):
        with pytest.raises(ConfigError):
            SessionConfig(GameMode.QUOTE, duration_seconds=30)

    @pytest.mark.parametrize("value", [0, -5, True, 2.5])
    def test_non_positive_duration(self, value):
        with pytest.raises(ConfigError):
            SessionConfig(GameMode.TIMED, duration_seconds=value)

    def test_unknown_mode(self):
        with pytest.raises(ConfigError):
            SessionConfig("time")  # type: ignore[arg-type]

    def test_error_names_phase(self):
        with pytest.raises(ConfigError) as info:
            SessionConfig(GameMode.TIMED)
        assert info.value.phase == "configuration"
        assert str(info.value).startswith("[configuration]")


class TestDescribe:
    def test_timed(self):
        assert SessionConfig.timed(30).describe() == "Time 30s | Medium"

    def test_words(self):
        assert SessionConfig.word_count(20, Difficulty.EASY).describe() == "Words 20 | Easy"

    def test_quote(self):
        assert SessionConfig.quote(Difficulty.HARD).describe() == "Quote | Hard"
