"""Tests for monkminal.core.selection – choosing words and quotes."""

from __future__ import annotations

import logging
import random

import pytest

from monkminal.core.config import Difficulty, SessionConfig
from monkminal.core.corpus import Quote
from monkminal.core.errors import SelectionError
from monkminal.core.selection import TIMED_POOL_SIZE, filter_by_difficulty, select_tokens

QUOTES = [
    Quote(text="Talk is cheap. Show me the code.", source="Linus Torvalds"),
    Quote(text="Well done is better than well said.", source="Benjamin Franklin"),
]


# ---------------------------------------------------------------------------
# Difficulty filter
# ---------------------------------------------------------------------------

class TestFilterByDifficulty:
    def test_easy_keeps_short_words(self):
        words = ["cat", "banana", "dog", "elephant"]
        assert filter_by_difficulty(words, Difficulty.EASY) == ["cat", "dog"]

    def test_medium_keeps_up_to_eight(self):
        words = ["cat", "elephant", "kangaroos"]
        assert filter_by_difficulty(words, Difficulty.MEDIUM) == ["cat", "elephant"]

    def test_hard_keeps_everything(self):
        words = ["a", "extraordinary"]
        assert filter_by_difficulty(words, Difficulty.HARD) == words

    def test_counts_characters_not_bytes(self):
        assert filter_by_difficulty(["héllo"], Difficulty.EASY) == ["héllo"]


# ---------------------------------------------------------------------------
# Quote mode
# ---------------------------------------------------------------------------

class TestQuoteMode:
    def test_tokens_are_split_of_some_quote(self):
        tokens = select_tokens(SessionConfig.quote(), ["unused"], QUOTES, random.Random(3))
        assert tokens
        assert tokens in [q.text.split() for q in QUOTES]

    def test_ignores_difficulty(self):
        quotes = [Quote(text="extraordinary circumstances", source="x")]
        tokens = select_tokens(SessionConfig.quote(Difficulty.EASY), [], quotes, random.Random(0))
        assert tokens == ["extraordinary", "circumstances"]

    def test_empty_quote_corpus_fails(self):
        with pytest.raises(SelectionError):
            select_tokens(SessionConfig.quote(), ["word"], [], random.Random(0))

    def test_blank_quote_fails(self):
        with pytest.raises(SelectionError):
            select_tokens(SessionConfig.quote(), [], [Quote(text="   ", source="nobody")], random.Random(0))


# ---------------------------------------------------------------------------
# Word modes
# ---------------------------------------------------------------------------

class TestWordModes:
    def test_word_count_limited_by_filtered_pool(self):
        words = ["cat", "dog", "sun", "hat", "elephant", "giraffes!", "hippopotamus"]
        cfg = SessionConfig.word_count(10, Difficulty.EASY)
        tokens = select_tokens(cfg, words, QUOTES, random.Random(1))
        assert len(tokens) == 4
        assert sorted(tokens) == ["cat", "dog", "hat", "sun"]

    def test_word_count_exact(self):
        words = [f"w{i}" for i in range(50)]
        tokens = select_tokens(SessionConfig.word_count(10, Difficulty.HARD), words, QUOTES, random.Random(2))
        assert len(tokens) == 10
        assert len(set(tokens)) == 10
        assert set(tokens) <= set(words)

    def test_timed_pool_size(self):
        words = [f"w{i}" for i in range(1000)]
        tokens = select_tokens(SessionConfig.timed(30, Difficulty.HARD), words, QUOTES, random.Random(4))
        assert len(tokens) == TIMED_POOL_SIZE

    def test_timed_small_corpus_uses_everything(self):
        words = ["a", "b", "c"]
        tokens = select_tokens(SessionConfig.timed(15), words, QUOTES, random.Random(5))
        assert sorted(tokens) == words

    def test_filter_fallback_to_full_corpus(self, caplog):
        words = ["elephant", "giraffes"]
        cfg = SessionConfig.word_count(5, Difficulty.EASY)
        with caplog.at_level(logging.WARNING, logger="monkminal.core.selection"):
            tokens = select_tokens(cfg, words, QUOTES, random.Random(6))
        assert sorted(tokens) == sorted(words)
        assert "falling back" in caplog.text

    def test_empty_word_corpus_fails(self):
        with pytest.raises(SelectionError) as info:
            select_tokens(SessionConfig.timed(30), [], QUOTES, random.Random(0))
        assert info.value.phase == "selection"

    def test_same_seed_same_tokens(self):
        words = [f"w{i}" for i in range(40)]
        cfg = SessionConfig.word_count(20, Difficulty.HARD)
        first = select_tokens(cfg, words, QUOTES, random.Random(9))
        second = select_tokens(cfg, words, QUOTES, random.Random(9))
        assert first == second

    def test_does_not_mutate_corpus(self):
        words = ["cat", "dog", "sun"]
        select_tokens(SessionConfig.word_count(3), words, QUOTES, random.Random(0))
        assert words == ["cat", "dog", "sun"]

    def test_default_rng(self):
        tokens = select_tokens(SessionConfig.word_count(2), ["cat", "dog", "sun"], QUOTES)
        assert len(tokens) == 2
