"""Choosing the words or quote tokens for a session."""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from monkminal.core.config import DEFAULT_WORD_COUNT, Difficulty, GameMode, SessionConfig
from monkminal.core.corpus import Quote
from monkminal.core.errors import SelectionError

logger = logging.getLogger(__name__)

# Large enough that a timed session never runs out of words.
TIMED_POOL_SIZE = 300


def filter_by_difficulty(words: Sequence[str], difficulty: Difficulty) -> List[str]:
    limit = difficulty.max_length
    if limit is None:
        return list(words)
    return [word for word in words if len(word) <= limit]


def select_tokens(
    config: SessionConfig,
    words: Sequence[str],
    quotes: Sequence[Quote],
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Return the ordered tokens the user has to type in this session.

    ``rng`` is any object with ``choice`` and ``sample``; a fresh
    ``random.Random`` is used when omitted.
    """
    rng = rng if rng is not None else random.Random()

    if config.mode is GameMode.QUOTE:
        return _select_quote(quotes, rng)
    if config.mode is GameMode.TIMED:
        return _select_words(words, TIMED_POOL_SIZE, config.difficulty, rng)
    if config.mode is GameMode.WORD_COUNT:
        count = config.target_word_count or DEFAULT_WORD_COUNT
        return _select_words(words, count, config.difficulty, rng)
    raise SelectionError(f"unsupported game mode: {config.mode!r}")


def _select_quote(quotes: Sequence[Quote], rng: random.Random) -> List[str]:
    if not quotes:
        raise SelectionError("no quotes available for quote mode")
    quote = rng.choice(quotes)
    tokens = quote.text.split()
    if not tokens:
        raise SelectionError(f"quote from {quote.source!r} has no words")
    logger.debug("Selected quote from %s (%d tokens)", quote.source, len(tokens))
    return tokens


def _select_words(words: Sequence[str], count: int, difficulty: Difficulty, rng: random.Random) -> List[str]:
    if not words:
        raise SelectionError("no words available for the selected mode")

    pool = filter_by_difficulty(words, difficulty)
    if not pool:
        logger.warning(
            "No words found for difficulty %s, falling back to all %d words",
            difficulty.label,
            len(words),
        )
        pool = list(words)

    take = min(count, len(pool))
    if take == 0:
        raise SelectionError(f"no words could be selected (requested {count}, available {len(pool)})")
    tokens = rng.sample(pool, take)
    logger.debug("Selected %d of %d %s words", take, len(pool), difficulty.label)
    return tokens
