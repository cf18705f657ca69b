from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from monkminal.core.config import GameMode, SessionConfig
from monkminal.core.metrics import SpeedMetrics, calculate_metrics

logger = logging.getLogger(__name__)

SEPARATOR = " "


class Keystroke(Enum):
    """What a typed character did to the session."""

    CORRECT = "correct"
    ADVANCED = "advanced"
    ERROR = "error"
    IGNORED = "ignored"


@dataclass
class SessionState:
    """Progress through the token sequence of one session."""

    tokens: List[str]
    current_token_index: int = 0
    current_char_index: int = 0
    matched_input: str = ""
    pending_errors: str = ""
    start_time: Optional[float] = None
    correct_char_count: int = 0
    typed_char_count: int = 0
    ended: bool = False
    final_elapsed_seconds: Optional[float] = None

    def current_token(self) -> Optional[str]:
        if self.current_token_index < len(self.tokens):
            return self.tokens[self.current_token_index]
        return None


@dataclass(frozen=True)
class SessionResult:
    """Final numbers of a finished session."""

    metrics: SpeedMetrics
    elapsed_seconds: float
    tokens_completed: int
    token_count: int
    correct_char_count: int
    typed_char_count: int
    quit_early: bool = False


class TypingSession:
    """Character-by-character typing against a fixed token sequence.

    Correct characters extend the matched prefix of the current token. Any
    mismatch is parked in ``pending_errors`` and blocks progress until it is
    backspaced away. A space typed at the end of a clean token moves to the
    next token and counts as a correct character.
    """

    def __init__(self, tokens: List[str]) -> None:
        self.state = SessionState(tokens=list(tokens))
        self._quit_early = False

    @property
    def tokens(self) -> List[str]:
        return self.state.tokens

    @property
    def started(self) -> bool:
        return self.state.start_time is not None

    @property
    def ended(self) -> bool:
        return self.state.ended

    def start(self, now: float) -> None:
        if self.state.start_time is None:
            self.state.start_time = now

    def elapsed(self, now: float) -> float:
        """Seconds since the first keystroke, frozen once the session has ended."""
        if self.state.final_elapsed_seconds is not None:
            return self.state.final_elapsed_seconds
        if self.state.start_time is None:
            return 0.0
        return max(0.0, now - self.state.start_time)

    def is_exhausted(self) -> bool:
        return self.state.current_token_index >= len(self.state.tokens)

    def type_char(self, char: str) -> Keystroke:
        state = self.state
        target = state.current_token()
        if target is None:
            # Input after the last token never reaches the counters.
            logger.debug("Ignoring %r typed after the last token", char)
            return Keystroke.IGNORED

        if state.current_char_index < len(target):
            if not state.pending_errors and char == target[state.current_char_index]:
                state.matched_input += char
                state.current_char_index += 1
                state.correct_char_count += 1
                state.typed_char_count += 1
                return Keystroke.CORRECT
            state.pending_errors += char
            state.typed_char_count += 1
            return Keystroke.ERROR

        if char == SEPARATOR and not state.pending_errors:
            state.current_token_index += 1
            state.current_char_index = 0
            state.matched_input = ""
            state.correct_char_count += 1
            state.typed_char_count += 1
            return Keystroke.ADVANCED

        state.pending_errors += char
        state.typed_char_count += 1
        return Keystroke.ERROR

    def backspace(self) -> bool:
        """Undo the last pending error, else the last matched character.

        Counters are left alone. Returns False when there was nothing to undo.
        """
        state = self.state
        if state.pending_errors:
            state.pending_errors = state.pending_errors[:-1]
            return True
        if state.matched_input:
            state.matched_input = state.matched_input[:-1]
            state.current_char_index = max(0, state.current_char_index - 1)
            return True
        return False

    def finish(self, elapsed_seconds: float, quit_early: bool = False) -> None:
        if self.state.ended:
            return
        self.state.ended = True
        self.state.final_elapsed_seconds = elapsed_seconds
        self._quit_early = quit_early
        logger.debug(
            "Session finished after %.2fs at token %d/%d (quit_early=%s)",
            elapsed_seconds,
            self.state.current_token_index,
            len(self.state.tokens),
            quit_early,
        )

    def metrics(self, now: float = 0.0) -> SpeedMetrics:
        return calculate_metrics(
            self.state.correct_char_count,
            self.state.typed_char_count,
            self.elapsed(now),
        )

    def result(self) -> SessionResult:
        elapsed = self.state.final_elapsed_seconds or 0.0
        return SessionResult(
            metrics=self.metrics(),
            elapsed_seconds=elapsed,
            tokens_completed=min(self.state.current_token_index, len(self.state.tokens)),
            token_count=len(self.state.tokens),
            correct_char_count=self.state.correct_char_count,
            typed_char_count=self.state.typed_char_count,
            quit_early=self._quit_early,
        )


def end_condition_met(config: SessionConfig, state: SessionState, elapsed_seconds: float) -> bool:
    """Whether the session should end at ``elapsed_seconds``.

    Timed sessions run for their full duration. Word-count and quote
    sessions also end once every token has been typed, so a pool smaller
    than the target cannot leave the user with nothing left to type.
    """
    exhausted = bool(state.tokens) and state.current_token_index >= len(state.tokens)
    if config.mode is GameMode.TIMED:
        return elapsed_seconds >= (config.duration_seconds or 0)
    if config.mode is GameMode.WORD_COUNT:
        return state.current_token_index >= (config.target_word_count or 0) or exhausted
    if config.mode is GameMode.QUOTE:
        return exhausted
    raise ValueError(f"unsupported game mode: {config.mode!r}")
