"""Interactive prompts that collect a SessionConfig before the session starts."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from monkminal.core.config import (
    DEFAULT_MENU_WORD_COUNT,
    DEFAULT_TIME,
    TIME_CHOICES,
    WORD_COUNT_CHOICES,
    Difficulty,
    GameMode,
    SessionConfig,
)

MODES = (GameMode.TIMED, GameMode.WORD_COUNT, GameMode.QUOTE)
DIFFICULTIES = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)


def choose(
    prompt: str,
    options: Sequence[str],
    default_index: int,
    input_fn: Optional[Callable[[str], str]] = None,
    output: Optional[Callable[[str], None]] = None,
) -> int:
    """Ask for one of ``options`` by number; a blank answer picks the default."""
    input_fn = input_fn or input
    output = output or print
    output(prompt)
    for number, option in enumerate(options, start=1):
        marker = " (default)" if number - 1 == default_index else ""
        output(f"  {number}) {option}{marker}")
    while True:
        answer = input_fn(f"Choice [{default_index + 1}]: ").strip()
        if not answer:
            return default_index
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return int(answer) - 1
        output(f"Please enter a number between 1 and {len(options)}.")


def prompt_config(
    input_fn: Optional[Callable[[str], str]] = None,
    output: Optional[Callable[[str], None]] = None,
) -> SessionConfig:
    mode = MODES[choose("Pick a game type:", [m.label for m in MODES], 0, input_fn, output)]

    seconds = None
    count = None
    if mode is GameMode.TIMED:
        index = choose(
            "Pick a time limit:",
            [f"{s}s" for s in TIME_CHOICES],
            TIME_CHOICES.index(DEFAULT_TIME),
            input_fn,
            output,
        )
        seconds = TIME_CHOICES[index]
    elif mode is GameMode.WORD_COUNT:
        index = choose(
            "Pick a number of words:",
            [str(c) for c in WORD_COUNT_CHOICES],
            WORD_COUNT_CHOICES.index(DEFAULT_MENU_WORD_COUNT),
            input_fn,
            output,
        )
        count = WORD_COUNT_CHOICES[index]

    difficulty = DIFFICULTIES[
        choose(
            "Pick a difficulty:",
            [d.label for d in DIFFICULTIES],
            DIFFICULTIES.index(Difficulty.MEDIUM),
            input_fn,
            output,
        )
    ]
    return SessionConfig(mode, duration_seconds=seconds, target_word_count=count, difficulty=difficulty)
