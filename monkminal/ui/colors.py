"""Terminal color palette and text styles for the session screens."""

from __future__ import annotations

import curses
from dataclasses import dataclass

DEFAULT = -1


class TerminalColors:
    """Foreground/background pairs in curses color numbers. ``DEFAULT`` is the terminal's own color."""

    CORRECT = (curses.COLOR_GREEN, DEFAULT)
    ERROR = (curses.COLOR_WHITE, curses.COLOR_RED)
    CURSOR = (curses.COLOR_BLACK, curses.COLOR_YELLOW)
    ACCENT = (curses.COLOR_CYAN, DEFAULT)

    PAIR_CORRECT = 1
    PAIR_ERROR = 2
    PAIR_CURSOR = 3
    PAIR_ACCENT = 4


@dataclass(frozen=True)
class Palette:
    """curses attributes for each kind of text on screen.

    The defaults need no color support, so ``Palette()`` works on monochrome
    terminals and in tests.
    """

    normal: int = curses.A_NORMAL
    correct: int = curses.A_BOLD
    error: int = curses.A_REVERSE | curses.A_UNDERLINE
    cursor: int = curses.A_REVERSE
    muted: int = curses.A_DIM
    accent: int = curses.A_BOLD

    @classmethod
    def from_curses(cls) -> "Palette":
        """Build the colored palette. Needs ``curses.start_color`` to have run."""
        if not curses.has_colors():
            return cls()
        try:
            curses.use_default_colors()
            fallback_bg = DEFAULT
        except curses.error:
            fallback_bg = curses.COLOR_BLACK

        pairs = (
            (TerminalColors.PAIR_CORRECT, TerminalColors.CORRECT),
            (TerminalColors.PAIR_ERROR, TerminalColors.ERROR),
            (TerminalColors.PAIR_CURSOR, TerminalColors.CURSOR),
            (TerminalColors.PAIR_ACCENT, TerminalColors.ACCENT),
        )
        for number, (fg, bg) in pairs:
            curses.init_pair(number, fg, fallback_bg if bg == DEFAULT else bg)

        return cls(
            correct=curses.color_pair(TerminalColors.PAIR_CORRECT),
            error=curses.color_pair(TerminalColors.PAIR_ERROR),
            cursor=curses.color_pair(TerminalColors.PAIR_CURSOR),
            accent=curses.color_pair(TerminalColors.PAIR_ACCENT) | curses.A_BOLD,
        )
