"""Exclusive, scoped ownership of the terminal for one session."""

from __future__ import annotations

import curses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from monkminal.core.errors import EventError, ResourceError
from monkminal.ui.colors import Palette

logger = logging.getLogger(__name__)

ESCAPE_DELAY_MS = 25
ESCAPE_CHARS = {"\x1b", "\x03"}
BACKSPACE_CHARS = {"\x7f", "\x08"}


class EventKind(Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    ESCAPE = "escape"
    RESIZE = "resize"
    OTHER = "other"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    char: str = ""
    size: Optional[Tuple[int, int]] = None

    @property
    def is_key(self) -> bool:
        return self.kind is not EventKind.RESIZE


def translate_key(raw: Union[str, int]) -> InputEvent:
    """Map a ``get_wch`` result onto an event.

    Ctrl-C arrives as a plain character in raw mode and is treated like Escape.
    """
    if isinstance(raw, int):
        if raw == curses.KEY_BACKSPACE:
            return InputEvent(EventKind.BACKSPACE)
        if raw == curses.KEY_RESIZE:
            return InputEvent(EventKind.RESIZE)
        return InputEvent(EventKind.OTHER)
    if raw in ESCAPE_CHARS:
        return InputEvent(EventKind.ESCAPE)
    if raw in BACKSPACE_CHARS:
        return InputEvent(EventKind.BACKSPACE)
    if len(raw) == 1 and raw.isprintable():
        return InputEvent(EventKind.CHAR, char=raw)
    return InputEvent(EventKind.OTHER)


class Terminal:
    """Raw-mode, cursor-hidden curses screen, restored on every exit path.

    Use as a context manager::

        with Terminal() as terminal:
            event = terminal.read_event(100)
    """

    def __init__(self, use_colors: bool = True) -> None:
        self._use_colors = use_colors
        self._cursor_hidden = False
        self._size: Tuple[int, int] = (0, 0)
        self.screen = None
        self.palette = Palette()

    def __enter__(self) -> "Terminal":
        try:
            self.screen = curses.initscr()
        except curses.error as exc:
            raise ResourceError(f"could not initialise the terminal: {exc}") from exc

        try:
            curses.noecho()
            curses.raw()
            self.screen.keypad(True)
            if hasattr(curses, "set_escdelay"):
                curses.set_escdelay(ESCAPE_DELAY_MS)
            if self._use_colors and curses.has_colors():
                curses.start_color()
                self.palette = Palette.from_curses()
            self._size = self.screen.getmaxyx()
        except Exception as exc:
            self._restore_quietly()
            raise ResourceError(f"could not enter raw mode: {exc}") from exc
        except BaseException:
            self._restore_quietly()
            raise

        try:
            curses.curs_set(0)
            self._cursor_hidden = True
        except curses.error:
            logger.debug("Terminal does not support hiding the cursor")

        logger.debug("Terminal acquired (%d rows x %d cols)", *self._size)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self._restore()
        except curses.error as restore_exc:
            if exc_type is not None:
                logger.error("Could not restore the terminal: %s", restore_exc)
                return False
            raise ResourceError(
                f"could not restore the terminal: {restore_exc}",
                phase="terminal teardown",
            ) from restore_exc
        logger.debug("Terminal restored")
        return False

    def size(self) -> Tuple[int, int]:
        """Cached ``(rows, cols)``, refreshed on resize events."""
        return self._size

    def read_event(self, timeout_ms: int) -> Optional[InputEvent]:
        """Wait up to ``timeout_ms`` for a key or resize. None on timeout."""
        try:
            self.screen.timeout(timeout_ms)
            raw = self.screen.get_wch()
        except curses.error as exc:
            if str(exc) == "no input":
                return None
            raise EventError(f"could not read the next event: {exc}") from exc

        event = translate_key(raw)
        if event.kind is EventKind.RESIZE:
            try:
                curses.update_lines_cols()
                self._size = self.screen.getmaxyx()
            except curses.error as exc:
                raise ResourceError(f"could not query terminal size: {exc}", phase="rendering") from exc
            event = InputEvent(EventKind.RESIZE, size=self._size)
        return event

    def _restore(self) -> None:
        """Undo every setup step; the first failure is re-raised after endwin has run."""
        if self.screen is None:
            return
        steps = [lambda: self.screen.keypad(False), curses.noraw, curses.echo]
        if self._cursor_hidden:
            steps.insert(0, lambda: curses.curs_set(1))
        first_error: Optional[curses.error] = None
        for step in steps:
            try:
                step()
            except curses.error as exc:
                first_error = first_error or exc
        try:
            curses.endwin()
        except curses.error as exc:
            first_error = first_error or exc
        self.screen = None
        self._cursor_hidden = False
        if first_error is not None:
            raise first_error

    def _restore_quietly(self) -> None:
        try:
            self._restore()
        except curses.error as exc:
            logger.error("Could not restore the terminal after failed setup: %s", exc)
