from __future__ import annotations

import curses
import logging
import random
import time
from enum import Enum
from typing import Callable, Optional, Sequence

from monkminal.core.config import SessionConfig
from monkminal.core.corpus import Quote
from monkminal.core.errors import ResourceError
from monkminal.core.selection import select_tokens
from monkminal.core.session import SessionResult, TypingSession, end_condition_met
from monkminal.ui.renderer import Renderer
from monkminal.ui.terminal import EventKind, InputEvent, Terminal

logger = logging.getLogger(__name__)


class Phase(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    ENDED = "ended"


# Event wait per tick, in milliseconds.
POLL_INTERVAL_MS = {
    Phase.WAITING: 500,
    Phase.PLAYING: 100,
    Phase.ENDED: 100,
}


class SessionLoop:
    """Single-threaded tick loop: wait briefly for one event, apply it, redraw.

    Phases run WAITING -> PLAYING -> ENDED. Resize events are accepted in every
    phase and only update the cached screen size.
    """

    def __init__(
        self,
        terminal,
        session: TypingSession,
        config: SessionConfig,
        clock: Callable[[], float] = time.monotonic,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.terminal = terminal
        self.session = session
        self.config = config
        self.clock = clock
        self.renderer = renderer or Renderer(terminal.screen, terminal.palette)
        self.phase = Phase.WAITING
        self.size = terminal.size()
        self.finished = False
        self._start_screen_stale = True

    def run(self) -> None:
        logger.debug("Session loop running: %s", self.config.describe())
        while not self.finished:
            self.tick()

    def tick(self) -> None:
        if self.phase is Phase.WAITING:
            self._tick_waiting()
        elif self.phase is Phase.PLAYING:
            self._tick_playing()
        elif self.phase is Phase.ENDED:
            self._tick_ended()
        else:
            raise ValueError(f"unknown phase: {self.phase!r}")

    def _tick_waiting(self) -> None:
        if self._start_screen_stale:
            self._draw(self.renderer.draw_start, self.config, self.size)
            self._start_screen_stale = False

        event = self._next_event()
        if event is None:
            return
        if event.kind is EventKind.RESIZE:
            self._start_screen_stale = True
            return
        self.session.start(self.clock())
        self.phase = Phase.PLAYING
        logger.debug("First key pressed, timer started")

    def _tick_playing(self) -> None:
        elapsed = self.session.elapsed(self.clock())
        if end_condition_met(self.config, self.session.state, elapsed):
            self._end(elapsed)
            return

        event = self._next_event()
        if event is not None:
            self._apply(event)
        if self.session.ended:
            self.phase = Phase.ENDED
            return
        self._draw(self.renderer.draw_active, self.session, self.config, self.clock(), self.size)

    def _tick_ended(self) -> None:
        self._draw(self.renderer.draw_end, self.session, self.size)
        event = self._next_event()
        if event is not None and event.is_key:
            self.finished = True

    def _apply(self, event: InputEvent) -> None:
        if event.kind is EventKind.ESCAPE:
            logger.debug("Escape pressed, ending session")
            self.session.finish(self.session.elapsed(self.clock()), quit_early=True)
        elif event.kind is EventKind.BACKSPACE:
            self.session.backspace()
        elif event.kind is EventKind.CHAR:
            self.session.type_char(event.char)

    def _end(self, elapsed: float) -> None:
        self.session.finish(elapsed)
        self.phase = Phase.ENDED

    def _next_event(self) -> Optional[InputEvent]:
        event = self.terminal.read_event(POLL_INTERVAL_MS[self.phase])
        if event is not None and event.kind is EventKind.RESIZE and event.size is not None:
            self.size = event.size
            logger.debug("Terminal resized to %d rows x %d cols", *self.size)
        return event

    def _draw(self, draw, *args) -> None:
        try:
            draw(*args)
        except curses.error as exc:
            raise ResourceError(f"could not draw the {self.phase.value} screen: {exc}", phase="rendering") from exc


def run_session(
    config: SessionConfig,
    words: Sequence[str],
    quotes: Sequence[Quote],
    rng: Optional[random.Random] = None,
    terminal_factory: Callable[[], Terminal] = Terminal,
    clock: Callable[[], float] = time.monotonic,
) -> SessionResult:
    """Play one session from start prompt to end screen.

    Token selection happens before the terminal is touched, so a
    ``SelectionError`` leaves the screen alone.
    """
    tokens = select_tokens(config, words, quotes, rng)
    session = TypingSession(tokens)
    logger.info("Starting %s session with %d tokens", config.describe(), len(tokens))

    with terminal_factory() as terminal:
        SessionLoop(terminal, session, config, clock=clock).run()

    result = session.result()
    logger.info(
        "Session over: %.0f net WPM, %.2f%% accuracy in %.1fs",
        result.metrics.net_wpm,
        result.metrics.accuracy,
        result.elapsed_seconds,
    )
    return result
