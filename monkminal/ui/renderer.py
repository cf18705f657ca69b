"""Drawing the start, active and end-of-session screens."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from monkminal.core.config import GameMode, SessionConfig
from monkminal.core.metrics import MIN_ELAPSED_SECONDS
from monkminal.core.session import SessionState, TypingSession
from monkminal.ui.colors import Palette

Segment = Tuple[str, int]

MAX_WORDS_TO_DISPLAY = 15
APPROX_CHARS_WINDOW = 60
HEADER_ROWS = 2
FOOTER_ROWS = 1
MIN_WRAP_WIDTH = 10

START_PROMPT = "Press any key to start..."
QUIT_HINT = "Press Esc to quit"
END_PROMPT = "Press any key to exit."
PLACEHOLDER_STATS = "Gross WPM: - | Net WPM: - | Accuracy: -%"

GAME_OVER_BANNER = (
    r"  ____                         ___                 _ ",
    r" / ___| __ _ _ __ ___   ___   / _ \__   _____ _ __| |",
    r"| |  _ / _` | '_ ` _ \ / _ \ | | | \ \ / / _ \ '__| |",
    r"| |_| | (_| | | | | | |  __/ | |_| |\ V /  __/ |  |_|",
    r" \____|\__,_|_| |_| |_|\___|  \___/  \_/ \___|_|  (_)",
)
GAME_OVER_PLAIN = "GAME OVER"


def format_clock(seconds: float) -> str:
    """``MM:SS`` for a non-negative number of seconds."""
    seconds = max(0.0, seconds)
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


def centre_offset(width: int, length: int) -> int:
    return max(0, (width - length) // 2)


def token_window(tokens: Sequence[str], current_index: int) -> range:
    """Indices of the tokens shown around ``current_index``.

    Starts a few tokens back and runs until roughly a line's worth of
    characters past the current token, which is always included.
    """
    start = max(0, current_index - MAX_WORDS_TO_DISPLAY // 3)
    end = start
    used = 0
    for index in range(start, len(tokens)):
        used += len(tokens[index]) + 1
        if used > APPROX_CHARS_WINDOW and index > current_index:
            break
        end = index + 1
    if end == start and start < len(tokens):
        end = start + 1
    return range(start, end)


def token_segments(state: SessionState, index: int, palette: Palette) -> List[Segment]:
    """Styled pieces for the token at ``index``."""
    token = state.tokens[index]
    if index != state.current_token_index:
        return [(token, palette.muted)]

    segments: List[Segment] = []
    if state.matched_input:
        segments.append((state.matched_input, palette.correct))
    if state.pending_errors:
        segments.append((state.pending_errors, palette.error))
    position = state.current_char_index
    if position < len(token):
        cursor_attr = palette.muted if state.pending_errors else palette.cursor
        segments.append((token[position], cursor_attr))
        if position + 1 < len(token):
            segments.append((token[position + 1:], palette.muted))
    return segments


def segments_length(segments: Sequence[Segment]) -> int:
    return sum(len(text) for text, _ in segments)


def wrap_segments(words: Sequence[List[Segment]], width: int, space_attr: int = 0) -> List[List[Segment]]:
    """Greedy word wrap of styled words, joined by single spaces."""
    lines: List[List[Segment]] = []
    line: List[Segment] = []
    line_length = 0
    for word in words:
        word_length = segments_length(word)
        if line and line_length + 1 + word_length > width:
            lines.append(line)
            line, line_length = [], 0
        if line:
            line.append((" ", space_attr))
            line_length += 1
        line.extend(word)
        line_length += word_length
    if line:
        lines.append(line)
    return lines


class Renderer:
    """Draws session screens on a curses window (or anything with ``erase``,
    ``addstr`` and ``refresh``)."""

    def __init__(self, screen, palette: Optional[Palette] = None) -> None:
        self.screen = screen
        self.palette = palette or Palette()
        self._rows = 0
        self._cols = 0

    def draw_start(self, config: SessionConfig, size: Tuple[int, int]) -> None:
        self._begin(size)
        middle = self._rows // 2
        summary = config.describe()
        self._put_centred(middle - 1, summary, self.palette.accent)
        self._put_centred(middle, START_PROMPT, self.palette.normal)
        self.screen.refresh()

    def draw_active(self, session: TypingSession, config: SessionConfig, now: float, size: Tuple[int, int]) -> None:
        self._begin(size)
        elapsed = session.elapsed(now)

        if config.mode is GameMode.TIMED:
            remaining = max(0.0, (config.duration_seconds or 0) - elapsed)
            timer = f"Time Left: {format_clock(remaining)}"
        else:
            timer = f"Time Elapsed: {format_clock(elapsed)}"
        self._put_centred(0, timer, self.palette.accent)

        if session.started and elapsed > MIN_ELAPSED_SECONDS:
            metrics = session.metrics(now)
            stats = (
                f"Gross WPM: {metrics.gross_wpm:.0f} | Net WPM: {metrics.net_wpm:.0f} "
                f"| Accuracy: {metrics.accuracy:.2f}%"
            )
        else:
            stats = PLACEHOLDER_STATS
        self._put_centred(1, stats, self.palette.normal)

        state = session.state
        words = [token_segments(state, index, self.palette) for index in token_window(state.tokens, state.current_token_index)]
        wrap_width = max(MIN_WRAP_WIDTH, self._cols - 4)
        lines = wrap_segments(words, wrap_width, self.palette.normal)

        available = self._rows - HEADER_ROWS - FOOTER_ROWS
        first_row = HEADER_ROWS + max(0, available - len(lines)) // 2
        for offset, line in enumerate(lines):
            row = first_row + offset
            if row >= self._rows - FOOTER_ROWS:
                break
            self._put_segments(row, line)

        self._put_centred(self._rows - 1, QUIT_HINT, self.palette.muted)
        self.screen.refresh()

    def draw_end(self, session: TypingSession, size: Tuple[int, int]) -> None:
        self._begin(size)
        result = session.result()
        metrics = result.metrics

        banner = GAME_OVER_BANNER if max(len(line) for line in GAME_OVER_BANNER) <= self._cols else (GAME_OVER_PLAIN,)
        lines: List[Segment] = [(line, self.palette.accent) for line in banner]
        lines.append(("", self.palette.normal))
        lines.extend(
            (text, self.palette.normal)
            for text in (
                f"Gross WPM: {metrics.gross_wpm:.0f}",
                f"Net WPM:   {metrics.net_wpm:.0f}",
                f"Accuracy:  {metrics.accuracy:.2f}%",
                f"Time Taken: {format_clock(result.elapsed_seconds)}",
            )
        )
        lines.append(("", self.palette.normal))
        lines.append((END_PROMPT, self.palette.muted))

        first_row = max(0, (self._rows - len(lines)) // 2)
        for offset, (text, attr) in enumerate(lines):
            self._put_centred(first_row + offset, text, attr)
        self.screen.refresh()

    def _begin(self, size: Tuple[int, int]) -> None:
        self._rows, self._cols = size
        self.screen.erase()

    def _put_centred(self, row: int, text: str, attr: int) -> None:
        self._put(row, centre_offset(self._cols, len(text)), text, attr)

    def _put_segments(self, row: int, segments: Sequence[Segment]) -> None:
        col = centre_offset(self._cols, segments_length(segments))
        for text, attr in segments:
            self._put(row, col, text, attr)
            col += len(text)

    def _put(self, row: int, col: int, text: str, attr: int) -> None:
        """Write clipped to the screen. The bottom-right cell is never written,
        since curses fails when the cursor would move past it."""
        if not text or row < 0 or row >= self._rows or col >= self._cols:
            return
        limit = self._cols - col
        if row == self._rows - 1:
            limit -= 1
        text = text[:limit]
        if text:
            self.screen.addstr(row, col, text, attr)
