"""Shared fakes: a recording screen, a scripted terminal and a manual clock."""

from __future__ import annotations

import curses
from typing import Dict, List, Tuple

import pytest

from monkminal.ui.colors import Palette
from monkminal.ui.terminal import EventKind, InputEvent


class FakeScreen:
    """Records ``addstr`` calls and fails like curses does on out-of-bounds writes."""

    def __init__(self, size: Tuple[int, int] = (24, 80)) -> None:
        self.rows, self.cols = size
        self.cells: Dict[Tuple[int, int], Tuple[str, int]] = {}
        self.calls: List[Tuple[int, int, str, int]] = []
        self.erase_count = 0
        self.refresh_count = 0

    def resize(self, size: Tuple[int, int]) -> None:
        self.rows, self.cols = size

    def erase(self) -> None:
        self.erase_count += 1
        self.cells.clear()
        self.calls.clear()

    def refresh(self) -> None:
        self.refresh_count += 1

    def addstr(self, row: int, col: int, text: str, attr: int = 0) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise curses.error("addwstr() returned ERR")
        end = col + len(text)
        if end > self.cols or (row == self.rows - 1 and end >= self.cols):
            raise curses.error("addwstr() returned ERR")
        self.calls.append((row, col, text, attr))
        for offset, char in enumerate(text):
            self.cells[(row, col + offset)] = (char, attr)

    def row_text(self, row: int) -> str:
        return "".join(self.cells.get((row, col), (" ", 0))[0] for col in range(self.cols)).rstrip()

    def text(self) -> str:
        return "\n".join(self.row_text(row) for row in range(self.rows))

    def attr_of(self, text: str) -> int:
        """Attribute of the first ``addstr`` call that wrote exactly ``text``."""
        for _, _, written, attr in self.calls:
            if written == text:
                return attr
        raise AssertionError(f"{text!r} was never written")


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTerminal:
    """Terminal stand-in driven by a script.

    Script items: an ``InputEvent`` is delivered immediately, a float is an
    idle wait of that many seconds, ``None`` is an idle wait of one poll
    interval, and an exception instance is raised from ``read_event``.
    """

    def __init__(self, script=(), size: Tuple[int, int] = (24, 80), clock: FakeClock | None = None) -> None:
        self.script = list(script)
        self.screen = FakeScreen(size)
        self.palette = Palette()
        self.clock = clock or FakeClock()
        self._size = size
        self.timeouts: List[int] = []
        self.entered = False
        self.exited = False
        self.exit_exc_type = None

    def __enter__(self) -> "FakeTerminal":
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.exited = True
        self.exit_exc_type = exc_type
        return False

    def size(self) -> Tuple[int, int]:
        return self._size

    def read_event(self, timeout_ms: int):
        self.timeouts.append(timeout_ms)
        if not self.script:
            raise AssertionError("session loop ran past the end of the script")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if item is None:
            self.clock.advance(timeout_ms / 1000.0)
            return None
        if isinstance(item, (int, float)):
            self.clock.advance(float(item))
            return None
        if item.kind is EventKind.RESIZE and item.size is not None:
            self._size = item.size
            self.screen.resize(item.size)
        return item


def key(char: str) -> InputEvent:
    return InputEvent(EventKind.CHAR, char=char)


def chars(text: str) -> List[InputEvent]:
    return [key(c) for c in text]


ESCAPE = InputEvent(EventKind.ESCAPE)
BACKSPACE = InputEvent(EventKind.BACKSPACE)


def resize(rows: int, cols: int) -> InputEvent:
    return InputEvent(EventKind.RESIZE, size=(rows, cols))


@pytest.fixture()
def screen() -> FakeScreen:
    return FakeScreen()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
