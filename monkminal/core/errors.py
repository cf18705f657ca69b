"""Error taxonomy for the typing trainer."""

from __future__ import annotations


class MonkminalError(Exception):
    """Base error. ``phase`` names the stage of the session that failed."""

    phase = "session"

    def __init__(self, message: str, phase: str | None = None) -> None:
        super().__init__(message)
        if phase is not None:
            self.phase = phase

    def __str__(self) -> str:
        return f"[{self.phase}] {super().__str__()}"


class ConfigError(MonkminalError):
    phase = "configuration"


class SelectionError(MonkminalError):
    """No usable words or quotes for the requested mode."""

    phase = "selection"


class ResourceError(MonkminalError):
    """The terminal could not be acquired, written to or restored."""

    phase = "terminal setup"


class EventError(MonkminalError):
    """Reading the next input or resize event failed."""

    phase = "event handling"
