from __future__ import annotations

from dataclasses import dataclass

STANDARD_WORD_LENGTH = 5.0
MIN_ELAPSED_SECONDS = 0.01


@dataclass(frozen=True)
class SpeedMetrics:
    """Speed and accuracy for a stretch of typing."""

    gross_wpm: float
    net_wpm: float
    accuracy: float


def calculate_metrics(correct_chars: int, typed_chars: int, elapsed_seconds: float) -> SpeedMetrics:
    """Turn character counters and elapsed time into WPM and accuracy.

    Methodology:
      * **Gross WPM** – (typed chars / 5) / elapsed minutes.
      * **Net WPM** – gross WPM minus one word per minute for every
        uncorrected error per minute, floored at 0.
      * **Accuracy** – correct chars / typed chars as a percentage, 100 when
        nothing has been typed yet.

    Below 0.01 seconds the speeds are reported as 0 rather than divided out.
    """
    if elapsed_seconds < MIN_ELAPSED_SECONDS or typed_chars == 0:
        accuracy = 100.0 if typed_chars == 0 else (correct_chars / typed_chars) * 100.0
        return SpeedMetrics(gross_wpm=0.0, net_wpm=0.0, accuracy=accuracy)

    minutes = elapsed_seconds / 60.0
    gross = (typed_chars / STANDARD_WORD_LENGTH) / minutes
    errors = max(0, typed_chars - correct_chars)
    penalty = errors / minutes
    net = max(0.0, gross - penalty)
    accuracy = (correct_chars / typed_chars) * 100.0
    return SpeedMetrics(gross_wpm=gross, net_wpm=net, accuracy=accuracy)
