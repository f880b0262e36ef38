"""Seguimiento de turnos.

Shift N starts at ``start + (N-1) * duration`` (time of day, wrapping past
midnight). The number of shifts per day is ``round(24h / duration)``; the
last shift of the day runs until shift 1 starts again, so it absorbs any
uncovered gap and is cut short when the shifts overrun the day. An unknown
duration falls back to a default 8 hour shift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .formatting import SECONDS_PER_DAY, format_duration, format_time_of_day, parse_duration

logger = logging.getLogger(__name__)

FALLBACK_SHIFT_SECONDS = 8 * 3600.0


@dataclass(frozen=True)
class ShiftWindow:
    number: int
    start: str
    end: str
    time_into_shift: str
    time_remaining: str
    progress: float = 0.0
    hours_per_shift: float = FALLBACK_SHIFT_SECONDS / 3600.0


@dataclass(frozen=True)
class ShiftInfo:
    window: ShiftWindow
    change_occurred: bool
    change_imminent: bool


def fallback_window(start_seconds: float) -> ShiftWindow:
    """Cannot place the current time: assume the start of a single 8h shift."""
    return ShiftWindow(
        number=1,
        start=format_time_of_day(start_seconds),
        end=format_time_of_day(start_seconds + FALLBACK_SHIFT_SECONDS),
        time_into_shift="00:00:00",
        time_remaining=format_duration(FALLBACK_SHIFT_SECONDS),
    )


def compute_shift(
    now_seconds: float,
    start_seconds: float,
    shift_seconds: Optional[float],
) -> ShiftWindow:
    """Shift window containing ``now_seconds`` (seconds since midnight)."""
    if shift_seconds is None or shift_seconds <= 0:
        return fallback_window(start_seconds)

    shifts_per_day = max(1, round(SECONDS_PER_DAY / shift_seconds))
    offset = (now_seconds - start_seconds) % SECONDS_PER_DAY
    index = min(int(offset // shift_seconds), shifts_per_day - 1)

    length = shift_seconds
    if index == shifts_per_day - 1:
        length = SECONDS_PER_DAY - index * shift_seconds

    this_start = start_seconds + index * shift_seconds
    elapsed = offset - index * shift_seconds
    return ShiftWindow(
        number=index + 1,
        start=format_time_of_day(this_start),
        end=format_time_of_day(this_start + length),
        time_into_shift=format_duration(elapsed),
        time_remaining=format_duration(length - elapsed),
        progress=max(0.0, min(100.0, elapsed / length * 100.0)),
        hours_per_shift=shift_seconds / 3600.0,
    )


def _seconds_since_midnight(now: datetime) -> float:
    return now.hour * 3600 + now.minute * 60 + now.second + now.microsecond / 1e6


class ShiftTracker:
    """Shift window plus change/imminent edge detection across ticks."""

    def __init__(
        self,
        warning_seconds: float = 300.0,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._warning_seconds = warning_seconds
        self._now = now
        self.last_shift_number: Optional[int] = None

    def track(self, start_seconds: float, shift_seconds: Optional[float]) -> ShiftInfo:
        window = compute_shift(_seconds_since_midnight(self._now()), start_seconds, shift_seconds)

        occurred = (
            self.last_shift_number is not None
            and self.last_shift_number != window.number
        )
        if occurred:
            logger.info(
                "[SHIFT] Shift change %s -> %s at %s",
                self.last_shift_number, window.number, window.start,
            )
        self.last_shift_number = window.number

        remaining = parse_duration(window.time_remaining)
        imminent = remaining is not None and 0 < remaining <= self._warning_seconds
        return ShiftInfo(window=window, change_occurred=occurred, change_imminent=imminent)

    def reset(self) -> None:
        self.last_shift_number = None
