"""Contador de pulsos y runtime.

Counts good/bad part pulses on rising edges and accumulates running time
from the running bit with a start/stop stopwatch. A rising edge on the
reset command zeroes everything.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class CounterSample:
    """Signals read in one poll."""
    running: bool = False
    good_pulse: bool = False
    bad_pulse: bool = False
    reset: bool = False


@dataclass(frozen=True)
class CounterSnapshot:
    good_count: int
    bad_count: int
    runtime_seconds: float
    reset_triggered: bool = False


class PulseCounter:
    """Edge-detecting counter; one ``update`` per poll."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.good_count = 0
        self.bad_count = 0
        self._accumulated_seconds = 0.0
        self._running_since: Optional[float] = None

        self._last_good = False
        self._last_bad = False
        self._last_reset = False
        self._last_running = False

    @property
    def runtime_seconds(self) -> float:
        """Accumulated runtime including the stopwatch still running."""
        if self._running_since is None:
            return self._accumulated_seconds
        return self._accumulated_seconds + (self._clock() - self._running_since)

    def update(self, sample: CounterSample) -> CounterSnapshot:
        now = self._clock()

        reset_triggered = sample.reset and not self._last_reset
        if reset_triggered:
            self.good_count = 0
            self.bad_count = 0
            self._accumulated_seconds = 0.0
            self._running_since = now if sample.running else None
        self._last_reset = sample.reset

        if sample.running and not self._last_running:
            self._running_since = now
        elif not sample.running and self._last_running and self._running_since is not None:
            self._accumulated_seconds += now - self._running_since
            self._running_since = None

        if sample.good_pulse and not self._last_good:
            self.good_count += 1
        if sample.bad_pulse and not self._last_bad:
            self.bad_count += 1

        self._last_good = sample.good_pulse
        self._last_bad = sample.bad_pulse
        self._last_running = sample.running

        return CounterSnapshot(
            good_count=self.good_count,
            bad_count=self.bad_count,
            runtime_seconds=self.runtime_seconds,
            reset_triggered=reset_triggered,
        )
