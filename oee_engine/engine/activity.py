"""Runtime activity tracking.

The machine counts as active while the runtime input keeps moving; the
thresholds below classify how long it has been frozen.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable

CHANGE_EPSILON_SECONDS = 0.1
ACTIVE_WINDOW_SECONDS = 30.0
STOPPED_WINDOW_SECONDS = 300.0


class ActivityState(str, Enum):
    ACTIVE = "active"
    STOPPED = "stopped"
    IDLE = "idle"


class RuntimeActivityTracker:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.last_runtime_seconds = -1.0
        self.last_change_at = clock()

    def observe(self, runtime_seconds: float) -> bool:
        """Record a runtime sample. Returns True when it counts as a change."""
        now = self._clock()
        if abs(runtime_seconds - self.last_runtime_seconds) > CHANGE_EPSILON_SECONDS:
            self.last_runtime_seconds = runtime_seconds
            self.last_change_at = now
            return True
        if self.last_runtime_seconds < 0:
            self.last_runtime_seconds = runtime_seconds
            self.last_change_at = now
        return False

    def seconds_since_change(self) -> float:
        return max(0.0, self._clock() - self.last_change_at)

    def state(self) -> ActivityState:
        elapsed = self.seconds_since_change()
        if elapsed <= ACTIVE_WINDOW_SECONDS:
            return ActivityState.ACTIVE
        if elapsed <= STOPPED_WINDOW_SECONDS:
            return ActivityState.STOPPED
        return ActivityState.IDLE

    def to_dict(self) -> dict:
        return {
            "last_runtime_seconds": self.last_runtime_seconds,
            "seconds_since_change": round(self.seconds_since_change(), 3),
            "state": self.state().value,
        }
