"""Rolling windows, trend classification and window statistics."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import replace
from statistics import mean
from typing import Dict, Sequence

from .results import INSUFFICIENT_DATA, CalculationResult, Metric, MetricStats

DEFAULT_HISTORY_SIZE = 60

RISING_STRONGLY = "Rising Strongly"
RISING = "Rising"
FALLING_STRONGLY = "Falling Strongly"
FALLING = "Falling"
STABLE = "Stable"

STRONG_CHANGE = 2.0
CHANGE = 0.5


def _classify_change(change: float) -> str:
    if change >= STRONG_CHANGE:
        return RISING_STRONGLY
    if change >= CHANGE:
        return RISING
    if change <= -STRONG_CHANGE:
        return FALLING_STRONGLY
    if change <= -CHANGE:
        return FALLING
    return STABLE


def classify_trend(samples: Sequence[float]) -> str:
    """Trend of a window, oldest sample first.

    2-4 samples compare newest against oldest; from 5 on, the mean of the
    newest ceil(n/2) samples is compared against the mean of the rest.
    """
    n = len(samples)
    if n < 2:
        return INSUFFICIENT_DATA
    if n <= 4:
        return _classify_change(samples[-1] - samples[0])
    split = n - math.ceil(n / 2)
    return _classify_change(mean(samples[split:]) - mean(samples[:split]))


class RollingHistory:
    """Bounded FIFO of samples; oldest evicted first."""

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE):
        self._samples: deque = deque(maxlen=max(1, max_size))

    def append(self, value: float) -> None:
        self._samples.append(value)

    def __len__(self) -> int:
        return len(self._samples)

    def values(self) -> list:
        return list(self._samples)

    def clear(self) -> None:
        self._samples.clear()

    def trend(self) -> str:
        return classify_trend(self.values())

    def stats(self) -> MetricStats:
        values = self.values()
        return MetricStats(minimum=min(values), maximum=max(values), average=mean(values))


class TrendingEngine:
    """One RollingHistory per metric, updated once per tick."""

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        # Window statistics need at least one sample.
        self.history_size = max(1, history_size)
        self._histories: Dict[Metric, RollingHistory] = {
            m: RollingHistory(self.history_size) for m in Metric
        }

    def history(self, metric: Metric) -> RollingHistory:
        return self._histories[metric]

    def apply(self, result: CalculationResult) -> CalculationResult:
        """Append the tick's metrics and return the result with trends and stats."""
        for metric, history in self._histories.items():
            history.append(result.metric(metric))

        trends = {m.value: h.trend() for m, h in self._histories.items()}
        statistics = {m.value: h.stats() for m, h in self._histories.items()}
        return replace(result, trends=trends, statistics=statistics)

    def reset(self) -> None:
        for history in self._histories.values():
            history.clear()

    def get_stats(self) -> dict:
        return {
            "history_size": self.history_size,
            "samples": {m.value: len(h) for m, h in self._histories.items()},
        }
