"""Cálculo OEE de un tick.

``compute_core_metrics`` is pure and never raises: every degenerate input
(zero counts, zero runtime, unknown planned time) resolves to a safe
default. ``OEECalculator`` wires it to the host inputs, shift tracking,
production planning and health scoring to build one CalculationResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.config import Settings
from ..points.names import Config, Inputs
from .activity import RuntimeActivityTracker
from .configuration import ConfigurationCache
from .health import VALID_SCORE, assess_inputs, classify_status, score_data_quality
from .planner import plan_production
from .results import CalculationResult
from .shift import ShiftTracker
from .value_reader import ValueReader

logger = logging.getLogger(__name__)

PERFORMANCE_CAP = 999.9
LAST_UPDATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class CoreMetrics:
    quality: float
    performance: float
    availability: float
    oee: float
    avg_cycle_time_seconds: float
    parts_per_hour: float
    expected_part_count: float
    planned_seconds: Optional[float]
    downtime_seconds: float
    # Raw performance when it exceeded the cap, else None.
    uncapped_performance: Optional[float] = None


def compute_core_metrics(
    good: int,
    bad: int,
    runtime_seconds: float,
    ideal_cycle_seconds: float,
    planned_seconds: Optional[float],
    *,
    availability_fallback: float = 100.0,
    expected_part_fallback: float = 480.0,
) -> CoreMetrics:
    total = good + bad

    quality = 0.0 if total == 0 else good / total * 100.0

    uncapped = None
    if total == 0:
        performance = 0.0
    elif runtime_seconds <= 0.0:
        performance = 100.0
    elif ideal_cycle_seconds <= 0.0:
        performance = 0.0
    else:
        raw = ideal_cycle_seconds * total / runtime_seconds * 100.0
        performance = min(PERFORMANCE_CAP, raw)
        if raw > PERFORMANCE_CAP:
            uncapped = raw

    if planned_seconds is not None and planned_seconds > 0.0:
        availability = max(0.0, min(100.0, runtime_seconds / planned_seconds * 100.0))
        downtime = max(0.0, planned_seconds - runtime_seconds)
    else:
        availability = availability_fallback
        planned_seconds = None
        downtime = 0.0

    oee = quality * performance * availability / 10000.0

    avg_cycle = 0.0 if total == 0 else runtime_seconds / total
    parts_per_hour = total / runtime_seconds * 3600.0 if runtime_seconds > 0.0 else 0.0

    if planned_seconds is not None and ideal_cycle_seconds > 0.0:
        expected = planned_seconds / ideal_cycle_seconds
    else:
        expected = expected_part_fallback

    return CoreMetrics(
        quality=quality,
        performance=performance,
        availability=availability,
        oee=oee,
        avg_cycle_time_seconds=avg_cycle,
        parts_per_hour=parts_per_hour,
        expected_part_count=expected,
        planned_seconds=planned_seconds,
        downtime_seconds=downtime,
        uncapped_performance=uncapped,
    )


class OEECalculator:
    def __init__(
        self,
        reader: ValueReader,
        config: ConfigurationCache,
        activity: RuntimeActivityTracker,
        shifts: ShiftTracker,
        settings: Settings,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._reader = reader
        self._config = config
        self._activity = activity
        self._shifts = shifts
        self._settings = settings
        self._now = now

    def calculate(self) -> CalculationResult:
        r = self._reader
        runtime = r.read_float(Inputs.TOTAL_RUNTIME_SECONDS, 0.0)
        good = r.read_int(Inputs.GOOD_PART_COUNT, 0)
        bad = r.read_int(Inputs.BAD_PART_COUNT, 0)
        total = good + bad

        self._activity.observe(runtime)

        score = score_data_quality(assess_inputs(r, self._config))
        valid = score >= VALID_SCORE

        core = compute_core_metrics(
            good,
            bad,
            runtime,
            self._config.ideal_cycle_seconds(),
            self._config.planned_seconds(),
            availability_fallback=self._settings.availability_fallback,
            expected_part_fallback=self._settings.expected_part_fallback,
        )
        if core.uncapped_performance is not None and self._config.snapshot.logging_verbosity >= 1:
            logger.info(
                "[OEE] Performance capped at %.1f%% (calculated: %.1f%%) - check IdealCycleTime",
                PERFORMANCE_CAP, core.uncapped_performance,
            )

        shift = self._shifts.track(self._config.shift_start_seconds(), core.planned_seconds)
        plan = plan_production(
            r.read_int(Config.PRODUCTION_TARGET, -1),
            total,
            runtime,
            core.planned_seconds,
            core.parts_per_hour,
        )
        targets = self._config.snapshot

        return CalculationResult(
            good_count=good,
            bad_count=bad,
            total_count=total,
            runtime_seconds=runtime,
            quality=core.quality,
            performance=core.performance,
            availability=core.availability,
            oee=core.oee,
            avg_cycle_time_seconds=core.avg_cycle_time_seconds,
            parts_per_hour=core.parts_per_hour,
            expected_part_count=core.expected_part_count,
            planned_seconds=core.planned_seconds,
            downtime_seconds=core.downtime_seconds,
            shift_number=shift.window.number,
            shift_start=shift.window.start,
            shift_end=shift.window.end,
            time_into_shift=shift.window.time_into_shift,
            time_remaining_in_shift=shift.window.time_remaining,
            shift_change_occurred=shift.change_occurred,
            shift_change_imminent=shift.change_imminent,
            shift_progress=shift.window.progress,
            hours_per_shift=shift.window.hours_per_shift,
            production_target=plan.target,
            behind_schedule=plan.behind_schedule,
            projected_total_count=plan.projected_total,
            remaining_time_at_current_rate=plan.remaining_time,
            required_rate_to_target=plan.required_rate_per_hour,
            target_variance_parts=plan.variance,
            production_progress=plan.progress,
            data_quality_score=score,
            calculation_valid=valid,
            system_status=classify_status(score, valid, self._activity.state()),
            last_update_time=self._now().strftime(LAST_UPDATE_FORMAT),
            quality_vs_target=core.quality - targets.quality_target,
            performance_vs_target=core.performance - targets.performance_target,
            availability_vs_target=core.availability - targets.availability_target,
            oee_vs_target=core.oee - targets.oee_target,
        )
