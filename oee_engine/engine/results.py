"""Registro de resultados por tick y su mapeo a puntos de salida."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..points.names import Outputs
from .formatting import format_cycle_time, format_duration
from .health import SystemStatus

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

INSUFFICIENT_DATA = "Insufficient Data"


class Metric(str, Enum):
    QUALITY = "Quality"
    PERFORMANCE = "Performance"
    AVAILABILITY = "Availability"
    OEE = "OEE"


@dataclass(frozen=True)
class MetricStats:
    minimum: float
    maximum: float
    average: float


def _default_trends() -> Dict[str, str]:
    return {m.value: INSUFFICIENT_DATA for m in Metric}


@dataclass(frozen=True)
class CalculationResult:
    """Everything computed in one tick. Built fresh, never mutated."""

    good_count: int
    bad_count: int
    total_count: int
    runtime_seconds: float

    quality: float
    performance: float
    availability: float
    oee: float
    avg_cycle_time_seconds: float
    parts_per_hour: float
    expected_part_count: float
    planned_seconds: Optional[float]
    downtime_seconds: float

    shift_number: int = 1
    shift_start: str = "06:00:00"
    shift_end: str = "14:00:00"
    time_into_shift: str = "00:00:00"
    time_remaining_in_shift: str = "08:00:00"
    shift_change_occurred: bool = False
    shift_change_imminent: bool = False
    shift_progress: float = 0.0
    hours_per_shift: float = 8.0

    production_target: int = 0
    behind_schedule: bool = False
    projected_total_count: float = 0.0
    remaining_time_at_current_rate: str = "N/A"
    required_rate_to_target: float = 0.0
    target_variance_parts: int = 0
    production_progress: float = 0.0

    data_quality_score: float = 100.0
    calculation_valid: bool = True
    system_status: SystemStatus = SystemStatus.STARTING
    last_update_time: str = ""

    quality_vs_target: float = 0.0
    performance_vs_target: float = 0.0
    availability_vs_target: float = 0.0
    oee_vs_target: float = 0.0

    trends: Dict[str, str] = field(default_factory=_default_trends)
    statistics: Dict[str, MetricStats] = field(default_factory=dict)

    def metric(self, metric: Metric) -> float:
        return {
            Metric.QUALITY: self.quality,
            Metric.PERFORMANCE: self.performance,
            Metric.AVAILABILITY: self.availability,
            Metric.OEE: self.oee,
        }[metric]

    def stats_for(self, metric: Metric) -> MetricStats:
        """Window statistics, or the tick's own value before any history."""
        stats = self.statistics.get(metric.value)
        if stats is None:
            value = self.metric(metric)
            return MetricStats(value, value, value)
        return stats

    def to_dict(self) -> dict:
        data = asdict(self)
        data["system_status"] = self.system_status.value
        return data


def clamp_int32(value: int) -> int:
    return max(INT32_MIN, min(INT32_MAX, int(value)))


def to_outputs(result: CalculationResult, *, avg_cycle_as_text: bool = False) -> List[Tuple[str, Any]]:
    """(output point, value) pairs in write order."""
    r = result
    avg_cycle: Any = (
        format_cycle_time(r.avg_cycle_time_seconds) if avg_cycle_as_text else r.avg_cycle_time_seconds
    )
    pairs: List[Tuple[str, Any]] = [
        (Outputs.TOTAL_COUNT, clamp_int32(r.total_count)),
        (Outputs.QUALITY, r.quality),
        (Outputs.PERFORMANCE, r.performance),
        (Outputs.AVAILABILITY, r.availability),
        (Outputs.OEE, r.oee),
        (Outputs.AVG_CYCLE_TIME, avg_cycle),
        (Outputs.PARTS_PER_HOUR, r.parts_per_hour),
        (Outputs.EXPECTED_PART_COUNT, r.expected_part_count),
        (Outputs.DOWNTIME_FORMATTED, format_duration(r.downtime_seconds)),
        (Outputs.TOTAL_RUNTIME_FORMATTED, format_duration(r.runtime_seconds)),

        (Outputs.CURRENT_SHIFT_NUMBER, r.shift_number),
        (Outputs.SHIFT_START_TIME, r.shift_start),
        (Outputs.SHIFT_END_TIME, r.shift_end),
        (Outputs.TIME_INTO_SHIFT, r.time_into_shift),
        (Outputs.TIME_REMAINING_IN_SHIFT, r.time_remaining_in_shift),
        (Outputs.SHIFT_CHANGE_OCCURRED, r.shift_change_occurred),
        (Outputs.SHIFT_CHANGE_IMMINENT, r.shift_change_imminent),
        (Outputs.SHIFT_PROGRESS, r.shift_progress),
        (Outputs.HOURS_PER_SHIFT, r.hours_per_shift),

        (Outputs.PROJECTED_TOTAL_COUNT, r.projected_total_count),
        (Outputs.REMAINING_TIME_AT_CURRENT_RATE, r.remaining_time_at_current_rate),
        (Outputs.PRODUCTION_BEHIND_SCHEDULE, r.behind_schedule),
        (Outputs.REQUIRED_RATE_TO_TARGET, r.required_rate_to_target),
        (Outputs.TARGET_VS_ACTUAL_PARTS, clamp_int32(r.target_variance_parts)),
        (Outputs.PRODUCTION_PROGRESS, r.production_progress),

        (Outputs.LAST_UPDATE_TIME, r.last_update_time),
        (Outputs.SYSTEM_STATUS, r.system_status.value),
        (Outputs.CALCULATION_VALID, r.calculation_valid),
        (Outputs.DATA_QUALITY_SCORE, r.data_quality_score),

        (Outputs.QUALITY_TREND, r.trends[Metric.QUALITY.value]),
        (Outputs.PERFORMANCE_TREND, r.trends[Metric.PERFORMANCE.value]),
        (Outputs.AVAILABILITY_TREND, r.trends[Metric.AVAILABILITY.value]),
        (Outputs.OEE_TREND, r.trends[Metric.OEE.value]),
    ]

    stat_points = {
        Metric.QUALITY: (Outputs.MIN_QUALITY, Outputs.MAX_QUALITY, Outputs.AVG_QUALITY),
        Metric.PERFORMANCE: (Outputs.MIN_PERFORMANCE, Outputs.MAX_PERFORMANCE, Outputs.AVG_PERFORMANCE),
        Metric.AVAILABILITY: (Outputs.MIN_AVAILABILITY, Outputs.MAX_AVAILABILITY, Outputs.AVG_AVAILABILITY),
        Metric.OEE: (Outputs.MIN_OEE, Outputs.MAX_OEE, Outputs.AVG_OEE),
    }
    for metric, (min_point, max_point, avg_point) in stat_points.items():
        stats = r.stats_for(metric)
        pairs.append((min_point, stats.minimum))
        pairs.append((max_point, stats.maximum))
        pairs.append((avg_point, stats.average))

    pairs.extend([
        (Outputs.QUALITY_VS_TARGET, r.quality_vs_target),
        (Outputs.PERFORMANCE_VS_TARGET, r.performance_vs_target),
        (Outputs.AVAILABILITY_VS_TARGET, r.availability_vs_target),
        (Outputs.OEE_VS_TARGET, r.oee_vs_target),
    ])
    return pairs
