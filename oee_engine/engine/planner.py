"""Production planning against a unit target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .formatting import format_duration

TARGET_REACHED = "Target Reached"
NOT_AVAILABLE = "N/A"
SCHEDULE_TOLERANCE = 0.95


@dataclass(frozen=True)
class ProductionPlan:
    target: int = 0
    variance: int = 0
    projected_total: float = 0.0
    behind_schedule: bool = False
    remaining_time: str = NOT_AVAILABLE
    required_rate_per_hour: float = 0.0
    progress: float = 0.0


def plan_production(
    target: int,
    total_count: int,
    runtime_seconds: float,
    planned_seconds: Optional[float],
    parts_per_hour: float,
) -> ProductionPlan:
    """Linear projection of the period against ``target``.

    A non-positive target yields the inert plan (0 / False / "N/A").
    """
    if target <= 0:
        return ProductionPlan()

    planned_known = planned_seconds is not None and planned_seconds > 0.0

    if planned_known and runtime_seconds > 0.0:
        projected = total_count / runtime_seconds * planned_seconds
    else:
        projected = float(total_count)

    behind = False
    if planned_known:
        expected_progress = runtime_seconds / planned_seconds
        actual_progress = total_count / target
        behind = actual_progress < expected_progress * SCHEDULE_TOLERANCE

    if total_count >= target:
        remaining = TARGET_REACHED
    elif parts_per_hour > 0.0:
        remaining = format_duration((target - total_count) / parts_per_hour * 3600.0)
    else:
        remaining = NOT_AVAILABLE

    required = 0.0
    if planned_known:
        remaining_seconds = planned_seconds - runtime_seconds
        if remaining_seconds > 0.0 and total_count < target:
            required = (target - total_count) / remaining_seconds * 3600.0

    return ProductionPlan(
        target=target,
        variance=total_count - target,
        projected_total=projected,
        behind_schedule=behind,
        remaining_time=remaining,
        required_rate_per_hour=required,
        progress=max(0.0, min(100.0, total_count / target * 100.0)),
    )
