"""Data-quality score and system status."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum

from ..points.names import Config, Inputs
from .activity import ActivityState
from .configuration import ConfigurationCache
from .value_reader import ValueReader, parse_float

VALID_SCORE = 75.0
ERROR_SCORE = 50.0

PENALTIES = {
    "runtime_ok": 25.0,
    "good_count_ok": 25.0,
    "ideal_cycle_ok": 25.0,
    "planned_ok": 15.0,
    "bad_count_ok": 5.0,
    "shift_start_ok": 2.5,
    "production_target_ok": 2.5,
}


class SystemStatus(str, Enum):
    STARTING = "Starting"
    RUNNING = "Running"
    STOPPED = "Stopped"
    IDLE = "Idle"
    ERROR = "Error"


@dataclass(frozen=True)
class InputHealth:
    """Presence/validity of each scored input."""
    runtime_ok: bool = True
    good_count_ok: bool = True
    ideal_cycle_ok: bool = True
    planned_ok: bool = True
    bad_count_ok: bool = True
    shift_start_ok: bool = True
    production_target_ok: bool = True

    def missing(self) -> list:
        return [f.name[:-3] for f in fields(self) if not getattr(self, f.name)]


def assess_inputs(reader: ValueReader, config: ConfigurationCache) -> InputHealth:
    def non_negative(name: str) -> bool:
        value = reader.value(name)
        if value.is_absent:
            return False
        parsed = parse_float(value, name)
        return parsed is not None and parsed >= 0

    def parseable(name: str) -> bool:
        value = reader.value(name)
        return not value.is_absent and parse_float(value, name) is not None

    return InputHealth(
        runtime_ok=non_negative(Inputs.TOTAL_RUNTIME_SECONDS),
        good_count_ok=non_negative(Inputs.GOOD_PART_COUNT),
        ideal_cycle_ok=config.ideal_valid,
        planned_ok=config.planned_valid,
        bad_count_ok=non_negative(Inputs.BAD_PART_COUNT),
        shift_start_ok=config.shift_start_valid,
        production_target_ok=parseable(Config.PRODUCTION_TARGET),
    )


def score_data_quality(health: InputHealth) -> float:
    score = 100.0
    for flag, penalty in PENALTIES.items():
        if not getattr(health, flag):
            score -= penalty
    return max(0.0, score)


def classify_status(score: float, valid: bool, activity: ActivityState) -> SystemStatus:
    """Status from score first, then runtime recency; counts are not consulted."""
    if score < ERROR_SCORE:
        return SystemStatus.ERROR
    if not valid:
        return SystemStatus.ERROR
    if activity == ActivityState.ACTIVE:
        return SystemStatus.RUNNING
    if activity == ActivityState.STOPPED:
        return SystemStatus.STOPPED
    return SystemStatus.IDLE
