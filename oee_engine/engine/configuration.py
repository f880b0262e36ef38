"""Configuración del host: snapshot periódico y cachés de parseo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..common.config import Settings
from ..points.names import Config, Inputs
from .cache import CachedValue
from .value_reader import ValueReader, parse_hours, parse_seconds, parse_time_of_day

logger = logging.getLogger(__name__)

# World-class OEE targets; 72.7 ~= 95% x 85% x 90%.
DEFAULT_QUALITY_TARGET = 95.0
DEFAULT_PERFORMANCE_TARGET = 85.0
DEFAULT_AVAILABILITY_TARGET = 90.0
DEFAULT_OEE_TARGET = 72.7

DEFAULT_SHIFT_START_SECONDS = 6 * 3600.0
DEFAULT_LOGGING_VERBOSITY = 1


@dataclass(frozen=True)
class ConfigurationSnapshot:
    """Targets y parámetros del loop leídos del host."""
    quality_target: float = DEFAULT_QUALITY_TARGET
    performance_target: float = DEFAULT_PERFORMANCE_TARGET
    availability_target: float = DEFAULT_AVAILABILITY_TARGET
    oee_target: float = DEFAULT_OEE_TARGET
    update_rate_ms: int = 1000
    logging_verbosity: int = DEFAULT_LOGGING_VERBOSITY

    def to_dict(self) -> dict:
        return {
            "quality_target": self.quality_target,
            "performance_target": self.performance_target,
            "availability_target": self.availability_target,
            "oee_target": self.oee_target,
            "update_rate_ms": self.update_rate_ms,
            "logging_verbosity": self.logging_verbosity,
        }


class ConfigurationCache:
    """Memoizes parsed ideal cycle, planned duration and shift start."""

    def __init__(self, reader: ValueReader, settings: Settings):
        self._reader = reader
        self._ideal_fallback = settings.ideal_cycle_fallback_seconds
        self.snapshot = ConfigurationSnapshot(update_rate_ms=settings.update_rate_ms)

        self._ideal = CachedValue(
            lambda v: parse_seconds(v, Inputs.IDEAL_CYCLE_TIME_SECONDS),
            lambda s: s > 0.0,
        )
        self._planned_hours = CachedValue(
            lambda v: parse_hours(v, Inputs.PLANNED_PRODUCTION_TIME_HOURS),
            lambda h: h > 0.0,
        )
        self._shift_start = CachedValue(
            lambda v: parse_time_of_day(v, Config.SHIFT_START_TIME),
        )

    def refresh(self) -> ConfigurationSnapshot:
        """Re-read targets, update rate and verbosity."""
        r = self._reader
        update_rate = r.read_int(Config.UPDATE_RATE_MS, -1)
        verbosity = r.read_int(Config.LOGGING_VERBOSITY, DEFAULT_LOGGING_VERBOSITY)
        snapshot = replace(
            self.snapshot,
            quality_target=r.read_float(Config.QUALITY_TARGET, DEFAULT_QUALITY_TARGET),
            performance_target=r.read_float(Config.PERFORMANCE_TARGET, DEFAULT_PERFORMANCE_TARGET),
            availability_target=r.read_float(Config.AVAILABILITY_TARGET, DEFAULT_AVAILABILITY_TARGET),
            oee_target=r.read_float(Config.OEE_TARGET, DEFAULT_OEE_TARGET),
            logging_verbosity=min(3, max(0, verbosity)),
        )
        if update_rate > 0:
            snapshot = replace(snapshot, update_rate_ms=update_rate)
        if snapshot != self.snapshot:
            logger.info("[CONFIG] Configuration changed: %s", snapshot.to_dict())
        self.snapshot = snapshot
        return snapshot

    @property
    def ideal_valid(self) -> bool:
        return self._ideal.resolve(self._reader.value(Inputs.IDEAL_CYCLE_TIME_SECONDS)) is not None

    def ideal_cycle_seconds(self) -> float:
        value = self._ideal.resolve(self._reader.value(Inputs.IDEAL_CYCLE_TIME_SECONDS))
        return self._ideal_fallback if value is None else value

    @property
    def planned_valid(self) -> bool:
        return self._planned_hours.resolve(
            self._reader.value(Inputs.PLANNED_PRODUCTION_TIME_HOURS)
        ) is not None

    def planned_seconds(self) -> Optional[float]:
        """Planned production seconds, or None when it cannot be determined.

        PlannedProductionTimeHours, then HoursPerShift, then 24h/NumberOfShifts.
        """
        hours = self._planned_hours.resolve(self._reader.value(Inputs.PLANNED_PRODUCTION_TIME_HOURS))
        if hours is not None:
            return hours * 3600.0

        hours_per_shift = self._reader.read_float(Config.HOURS_PER_SHIFT, float("nan"))
        if hours_per_shift > 0.0:
            return hours_per_shift * 3600.0

        shifts = self._reader.read_int(Config.NUMBER_OF_SHIFTS, -1)
        if shifts > 0:
            return 24.0 / shifts * 3600.0
        return None

    @property
    def shift_start_valid(self) -> bool:
        return self._shift_start.resolve(self._reader.value(Config.SHIFT_START_TIME)) is not None

    def shift_start_seconds(self) -> float:
        value = self._shift_start.resolve(self._reader.value(Config.SHIFT_START_TIME))
        return DEFAULT_SHIFT_START_SECONDS if value is None else value

    def invalidate(self, name: Optional[str] = None) -> None:
        """Drop one cached entry by point name, or all of them."""
        if name is None or name == Inputs.IDEAL_CYCLE_TIME_SECONDS:
            self._ideal.invalidate()
        if name is None or name in (
            Inputs.PLANNED_PRODUCTION_TIME_HOURS,
            Config.HOURS_PER_SHIFT,
            Config.NUMBER_OF_SHIFTS,
        ):
            self._planned_hours.invalidate()
        if name is None or name == Config.SHIFT_START_TIME:
            self._shift_start.invalidate()

    def to_dict(self) -> dict:
        return {
            "snapshot": self.snapshot.to_dict(),
            "ideal_cycle_seconds": self._ideal.to_dict(),
            "planned_production_hours": self._planned_hours.to_dict(),
            "shift_start_seconds": self._shift_start.to_dict(),
        }
