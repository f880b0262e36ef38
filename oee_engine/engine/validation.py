"""Guard rails sobre las entradas del host.

- validate_and_fix_inputs: repara valores claramente inválidos (negativos,
  NaN) en puntos declarados; corre cada N ticks
- seed_defaults: rellena entradas vacías con valores por defecto al arrancar
  (opcional, OEE_SEED_DEFAULTS)

Only points the host declares are touched; a value the user configured,
even zero, is never overwritten.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List

from ..points.names import Config, Inputs
from ..points.store import PointStore
from ..points.values import ValueKind
from .configuration import ConfigurationCache
from .value_reader import ValueReader, parse_float

logger = logging.getLogger(__name__)

IDEAL_CYCLE_REPAIR_SECONDS = 1.0

DEFAULT_INPUTS = (
    (Inputs.TOTAL_RUNTIME_SECONDS, 0.0),
    (Inputs.GOOD_PART_COUNT, 0),
    (Inputs.BAD_PART_COUNT, 0),
    (Inputs.IDEAL_CYCLE_TIME_SECONDS, 30.0),
    (Inputs.PLANNED_PRODUCTION_TIME_HOURS, 8.0),
    (Config.HOURS_PER_SHIFT, 8.0),
    (Config.NUMBER_OF_SHIFTS, 3),
    (Config.SHIFT_START_TIME, "06:00:00"),
    (Config.PRODUCTION_TARGET, 480),
    (Config.QUALITY_TARGET, 95.0),
    (Config.PERFORMANCE_TARGET, 85.0),
    (Config.AVAILABILITY_TARGET, 90.0),
    (Config.OEE_TARGET, 72.7),
    (Config.UPDATE_RATE_MS, 1000),
    (Config.LOGGING_VERBOSITY, 1),
)


def _set(store: PointStore, name: str, value: Any) -> bool:
    try:
        store.write(name, value)
        return True
    except Exception as e:
        logger.error("[VALIDATE] Failed to set '%s' to %r: %s", name, value, e)
        return False


def validate_and_fix_inputs(
    store: PointStore,
    reader: ValueReader,
    config: ConfigurationCache,
) -> List[str]:
    """Repair negative runtime/counts and a NaN/missing ideal cycle time.

    Returns the repaired point names; caches are invalidated if any.
    """
    fixed: List[str] = []

    for name, repaired in (
        (Inputs.TOTAL_RUNTIME_SECONDS, 0.0),
        (Inputs.GOOD_PART_COUNT, 0),
        (Inputs.BAD_PART_COUNT, 0),
    ):
        if store.has(name) and reader.read_float(name, -1.0) < 0 and _set(store, name, repaired):
            fixed.append(name)

    ideal = reader.value(Inputs.IDEAL_CYCLE_TIME_SECONDS)
    ideal_broken = ideal.is_absent or (
        ideal.kind == ValueKind.NUMBER and not math.isfinite(ideal.payload)
    )
    if store.has(Inputs.IDEAL_CYCLE_TIME_SECONDS) and ideal_broken:
        if _set(store, Inputs.IDEAL_CYCLE_TIME_SECONDS, IDEAL_CYCLE_REPAIR_SECONDS):
            fixed.append(Inputs.IDEAL_CYCLE_TIME_SECONDS)

    if fixed:
        config.invalidate()
        logger.warning("[VALIDATE] Repaired inputs: %s", ", ".join(fixed))
    return fixed


def _needs_default(reader: ValueReader, name: str, default: Any) -> bool:
    value = reader.value(name)
    if value.is_absent:
        return True
    if isinstance(default, str):
        return value.kind == ValueKind.TEXT and not value.payload.strip()
    parsed = parse_float(value, name)
    if parsed is None or parsed < 0:
        return True
    # Zero ideal cycle time would divide by zero.
    return name == Inputs.IDEAL_CYCLE_TIME_SECONDS and parsed <= 0


def seed_defaults(
    store: PointStore,
    reader: ValueReader,
    config: ConfigurationCache,
) -> List[str]:
    """Fill declared-but-empty inputs with plant defaults (30s cycle, 3x8h shifts)."""
    seeded: List[str] = []
    for name, default in DEFAULT_INPUTS:
        if store.has(name) and _needs_default(reader, name, default) and _set(store, name, default):
            seeded.append(name)
            config.invalidate(name)
    if seeded:
        logger.info("[VALIDATE] Seeded defaults: %s", ", ".join(seeded))
    return seeded
