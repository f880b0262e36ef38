"""Lectura defensiva de valores del host.

Parse failures degrade to a fallback and are logged at ERROR; ABSENT values
are an expected condition and are not logged. Nothing here raises.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime
from typing import Optional

from ..points.store import PointStore
from ..points.values import PointValue, ValueKind
from .formatting import SECONDS_PER_DAY, parse_duration

logger = logging.getLogger(__name__)

# Dot decimal separator, no grouping; float() alone would accept "1_000" and "nan".
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")

_TRUE_TEXT = ("true", "1", "yes", "on")
_FALSE_TEXT = ("false", "0", "no", "off")


def _parse_failed(name: str, expected: str, value: PointValue) -> None:
    logger.error("[READER] Cannot parse %s as %s: %s", name, expected, value)


def _number_text(text: str) -> Optional[float]:
    s = text.strip()
    if not _NUMBER_RE.match(s):
        return None
    return float(s)


def _time_of_day_seconds(ts) -> float:
    if isinstance(ts, datetime):
        ts = ts.time()
    return ts.hour * 3600 + ts.minute * 60 + ts.second + ts.microsecond / 1e6


def parse_float(value: PointValue, name: str = "?") -> Optional[float]:
    """Finite float from NUMBER or numeric TEXT."""
    if value.is_absent:
        return None
    result: Optional[float] = None
    if value.kind == ValueKind.NUMBER:
        result = value.payload
    elif value.kind == ValueKind.TEXT:
        result = _number_text(value.payload)
    elif value.kind == ValueKind.DURATION:
        result = value.payload.total_seconds()
    if result is None or not math.isfinite(result):
        _parse_failed(name, "number", value)
        return None
    return result


def parse_int(value: PointValue, name: str = "?") -> Optional[int]:
    """Integer from an integral NUMBER or integer TEXT."""
    if value.is_absent:
        return None
    if value.kind == ValueKind.NUMBER:
        v = value.payload
        if math.isfinite(v) and float(v).is_integer():
            return int(v)
    elif value.kind == ValueKind.TEXT:
        s = value.payload.strip()
        if _INT_RE.match(s):
            return int(s)
    _parse_failed(name, "integer", value)
    return None


def parse_bool(value: PointValue, name: str = "?") -> Optional[bool]:
    if value.is_absent:
        return None
    if value.kind == ValueKind.NUMBER:
        return value.payload != 0
    if value.kind == ValueKind.TEXT:
        s = value.payload.strip().lower()
        if s in _TRUE_TEXT:
            return True
        if s in _FALSE_TEXT:
            return False
    _parse_failed(name, "boolean", value)
    return None


def parse_seconds(value: PointValue, name: str = "?") -> Optional[float]:
    """Seconds from a number, a duration, a timestamp's time of day or ``hh:mm:ss``."""
    if value.is_absent:
        return None
    kind, payload = value.kind, value.payload
    result: Optional[float] = None
    if kind == ValueKind.NUMBER:
        result = payload
    elif kind == ValueKind.DURATION:
        result = payload.total_seconds()
    elif kind == ValueKind.TIMESTAMP:
        result = _time_of_day_seconds(payload)
    elif kind == ValueKind.TEXT:
        result = parse_duration(payload) if ":" in payload else _number_text(payload)
    if result is None or not math.isfinite(result):
        _parse_failed(name, "seconds", value)
        return None
    return result


def parse_hours(value: PointValue, name: str = "?") -> Optional[float]:
    """Hours; bare numbers are hours, durations and ``hh:mm:ss`` are converted."""
    if value.is_absent:
        return None
    kind, payload = value.kind, value.payload
    result: Optional[float] = None
    if kind == ValueKind.NUMBER:
        result = payload
    elif kind == ValueKind.DURATION:
        result = payload.total_seconds() / 3600.0
    elif kind == ValueKind.TIMESTAMP:
        result = _time_of_day_seconds(payload) / 3600.0
    elif kind == ValueKind.TEXT:
        if ":" in payload:
            secs = parse_duration(payload)
            result = secs / 3600.0 if secs is not None else None
        else:
            result = _number_text(payload)
    if result is None or not math.isfinite(result):
        _parse_failed(name, "hours", value)
        return None
    return result


def parse_time_of_day(value: PointValue, name: str = "?") -> Optional[float]:
    """Seconds since midnight in [0, 86400). Bare numbers are hours."""
    if value.is_absent:
        return None
    kind, payload = value.kind, value.payload
    result: Optional[float] = None
    if kind == ValueKind.TIMESTAMP:
        result = _time_of_day_seconds(payload)
    elif kind == ValueKind.DURATION:
        result = payload.total_seconds()
    elif kind == ValueKind.NUMBER:
        result = payload * 3600.0
    elif kind == ValueKind.TEXT:
        if ":" in payload:
            result = parse_duration(payload)
        else:
            hours = _number_text(payload)
            result = hours * 3600.0 if hours is not None else None
    if result is None or not math.isfinite(result) or not 0 <= result < SECONDS_PER_DAY:
        _parse_failed(name, "time of day", value)
        return None
    return result


class ValueReader:
    """Typed reads over a PointStore with fallback defaults."""

    def __init__(self, store: PointStore):
        self._store = store

    def value(self, name: str) -> PointValue:
        try:
            return self._store.read(name)
        except Exception as e:
            logger.error("[READER] Read of %s failed: %s", name, e)
            return PointValue.absent()

    def is_absent(self, name: str) -> bool:
        return self.value(name).is_absent

    def read_float(self, name: str, fallback: float) -> float:
        result = parse_float(self.value(name), name)
        return fallback if result is None else result

    def read_int(self, name: str, fallback: int) -> int:
        result = parse_int(self.value(name), name)
        return fallback if result is None else result

    def read_bool(self, name: str, fallback: bool) -> bool:
        result = parse_bool(self.value(name), name)
        return fallback if result is None else result
