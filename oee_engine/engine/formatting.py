"""Formato y parseo de duraciones ``HH:MM:SS``."""

from __future__ import annotations

import math
import re
from typing import Optional

SECONDS_PER_DAY = 86400.0

_DURATION_RE = re.compile(r"^(-)?(\d+):([0-5]?\d)(?::([0-5]?\d(?:\.\d+)?))?$")


def format_duration(seconds: float) -> str:
    """Elapsed time as ``HH:MM:SS``; hours keep counting past 24.

    Non-positive and NaN inputs render as ``00:00:00``.
    """
    if seconds is None or math.isnan(seconds) or seconds <= 0:
        return "00:00:00"
    if math.isinf(seconds):
        return "99:59:59"
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_time_of_day(seconds: float) -> str:
    """Seconds since midnight as ``hh:mm:ss``, wrapped to one day."""
    total = int(seconds % SECONDS_PER_DAY)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def parse_duration(text: str) -> Optional[float]:
    """Parse ``hh:mm[:ss[.fff]]`` into seconds. None when malformed."""
    if text is None:
        return None
    m = _DURATION_RE.match(text.strip())
    if not m:
        return None
    sign, hours, minutes, secs = m.groups()
    total = int(hours) * 3600 + int(minutes) * 60 + (float(secs) if secs else 0.0)
    return -total if sign else total


def format_cycle_time(seconds: float) -> str:
    """Cycle time for text outputs: ``12.345 s`` or ``MM:SS.mmm`` above a minute."""
    if seconds is None or math.isnan(seconds) or seconds <= 0:
        return "0.000 s"
    if math.isinf(seconds):
        return "99:59.999"
    if seconds < 60.0:
        return f"{seconds:.3f} s"
    total_ms = int(round(seconds * 1000.0))
    minutes, rem_ms = divmod(total_ms, 60000)
    secs, msec = divmod(rem_ms, 1000)
    return f"{minutes:02d}:{secs:02d}.{msec:03d}"
