"""Valores de puntos del host como unión etiquetada.

Every host value crosses into the engine through ``PointValue.wrap``; code
downstream of the Value Reader only sees native ``float``/``int``/``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Union


class ValueKind(str, Enum):
    """Representaciones posibles de un valor del host."""
    NUMBER = "number"
    TEXT = "text"
    DURATION = "duration"
    TIMESTAMP = "timestamp"
    ABSENT = "absent"


Payload = Union[float, str, timedelta, datetime, time, None]


@dataclass(frozen=True)
class PointValue:
    """Valor etiquetado; igualdad por valor (usado como clave de caché)."""
    kind: ValueKind
    payload: Payload = None

    @property
    def is_absent(self) -> bool:
        return self.kind == ValueKind.ABSENT

    @classmethod
    def absent(cls) -> "PointValue":
        return _ABSENT

    @classmethod
    def number(cls, value: float) -> "PointValue":
        return cls(ValueKind.NUMBER, float(value))

    @classmethod
    def text(cls, value: str) -> "PointValue":
        return cls(ValueKind.TEXT, value)

    @classmethod
    def wrap(cls, raw: Any) -> "PointValue":
        """Wrap an arbitrary host object.

        bool/int/float -> NUMBER, str -> TEXT, timedelta -> DURATION,
        datetime/time -> TIMESTAMP, None -> ABSENT. Anything else is kept as
        its ``str()`` so the reader can still try to parse it.
        """
        if raw is None:
            return _ABSENT
        if isinstance(raw, PointValue):
            return raw
        if isinstance(raw, bool):
            return cls(ValueKind.NUMBER, 1.0 if raw else 0.0)
        if isinstance(raw, (int, float)):
            return cls(ValueKind.NUMBER, float(raw))
        if isinstance(raw, str):
            return cls(ValueKind.TEXT, raw)
        if isinstance(raw, timedelta):
            return cls(ValueKind.DURATION, raw)
        if isinstance(raw, (datetime, time)):
            return cls(ValueKind.TIMESTAMP, raw)
        return cls(ValueKind.TEXT, str(raw))

    def __str__(self) -> str:
        if self.is_absent:
            return "<absent>"
        return f"{self.kind.value}:{self.payload!r}"


_ABSENT = PointValue(ValueKind.ABSENT, None)
