"""Valor parseado en caché, recalculado solo cuando cambia el valor crudo."""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

from ..points.values import PointValue

T = TypeVar("T")

_UNSET = object()


class CachedValue(Generic[T]):
    """Pairs the last raw input with its parsed result and a validity flag.

    The raw key is compared by value (``PointValue`` equality), so a host
    that re-publishes the same value does not trigger a re-parse.
    """

    def __init__(
        self,
        parser: Callable[[PointValue], Optional[T]],
        is_valid: Callable[[T], bool] = lambda _v: True,
    ):
        self._parser = parser
        self._is_valid = is_valid
        self._raw_key: object = _UNSET
        self.parsed: Optional[T] = None
        self.valid = False
        self.parses = 0

    def resolve(self, raw: PointValue) -> Optional[T]:
        """Parsed value for ``raw`` when valid, else None."""
        if self._raw_key is _UNSET or raw != self._raw_key:
            self.parsed = self._parser(raw)
            self.valid = self.parsed is not None and self._is_valid(self.parsed)
            self._raw_key = raw
            self.parses += 1
        return self.parsed if self.valid else None

    def invalidate(self) -> None:
        self._raw_key = _UNSET
        self.parsed = None
        self.valid = False

    def to_dict(self) -> dict:
        return {
            "raw": None if self._raw_key is _UNSET else str(self._raw_key),
            "parsed": self.parsed,
            "valid": self.valid,
            "parses": self.parses,
        }
