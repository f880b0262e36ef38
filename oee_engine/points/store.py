"""Abstract interface for the host point model.

This decouples the engine from the HMI/SCADA runtime. Any host (OPC UA
server, PLC gateway, in-memory dict) can implement this interface.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from .values import PointValue


class PointWriteError(Exception):
    """El host rechazó la escritura de un punto."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Write to '{name}' rejected: {reason}")


class UnknownPointError(PointWriteError):
    """Escritura a un punto que el host no declara."""

    def __init__(self, name: str):
        super().__init__(name, "point not declared")


class PointStore(ABC):
    """Named, typed read/write cells exposed by the host.

    Implementations:
    - InMemoryPointStore: dict-backed, for tests, CLI and embedding
    """

    @abstractmethod
    def has(self, name: str) -> bool:
        """Whether the host declares the point."""

    @abstractmethod
    def read(self, name: str) -> PointValue:
        """Read a point. Undeclared points read as ABSENT."""

    @abstractmethod
    def write(self, name: str, value: Any) -> None:
        """Write a point.

        Raises:
            PointWriteError: the host rejected the write
        """

    def is_text(self, name: str) -> bool:
        """Whether the point is declared as a string-typed cell."""
        return False


class InMemoryPointStore(PointStore):
    """Dict-backed point store.

    ``reject`` holds point names whose writes fail with PointWriteError,
    which lets tests simulate a host rejecting specific outputs.
    """

    def __init__(
        self,
        values: Optional[Mapping[str, Any]] = None,
        *,
        declared: Optional[Iterable[str]] = None,
        text_points: Optional[Iterable[str]] = None,
    ):
        self._values: Dict[str, Any] = dict(values or {})
        self._declared: Set[str] = set(declared or ()) | set(self._values)
        self._text: Set[str] = set(text_points or ())
        self.reject: Set[str] = set()
        self._lock = threading.Lock()

    def declare(self, *names: str, text: bool = False) -> None:
        with self._lock:
            self._declared.update(names)
            if text:
                self._text.update(names)

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._declared

    def read(self, name: str) -> PointValue:
        with self._lock:
            if name not in self._declared:
                return PointValue.absent()
            return PointValue.wrap(self._values.get(name))

    def get(self, name: str, default: Any = None) -> Any:
        """Raw native value, for assertions and diagnostics."""
        with self._lock:
            return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        """Host-side update; declares the point if needed."""
        with self._lock:
            self._declared.add(name)
            self._values[name] = value

    def write(self, name: str, value: Any) -> None:
        with self._lock:
            if name not in self._declared:
                raise UnknownPointError(name)
            if name in self.reject:
                raise PointWriteError(name, "rejected by host")
            self._values[name] = value

    def is_text(self, name: str) -> bool:
        with self._lock:
            return name in self._text

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {name: self._values.get(name) for name in sorted(self._declared)}
