"""Modelo de puntos del host.

Contiene:
- PointValue: unión etiquetada de valores del host
- PointStore / InMemoryPointStore: lectura/escritura de puntos
- names: rutas de entradas, configuración y salidas
"""

from .values import PointValue, ValueKind
from .store import InMemoryPointStore, PointStore, PointWriteError, UnknownPointError
from . import names

__all__ = [
    "PointValue",
    "ValueKind",
    "PointStore",
    "InMemoryPointStore",
    "PointWriteError",
    "UnknownPointError",
    "names",
]
