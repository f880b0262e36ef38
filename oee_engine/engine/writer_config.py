"""Configuración y modelos para el Output Writer.

Extraído de output_writer.py para mantener archivos pequeños.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.config import Settings, get_settings


@dataclass
class WriterConfig:
    """Configuración del writer de salidas."""
    retry_cooldown_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "WriterConfig":
        return cls(retry_cooldown_seconds=settings.write_retry_cooldown_seconds)

    @classmethod
    def from_env(cls) -> "WriterConfig":
        """Same values the engine sees, including the .env file."""
        return cls.from_settings(get_settings())


@dataclass
class OutputPresence:
    """Estado de escritura de un punto de salida."""
    writable: bool = True
    last_failure_at: Optional[float] = None
    last_failure_utc: Optional[datetime] = None
    last_error: Optional[str] = None
    failures: int = 0

    def to_dict(self) -> dict:
        return {
            "writable": self.writable,
            "last_failure_utc": self.last_failure_utc.isoformat() if self.last_failure_utc else None,
            "last_error": self.last_error,
            "failures": self.failures,
        }
