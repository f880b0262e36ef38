"""Escritura de salidas con cooldown por punto.

Self-healing breaker per output: a failed write disables only that output,
and only until the retry cooldown has elapsed. The first attempt after the
cooldown goes through; success re-enables the output, failure restarts the
cooldown.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..points.store import PointStore
from .writer_config import OutputPresence, WriterConfig

logger = logging.getLogger(__name__)


class OutputPresenceRegistry:
    """Owned map: output point -> writable flag and last failure."""

    def __init__(self, names: Iterable[str] = ()):
        self._entries: Dict[str, OutputPresence] = {name: OutputPresence() for name in names}

    @classmethod
    def discover(cls, store: PointStore, names: Iterable[str]) -> Tuple["OutputPresenceRegistry", List[str]]:
        """Registry over the outputs the host declares, plus the missing ones."""
        present, missing = [], []
        for name in names:
            (present if store.has(name) else missing).append(name)
        return cls(present), missing

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> Optional[OutputPresence]:
        return self._entries.get(name)

    def in_cooldown(self, name: str, now: float, cooldown_seconds: float) -> bool:
        entry = self._entries[name]
        if entry.writable or entry.last_failure_at is None:
            return False
        return (now - entry.last_failure_at) < cooldown_seconds

    def mark_success(self, name: str) -> bool:
        """Returns True when the output was recovering from a failure."""
        entry = self._entries[name]
        recovered = not entry.writable
        entry.writable = True
        entry.last_failure_at = None
        entry.last_failure_utc = None
        entry.last_error = None
        return recovered

    def mark_failure(self, name: str, now: float, error: Exception) -> None:
        entry = self._entries[name]
        entry.writable = False
        entry.last_failure_at = now
        entry.last_failure_utc = datetime.now(timezone.utc)
        entry.last_error = str(error)[:200]
        entry.failures += 1

    def failed(self) -> List[str]:
        return [name for name, entry in self._entries.items() if not entry.writable]

    def to_dict(self) -> dict:
        return {name: entry.to_dict() for name, entry in self._entries.items()}


class OutputWriter:
    """Writes result values to output points through the presence registry.

    Uso:
        writer = OutputWriter(store, names.ALL_OUTPUTS)
        writer.write_all(to_outputs(result))
    """

    def __init__(
        self,
        store: PointStore,
        outputs: Iterable[str],
        config: Optional[WriterConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._outputs = tuple(outputs)
        self._config = config or WriterConfig.from_env()
        self._clock = clock

        self._writes = 0
        self._write_failures = 0
        self._skipped_cooldown = 0
        self._skipped_blank = 0
        # Guards the registry swap on reset() against writes from the loop thread.
        self._lock = threading.Lock()

        self.registry, self.missing = OutputPresenceRegistry.discover(store, self._outputs)
        self._log_discovery()

    def _log_discovery(self) -> None:
        logger.info(
            "[WRITER] Initialized: outputs=%d missing=%d cooldown=%.1fs",
            len(self.registry), len(self.missing), self._config.retry_cooldown_seconds,
        )
        if self.missing:
            logger.info("[WRITER] Outputs not declared by host (skipped): %s", ", ".join(self.missing))

    def is_text(self, name: str) -> bool:
        with self._lock:
            registered = name in self.registry
        return registered and self._store.is_text(name)

    def write(self, name: str, value: Any) -> bool:
        """Attempt one write. Returns True if the value reached the host."""
        with self._lock:
            registry = self.registry
            if name not in registry:
                return False

            now = self._clock()
            if registry.in_cooldown(name, now, self._config.retry_cooldown_seconds):
                self._skipped_cooldown += 1
                return False

            if isinstance(value, str) and not value.strip():
                self._skipped_blank += 1
                return False

        # The host write runs unlocked; outcomes land on the registry it was checked against.
        try:
            self._store.write(name, value)
        except Exception as e:
            with self._lock:
                self._write_failures += 1
                registry.mark_failure(name, now, e)
            logger.error(
                "[WRITER] Write failed for '%s' value=%r (%s): %s",
                name, value, type(value).__name__, e,
            )
            return False

        with self._lock:
            self._writes += 1
            recovered = registry.mark_success(name)
        if recovered:
            logger.info("[WRITER] Output '%s' recovered", name)
        return True

    def write_all(self, pairs: Iterable[Tuple[str, Any]]) -> int:
        return sum(1 for name, value in pairs if self.write(name, value))

    def reset(self) -> None:
        """Rebuild the registry: clear failures and re-detect declared outputs."""
        registry, missing = OutputPresenceRegistry.discover(self._store, self._outputs)
        with self._lock:
            self.registry, self.missing = registry, missing
        logger.info("[WRITER] Registry reset")
        self._log_discovery()

    def get_stats(self) -> dict:
        with self._lock:
            registry, missing = self.registry, list(self.missing)
            counters = {
                "writes": self._writes,
                "write_failures": self._write_failures,
                "skipped_cooldown": self._skipped_cooldown,
                "skipped_blank": self._skipped_blank,
            }
        failed = registry.failed()
        return {
            "outputs": len(registry),
            "writable": len(registry) - len(failed),
            "failed": failed,
            "missing": missing,
            **counters,
            "config": {
                "retry_cooldown_seconds": self._config.retry_cooldown_seconds,
            },
        }
