"""Background loop that feeds PulseCounter from the point store.

Polls fast (50 ms by default) so short pulses are not missed, and writes
counts and runtime back through an OutputWriter so a rejected output backs
off instead of being retried every poll.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..common.config import Settings, get_settings
from ..engine.formatting import format_duration
from ..engine.output_writer import OutputWriter
from ..engine.value_reader import ValueReader
from ..engine.writer_config import WriterConfig
from ..points.names import Counter
from ..points.store import PointStore
from .pulse_counter import CounterSample, CounterSnapshot, PulseCounter

logger = logging.getLogger(__name__)

COUNTER_OUTPUTS = (
    Counter.GOOD_PART_COUNT,
    Counter.BAD_PART_COUNT,
    Counter.TOTAL_RUNTIME_SECONDS,
    Counter.TOTAL_RUNTIME_FORMATTED,
)


@dataclass
class CounterConfig:
    """Configuración del contador de pulsos."""
    poll_ms: int = 50
    stop_timeout_seconds: float = 0.5
    write_retry_cooldown_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "CounterConfig":
        return cls(
            poll_ms=settings.counter_poll_ms,
            stop_timeout_seconds=settings.stop_timeout_seconds,
            write_retry_cooldown_seconds=settings.write_retry_cooldown_seconds,
        )

    @classmethod
    def from_env(cls) -> "CounterConfig":
        return cls.from_settings(get_settings())


class PulseCounterService:
    def __init__(
        self,
        store: PointStore,
        config: Optional[CounterConfig] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self._config = config or CounterConfig.from_env()
        self._reader = ValueReader(store)
        self.counter = PulseCounter(clock)
        self.writer = OutputWriter(
            store,
            COUNTER_OUTPUTS,
            WriterConfig(retry_cooldown_seconds=self._config.write_retry_cooldown_seconds),
            clock,
        )

        self._polls = 0
        self._resets = 0
        self._errors = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll(self) -> CounterSnapshot:
        """Read the signals once, update counts and write outputs."""
        r = self._reader
        sample = CounterSample(
            running=r.read_bool(Counter.MACHINE_RUNNING_BIT, False),
            good_pulse=r.read_bool(Counter.GOOD_PART_PULSE, False),
            bad_pulse=r.read_bool(Counter.BAD_PART_PULSE, False),
            reset=r.read_bool(Counter.RESET_COMMAND, False),
        )
        snapshot = self.counter.update(sample)
        self._polls += 1

        if snapshot.reset_triggered:
            self._resets += 1
            logger.info("[COUNTER] Reset command received, counters cleared")
            try:
                self._store.write(Counter.RESET_COMMAND, False)
            except Exception as e:
                logger.error("[COUNTER] Could not clear reset command: %s", e)

        self.writer.write_all((
            (Counter.GOOD_PART_COUNT, snapshot.good_count),
            (Counter.BAD_PART_COUNT, snapshot.bad_count),
            (Counter.TOTAL_RUNTIME_SECONDS, snapshot.runtime_seconds),
            (Counter.TOTAL_RUNTIME_FORMATTED, format_duration(snapshot.runtime_seconds)),
        ))
        return snapshot

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name="oee-pulse-counter")
        self._thread.start()
        logger.info("[COUNTER] Started poll=%dms", self._config.poll_ms)

    def stop(self) -> bool:
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=self._config.stop_timeout_seconds)
        stopped = not thread.is_alive()
        if stopped:
            self._thread = None
        logger.info("[COUNTER] Stopped. %s", self.get_stats())
        return stopped

    def _run_loop(self) -> None:
        interval = self._config.poll_ms / 1000.0
        while not self._stop_event.wait(interval):
            try:
                self.poll()
            except Exception:
                self._errors += 1
                logger.exception("[COUNTER] Poll failed")

    def get_stats(self) -> dict:
        return {
            "running": self.is_running,
            "polls": self._polls,
            "resets": self._resets,
            "errors": self._errors,
            "good_count": self.counter.good_count,
            "bad_count": self.counter.bad_count,
            "runtime_seconds": round(self.counter.runtime_seconds, 3),
        }
