"""OEE engine: periodic calculation loop.

One daemon thread per engine. Each iteration waits the update interval on
a stop Event (the only cancellation point), then runs one full tick:

    refresh config (every Nth) -> repair inputs (every Mth) -> calculate
    -> update rolling histories -> write outputs

A tick that has started always completes; stop() waits a bounded time for
the loop to observe the event.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional

from ..common.config import Settings, get_settings
from ..points.names import ALL_OUTPUTS, Outputs
from ..points.store import PointStore
from .activity import RuntimeActivityTracker
from .calculator import OEECalculator
from .configuration import ConfigurationCache
from .output_writer import OutputWriter
from .results import CalculationResult, to_outputs
from .shift import ShiftTracker
from .trending import TrendingEngine
from .validation import seed_defaults, validate_and_fix_inputs
from .value_reader import ValueReader
from .writer_config import WriterConfig

logger = logging.getLogger(__name__)


class OEEEngine:
    """Owns every piece of per-engine state; nothing is module-global."""

    def __init__(
        self,
        store: PointStore,
        settings: Optional[Settings] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._store = store
        self._settings = settings or get_settings()
        s = self._settings

        self.reader = ValueReader(store)
        self.config = ConfigurationCache(self.reader, s)
        self.activity = RuntimeActivityTracker(clock)
        self.shifts = ShiftTracker(s.shift_warning_seconds, now)
        self.calculator = OEECalculator(self.reader, self.config, self.activity, self.shifts, s, now)
        self.trending = TrendingEngine(s.history_size)
        self.writer = OutputWriter(
            store,
            ALL_OUTPUTS,
            WriterConfig.from_settings(s),
            clock,
        )

        self._refresh_every = max(1, s.config_refresh_ticks)
        self._validate_every = max(1, s.validate_ticks)

        self._tick_count = 0
        self._errors = 0
        self._repairs = 0
        self._last_result: Optional[CalculationResult] = None
        self._last_tick_duration_ms: Optional[float] = None

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def last_result(self) -> Optional[CalculationResult]:
        with self._lock:
            return self._last_result

    @property
    def interval_seconds(self) -> float:
        return self.config.snapshot.update_rate_ms / 1000.0

    def prepare(self) -> None:
        """Seed defaults (if enabled) and read configuration once."""
        if self._settings.seed_defaults:
            seed_defaults(self._store, self.reader, self.config)
        self.config.refresh()

    def start(self) -> None:
        """Start the background loop. No-op if already running."""
        if self.is_running:
            return
        self.prepare()

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, daemon=True, name="oee-engine")
        self._thread.start()
        if self.config.snapshot.logging_verbosity >= 1:
            logger.info(
                "[OEE] Engine started interval=%dms outputs=%d",
                self.config.snapshot.update_rate_ms, len(self.writer.registry),
            )

    def stop(self) -> bool:
        """Request cancellation and wait briefly. Returns True if the loop exited."""
        self._stop_event.set()
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=self._settings.stop_timeout_seconds)
        stopped = not thread.is_alive()
        if stopped:
            self._thread = None
        else:
            logger.warning(
                "[OEE] Loop still finishing a tick after %.1fs",
                self._settings.stop_timeout_seconds,
            )
        if self.config.snapshot.logging_verbosity >= 1:
            logger.info("[OEE] Engine stopped. %s", self.get_stats())
        return stopped

    def tick(self) -> CalculationResult:
        """Run one full tick synchronously."""
        started = time.perf_counter()

        if self._tick_count % self._refresh_every == 0:
            self.config.refresh()
        if self._tick_count % self._validate_every == 0:
            self._repairs += len(validate_and_fix_inputs(self._store, self.reader, self.config))

        result = self.calculator.calculate()
        result = self.trending.apply(result)
        self.writer.write_all(
            to_outputs(result, avg_cycle_as_text=self.writer.is_text(Outputs.AVG_CYCLE_TIME))
        )

        with self._lock:
            self._last_result = result
            self._tick_count += 1
            self._last_tick_duration_ms = (time.perf_counter() - started) * 1000

        if self.config.snapshot.logging_verbosity >= 2:
            logger.debug(
                "[OEE] tick=%d Q=%.2f P=%.2f A=%.2f OEE=%.2f score=%.1f status=%s",
                self._tick_count, result.quality, result.performance,
                result.availability, result.oee, result.data_quality_score,
                result.system_status.value,
            )
        return result

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.tick()
            except Exception:
                with self._lock:
                    self._errors += 1
                logger.exception("[OEE] Tick failed")

    def reset_outputs(self) -> None:
        self.writer.reset()

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "running": self.is_running,
                "ticks": self._tick_count,
                "errors": self._errors,
                "repairs": self._repairs,
                "last_tick_duration_ms": (
                    round(self._last_tick_duration_ms, 3)
                    if self._last_tick_duration_ms is not None else None
                ),
                "interval_ms": self.config.snapshot.update_rate_ms,
            }
