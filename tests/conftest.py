"""Shared fixtures: deterministic clocks, settings and point stores."""

from datetime import datetime
from typing import Any, Dict, Optional

import pytest

from oee_engine.common.config import Settings
from oee_engine.engine import OEEEngine
from oee_engine.points import InMemoryPointStore
from oee_engine.points.names import ALL_OUTPUTS, TEXT_OUTPUTS, Inputs


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWallClock:
    """Wall clock (``datetime.now`` replacement) under test control."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_settings(**overrides) -> Settings:
    base = dict(
        update_rate_ms=1000,
        config_refresh_ticks=30,
        validate_ticks=10,
        history_size=60,
        write_retry_cooldown_seconds=30.0,
        shift_warning_seconds=300.0,
        expected_part_fallback=480.0,
        availability_fallback=100.0,
        ideal_cycle_fallback_seconds=1.0,
        stop_timeout_seconds=0.5,
        seed_defaults=False,
        counter_poll_ms=50,
        log_level="INFO",
    )
    base.update(overrides)
    return Settings(**base)


def make_store(values: Optional[Dict[str, Any]] = None) -> InMemoryPointStore:
    """Store declaring every engine output plus the given inputs."""
    return InMemoryPointStore(values or {}, declared=ALL_OUTPUTS, text_points=TEXT_OUTPUTS)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def wall_clock() -> FakeWallClock:
    return FakeWallClock(datetime(2026, 3, 2, 10, 30, 0))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def scenario_store() -> InMemoryPointStore:
    """good=95, bad=5, runtime=1h, ideal=30s, planned=1h."""
    return make_store({
        Inputs.GOOD_PART_COUNT: 95,
        Inputs.BAD_PART_COUNT: 5,
        Inputs.TOTAL_RUNTIME_SECONDS: 3600.0,
        Inputs.IDEAL_CYCLE_TIME_SECONDS: 30.0,
        Inputs.PLANNED_PRODUCTION_TIME_HOURS: 1.0,
    })


@pytest.fixture
def engine_factory(clock, wall_clock, settings):
    def factory(store, **setting_overrides) -> OEEEngine:
        s = make_settings(**setting_overrides) if setting_overrides else settings
        return OEEEngine(store, s, clock=clock, now=wall_clock)
    return factory
