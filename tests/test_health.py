"""Tests de actividad, data-quality score y estado del sistema."""

import pytest

from oee_engine.engine.activity import ActivityState, RuntimeActivityTracker
from oee_engine.engine.configuration import ConfigurationCache
from oee_engine.engine.health import (
    InputHealth,
    SystemStatus,
    assess_inputs,
    classify_status,
    score_data_quality,
)
from oee_engine.engine.value_reader import ValueReader
from oee_engine.points import InMemoryPointStore
from oee_engine.points.names import Config, Inputs

from conftest import FakeClock, make_settings


# =============================================================================
# ACTIVIDAD
# =============================================================================

class TestRuntimeActivityTracker:

    def test_first_observation_is_a_change(self):
        tracker = RuntimeActivityTracker(FakeClock())
        assert tracker.observe(0.0) is True
        assert tracker.state() == ActivityState.ACTIVE

    def test_small_jitter_is_not_a_change(self):
        clock = FakeClock()
        tracker = RuntimeActivityTracker(clock)
        tracker.observe(100.0)
        clock.advance(5)
        assert tracker.observe(100.05) is False
        assert tracker.seconds_since_change() == 5.0

    @pytest.mark.parametrize("elapsed,state", [
        (30.0, ActivityState.ACTIVE),
        (30.5, ActivityState.STOPPED),
        (300.0, ActivityState.STOPPED),
        (301.0, ActivityState.IDLE),
    ])
    def test_state_windows(self, elapsed, state):
        clock = FakeClock()
        tracker = RuntimeActivityTracker(clock)
        tracker.observe(100.0)
        clock.advance(elapsed)
        tracker.observe(100.0)
        assert tracker.state() == state

    def test_movement_resets_window(self):
        clock = FakeClock()
        tracker = RuntimeActivityTracker(clock)
        tracker.observe(100.0)
        clock.advance(200)
        assert tracker.observe(101.0) is True
        assert tracker.state() == ActivityState.ACTIVE


# =============================================================================
# DATA QUALITY
# =============================================================================

class TestScore:

    def test_all_present(self):
        assert score_data_quality(InputHealth()) == 100.0

    @pytest.mark.parametrize("flag,expected", [
        ("runtime_ok", 75.0),
        ("good_count_ok", 75.0),
        ("ideal_cycle_ok", 75.0),
        ("planned_ok", 85.0),
        ("bad_count_ok", 95.0),
        ("shift_start_ok", 97.5),
        ("production_target_ok", 97.5),
    ])
    def test_single_penalty(self, flag, expected):
        health = InputHealth(**{flag: False})
        assert score_data_quality(health) == expected
        assert health.missing() == [flag[:-3]]

    def test_everything_missing_floors_at_zero(self):
        health = InputHealth(*([False] * 7))
        assert score_data_quality(health) == 0.0


class TestAssessInputs:

    def _assess(self, values):
        store = InMemoryPointStore(values)
        reader = ValueReader(store)
        return assess_inputs(reader, ConfigurationCache(reader, make_settings()))

    def test_complete_inputs(self):
        health = self._assess({
            Inputs.TOTAL_RUNTIME_SECONDS: 3600,
            Inputs.GOOD_PART_COUNT: 95,
            Inputs.BAD_PART_COUNT: 0,
            Inputs.IDEAL_CYCLE_TIME_SECONDS: 30,
            Inputs.PLANNED_PRODUCTION_TIME_HOURS: 8,
            Config.SHIFT_START_TIME: "06:00:00",
            Config.PRODUCTION_TARGET: 500,
        })
        assert health == InputHealth()

    def test_negative_and_unparseable_count_as_missing(self):
        health = self._assess({
            Inputs.TOTAL_RUNTIME_SECONDS: -1,
            Inputs.GOOD_PART_COUNT: "many",
            Inputs.IDEAL_CYCLE_TIME_SECONDS: 0,
        })
        assert set(health.missing()) == {
            "runtime", "good_count", "ideal_cycle", "planned",
            "bad_count", "shift_start", "production_target",
        }


class TestClassifyStatus:

    @pytest.mark.parametrize("score,valid,activity,expected", [
        (49.9, True, ActivityState.ACTIVE, SystemStatus.ERROR),
        (60.0, False, ActivityState.ACTIVE, SystemStatus.ERROR),
        (75.0, True, ActivityState.ACTIVE, SystemStatus.RUNNING),
        (100.0, True, ActivityState.STOPPED, SystemStatus.STOPPED),
        (100.0, True, ActivityState.IDLE, SystemStatus.IDLE),
    ])
    def test_status(self, score, valid, activity, expected):
        assert classify_status(score, valid, activity) == expected
