"""Tests del cálculo OEE.

Tests obligatorios:
1. Propiedades de Quality / Performance / Availability / OEE
2. Escenario nominal (95/5, 1h runtime, 30s ciclo ideal, 1h planificada)
3. Escenario sin configuración (store vacío)

Ejecutar:
    pytest tests/test_calculator.py -v
"""

import pytest

from oee_engine.engine.calculator import PERFORMANCE_CAP, compute_core_metrics
from oee_engine.engine.health import SystemStatus

from conftest import make_store


# =============================================================================
# TEST 1: PROPIEDADES DEL CÁLCULO
# =============================================================================

class TestCoreMetrics:

    @pytest.mark.parametrize("runtime,ideal,planned", [
        (0.0, 30.0, 3600.0),
        (3600.0, 0.0, None),
        (-5.0, 1.0, 28800.0),
    ])
    def test_zero_total_gives_zero_quality_and_performance(self, runtime, ideal, planned):
        m = compute_core_metrics(0, 0, runtime, ideal, planned)
        assert m.quality == 0.0
        assert m.performance == 0.0
        assert m.oee == 0.0
        assert m.avg_cycle_time_seconds == 0.0

    @pytest.mark.parametrize("runtime", [0.0, -10.0])
    def test_no_runtime_with_parts_is_full_performance(self, runtime):
        m = compute_core_metrics(10, 2, runtime, 30.0, 3600.0)
        assert m.performance == 100.0
        assert m.parts_per_hour == 0.0

    def test_non_positive_ideal_cycle_gives_zero_performance(self):
        m = compute_core_metrics(10, 0, 600.0, 0.0, 3600.0)
        assert m.performance == 0.0

    def test_performance_is_capped(self):
        m = compute_core_metrics(100000, 0, 1.0, 60.0, 3600.0)
        assert m.performance == PERFORMANCE_CAP
        assert m.uncapped_performance > PERFORMANCE_CAP

    def test_performance_below_cap_is_not_flagged(self):
        m = compute_core_metrics(10, 0, 600.0, 30.0, 3600.0)
        assert m.performance == pytest.approx(50.0)
        assert m.uncapped_performance is None

    @pytest.mark.parametrize("runtime,expected", [
        (7200.0, 100.0),
        (1800.0, 50.0),
        (-100.0, 0.0),
    ])
    def test_availability_clamped_when_planned_known(self, runtime, expected):
        m = compute_core_metrics(10, 0, runtime, 30.0, 3600.0)
        assert m.availability == pytest.approx(expected)
        assert 0.0 <= m.availability <= 100.0

    def test_unknown_planned_uses_fallback(self):
        m = compute_core_metrics(10, 0, 600.0, 30.0, None, availability_fallback=100.0)
        assert m.availability == 100.0
        assert m.planned_seconds is None
        assert m.downtime_seconds == 0.0

    def test_downtime_is_planned_minus_runtime(self):
        m = compute_core_metrics(10, 0, 2700.0, 30.0, 3600.0)
        assert m.downtime_seconds == pytest.approx(900.0)

    @pytest.mark.parametrize("good,bad,runtime,ideal,planned", [
        (95, 5, 3600.0, 30.0, 3600.0),
        (7, 3, 100.0, 2.5, 50.0),
        (1, 0, 0.0, 30.0, None),
        (500, 20, 1.0, 120.0, 28800.0),
    ])
    def test_oee_is_product_of_components(self, good, bad, runtime, ideal, planned):
        m = compute_core_metrics(good, bad, runtime, ideal, planned)
        assert m.oee == m.quality * m.performance * m.availability / 10000.0

    def test_expected_part_count(self):
        assert compute_core_metrics(0, 0, 0.0, 30.0, 3600.0).expected_part_count == 120.0
        fallback = compute_core_metrics(0, 0, 0.0, 30.0, None, expected_part_fallback=480.0)
        assert fallback.expected_part_count == 480.0

    def test_parts_per_hour(self):
        m = compute_core_metrics(50, 10, 1800.0, 30.0, 3600.0)
        assert m.parts_per_hour == pytest.approx(120.0)
        assert m.avg_cycle_time_seconds == pytest.approx(30.0)


# =============================================================================
# TEST 2: ESCENARIO NOMINAL
# =============================================================================

class TestNominalScenario:

    def test_metrics(self, engine_factory, scenario_store):
        result = engine_factory(scenario_store).tick()

        assert result.total_count == 100
        assert result.quality == pytest.approx(95.0)
        assert result.performance == pytest.approx(83.333, abs=1e-3)
        assert result.availability == pytest.approx(100.0)
        assert result.oee == pytest.approx(79.1667, abs=1e-3)

    def test_health(self, engine_factory, scenario_store):
        result = engine_factory(scenario_store).tick()

        # Only shift start and production target are missing.
        assert result.data_quality_score == 95.0
        assert result.calculation_valid is True
        assert result.system_status == SystemStatus.RUNNING

    def test_target_variances_use_default_targets(self, engine_factory, scenario_store):
        result = engine_factory(scenario_store).tick()

        assert result.quality_vs_target == pytest.approx(0.0)
        assert result.performance_vs_target == pytest.approx(83.333 - 85.0, abs=1e-3)
        assert result.availability_vs_target == pytest.approx(10.0)
        assert result.oee_vs_target == pytest.approx(79.1667 - 72.7, abs=1e-3)

    def test_last_update_uses_wall_clock(self, engine_factory, scenario_store):
        result = engine_factory(scenario_store).tick()
        assert result.last_update_time == "2026-03-02 10:30:00"


# =============================================================================
# TEST 3: SIN CONFIGURACIÓN
# =============================================================================

class TestEmptyStoreScenario:

    def test_degrades_without_raising(self, engine_factory):
        result = engine_factory(make_store()).tick()

        assert result.total_count == 0
        assert result.runtime_seconds == 0.0
        assert result.quality == 0.0
        assert result.performance == 0.0
        assert result.availability == 100.0
        assert result.oee == 0.0

    def test_health_reports_error(self, engine_factory):
        result = engine_factory(make_store()).tick()

        assert result.data_quality_score <= 25.0
        assert result.calculation_valid is False
        assert result.system_status == SystemStatus.ERROR

    def test_fallback_shift_and_inert_plan(self, engine_factory):
        result = engine_factory(make_store()).tick()

        assert result.shift_number == 1
        assert result.shift_start == "06:00:00"
        assert result.shift_end == "14:00:00"
        assert result.time_into_shift == "00:00:00"
        assert result.time_remaining_in_shift == "08:00:00"
        assert result.production_target == 0
        assert result.remaining_time_at_current_rate == "N/A"
        assert result.expected_part_count == 480.0
