"""Motor de métricas OEE.

Contiene:
- OEEEngine: loop periódico (scheduler.py)
- OEECalculator / compute_core_metrics: cálculo por tick
- ShiftTracker, plan_production, TrendingEngine: derivados
- OutputWriter: escritura con cooldown por salida
"""

from .calculator import CoreMetrics, OEECalculator, compute_core_metrics
from .configuration import ConfigurationCache, ConfigurationSnapshot
from .health import SystemStatus
from .output_writer import OutputPresenceRegistry, OutputWriter
from .planner import ProductionPlan, plan_production
from .results import CalculationResult, Metric, MetricStats, to_outputs
from .scheduler import OEEEngine
from .shift import ShiftTracker, compute_shift
from .trending import RollingHistory, TrendingEngine, classify_trend
from .value_reader import ValueReader
from .writer_config import WriterConfig

__all__ = [
    "CoreMetrics",
    "OEECalculator",
    "compute_core_metrics",
    "ConfigurationCache",
    "ConfigurationSnapshot",
    "SystemStatus",
    "OutputPresenceRegistry",
    "OutputWriter",
    "ProductionPlan",
    "plan_production",
    "CalculationResult",
    "Metric",
    "MetricStats",
    "to_outputs",
    "OEEEngine",
    "ShiftTracker",
    "compute_shift",
    "RollingHistory",
    "TrendingEngine",
    "classify_trend",
    "ValueReader",
    "WriterConfig",
]
