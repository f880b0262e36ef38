from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class MetricStatsOut(BaseModel):
    minimum: float
    maximum: float
    average: float


class OEEStatusOut(BaseModel):
    good_count: int
    bad_count: int
    total_count: int
    runtime_seconds: float

    quality: float
    performance: float
    availability: float
    oee: float
    avg_cycle_time_seconds: float
    parts_per_hour: float
    expected_part_count: float
    planned_seconds: Optional[float] = None
    downtime_seconds: float

    shift_number: int
    shift_start: str
    shift_end: str
    time_into_shift: str
    time_remaining_in_shift: str
    shift_change_occurred: bool
    shift_change_imminent: bool
    shift_progress: float = Field(0.0, ge=0, le=100)
    hours_per_shift: float

    production_target: int
    behind_schedule: bool
    projected_total_count: float
    remaining_time_at_current_rate: str
    required_rate_to_target: float
    target_variance_parts: int
    production_progress: float = Field(0.0, ge=0, le=100)

    data_quality_score: float = Field(..., ge=0, le=100)
    calculation_valid: bool
    system_status: str
    last_update_time: str

    quality_vs_target: float
    performance_vs_target: float
    availability_vs_target: float
    oee_vs_target: float

    trends: Dict[str, str] = Field(default_factory=dict)
    statistics: Dict[str, MetricStatsOut] = Field(default_factory=dict)


class WriterStatsOut(BaseModel):
    outputs: int
    writable: int
    failed: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    writes: int
    write_failures: int
    skipped_cooldown: int
    skipped_blank: int


class DiagnosticsOut(BaseModel):
    engine: dict
    writer: WriterStatsOut
    configuration: dict
    activity: dict
    trending: dict
    counter: Optional[dict] = None
