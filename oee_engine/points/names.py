"""Nombres de puntos del host (entradas, configuración, salidas)."""

from __future__ import annotations

INPUTS = "Inputs"
CONFIGURATION = "Configuration"
OUTPUTS = "Outputs"


def _path(folder: str, name: str) -> str:
    return f"{folder}/{name}"


class Inputs:
    TOTAL_RUNTIME_SECONDS = _path(INPUTS, "TotalRuntimeSeconds")
    PLANNED_PRODUCTION_TIME_HOURS = _path(INPUTS, "PlannedProductionTimeHours")
    GOOD_PART_COUNT = _path(INPUTS, "GoodPartCount")
    BAD_PART_COUNT = _path(INPUTS, "BadPartCount")
    IDEAL_CYCLE_TIME_SECONDS = _path(INPUTS, "IdealCycleTimeSeconds")


class Config:
    HOURS_PER_SHIFT = _path(CONFIGURATION, "HoursPerShift")
    NUMBER_OF_SHIFTS = _path(CONFIGURATION, "NumberOfShifts")
    SHIFT_START_TIME = _path(CONFIGURATION, "ShiftStartTime")
    QUALITY_TARGET = _path(CONFIGURATION, "QualityTarget")
    PERFORMANCE_TARGET = _path(CONFIGURATION, "PerformanceTarget")
    AVAILABILITY_TARGET = _path(CONFIGURATION, "AvailabilityTarget")
    OEE_TARGET = _path(CONFIGURATION, "OEETarget")
    PRODUCTION_TARGET = _path(CONFIGURATION, "ProductionTarget")
    UPDATE_RATE_MS = _path(CONFIGURATION, "UpdateRateMs")
    LOGGING_VERBOSITY = _path(CONFIGURATION, "LoggingVerbosity")


class Outputs:
    TOTAL_COUNT = _path(OUTPUTS, "TotalCount")
    QUALITY = _path(OUTPUTS, "Quality")
    PERFORMANCE = _path(OUTPUTS, "Performance")
    AVAILABILITY = _path(OUTPUTS, "Availability")
    OEE = _path(OUTPUTS, "OEE")
    AVG_CYCLE_TIME = _path(OUTPUTS, "AvgCycleTime")
    PARTS_PER_HOUR = _path(OUTPUTS, "PartsPerHour")
    EXPECTED_PART_COUNT = _path(OUTPUTS, "ExpectedPartCount")
    DOWNTIME_FORMATTED = _path(OUTPUTS, "DowntimeFormatted")
    TOTAL_RUNTIME_FORMATTED = _path(OUTPUTS, "TotalRuntimeFormatted")

    CURRENT_SHIFT_NUMBER = _path(OUTPUTS, "CurrentShiftNumber")
    SHIFT_START_TIME = _path(OUTPUTS, "ShiftStartTimeOutput")
    SHIFT_END_TIME = _path(OUTPUTS, "ShiftEndTime")
    TIME_INTO_SHIFT = _path(OUTPUTS, "TimeIntoShift")
    TIME_REMAINING_IN_SHIFT = _path(OUTPUTS, "TimeRemainingInShift")
    SHIFT_CHANGE_OCCURRED = _path(OUTPUTS, "ShiftChangeOccurred")
    SHIFT_CHANGE_IMMINENT = _path(OUTPUTS, "ShiftChangeImminent")
    SHIFT_PROGRESS = _path(OUTPUTS, "ShiftProgress")
    HOURS_PER_SHIFT = _path(OUTPUTS, "HoursPerShift")

    PROJECTED_TOTAL_COUNT = _path(OUTPUTS, "ProjectedTotalCount")
    REMAINING_TIME_AT_CURRENT_RATE = _path(OUTPUTS, "RemainingTimeAtCurrentRate")
    PRODUCTION_BEHIND_SCHEDULE = _path(OUTPUTS, "ProductionBehindSchedule")
    REQUIRED_RATE_TO_TARGET = _path(OUTPUTS, "RequiredRateToTarget")
    TARGET_VS_ACTUAL_PARTS = _path(OUTPUTS, "TargetVsActualParts")
    PRODUCTION_PROGRESS = _path(OUTPUTS, "ProductionProgress")

    LAST_UPDATE_TIME = _path(OUTPUTS, "LastUpdateTime")
    SYSTEM_STATUS = _path(OUTPUTS, "SystemStatus")
    CALCULATION_VALID = _path(OUTPUTS, "CalculationValid")
    DATA_QUALITY_SCORE = _path(OUTPUTS, "DataQualityScore")

    QUALITY_TREND = _path(OUTPUTS, "QualityTrend")
    PERFORMANCE_TREND = _path(OUTPUTS, "PerformanceTrend")
    AVAILABILITY_TREND = _path(OUTPUTS, "AvailabilityTrend")
    OEE_TREND = _path(OUTPUTS, "OEETrend")

    MIN_QUALITY = _path(OUTPUTS, "MinQuality")
    MAX_QUALITY = _path(OUTPUTS, "MaxQuality")
    AVG_QUALITY = _path(OUTPUTS, "AvgQuality")
    MIN_PERFORMANCE = _path(OUTPUTS, "MinPerformance")
    MAX_PERFORMANCE = _path(OUTPUTS, "MaxPerformance")
    AVG_PERFORMANCE = _path(OUTPUTS, "AvgPerformance")
    MIN_AVAILABILITY = _path(OUTPUTS, "MinAvailability")
    MAX_AVAILABILITY = _path(OUTPUTS, "MaxAvailability")
    AVG_AVAILABILITY = _path(OUTPUTS, "AvgAvailability")
    MIN_OEE = _path(OUTPUTS, "MinOEE")
    MAX_OEE = _path(OUTPUTS, "MaxOEE")
    AVG_OEE = _path(OUTPUTS, "AvgOEE")

    QUALITY_VS_TARGET = _path(OUTPUTS, "QualityVsTarget")
    PERFORMANCE_VS_TARGET = _path(OUTPUTS, "PerformanceVsTarget")
    AVAILABILITY_VS_TARGET = _path(OUTPUTS, "AvailabilityVsTarget")
    OEE_VS_TARGET = _path(OUTPUTS, "OEEVsTarget")


class Counter:
    MACHINE_RUNNING_BIT = _path(INPUTS, "MachineRunningBit")
    GOOD_PART_PULSE = _path(INPUTS, "GoodPartPulse")
    BAD_PART_PULSE = _path(INPUTS, "BadPartPulse")
    RESET_COMMAND = _path(INPUTS, "ResetCommand")

    # Written by the counter, read by the engine.
    GOOD_PART_COUNT = Inputs.GOOD_PART_COUNT
    BAD_PART_COUNT = Inputs.BAD_PART_COUNT
    TOTAL_RUNTIME_SECONDS = Inputs.TOTAL_RUNTIME_SECONDS
    TOTAL_RUNTIME_FORMATTED = _path(OUTPUTS, "CounterRuntimeFormatted")


def _public_values(cls) -> tuple[str, ...]:
    return tuple(v for k, v in vars(cls).items() if k.isupper())


ALL_INPUTS = _public_values(Inputs)
ALL_CONFIG = _public_values(Config)
ALL_OUTPUTS = _public_values(Outputs)

# Outputs that hosts normally declare as text.
TEXT_OUTPUTS = frozenset({
    Outputs.DOWNTIME_FORMATTED,
    Outputs.TOTAL_RUNTIME_FORMATTED,
    Outputs.SHIFT_START_TIME,
    Outputs.SHIFT_END_TIME,
    Outputs.TIME_INTO_SHIFT,
    Outputs.TIME_REMAINING_IN_SHIFT,
    Outputs.REMAINING_TIME_AT_CURRENT_RATE,
    Outputs.LAST_UPDATE_TIME,
    Outputs.SYSTEM_STATUS,
    Outputs.QUALITY_TREND,
    Outputs.PERFORMANCE_TREND,
    Outputs.AVAILABILITY_TREND,
    Outputs.OEE_TREND,
    Counter.TOTAL_RUNTIME_FORMATTED,
})
