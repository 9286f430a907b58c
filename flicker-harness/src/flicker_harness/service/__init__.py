"""Scenario execution and result aggregation."""

from __future__ import annotations

from flicker_harness.service.aggregate import (
    FAAS_METRICS_PREFIX,
    FLICKER_ASSERTIONS_COUNT_KEY,
    AggregatedResult,
    MetricsSink,
    RunStatus,
    StabilityGroupMismatchError,
    collect_metrics,
    derive_run_status,
    key_for_result,
    process_results,
)
from flicker_harness.service.collector import (
    EXECUTION_ERROR_STATUS_CODE,
    OK_STATUS_CODE,
    STATUS_KEY,
    DataRecord,
    DuplicateTestError,
    FlickerResultsCollector,
)
from flicker_harness.service.detector import ScenarioDetector, WholeTraceScenarioDetector
from flicker_harness.service.flicker_service import FlickerService

__all__ = [
    "EXECUTION_ERROR_STATUS_CODE",
    "FAAS_METRICS_PREFIX",
    "FLICKER_ASSERTIONS_COUNT_KEY",
    "OK_STATUS_CODE",
    "STATUS_KEY",
    "AggregatedResult",
    "DataRecord",
    "DuplicateTestError",
    "FlickerResultsCollector",
    "FlickerService",
    "MetricsSink",
    "RunStatus",
    "ScenarioDetector",
    "StabilityGroupMismatchError",
    "WholeTraceScenarioDetector",
    "collect_metrics",
    "derive_run_status",
    "key_for_result",
    "process_results",
]
