"""Aggregation of assertion results into per-assertion metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from flicker_harness.assertors.results import AssertionResult
from flicker_harness.assertors.stability import AssertionInvocationGroup

logger = logging.getLogger(__name__)

FAAS_METRICS_PREFIX = "FAAS"
FLICKER_ASSERTIONS_COUNT_KEY = "flicker_assertions_count"
WINSCOPE_FILE_PATH_KEY = "winscope_file_path"
MISSING_ERROR_MESSAGE = "FAILURE WITHOUT ERROR MESSAGE..."


class MetricsSink(Protocol):
    def add_string_metric(self, key: str, value: str) -> None: ...


class StabilityGroupMismatchError(RuntimeError):
    """Results sharing one aggregation key disagree on their stability group."""


class RunStatus(str, Enum):
    RUN_EXECUTED = "RUN_EXECUTED"
    ASSERTION_SUCCESS = "ASSERTION_SUCCESS"
    ASSERTION_FAILED = "ASSERTION_FAILED"


def key_for_result(result: AssertionResult) -> str:
    return f"{FAAS_METRICS_PREFIX}::{result.name}"


@dataclass
class AggregatedResult:
    results: List[AssertionResult] = field(default_factory=list)
    passes: int = 0
    failures: int = 0
    errors: List[str] = field(default_factory=list)
    invocation_group: Optional[AssertionInvocationGroup] = None

    def add_result(self, result: AssertionResult) -> None:
        if self.invocation_group is None:
            self.invocation_group = result.stability_group
        elif self.invocation_group != result.stability_group:
            raise StabilityGroupMismatchError(
                f"Unexpected assertion group mismatch for {result.name}: "
                f"{self.invocation_group.value} != {result.stability_group.value}"
            )

        self.results.append(result)
        if result.failed:
            self.failures += 1
            self.errors.extend(e.message or MISSING_ERROR_MESSAGE for e in result.errors)
        else:
            self.passes += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passes": self.passes,
            "failures": self.failures,
            "errors": list(self.errors),
            "invocation_group": self.invocation_group.value if self.invocation_group else None,
        }


def process_results(results: Iterable[AssertionResult]) -> Dict[str, AggregatedResult]:
    """Group results by aggregation key, preserving first-seen key order."""

    aggregated: Dict[str, AggregatedResult] = {}
    for result in results:
        aggregated.setdefault(key_for_result(result), AggregatedResult()).add_result(result)
    return aggregated


def collect_metrics(sink: MetricsSink, aggregated: Mapping[str, AggregatedResult]) -> None:
    for key, agg in aggregated.items():
        for index, result in enumerate(agg.results):
            status = "0" if result.passed else "1"
            logger.debug("adding metric %s_%d = %s", key, index, status)
            sink.add_string_metric(f"{key}_{index}", status)


def derive_run_status(results: Iterable[AssertionResult]) -> RunStatus:
    results = list(results)
    if not results:
        return RunStatus.RUN_EXECUTED
    if any(r.failed for r in results):
        return RunStatus.ASSERTION_FAILED
    return RunStatus.ASSERTION_SUCCESS
