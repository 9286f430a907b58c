"""Host-facing collector.

The collector runs the flicker pipeline over one recording at a time, writes
metrics to the host's data record, and remembers per-test results for later
inspection. Unexpected errors never escape `collect`: they are logged and kept
in `execution_errors`, and `report_status` turns them into `FAAS_STATUS=1`.
Configuration problems are re-raised.
"""

from __future__ import annotations

import logging
from typing import Dict, Hashable, List, Optional, Tuple

from flicker_harness.assertors.config import ScenarioConfigError
from flicker_harness.assertors.results import AssertionResult
from flicker_harness.assertors.scenario import ScenarioType
from flicker_harness.config import FlickerConfig
from flicker_harness.service.aggregate import (
    FAAS_METRICS_PREFIX,
    FLICKER_ASSERTIONS_COUNT_KEY,
    WINSCOPE_FILE_PATH_KEY,
    MetricsSink,
    RunStatus,
    StabilityGroupMismatchError,
    collect_metrics,
    derive_run_status,
    process_results,
)
from flicker_harness.service.flicker_service import FlickerService
from flicker_harness.traces.reader import Reader

logger = logging.getLogger(__name__)

OK_STATUS_CODE = 0
EXECUTION_ERROR_STATUS_CODE = 1
STATUS_KEY = f"{FAAS_METRICS_PREFIX}_STATUS"


class DuplicateTestError(ValueError):
    pass


_CONFIGURATION_ERRORS: Tuple[type, ...] = (
    StabilityGroupMismatchError,
    ScenarioConfigError,
    DuplicateTestError,
)


class DataRecord:
    """In-memory metrics sink."""

    def __init__(self) -> None:
        self._metrics: Dict[str, str] = {}

    def add_string_metric(self, key: str, value: str) -> None:
        self._metrics[key] = value

    def has_metrics(self) -> bool:
        return bool(self._metrics)

    @property
    def metrics(self) -> Dict[str, str]:
        return dict(self._metrics)


class FlickerResultsCollector:
    def __init__(
        self,
        service: FlickerService,
        *,
        config: Optional[FlickerConfig] = None,
    ) -> None:
        self.service = service
        self.config = config if config is not None else FlickerConfig.from_env()
        self.execution_errors: List[Exception] = []
        self.assertion_results: List[AssertionResult] = []
        self.run_status: Optional[RunStatus] = None
        self._results_by_test: Dict[Hashable, List[AssertionResult]] = {}
        self._scenarios_by_test: Dict[Hashable, List[ScenarioType]] = {}

    def collect(
        self,
        reader: Reader,
        record: MetricsSink,
        *,
        test_id: Optional[Hashable] = None,
        test_failed: bool = False,
    ) -> List[AssertionResult]:
        """Process one recording; returns its results ([] when skipped or on error)."""

        try:
            return self._collect(reader, record, test_id=test_id, test_failed=test_failed)
        except _CONFIGURATION_ERRORS:
            raise
        except Exception as e:
            logger.exception("error executing flicker results collector")
            self.execution_errors.append(e)
            return []

    def _collect(
        self,
        reader: Reader,
        record: MetricsSink,
        *,
        test_id: Optional[Hashable],
        test_failed: bool,
    ) -> List[AssertionResult]:
        if self.config.report_only_for_passing_tests and test_failed:
            logger.info("skipping flicker metrics for failed test %s", test_id)
            return []

        if test_id is not None and self.config.collect_metrics_per_test:
            if test_id in self._results_by_test:
                raise DuplicateTestError(
                    f"Test {test_id!r} already contains flicker assertion results."
                )
            if test_id in self._scenarios_by_test:
                raise DuplicateTestError(
                    f"Test {test_id!r} already contains detected scenarios."
                )

        try:
            logger.info("processing traces from %s", reader.artifact_path or "<memory>")
            scenarios = self.service.detect_scenarios(reader)
            results = self.service.execute(self.service.generate_assertions(scenarios))
            logger.info("got %d results", len(results))
            self.assertion_results.extend(results)

            if test_id is not None and self.config.collect_metrics_per_test:
                self._results_by_test[test_id] = results
                seen: List[ScenarioType] = []
                for s in scenarios:
                    if s.type not in seen:
                        seen.append(s.type)
                self._scenarios_by_test[test_id] = seen

            self.run_status = derive_run_status(results)
            record.add_string_metric(FLICKER_ASSERTIONS_COUNT_KEY, str(len(results)))
            collect_metrics(record, process_results(results))
            return results
        finally:
            record.add_string_metric(WINSCOPE_FILE_PATH_KEY, reader.artifact_path)

    def report_status(self, record: MetricsSink) -> int:
        status = OK_STATUS_CODE if not self.execution_errors else EXECUTION_ERROR_STATUS_CODE
        record.add_string_metric(STATUS_KEY, str(status))
        return status

    def results_for_test(self, test_id: Hashable) -> List[AssertionResult]:
        try:
            return list(self._results_by_test[test_id])
        except KeyError:
            raise KeyError(f"No results set for test {test_id!r}") from None

    def detected_scenarios_for_test(self, test_id: Hashable) -> List[ScenarioType]:
        try:
            return list(self._scenarios_by_test[test_id])
        except KeyError:
            raise KeyError(f"No detected scenarios set for test {test_id!r}") from None
