from __future__ import annotations

import pytest

from flicker_harness.assertors import AssertionErrorInfo, AssertionInvocationGroup, AssertionResult
from flicker_harness.service import (
    DataRecord,
    RunStatus,
    StabilityGroupMismatchError,
    collect_metrics,
    derive_run_status,
    key_for_result,
    process_results,
)

BLOCKING = AssertionInvocationGroup.BLOCKING
NON_BLOCKING = AssertionInvocationGroup.NON_BLOCKING


def _result(
    name: str,
    *,
    failed: bool = False,
    group: AssertionInvocationGroup = BLOCKING,
    message: str = "broken",
) -> AssertionResult:
    errors = (AssertionErrorInfo(message=message),) if failed else ()
    return AssertionResult(
        name=name, scenario_type="APP_LAUNCH", stability_group=group, errors=errors
    )


def test_results_group_by_key() -> None:
    results = [
        _result("APP_LAUNCH::A"),
        _result("APP_LAUNCH::B", failed=True, message="b failed"),
        _result("APP_LAUNCH::A", failed=True, message="a failed"),
    ]
    aggregated = process_results(results)

    assert list(aggregated) == ["FAAS::APP_LAUNCH::A", "FAAS::APP_LAUNCH::B"]
    a = aggregated["FAAS::APP_LAUNCH::A"]
    assert (a.passes, a.failures, a.errors) == (1, 1, ["a failed"])
    assert a.invocation_group == BLOCKING
    assert key_for_result(results[1]) == "FAAS::APP_LAUNCH::B"


def test_stability_group_mismatch_raises() -> None:
    with pytest.raises(StabilityGroupMismatchError):
        process_results(
            [_result("APP_LAUNCH::A"), _result("APP_LAUNCH::A", group=NON_BLOCKING)]
        )


def test_missing_error_message_gets_placeholder() -> None:
    aggregated = process_results([_result("X", failed=True, message="")])
    assert aggregated["FAAS::X"].errors == ["FAILURE WITHOUT ERROR MESSAGE..."]


def test_collect_metrics_writes_one_metric_per_result() -> None:
    record = DataRecord()
    collect_metrics(
        record,
        process_results(
            [_result("S::A"), _result("S::A", failed=True), _result("S::B", failed=True)]
        ),
    )
    assert record.metrics == {
        "FAAS::S::A_0": "0",
        "FAAS::S::A_1": "1",
        "FAAS::S::B_0": "1",
    }


def test_run_status() -> None:
    assert derive_run_status([]) == RunStatus.RUN_EXECUTED
    assert derive_run_status([_result("A")]) == RunStatus.ASSERTION_SUCCESS
    mixed = [_result("A"), _result("B", failed=True)]
    assert derive_run_status(mixed) == RunStatus.ASSERTION_FAILED
