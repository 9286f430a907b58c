from __future__ import annotations

from typing import Sequence

import pytest
from flicker_fakes import (
    APP,
    LAUNCHER_WINDOW,
    OTHER_APP,
    app_window,
    layer,
    layers_entry,
    ts,
    wm_state,
)

from flicker_harness.subjects import GapPolicy, LayersTraceSubject, WindowManagerTraceSubject
from flicker_harness.traces import (
    IME,
    ComponentNameMatcher,
    LayersTrace,
    WindowManagerState,
    WindowManagerTrace,
)

APP_MATCHER = ComponentNameMatcher.unflatten_from_string(APP)
OTHER_MATCHER = ComponentNameMatcher.unflatten_from_string(OTHER_APP)
LAUNCHER_MATCHER = ComponentNameMatcher.unflatten_from_string(LAUNCHER_WINDOW)


def _state(t: int, top: str) -> WindowManagerState:
    names = [top] + [n for n in (APP, OTHER_APP, LAUNCHER_WINDOW) if n != top]
    return wm_state(t, [app_window(n) for n in names])


def _trace(tops: Sequence[str]) -> WindowManagerTrace:
    return WindowManagerTrace(_state((i + 1) * 10, top) for i, top in enumerate(tops))


def _moves_out_of_top(trace: WindowManagerTrace) -> WindowManagerTraceSubject:
    return (
        WindowManagerTraceSubject(trace)
        .is_app_window_on_top(APP_MATCHER)
        .then()
        .is_app_window_not_on_top(APP_MATCHER)
    )


def test_single_stage_fails_at_first_violating_entry() -> None:
    trace = _trace([APP, APP, APP, OTHER_APP, APP])
    result = WindowManagerTraceSubject(trace).is_app_window_on_top(APP_MATCHER).for_all_entries()

    assert result.failed
    assert result.failures[0].timestamp == ts(40)


def test_tautology_always_holds() -> None:
    trace = _trace([APP, OTHER_APP, LAUNCHER_WINDOW])
    result = WindowManagerTraceSubject(trace).invoke("always", lambda _s: None).for_all_entries()
    assert result.ok


def test_on_top_then_not_on_top_passes_with_one_transition() -> None:
    assert _moves_out_of_top(_trace([APP, APP, OTHER_APP, OTHER_APP])).for_all_entries().ok


def test_on_top_then_not_on_top_needs_non_empty_prefix() -> None:
    result = _moves_out_of_top(_trace([OTHER_APP, OTHER_APP])).for_all_entries()
    assert result.failed
    assert result.failures[0].timestamp == ts(10)
    assert result.failures[0].facts["Reason"] == "first stage does not hold at trace start"


def test_on_top_then_not_on_top_needs_non_empty_suffix() -> None:
    result = _moves_out_of_top(_trace([APP, APP, APP])).for_all_entries()
    assert result.failed
    assert result.failures[0].message.startswith("Trace ended before")
    assert result.failures[0].timestamp == ts(30)


def test_second_transition_is_rejected_unless_trailing_gap_allowed() -> None:
    trace = _trace([APP, OTHER_APP, APP])
    result = _moves_out_of_top(trace).for_all_entries()
    assert result.failed
    assert result.failures[0].timestamp == ts(30)
    assert result.failures[0].facts["Reason"] == "entry not matched by any stage"

    relaxed = _moves_out_of_top(trace).with_gap_policy(GapPolicy(allow_trailing_gap=True))
    assert relaxed.for_all_entries().ok


def test_leading_gap_policy() -> None:
    trace = _trace([OTHER_APP, APP, APP])
    strict = WindowManagerTraceSubject(trace).is_app_window_on_top(APP_MATCHER)
    assert strict.for_all_entries().failed
    relaxed = strict.with_gap_policy(GapPolicy(allow_leading_gap=True))
    assert relaxed.for_all_entries().ok


def test_optional_stage_may_be_skipped() -> None:
    def chain(trace: WindowManagerTrace) -> WindowManagerTraceSubject:
        return (
            WindowManagerTraceSubject(trace)
            .is_app_window_on_top(APP_MATCHER)
            .then(optional=True)
            .is_app_window_on_top(OTHER_MATCHER)
            .then()
            .is_app_window_on_top(LAUNCHER_MATCHER)
        )

    assert chain(_trace([APP, LAUNCHER_WINDOW])).for_all_entries().ok
    assert chain(_trace([APP, OTHER_APP, LAUNCHER_WINDOW])).for_all_entries().ok
    assert chain(_trace([APP, OTHER_APP])).for_all_entries().failed


def test_chain_is_stable_under_slicing_to_its_own_bounds() -> None:
    for tops in ([APP, APP, OTHER_APP], [APP, OTHER_APP, APP], [OTHER_APP]):
        trace = _trace(tops)
        subject = _moves_out_of_top(trace)
        sliced = subject.for_range(trace.first().timestamp, trace.last().timestamp)
        assert subject.for_all_entries().ok == sliced.for_all_entries().ok


def test_builder_is_immutable() -> None:
    base = WindowManagerTraceSubject(_trace([APP])).is_app_window_on_top(APP_MATCHER)
    extended = base.then().is_app_window_not_on_top(APP_MATCHER)
    assert len(base.stage_names) == 1
    assert len(extended.stage_names) == 2

    conjunction = base.is_app_window_visible(APP_MATCHER)
    assert conjunction.stage_names == [
        f"isAppWindowOnTop({APP_MATCHER}) && isAppWindowVisible({APP_MATCHER})"
    ]


def test_then_requires_a_preceding_assertion() -> None:
    with pytest.raises(ValueError):
        WindowManagerTraceSubject(_trace([APP])).then()


def test_empty_chain_fails() -> None:
    assert (
        WindowManagerTraceSubject(_trace([APP])).for_all_entries().failures[0].message
        == "No assertions to evaluate"
    )


def test_single_stage_on_empty_trace_holds_vacuously() -> None:
    empty = WindowManagerTraceSubject(WindowManagerTrace())
    assert empty.invoke("always", lambda _s: None).for_all_entries().ok
    assert empty.is_app_window_on_top(APP_MATCHER).for_all_entries().ok


def test_transition_on_empty_trace_fails() -> None:
    result = (
        WindowManagerTraceSubject(WindowManagerTrace())
        .is_app_window_on_top(APP_MATCHER)
        .then()
        .is_app_window_not_on_top(APP_MATCHER)
        .for_all_entries()
    )
    assert result.failures[0].message == "Trace is empty"


def test_first_and_last_entry_subjects() -> None:
    subject = WindowManagerTraceSubject(_trace([APP, OTHER_APP]))
    assert subject.first().is_app_window_on_top(APP_MATCHER).ok
    assert subject.last().is_app_window_on_top(OTHER_MATCHER).ok
    assert subject.entry(ts(20)).is_app_window_on_top(OTHER_MATCHER).ok


def test_layers_chain_becomes_visible() -> None:
    trace = LayersTrace(
        [
            layers_entry(10, [layer("InputMethod#3", 3, None)]),
            layers_entry(20, [layer("InputMethod#3", 3)]),
            layers_entry(30, [layer("InputMethod#3", 3)]),
        ]
    )
    subject = LayersTraceSubject(trace).is_invisible(IME).then().is_visible(IME)
    assert subject.for_all_entries().ok

    reversed_subject = LayersTraceSubject(trace).is_visible(IME).then().is_invisible(IME)
    assert reversed_subject.for_all_entries().failed
