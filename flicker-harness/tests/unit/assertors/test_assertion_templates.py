from __future__ import annotations

import pytest
from flicker_fakes import (
    APP,
    DISPLAY,
    OTHER_APP,
    app_window,
    layer,
    layers_entry,
    reader,
    system_window,
    wm_state,
)

from flicker_harness.assertors import (
    AssertionInvocationGroup,
    AssertionTemplate,
    AssertionTemplateWithComponent,
    ScenarioInstance,
    ScenarioType,
)
from flicker_harness.assertors import assertions as a
from flicker_harness.assertors import components as c
from flicker_harness.geometry import Rect
from flicker_harness.traces import ParsedTracesReader, Rotation


def _instance(
    r: ParsedTracesReader,
    scenario_type: ScenarioType = ScenarioType.APP_LAUNCH,
    **kw: object,
) -> ScenarioInstance:
    return ScenarioInstance(type=scenario_type, reader=r, **kw)  # type: ignore[arg-type]


def _launch_reader(*, app_bounds: Rect = DISPLAY, covered: bool = True) -> ParsedTracesReader:
    wallpaper = layer("Wallpaper", 1, DISPLAY if covered else Rect(0, 0, 1080, 1000))
    return reader(
        wm_states=[
            wm_state(10, [app_window(OTHER_APP), app_window(APP, visible=False)]),
            wm_state(20, [app_window(OTHER_APP), app_window(APP, visible=False)]),
            wm_state(30, [app_window(APP, bounds=app_bounds), app_window(OTHER_APP)]),
        ],
        layer_entries=[layers_entry(t, [wallpaper]) for t in (10, 20, 30)],
    )


def test_assertion_name_includes_scenario_and_component() -> None:
    template = a.AppWindowBecomesVisible(c.OPENING_APP)
    assertion = template.create_assertion(_instance(_launch_reader()))
    assert template.assertion_name == "AppWindowBecomesVisible(OPENING_APP)"
    assert assertion.name == "APP_LAUNCH::AppWindowBecomesVisible(OPENING_APP)"
    assert assertion.stability_group == AssertionInvocationGroup.BLOCKING
    assert a.EntireScreenCoveredAlways().assertion_name == "EntireScreenCoveredAlways"


def test_app_launch_assertions_pass_on_clean_launch() -> None:
    instance = _instance(_launch_reader())
    for template in [
        a.AppWindowBecomesVisible(c.OPENING_APP),
        a.AppWindowOnTopAtEnd(c.OPENING_APP),
        a.WindowMovesToTop(c.OPENING_APP),
        a.WindowMovesOutOfTop(c.CLOSING_APP),
        a.AppWindowOnTopAtStart(c.CLOSING_APP),
        a.AppWindowCoversFullScreenAtEnd(c.OPENING_APP),
        a.EntireScreenCoveredAlways(),
        a.EntireScreenCoveredAtStartAndEnd(),
    ]:
        result = template.create_assertion(instance).execute()
        assert result.passed, (template, result.errors)


def test_partial_app_window_fails_full_screen_check() -> None:
    instance = _instance(_launch_reader(app_bounds=Rect(0, 0, 1080, 2000)))
    result = a.AppWindowCoversFullScreenAtEnd(c.OPENING_APP).create_assertion(instance).execute()
    assert result.failed
    assert "Difference: Region((0,2000,1080,2340))" in result.errors[0].message
    assert result.errors[0].facts["Scenario"] == "APP_LAUNCH"


def test_uncovered_screen_reports_timestamp() -> None:
    instance = _instance(_launch_reader(covered=False))
    result = a.EntireScreenCoveredAlways().create_assertion(instance).execute()
    assert result.failed
    assert result.errors[0].timestamp == instance.reader.read_layers_trace().first().timestamp


def test_missing_trace_becomes_failed_result() -> None:
    r = reader(wm_states=[wm_state(10, [app_window(APP)])])
    result = a.EntireScreenCoveredAlways().create_assertion(_instance(r)).execute()
    assert result.failed
    assert result.errors[0].message.startswith("TraceNotFoundError")
    assert result.errors[0].facts["Error"] == "TraceNotFoundError"


def test_unresolvable_component_becomes_failed_result() -> None:
    r = reader(wm_states=[wm_state(10, [app_window(APP, visible=False)])])
    result = a.AppWindowOnTopAtEnd(c.OPENING_APP).create_assertion(_instance(r)).execute()
    assert result.failed
    assert "ComponentResolutionError" in result.errors[0].message


def test_rotation_matches_scenario_bounds() -> None:
    r = reader(
        wm_states=[
            wm_state(10, [app_window(APP)], rotation=Rotation.ROTATION_0),
            wm_state(20, [app_window(APP)], rotation=Rotation.ROTATION_90),
        ]
    )
    ok = _instance(
        r,
        ScenarioType.ROTATION,
        start_rotation=Rotation.ROTATION_0,
        end_rotation=Rotation.ROTATION_90,
    )
    assert a.RotationMatchesScenario().create_assertion(ok).execute().passed

    wrong = _instance(r, ScenarioType.ROTATION, end_rotation=Rotation.ROTATION_270)
    assert a.RotationMatchesScenario().create_assertion(wrong).execute().failed


def test_layer_visibility_templates() -> None:
    r = reader(
        layer_entries=[
            layers_entry(10, [layer("StatusBar#1", 1, Rect(0, 0, 1080, 100))]),
            layers_entry(20, [layer("StatusBar#1", 1, None), layer("InputMethod#2", 2)]),
            layers_entry(
                30,
                [layer("StatusBar#1", 1, Rect(0, 0, 1080, 100)), layer("InputMethod#2", 2)],
            ),
        ]
    )
    instance = _instance(r, ScenarioType.IME_APPEAR)
    assert a.LayerBecomesVisible(c.IME).create_assertion(instance).execute().passed
    assert a.LayerBecomesInvisible(c.IME).create_assertion(instance).execute().failed
    assert a.LayerIsVisibleAtStartAndEnd(c.STATUS_BAR).create_assertion(instance).execute().passed


def test_non_app_window_always_visible() -> None:
    r = reader(
        wm_states=[
            wm_state(10, [system_window("StatusBar"), app_window(APP)]),
            wm_state(20, [system_window("StatusBar", visible=False), app_window(APP)]),
        ]
    )
    result = a.NonAppWindowIsVisibleAlways(c.STATUS_BAR).create_assertion(_instance(r)).execute()
    assert result.failed
    assert result.errors[0].message == "StatusBar is invisible"


def test_templates_compare_by_name_and_stability() -> None:
    blocking = a.AppWindowOnTopAtEnd(c.OPENING_APP)
    assert blocking == a.AppWindowOnTopAtEnd(c.OPENING_APP)
    assert blocking != a.AppWindowOnTopAtEnd(c.CLOSING_APP)
    flaky = blocking.with_stability(AssertionInvocationGroup.NON_BLOCKING)
    assert flaky != blocking
    assert flaky.stability_group == AssertionInvocationGroup.NON_BLOCKING
    assert blocking.stability_group == AssertionInvocationGroup.BLOCKING


def test_base_templates_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        AssertionTemplate()  # type: ignore[abstract]
    with pytest.raises(TypeError):
        AssertionTemplateWithComponent(c.OPENING_APP)  # type: ignore[abstract]
