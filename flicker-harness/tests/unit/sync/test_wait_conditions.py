from __future__ import annotations

from flicker_fakes import APP, OTHER_APP, app_window, layer, layers_entry, system_window, wm_state

from flicker_harness.sync import ConditionsFactory, DeviceStateDump, WaitCondition
from flicker_harness.traces import (
    ActivityType,
    ComponentNameMatcher,
    IME,
    Rotation,
    STATUS_BAR,
    WindowState,
)

APP_MATCHER = ComponentNameMatcher.unflatten_from_string(APP)


def test_conditions_on_missing_wm_state_are_false() -> None:
    empty = DeviceStateDump()
    assert not ConditionsFactory.app_transition_idle().is_satisfied(empty)
    assert not ConditionsFactory.layer_visible(STATUS_BAR).is_satisfied(empty)


def test_window_and_activity_conditions() -> None:
    shown = DeviceStateDump(wm_state=wm_state(1, [app_window(APP)], resumed_activities=[APP]))
    gone = DeviceStateDump(wm_state=wm_state(2, [app_window(OTHER_APP)]))

    assert ConditionsFactory.window_surface_appeared(APP_MATCHER).is_satisfied(shown)
    assert not ConditionsFactory.window_surface_disappeared(APP_MATCHER).is_satisfied(shown)
    assert ConditionsFactory.window_surface_disappeared(APP_MATCHER).is_satisfied(gone)
    assert not ConditionsFactory.activity_removed(APP_MATCHER).is_satisfied(shown)
    assert ConditionsFactory.activity_removed(APP_MATCHER).is_satisfied(gone)


def test_ime_conditions() -> None:
    with_ime = DeviceStateDump(wm_state=wm_state(1, [system_window("InputMethod")]))
    hidden_ime = DeviceStateDump(wm_state=wm_state(2, [system_window("InputMethod", visible=False)]))

    assert ConditionsFactory.ime_shown().is_satisfied(with_ime)
    assert not ConditionsFactory.ime_shown().is_satisfied(hidden_ime)
    assert ConditionsFactory.ime_gone().is_satisfied(hidden_ime)
    assert not ConditionsFactory.ime_gone().is_satisfied(with_ime)


def test_transition_rotation_home_and_recents() -> None:
    home = WindowState(name="com.launcher/.Home", is_visible=True, activity_type=ActivityType.HOME)
    recents = WindowState(
        name="com.launcher/.Recents", is_visible=True, activity_type=ActivityType.RECENTS
    )
    dump = DeviceStateDump(
        wm_state=wm_state(
            1,
            [home, recents],
            rotation=Rotation.ROTATION_270,
            app_transition_state="APP_STATE_RUNNING",
        )
    )
    assert not ConditionsFactory.app_transition_idle().is_satisfied(dump)
    assert ConditionsFactory.rotation(Rotation.ROTATION_270).is_satisfied(dump)
    assert ConditionsFactory.home_activity_visible().is_satisfied(dump)
    assert ConditionsFactory.recents_activity_visible().is_satisfied(dump)


def test_layer_visible() -> None:
    dump = DeviceStateDump(layer_state=layers_entry(1, [layer("InputMethod#4", 4)]))
    assert ConditionsFactory.layer_visible(IME).is_satisfied(dump)
    assert not ConditionsFactory.layer_visible(STATUS_BAR).is_satisfied(dump)


def test_all_of_and_negate() -> None:
    yes = WaitCondition("yes", lambda _d: True)
    no = WaitCondition("no", lambda _d: False)
    dump = DeviceStateDump()

    both = WaitCondition.all_of(yes, no)
    assert both.message == "yes and no"
    assert not both.is_satisfied(dump)
    assert WaitCondition.all_of(yes, yes).is_satisfied(dump)
    assert no.negate().is_satisfied(dump)
    assert str(no.negate()) == "!(no)"
