from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from flicker_harness.traces.component import IME, ComponentMatcher
from flicker_harness.traces.wm import Rotation, WindowManagerState

if TYPE_CHECKING:
    from flicker_harness.sync.state_helper import DeviceStateDump


@dataclass(frozen=True)
class WaitCondition:
    """A named predicate over a device state dump."""

    message: str
    predicate: Callable[["DeviceStateDump"], bool]

    def is_satisfied(self, dump: "DeviceStateDump") -> bool:
        return bool(self.predicate(dump))

    def negate(self, message: str = "") -> "WaitCondition":
        return WaitCondition(
            message or f"!({self.message})", lambda dump: not self.is_satisfied(dump)
        )

    @classmethod
    def all_of(cls, *conditions: "WaitCondition") -> "WaitCondition":
        if not conditions:
            raise ValueError("all_of() needs at least one condition")
        conds = tuple(conditions)
        return cls(
            " and ".join(c.message for c in conds),
            lambda dump: all(c.is_satisfied(dump) for c in conds),
        )

    def __str__(self) -> str:
        return self.message


def _on_wm(
    message: str, predicate: Callable[[WindowManagerState], bool]
) -> WaitCondition:
    def _check(dump: "DeviceStateDump") -> bool:
        return dump.wm_state is not None and predicate(dump.wm_state)

    return WaitCondition(message, _check)


class ConditionsFactory:
    """Common wait conditions."""

    @staticmethod
    def window_surface_appeared(component: ComponentMatcher) -> WaitCondition:
        return _on_wm(
            f"windowSurfaceAppeared[{component}]",
            lambda wm: wm.is_window_surface_shown(component),
        )

    @staticmethod
    def window_surface_disappeared(component: ComponentMatcher) -> WaitCondition:
        return _on_wm(
            f"windowSurfaceDisappeared[{component}]",
            lambda wm: not wm.is_window_surface_shown(component),
        )

    @staticmethod
    def activity_removed(component: ComponentMatcher) -> WaitCondition:
        return _on_wm(
            f"activityRemoved[{component}]",
            lambda wm: not wm.is_activity_resumed(component) and not wm.contains_window(component),
        )

    @staticmethod
    def app_transition_idle() -> WaitCondition:
        return _on_wm("appTransitionIdle", lambda wm: wm.is_app_transition_idle)

    @staticmethod
    def ime_shown() -> WaitCondition:
        def _shown(wm: WindowManagerState) -> bool:
            ime = wm.input_method_window
            return ime is not None and ime.is_surface_shown

        return _on_wm("imeShown", _shown)

    @staticmethod
    def ime_gone() -> WaitCondition:
        return _on_wm("imeGone", lambda wm: not wm.is_window_surface_shown(IME))

    @staticmethod
    def rotation(rotation: Rotation) -> WaitCondition:
        return _on_wm(f"rotation[{rotation.name}]", lambda wm: wm.rotation == rotation)

    @staticmethod
    def home_activity_visible() -> WaitCondition:
        return _on_wm("isHomeActivityVisible", lambda wm: wm.is_home_activity_visible)

    @staticmethod
    def recents_activity_visible() -> WaitCondition:
        return _on_wm("isRecentsActivityVisible", lambda wm: wm.is_recents_activity_visible)

    @staticmethod
    def layer_visible(component: ComponentMatcher) -> WaitCondition:
        def _check(dump: "DeviceStateDump") -> bool:
            return dump.layer_state is not None and dump.layer_state.is_visible(component)

        return WaitCondition(f"isLayerVisible[{component}]", _check)
