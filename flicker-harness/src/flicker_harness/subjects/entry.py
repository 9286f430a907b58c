"""Entry-level predicates and subjects.

A predicate is a `NamedCheck`: a named, side-effect-free function from one
snapshot to a CheckResult. Predicates are the building blocks of trace chains
(see `flicker_harness.subjects.trace`); the entry subjects below expose the
same checks over a single snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from flicker_harness.subjects.region import RegionSubject
from flicker_harness.subjects.result import CheckResult
from flicker_harness.traces.component import ComponentMatcher
from flicker_harness.traces.layers import LayerTraceEntry
from flicker_harness.traces.wm import Rotation, WindowManagerState

E = TypeVar("E")


@dataclass(frozen=True)
class NamedCheck(Generic[E]):
    name: str
    fn: Callable[[E], CheckResult]

    def __call__(self, entry: E) -> CheckResult:
        try:
            result = self.fn(entry)
        except AssertionError as e:
            result = CheckResult.failure(str(e) or type(e).__name__)
        timestamp = getattr(entry, "timestamp", None)
        return result.with_context(timestamp=timestamp, Assertion=self.name)


def _window_names(entry: WindowManagerState) -> str:
    return ", ".join(entry.window_names()) or "<none>"


# -- window manager predicates -------------------------------------------------


def is_window_visible(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if not entry.contains_window(component):
            return CheckResult.failure(
                f"{component} not found", Windows=_window_names(entry)
            )
        if entry.is_window_visible(component):
            return CheckResult.success()
        return CheckResult.failure(f"{component} is invisible")

    return NamedCheck(f"isWindowVisible({component})", _check)


def is_window_invisible(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if entry.is_window_visible(component):
            return CheckResult.failure(f"{component} is visible")
        return CheckResult.success()

    return NamedCheck(f"isWindowInvisible({component})", _check)


def is_app_window_visible(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        windows = [w for w in entry.matching_windows(component) if w.is_app_window]
        if not windows:
            return CheckResult.failure(
                f"App window {component} not found", Windows=_window_names(entry)
            )
        if any(w.is_visible for w in windows):
            return CheckResult.success()
        return CheckResult.failure(f"App window {component} is invisible")

    return NamedCheck(f"isAppWindowVisible({component})", _check)


def is_app_window_invisible(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if any(w.is_app_window and w.is_visible for w in entry.matching_windows(component)):
            return CheckResult.failure(f"App window {component} is visible")
        return CheckResult.success()

    return NamedCheck(f"isAppWindowInvisible({component})", _check)


def is_app_window_on_top(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        top = entry.top_visible_app_window
        if top is None:
            return CheckResult.failure("No visible app window found")
        if component.matches(top.name):
            return CheckResult.success()
        return CheckResult.failure(
            f"{component} is not on top", Expected=component, Found=top.name
        )

    return NamedCheck(f"isAppWindowOnTop({component})", _check)


def is_app_window_not_on_top(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        top = entry.top_visible_app_window
        if top is not None and component.matches(top.name):
            return CheckResult.failure(f"{component} is on top", Found=top.name)
        return CheckResult.success()

    return NamedCheck(f"isAppWindowNotOnTop({component})", _check)


def contains_window(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if entry.contains_window(component):
            return CheckResult.success()
        return CheckResult.failure(f"{component} not found", Windows=_window_names(entry))

    return NamedCheck(f"containsWindow({component})", _check)


def not_contains(component: ComponentMatcher) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        found = entry.get_window(component)
        if found is None:
            return CheckResult.success()
        return CheckResult.failure(f"{component} should not exist", Found=found.name)

    return NamedCheck(f"notContains({component})", _check)


def has_rotation(rotation: Rotation) -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if entry.rotation == rotation:
            return CheckResult.success()
        return CheckResult.failure(
            "Incorrect rotation", Expected=rotation.name, Actual=entry.rotation.name
        )

    return NamedCheck(f"hasRotation({rotation.name})", _check)


def is_home_activity_visible() -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if entry.is_home_activity_visible:
            return CheckResult.success()
        return CheckResult.failure("Home activity is not visible")

    return NamedCheck("isHomeActivityVisible", _check)


def is_home_activity_invisible() -> NamedCheck[WindowManagerState]:
    def _check(entry: WindowManagerState) -> CheckResult:
        if entry.is_home_activity_visible:
            return CheckResult.failure("Home activity is visible")
        return CheckResult.success()

    return NamedCheck("isHomeActivityInvisible", _check)


# -- layers predicates ---------------------------------------------------------


def is_layer_visible(component: ComponentMatcher) -> NamedCheck[LayerTraceEntry]:
    def _check(entry: LayerTraceEntry) -> CheckResult:
        if not entry.contains_layer(component):
            return CheckResult.failure(f"Layer {component} not found")
        if entry.is_visible(component):
            return CheckResult.success()
        return CheckResult.failure(f"Layer {component} is invisible")

    return NamedCheck(f"isLayerVisible({component})", _check)


def is_layer_invisible(component: ComponentMatcher) -> NamedCheck[LayerTraceEntry]:
    def _check(entry: LayerTraceEntry) -> CheckResult:
        if entry.is_visible(component):
            return CheckResult.failure(f"Layer {component} is visible")
        return CheckResult.success()

    return NamedCheck(f"isLayerInvisible({component})", _check)


def is_entire_screen_covered() -> NamedCheck[LayerTraceEntry]:
    def _check(entry: LayerTraceEntry) -> CheckResult:
        # every display's layer stack space counts, including off and virtual ones
        displays = entry.displays
        if not displays:
            return CheckResult.failure("No displays found")
        visible = RegionSubject(
            entry.visible_region(), timestamp=entry.timestamp, name="Visible layers"
        )
        return CheckResult.merge(
            visible.covers_at_least(d.layer_stack_space) for d in displays
        )

    return NamedCheck("entireScreenCovered", _check)


# -- subjects ------------------------------------------------------------------


class WindowStateSubject:
    """Checks over one window manager snapshot."""

    def __init__(self, entry: WindowManagerState) -> None:
        self.entry = entry

    @property
    def timestamp(self) -> Any:
        return self.entry.timestamp

    def check(self, predicate: NamedCheck[WindowManagerState]) -> CheckResult:
        return predicate(self.entry)

    def is_window_visible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_window_visible(component))

    def is_window_invisible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_window_invisible(component))

    def is_app_window_visible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_app_window_visible(component))

    def is_app_window_invisible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_app_window_invisible(component))

    def is_app_window_on_top(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_app_window_on_top(component))

    def is_app_window_not_on_top(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_app_window_not_on_top(component))

    def contains_window(self, component: ComponentMatcher) -> CheckResult:
        return self.check(contains_window(component))

    def not_contains(self, component: ComponentMatcher) -> CheckResult:
        return self.check(not_contains(component))

    def has_rotation(self, rotation: Rotation) -> CheckResult:
        return self.check(has_rotation(rotation))

    def is_home_activity_visible(self) -> CheckResult:
        return self.check(is_home_activity_visible())

    def is_home_activity_invisible(self) -> CheckResult:
        return self.check(is_home_activity_invisible())

    def visible_region(self, component: ComponentMatcher) -> RegionSubject:
        return RegionSubject(
            self.entry.visible_region(component),
            timestamp=self.entry.timestamp,
            name=f"Visible region of {component}",
        )


class LayerEntrySubject:
    """Checks over one layers snapshot."""

    def __init__(self, entry: LayerTraceEntry) -> None:
        self.entry = entry

    @property
    def timestamp(self) -> Any:
        return self.entry.timestamp

    def check(self, predicate: NamedCheck[LayerTraceEntry]) -> CheckResult:
        return predicate(self.entry)

    def is_visible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_layer_visible(component))

    def is_invisible(self, component: ComponentMatcher) -> CheckResult:
        return self.check(is_layer_invisible(component))

    def is_entire_screen_covered(self) -> CheckResult:
        return self.check(is_entire_screen_covered())

    def visible_region(self, component: Optional[ComponentMatcher] = None) -> RegionSubject:
        name = "Visible layers" if component is None else f"Visible region of {component}"
        return RegionSubject(
            self.entry.visible_region(component),
            timestamp=self.entry.timestamp,
            name=name,
        )
