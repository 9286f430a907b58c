"""Components resolved per scenario.

Some assertions target a fixed system component (status bar, launcher);
others target whichever app the scenario opened or closed. A ComponentTemplate
defers that choice until the scenario instance is known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping

from flicker_harness.assertors.scenario import ScenarioInstance
from flicker_harness.traces import component as components
from flicker_harness.traces.component import ComponentMatcher, ComponentNameMatcher, canonical_name
from flicker_harness.traces.wm import WindowManagerState


class ComponentResolutionError(RuntimeError):
    pass


@dataclass(frozen=True)
class ComponentTemplate:
    name: str
    build: Callable[[ScenarioInstance], ComponentMatcher] = field(compare=False, repr=False)

    def __call__(self, instance: ScenarioInstance) -> ComponentMatcher:
        return self.build(instance)

    def __str__(self) -> str:
        return self.name


def _matcher_for_window(window_name: str) -> ComponentNameMatcher:
    name = canonical_name(window_name)
    if "/" in name:
        return ComponentNameMatcher.unflatten_from_string(name)
    return ComponentNameMatcher(package_name=name)


def _top_app_window(state: WindowManagerState, where: str) -> ComponentNameMatcher:
    top = state.top_visible_app_window
    if top is None:
        raise ComponentResolutionError(f"No visible app window at the {where} of the scenario")
    return _matcher_for_window(top.name)


def _opening_app(instance: ScenarioInstance) -> ComponentMatcher:
    trace = instance.reader.read_wm_trace()
    if trace.is_empty:
        raise ComponentResolutionError("Window manager trace is empty")
    return _top_app_window(trace.last(), "end")


def _closing_app(instance: ScenarioInstance) -> ComponentMatcher:
    trace = instance.reader.read_wm_trace()
    if trace.is_empty:
        raise ComponentResolutionError("Window manager trace is empty")
    return _top_app_window(trace.first(), "start")


def _fixed(matcher: ComponentMatcher) -> Callable[[ScenarioInstance], ComponentMatcher]:
    return lambda _instance: matcher


OPENING_APP = ComponentTemplate("OPENING_APP", _opening_app)
CLOSING_APP = ComponentTemplate("CLOSING_APP", _closing_app)
LAUNCHER = ComponentTemplate("LAUNCHER", _fixed(components.LAUNCHER))
STATUS_BAR = ComponentTemplate("STATUS_BAR", _fixed(components.STATUS_BAR))
NAV_BAR = ComponentTemplate("NAV_BAR", _fixed(components.NAV_BAR))
IME = ComponentTemplate("IME", _fixed(components.IME))

COMPONENT_TEMPLATES: Mapping[str, ComponentTemplate] = MappingProxyType(
    {t.name: t for t in (OPENING_APP, CLOSING_APP, LAUNCHER, STATUS_BAR, NAV_BAR, IME)}
)
