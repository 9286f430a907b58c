"""Window manager snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Sequence, Tuple

from flicker_harness.geometry import Rect, Region
from flicker_harness.traces.component import IME, ComponentMatcher
from flicker_harness.traces.timestamp import EMPTY_TIMESTAMP, Timestamp


class Rotation(IntEnum):
    ROTATION_0 = 0
    ROTATION_90 = 1
    ROTATION_180 = 2
    ROTATION_270 = 3

    @property
    def degrees(self) -> int:
        return int(self) * 90

    @property
    def is_rotated(self) -> bool:
        return self in (Rotation.ROTATION_90, Rotation.ROTATION_270)


class ActivityType(str, Enum):
    UNDEFINED = "undefined"
    STANDARD = "standard"
    HOME = "home"
    RECENTS = "recents"


APP_STATE_IDLE = "APP_STATE_IDLE"
APP_STATE_READY = "APP_STATE_READY"
APP_STATE_RUNNING = "APP_STATE_RUNNING"
APP_STATE_TIMEOUT = "APP_STATE_TIMEOUT"


@dataclass(frozen=True)
class WindowState:
    name: str
    token: str = ""
    parent_token: str = ""
    bounds: Rect = field(default_factory=Rect)
    is_visible: bool = False
    is_surface_shown: bool = False
    is_app_window: bool = False
    layer: int = 0
    activity_type: ActivityType = ActivityType.UNDEFINED

    @property
    def frame_region(self) -> Region:
        return Region.from_rect(self.bounds)

    def __str__(self) -> str:
        return f"{self.name} {self.bounds}{' visible' if self.is_visible else ''}"


@dataclass(frozen=True)
class WindowManagerState:
    """One window manager snapshot.

    `windows` is ordered top to bottom (index 0 is the top-most window).
    """

    timestamp: Timestamp = EMPTY_TIMESTAMP
    windows: Tuple[WindowState, ...] = ()
    rotation: Rotation = Rotation.ROTATION_0
    focused_app: str = ""
    resumed_activities: Tuple[str, ...] = ()
    app_transition_state: str = APP_STATE_IDLE
    is_keyguard_showing: bool = False
    display_bounds: Rect = field(default_factory=Rect)

    def __post_init__(self) -> None:
        object.__setattr__(self, "windows", tuple(self.windows))
        object.__setattr__(self, "resumed_activities", tuple(self.resumed_activities))

    @property
    def visible_windows(self) -> Tuple[WindowState, ...]:
        return tuple(w for w in self.windows if w.is_visible)

    @property
    def app_windows(self) -> Tuple[WindowState, ...]:
        return tuple(w for w in self.windows if w.is_app_window)

    @property
    def top_visible_app_window(self) -> Optional[WindowState]:
        for w in self.windows:
            if w.is_app_window and w.is_visible:
                return w
        return None

    @property
    def is_app_transition_idle(self) -> bool:
        return self.app_transition_state == APP_STATE_IDLE

    @property
    def input_method_window(self) -> Optional[WindowState]:
        return self.get_window(IME)

    def matching_windows(self, component: ComponentMatcher) -> Tuple[WindowState, ...]:
        return tuple(w for w in self.windows if component.matches(w.name))

    def get_window(self, component: ComponentMatcher) -> Optional[WindowState]:
        for w in self.windows:
            if component.matches(w.name):
                return w
        return None

    def contains_window(self, component: ComponentMatcher) -> bool:
        return self.get_window(component) is not None

    def is_window_surface_shown(self, component: ComponentMatcher) -> bool:
        return any(w.is_surface_shown for w in self.matching_windows(component))

    def is_window_visible(self, component: ComponentMatcher) -> bool:
        return any(w.is_visible for w in self.matching_windows(component))

    def visible_region(self, component: ComponentMatcher) -> Region:
        region = Region()
        for w in self.matching_windows(component):
            if w.is_visible:
                region = region.union(w.bounds)
        return region

    def _is_activity_type_visible(self, activity_type: ActivityType) -> bool:
        return any(w.is_visible and w.activity_type == activity_type for w in self.windows)

    @property
    def is_home_activity_visible(self) -> bool:
        return self._is_activity_type_visible(ActivityType.HOME)

    @property
    def is_recents_activity_visible(self) -> bool:
        return self._is_activity_type_visible(ActivityType.RECENTS)

    def is_activity_resumed(self, component: ComponentMatcher) -> bool:
        return any(component.matches(a) for a in self.resumed_activities)

    def children_of(self, token: str) -> Tuple[WindowState, ...]:
        return tuple(w for w in self.windows if token and w.parent_token == token)

    def window_names(self) -> Sequence[str]:
        return [w.name for w in self.windows]

    def __str__(self) -> str:
        return f"WindowManagerState({self.timestamp})"
