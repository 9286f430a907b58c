"""Component references.

The same logical UI element appears under differently decorated names in WM
and layers traces, e.g.:

  com.example/.MainActivity
  com.example/com.example.MainActivity#1234
  ActivityRecord{8d31f u0 com.example/.MainActivity t12}
  Splash Screen com.example

Matching therefore goes through a canonical form rather than raw string
equality.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

_DECORATED_RE = re.compile(r"^[A-Za-z]+\{(?P<inner>[^}]*)\}$")
_LAYER_ID_SUFFIX_RE = re.compile(r"#\d+$")
_RECORD_NOISE_RE = re.compile(r"^(?:[0-9a-f]+|u\d+|t\d+)$")
_DECORATION_PREFIXES: Tuple[str, ...] = ("Splash Screen ",)


def parse_component(component: str) -> Tuple[Optional[str], Optional[str]]:
    """Parse 'pkg/.Act' or 'pkg/pkg.Act' into (package, fully qualified class)."""

    component = str(component or "").strip()
    if "/" not in component:
        return None, None
    pkg, cls = component.split("/", 1)
    pkg = pkg.strip()
    cls = cls.strip()
    if not pkg or not cls:
        return None, None
    if cls.startswith("."):
        cls = pkg + cls
    return pkg, cls


def canonical_name(name: str) -> str:
    """Strip trace decorations and expand short class names."""

    raw = str(name or "").strip()

    m = _DECORATED_RE.match(raw)
    if m:
        tokens = [t for t in m.group("inner").split() if not _RECORD_NOISE_RE.match(t)]
        with_slash = [t for t in tokens if "/" in t]
        if with_slash:
            raw = with_slash[0]
        elif tokens:
            raw = tokens[-1]
        else:
            raw = ""

    raw = _LAYER_ID_SUFFIX_RE.sub("", raw).strip()
    for prefix in _DECORATION_PREFIXES:
        if raw.startswith(prefix):
            raw = raw[len(prefix) :].strip()

    pkg, cls = parse_component(raw)
    if pkg is not None and cls is not None:
        return f"{pkg}/{cls}"
    return raw


class ComponentMatcher(Protocol):
    def matches(self, name: str) -> bool: ...

    def to_window_name(self) -> str: ...

    def to_layer_name(self) -> str: ...


@dataclass(frozen=True)
class ComponentNameMatcher:
    """Matches windows/layers/activities by package and class name.

    Either part may be empty: a package-only matcher matches every component of
    that package; a class-only matcher (system windows such as the status bar)
    matches by name prefix.
    """

    package_name: str = ""
    class_name: str = ""

    @classmethod
    def unflatten_from_string(cls, value: str) -> "ComponentNameMatcher":
        pkg, klass = parse_component(value)
        if pkg is None or klass is None:
            raise ValueError(f"not a flattened component name: {value!r}")
        return cls(package_name=pkg, class_name=klass)

    def to_activity_name(self) -> str:
        if self.package_name and self.class_name:
            return f"{self.package_name}/{self.class_name}"
        return self.package_name or self.class_name

    def to_window_name(self) -> str:
        return self.to_activity_name()

    def to_layer_name(self) -> str:
        return self.to_activity_name()

    def matches(self, name: str) -> bool:
        raw = str(name or "").strip()
        if not raw:
            return False
        canonical = canonical_name(raw)

        if self.package_name and self.class_name:
            return canonical == f"{self.package_name}/{self.class_name}"
        if self.package_name:
            return canonical == self.package_name or canonical.startswith(
                self.package_name + "/"
            )
        if self.class_name:
            return raw.startswith(self.class_name) or canonical.startswith(self.class_name)
        return False

    def or_(self, *others: ComponentMatcher) -> "AnyOfComponentMatcher":
        return AnyOfComponentMatcher((self,) + tuple(others))

    def __str__(self) -> str:
        return self.to_activity_name()


@dataclass(frozen=True)
class AnyOfComponentMatcher:
    matchers: Sequence[ComponentMatcher]

    def matches(self, name: str) -> bool:
        return any(m.matches(name) for m in self.matchers)

    def to_window_name(self) -> str:
        return " or ".join(m.to_window_name() for m in self.matchers)

    def to_layer_name(self) -> str:
        return " or ".join(m.to_layer_name() for m in self.matchers)

    def or_(self, *others: ComponentMatcher) -> "AnyOfComponentMatcher":
        return AnyOfComponentMatcher(tuple(self.matchers) + tuple(others))

    def __str__(self) -> str:
        return self.to_window_name()


STATUS_BAR = ComponentNameMatcher(class_name="StatusBar")
NAV_BAR = ComponentNameMatcher(class_name="NavigationBar0")
IME = ComponentNameMatcher(class_name="InputMethod")
SPLASH_SCREEN = ComponentNameMatcher(class_name="Splash Screen")
SNAPSHOT = ComponentNameMatcher(class_name="SnapshotStartingWindow")
WALLPAPER_BBQ_WRAPPER = ComponentNameMatcher(class_name="Wallpaper BBQ wrapper")
LAUNCHER = ComponentNameMatcher(
    package_name="com.google.android.apps.nexuslauncher",
    class_name="com.google.android.apps.nexuslauncher.NexusLauncherActivity",
)
