"""Scenario → assertion configuration.

The table is built once, either from `ScenarioConfigTable.default()` or from a
YAML/JSON file, and handed to `AssertionFactory`. Nothing here is mutated after
construction.

File format:

    version: 1
    scenarios:
      APP_LAUNCH:
        - template: AppWindowBecomesVisible
          component: OPENING_APP
        - template: EntireScreenCoveredAlways
          stability: NON_BLOCKING
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

import yaml
from jsonschema import Draft202012Validator

from flicker_harness.assertors import assertions as a
from flicker_harness.assertors import components as c
from flicker_harness.assertors.components import COMPONENT_TEMPLATES
from flicker_harness.assertors.scenario import ScenarioType
from flicker_harness.assertors.stability import AssertionInvocationGroup
from flicker_harness.assertors.templates import AssertionTemplate

NON_BLOCKING = AssertionInvocationGroup.NON_BLOCKING

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "scenario_config_schema.json"

_DOCUMENT_PARSERS: Mapping[str, Callable[[str], Any]] = MappingProxyType(
    {".yaml": yaml.safe_load, ".yml": yaml.safe_load, ".json": json.loads}
)
_MAX_REPORTED_ERRORS = 20

TEMPLATE_TYPES: Mapping[str, Type[AssertionTemplate]] = MappingProxyType(
    {t.__name__: t for t in a.BUILTIN_TEMPLATES}
)


class ScenarioConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class ScenarioConfig:
    type: ScenarioType
    assertion_templates: Tuple[AssertionTemplate, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "assertion_templates", tuple(self.assertion_templates))


class ScenarioConfigTable(Mapping[ScenarioType, ScenarioConfig]):
    """Read-only mapping from scenario type to its configured templates."""

    def __init__(self, configs: Sequence[ScenarioConfig] = ()) -> None:
        table: Dict[ScenarioType, ScenarioConfig] = {}
        for cfg in configs:
            if cfg.type in table:
                raise ScenarioConfigError(f"duplicate scenario type: {cfg.type.value}")
            table[cfg.type] = cfg
        self._table: Mapping[ScenarioType, ScenarioConfig] = MappingProxyType(table)

    def __getitem__(self, key: ScenarioType) -> ScenarioConfig:
        return self._table[key]

    def __iter__(self) -> Iterator[ScenarioType]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def templates_for(self, scenario_type: ScenarioType) -> Tuple[AssertionTemplate, ...]:
        cfg = self._table.get(scenario_type)
        return cfg.assertion_templates if cfg is not None else ()

    @classmethod
    def default(cls) -> "ScenarioConfigTable":
        launch = (
            a.AppWindowBecomesVisible(c.OPENING_APP),
            a.AppWindowOnTopAtEnd(c.OPENING_APP),
            a.AppWindowCoversFullScreenAtEnd(c.OPENING_APP, stability_group=NON_BLOCKING),
            a.EntireScreenCoveredAlways(),
            a.NonAppWindowIsVisibleAlways(c.STATUS_BAR, stability_group=NON_BLOCKING),
        )
        return cls(
            [
                ScenarioConfig(ScenarioType.APP_LAUNCH, launch),
                ScenarioConfig(
                    ScenarioType.LAUNCHER_APP_LAUNCH_FROM_ICON,
                    launch + (a.WindowMovesOutOfTop(c.LAUNCHER),),
                ),
                ScenarioConfig(
                    ScenarioType.APP_CLOSE,
                    (
                        a.AppWindowOnTopAtStart(c.CLOSING_APP),
                        a.WindowMovesOutOfTop(c.CLOSING_APP),
                        a.AppWindowBecomesInvisible(c.CLOSING_APP),
                        a.EntireScreenCoveredAlways(),
                    ),
                ),
                ScenarioConfig(
                    ScenarioType.ROTATION,
                    (
                        a.RotationMatchesScenario(),
                        a.EntireScreenCoveredAtStartAndEnd(),
                        a.LayerIsVisibleAtStartAndEnd(c.STATUS_BAR, stability_group=NON_BLOCKING),
                        a.LayerIsVisibleAtStartAndEnd(c.NAV_BAR, stability_group=NON_BLOCKING),
                    ),
                ),
                ScenarioConfig(
                    ScenarioType.IME_APPEAR,
                    (a.LayerBecomesVisible(c.IME), a.EntireScreenCoveredAlways()),
                ),
                ScenarioConfig(
                    ScenarioType.IME_DISAPPEAR,
                    (a.LayerBecomesInvisible(c.IME), a.EntireScreenCoveredAlways()),
                ),
            ]
        )


def read_config_document(path: Path) -> Dict[str, Any]:
    """Parse a scenario table file; the suffix picks the YAML or JSON reader."""

    parse = _DOCUMENT_PARSERS.get(path.suffix.lower())
    if parse is None:
        raise ValueError(f"{path}: scenario tables must be .yaml, .yml or .json")

    document = parse(path.read_text(encoding="utf-8"))
    if not isinstance(document, dict):
        raise ScenarioConfigError(
            f"{path}: scenario table must be an object, got {type(document).__name__}"
        )
    return document


def scenario_schema() -> Dict[str, Any]:
    with SCHEMA_PATH.open(encoding="utf-8") as fh:
        return json.load(fh)


def schema_errors(document: Mapping[str, Any], *, where: str) -> List[str]:
    """Schema violations of a scenario table, one line each, in document order."""

    validator = Draft202012Validator(scenario_schema())
    violations = sorted(
        validator.iter_errors(document),
        key=lambda err: [str(p) for p in err.absolute_path],
    )
    lines = []
    for err in violations:
        location = "/".join(str(p) for p in err.absolute_path) or "<root>"
        lines.append(f"{where}:{location}: {err.message}")
    return lines


def _build_template(item: Mapping[str, Any], *, where: str) -> AssertionTemplate:
    name = item["template"]
    template_type = TEMPLATE_TYPES.get(name)
    if template_type is None:
        raise ScenarioConfigError(f"{where}: unknown assertion template {name!r}")

    stability = AssertionInvocationGroup.parse(item.get("stability", "BLOCKING"))
    component_name: Optional[str] = item.get("component")

    if template_type.requires_component:
        if component_name is None:
            raise ScenarioConfigError(f"{where}: {name} requires a component")
        component = COMPONENT_TEMPLATES.get(component_name)
        if component is None:
            raise ScenarioConfigError(f"{where}: unknown component {component_name!r}")
        return template_type(component, stability_group=stability)  # type: ignore[call-arg]

    if component_name is not None:
        raise ScenarioConfigError(f"{where}: {name} does not take a component")
    return template_type(stability_group=stability)


def parse_scenario_config(data: Dict[str, Any], *, where: str = "<config>") -> ScenarioConfigTable:
    errors = schema_errors(data, where=where)
    if errors:
        shown = errors[:_MAX_REPORTED_ERRORS]
        if len(errors) > len(shown):
            shown.append(f"... and {len(errors) - len(shown)} more")
        raise ScenarioConfigError("invalid scenario table:\n" + "\n".join(shown))

    configs = []
    for type_name, items in data["scenarios"].items():
        try:
            scenario_type = ScenarioType.parse(type_name)
        except ValueError as e:
            raise ScenarioConfigError(f"{where}: unknown scenario type {type_name!r}") from e
        templates = [
            _build_template(item, where=f"{where}:scenarios/{type_name}/{i}")
            for i, item in enumerate(items)
        ]
        configs.append(ScenarioConfig(scenario_type, tuple(templates)))
    return ScenarioConfigTable(configs)


def load_scenario_config(path: Path) -> ScenarioConfigTable:
    path = Path(path)
    return parse_scenario_config(read_config_document(path), where=str(path))
