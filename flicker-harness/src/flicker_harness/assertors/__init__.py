"""Assertion templates and the scenario → template mapping."""

from __future__ import annotations

from flicker_harness.assertors.components import (
    COMPONENT_TEMPLATES,
    ComponentResolutionError,
    ComponentTemplate,
)
from flicker_harness.assertors.config import (
    ScenarioConfig,
    ScenarioConfigError,
    ScenarioConfigTable,
    load_scenario_config,
    parse_scenario_config,
)
from flicker_harness.assertors.factory import AssertionFactory
from flicker_harness.assertors.results import AssertionErrorInfo, AssertionResult
from flicker_harness.assertors.scenario import ScenarioInstance, ScenarioType
from flicker_harness.assertors.stability import AssertionInvocationGroup
from flicker_harness.assertors.templates import (
    AssertionTemplate,
    AssertionTemplateWithComponent,
    ScenarioAssertion,
)

__all__ = [
    "COMPONENT_TEMPLATES",
    "AssertionErrorInfo",
    "AssertionFactory",
    "AssertionInvocationGroup",
    "AssertionResult",
    "AssertionTemplate",
    "AssertionTemplateWithComponent",
    "ComponentResolutionError",
    "ComponentTemplate",
    "ScenarioAssertion",
    "ScenarioConfig",
    "ScenarioConfigError",
    "ScenarioConfigTable",
    "ScenarioInstance",
    "ScenarioType",
    "load_scenario_config",
    "parse_scenario_config",
]
