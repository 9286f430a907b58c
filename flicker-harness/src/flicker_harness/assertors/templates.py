"""Assertion templates and the executable assertions they produce.

A template is scenario-independent ("the opening app becomes visible"); it
becomes a concrete `ScenarioAssertion` once bound to a `ScenarioInstance`.
Executing an assertion never raises: trace access problems and unexpected
errors are captured in the returned AssertionResult.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Tuple

from flicker_harness.assertors.components import ComponentTemplate
from flicker_harness.assertors.results import AssertionErrorInfo, AssertionResult
from flicker_harness.assertors.scenario import ScenarioInstance
from flicker_harness.assertors.stability import AssertionInvocationGroup
from flicker_harness.subjects.result import CheckResult
from flicker_harness.subjects.trace import LayersTraceSubject, WindowManagerTraceSubject
from flicker_harness.traces.component import ComponentMatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioAssertion:
    name: str
    stability_group: AssertionInvocationGroup
    scenario: ScenarioInstance
    evaluate: Callable[[], CheckResult] = field(compare=False, repr=False)

    def execute(self) -> AssertionResult:
        try:
            check = self.evaluate()
        except Exception as e:
            logger.debug("assertion %s raised %s", self.name, type(e).__name__, exc_info=True)
            return AssertionResult(
                name=self.name,
                scenario_type=self.scenario.type.value,
                stability_group=self.stability_group,
                errors=(
                    AssertionErrorInfo(
                        message=f"{type(e).__name__}: {e}",
                        facts={"Error": type(e).__name__},
                    ),
                ),
            )

        result = AssertionResult.from_check(
            name=self.name,
            scenario_type=self.scenario.type.value,
            stability_group=self.stability_group,
            check=check,
        )
        logger.debug("assertion %s: %s", self.name, "passed" if result.passed else "failed")
        return result


class AssertionTemplate(ABC):
    """Base class for scenario-independent assertions.

    Subclasses implement `do_evaluate(instance)`; `wm_subject` and
    `layers_subject` give access to the scenario's traces.
    """

    requires_component = False

    def __init__(
        self,
        *,
        stability_group: AssertionInvocationGroup = AssertionInvocationGroup.BLOCKING,
    ) -> None:
        self.stability_group = AssertionInvocationGroup.parse(stability_group)

    @property
    def assertion_name(self) -> str:
        return type(self).__name__

    def with_stability(self, group: AssertionInvocationGroup) -> "AssertionTemplate":
        clone = copy.copy(self)
        clone.stability_group = AssertionInvocationGroup.parse(group)
        return clone

    def create_assertion(self, instance: ScenarioInstance) -> ScenarioAssertion:
        return ScenarioAssertion(
            name=f"{instance.type.value}::{self.assertion_name}",
            stability_group=self.stability_group,
            scenario=instance,
            evaluate=lambda: self.evaluate(instance),
        )

    def evaluate(self, instance: ScenarioInstance) -> CheckResult:
        return self.do_evaluate(instance).with_context(Scenario=instance.type.value)

    @abstractmethod
    def do_evaluate(self, instance: ScenarioInstance) -> CheckResult:
        raise NotImplementedError

    @staticmethod
    def wm_subject(instance: ScenarioInstance) -> WindowManagerTraceSubject:
        return WindowManagerTraceSubject(instance.reader.read_wm_trace())

    @staticmethod
    def layers_subject(instance: ScenarioInstance) -> LayersTraceSubject:
        return LayersTraceSubject(instance.reader.read_layers_trace())

    def _identity(self) -> Tuple[Any, ...]:
        return (type(self), self.assertion_name, self.stability_group)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AssertionTemplate):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        return f"{self.assertion_name}[{self.stability_group.value}]"


class AssertionTemplateWithComponent(AssertionTemplate):
    """A template parameterized by the component it is about."""

    requires_component = True

    def __init__(
        self,
        component: ComponentTemplate,
        *,
        stability_group: AssertionInvocationGroup = AssertionInvocationGroup.BLOCKING,
    ) -> None:
        super().__init__(stability_group=stability_group)
        self.component = component

    @property
    def assertion_name(self) -> str:
        return f"{type(self).__name__}({self.component.name})"

    def do_evaluate(self, instance: ScenarioInstance) -> CheckResult:
        return self.evaluate_component(instance, self.component(instance))

    @abstractmethod
    def evaluate_component(
        self, instance: ScenarioInstance, component: ComponentMatcher
    ) -> CheckResult:
        raise NotImplementedError

