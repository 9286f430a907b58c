from __future__ import annotations

import logging
from typing import List

from flicker_harness.assertors.config import ScenarioConfigTable, load_scenario_config
from flicker_harness.assertors.factory import AssertionFactory
from flicker_harness.assertors.results import AssertionResult
from flicker_harness.assertors.scenario import ScenarioInstance
from flicker_harness.assertors.templates import ScenarioAssertion
from flicker_harness.config import FlickerConfig
from flicker_harness.service.detector import ScenarioDetector
from flicker_harness.traces.reader import Reader

logger = logging.getLogger(__name__)


class FlickerService:
    """detect scenarios -> generate assertions -> execute them."""

    def __init__(self, detector: ScenarioDetector, factory: AssertionFactory) -> None:
        self.detector = detector
        self.factory = factory

    def detect_scenarios(self, reader: Reader) -> List[ScenarioInstance]:
        scenarios = list(self.detector.detect(reader))
        logger.info(
            "detected %d scenario(s): %s",
            len(scenarios),
            ", ".join(s.type.value for s in scenarios) or "<none>",
        )
        return scenarios

    def generate_assertions(self, scenarios: List[ScenarioInstance]) -> List[ScenarioAssertion]:
        assertions: List[ScenarioAssertion] = []
        for scenario in scenarios:
            assertions.extend(self.factory.generate_assertions_for(scenario))
        return assertions

    def execute(self, assertions: List[ScenarioAssertion]) -> List[AssertionResult]:
        results = [a.execute() for a in assertions]
        failed = sum(1 for r in results if r.failed)
        logger.info("executed %d assertion(s), %d failed", len(results), failed)
        return results

    def process(self, reader: Reader) -> List[AssertionResult]:
        return self.execute(self.generate_assertions(self.detect_scenarios(reader)))

    @classmethod
    def from_config(cls, config: FlickerConfig, detector: ScenarioDetector) -> "FlickerService":
        if config.scenario_config_path is not None:
            logger.info("loading scenario config from %s", config.scenario_config_path)
            table = load_scenario_config(config.scenario_config_path)
        else:
            table = ScenarioConfigTable.default()
        return cls(detector, AssertionFactory(table))
