from __future__ import annotations

import logging
from typing import List, Optional

from flicker_harness.assertors.config import ScenarioConfigTable
from flicker_harness.assertors.scenario import ScenarioInstance
from flicker_harness.assertors.templates import ScenarioAssertion

logger = logging.getLogger(__name__)


class AssertionFactory:
    """Binds configured templates to detected scenario instances."""

    def __init__(self, table: Optional[ScenarioConfigTable] = None) -> None:
        self.table = table if table is not None else ScenarioConfigTable.default()

    def generate_assertions_for(self, instance: ScenarioInstance) -> List[ScenarioAssertion]:
        templates = self.table.templates_for(instance.type)
        if not templates:
            logger.debug("no assertions configured for scenario %s", instance.type.value)
        return [t.create_assertion(instance) for t in templates]
