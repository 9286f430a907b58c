"""Scenario detection.

Real transition detection (which app launched, when the rotation started)
lives with the trace producer; the service only relies on the
`ScenarioDetector` protocol. `WholeTraceScenarioDetector` covers the common
test setup where one test run records exactly one known transition.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from flicker_harness.assertors.scenario import ScenarioInstance, ScenarioType
from flicker_harness.traces.reader import Reader, TraceNotFoundError
from flicker_harness.traces.timestamp import Timestamp
from flicker_harness.traces.trace import Trace
from flicker_harness.traces.wm import Rotation

logger = logging.getLogger(__name__)


class ScenarioDetector(Protocol):
    def detect(self, reader: Reader) -> List[ScenarioInstance]: ...


def _bounds(reader: Reader) -> Optional[Tuple[Timestamp, Timestamp, Rotation, Rotation]]:
    try:
        wm = reader.read_wm_trace()
    except TraceNotFoundError:
        wm = None
    if wm is not None and not wm.is_empty:
        first, last = wm.first(), wm.last()
        return first.timestamp, last.timestamp, first.rotation, last.rotation

    try:
        layers: Optional[Trace] = reader.read_layers_trace()
    except TraceNotFoundError:
        layers = None
    if layers is not None and not layers.is_empty:
        return (
            layers.first().timestamp,
            layers.last().timestamp,
            Rotation.ROTATION_0,
            Rotation.ROTATION_0,
        )
    return None


class WholeTraceScenarioDetector:
    """Reports each configured scenario type once, spanning the whole recording."""

    def __init__(self, scenario_types: Sequence[ScenarioType]) -> None:
        self.scenario_types = tuple(ScenarioType.parse(t) for t in scenario_types)

    def detect(self, reader: Reader) -> List[ScenarioInstance]:
        bounds = _bounds(reader)
        if bounds is None:
            logger.info("no trace entries in %s; no scenarios detected", reader.artifact_path)
            return []

        start, end, start_rotation, end_rotation = bounds
        sliced = reader.slice(start, end)
        return [
            ScenarioInstance(
                type=t,
                reader=sliced,
                start_rotation=start_rotation,
                end_rotation=end_rotation,
                start_timestamp=start,
                end_timestamp=end,
            )
            for t in self.scenario_types
        ]
