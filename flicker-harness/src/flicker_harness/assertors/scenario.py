from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from flicker_harness.traces.reader import Reader
from flicker_harness.traces.timestamp import MAX_TIMESTAMP, MIN_TIMESTAMP, Timestamp
from flicker_harness.traces.wm import Rotation


class ScenarioType(str, Enum):
    APP_LAUNCH = "APP_LAUNCH"
    APP_CLOSE = "APP_CLOSE"
    LAUNCHER_APP_LAUNCH_FROM_ICON = "LAUNCHER_APP_LAUNCH_FROM_ICON"
    ROTATION = "ROTATION"
    IME_APPEAR = "IME_APPEAR"
    IME_DISAPPEAR = "IME_DISAPPEAR"
    SPLIT_SCREEN_ENTER = "SPLIT_SCREEN_ENTER"

    @classmethod
    def parse(cls, value: "str | ScenarioType") -> "ScenarioType":
        if isinstance(value, ScenarioType):
            return value
        return cls(str(value).strip().upper())


@dataclass(frozen=True)
class ScenarioInstance:
    """A detected transition and the trace window it spans.

    `reader` is expected to be sliced to [start_timestamp, end_timestamp]
    already; assertions never look outside it.
    """

    type: ScenarioType
    reader: Reader = field(compare=False)
    start_rotation: Rotation = Rotation.ROTATION_0
    end_rotation: Rotation = Rotation.ROTATION_0
    start_timestamp: Timestamp = MIN_TIMESTAMP
    end_timestamp: Timestamp = MAX_TIMESTAMP

    def __str__(self) -> str:
        return (
            f"{self.type.value}({self.start_rotation.name}->{self.end_rotation.name}, "
            f"{self.start_timestamp} .. {self.end_timestamp})"
        )
