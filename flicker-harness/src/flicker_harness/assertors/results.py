from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from flicker_harness.assertors.stability import AssertionInvocationGroup
from flicker_harness.subjects.result import CheckResult
from flicker_harness.traces.timestamp import EMPTY_TIMESTAMP, Timestamp


@dataclass(frozen=True)
class AssertionErrorInfo:
    message: str
    timestamp: Timestamp = EMPTY_TIMESTAMP
    facts: Mapping[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.timestamp.is_empty:
            return self.message
        return f"{self.message} (at {self.timestamp})"


@dataclass(frozen=True)
class AssertionResult:
    name: str
    scenario_type: str
    stability_group: AssertionInvocationGroup
    errors: Tuple[AssertionErrorInfo, ...] = ()

    @classmethod
    def from_check(
        cls,
        *,
        name: str,
        scenario_type: str,
        stability_group: AssertionInvocationGroup,
        check: CheckResult,
    ) -> "AssertionResult":
        errors = tuple(
            AssertionErrorInfo(message=f.message, timestamp=f.timestamp, facts=dict(f.facts))
            for f in check.failures
        )
        return cls(
            name=name,
            scenario_type=scenario_type,
            stability_group=stability_group,
            errors=errors,
        )

    @property
    def failed(self) -> bool:
        return bool(self.errors)

    @property
    def passed(self) -> bool:
        return not self.failed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scenario_type": self.scenario_type,
            "stability_group": self.stability_group.value,
            "passed": self.passed,
            "errors": [
                {
                    "message": e.message,
                    "timestamp": str(e.timestamp),
                    "facts": dict(e.facts),
                }
                for e in self.errors
            ],
        }
