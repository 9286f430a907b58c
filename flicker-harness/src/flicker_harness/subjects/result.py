from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

from flicker_harness.traces.timestamp import EMPTY_TIMESTAMP, Timestamp


@dataclass(frozen=True)
class CheckFailure:
    """Structured description of one violated check."""

    message: str
    timestamp: Timestamp = EMPTY_TIMESTAMP
    facts: Mapping[str, str] = field(default_factory=dict)

    def with_context(
        self, *, timestamp: Optional[Timestamp] = None, **facts: Any
    ) -> "CheckFailure":
        merged = dict(self.facts)
        for k, v in facts.items():
            merged.setdefault(k, str(v))
        ts = self.timestamp
        if timestamp is not None and ts.is_empty:
            ts = timestamp
        return CheckFailure(message=self.message, timestamp=ts, facts=merged)

    def __str__(self) -> str:
        lines = [self.message]
        if not self.timestamp.is_empty:
            lines.append(f"    Timestamp: {self.timestamp}")
        for k in sorted(self.facts):
            lines.append(f"    {k}: {self.facts[k]}")
        return "\n".join(lines)


@dataclass(frozen=True)
class CheckResult:
    failures: Tuple[CheckFailure, ...] = ()

    @classmethod
    def success(cls) -> "CheckResult":
        return cls()

    @classmethod
    def failure(
        cls, message: str, timestamp: Timestamp = EMPTY_TIMESTAMP, **facts: Any
    ) -> "CheckResult":
        return cls(
            (
                CheckFailure(
                    message=message,
                    timestamp=timestamp,
                    facts={k: str(v) for k, v in facts.items()},
                ),
            )
        )

    @classmethod
    def merge(cls, results: Iterable["CheckResult"]) -> "CheckResult":
        failures: list[CheckFailure] = []
        for r in results:
            failures.extend(r.failures)
        return cls(tuple(failures))

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed(self) -> bool:
        return not self.ok

    @property
    def first_failure(self) -> Optional[CheckFailure]:
        return self.failures[0] if self.failures else None

    def with_context(self, *, timestamp: Optional[Timestamp] = None, **facts: Any) -> "CheckResult":
        if self.ok:
            return self
        return CheckResult(tuple(f.with_context(timestamp=timestamp, **facts) for f in self.failures))

    def raise_if_failed(self) -> "CheckResult":
        if self.failures:
            raise FlickerSubjectError(self.failures[0])
        return self

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        if self.ok:
            return "OK"
        return "\n".join(str(f) for f in self.failures)


class FlickerSubjectError(AssertionError):
    """A failed check, raised for callers that prefer exceptions."""

    def __init__(self, failure: CheckFailure) -> None:
        self.failure = failure
        super().__init__(str(failure))

    @property
    def timestamp(self) -> Timestamp:
        return self.failure.timestamp
