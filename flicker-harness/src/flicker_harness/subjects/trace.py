"""Temporal checks over a whole trace.

A trace subject is an immutable builder. Predicates added one after another
form a *stage* and must all hold on the same entry; `then()` closes the
current stage and opens the next one:

    WindowManagerTraceSubject(trace)
        .is_app_window_on_top(app)
        .then()
        .is_app_window_not_on_top(app)
        .for_all_entries()

Evaluation walks the entries once. Each stage must hold on a non-empty run
of consecutive entries; the next stage takes over at the first entry where the
previous one stops holding. Optional stages (`then(optional=True)`) may be
skipped. Entries outside the chain are controlled by `GapPolicy`; the default
policy requires the chain to cover every entry and reach every non-optional
stage. On an empty trace a single stage holds vacuously while a multi-stage
chain fails.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar

from flicker_harness.subjects import entry as predicates
from flicker_harness.subjects.entry import LayerEntrySubject, NamedCheck, WindowStateSubject
from flicker_harness.subjects.result import CheckResult
from flicker_harness.traces.component import ComponentMatcher
from flicker_harness.traces.layers import LayerTraceEntry
from flicker_harness.traces.timestamp import Timestamp
from flicker_harness.traces.trace import Trace
from flicker_harness.traces.wm import Rotation, WindowManagerState

E = TypeVar("E")
S = TypeVar("S", bound="TraceSubject[Any]")


@dataclass(frozen=True)
class GapPolicy:
    allow_leading_gap: bool = False
    allow_trailing_gap: bool = False


STRICT = GapPolicy()


@dataclass(frozen=True)
class _Stage(Generic[E]):
    checks: Tuple[NamedCheck[E], ...]
    optional: bool = False

    @property
    def name(self) -> str:
        return " && ".join(c.name for c in self.checks)

    def evaluate(self, entry: E) -> CheckResult:
        return CheckResult.merge(check(entry) for check in self.checks)


def _stage_label(stages: Sequence[_Stage[Any]], idx: int) -> str:
    return f"{idx + 1}/{len(stages)} [{stages[idx].name}]"


def run_chain(
    entries: Sequence[E],
    stages: Sequence[_Stage[E]],
    policy: GapPolicy = STRICT,
) -> CheckResult:
    if not stages:
        return CheckResult.failure("No assertions to evaluate")
    if not entries:
        # a single stage holds vacuously; a transition needs entries to happen on
        if len(stages) == 1:
            return CheckResult.success()
        return CheckResult.failure("Trace is empty", Chain=_stage_label(stages, 0))

    stage_idx = 0
    stage_held = False
    any_held = False
    entry_idx = 0

    while entry_idx < len(entries):
        entry = entries[entry_idx]
        stage = stages[stage_idx]
        result = stage.evaluate(entry)
        if result.ok:
            stage_held = True
            any_held = True
            entry_idx += 1
            continue

        if stage.optional and not stage_held:
            stage_idx += 1
            if stage_idx == len(stages):
                if policy.allow_trailing_gap and any_held:
                    return CheckResult.success()
                return result.with_context(
                    Chain=_stage_label(stages, stage_idx - 1),
                    Reason="entry not matched by any stage",
                )
            continue

        if stage_held:
            stage_idx += 1
            stage_held = False
            if stage_idx == len(stages):
                if policy.allow_trailing_gap:
                    return CheckResult.success()
                return result.with_context(
                    Chain=_stage_label(stages, stage_idx - 1),
                    Reason="entry not matched by any stage",
                )
            continue

        if not any_held and policy.allow_leading_gap:
            entry_idx += 1
            continue

        reason = "first stage does not hold at trace start"
        if stage_idx > 0:
            reason = f"stage does not hold after {stages[stage_idx - 1].name} stopped holding"
        return result.with_context(Chain=_stage_label(stages, stage_idx), Reason=reason)

    remaining = stages[stage_idx + 1 :] if stage_held else stages[stage_idx:]
    for offset, stage in enumerate(remaining):
        if stage.optional:
            continue
        idx = len(stages) - len(remaining) + offset
        if not any_held:
            message = f"{stage.name} never held"
        else:
            message = f"Trace ended before {stage.name} held"
        return CheckResult.failure(
            message,
            entries[-1].timestamp,  # type: ignore[attr-defined]
            Chain=_stage_label(stages, idx),
        )
    return CheckResult.success()


class TraceSubject(Generic[E]):
    """Chainable temporal assertions over a Trace."""

    def __init__(
        self,
        trace: Trace[Any],
        *,
        gap_policy: GapPolicy = STRICT,
        _stages: Tuple[_Stage[E], ...] = (),
        _new_stage: bool = True,
        _next_optional: bool = False,
    ) -> None:
        self.trace = trace
        self.gap_policy = gap_policy
        self._stages = _stages
        self._new_stage = _new_stage
        self._next_optional = _next_optional

    def entry_subject(self, entry: E) -> Any:
        return entry

    def _copy(self: S, **changes: Any) -> S:
        kwargs: dict[str, Any] = {
            "gap_policy": self.gap_policy,
            "_stages": self._stages,
            "_new_stage": self._new_stage,
            "_next_optional": self._next_optional,
        }
        kwargs.update(changes)
        trace = kwargs.pop("trace", self.trace)
        return type(self)(trace, **kwargs)

    def add(self: S, check: NamedCheck[E]) -> S:
        stages = self._stages
        if self._new_stage or not stages:
            stages = stages + (_Stage((check,), optional=self._next_optional),)
        else:
            last = stages[-1]
            stages = stages[:-1] + (replace(last, checks=last.checks + (check,)),)
        return self._copy(_stages=stages, _new_stage=False, _next_optional=False)

    def invoke(self: S, name: str, fn: Callable[[Any], Optional[CheckResult]]) -> S:
        """Add an ad-hoc per-entry check; `fn` receives the entry subject."""

        def _run(entry: E) -> CheckResult:
            result = fn(self.entry_subject(entry))
            return CheckResult.success() if result is None else result

        return self.add(NamedCheck(name, _run))

    def then(self: S, *, optional: bool = False) -> S:
        if not self._stages:
            raise ValueError("then() requires a preceding assertion")
        return self._copy(_new_stage=True, _next_optional=optional)

    def with_gap_policy(self: S, policy: GapPolicy) -> S:
        return self._copy(gap_policy=policy)

    def for_range(self: S, start: Timestamp, end: Timestamp) -> S:
        return self._copy(trace=self.trace.slice(start, end))

    @property
    def stage_names(self) -> list[str]:
        return [s.name for s in self._stages]

    def for_all_entries(self) -> CheckResult:
        return run_chain(self.trace.entries, self._stages, self.gap_policy)

    def first(self) -> Any:
        return self.entry_subject(self.trace.first())

    def last(self) -> Any:
        return self.entry_subject(self.trace.last())

    def entry(self, timestamp: Timestamp) -> Any:
        return self.entry_subject(self.trace.entry_exactly_at(timestamp))


class WindowManagerTraceSubject(TraceSubject[WindowManagerState]):
    def entry_subject(self, entry: WindowManagerState) -> WindowStateSubject:
        return WindowStateSubject(entry)

    def is_window_visible(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_window_visible(component))

    def is_window_invisible(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_window_invisible(component))

    def is_app_window_visible(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_app_window_visible(component))

    def is_app_window_invisible(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_app_window_invisible(component))

    def is_app_window_on_top(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_app_window_on_top(component))

    def is_app_window_not_on_top(
        self, component: ComponentMatcher
    ) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_app_window_not_on_top(component))

    def contains_window(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.contains_window(component))

    def not_contains(self, component: ComponentMatcher) -> "WindowManagerTraceSubject":
        return self.add(predicates.not_contains(component))

    def has_rotation(self, rotation: Rotation) -> "WindowManagerTraceSubject":
        return self.add(predicates.has_rotation(rotation))

    def is_home_activity_visible(self) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_home_activity_visible())

    def is_home_activity_invisible(self) -> "WindowManagerTraceSubject":
        return self.add(predicates.is_home_activity_invisible())


class LayersTraceSubject(TraceSubject[LayerTraceEntry]):
    def entry_subject(self, entry: LayerTraceEntry) -> LayerEntrySubject:
        return LayerEntrySubject(entry)

    def is_visible(self, component: ComponentMatcher) -> "LayersTraceSubject":
        return self.add(predicates.is_layer_visible(component))

    def is_invisible(self, component: ComponentMatcher) -> "LayersTraceSubject":
        return self.add(predicates.is_layer_invisible(component))

    def is_entire_screen_covered(self) -> "LayersTraceSubject":
        return self.add(predicates.is_entire_screen_covered())
