"""Polling until the device reaches an expected state.

The engine pulls a fresh `DeviceStateDump` from a supplier, evaluates the
wait conditions against it and either returns or sleeps and tries again. The
budget is a number of polls, not a wall-clock deadline: the supplier is called
at most `num_retries` times and the engine sleeps only between polls.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from flicker_harness.config import DEFAULT_NUM_RETRIES, DEFAULT_RETRY_INTERVAL_MS, FlickerConfig
from flicker_harness.sync.conditions import ConditionsFactory, WaitCondition
from flicker_harness.traces.component import ComponentMatcher
from flicker_harness.traces.layers import LayerTraceEntry
from flicker_harness.traces.wm import Rotation, WindowManagerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceStateDump:
    wm_state: Optional[WindowManagerState] = None
    layer_state: Optional[LayerTraceEntry] = None


class SyncState(str, Enum):
    IDLE = "IDLE"
    POLLING = "POLLING"
    SATISFIED = "SATISFIED"
    EXHAUSTED = "EXHAUSTED"


class StateSyncError(RuntimeError):
    def __init__(self, outcome: "WaitOutcome") -> None:
        self.outcome = outcome
        failed = ", ".join(outcome.failed_conditions) or "<none>"
        super().__init__(
            f"state not reached after {outcome.attempts} attempt(s); failed: {failed}"
        )


@dataclass(frozen=True)
class WaitOutcome:
    satisfied: bool
    attempts: int
    last_state: Optional[DeviceStateDump]
    failed_conditions: Tuple[str, ...] = ()
    final_state: SyncState = SyncState.EXHAUSTED

    def __bool__(self) -> bool:
        return self.satisfied


class StateSyncEngine:
    def __init__(
        self,
        supplier: Callable[[], DeviceStateDump],
        *,
        num_retries: int = DEFAULT_NUM_RETRIES,
        retry_interval_ms: int = DEFAULT_RETRY_INTERVAL_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if num_retries < 1:
            raise ValueError(f"num_retries must be >= 1, got {num_retries}")
        if retry_interval_ms < 0:
            raise ValueError(f"retry_interval_ms must be >= 0, got {retry_interval_ms}")
        self.supplier = supplier
        self.num_retries = num_retries
        self.retry_interval_ms = retry_interval_ms
        self.sleep = sleep
        self.state = SyncState.IDLE
        self.current_state: Optional[DeviceStateDump] = None

    @classmethod
    def from_config(
        cls,
        supplier: Callable[[], DeviceStateDump],
        config: FlickerConfig,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "StateSyncEngine":
        return cls(
            supplier,
            num_retries=config.num_retries,
            retry_interval_ms=config.retry_interval_ms,
            sleep=sleep,
        )

    def update_current_state(self, dump: DeviceStateDump) -> None:
        self.current_state = dump

    def wait_for(self, *conditions: WaitCondition) -> WaitOutcome:
        conds: Sequence[WaitCondition] = tuple(conditions)
        self.state = SyncState.POLLING
        failed: List[str] = []

        for attempt in range(self.num_retries):
            dump = self.supplier()
            self.update_current_state(dump)
            failed = [c.message for c in conds if not c.is_satisfied(dump)]
            logger.debug(
                "poll %d/%d: %s",
                attempt + 1,
                self.num_retries,
                "satisfied" if not failed else "waiting for " + ", ".join(failed),
            )
            if not failed:
                self.state = SyncState.SATISFIED
                return WaitOutcome(
                    satisfied=True,
                    attempts=attempt + 1,
                    last_state=dump,
                    final_state=self.state,
                )
            if attempt + 1 < self.num_retries:
                self.sleep(self.retry_interval_ms / 1000.0)

        self.state = SyncState.EXHAUSTED
        logger.info(
            "state not reached after %d poll(s); failed conditions: %s",
            self.num_retries,
            ", ".join(failed),
        )
        return WaitOutcome(
            satisfied=False,
            attempts=self.num_retries,
            last_state=self.current_state,
            failed_conditions=tuple(failed),
            final_state=self.state,
        )


@dataclass
class StateSyncBuilder:
    """Accumulates wait conditions, then polls until all of them hold."""

    engine: StateSyncEngine
    conditions: List[WaitCondition] = field(default_factory=list)

    def add(self, condition: WaitCondition) -> "StateSyncBuilder":
        self.conditions.append(condition)
        return self

    def with_window_surface_appeared(self, component: ComponentMatcher) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.window_surface_appeared(component))

    def with_window_surface_disappeared(self, component: ComponentMatcher) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.window_surface_disappeared(component))

    def with_activity_removed(self, component: ComponentMatcher) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.activity_removed(component))

    def with_app_transition_idle(self) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.app_transition_idle())

    def with_ime_shown(self) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.ime_shown())

    def with_ime_gone(self) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.ime_gone())

    def with_rotation(self, rotation: Rotation) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.rotation(rotation))

    def with_home_activity_visible(self) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.home_activity_visible())

    def with_recents_activity_visible(self) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.recents_activity_visible())

    def with_layer_visible(self, component: ComponentMatcher) -> "StateSyncBuilder":
        return self.add(ConditionsFactory.layer_visible(component))

    def wait(self) -> WaitOutcome:
        if not self.conditions:
            raise ValueError("no wait conditions added")
        return self.engine.wait_for(*self.conditions)

    def wait_for(self) -> bool:
        return self.wait().satisfied

    def wait_for_and_verify(self) -> WaitOutcome:
        outcome = self.wait()
        if not outcome.satisfied:
            raise StateSyncError(outcome)
        return outcome
