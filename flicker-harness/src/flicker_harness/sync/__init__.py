"""Bounded polling until a live device reaches an expected state."""

from __future__ import annotations

from flicker_harness.sync.conditions import ConditionsFactory, WaitCondition
from flicker_harness.sync.state_helper import (
    DeviceStateDump,
    StateSyncBuilder,
    StateSyncEngine,
    StateSyncError,
    SyncState,
    WaitOutcome,
)

__all__ = [
    "ConditionsFactory",
    "DeviceStateDump",
    "StateSyncBuilder",
    "StateSyncEngine",
    "StateSyncError",
    "SyncState",
    "WaitCondition",
    "WaitOutcome",
]
