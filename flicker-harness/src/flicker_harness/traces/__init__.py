"""Snapshot model: timestamps, window/layer snapshots, traces and readers."""

from __future__ import annotations

from flicker_harness.traces.component import (
    IME,
    LAUNCHER,
    NAV_BAR,
    SNAPSHOT,
    SPLASH_SCREEN,
    STATUS_BAR,
    AnyOfComponentMatcher,
    ComponentMatcher,
    ComponentNameMatcher,
    canonical_name,
)
from flicker_harness.traces.layers import Display, Layer, LayerTraceEntry, LayerTraceEntryBuilder
from flicker_harness.traces.reader import ParsedTracesReader, Reader, TraceNotFoundError
from flicker_harness.traces.timestamp import (
    EMPTY_TIMESTAMP,
    MAX_TIMESTAMP,
    MIN_TIMESTAMP,
    Timestamp,
)
from flicker_harness.traces.trace import LayersTrace, Trace, WindowManagerTrace
from flicker_harness.traces.wm import (
    APP_STATE_IDLE,
    APP_STATE_RUNNING,
    ActivityType,
    Rotation,
    WindowManagerState,
    WindowState,
)

__all__ = [
    "APP_STATE_IDLE",
    "APP_STATE_RUNNING",
    "EMPTY_TIMESTAMP",
    "IME",
    "LAUNCHER",
    "MAX_TIMESTAMP",
    "MIN_TIMESTAMP",
    "NAV_BAR",
    "SNAPSHOT",
    "SPLASH_SCREEN",
    "STATUS_BAR",
    "ActivityType",
    "AnyOfComponentMatcher",
    "ComponentMatcher",
    "ComponentNameMatcher",
    "Display",
    "Layer",
    "LayerTraceEntry",
    "LayerTraceEntryBuilder",
    "LayersTrace",
    "ParsedTracesReader",
    "Reader",
    "Rotation",
    "Timestamp",
    "Trace",
    "TraceNotFoundError",
    "WindowManagerState",
    "WindowManagerTrace",
    "WindowState",
    "canonical_name",
]
