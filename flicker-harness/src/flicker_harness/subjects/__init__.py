"""Subject layer.

Subjects wrap a snapshot or a trace and evaluate checks into CheckResult
values; failures carry the offending entry's timestamp and the violated
region/ordering.
"""

from __future__ import annotations

from flicker_harness.subjects.entry import LayerEntrySubject, NamedCheck, WindowStateSubject
from flicker_harness.subjects.region import (
    MSG_ERROR_LEFT_POSITION,
    MSG_ERROR_RIGHT_POSITION,
    MSG_ERROR_TOP_POSITION,
    RegionSubject,
)
from flicker_harness.subjects.result import CheckFailure, CheckResult, FlickerSubjectError
from flicker_harness.subjects.trace import (
    STRICT,
    GapPolicy,
    LayersTraceSubject,
    TraceSubject,
    WindowManagerTraceSubject,
)

__all__ = [
    "MSG_ERROR_LEFT_POSITION",
    "MSG_ERROR_RIGHT_POSITION",
    "MSG_ERROR_TOP_POSITION",
    "STRICT",
    "CheckFailure",
    "CheckResult",
    "FlickerSubjectError",
    "GapPolicy",
    "LayerEntrySubject",
    "LayersTraceSubject",
    "NamedCheck",
    "RegionSubject",
    "TraceSubject",
    "WindowManagerTraceSubject",
    "WindowStateSubject",
]
