"""Flicker-Harness.

Verifies window-manager and layer traces recorded during UI transitions:
- geometry: exact integer rectangle/region algebra
- traces: snapshot model and time-ordered traces
- subjects: per-entry and temporal checks returning CheckResult values
- assertors: scenario-independent assertion templates and the scenario table
- service: detect -> generate -> execute -> aggregate into metrics
- sync: bounded polling until a live device reaches an expected state
"""

__all__ = [
    "assertors",
    "config",
    "geometry",
    "service",
    "subjects",
    "sync",
    "traces",
]
