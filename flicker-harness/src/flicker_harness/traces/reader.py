"""Trace reader interface.

Acquiring and decoding traces is done by external collaborators; the engine
only needs something that hands back typed traces. `ParsedTracesReader` wraps
traces that are already in memory (decoded elsewhere, or built by tests).
"""

from __future__ import annotations

from typing import Optional, Protocol

from flicker_harness.traces.timestamp import Timestamp
from flicker_harness.traces.trace import LayersTrace, WindowManagerTrace


class TraceNotFoundError(FileNotFoundError):
    """Raised when a requested trace is not part of the archive."""

    def __init__(self, trace_name: str, artifact_path: str = "") -> None:
        self.trace_name = trace_name
        self.artifact_path = artifact_path
        where = f" in {artifact_path}" if artifact_path else ""
        super().__init__(f"{trace_name} not found{where}")


class Reader(Protocol):
    @property
    def artifact_path(self) -> str: ...

    def read_wm_trace(self) -> WindowManagerTrace: ...

    def read_layers_trace(self) -> LayersTrace: ...

    def slice(self, start: Timestamp, end: Timestamp) -> "Reader": ...


class ParsedTracesReader:
    def __init__(
        self,
        *,
        wm_trace: Optional[WindowManagerTrace] = None,
        layers_trace: Optional[LayersTrace] = None,
        artifact_path: str = "",
    ) -> None:
        self._wm_trace = wm_trace
        self._layers_trace = layers_trace
        self._artifact_path = str(artifact_path)

    @property
    def artifact_path(self) -> str:
        return self._artifact_path

    def read_wm_trace(self) -> WindowManagerTrace:
        if self._wm_trace is None:
            raise TraceNotFoundError("wm_trace", self._artifact_path)
        return self._wm_trace

    def read_layers_trace(self) -> LayersTrace:
        if self._layers_trace is None:
            raise TraceNotFoundError("layers_trace", self._artifact_path)
        return self._layers_trace

    def slice(self, start: Timestamp, end: Timestamp) -> "ParsedTracesReader":
        wm = self._wm_trace.slice(start, end) if self._wm_trace is not None else None
        layers = self._layers_trace.slice(start, end) if self._layers_trace is not None else None
        return ParsedTracesReader(
            wm_trace=wm,  # type: ignore[arg-type]
            layers_trace=layers,  # type: ignore[arg-type]
            artifact_path=self._artifact_path,
        )
