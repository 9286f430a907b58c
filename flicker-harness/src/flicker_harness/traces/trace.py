from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, Protocol, Tuple, TypeVar, overload

from flicker_harness.traces.layers import LayerTraceEntry
from flicker_harness.traces.timestamp import Timestamp
from flicker_harness.traces.wm import WindowManagerState


class TraceEntry(Protocol):
    @property
    def timestamp(self) -> Timestamp: ...


T = TypeVar("T", bound=TraceEntry)


class Trace(Generic[T]):
    """Time-ordered, immutable sequence of snapshots."""

    def __init__(self, entries: Iterable[T] = ()) -> None:
        self._entries: Tuple[T, ...] = tuple(entries)
        for i, (prev, cur) in enumerate(zip(self._entries, self._entries[1:]), start=1):
            if cur.timestamp < prev.timestamp:
                raise ValueError(
                    f"trace entries must have non-decreasing timestamps: "
                    f"entry {i} ({cur.timestamp}) < entry {i - 1} ({prev.timestamp})"
                )

    @property
    def entries(self) -> Tuple[T, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[T, ...]: ...

    def __getitem__(self, index):  # type: ignore[no-untyped-def]
        return self._entries[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return type(self) is type(other) and self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def first(self) -> T:
        if not self._entries:
            raise IndexError("trace is empty")
        return self._entries[0]

    def last(self) -> T:
        if not self._entries:
            raise IndexError("trace is empty")
        return self._entries[-1]

    def slice(self, start: Timestamp, end: Timestamp) -> "Trace[T]":
        """Entries within [start, end], as a new trace of the same type."""

        entries = list(self._entries)
        while entries and entries[0].timestamp < start:
            entries.pop(0)
        while entries and entries[-1].timestamp > end:
            entries.pop()
        return type(self)(entries)

    def entry_exactly_at(self, timestamp: Timestamp) -> T:
        for entry in self._entries:
            if entry.timestamp.compare(timestamp) == 0:
                return entry
        raise KeyError(f"no entry exactly at {timestamp}")

    def entry_at_or_before(self, timestamp: Timestamp) -> Optional[T]:
        found: Optional[T] = None
        for entry in self._entries:
            if entry.timestamp > timestamp:
                break
            found = entry
        return found

    def __repr__(self) -> str:
        if not self._entries:
            return f"{type(self).__name__}(empty)"
        return (
            f"{type(self).__name__}(Start: {self._entries[0].timestamp}, "
            f"End: {self._entries[-1].timestamp})"
        )


class WindowManagerTrace(Trace[WindowManagerState]):
    pass


class LayersTrace(Trace[LayerTraceEntry]):
    pass
