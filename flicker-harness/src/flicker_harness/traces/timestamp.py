"""Trace timestamps.

A snapshot can be stamped by up to three independent clocks:

- elapsed (monotonic, includes deep sleep)
- system uptime (monotonic, excludes deep sleep)
- unix (wall clock)

Any of them may be unset; 0 is the "empty" sentinel. Two timestamps are
ordered by the first clock (in the order above) that is set on both sides.
Comparing timestamps that share no clock is rejected with ValueError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

NANOS_PER_MS = 1_000_000
_INT64_MAX = (1 << 63) - 1

_EMPTY = 0
_AXES: Tuple[str, ...] = ("elapsed_nanos", "system_uptime_nanos", "unix_nanos")


def _parse_nanos(value: "int | str | None") -> int:
    if value is None:
        return _EMPTY
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return _EMPTY
    return int(value)


@dataclass(frozen=True)
class Timestamp:
    elapsed_nanos: int = _EMPTY
    system_uptime_nanos: int = _EMPTY
    unix_nanos: int = _EMPTY

    @classmethod
    def from_elapsed(cls, elapsed_nanos: "int | str") -> "Timestamp":
        return cls(elapsed_nanos=_parse_nanos(elapsed_nanos))

    @classmethod
    def from_system_uptime(cls, system_uptime_nanos: "int | str") -> "Timestamp":
        return cls(system_uptime_nanos=_parse_nanos(system_uptime_nanos))

    @classmethod
    def from_unix(cls, unix_nanos: "int | str") -> "Timestamp":
        return cls(unix_nanos=_parse_nanos(unix_nanos))

    @classmethod
    def from_layer_clock(
        cls,
        elapsed_nanos: "int | str",
        real_to_elapsed_offset_nanos: "int | str | None" = None,
    ) -> "Timestamp":
        """Build a layers (surface flinger) timestamp.

        Surface flinger stamps entries with system-uptime; the unix clock is only
        known when the trace carries the real-to-elapsed offset.
        """

        uptime = _parse_nanos(elapsed_nanos)
        offset = _parse_nanos(real_to_elapsed_offset_nanos)
        unix = uptime + offset if offset != _EMPTY else _EMPTY
        return cls(system_uptime_nanos=uptime, unix_nanos=unix)

    @property
    def has_elapsed(self) -> bool:
        return self.elapsed_nanos != _EMPTY

    @property
    def has_system_uptime(self) -> bool:
        return self.system_uptime_nanos != _EMPTY

    @property
    def has_unix(self) -> bool:
        return self.unix_nanos != _EMPTY

    @property
    def is_empty(self) -> bool:
        return not (self.has_elapsed or self.has_system_uptime or self.has_unix)

    def _shared_axis(self, other: "Timestamp") -> Optional[str]:
        for axis in _AXES:
            if getattr(self, axis) != _EMPTY and getattr(other, axis) != _EMPTY:
                return axis
        return None

    def compare(self, other: "Timestamp") -> int:
        """Return -1/0/1 comparing on the first clock both timestamps carry."""

        if self is other or self == other:
            return 0
        axis = self._shared_axis(other)
        if axis is None:
            raise ValueError(f"Cannot compare timestamps with no common clock: {self} vs {other}")
        a = getattr(self, axis)
        b = getattr(other, axis)
        return (a > b) - (a < b)

    # `==` is structural (all clocks); ordering compares the shared clock.
    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        if self.is_empty:
            return "<NO TIMESTAMP>"
        if self == MIN_TIMESTAMP:
            return "<MIN>"
        if self == MAX_TIMESTAMP:
            return "<MAX>"
        parts = []
        if self.has_elapsed:
            parts.append(f"elapsed={self.elapsed_nanos}ns")
        if self.has_system_uptime:
            parts.append(f"uptime={self.system_uptime_nanos}ns")
        if self.has_unix:
            parts.append(f"unix={self.unix_nanos}ns")
        return " ".join(parts)


EMPTY_TIMESTAMP = Timestamp()
MIN_TIMESTAMP = Timestamp(1, 1, 1)
MAX_TIMESTAMP = Timestamp(_INT64_MAX, _INT64_MAX, _INT64_MAX)

Timestamp.EMPTY = EMPTY_TIMESTAMP  # type: ignore[attr-defined]
Timestamp.MIN = MIN_TIMESTAMP  # type: ignore[attr-defined]
Timestamp.MAX = MAX_TIMESTAMP  # type: ignore[attr-defined]
