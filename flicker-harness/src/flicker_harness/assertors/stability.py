from __future__ import annotations

from enum import Enum


class AssertionInvocationGroup(str, Enum):
    """How an assertion failure is treated by the host."""

    BLOCKING = "BLOCKING"
    NON_BLOCKING = "NON_BLOCKING"

    @classmethod
    def parse(cls, value: "str | AssertionInvocationGroup") -> "AssertionInvocationGroup":
        if isinstance(value, AssertionInvocationGroup):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ValueError(
                f"unknown stability group: {value!r} (expected one of {[g.value for g in cls]})"
            ) from e
