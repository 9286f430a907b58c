"""Coverage and relative-position checks over a Region."""

from __future__ import annotations

from typing import Callable, Union

from flicker_harness.geometry import Rect, Region
from flicker_harness.subjects.result import CheckResult
from flicker_harness.traces.timestamp import EMPTY_TIMESTAMP, Timestamp

MSG_ERROR_TOP_POSITION = "Incorrect top position"
MSG_ERROR_LEFT_POSITION = "Incorrect left position"
MSG_ERROR_RIGHT_POSITION = "Incorrect right position"

RegionLike = Union[Region, Rect]


def _as_region(value: RegionLike) -> Region:
    if isinstance(value, Rect):
        return Region.from_rect(value)
    return value


class RegionSubject:
    def __init__(
        self,
        region: RegionLike,
        *,
        timestamp: Timestamp = EMPTY_TIMESTAMP,
        name: str = "region",
    ) -> None:
        self.region = _as_region(region)
        self.timestamp = timestamp
        self.name = name

    def _fail(self, message: str, **facts: object) -> CheckResult:
        return CheckResult.failure(message, self.timestamp, **{"Subject": self.name, **facts})

    # -- coverage -----------------------------------------------------------

    def covers_at_least(self, other: RegionLike) -> CheckResult:
        """Every pixel of `other` is inside this region."""

        expected = _as_region(other)
        uncovered = expected.subtract(self.region)
        if uncovered.is_empty:
            return CheckResult.success()
        return self._fail(
            f"{self.name} doesn't cover at least {expected}. Uncovered region: {uncovered}",
            Actual=self.region,
            Expected=expected,
            Uncovered=uncovered,
        )

    def covers_at_most(self, other: RegionLike) -> CheckResult:
        """No pixel of this region is outside `other`."""

        expected = _as_region(other)
        out_of_bounds = self.region.subtract(expected)
        if out_of_bounds.is_empty:
            return CheckResult.success()
        return self._fail(
            f"{self.name} covers more than {expected}. Out-of-bounds region: {out_of_bounds}",
            Actual=self.region,
            Expected=expected,
            OutOfBounds=out_of_bounds,
        )

    def covers_exactly(self, other: RegionLike) -> CheckResult:
        expected = _as_region(other)
        difference = self.region.xor(expected)
        if difference.is_empty:
            return CheckResult.success()
        return self._fail(
            f"{self.name} doesn't cover exactly {expected}. Difference: {difference}",
            Actual=self.region,
            Expected=expected,
            Difference=difference,
        )

    def overlaps(self, other: RegionLike) -> CheckResult:
        expected = _as_region(other)
        overlap = self.region.intersect(expected)
        if overlap.is_not_empty:
            return CheckResult.success()
        return self._fail(
            f"{self.name} doesn't overlap {expected}. Overlap region: {overlap}",
            Actual=self.region,
            Expected=expected,
        )

    def not_overlaps(self, other: RegionLike) -> CheckResult:
        expected = _as_region(other)
        overlap = self.region.intersect(expected)
        if overlap.is_empty:
            return CheckResult.success()
        return self._fail(
            f"{self.name} overlaps {expected}. Overlap region: {overlap}",
            Actual=self.region,
            Expected=expected,
        )

    def is_empty(self) -> CheckResult:
        if self.region.is_empty:
            return CheckResult.success()
        return self._fail(f"{self.name} is not empty: {self.region}")

    def is_not_empty(self) -> CheckResult:
        if self.region.is_not_empty:
            return CheckResult.success()
        return self._fail(f"{self.name} is empty")

    def is_same_aspect_ratio(self, other: RegionLike, threshold: float = 0.1) -> CheckResult:
        actual = self.region.bounds
        expected = _as_region(other).bounds
        if actual.height == 0 or expected.height == 0:
            return self._fail(f"{self.name} has no height to compute an aspect ratio")
        actual_ratio = actual.width / actual.height
        expected_ratio = expected.width / expected.height
        if abs(actual_ratio - expected_ratio) <= threshold:
            return CheckResult.success()
        return self._fail(
            f"{self.name} aspect ratio {actual_ratio:.3f} differs from {expected_ratio:.3f}",
            Threshold=threshold,
        )

    # -- relative position ---------------------------------------------------

    def _assert_same_horizontal_position(self, other: Region) -> CheckResult:
        actual = self.region.bounds
        expected = other.bounds
        if actual.left != expected.left:
            return self._fail(
                f"{MSG_ERROR_LEFT_POSITION}: {actual.left} != {expected.left}",
                Actual=actual,
                Expected=expected,
            )
        if actual.right != expected.right:
            return self._fail(
                f"{MSG_ERROR_RIGHT_POSITION}: {actual.right} != {expected.right}",
                Actual=actual,
                Expected=expected,
            )
        return CheckResult.success()

    def _compare_top(
        self,
        other: RegionLike,
        relation: str,
        cmp: Callable[[int, int], bool],
    ) -> CheckResult:
        expected = _as_region(other)
        horizontal = self._assert_same_horizontal_position(expected)
        if horizontal.failed:
            return horizontal
        actual_top = self.region.bounds.top
        expected_top = expected.bounds.top
        if cmp(actual_top, expected_top):
            return CheckResult.success()
        return self._fail(
            f"{MSG_ERROR_TOP_POSITION}: expected top {relation} {expected_top}, was {actual_top}",
            Actual=self.region.bounds,
            Expected=expected.bounds,
        )

    def is_higher(self, other: RegionLike) -> CheckResult:
        return self._compare_top(other, "<", lambda a, b: a < b)

    def is_higher_or_equal(self, other: RegionLike) -> CheckResult:
        return self._compare_top(other, "<=", lambda a, b: a <= b)

    def is_lower(self, other: RegionLike) -> CheckResult:
        return self._compare_top(other, ">", lambda a, b: a > b)

    def is_lower_or_equal(self, other: RegionLike) -> CheckResult:
        return self._compare_top(other, ">=", lambda a, b: a >= b)

    def __repr__(self) -> str:
        return f"RegionSubject({self.name}={self.region}, {self.timestamp})"
