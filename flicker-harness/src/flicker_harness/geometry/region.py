"""Exact integer region algebra.

A Region is stored in canonical y-banded form: a sequence of horizontal bands
(top, bottom, x-intervals) where

- bands are sorted top to bottom and never overlap,
- intervals inside a band are sorted, disjoint and never touch,
- two vertically adjacent bands never carry identical intervals.

Because the form is canonical, two regions covering the same pixels compare
equal and produce the same rectangle list, which is what coverage checks rely
on. All arithmetic is on ints; there is no tolerance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence, Tuple

from flicker_harness.geometry.rect import Rect

Interval = Tuple[int, int]
Band = Tuple[int, int, Tuple[Interval, ...]]

_BoolOp = Callable[[bool, bool], bool]

_OP_UNION: _BoolOp = lambda a, b: a or b  # noqa: E731
_OP_INTERSECT: _BoolOp = lambda a, b: a and b  # noqa: E731
_OP_SUBTRACT: _BoolOp = lambda a, b: a and not b  # noqa: E731
_OP_XOR: _BoolOp = lambda a, b: a != b  # noqa: E731


def _combine_intervals(
    a: Sequence[Interval], b: Sequence[Interval], op: _BoolOp
) -> Tuple[Interval, ...]:
    edges = sorted({x for iv in a for x in iv} | {x for iv in b for x in iv})
    out: list[Interval] = []
    for x0, x1 in zip(edges, edges[1:]):
        in_a = any(lo <= x0 < hi for lo, hi in a)
        in_b = any(lo <= x0 < hi for lo, hi in b)
        if not op(in_a, in_b):
            continue
        if out and out[-1][1] == x0:
            out[-1] = (out[-1][0], x1)
        else:
            out.append((x0, x1))
    return tuple(out)


def _intervals_at(bands: Sequence[Band], y: int) -> Tuple[Interval, ...]:
    for top, bottom, intervals in bands:
        if top <= y < bottom:
            return intervals
    return ()


def _combine_bands(a: Sequence[Band], b: Sequence[Band], op: _BoolOp) -> Tuple[Band, ...]:
    ys = sorted({y for band in a for y in band[:2]} | {y for band in b for y in band[:2]})
    out: list[Band] = []
    for y0, y1 in zip(ys, ys[1:]):
        intervals = _combine_intervals(_intervals_at(a, y0), _intervals_at(b, y0), op)
        if not intervals:
            continue
        if out and out[-1][1] == y0 and out[-1][2] == intervals:
            out[-1] = (out[-1][0], y1, intervals)
        else:
            out.append((y0, y1, intervals))
    return tuple(out)


@dataclass(frozen=True)
class Region:
    """Immutable set of pixels, represented as canonical bands."""

    bands: Tuple[Band, ...] = ()

    @classmethod
    def from_rect(cls, rect: Rect) -> "Region":
        if rect.is_empty:
            return cls()
        return cls(((rect.top, rect.bottom, ((rect.left, rect.right),)),))

    @classmethod
    def from_rects(cls, rects: Iterable[Rect]) -> "Region":
        out = cls()
        for rect in rects:
            out = out.union(cls.from_rect(rect))
        return out

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> "Region":
        return cls.from_rect(Rect.from_ltrb(left, top, right, bottom))

    @property
    def is_empty(self) -> bool:
        return not self.bands

    @property
    def is_not_empty(self) -> bool:
        return not self.is_empty

    @property
    def rects(self) -> Tuple[Rect, ...]:
        return tuple(
            Rect(left, top, right, bottom)
            for top, bottom, intervals in self.bands
            for left, right in intervals
        )

    def __iter__(self) -> Iterator[Rect]:
        return iter(self.rects)

    @property
    def bounds(self) -> Rect:
        """Smallest rect enclosing the region; (0,0,0,0) when empty."""

        if self.is_empty:
            return Rect()
        left = min(iv[0] for _, _, intervals in self.bands for iv in intervals)
        right = max(iv[1] for _, _, intervals in self.bands for iv in intervals)
        return Rect(left, self.bands[0][0], right, self.bands[-1][1])

    def to_rect(self) -> Rect:
        return self.bounds

    @property
    def area(self) -> int:
        return sum(r.area for r in self.rects)

    def _coerce(self, other: "Region | Rect") -> "Region":
        if isinstance(other, Rect):
            return Region.from_rect(other)
        return other

    def union(self, other: "Region | Rect") -> "Region":
        return Region(_combine_bands(self.bands, self._coerce(other).bands, _OP_UNION))

    def intersect(self, other: "Region | Rect") -> "Region":
        return Region(_combine_bands(self.bands, self._coerce(other).bands, _OP_INTERSECT))

    def subtract(self, other: "Region | Rect") -> "Region":
        return Region(_combine_bands(self.bands, self._coerce(other).bands, _OP_SUBTRACT))

    def xor(self, other: "Region | Rect") -> "Region":
        return Region(_combine_bands(self.bands, self._coerce(other).bands, _OP_XOR))

    def contains(self, other: "Region | Rect") -> bool:
        return self._coerce(other).subtract(self).is_empty

    def overlaps(self, other: "Region | Rect") -> bool:
        return self.intersect(other).is_not_empty

    __or__ = union
    __and__ = intersect
    __sub__ = subtract
    __xor__ = xor

    def __str__(self) -> str:
        return "Region(" + "".join(str(r) for r in self.rects) + ")"


Region.EMPTY = Region()  # type: ignore[attr-defined]
