from __future__ import annotations

from flicker_harness.geometry import Rect, Region


def test_region_from_rect_round_trips_to_rect() -> None:
    for r in [Rect(0, 0, 1, 1), Rect(-5, 3, 20, 40), Rect(0, 0, 1080, 2340)]:
        assert Region.from_rect(r).to_rect() == r


def test_empty_rect_gives_empty_region_with_zero_bounds() -> None:
    region = Region.from_rect(Rect(10, 10, 0, 0))
    assert region.is_empty
    assert region.bounds == Rect(0, 0, 0, 0)
    assert region == Region.EMPTY


def test_region_canonical_form_merges_touching_rects() -> None:
    side_by_side = Region.from_rects([Rect(0, 0, 1, 1), Rect(1, 0, 2, 1)])
    stacked = Region.from_rects([Rect(0, 0, 2, 1), Rect(0, 1, 2, 2)])

    assert side_by_side == Region.from_rect(Rect(0, 0, 2, 1))
    assert stacked == Region.from_rect(Rect(0, 0, 2, 2))
    assert stacked.rects == (Rect(0, 0, 2, 2),)


def test_region_boolean_operations() -> None:
    a = Region.from_rect(Rect(0, 0, 2, 2))
    b = Region.from_rect(Rect(1, 1, 3, 3))

    assert (a | b).area == 7
    assert (a & b) == Region.from_rect(Rect(1, 1, 2, 2))
    assert (a - b).rects == (Rect(0, 0, 2, 1), Rect(0, 1, 1, 2))
    assert (a ^ b).rects == (
        Rect(0, 0, 2, 1),
        Rect(0, 1, 1, 2),
        Rect(2, 1, 3, 2),
        Rect(1, 2, 3, 3),
    )
    assert (a ^ b).area == 6


def test_region_contains_and_overlaps() -> None:
    screen = Region.from_rect(Rect(0, 0, 100, 100))
    assert screen.contains(Rect(10, 10, 20, 20))
    assert not screen.contains(Rect(90, 90, 110, 110))
    assert screen.contains(Region())
    assert screen.overlaps(Rect(90, 90, 110, 110))
    assert not screen.overlaps(Rect(100, 0, 110, 10))


def test_region_str_lists_banded_rects() -> None:
    region = Region.from_rects([Rect(0, 0, 2, 1), Rect(0, 1, 1, 2)])
    assert str(region) == "Region((0,0,2,1)(0,1,1,2))"
    assert str(Region()) == "Region()"
    assert region.bounds == Rect(0, 0, 2, 2)
