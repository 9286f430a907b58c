from __future__ import annotations

from flicker_harness.geometry import Rect


def test_rect_dimensions_and_emptiness() -> None:
    r = Rect.from_ltrb(10, 20, 110, 70)
    assert r.width == 100
    assert r.height == 50
    assert r.area == 5000
    assert r.is_not_empty

    assert Rect().is_empty
    assert Rect(5, 5, 5, 10).is_empty
    # inverted rects cover nothing
    assert Rect(10, 10, 0, 0).is_empty
    assert Rect(10, 10, 0, 0).area == 0


def test_rect_contains_and_intersection() -> None:
    outer = Rect(0, 0, 100, 100)
    inner = Rect(10, 10, 20, 20)
    assert outer.contains(inner)
    assert not inner.contains(outer)
    assert outer.contains(Rect())

    assert outer.intersection(Rect(50, 50, 150, 150)) == Rect(50, 50, 100, 100)
    assert outer.intersection(Rect(100, 0, 200, 100)) is None
    assert not outer.intersects(Rect(100, 0, 200, 100))


def test_rect_str_is_ltrb() -> None:
    assert str(Rect(0, 1, 2, 3)) == "(0,1,2,3)"
