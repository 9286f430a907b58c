from __future__ import annotations

import pytest

from flicker_harness.traces import EMPTY_TIMESTAMP, MAX_TIMESTAMP, MIN_TIMESTAMP, Timestamp


def test_timestamps_order_on_first_shared_clock() -> None:
    a = Timestamp(elapsed_nanos=10, unix_nanos=500)
    b = Timestamp(elapsed_nanos=20, unix_nanos=100)
    # elapsed wins over unix when both carry it
    assert a < b

    c = Timestamp(system_uptime_nanos=5, unix_nanos=900)
    # only unix is shared between a and c
    assert a < c


def test_timestamps_without_shared_clock_are_rejected() -> None:
    elapsed = Timestamp.from_elapsed(10)
    uptime = Timestamp.from_system_uptime(10)
    with pytest.raises(ValueError):
        elapsed.compare(uptime)
    with pytest.raises(ValueError):
        _ = elapsed < uptime


def test_min_and_max_compare_against_any_clock() -> None:
    for t in [
        Timestamp.from_elapsed(42),
        Timestamp.from_system_uptime(42),
        Timestamp.from_unix(42),
    ]:
        assert MIN_TIMESTAMP < t < MAX_TIMESTAMP


def test_empty_timestamp_and_accessors() -> None:
    assert EMPTY_TIMESTAMP.is_empty
    assert Timestamp.EMPTY is EMPTY_TIMESTAMP
    t = Timestamp.from_unix("1700000000000000000")
    assert t.has_unix and not t.has_elapsed and not t.has_system_uptime
    assert str(EMPTY_TIMESTAMP) == "<NO TIMESTAMP>"
    assert str(Timestamp.from_elapsed(5)) == "elapsed=5ns"


def test_layer_clock_sets_uptime_and_unix_only_with_offset() -> None:
    with_offset = Timestamp.from_layer_clock("100", "500")
    assert with_offset.system_uptime_nanos == 100
    assert with_offset.unix_nanos == 600
    assert not with_offset.has_elapsed

    without_offset = Timestamp.from_layer_clock("100")
    assert without_offset.system_uptime_nanos == 100
    assert not without_offset.has_unix


def test_equal_on_shared_clock_is_neither_before_nor_after() -> None:
    a = Timestamp(elapsed_nanos=30, unix_nanos=100)
    b = Timestamp(elapsed_nanos=30, unix_nanos=200)

    assert a != b
    assert a.compare(b) == 0
    assert not a > b and not b > a
    assert not a < b and not b < a
    assert a <= b and b >= a


def test_layer_clock_orders_against_wm_clock_via_unix() -> None:
    wm = Timestamp(elapsed_nanos=30, unix_nanos=1030)
    layer = Timestamp.from_layer_clock(30, 1000)

    assert layer.compare(wm) == 0
    assert layer <= wm and layer >= wm
    assert Timestamp.from_layer_clock(20, 1000) < wm
