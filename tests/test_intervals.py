import pytest

from salon_booking.scheduling.intervals import (
    TimeInterval, format_intervals, intersect, merge_intervals, subtract
)

I = TimeInterval

PAIRS = [
    (I("09:00", "18:00"), I("09:00", "13:00")),
    (I("09:00", "12:00"), I("11:00", "15:00")),
    (I("08:00", "10:00"), I("10:00", "12:00")),
    (I("08:00", "09:00"), I("14:00", "19:00")),
    (I("10:00", "11:30"), I("07:00", "20:00")),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_intersect_is_commutative(a, b):
    assert intersect(a, b) == intersect(b, a)


@pytest.mark.parametrize("a,_", PAIRS)
def test_intersect_with_itself(a, _):
    assert intersect(a, a) == a


def test_intersect_overlap():
    assert intersect(I("09:00", "12:00"), I("11:00", "15:00")) == I("11:00", "12:00")
    assert intersect(I("10:00", "11:30"), I("07:00", "20:00")) == I("10:00", "11:30")


def test_intersect_touching_or_disjoint_is_none():
    # Zero-length overlap is not an interval
    assert intersect(I("08:00", "10:00"), I("10:00", "12:00")) is None
    assert intersect(I("08:00", "09:00"), I("14:00", "19:00")) is None


def test_merge_intervals_merges_touching_and_overlapping():
    merged = merge_intervals([
        I("11:00", "13:00"), I("09:00", "10:00"), I("15:00", "16:00"), I("10:00", "11:30"),
    ])
    assert merged == [I("09:00", "13:00"), I("15:00", "16:00")]


def test_merge_intervals_keeps_contained_run():
    assert merge_intervals([I("09:00", "18:00"), I("10:00", "11:00")]) == [I("09:00", "18:00")]


def test_merge_intervals_empty():
    assert merge_intervals([]) == []


def test_merge_output_sorted_and_disjoint():
    merged = merge_intervals([
        I("14:00", "15:00"), I("08:00", "08:30"), I("08:15", "09:00"),
        I("16:00", "17:00"), I("14:30", "16:00"), I("12:00", "12:45"),
    ])
    for current, following in zip(merged, merged[1:]):
        assert current.start_minutes < following.start_minutes
        assert current.end_minutes < following.start_minutes
    assert merged == [I("08:00", "09:00"), I("12:00", "12:45"), I("14:00", "17:00")]


def test_subtract_splits_straddled_interval():
    assert subtract(I("09:00", "18:00"), 720, 780) == [I("09:00", "12:00"), I("13:00", "18:00")]


def test_subtract_drops_covered_interval():
    assert subtract(I("12:00", "13:00"), 660, 840) == []


def test_subtract_trims_partial_overlap():
    assert subtract(I("09:00", "12:00"), 600, 780) == [I("09:00", "10:00")]
    assert subtract(I("13:00", "18:00"), 600, 840) == [I("14:00", "18:00")]


def test_subtract_without_overlap_keeps_interval():
    assert subtract(I("09:00", "12:00"), 720, 780) == [I("09:00", "12:00")]


def test_interval_minutes_and_format():
    interval = I("09:15", "10:45")
    assert interval.start_minutes == 555
    assert interval.duration_minutes == 90
    assert format_intervals([interval, I("13:00", "18:00")]) == "09:15-10:45, 13:00-18:00"
