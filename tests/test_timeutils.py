import pytest
from datetime import date, datetime

from salon_booking.scheduling.timeutils import (
    ParseError, add_minutes, at_time, day_of_week, is_same_day,
    minutes_to_time, time_to_minutes
)


@pytest.mark.parametrize("value,expected", [
    ("00:00", 0),
    ("09:30", 570),
    ("17:45", 1065),
    ("09:30:45", 570),  # seconds are ignored
    ("24:00", 1440),
])
def test_time_to_minutes(value, expected):
    assert time_to_minutes(value) == expected


@pytest.mark.parametrize("value", ["0930", "ab:cd", "9h:30", "", "25:00", "10:60", "24:30", "²:00", "9:²"])
def test_time_to_minutes_rejects_malformed_values(value):
    with pytest.raises(ParseError):
        time_to_minutes(value)


def test_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        time_to_minutes("nope")


def test_minutes_to_time_is_zero_padded():
    assert minutes_to_time(0) == "00:00"
    assert minutes_to_time(545) == "09:05"
    assert minutes_to_time(1080) == "18:00"


def test_add_minutes_returns_new_value():
    original = datetime(2025, 3, 3, 9, 0)
    shifted = add_minutes(original, 45)

    assert shifted == datetime(2025, 3, 3, 9, 45)
    assert original == datetime(2025, 3, 3, 9, 0)


def test_at_time_builds_local_datetime():
    assert at_time(date(2025, 3, 3), "17:30") == datetime(2025, 3, 3, 17, 30)
    assert at_time(date(2025, 3, 3), "24:00") == datetime(2025, 3, 4, 0, 0)


def test_day_of_week_starts_on_sunday():
    assert day_of_week(date(2025, 3, 2)) == 0  # Sunday
    assert day_of_week(date(2025, 3, 3)) == 1  # Monday
    assert day_of_week(date(2025, 3, 8)) == 6  # Saturday


def test_is_same_day():
    assert is_same_day(datetime(2025, 3, 3, 0, 1), datetime(2025, 3, 3, 23, 59))
    assert not is_same_day(datetime(2025, 3, 3, 23, 59), datetime(2025, 3, 4, 0, 0))
