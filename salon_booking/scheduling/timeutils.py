from datetime import date, datetime, time, timedelta

MINUTES_PER_DAY = 24 * 60


class ParseError(ValueError):
    """Raised when a clock string is not a valid "HH:mm" value."""

    def __init__(self, value, message: str = "Invalid time format"):
        self.value = value
        super().__init__(f"{message}: {value!r}")


def time_to_minutes(value: str) -> int:
    """
    Convert "HH:mm" (or "HH:mm:ss", seconds ignored) to minutes since midnight.

    "24:00" is accepted as the end of the day so a block can close at midnight.
    """
    if not isinstance(value, str) or ":" not in value:
        raise ParseError(value, "Missing ':' separator")

    parts = value.strip().split(":")
    hours_str, minutes_str = parts[0], parts[1]
    if not (hours_str.isdecimal() and minutes_str.isdecimal()):
        raise ParseError(value, "Non-numeric time")

    hours = int(hours_str)
    minutes = int(minutes_str)

    if hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours > 23:
        raise ParseError(value, "Hour out of range")
    if minutes > 59:
        raise ParseError(value, "Minute out of range")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Inverse of time_to_minutes. Callers keep the value within [0, 1440]."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: datetime, minutes: int) -> datetime:
    return value + timedelta(minutes=minutes)


def at_time(day: date, value: str) -> datetime:
    """Naive local datetime for `day` at the given clock string."""
    minutes = time_to_minutes(value)
    return add_minutes(datetime.combine(day, time.min), minutes)


def is_same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()


def day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday, the convention of stored weekly hours."""
    return (day.weekday() + 1) % 7


def local_minutes(value: datetime) -> int:
    """Wall-clock minutes since midnight, read from the local hour and minute."""
    return value.hour * 60 + value.minute
