from dataclasses import dataclass
from typing import Iterable, List, Optional

from salon_booking.scheduling.timeutils import minutes_to_time, time_to_minutes


@dataclass(frozen=True)
class TimeInterval:
    """Same-day [start, end) range of wall-clock times, always start < end."""

    start: str
    end: str

    @classmethod
    def from_minutes(cls, start: int, end: int) -> "TimeInterval":
        return cls(start=minutes_to_time(start), end=minutes_to_time(end))

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


def intersect(a: TimeInterval, b: TimeInterval) -> Optional[TimeInterval]:
    """
    Overlap of two intervals, or None when they do not overlap.

    Zero-length overlaps (one interval ending where the other starts) are not
    valid intervals.
    """
    start = max(a.start_minutes, b.start_minutes)
    end = min(a.end_minutes, b.end_minutes)
    if start < end:
        return TimeInterval.from_minutes(start, end)
    return None


def merge_intervals(intervals: Iterable[TimeInterval]) -> List[TimeInterval]:
    """
    Merge intervals into a minimal sorted set of disjoint intervals.

    Touching intervals (next start == current end) are merged as contiguous.
    """
    items = sorted(intervals, key=lambda i: i.start_minutes)
    if not items:
        return []

    merged: List[TimeInterval] = []
    cur_start, cur_end = items[0].start_minutes, items[0].end_minutes

    for item in items[1:]:
        if item.start_minutes <= cur_end:
            cur_end = max(cur_end, item.end_minutes)
        else:
            merged.append(TimeInterval.from_minutes(cur_start, cur_end))
            cur_start, cur_end = item.start_minutes, item.end_minutes

    merged.append(TimeInterval.from_minutes(cur_start, cur_end))
    return merged


def subtract(interval: TimeInterval, start: int, end: int) -> List[TimeInterval]:
    """
    Remove the closed range [start, end) (in minutes) from `interval`.

    Returns no piece when the interval is fully covered, two pieces when the
    range sits strictly inside it, and one trimmed piece otherwise.
    """
    if end <= interval.start_minutes or start >= interval.end_minutes:
        return [interval]

    pieces = []
    if start > interval.start_minutes:
        pieces.append(TimeInterval.from_minutes(interval.start_minutes, start))
    if end < interval.end_minutes:
        pieces.append(TimeInterval.from_minutes(end, interval.end_minutes))
    return pieces


def format_intervals(intervals: Iterable[TimeInterval]) -> str:
    return ", ".join(str(i) for i in intervals)
