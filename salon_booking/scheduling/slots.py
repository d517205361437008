from datetime import date
from typing import Iterable, List

from salon_booking.scheduling.intervals import TimeInterval
from salon_booking.scheduling.timeutils import add_minutes, at_time, minutes_to_time
from salon_booking.scheduling.types import Slot

DEFAULT_STEP_MINUTES = 15


def generate_slots(
    base_date: date,
    intervals: Iterable[TimeInterval],
    duration_minutes: int,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> List[Slot]:
    """
    Every start time, spaced by `step_minutes`, at which a service of
    `duration_minutes` fits entirely inside one of the intervals.

    Intervals are walked independently and in the given order, so a slot never
    spans two intervals.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")

    slots: List[Slot] = []
    for interval in intervals:
        current = interval.start_minutes
        end = interval.end_minutes
        while current + duration_minutes <= end:
            label = minutes_to_time(current)
            start = at_time(base_date, label)
            slots.append(Slot(label=label, start=start, end=add_minutes(start, duration_minutes)))
            current += step_minutes
    return slots
