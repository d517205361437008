import logging
from datetime import datetime
from typing import Iterable

from salon_booking.scheduling.intervals import TimeInterval
from salon_booking.scheduling.timeutils import MINUTES_PER_DAY, local_minutes, minutes_to_time
from salon_booking.scheduling.types import SlotVerdict, VerdictReason

logger = logging.getLogger(__name__)


def check_slot(start: datetime, duration_minutes: int, intervals: Iterable[TimeInterval]) -> SlotVerdict:
    """
    Decide whether an appointment fits entirely inside one valid interval.

    The start is read as local wall-clock time. An appointment reaching or
    crossing midnight has its end clamped to 1440 and is always rejected,
    since appointments never span two calendar days.
    """
    intervals = tuple(intervals)
    start_minutes = local_minutes(start)
    end_minutes = start_minutes + duration_minutes
    crosses_midnight = end_minutes >= MINUTES_PER_DAY
    if crosses_midnight:
        end_minutes = MINUTES_PER_DAY

    def verdict(valid, reason):
        return SlotVerdict(valid, reason, start_minutes, end_minutes, intervals)

    if not intervals:
        return verdict(False, VerdictReason.NO_INTERVALS)
    if crosses_midnight:
        return verdict(False, VerdictReason.CROSSES_MIDNIGHT)

    for interval in intervals:
        if start_minutes >= interval.start_minutes and end_minutes <= interval.end_minutes:
            return verdict(True, VerdictReason.OK)

    # Pick the most specific reason for diagnostics
    containing = [i for i in intervals if i.start_minutes <= start_minutes < i.end_minutes]
    if containing:
        reason = VerdictReason.ENDS_AFTER_CLOSE
    elif start_minutes < min(i.start_minutes for i in intervals):
        reason = VerdictReason.STARTS_BEFORE_OPEN
    else:
        reason = VerdictReason.OUTSIDE_INTERVALS

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Rejected %s-%s (%s min): %s",
            minutes_to_time(start_minutes), minutes_to_time(end_minutes),
            duration_minutes, reason.value
        )
    return verdict(False, reason)


def is_slot_valid(start: datetime, duration_minutes: int, intervals: Iterable[TimeInterval]) -> bool:
    return check_slot(start, duration_minutes, intervals).valid
