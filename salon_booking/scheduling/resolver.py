import logging
from datetime import date
from typing import Iterable, List, Optional

from salon_booking.scheduling.intervals import (
    TimeInterval, format_intervals, intersect, merge_intervals, subtract
)
from salon_booking.scheduling.timeutils import day_of_week as weekday_of
from salon_booking.scheduling.types import (
    ClosureException, ScheduleLookup, ScheduleState, WeeklyHourBlock
)

logger = logging.getLogger(__name__)


def salon_blocks_for_day(salon_hours: Iterable[WeeklyHourBlock], day_of_week: int) -> List[WeeklyHourBlock]:
    return [b for b in salon_hours if b.day_of_week == day_of_week and b.is_open]


def resolve_valid_intervals(
    salon_hours: Iterable[WeeklyHourBlock],
    stylist_schedule: ScheduleLookup,
    day_of_week: int,
    closures: Iterable[ClosureException] = (),
    on_date: Optional[date] = None,
    stylist_id: Optional[str] = None,
) -> List[TimeInterval]:
    """
    Compute the bookable intervals of one day for one stylist.

    The result is the intersection of salon and stylist hours for the weekday,
    merged, minus any closure for `on_date` that is salon-wide or targets
    `stylist_id`. An undetermined stylist schedule (ScheduleLookup.failed())
    never yields availability.
    """
    salon_day = salon_blocks_for_day(salon_hours, day_of_week)
    if not salon_day:
        logger.debug("Salon closed on weekday %s", day_of_week)
        return []

    if stylist_schedule.state == ScheduleState.FAILED:
        logger.debug("Stylist %s schedule unknown, rejecting weekday %s", stylist_id, day_of_week)
        return []

    stylist_day = [b for b in stylist_schedule.blocks if b.day_of_week == day_of_week]

    if not stylist_day:
        # No day-specific override: the stylist follows salon hours
        intervals = sorted((b.to_interval() for b in salon_day), key=lambda i: i.start_minutes)
    else:
        open_blocks = [b for b in stylist_day if b.is_open]
        if not open_blocks:
            logger.debug("Stylist %s is off on weekday %s", stylist_id, day_of_week)
            return []

        intersections = []
        for salon_block in salon_day:
            for stylist_block in open_blocks:
                overlap = intersect(salon_block.to_interval(), stylist_block.to_interval())
                if overlap is not None:
                    intersections.append(overlap)
        intervals = merge_intervals(intersections)

    if on_date is not None:
        intervals = apply_closures(intervals, closures, on_date, stylist_id)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Valid intervals for stylist %s on weekday %s: [%s]",
            stylist_id, day_of_week, format_intervals(intervals)
        )
    return intervals


def apply_closures(
    intervals: List[TimeInterval],
    closures: Iterable[ClosureException],
    on_date: date,
    stylist_id: Optional[str] = None,
) -> List[TimeInterval]:
    """Subtract matching closures; a matching full-day closure empties the day."""
    result = list(intervals)
    for closure in closures:
        if not closure.applies_to(on_date, stylist_id):
            continue
        if closure.is_full_day:
            logger.debug("Full-day closure on %s (%s)", on_date, closure.label or "no label")
            return []
        start, end = closure.closed_range()
        pieces = []
        for interval in result:
            pieces.extend(subtract(interval, start, end))
        result = pieces
    return result


def resolve_for_date(
    salon_hours: Iterable[WeeklyHourBlock],
    stylist_schedule: ScheduleLookup,
    on_date: date,
    closures: Iterable[ClosureException] = (),
    stylist_id: Optional[str] = None,
) -> List[TimeInterval]:
    return resolve_valid_intervals(
        salon_hours, stylist_schedule, weekday_of(on_date), closures, on_date, stylist_id
    )
