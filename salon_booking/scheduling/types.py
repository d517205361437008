from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple

from salon_booking.scheduling.intervals import TimeInterval
from salon_booking.scheduling.timeutils import MINUTES_PER_DAY, time_to_minutes

ANY_STYLIST = "none"


@dataclass(frozen=True)
class WeeklyHourBlock:
    """Opening (salon) or working (stylist) hours for one weekday, 0 = Sunday."""

    day_of_week: int
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_closed: bool = False

    @property
    def is_open(self) -> bool:
        return not self.is_closed and bool(self.open_time) and bool(self.close_time)

    def to_interval(self) -> TimeInterval:
        # Stored values may carry seconds ("09:00:00") or skip zero-padding ("9:00")
        return TimeInterval.from_minutes(time_to_minutes(self.open_time), time_to_minutes(self.close_time))


@dataclass(frozen=True)
class ClosureException:
    """
    Date-specific closure, salon-wide when stylist_id is None.

    No start/end means the whole day is closed. A single missing bound
    stretches to the start or end of the day.
    """

    date: date
    stylist_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    label: str = ""

    @property
    def is_full_day(self) -> bool:
        return not self.start_time and not self.end_time

    def applies_to(self, on_date: date, stylist_id: Optional[str]) -> bool:
        if self.date != on_date:
            return False
        return self.stylist_id is None or self.stylist_id == stylist_id

    def closed_range(self) -> Tuple[int, int]:
        start = time_to_minutes(self.start_time) if self.start_time else 0
        end = time_to_minutes(self.end_time) if self.end_time else MINUTES_PER_DAY
        return start, end


class ScheduleState(str, Enum):
    FAILED = "failed"
    NOT_CONFIGURED = "not_configured"
    CONFIGURED = "configured"


@dataclass(frozen=True)
class ScheduleLookup:
    """
    Outcome of fetching a stylist's weekly hours.

    FAILED means the schedule could not be determined and always resolves to
    no availability. NOT_CONFIGURED means the stylist follows salon hours.
    """

    state: ScheduleState
    blocks: Tuple[WeeklyHourBlock, ...] = ()

    @classmethod
    def failed(cls) -> "ScheduleLookup":
        return cls(ScheduleState.FAILED)

    @classmethod
    def not_configured(cls) -> "ScheduleLookup":
        return cls(ScheduleState.NOT_CONFIGURED)

    @classmethod
    def configured(cls, blocks) -> "ScheduleLookup":
        blocks = tuple(blocks)
        if not blocks:
            return cls.not_configured()
        return cls(ScheduleState.CONFIGURED, blocks)


@dataclass(frozen=True)
class StylistSelector:
    stylist_id: Optional[str] = None

    @classmethod
    def specific(cls, stylist_id: str) -> "StylistSelector":
        if not stylist_id or stylist_id == ANY_STYLIST:
            raise ValueError("A specific stylist selector needs a stylist id")
        return cls(stylist_id)

    @classmethod
    def any_available(cls) -> "StylistSelector":
        return cls(None)

    @classmethod
    def parse(cls, value: Optional[str]) -> "StylistSelector":
        """Map the query-string value ("none" or empty means any stylist)."""
        if not value or value.strip().lower() == ANY_STYLIST:
            return cls.any_available()
        return cls.specific(value.strip())

    @property
    def is_any(self) -> bool:
        return self.stylist_id is None

    def __str__(self) -> str:
        return self.stylist_id or ANY_STYLIST


@dataclass(frozen=True)
class Slot:
    label: str
    start: datetime
    end: datetime


class VerdictReason(str, Enum):
    OK = "ok"
    NO_INTERVALS = "no_intervals"
    CROSSES_MIDNIGHT = "crosses_midnight"
    STARTS_BEFORE_OPEN = "starts_before_open"
    ENDS_AFTER_CLOSE = "ends_after_close"
    OUTSIDE_INTERVALS = "outside_intervals"


@dataclass(frozen=True)
class SlotVerdict:
    valid: bool
    reason: VerdictReason
    start_minutes: int
    end_minutes: int
    intervals: Tuple[TimeInterval, ...] = field(default_factory=tuple)
