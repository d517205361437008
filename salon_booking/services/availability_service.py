from typing import Dict, Any, List, Optional, Iterable, Tuple
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo
import logging

from salon_booking.core.config import settings
from salon_booking.core.exceptions import InvalidRequestError, NotFoundError
from salon_booking.db.appointments import get_appointments_for_day
from salon_booking.db.closures import get_closures
from salon_booking.db.hours import get_salon_hours, get_stylist_schedule
from salon_booking.db.salon import (
    get_salon_by_id, get_service_by_id, get_stylist_by_id, list_active_stylists
)
from salon_booking.scheduling.intervals import TimeInterval
from salon_booking.scheduling.resolver import resolve_for_date
from salon_booking.scheduling.slots import generate_slots
from salon_booking.scheduling.timeutils import add_minutes, time_to_minutes
from salon_booking.scheduling.types import (
    ClosureException, ScheduleLookup, StylistSelector, WeeklyHourBlock
)
from salon_booking.scheduling.validator import is_slot_valid

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class StylistCandidate:
    """A stylist considered for a day, with the data needed to place slots."""
    stylist_id: str
    schedule: ScheduleLookup
    appointments: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)
    name: str = ""

def local_now() -> datetime:
    """Current salon wall-clock time as a naive datetime."""
    return datetime.now(ZoneInfo(settings.SALON_TIMEZONE)).replace(tzinfo=None)

def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive salon wall-clock time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.SALON_TIMEZONE)).replace(tzinfo=None)

def has_appointment_conflict(
    appointments: Iterable[Dict[str, Any]],
    start: datetime,
    end: datetime,
    default_duration: Optional[int] = None
) -> bool:
    """
    Check whether [start, end) overlaps any existing appointment.

    Appointments without a duration are assumed to last the default
    appointment duration. Cancelled appointments never conflict.
    """
    if default_duration is None:
        default_duration = settings.DEFAULT_APPOINTMENT_DURATION

    for appointment in appointments:
        if not appointment or appointment.get("status") == "cancelled":
            continue
        appointment_start = appointment.get("start")
        if not isinstance(appointment_start, datetime):
            continue
        appointment_start = to_local(appointment_start)
        duration = int(appointment.get("duration") or default_duration)
        appointment_end = add_minutes(appointment_start, duration)
        if start < appointment_end and end > appointment_start:
            return True
    return False

def collect_slots(
    base_date: date,
    salon_hours: List[WeeklyHourBlock],
    candidates: Iterable[StylistCandidate],
    closures: List[ClosureException],
    duration_minutes: int,
    step_minutes: int,
    now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """
    Aggregate the bookable start times of every candidate stylist.

    Returns [{"time": "HH:mm", "stylistIds": [...]}] sorted by time. When
    `now` is given, past days return nothing and today's slots starting at
    or before `now` are hidden.
    """
    if now is not None and base_date < now.date():
        return []

    aggregated: Dict[str, List[str]] = {}

    for candidate in candidates:
        intervals = resolve_for_date(
            salon_hours, candidate.schedule, base_date, closures, candidate.stylist_id
        )
        if not intervals:
            continue

        for slot in generate_slots(base_date, intervals, duration_minutes, step_minutes):
            if now is not None and slot.start <= now:
                continue
            if not is_slot_valid(slot.start, duration_minutes, intervals):
                continue
            if has_appointment_conflict(candidate.appointments, slot.start, slot.end):
                continue
            stylist_ids = aggregated.setdefault(slot.label, [])
            if candidate.stylist_id not in stylist_ids:
                stylist_ids.append(candidate.stylist_id)

    return [
        {"time": label, "stylistIds": stylist_ids}
        for label, stylist_ids in sorted(aggregated.items(), key=lambda item: time_to_minutes(item[0]))
    ]

def pick_stylist_for_slot(
    start: datetime,
    duration_minutes: int,
    salon_hours: List[WeeklyHourBlock],
    candidates: Iterable[StylistCandidate],
    closures: List[ClosureException]
) -> Optional[StylistCandidate]:
    """
    Choose a stylist for an "any stylist" booking.

    Among the stylists whose intervals contain the slot and who have no
    overlapping appointment, the one whose working day starts earliest wins;
    ties keep the candidate order.
    """
    end = add_minutes(start, duration_minutes)
    available = []

    for candidate in candidates:
        intervals = resolve_for_date(
            salon_hours, candidate.schedule, start.date(), closures, candidate.stylist_id
        )
        if not is_slot_valid(start, duration_minutes, intervals):
            continue
        if has_appointment_conflict(candidate.appointments, start, end):
            logger.debug(f"Stylist {candidate.stylist_id} already booked at {start}")
            continue
        earliest = min(i.start_minutes for i in intervals)
        available.append((earliest, candidate))

    if not available:
        return None

    available.sort(key=lambda item: item[0])
    return available[0][1]

async def get_service_duration(service_id: str) -> int:
    """
    Get the duration in minutes of a bookable service
    """
    service = await get_service_by_id(service_id)
    if not service:
        raise NotFoundError("Service not found")

    try:
        duration = int(service.get("duration") or 0)
    except (TypeError, ValueError):
        duration = 0
    if duration <= 0:
        raise InvalidRequestError("The service has no valid duration")
    return duration

async def ensure_salon(salon_id: str) -> Dict[str, Any]:
    salon = await get_salon_by_id(salon_id)
    if not salon:
        raise NotFoundError("Salon not found")
    return salon

async def load_candidates(salon_id: str, selector: StylistSelector, on_date: date) -> List[StylistCandidate]:
    """
    Load the stylists a request targets, with their schedule and the day's appointments
    """
    if selector.is_any:
        stylists = await list_active_stylists(salon_id)
    else:
        stylist = await get_stylist_by_id(selector.stylist_id)
        if not stylist or stylist.get("salon_id", salon_id) != salon_id:
            raise NotFoundError("Stylist not found")
        if stylist.get("is_active") is False:
            raise InvalidRequestError("This stylist is not available")
        stylists = [stylist]

    if not stylists:
        return []

    stylist_ids = [s["id"] for s in stylists]
    appointments_by_stylist: Dict[str, List[Dict[str, Any]]] = {}
    for appointment in await get_appointments_for_day(stylist_ids, on_date):
        appointments_by_stylist.setdefault(str(appointment.get("stylist_id")), []).append(appointment)

    candidates = []
    for stylist in stylists:
        schedule = await get_stylist_schedule(stylist["id"])
        candidates.append(StylistCandidate(
            stylist_id=stylist["id"],
            schedule=schedule,
            appointments=tuple(appointments_by_stylist.get(stylist["id"], [])),
            name=stylist.get("name", ""),
        ))
    return candidates

async def get_availability(
    salon_id: str,
    on_date: date,
    service_id: str,
    selector: StylistSelector,
    step_minutes: Optional[int] = None,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Compute the offerable slots of a day for one stylist or any stylist
    """
    step_minutes = step_minutes or settings.DEFAULT_SLOT_STEP_MINUTES
    now = now or local_now()

    await ensure_salon(salon_id)
    duration = await get_service_duration(service_id)
    salon_hours = await get_salon_hours(salon_id)
    candidates = await load_candidates(salon_id, selector, on_date)
    closures = await get_closures(salon_id, on_date)

    slots = collect_slots(on_date, salon_hours, candidates, closures, duration, step_minutes, now)
    logger.info(
        f"Availability for salon {salon_id} on {on_date} (service {service_id}, "
        f"stylist {selector}): {len(slots)} slots"
    )

    return {
        "date": on_date,
        "serviceId": service_id,
        "stylistId": str(selector),
        "slotIntervalMinutes": step_minutes,
        "slots": slots,
    }

async def get_valid_intervals(salon_id: str, on_date: date, selector: StylistSelector) -> List[TimeInterval]:
    """
    Get the valid intervals of a day; without a stylist only salon hours and
    salon-wide closures apply
    """
    await ensure_salon(salon_id)
    salon_hours = await get_salon_hours(salon_id)
    closures = await get_closures(salon_id, on_date)

    if selector.is_any:
        return resolve_for_date(salon_hours, ScheduleLookup.not_configured(), on_date, closures)

    stylist = await get_stylist_by_id(selector.stylist_id)
    if not stylist or stylist.get("salon_id", salon_id) != salon_id:
        raise NotFoundError("Stylist not found")
    schedule = await get_stylist_schedule(stylist["id"])
    return resolve_for_date(salon_hours, schedule, on_date, closures, stylist["id"])
