from typing import Dict, Any, List, Optional
from datetime import datetime
import asyncio
import logging

from salon_booking.core.exceptions import SlotConflictError, SlotUnavailableError
from salon_booking.db.appointments import insert_appointment
from salon_booking.db.closures import get_closures
from salon_booking.db.hours import get_salon_hours
from salon_booking.schemas.appointment import AppointmentCreate, AppointmentStatus
from salon_booking.scheduling.intervals import format_intervals
from salon_booking.scheduling.resolver import resolve_for_date, salon_blocks_for_day
from salon_booking.scheduling.timeutils import add_minutes, day_of_week
from salon_booking.scheduling.types import (
    ClosureException, ScheduleState, StylistSelector, VerdictReason, WeeklyHourBlock
)
from salon_booking.scheduling.validator import check_slot
from salon_booking.services.availability_service import (
    StylistCandidate, ensure_salon, get_service_duration, has_appointment_conflict,
    load_candidates, local_now, pick_stylist_for_slot, to_local
)

logger = logging.getLogger(__name__)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

_booking_locks: Dict[str, asyncio.Lock] = {}

def booking_lock(salon_id: str) -> asyncio.Lock:
    """
    Lock serializing the check-then-insert of bookings for one salon.

    This covers a single worker process only; deployments running several
    workers still need a database-side guard.
    """
    lock = _booking_locks.get(salon_id)
    if lock is None:
        lock = _booking_locks[salon_id] = asyncio.Lock()
    return lock

def _empty_day_reason(
    salon_hours: List[WeeklyHourBlock],
    candidate: StylistCandidate,
    closures: List[ClosureException],
    start: datetime
) -> str:
    weekday = day_of_week(start.date())
    day_name = DAY_NAMES[weekday]

    if not salon_blocks_for_day(salon_hours, weekday):
        return f"Slot unavailable. The salon is closed on {day_name}"

    for closure in closures:
        if closure.is_full_day and closure.applies_to(start.date(), candidate.stylist_id):
            suffix = f" ({closure.label})" if closure.label else ""
            return f"Slot unavailable. Closed on {start.date().isoformat()}{suffix}"

    schedule = candidate.schedule
    if schedule.state == ScheduleState.CONFIGURED:
        day_blocks = [b for b in schedule.blocks if b.day_of_week == weekday]
        if day_blocks and not any(b.is_open for b in day_blocks):
            who = candidate.name or "The stylist"
            return f"Slot unavailable for this stylist. {who} does not work on {day_name}"

    return "No slot available for this stylist on that day"

def validate_appointment(
    start: datetime,
    duration: int,
    salon_hours: List[WeeklyHourBlock],
    candidate: StylistCandidate,
    closures: List[ClosureException]
) -> None:
    """
    Check that an appointment fits the stylist's valid intervals and does not
    overlap an existing appointment.

    Raises SlotUnavailableError or SlotConflictError with a client-facing message.
    """
    intervals = resolve_for_date(
        salon_hours, candidate.schedule, start.date(), closures, candidate.stylist_id
    )
    if not intervals:
        raise SlotUnavailableError(_empty_day_reason(salon_hours, candidate, closures, start))

    verdict = check_slot(start, duration, intervals)
    if not verdict.valid:
        if verdict.reason == VerdictReason.CROSSES_MIDNIGHT:
            raise SlotUnavailableError("Appointments cannot run past midnight")
        raise SlotUnavailableError(
            "This slot does not allow the service to finish before closing. "
            f"Available intervals: {format_intervals(intervals)}"
        )

    end = add_minutes(start, duration)
    if has_appointment_conflict(candidate.appointments, start, end):
        who = candidate.name or "The stylist"
        raise SlotConflictError(
            f"This slot overlaps an existing appointment. {who} is not free at {start.strftime('%H:%M')}"
        )

async def create_appointment(
    appointment_in: AppointmentCreate,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Create a new appointment after checking it against the day's valid intervals

    Requests for any stylist ("none") are assigned to the available stylist
    whose working day starts earliest.
    """
    start = to_local(appointment_in.start).replace(second=0, microsecond=0)
    now = now or local_now()
    if start <= now:
        raise SlotUnavailableError("Cannot book an appointment in the past")

    await ensure_salon(appointment_in.salonId)
    duration = await get_service_duration(appointment_in.serviceId)
    salon_hours = await get_salon_hours(appointment_in.salonId)
    closures = await get_closures(appointment_in.salonId, start.date())

    selector = StylistSelector.parse(appointment_in.stylistId)

    # Loading appointments, the conflict check and the insert share one lock
    async with booking_lock(appointment_in.salonId):
        candidates = await load_candidates(appointment_in.salonId, selector, start.date())

        if selector.is_any:
            chosen = pick_stylist_for_slot(start, duration, salon_hours, candidates, closures)
            if chosen is None:
                raise SlotUnavailableError("No stylist is available for this slot")
        else:
            chosen = candidates[0]
            validate_appointment(start, duration, salon_hours, chosen, closures)

        appointment_data = {
            "salon_id": appointment_in.salonId,
            "service_id": appointment_in.serviceId,
            "stylist_id": chosen.stylist_id,
            "start": start,
            "end": add_minutes(start, duration),
            "duration": duration,
            "status": AppointmentStatus.PENDING.value,
            "client_name": appointment_in.clientName,
            "client_phone": appointment_in.clientPhone,
            "client_email": appointment_in.clientEmail,
            "notes": appointment_in.notes,
            "created_at": datetime.utcnow(),
        }
        created = await insert_appointment(appointment_data)
    logger.info(
        f"Appointment {created['id']} booked with stylist {chosen.stylist_id} "
        f"at {start.isoformat()} ({duration} min)"
    )
    return to_response(created)

def to_response(appointment: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": appointment["id"],
        "salonId": appointment["salon_id"],
        "serviceId": appointment["service_id"],
        "stylistId": appointment["stylist_id"],
        "start": appointment["start"],
        "end": appointment["end"],
        "duration": appointment["duration"],
        "status": appointment["status"],
        "clientName": appointment["client_name"],
        "clientPhone": appointment.get("client_phone"),
        "clientEmail": appointment.get("client_email"),
        "notes": appointment.get("notes"),
        "createdAt": appointment["created_at"],
    }
