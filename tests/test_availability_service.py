import asyncio
import pytest
from datetime import date, datetime

from salon_booking.core.exceptions import NotFoundError, SlotConflictError, SlotUnavailableError
from salon_booking.schemas.appointment import AppointmentCreate
from salon_booking.services import appointment_service
from salon_booking.scheduling.types import (
    ClosureException, ScheduleLookup, StylistSelector, WeeklyHourBlock as Block
)
from salon_booking.services.appointment_service import create_appointment, validate_appointment
from salon_booking.services.availability_service import (
    StylistCandidate, collect_slots, get_valid_intervals, has_appointment_conflict,
    pick_stylist_for_slot
)

MONDAY = date(2025, 3, 3)
SALON = [Block(1, "09:00", "12:00")]


def at(hour, minute=0):
    return datetime(2025, 3, 3, hour, minute)


def appointment(hour, minute=0, duration=30, status="confirmed"):
    return {"start": at(hour, minute), "duration": duration, "status": status}


def times(slots):
    return [s["time"] for s in slots]


def test_conflict_detection_uses_half_open_ranges():
    existing = [appointment(10, 0, 60)]
    assert has_appointment_conflict(existing, at(10, 30), at(11, 0))
    assert has_appointment_conflict(existing, at(9, 45), at(10, 15))
    assert not has_appointment_conflict(existing, at(11, 0), at(11, 30))
    assert not has_appointment_conflict(existing, at(9, 30), at(10, 0))


def test_conflict_defaults_and_cancelled():
    no_duration = [{"start": at(10, 0), "duration": None}]
    assert has_appointment_conflict(no_duration, at(10, 15), at(10, 45), default_duration=30)
    assert not has_appointment_conflict(no_duration, at(10, 30), at(11, 0), default_duration=30)

    cancelled = [appointment(10, 0, 60, status="cancelled")]
    assert not has_appointment_conflict(cancelled, at(10, 0), at(10, 30))


def test_collect_slots_unions_stylists_per_time():
    candidates = [
        StylistCandidate("alice", ScheduleLookup.not_configured()),
        StylistCandidate("bob", ScheduleLookup.configured([Block(1, "10:00", "11:00")])),
    ]
    slots = collect_slots(MONDAY, SALON, candidates, [], 30, 30)

    assert times(slots) == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
    by_time = {s["time"]: s["stylistIds"] for s in slots}
    assert by_time["09:00"] == ["alice"]
    assert by_time["10:00"] == ["alice", "bob"]
    assert by_time["10:30"] == ["alice", "bob"]


def test_collect_slots_hides_booked_times():
    candidates = [
        StylistCandidate("alice", ScheduleLookup.not_configured(), (appointment(9, 30),)),
    ]
    slots = collect_slots(MONDAY, SALON, candidates, [], 30, 30)
    assert times(slots) == ["09:00", "10:00", "10:30", "11:00", "11:30"]


def test_collect_slots_hides_past_slots_today():
    candidates = [StylistCandidate("alice", ScheduleLookup.not_configured())]
    slots = collect_slots(MONDAY, SALON, candidates, [], 30, 30, now=at(10, 10))
    assert times(slots) == ["10:30", "11:00", "11:30"]


def test_collect_slots_for_past_day_is_empty():
    candidates = [StylistCandidate("alice", ScheduleLookup.not_configured())]
    assert collect_slots(MONDAY, SALON, candidates, [], 30, 30, now=datetime(2025, 3, 4, 8, 0)) == []


def test_collect_slots_skips_unknown_schedules_and_closed_stylists():
    candidates = [
        StylistCandidate("alice", ScheduleLookup.failed()),
        StylistCandidate("bob", ScheduleLookup.not_configured()),
    ]
    closures = [ClosureException(date=MONDAY, stylist_id="bob", start_time="09:00", end_time="11:00")]
    slots = collect_slots(MONDAY, SALON, candidates, closures, 30, 30)

    assert times(slots) == ["11:00", "11:30"]
    assert all(s["stylistIds"] == ["bob"] for s in slots)


def test_pick_stylist_prefers_earliest_working_day():
    candidates = [
        StylistCandidate("alice", ScheduleLookup.configured([Block(1, "10:00", "12:00")])),
        StylistCandidate("bob", ScheduleLookup.configured([Block(1, "09:00", "12:00")])),
    ]
    assert pick_stylist_for_slot(at(10), 30, SALON, candidates, []).stylist_id == "bob"
    assert pick_stylist_for_slot(at(9), 30, SALON, candidates, []).stylist_id == "bob"


def test_pick_stylist_skips_booked_stylists():
    candidates = [
        StylistCandidate("alice", ScheduleLookup.configured([Block(1, "10:00", "12:00")])),
        StylistCandidate("bob", ScheduleLookup.configured([Block(1, "09:00", "12:00")]), (appointment(10),)),
    ]
    assert pick_stylist_for_slot(at(10), 30, SALON, candidates, []).stylist_id == "alice"
    assert pick_stylist_for_slot(at(11, 45), 30, SALON, candidates, []) is None


def test_validate_appointment_explains_rejection():
    candidate = StylistCandidate("alice", ScheduleLookup.not_configured())

    with pytest.raises(SlotUnavailableError) as excinfo:
        validate_appointment(at(11, 45), 30, SALON, candidate, [])
    assert "Available intervals: 09:00-12:00" in excinfo.value.detail

    with pytest.raises(SlotUnavailableError) as excinfo:
        validate_appointment(datetime(2025, 3, 4, 10, 0), 30, SALON, candidate, [])
    assert "salon is closed on Tuesday" in excinfo.value.detail

    off = StylistCandidate("bob", ScheduleLookup.configured([Block(1, is_closed=True)]))
    with pytest.raises(SlotUnavailableError) as excinfo:
        validate_appointment(at(10), 30, SALON, off, [])
    assert "does not work on Monday" in excinfo.value.detail


def test_validate_appointment_conflict():
    candidate = StylistCandidate("alice", ScheduleLookup.not_configured(), (appointment(10),))
    with pytest.raises(SlotConflictError):
        validate_appointment(at(10, 15), 30, SALON, candidate, [])
    validate_appointment(at(10, 30), 30, SALON, candidate, [])


def test_rejection_messages_name_the_stylist():
    off = StylistCandidate("bob", ScheduleLookup.configured([Block(1, is_closed=True)]), name="Bob")
    with pytest.raises(SlotUnavailableError) as excinfo:
        validate_appointment(at(10), 30, SALON, off, [])
    assert "Bob does not work on Monday" in excinfo.value.detail

    booked = StylistCandidate("alice", ScheduleLookup.not_configured(), (appointment(10),), name="Alice")
    with pytest.raises(SlotConflictError) as excinfo:
        validate_appointment(at(10, 15), 30, SALON, booked, [])
    assert "Alice is not free at 10:15" in excinfo.value.detail


@pytest.mark.asyncio
async def test_valid_intervals_reject_stylist_of_another_salon(store):
    store.stylists["st-9"] = {"_id": "st-9", "id": "st-9", "salon_id": "salon-2", "name": "Eve", "is_active": True}

    with pytest.raises(NotFoundError):
        await get_valid_intervals("salon-1", MONDAY, StylistSelector.parse("st-9"))

    intervals = await get_valid_intervals("salon-1", MONDAY, StylistSelector.parse("st-2"))
    assert [str(i) for i in intervals] == ["09:00-13:00"]


@pytest.mark.asyncio
async def test_concurrent_bookings_for_one_slot_do_not_both_succeed(store, monkeypatch):
    async def slow_insert(appointment_data):
        # Yield to the event loop between the conflict check and the write
        await asyncio.sleep(0)
        return await store.insert_appointment(appointment_data)

    monkeypatch.setattr(appointment_service, "insert_appointment", slow_insert)

    def request(client_name):
        return AppointmentCreate(
            salonId="salon-1", serviceId="svc-1", stylistId="st-2",
            start=at(10), clientName=client_name
        )

    results = await asyncio.gather(
        create_appointment(request("Claire")),
        create_appointment(request("Dana")),
        return_exceptions=True,
    )

    assert len(store.appointments) == 1
    assert sum(isinstance(r, SlotConflictError) for r in results) == 1
    assert sum(isinstance(r, dict) for r in results) == 1
