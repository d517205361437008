import pytest
from datetime import datetime

from salon_booking.scheduling.types import ClosureException, ScheduleLookup, WeeklyHourBlock
from salon_booking.services import appointment_service, availability_service

# Monday 2025-03-03 is the booking day used throughout; "now" is the Saturday before.
NOW = datetime(2025, 3, 1, 8, 0)


class FakeStore:
    """In-memory stand-in for the MongoDB data-access functions."""

    def __init__(self):
        self.salons = {"salon-1": {"_id": "salon-1", "id": "salon-1", "name": "Studio"}}
        self.stylists = {
            "st-1": {"_id": "st-1", "id": "st-1", "salon_id": "salon-1", "name": "Alice", "is_active": True},
            "st-2": {"_id": "st-2", "id": "st-2", "salon_id": "salon-1", "name": "Bob", "is_active": True},
        }
        self.services = {"svc-1": {"_id": "svc-1", "id": "svc-1", "name": "Cut", "duration": 30}}
        self.salon_hours = [WeeklyHourBlock(day, "09:00", "18:00") for day in range(1, 7)]
        self.schedules = {
            "st-1": ScheduleLookup.not_configured(),
            "st-2": ScheduleLookup.configured([WeeklyHourBlock(1, "09:00", "13:00")]),
        }
        self.closures = []
        self.appointments = []

    async def get_salon_by_id(self, salon_id):
        return self.salons.get(salon_id)

    async def get_stylist_by_id(self, stylist_id):
        return self.stylists.get(stylist_id)

    async def list_active_stylists(self, salon_id):
        return [s for s in self.stylists.values() if s["salon_id"] == salon_id and s["is_active"]]

    async def get_service_by_id(self, service_id):
        return self.services.get(service_id)

    async def get_salon_hours(self, salon_id):
        return list(self.salon_hours)

    async def get_stylist_schedule(self, stylist_id):
        return self.schedules.get(stylist_id, ScheduleLookup.not_configured())

    async def get_closures(self, salon_id, on_date):
        return [c for c in self.closures if c.date == on_date]

    async def get_appointments_for_day(self, stylist_ids, on_date):
        return [
            a for a in self.appointments
            if a["stylist_id"] in stylist_ids and a["start"].date() == on_date
        ]

    async def insert_appointment(self, appointment_data):
        created = dict(appointment_data)
        created["_id"] = created["id"] = f"apt-{len(self.appointments) + 1}"
        self.appointments.append(created)
        return created

    def add_closure(self, **kwargs):
        self.closures.append(ClosureException(**kwargs))


@pytest.fixture
def store(monkeypatch):
    fake = FakeStore()
    for name in (
        "get_salon_by_id", "get_stylist_by_id", "list_active_stylists", "get_service_by_id",
        "get_salon_hours", "get_stylist_schedule", "get_closures", "get_appointments_for_day",
    ):
        monkeypatch.setattr(availability_service, name, getattr(fake, name))
    for name in ("get_salon_hours", "get_closures", "insert_appointment"):
        monkeypatch.setattr(appointment_service, name, getattr(fake, name))

    monkeypatch.setattr(availability_service, "local_now", lambda: NOW)
    monkeypatch.setattr(appointment_service, "local_now", lambda: NOW)
    monkeypatch.setattr(appointment_service, "_booking_locks", {})
    return fake
