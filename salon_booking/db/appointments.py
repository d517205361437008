from typing import List, Dict, Any, Optional
from datetime import date, datetime, time, timedelta

from bson import ObjectId
from salon_booking.db.mongodb import db
from salon_booking.schemas.appointment import AppointmentStatus

async def get_appointments_for_day(stylist_ids: List[str], on_date: date) -> List[Dict[str, Any]]:
    """Get the non-cancelled appointments of the given stylists on one day"""
    day_start = datetime.combine(on_date, time.min)
    day_end = day_start + timedelta(days=1)
    cursor = db.db.appointments.find({
        "stylist_id": {"$in": stylist_ids},
        "status": {"$ne": AppointmentStatus.CANCELLED.value},
        "start": {"$gte": day_start, "$lt": day_end},
    })
    return await cursor.to_list(length=None)

async def insert_appointment(appointment_data: Dict[str, Any]) -> Dict[str, Any]:
    """Insert an appointment and return the stored document"""
    result = await db.db.appointments.insert_one(appointment_data)
    created = await db.db.appointments.find_one({"_id": result.inserted_id})
    created["id"] = str(created["_id"])
    return created

async def get_appointment_by_id(appointment_id: str) -> Optional[Dict[str, Any]]:
    """Get an appointment by ID"""
    if not ObjectId.is_valid(appointment_id):
        return None
    appointment = await db.db.appointments.find_one({"_id": ObjectId(appointment_id)})
    if appointment:
        appointment["id"] = str(appointment["_id"])
    return appointment
