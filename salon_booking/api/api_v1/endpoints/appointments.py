from fastapi import APIRouter, HTTPException, status

from salon_booking.db.appointments import get_appointment_by_id
from salon_booking.schemas.appointment import AppointmentCreate, AppointmentResponse
from salon_booking.services.appointment_service import create_appointment, to_response

router = APIRouter()

@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_new_appointment(appointment_in: AppointmentCreate):
    """
    Book an appointment.

    The slot must fit entirely inside one of the stylist's valid intervals
    for that day and must not overlap another appointment.
    """
    return await create_appointment(appointment_in)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: str):
    """
    Get appointment details
    """
    appointment = await get_appointment_by_id(appointment_id)
    if not appointment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Appointment not found"
        )
    return to_response(appointment)
