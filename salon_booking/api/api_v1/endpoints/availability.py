from fastapi import APIRouter, HTTPException, Query, status
from typing import Optional
from datetime import datetime

from salon_booking.schemas.availability import AvailabilityResponse, IntervalsResponse
from salon_booking.scheduling.timeutils import day_of_week
from salon_booking.scheduling.types import StylistSelector
from salon_booking.services.availability_service import get_availability, get_valid_intervals

router = APIRouter()

def _parse_date(value: str):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Use YYYY-MM-DD"
        )

@router.get("", response_model=AvailabilityResponse)
async def get_available_slots(
    salonId: str = Query(..., description="Salon to book in"),
    date: str = Query(..., description="Day to check, YYYY-MM-DD"),
    serviceId: str = Query(..., description="Service whose duration is booked"),
    stylistId: str = Query("none", description="Stylist ID, or 'none' for any available stylist"),
    slotStep: Optional[int] = Query(None, gt=0, le=240, description="Minutes between offered start times")
):
    """
    Get the bookable start times of a day.

    With stylistId=none every active stylist is considered and each slot
    lists the stylists who can take it.
    """
    on_date = _parse_date(date)
    return await get_availability(
        salonId, on_date, serviceId, StylistSelector.parse(stylistId), slotStep
    )

@router.get("/intervals", response_model=IntervalsResponse)
async def get_day_intervals(
    salonId: str = Query(..., description="Salon to check"),
    date: str = Query(..., description="Day to check, YYYY-MM-DD"),
    stylistId: str = Query("none", description="Stylist ID, or 'none' for salon hours only")
):
    """
    Get the valid (open and staffed) intervals of a day
    """
    on_date = _parse_date(date)
    selector = StylistSelector.parse(stylistId)
    intervals = await get_valid_intervals(salonId, on_date, selector)
    return {
        "date": on_date,
        "dayOfWeek": day_of_week(on_date),
        "stylistId": str(selector),
        "intervals": [{"start": i.start, "end": i.end} for i in intervals],
    }
