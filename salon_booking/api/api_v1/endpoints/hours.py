from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Dict, Any, Optional

from salon_booking.core.auth import get_salon_staff
from salon_booking.db.salon import get_stylist_by_id
from salon_booking.schemas.hours import (
    ClosureCreate, ClosureResponse, SalonHourBlock, SalonHours, StylistHourBlock, StylistHours
)
from salon_booking.services import schedule_service
from salon_booking.services.availability_service import ensure_salon

router = APIRouter()

def _check_salon_access(current_user: Dict[str, Any], salon_id: str):
    user_salon = current_user.get("salonId")
    if user_salon and user_salon != salon_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this salon"
        )

async def _get_stylist_or_404(stylist_id: str) -> Dict[str, Any]:
    stylist = await get_stylist_by_id(stylist_id)
    if not stylist:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Stylist not found"
        )
    return stylist

@router.get("/salons/{salon_id}/hours", response_model=List[SalonHourBlock])
async def get_salon_hours(salon_id: str):
    """
    Get a salon's weekly opening hours
    """
    await ensure_salon(salon_id)
    return await schedule_service.get_salon_hours(salon_id)

@router.put("/salons/{salon_id}/hours", response_model=List[SalonHourBlock])
async def update_salon_hours(
    salon_id: str,
    hours_in: SalonHours,
    current_user: dict = Depends(get_salon_staff)
):
    """
    Replace a salon's weekly opening hours
    """
    _check_salon_access(current_user, salon_id)
    await ensure_salon(salon_id)

    success = await schedule_service.update_salon_hours(salon_id, hours_in.hours)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update salon hours"
        )
    return await schedule_service.get_salon_hours(salon_id)

@router.get("/stylists/{stylist_id}/hours", response_model=List[StylistHourBlock])
async def get_stylist_hours(stylist_id: str):
    """
    Get a stylist's weekly working hours (empty means salon hours apply)
    """
    await _get_stylist_or_404(stylist_id)
    return await schedule_service.get_stylist_hours(stylist_id)

@router.put("/stylists/{stylist_id}/hours", response_model=List[StylistHourBlock])
async def update_stylist_hours(
    stylist_id: str,
    hours_in: StylistHours,
    current_user: dict = Depends(get_salon_staff)
):
    """
    Replace a stylist's weekly working hours
    """
    stylist = await _get_stylist_or_404(stylist_id)
    _check_salon_access(current_user, stylist.get("salon_id"))

    success = await schedule_service.update_stylist_hours(stylist_id, hours_in.hours)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update stylist hours"
        )
    return await schedule_service.get_stylist_hours(stylist_id)

@router.get("/salons/{salon_id}/closures", response_model=List[ClosureResponse])
async def get_salon_closures(
    salon_id: str,
    year: Optional[int] = Query(None, description="Year (e.g., 2025)"),
    month: Optional[int] = Query(None, description="Month (1-12)")
):
    """
    List a salon's closures (holidays, time off)
    """
    if month is not None and (month < 1 or month > 12):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Month must be between 1 and 12"
        )
    await ensure_salon(salon_id)
    return await schedule_service.list_closures(salon_id, year, month)

@router.post("/salons/{salon_id}/closures", response_model=ClosureResponse, status_code=status.HTTP_201_CREATED)
async def create_salon_closure(
    salon_id: str,
    closure_in: ClosureCreate,
    current_user: dict = Depends(get_salon_staff)
):
    """
    Close the salon, or one stylist, for a full day or a time range
    """
    _check_salon_access(current_user, salon_id)
    await ensure_salon(salon_id)
    if closure_in.stylistId:
        stylist = await _get_stylist_or_404(closure_in.stylistId)
        if stylist.get("salon_id", salon_id) != salon_id:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Stylist not found"
            )
    return await schedule_service.add_closure(salon_id, closure_in)

@router.delete("/salons/{salon_id}/closures/{closure_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_salon_closure(
    salon_id: str,
    closure_id: str,
    current_user: dict = Depends(get_salon_staff)
):
    """
    Remove a closure
    """
    _check_salon_access(current_user, salon_id)
    removed = await schedule_service.remove_closure(salon_id, closure_id)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Closure not found"
        )
