from typing import Dict, Any, List, Optional
import logging

from salon_booking.db import closures as closures_db
from salon_booking.db import hours as hours_db
from salon_booking.schemas.hours import ClosureCreate, SalonHourBlock, StylistHourBlock

logger = logging.getLogger(__name__)

def _salon_row(block: SalonHourBlock) -> Dict[str, Any]:
    return {
        "day_of_week": block.dayOfWeek,
        "open_time": None if block.isClosed else block.openTime,
        "close_time": None if block.isClosed else block.closeTime,
        "is_closed": block.isClosed,
    }

def _stylist_row(block: StylistHourBlock) -> Dict[str, Any]:
    return {
        "day_of_week": block.dayOfWeek,
        "start_time": block.startTime if block.isAvailable else None,
        "end_time": block.endTime if block.isAvailable else None,
        "is_available": block.isAvailable,
    }

async def get_salon_hours(salon_id: str) -> List[Dict[str, Any]]:
    """
    Get a salon's weekly hours in API shape
    """
    return [
        {
            "dayOfWeek": doc["day_of_week"],
            "openTime": doc.get("open_time"),
            "closeTime": doc.get("close_time"),
            "isClosed": bool(doc.get("is_closed", False)),
        }
        for doc in await hours_db.get_salon_hour_docs(salon_id)
    ]

async def update_salon_hours(salon_id: str, blocks: List[SalonHourBlock]) -> bool:
    """
    Replace a salon's weekly hours; several blocks per weekday are split shifts
    """
    success = await hours_db.replace_salon_hours(salon_id, [_salon_row(b) for b in blocks])
    logger.info(f"Salon {salon_id} hours replaced with {len(blocks)} blocks")
    return success

async def get_stylist_hours(stylist_id: str) -> List[Dict[str, Any]]:
    """
    Get a stylist's weekly hours in API shape
    """
    return [
        {
            "dayOfWeek": doc["day_of_week"],
            "startTime": doc.get("start_time"),
            "endTime": doc.get("end_time"),
            "isAvailable": doc.get("is_available") is not False,
        }
        for doc in await hours_db.get_stylist_hour_docs(stylist_id)
    ]

async def update_stylist_hours(stylist_id: str, blocks: List[StylistHourBlock]) -> bool:
    """
    Replace a stylist's weekly hours. An empty list means the stylist follows
    salon hours.
    """
    success = await hours_db.replace_stylist_hours(stylist_id, [_stylist_row(b) for b in blocks])
    logger.info(f"Stylist {stylist_id} hours replaced with {len(blocks)} blocks")
    return success

def _closure_response(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": doc["id"],
        "salonId": doc["salon_id"],
        "date": doc["date"],
        "stylistId": doc.get("stylist_id"),
        "startTime": doc.get("start_time"),
        "endTime": doc.get("end_time"),
        "label": doc.get("label", ""),
    }

async def list_closures(salon_id: str, year: Optional[int] = None, month: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    List a salon's closures, optionally filtered by year and month
    """
    return [_closure_response(doc) for doc in await closures_db.list_closures(salon_id, year, month)]

async def add_closure(salon_id: str, closure_in: ClosureCreate) -> Dict[str, Any]:
    """
    Add a full-day or partial closure, salon-wide or for one stylist
    """
    closure = await closures_db.add_closure(salon_id, {
        "date": closure_in.date.isoformat(),
        "stylist_id": closure_in.stylistId,
        "start_time": closure_in.startTime,
        "end_time": closure_in.endTime,
        "label": closure_in.label,
    })
    logger.info(f"Closure {closure['id']} added for salon {salon_id} on {closure['date']}")
    return _closure_response(closure)

async def remove_closure(salon_id: str, closure_id: str) -> bool:
    """
    Remove a closure
    """
    return await closures_db.remove_closure(salon_id, closure_id)
