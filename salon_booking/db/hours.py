from typing import List, Dict, Any
import logging

from pymongo.errors import PyMongoError
from salon_booking.db.mongodb import db
from salon_booking.scheduling.types import ScheduleLookup, WeeklyHourBlock

logger = logging.getLogger(__name__)

def _salon_block(doc: Dict[str, Any]) -> WeeklyHourBlock:
    return WeeklyHourBlock(
        day_of_week=int(doc["day_of_week"]),
        open_time=doc.get("open_time"),
        close_time=doc.get("close_time"),
        is_closed=bool(doc.get("is_closed", False)),
    )

def _stylist_block(doc: Dict[str, Any]) -> WeeklyHourBlock:
    # Stylist rows use start/end and an availability flag
    return WeeklyHourBlock(
        day_of_week=int(doc["day_of_week"]),
        open_time=doc.get("start_time"),
        close_time=doc.get("end_time"),
        is_closed=doc.get("is_available") is False,
    )

async def get_salon_hour_docs(salon_id: str) -> List[Dict[str, Any]]:
    """Get the raw weekly hours rows of a salon"""
    cursor = db.db.salon_hours.find({"salon_id": salon_id}).sort("day_of_week", 1)
    return await cursor.to_list(length=None)

async def get_salon_hours(salon_id: str) -> List[WeeklyHourBlock]:
    """Get a salon's weekly opening hours"""
    return [_salon_block(doc) for doc in await get_salon_hour_docs(salon_id)]

async def replace_salon_hours(salon_id: str, rows: List[Dict[str, Any]]) -> bool:
    """Replace every weekly hours row of a salon"""
    await db.db.salon_hours.delete_many({"salon_id": salon_id})
    if not rows:
        return True
    result = await db.db.salon_hours.insert_many(
        [{**row, "salon_id": salon_id} for row in rows]
    )
    return len(result.inserted_ids) == len(rows)

async def get_stylist_hour_docs(stylist_id: str) -> List[Dict[str, Any]]:
    """Get the raw weekly hours rows of a stylist"""
    cursor = db.db.stylist_hours.find({"stylist_id": stylist_id}).sort("day_of_week", 1)
    return await cursor.to_list(length=None)

async def get_stylist_schedule(stylist_id: str) -> ScheduleLookup:
    """
    Get a stylist's weekly hours as a ScheduleLookup.

    A database error yields ScheduleLookup.failed() so the stylist is never
    offered on a guess.
    """
    try:
        docs = await get_stylist_hour_docs(stylist_id)
    except PyMongoError as e:
        logger.warning(f"Could not load schedule for stylist {stylist_id}: {e}")
        return ScheduleLookup.failed()

    return ScheduleLookup.configured(_stylist_block(doc) for doc in docs)

async def replace_stylist_hours(stylist_id: str, rows: List[Dict[str, Any]]) -> bool:
    """Replace every weekly hours row of a stylist"""
    await db.db.stylist_hours.delete_many({"stylist_id": stylist_id})
    if not rows:
        return True
    result = await db.db.stylist_hours.insert_many(
        [{**row, "stylist_id": stylist_id} for row in rows]
    )
    return len(result.inserted_ids) == len(rows)
