from typing import List, Dict, Any, Optional
from datetime import date

from bson import ObjectId
from salon_booking.db.mongodb import db
from salon_booking.scheduling.types import ClosureException

def to_closure(doc: Dict[str, Any]) -> ClosureException:
    return ClosureException(
        date=date.fromisoformat(doc["date"]),
        stylist_id=doc.get("stylist_id") or None,
        start_time=doc.get("start_time") or None,
        end_time=doc.get("end_time") or None,
        label=doc.get("label", ""),
    )

async def get_closures(salon_id: str, on_date: date) -> List[ClosureException]:
    """Get every closure (salon-wide and per stylist) of a salon for one date"""
    cursor = db.db.closures.find({"salon_id": salon_id, "date": on_date.isoformat()})
    return [to_closure(doc) for doc in await cursor.to_list(length=None)]

async def list_closures(salon_id: str, year: Optional[int] = None, month: Optional[int] = None) -> List[Dict[str, Any]]:
    """List a salon's closures, optionally for one month"""
    query: Dict[str, Any] = {"salon_id": salon_id}
    if year is not None and month is not None:
        # Dates are stored as YYYY-MM-DD strings
        query["date"] = {"$regex": f"^{year:04d}-{month:02d}-"}
    elif year is not None:
        query["date"] = {"$regex": f"^{year:04d}-"}

    cursor = db.db.closures.find(query).sort("date", 1)
    closures = await cursor.to_list(length=None)
    for closure in closures:
        closure["id"] = str(closure["_id"])
    return closures

async def add_closure(salon_id: str, closure_data: Dict[str, Any]) -> Dict[str, Any]:
    """Insert a closure and return the stored document"""
    closure = dict(closure_data)
    closure["salon_id"] = salon_id
    result = await db.db.closures.insert_one(closure)
    closure["_id"] = result.inserted_id
    closure["id"] = str(result.inserted_id)
    return closure

async def remove_closure(salon_id: str, closure_id: str) -> bool:
    """Delete a closure of the salon"""
    if not ObjectId.is_valid(closure_id):
        return False
    result = await db.db.closures.delete_one({"_id": ObjectId(closure_id), "salon_id": salon_id})
    return result.deleted_count > 0
