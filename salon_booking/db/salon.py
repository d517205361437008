from typing import List, Dict, Any, Optional

from bson import ObjectId
from salon_booking.db.mongodb import db

# Salon, stylist and service documents are owned by the profile services;
# this module only reads them.

def _by_id(value: str) -> Dict[str, Any]:
    if ObjectId.is_valid(value):
        return {"_id": ObjectId(value)}
    return {"_id": value}

def _with_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc:
        doc["id"] = str(doc["_id"])
    return doc

async def get_salon_by_id(salon_id: str) -> Optional[Dict[str, Any]]:
    """Get a salon document by ID"""
    return _with_id(await db.db.salons.find_one(_by_id(salon_id)))

async def get_stylist_by_id(stylist_id: str) -> Optional[Dict[str, Any]]:
    """Get a stylist document by ID"""
    return _with_id(await db.db.stylists.find_one(_by_id(stylist_id)))

async def list_active_stylists(salon_id: str) -> List[Dict[str, Any]]:
    """Get the active stylists of a salon"""
    cursor = db.db.stylists.find({"salon_id": salon_id, "is_active": {"$ne": False}})
    stylists = await cursor.to_list(length=None)
    return [_with_id(s) for s in stylists]

async def get_service_by_id(service_id: str) -> Optional[Dict[str, Any]]:
    """Get a service document by ID"""
    return _with_id(await db.db.services.find_one(_by_id(service_id)))
